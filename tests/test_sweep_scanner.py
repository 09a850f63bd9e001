"""
Unit tests for the subnet sweep and the reachability probe.

Probes are replaced by a fake that answers from a fixed set of reachable
addresses, so no packet ever leaves the test host.
"""

import socket
import sys
import subprocess
import threading
import time
from unittest.mock import MagicMock, Mock, patch

import pytest

from hotspot_discovery.config.config_loader import SweepConfig
from hotspot_discovery.core.data_models import DeviceType, DiscoveredDevice, NOT_AVAILABLE
from hotspot_discovery.scanners.reachability import PING_SPAWN_ALLOWANCE, ReachabilityProbe
from hotspot_discovery.scanners.sweep_scanner import SubnetSweepScanner, _SweepResults


class FakeProbe:
    """Answers True for a fixed set of addresses and records every call."""

    def __init__(self, reachable=(), delays=None, failing=()):
        self.reachable = set(reachable)
        self.delays = delays or {}
        self.failing = set(failing)
        self.calls = []
        self._lock = threading.Lock()

    def is_reachable(self, address):
        with self._lock:
            self.calls.append(address)
        if address in self.delays:
            time.sleep(self.delays[address])
        if address in self.failing:
            raise RuntimeError(f"probe exploded on {address}")
        return address in self.reachable

    def probed_prefixes(self):
        return {address.rsplit(".", 1)[0] + "." for address in self.calls}


def make_scanner(logger, probe, resolver=None, **config):
    return SubnetSweepScanner(
        config=SweepConfig(**config),
        logger=logger,
        resolver=resolver or (lambda ip: ip),
        probe=probe,
    )


class TestSweep:
    """Tests for SubnetSweepScanner.sweep()."""

    def test_first_productive_prefix_stops_the_sweep(self, quiet_logger):
        probe = FakeProbe(reachable={"192.168.43.100", "192.168.43.5"})
        scanner = make_scanner(quiet_logger, probe)

        devices = scanner.sweep(["192.168.43.", "192.168.49."])

        assert [d.address for d in devices] == ["192.168.43.5", "192.168.43.100"]
        assert probe.probed_prefixes() == {"192.168.43."}

    def test_falls_through_to_next_prefix(self, quiet_logger):
        probe = FakeProbe(reachable={"192.168.49.7"})
        scanner = make_scanner(quiet_logger, probe)

        devices = scanner.sweep(["192.168.43.", "192.168.49.", "192.168.14."])

        assert [d.address for d in devices] == ["192.168.49.7"]
        assert probe.probed_prefixes() == {"192.168.43.", "192.168.49."}

    def test_nothing_reachable(self, quiet_logger):
        probe = FakeProbe()
        scanner = make_scanner(quiet_logger, probe, last_host=10)

        assert scanner.sweep(["192.168.43.", "192.168.49."]) == []
        assert len(probe.calls) == 22

    def test_host_range_is_inclusive(self, quiet_logger):
        probe = FakeProbe(reachable={"192.168.43.0", "192.168.43.220", "192.168.43.221"})
        scanner = make_scanner(quiet_logger, probe)

        devices = scanner.sweep(["192.168.43."])

        assert [d.address for d in devices] == ["192.168.43.0", "192.168.43.220"]
        assert len(probe.calls) == 221

    def test_devices_have_no_hardware_address(self, quiet_logger):
        probe = FakeProbe(reachable={"192.168.43.12"})
        scanner = make_scanner(quiet_logger, probe, resolver=lambda ip: "pixel-7.lan")

        devices = scanner.sweep(["192.168.43."])

        assert devices == [
            DiscoveredDevice("192.168.43.12", "pixel-7.lan", NOT_AVAILABLE, DeviceType.PHONE)
        ]

    def test_resolver_failure_keeps_device(self, quiet_logger):
        def resolver(ip):
            raise socket.gaierror("no name")

        probe = FakeProbe(reachable={"192.168.43.12"})
        scanner = make_scanner(quiet_logger, probe, resolver=resolver)

        devices = scanner.sweep(["192.168.43."])

        assert devices[0].hostname == "192.168.43.12"
        assert devices[0].device_type == DeviceType.UNKNOWN

    def test_probe_exception_counts_as_unreachable(self, quiet_logger):
        probe = FakeProbe(reachable={"192.168.43.3", "192.168.43.4"}, failing={"192.168.43.3"})
        scanner = make_scanner(quiet_logger, probe, last_host=10)

        devices = scanner.sweep(["192.168.43."])

        assert [d.address for d in devices] == ["192.168.43.4"]

    def test_slow_probe_is_abandoned_at_budget(self, quiet_logger):
        probe = FakeProbe(
            reachable={"192.168.43.1", "192.168.43.2"},
            delays={"192.168.43.2": 1.0},
        )
        scanner = make_scanner(quiet_logger, probe, last_host=5, subnet_budget_seconds=0.2)

        start = time.monotonic()
        devices = scanner.sweep(["192.168.43."])
        elapsed = time.monotonic() - start

        assert [d.address for d in devices] == ["192.168.43.1"]
        assert elapsed < 1.0

        # The straggler finishes later and must not leak into the result
        time.sleep(1.0)
        assert [d.address for d in devices] == ["192.168.43.1"]

    def test_defaults_to_configured_prefixes(self, quiet_logger):
        probe = FakeProbe(reachable={"10.0.0.3"})
        scanner = make_scanner(quiet_logger, probe, subnet_prefixes=["10.0.0."], last_host=5)

        assert [d.address for d in scanner.scan()] == ["10.0.0.3"]

    def test_empty_prefix_list(self, quiet_logger):
        probe = FakeProbe()
        scanner = make_scanner(quiet_logger, probe)

        assert scanner.sweep([]) == []
        assert probe.calls == []

    def test_concurrent_sweeps_do_not_share_results(self, quiet_logger):
        probe = FakeProbe(reachable={"192.168.43.2", "192.168.49.2"})
        scanner = make_scanner(quiet_logger, probe, last_host=5)
        outcomes = {}

        def run(prefix):
            outcomes[prefix] = scanner.sweep([prefix])

        threads = [threading.Thread(target=run, args=(p,)) for p in ("192.168.43.", "192.168.49.")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert [d.address for d in outcomes["192.168.43."]] == ["192.168.43.2"]
        assert [d.address for d in outcomes["192.168.49."]] == ["192.168.49.2"]


class TestSweepResults:
    """Tests for the shared result collection."""

    def test_same_address_inserted_once(self):
        results = _SweepResults()
        device = DiscoveredDevice("192.168.43.2", "a")
        barrier = threading.Barrier(16)
        outcomes = []

        def add():
            barrier.wait()
            outcomes.append(results.add(device))

        threads = [threading.Thread(target=add) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count(True) == 1
        assert len(results) == 1

    def test_closed_collection_rejects_inserts(self):
        results = _SweepResults()
        results.add(DiscoveredDevice("192.168.43.2", "a"))
        results.close()

        assert results.add(DiscoveredDevice("192.168.43.3", "b")) is False
        assert [d.address for d in results.devices()] == ["192.168.43.2"]

    def test_devices_sorted_numerically(self):
        results = _SweepResults()
        for address in ("192.168.43.100", "192.168.43.9", "192.168.43.20"):
            results.add(DiscoveredDevice(address, address))

        assert [d.address for d in results.devices()] == [
            "192.168.43.9", "192.168.43.20", "192.168.43.100"
        ]


class TestReachabilityProbe:
    """Tests for the per-address probe methods."""

    def test_timeout_from_config(self):
        probe = ReachabilityProbe(SweepConfig(probe_timeout_ms=250))
        assert probe.timeout == pytest.approx(0.25)

    def test_tcp_connect_success(self):
        with patch("hotspot_discovery.scanners.reachability.socket.create_connection",
                   return_value=MagicMock()) as connect:
            assert ReachabilityProbe().is_reachable("192.168.43.2") is True
        connect.assert_called_once_with(("192.168.43.2", 7), timeout=0.1)

    def test_tcp_refused_means_reachable(self):
        with patch("hotspot_discovery.scanners.reachability.socket.create_connection",
                   side_effect=ConnectionRefusedError()):
            assert ReachabilityProbe().is_reachable("192.168.43.2") is True

    @pytest.mark.parametrize("error", [
        socket.timeout("timed out"),
        OSError(113, "No route to host"),
    ])
    def test_tcp_failure_means_unreachable(self, error):
        with patch("hotspot_discovery.scanners.reachability.socket.create_connection",
                   side_effect=error) as connect:
            assert ReachabilityProbe().is_reachable("192.168.43.2") is False

        _, kwargs = connect.call_args
        assert kwargs["timeout"] == 0.1

    def test_ping_success(self):
        probe = ReachabilityProbe(SweepConfig(method="ping"))
        with patch("hotspot_discovery.scanners.reachability.subprocess.run",
                   return_value=Mock(returncode=0)) as run:
            assert probe.is_reachable("192.168.43.2") is True

        args, kwargs = run.call_args
        assert args[0] == ["ping", "-c", "1", "-W", "1", "192.168.43.2"]
        assert kwargs["timeout"] == pytest.approx(0.1 + PING_SPAWN_ALLOWANCE)

    @pytest.mark.parametrize("outcome", [
        {"return_value": Mock(returncode=1)},
        {"side_effect": subprocess.TimeoutExpired(["ping"], 0.6)},
        {"side_effect": FileNotFoundError("ping")},
    ])
    def test_ping_failure(self, outcome):
        probe = ReachabilityProbe(SweepConfig(method="ping"))
        with patch("hotspot_discovery.scanners.reachability.subprocess.run", **outcome):
            assert probe.is_reachable("192.168.43.2") is False

    def test_icmp_falls_back_to_tcp_without_scapy(self, quiet_logger):
        with patch.object(ReachabilityProbe, "_check_scapy_availability", return_value=False):
            probe = ReachabilityProbe(SweepConfig(method="icmp"), quiet_logger)
        assert probe.method == "tcp"

    def test_icmp_uses_scapy_when_available(self):
        with patch.object(ReachabilityProbe, "_check_scapy_availability", return_value=True):
            probe = ReachabilityProbe(SweepConfig(method="icmp"))
        with patch.object(probe, "_probe_with_scapy", return_value=True) as scapy_probe:
            assert probe.is_reachable("192.168.43.2") is True
        scapy_probe.assert_called_once_with("192.168.43.2")

    def test_ping_wait_is_whole_seconds(self):
        probe = ReachabilityProbe(SweepConfig(method="ping", probe_timeout_ms=1500))
        with patch("hotspot_discovery.scanners.reachability.subprocess.run",
                   return_value=Mock(returncode=1)) as run:
            probe.is_reachable("192.168.43.2")

        command = run.call_args[0][0]
        assert command[command.index("-W") + 1] == "2"


class TestScapyEchoProbe:
    """Tests for the icmp method with scapy's send/receive replaced."""

    @pytest.fixture
    def scapy_all(self):
        module = MagicMock()
        with patch.dict(sys.modules, {"scapy": MagicMock(all=module), "scapy.all": module}):
            yield module

    @pytest.fixture
    def probe(self, quiet_logger):
        with patch.object(ReachabilityProbe, "_check_scapy_availability", return_value=True):
            return ReachabilityProbe(SweepConfig(method="icmp"), quiet_logger)

    def test_reply_means_reachable(self, probe, scapy_all):
        scapy_all.sr1.return_value = MagicMock()

        assert probe.is_reachable("192.168.43.2") is True

        scapy_all.IP.assert_called_once_with(dst="192.168.43.2")
        _, kwargs = scapy_all.sr1.call_args
        assert kwargs["timeout"] == 0.1
        assert kwargs["verbose"] is False

    def test_no_reply_means_unreachable(self, probe, scapy_all):
        scapy_all.sr1.return_value = None
        assert probe.is_reachable("192.168.43.2") is False

    def test_socket_error_means_unreachable(self, probe, scapy_all):
        scapy_all.sr1.side_effect = OSError(101, "Network is unreachable")

        assert probe.is_reachable("192.168.43.2") is False
        assert probe.method == "icmp"

    def test_missing_privileges_switch_to_tcp(self, probe, scapy_all):
        scapy_all.sr1.side_effect = PermissionError(1, "Operation not permitted")

        with patch("hotspot_discovery.scanners.reachability.socket.create_connection",
                   side_effect=ConnectionRefusedError()) as connect:
            assert probe.is_reachable("192.168.43.2") is True
            assert probe.is_reachable("192.168.43.3") is True

        assert probe.method == "tcp"
        assert scapy_all.sr1.call_count == 1
        assert connect.call_count == 2

    def test_fallback_warns_once(self, probe, scapy_all):
        scapy_all.sr1.side_effect = PermissionError(1, "Operation not permitted")

        with patch.object(probe.logger, "warning") as warning, \
                patch("hotspot_discovery.scanners.reachability.socket.create_connection",
                      side_effect=OSError()):
            probe._probe_with_scapy("192.168.43.2")
            probe._probe_with_scapy("192.168.43.3")

        warning.assert_called_once()
