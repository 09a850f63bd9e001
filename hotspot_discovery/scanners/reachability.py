"""
Reachability probes for the subnet sweep.

A probe answers one question, "did this address respond within the
timeout?", and never raises: an unreachable host, a timeout and a local
error are all a negative answer.
"""

import importlib.util
import math
import socket
import subprocess
import threading
from typing import Optional

from ..config.config_loader import SweepConfig
from ..utils.logger import Logger

# Extra wall-clock time allowed for spawning the ping process itself
PING_SPAWN_ALLOWANCE = 0.5


class ReachabilityProbe:
    """
    Checks whether a single address answers, using the configured method.

    Methods:
        tcp:  connect to the echo port; an accepted or refused connection
              both prove the host is up
        ping: one system ping; the process timeout bounds the wait
        icmp: one scapy echo request (needs raw-socket privileges; without
              them the probe switches to tcp)
    """

    def __init__(self, config: Optional[SweepConfig] = None, logger: Optional[Logger] = None):
        self.config = config or SweepConfig()
        self.logger = logger
        self.timeout = self.config.probe_timeout_ms / 1000.0
        self.method = self.config.method
        self._method_lock = threading.Lock()

        if self.method == "icmp" and not self._check_scapy_availability():
            self._fall_back_to_tcp("Scapy not available")

    def is_reachable(self, address: str) -> bool:
        """
        Probe one address.

        Args:
            address: IPv4 address to probe

        Returns:
            True if the address responded within the timeout
        """
        if self.method == "ping":
            return self._probe_with_ping(address)
        if self.method == "icmp":
            return self._probe_with_scapy(address)
        return self._probe_with_tcp(address)

    def _probe_with_tcp(self, address: str) -> bool:
        try:
            with socket.create_connection((address, self.config.tcp_port), timeout=self.timeout):
                return True
        except ConnectionRefusedError:
            # RST came back, so something is listening at that address
            return True
        except OSError:
            # socket.timeout, EHOSTUNREACH, ENETUNREACH...
            return False

    def _probe_with_ping(self, address: str) -> bool:
        # Older iputils and busybox only take whole seconds for -W
        wait_seconds = max(1, math.ceil(self.timeout))
        cmd = ["ping", "-c", "1", "-W", str(wait_seconds), address]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout + PING_SPAWN_ALLOWANCE,
            )
        except (subprocess.TimeoutExpired, OSError):
            return False
        return result.returncode == 0

    def _probe_with_scapy(self, address: str) -> bool:
        from scapy.all import ICMP, IP, sr1

        try:
            reply = sr1(IP(dst=address) / ICMP(), timeout=self.timeout, verbose=False)
        except PermissionError:
            self._fall_back_to_tcp("No raw-socket privileges for icmp probes")
            return self._probe_with_tcp(address)
        except OSError:
            return False
        return reply is not None

    def _fall_back_to_tcp(self, reason: str) -> None:
        with self._method_lock:
            if self.method == "tcp":
                return
            self.method = "tcp"
        if self.logger:
            self.logger.warning(f"{reason}, falling back to tcp probe method")

    @staticmethod
    def _check_scapy_availability() -> bool:
        return importlib.util.find_spec("scapy") is not None
