"""
Unit tests for the YAML configuration loader.

Every invalid or missing value must fall back to its default without
raising, so a broken config file never stops a scan.
"""

import pytest

from hotspot_discovery.config.config_loader import (
    ConfigLoader,
    DEFAULT_SUBNET_PREFIXES,
    HotspotConfig,
    NeighborConfig,
    SweepConfig,
    parse_version,
)


@pytest.fixture
def loader(tmp_path, quiet_logger):
    return ConfigLoader(str(tmp_path), quiet_logger)


def write(tmp_path, name, text):
    (tmp_path / name).write_text(text, encoding="utf-8")


class TestShippedDefaults:

    def test_shipped_files_match_dataclass_defaults(self, quiet_logger):
        loader = ConfigLoader(logger=quiet_logger)

        assert loader.load_neighbor_config() == NeighborConfig()
        assert loader.load_sweep_config() == SweepConfig()
        assert loader.load_hotspot_config() == HotspotConfig()

    def test_sweep_defaults(self):
        config = SweepConfig()
        assert config.subnet_prefixes == DEFAULT_SUBNET_PREFIXES
        assert (config.first_host, config.last_host) == (0, 220)
        assert config.probe_timeout_ms == 100
        assert config.subnet_budget_seconds == 5.0


class TestMissingOrBrokenFiles:

    def test_missing_files_use_defaults(self, loader):
        assert loader.load_neighbor_config() == NeighborConfig()
        assert loader.load_sweep_config() == SweepConfig()
        assert loader.load_hotspot_config() == HotspotConfig()

    def test_malformed_yaml(self, loader, tmp_path):
        write(tmp_path, "sweep_config.yml", "sweep: [unclosed\n  method: : ping")
        assert loader.load_sweep_config() == SweepConfig()

    @pytest.mark.parametrize("text", ["", "- a\n- b\n", "sweep: 12\n", "other:\n  method: ping\n"])
    def test_wrong_structure(self, loader, tmp_path, text):
        write(tmp_path, "sweep_config.yml", text)
        assert loader.load_sweep_config() == SweepConfig()


class TestSweepConfig:

    def test_valid_values(self, loader, tmp_path):
        write(tmp_path, "sweep_config.yml", """\
sweep:
  subnet_prefixes: ["10.0.0.", "172.16.5."]
  first_host: 1
  last_host: 50
  probe_timeout_ms: 250
  subnet_budget_seconds: 2.5
  max_workers: 16
  method: ping
  tcp_port: 80
""")
        config = loader.load_sweep_config()

        assert config == SweepConfig(
            subnet_prefixes=["10.0.0.", "172.16.5."],
            first_host=1,
            last_host=50,
            probe_timeout_ms=250,
            subnet_budget_seconds=2.5,
            max_workers=16,
            method="ping",
            tcp_port=80,
        )

    def test_invalid_prefixes_are_skipped(self, loader, tmp_path):
        write(tmp_path, "sweep_config.yml", """\
sweep:
  subnet_prefixes: ["10.0.0", "10.0.0.1.", "256.1.1.", "a.b.c.", 42, "192.168.43."]
""")
        assert loader.load_sweep_config().subnet_prefixes == ["192.168.43."]

    def test_no_valid_prefix_uses_defaults(self, loader, tmp_path):
        write(tmp_path, "sweep_config.yml", "sweep:\n  subnet_prefixes: ['nope']\n")
        assert loader.load_sweep_config().subnet_prefixes == DEFAULT_SUBNET_PREFIXES

    def test_prefixes_not_a_list(self, loader, tmp_path):
        write(tmp_path, "sweep_config.yml", "sweep:\n  subnet_prefixes: 192.168.43.\n")
        assert loader.load_sweep_config().subnet_prefixes == DEFAULT_SUBNET_PREFIXES

    @pytest.mark.parametrize("field,value", [
        ("probe_timeout_ms", 0),
        ("probe_timeout_ms", "fast"),
        ("max_workers", -4),
        ("subnet_budget_seconds", 0),
        ("subnet_budget_seconds", "soon"),
        ("tcp_port", "echo"),
    ])
    def test_invalid_numbers_use_defaults(self, loader, tmp_path, field, value):
        write(tmp_path, "sweep_config.yml", f"sweep:\n  {field}: {value!r}\n")
        assert getattr(loader.load_sweep_config(), field) == getattr(SweepConfig(), field)

    @pytest.mark.parametrize("first,last", [(300, 220), (-1, 220), (0, 256)])
    def test_host_suffix_out_of_range(self, loader, tmp_path, first, last):
        write(tmp_path, "sweep_config.yml", f"sweep:\n  first_host: {first}\n  last_host: {last}\n")
        config = loader.load_sweep_config()
        assert 0 <= config.first_host <= config.last_host <= 255

    def test_inverted_host_range_uses_defaults(self, loader, tmp_path):
        write(tmp_path, "sweep_config.yml", "sweep:\n  first_host: 100\n  last_host: 10\n")
        config = loader.load_sweep_config()
        assert (config.first_host, config.last_host) == (0, 220)

    def test_unknown_method(self, loader, tmp_path):
        write(tmp_path, "sweep_config.yml", "sweep:\n  method: arp\n")
        assert loader.load_sweep_config().method == "tcp"


class TestNeighborConfig:

    def test_command_string_is_split(self, loader, tmp_path):
        write(tmp_path, "neighbor_config.yml", "neighbor:\n  command: ip -4 neigh show\n  timeout: 2\n")
        assert loader.load_neighbor_config() == NeighborConfig(["ip", "-4", "neigh", "show"], 2)

    @pytest.mark.parametrize("command", ["[]", "[1, 2]", "{a: b}"])
    def test_invalid_command(self, loader, tmp_path, command):
        write(tmp_path, "neighbor_config.yml", f"neighbor:\n  command: {command}\n")
        assert loader.load_neighbor_config().command == ["ip", "neigh", "show"]


class TestHotspotConfig:

    def test_valid_values(self, loader, tmp_path):
        write(tmp_path, "hotspot_config.yml",
              "hotspot:\n  interface: ' ap0 '\n  min_capability_level: 4.2\n  command_timeout: 3\n")
        assert loader.load_hotspot_config() == HotspotConfig("ap0", "4.2", 3)

    def test_invalid_values(self, loader, tmp_path):
        write(tmp_path, "hotspot_config.yml",
              "hotspot:\n  interface: ''\n  min_capability_level: latest\n  command_timeout: 0\n")
        assert loader.load_hotspot_config() == HotspotConfig()


@pytest.mark.parametrize("text,expected", [
    ("5.15.0-91-generic", (5, 15, 0)),
    ("3.0", (3, 0)),
    ("6", (6,)),
    ("4.19.157-perf+", (4, 19, 157)),
    ("6.1rc2.4", (6, 1)),
    ("", None),
    ("generic", None),
])
def test_parse_version(text, expected):
    assert parse_version(text) == expected
