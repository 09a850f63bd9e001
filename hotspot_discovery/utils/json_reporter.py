"""
JSON output for Hotspot Discovery Module.

Renders discovery reports and hotspot status as JSON documents for the CLI.
Output goes to a stream (stdout by default); nothing is written to disk.
"""

import json
import sys
from datetime import datetime
from typing import Any, Dict, Optional, TextIO

from ..core.data_models import DiscoveryReport


class JSONReporter:
    """
    Converts scan outcomes into JSON documents.

    Device entries use the same wire map as the method channel, so a host
    application can consume either output unchanged.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Initialize the JSON reporter.

        Args:
            stream: Text stream to write to (defaults to sys.stdout)
        """
        self.stream = stream

    def devices_document(self, report: DiscoveryReport) -> Dict[str, Any]:
        """
        Convert a DiscoveryReport to a JSON-serializable dictionary.

        Args:
            report: Outcome of one discovery call

        Returns:
            Dict with scan metadata and the device list
        """
        return {
            "scan_metadata": {
                "timestamp": datetime.now().isoformat(),
                "scan_duration": round(report.duration, 3),
                "source": report.source.value,
                "device_count": len(report.devices),
            },
            "devices": [device.to_dict() for device in report.devices],
        }

    def status_document(self, active: bool) -> Dict[str, Any]:
        return {
            "timestamp": datetime.now().isoformat(),
            "hotspot_enabled": active,
        }

    def write_devices(self, report: DiscoveryReport) -> None:
        self._write(self.devices_document(report))

    def write_status(self, active: bool) -> None:
        self._write(self.status_document(active))

    def _write(self, document: Dict[str, Any]) -> None:
        stream = self.stream or sys.stdout
        json.dump(document, stream, indent=2, ensure_ascii=False, default=str)
        stream.write("\n")
