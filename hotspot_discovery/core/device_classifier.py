"""
Device Classification System for Hotspot Discovery Module.

Peers on a hotspot rarely expose anything but a hostname, so classification
is a plain keyword lookup on that name. Rules are checked in table order and
the first match wins; there is no scoring.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .data_models import DeviceType


@dataclass(frozen=True)
class ClassificationRule:
    """
    A rule for classifying devices by hostname.

    Attributes:
        device_type: The device type this rule classifies to
        keywords: Lowercase substrings that select this rule
    """
    device_type: DeviceType
    keywords: Tuple[str, ...]

    def matches(self, hostname: str) -> bool:
        return any(keyword in hostname for keyword in self.keywords)


# Order matters: "My-Android-Tablet" is a phone because phone is checked first.
CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule(
        DeviceType.PHONE,
        ("iphone", "ios", "android", "galaxy", "pixel", "xiaomi", "oppo", "huawei"),
    ),
    ClassificationRule(DeviceType.LAPTOP, ("macbook", "laptop", "notebook")),
    ClassificationRule(DeviceType.TABLET, ("ipad", "tablet")),
    ClassificationRule(DeviceType.DESKTOP, ("pc", "desktop", "windows", "imac", "mac-")),
]


class DeviceClassifier:
    """Classifies discovered devices into coarse categories by hostname."""

    def __init__(self, rules: Optional[List[ClassificationRule]] = None):
        self.classification_rules = rules if rules is not None else CLASSIFICATION_RULES

    def classify(self, hostname: str) -> DeviceType:
        """
        Classify a hostname.

        Args:
            hostname: Resolved hostname (or raw address)

        Returns:
            The first matching DeviceType, or DeviceType.UNKNOWN
        """
        if not hostname:
            return DeviceType.UNKNOWN

        lowered = hostname.lower()
        for rule in self.classification_rules:
            if rule.matches(lowered):
                return rule.device_type
        return DeviceType.UNKNOWN


_default_classifier = DeviceClassifier()


def classify(hostname: str) -> DeviceType:
    """Classify a hostname with the default rule table."""
    return _default_classifier.classify(hostname)
