"""Platform identity and version ordering.

Provides:
- Product/version detection from User-Agent strings
- Family predicates and version comparison for gating code paths
"""

from rtc_capabilities.platform.identity import (
    PlatformIdentity,
    Product,
    detect_identity,
    probe_identity,
)
from rtc_capabilities.platform.versions import compare_versions, parse_version

__all__ = [
    "PlatformIdentity",
    "Product",
    "detect_identity",
    "probe_identity",
    "compare_versions",
    "parse_version",
]
