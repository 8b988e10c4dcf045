"""Platform identity detection from User-Agent strings.

Parses a User-Agent header into:
- Product name (browser or embedding runtime)
- Product version

and exposes family predicates and version comparison used when gating
WebRTC code paths.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from rtc_capabilities.config import get_settings
from rtc_capabilities.platform.versions import compare_versions

logger = logging.getLogger(__name__)


class Product(str, Enum):
    """Known runtime products."""

    CHROME = "chrome"
    ELECTRON = "electron"
    EDGE = "edge"
    FIREFOX = "firefox"
    IEXPLORER = "iexplorer"
    NWJS = "nwjs"
    OPERA = "opera"
    REACT_NATIVE = "react-native"
    SAFARI = "safari"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PlatformIdentity:
    """Product name and version of the current runtime."""

    name: str
    version: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlatformIdentity:
        """Create an identity from a ``{"name": ..., "version": ...}`` mapping."""
        return cls(
            name=str(data.get("name") or Product.UNKNOWN.value),
            version=str(data.get("version") or ""),
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"name": self.name, "version": self.version}

    def _is(self, product: Product) -> bool:
        return self.name == product.value

    def is_chrome(self) -> bool:
        return self._is(Product.CHROME)

    def is_electron(self) -> bool:
        return self._is(Product.ELECTRON)

    def is_edge(self) -> bool:
        return self._is(Product.EDGE)

    def is_firefox(self) -> bool:
        return self._is(Product.FIREFOX)

    def is_iexplorer(self) -> bool:
        return self._is(Product.IEXPLORER)

    def is_nwjs(self) -> bool:
        return self._is(Product.NWJS)

    def is_opera(self) -> bool:
        return self._is(Product.OPERA)

    def is_react_native(self) -> bool:
        return self._is(Product.REACT_NATIVE)

    def is_safari(self) -> bool:
        return self._is(Product.SAFARI)

    def is_version_greater_than(self, version: str) -> bool:
        """Check if this platform's version is newer than ``version``.

        Always False when the platform version is unknown.
        """
        if not self.version:
            return False
        return compare_versions(self.version, version) > 0

    def is_version_less_than(self, version: str) -> bool:
        """Check if this platform's version is older than ``version``.

        Always False when the platform version is unknown.
        """
        if not self.version:
            return False
        return compare_versions(self.version, version) < 0

    def is_version_equal_to(self, version: str) -> bool:
        """Check if this platform's version equals ``version``.

        Always False when the platform version is unknown.
        """
        if not self.version:
            return False
        return compare_versions(self.version, version) == 0


# Product detection patterns (order matters: check embedders and forks
# before the engines they carry in their User-Agent)
_PRODUCT_PATTERNS = [
    (re.compile(r"Electron/(\d+(?:\.\d+)*)"), Product.ELECTRON),
    (re.compile(r"(?i)\bnw(?:js|\.js)?/(\d+(?:\.\d+)*)"), Product.NWJS),
    (re.compile(r"(?i)\breact-native(?:/(\d+(?:\.\d+)*))?"), Product.REACT_NATIVE),
    (re.compile(r"Edge/(\d+(?:\.\d+)*)"), Product.EDGE),
    (re.compile(r"OPR/(\d+(?:\.\d+)*)"), Product.OPERA),
    (re.compile(r"Opera/.*Version/(\d+(?:\.\d+)*)"), Product.OPERA),
    (re.compile(r"Firefox/(\d+(?:\.\d+)*)"), Product.FIREFOX),
    (re.compile(r"FxiOS/(\d+(?:\.\d+)*)"), Product.FIREFOX),
    # Chromium-based Edge reports as Chrome
    (re.compile(r"(?:Chrome|Chromium|CriOS)/(\d+(?:\.\d+)*)"), Product.CHROME),
    (re.compile(r"Version/(\d+(?:\.\d+)*).*Safari/"), Product.SAFARI),
    (re.compile(r"MSIE (\d+(?:\.\d+)*)"), Product.IEXPLORER),
    (re.compile(r"Trident/.*rv:(\d+(?:\.\d+)*)"), Product.IEXPLORER),
]


def detect_identity(user_agent: str) -> PlatformIdentity:
    """Detect the runtime product and version from a User-Agent string.

    Args:
        user_agent: User-Agent header string.

    Returns:
        Detected platform identity. Unrecognized agents yield
        ``PlatformIdentity("unknown", "")``.
    """
    ua = user_agent or ""

    for pattern, product in _PRODUCT_PATTERNS:
        match = pattern.search(ua)
        if match:
            return PlatformIdentity(
                name=product.value,
                version=match.group(1) or "",
            )

    logger.debug("Unrecognized user agent: %r", ua)
    return PlatformIdentity(name=Product.UNKNOWN.value)


def probe_identity(user_agent: Optional[str] = None) -> PlatformIdentity:
    """Detect the identity of the live environment.

    Args:
        user_agent: Explicit User-Agent. Defaults to the configured
            ``platform_user_agent`` setting.

    Returns:
        Detected platform identity.
    """
    if user_agent is None:
        user_agent = get_settings().platform_user_agent

    identity = detect_identity(user_agent)
    logger.debug("Probed platform identity: %s %s", identity.name, identity.version)
    return identity
