"""Version string ordering.

Versions are compared component by component on their numeric value, so
``"9" < "10"`` and ``"10" == "10.0"``.
"""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[._\-]")
_LEADING_DIGITS = re.compile(r"^\d+")


def parse_version(version: str) -> tuple[int, ...]:
    """Split a version string into a tuple of integer components.

    Each component contributes its leading digits; a component without
    digits (``"beta"``) counts as ``0``.

    Args:
        version: Dotted version string (e.g., ``"61.0.3163.100"``).

    Returns:
        Tuple of integer components. Empty for an empty string.
    """
    version = (version or "").strip()
    if not version:
        return ()

    components = []
    for part in _SEPARATORS.split(version):
        match = _LEADING_DIGITS.match(part)
        components.append(int(match.group(0)) if match else 0)
    return tuple(components)


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings.

    Args:
        a: Left-hand version.
        b: Right-hand version.

    Returns:
        Negative if ``a < b``, zero if equal, positive if ``a > b``.
    """
    left = parse_version(a)
    right = parse_version(b)

    # Pad the shorter side so "10" and "10.0" compare equal
    width = max(len(left), len(right))
    left = left + (0,) * (width - len(left))
    right = right + (0,) * (width - len(right))

    if left < right:
        return -1
    if left > right:
        return 1
    return 0
