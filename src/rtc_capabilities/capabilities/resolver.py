"""Resolve the capabilities that apply to one platform identity.

Resolution order:
1. Pick the first record whose version bracket covers the platform version
   (records ascend, so this is the tightest bracket; a record without a
   version is the catch-all)
2. Copy its capabilities, overlaying iframe overrides when embedded
3. Default ``isSupported`` to True; an explicit False, in the bracket or in
   the merged overrides, erases every other flag
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from rtc_capabilities.platform.identity import PlatformIdentity

from .models import CapabilityRecord

logger = logging.getLogger(__name__)

IS_SUPPORTED = "isSupported"

_UNSUPPORTED: Mapping[str, Any] = MappingProxyType({IS_SUPPORTED: False})


def select_record(
    identity: PlatformIdentity,
    records: Sequence[CapabilityRecord],
) -> Optional[CapabilityRecord]:
    """Find the record whose version bracket covers ``identity.version``.

    Args:
        identity: Platform identity being resolved.
        records: Records for ``identity.name``, ascending by version.

    Returns:
        The first record without a version, or whose version the identity
        does not exceed. None if every bracket is older than the platform.
    """
    for record in records:
        if record.version is None or not identity.is_version_greater_than(
            record.version
        ):
            return record
    return None


def resolve(
    identity: PlatformIdentity,
    records: Sequence[CapabilityRecord],
    in_embedded_context: bool = False,
) -> Mapping[str, Any]:
    """Resolve the capability map for a platform.

    Args:
        identity: Platform identity being resolved.
        records: Records for ``identity.name``, ascending by version. Empty
            for products missing from the dataset.
        in_embedded_context: True when running inside an iframe.

    Returns:
        Read-only mapping that always holds a boolean ``isSupported``. An
        unsupported result holds nothing else.
    """
    record = select_record(identity, records)
    log_extra = {
        "product": identity.name,
        "product_version": identity.version,
        "in_iframe": in_embedded_context,
    }

    if record is None or record.capabilities is None:
        logger.debug(
            "No capabilities for %s %s, treating as unsupported",
            identity.name,
            identity.version,
            extra=log_extra,
        )
        return _UNSUPPORTED

    resolved = dict(record.capabilities)
    if in_embedded_context and record.iframe_capabilities:
        resolved.update(record.iframe_capabilities)

    # A bracket marked unsupported stays unsupported whatever the overrides say
    if record.capabilities.get(IS_SUPPORTED) is False:
        resolved[IS_SUPPORTED] = False

    if IS_SUPPORTED not in resolved:
        resolved[IS_SUPPORTED] = True
    elif resolved[IS_SUPPORTED] is False:
        logger.debug(
            "%s %s is marked unsupported",
            identity.name,
            identity.version,
            extra=log_extra,
        )
        return _UNSUPPORTED

    logger.debug(
        "Resolved %s %s against bracket %s (iframe=%s)",
        identity.name,
        identity.version,
        record.version or "latest",
        in_embedded_context,
        extra=log_extra,
    )
    return MappingProxyType(resolved)
