"""RTC Capabilities - Decide which real-time communication features a browser supports."""

__version__ = "1.0.0"

from .config import Settings, get_settings
from .platform import PlatformIdentity, Product, compare_versions, detect_identity
from .capabilities import (
    BrowserCapabilities,
    CapabilityDataset,
    CapabilityRecord,
    DatasetError,
    get_dataset,
    load_dataset,
    resolve,
)

__all__ = [
    "Settings",
    "get_settings",
    "PlatformIdentity",
    "Product",
    "compare_versions",
    "detect_identity",
    "BrowserCapabilities",
    "CapabilityDataset",
    "CapabilityRecord",
    "DatasetError",
    "get_dataset",
    "load_dataset",
    "resolve",
]
