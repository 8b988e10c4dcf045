"""Capability resolution: decide which WebRTC features a platform can use."""

from .dataset import DatasetError, get_dataset, load_dataset, parse_dataset
from .facade import BrowserCapabilities
from .models import CapabilityDataset, CapabilityRecord
from .resolver import IS_SUPPORTED, resolve, select_record

__all__ = [
    "BrowserCapabilities",
    "CapabilityDataset",
    "CapabilityRecord",
    "DatasetError",
    "IS_SUPPORTED",
    "get_dataset",
    "load_dataset",
    "parse_dataset",
    "resolve",
    "select_record",
]
