"""Load the capability dataset from disk."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rtc_capabilities.config import get_settings

from .models import CapabilityDataset

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when a capability dataset cannot be parsed or fails validation."""


def parse_dataset(data: Any, source: str = "<memory>") -> CapabilityDataset:
    """Validate raw dataset data.

    Args:
        data: Mapping of product name to a list of capability records.
        source: Label used in error messages.

    Returns:
        Validated, frozen CapabilityDataset.

    Raises:
        DatasetError: If the data does not match the dataset schema or a
            product's records are not ordered by ascending version.
    """
    if not isinstance(data, dict):
        raise DatasetError(f"Capability dataset must be a mapping: {source}")

    try:
        return CapabilityDataset.model_validate({"products": data})
    except ValidationError as e:
        messages = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"][1:])
            messages.append(f"{location}: {error['msg']}" if location else error["msg"])
        raise DatasetError(
            f"Capability dataset validation failed ({source}): {'; '.join(messages)}"
        ) from e


def load_dataset(path: str | Path) -> CapabilityDataset:
    """Load a capability dataset from a JSON or YAML file.

    Args:
        path: Path to the dataset file. ``.json`` files are read as JSON,
            anything else as YAML.

    Returns:
        Validated CapabilityDataset.

    Raises:
        FileNotFoundError: If file doesn't exist
        DatasetError: If the file is unparseable or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Capability dataset not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DatasetError(f"Invalid capability dataset in {path}: {e}") from e

    dataset = parse_dataset(data, source=str(path))
    logger.info(
        "Capability dataset loaded: %s (%d products)",
        path,
        len(dataset.products),
    )
    return dataset


@lru_cache()
def get_dataset() -> CapabilityDataset:
    """Get the process-wide dataset, loading it on first use."""
    return load_dataset(get_settings().dataset_path)
