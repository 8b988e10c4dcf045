"""Pydantic models for the capability dataset."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rtc_capabilities.platform.versions import compare_versions


class CapabilityRecord(BaseModel):
    """Capabilities of one product up to and including ``version``.

    A record without ``version`` is the catch-all for versions newer than
    every listed bracket. ``capabilities`` set to None means the bracket
    carries no verdict and resolves as unsupported.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    version: Optional[str] = None
    capabilities: Optional[dict[str, Any]] = None
    iframe_capabilities: Optional[dict[str, Any]] = Field(
        None, alias="iframeCapabilities"
    )

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_string(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError(f"version must be a string, got {value!r}")
        if isinstance(value, int):
            return str(value)
        # YAML reads unquoted 10.10 as the float 10.1
        if isinstance(value, float):
            raise ValueError(
                f"version {value!r} was read as a number; quote it (e.g. \"10.10\")"
            )
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("capabilities", "iframe_capabilities")
    @classmethod
    def _is_supported_is_bool(
        cls, value: Optional[dict[str, Any]]
    ) -> Optional[dict[str, Any]]:
        if value is not None and "isSupported" in value:
            if not isinstance(value["isSupported"], bool):
                raise ValueError(
                    f"isSupported must be true or false, got {value['isSupported']!r}"
                )
        return value


class CapabilityDataset(BaseModel):
    """Per-product, version-bracketed capability records."""

    model_config = ConfigDict(frozen=True)

    products: dict[str, tuple[CapabilityRecord, ...]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_brackets(self) -> CapabilityDataset:
        errors = []
        for name, records in self.products.items():
            errors.extend(_bracket_errors(name, records))
        if errors:
            raise ValueError("; ".join(errors))
        return self

    def records_for(self, name: str) -> tuple[CapabilityRecord, ...]:
        """Get the ordered records for a product (empty if unknown)."""
        return self.products.get(name, ())

    def product_names(self) -> list[str]:
        """List products covered by the dataset."""
        return list(self.products)


def _bracket_errors(name: str, records: tuple[CapabilityRecord, ...]) -> list[str]:
    """Check that thresholds ascend and the catch-all, if any, comes last."""
    errors = []
    previous: Optional[str] = None

    for index, record in enumerate(records):
        if record.version is None:
            if index != len(records) - 1:
                errors.append(
                    f"{name}: record {index + 1} has no version but is not the last record"
                )
            continue

        if previous is not None and compare_versions(previous, record.version) >= 0:
            errors.append(
                f"{name}: version '{record.version}' does not ascend after '{previous}'"
            )
        previous = record.version

    return errors
