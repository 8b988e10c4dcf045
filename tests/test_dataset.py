"""Tests for capability dataset models and loading."""

import json

import pytest

from rtc_capabilities.capabilities import (
    CapabilityDataset,
    CapabilityRecord,
    DatasetError,
    get_dataset,
    load_dataset,
    parse_dataset,
)
from rtc_capabilities.config import get_settings
from rtc_capabilities.config.settings import DEFAULT_CAPABILITIES_FILE


@pytest.fixture(autouse=True)
def _clear_caches():
    get_settings.cache_clear()
    get_dataset.cache_clear()
    yield
    get_settings.cache_clear()
    get_dataset.cache_clear()


# --- Model tests ---


class TestCapabilityRecord:
    def test_iframe_alias(self):
        """Reads iframe overrides from the camelCase key."""
        record = CapabilityRecord.model_validate(
            {"capabilities": {"audioIn": True}, "iframeCapabilities": {"audioIn": False}}
        )
        assert record.iframe_capabilities == {"audioIn": False}

    def test_all_fields_optional(self):
        """An empty record is valid and carries no verdict."""
        record = CapabilityRecord()
        assert record.version is None
        assert record.capabilities is None
        assert record.iframe_capabilities is None

    def test_frozen(self):
        """Records cannot be reassigned after load."""
        record = CapabilityRecord(version="10")
        with pytest.raises(Exception):
            record.version = "11"


class TestParseDataset:
    def test_valid(self):
        """Accepts ascending brackets with a trailing catch-all."""
        dataset = parse_dataset(
            {
                "foo": [
                    {"version": "9", "capabilities": {"x": True}},
                    {"version": "10", "capabilities": {"x": False}},
                    {"capabilities": {"x": True}},
                ]
            }
        )
        records = dataset.records_for("foo")
        assert [r.version for r in records] == ["9", "10", None]
        assert isinstance(records, tuple)

    def test_unknown_product(self):
        """Unknown products have no records."""
        dataset = parse_dataset({"foo": []})
        assert dataset.records_for("bar") == ()

    def test_descending_versions_rejected(self):
        """Non-ascending thresholds fail validation."""
        with pytest.raises(DatasetError, match="does not ascend"):
            parse_dataset(
                {
                    "foo": [
                        {"version": "20", "capabilities": {}},
                        {"version": "10", "capabilities": {}},
                    ]
                }
            )

    def test_duplicate_versions_rejected(self):
        """Equal thresholds fail validation."""
        with pytest.raises(DatasetError, match="does not ascend"):
            parse_dataset(
                {"foo": [{"version": "10"}, {"version": "10.0"}]}
            )

    def test_catch_all_must_be_last(self):
        """A record without a version must come last."""
        with pytest.raises(DatasetError, match="not the last record"):
            parse_dataset(
                {"foo": [{"capabilities": {}}, {"version": "10", "capabilities": {}}]}
            )

    def test_single_catch_all(self):
        """Two catch-all records are rejected."""
        with pytest.raises(DatasetError, match="not the last record"):
            parse_dataset({"foo": [{"capabilities": {}}, {"capabilities": {}}]})

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_version_is_catch_all(self, blank):
        """An empty version acts like a missing one."""
        dataset = parse_dataset(
            {"foo": [{"version": blank, "capabilities": {"x": True}}]}
        )
        assert dataset.records_for("foo")[0].version is None

    def test_blank_version_must_be_last(self):
        """A blank-version record follows the catch-all placement rule."""
        with pytest.raises(DatasetError, match="not the last record"):
            parse_dataset({"foo": [{"version": ""}, {"version": "10"}]})

    @pytest.mark.parametrize("value", [0, 1, None, "no", "false"])
    def test_non_bool_is_supported_rejected(self, value):
        """isSupported must be a real boolean."""
        with pytest.raises(DatasetError, match="isSupported must be true or false"):
            parse_dataset(
                {"foo": [{"capabilities": {"isSupported": value, "audioIn": True}}]}
            )

    def test_non_bool_is_supported_in_iframe_rejected(self):
        """iframe overrides are held to the same rule."""
        with pytest.raises(DatasetError, match="isSupported must be true or false"):
            parse_dataset(
                {
                    "foo": [
                        {
                            "capabilities": {"audioIn": True},
                            "iframeCapabilities": {"isSupported": 0},
                        }
                    ]
                }
            )

    def test_wrong_shape(self):
        """Records must be objects."""
        with pytest.raises(DatasetError, match="validation failed"):
            parse_dataset({"foo": ["not-a-record"]})

    def test_not_a_mapping(self):
        """Top level must be a mapping."""
        with pytest.raises(DatasetError, match="must be a mapping"):
            parse_dataset([{"version": "1"}])

    def test_is_value_error(self):
        """DatasetError is a ValueError."""
        assert issubclass(DatasetError, ValueError)


# --- Loader tests ---


class TestLoadDataset:
    def test_load_json(self, tmp_path):
        path = tmp_path / "caps.json"
        path.write_text(json.dumps({"chrome": [{"capabilities": {"audioIn": True}}]}))
        dataset = load_dataset(path)
        assert dataset.product_names() == ["chrome"]

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "caps.yaml"
        path.write_text(
            "safari:\n"
            "  - version: '10.1'\n"
            "    capabilities:\n"
            "      audioIn: true\n"
            "    iframeCapabilities:\n"
            "      isSupported: false\n"
        )
        dataset = load_dataset(path)
        record = dataset.records_for("safari")[0]
        assert record.version == "10.1"
        assert record.iframe_capabilities == {"isSupported": False}

    def test_load_yaml_numeric_version(self, tmp_path):
        """Unquoted YAML versions are read as strings."""
        path = tmp_path / "caps.yaml"
        path.write_text("firefox:\n  - version: 51\n  - capabilities: {}\n")
        dataset = load_dataset(path)
        assert dataset.records_for("firefox")[0].version == "51"

    def test_load_yaml_float_version_rejected(self, tmp_path):
        """Unquoted decimal versions lose digits in YAML and are rejected."""
        path = tmp_path / "caps.yaml"
        path.write_text(
            "safari:\n"
            "  - version: 10.10\n"
            "    capabilities: {x: true}\n"
            "  - capabilities: {x: false}\n"
        )
        with pytest.raises(DatasetError, match="quote it"):
            load_dataset(path)

    def test_load_yaml_quoted_decimal_version(self, tmp_path):
        """Quoted decimal versions keep every component."""
        path = tmp_path / "caps.yaml"
        path.write_text(
            "safari:\n"
            "  - version: '10.10'\n"
            "    capabilities: {x: true}\n"
            "  - capabilities: {x: false}\n"
        )
        dataset = load_dataset(path)
        assert dataset.records_for("safari")[0].version == "10.10"

    def test_load_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "caps.json"
        path.write_text("{not json")
        with pytest.raises(DatasetError, match="Invalid capability dataset"):
            load_dataset(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "caps.yaml"
        path.write_text("foo: [unclosed")
        with pytest.raises(DatasetError):
            load_dataset(path)

    def test_validation_error_names_file(self, tmp_path):
        path = tmp_path / "caps.json"
        path.write_text(json.dumps({"foo": [{"version": "2"}, {"version": "1"}]}))
        with pytest.raises(DatasetError, match="caps.json"):
            load_dataset(path)


class TestPackagedDataset:
    def test_packaged_file_loads(self):
        """The shipped table passes validation."""
        dataset = load_dataset(DEFAULT_CAPABILITIES_FILE)
        for name in ("chrome", "firefox", "safari", "edge", "electron"):
            assert dataset.records_for(name)

    def test_get_dataset_is_cached(self):
        """The process-wide dataset is loaded once."""
        assert get_dataset() is get_dataset()

    def test_get_dataset_uses_settings(self, tmp_path, monkeypatch):
        """CAPABILITIES_FILE points the process-wide dataset elsewhere."""
        path = tmp_path / "caps.json"
        path.write_text(json.dumps({"custom": [{"capabilities": {}}]}))
        monkeypatch.setenv("CAPABILITIES_FILE", str(path))

        dataset = get_dataset()
        assert isinstance(dataset, CapabilityDataset)
        assert dataset.product_names() == ["custom"]
