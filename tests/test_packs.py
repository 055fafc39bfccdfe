"""
Tests for admission pack loading

Validates:
- The bundled pack loads and matches the admission rules
- Malformed YAML fails with PackLoadError
- Unknown keys, bad severities and duplicate fields fail validation
- Bad validator parameters fail validation
- Schema major version is enforced
- JSON packs load like YAML packs
"""
import json
import pytest
import yaml

from admitguard.engine import AgeRangeValidator
from admitguard.exceptions import PackLoadError, PackValidationError, PackVersionMismatch
from admitguard.packs import (
    DEFAULT_PACK_PATH,
    SCHEMA_VERSION,
    AdmissionPackLoader,
    get_default_pack,
    load_admission_pack,
    load_admission_pack_from_string,
)

from tests.conftest import FIXED_TODAY, fixed_clock


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def minimal_pack():
    """Minimal valid pack for testing."""
    return {
        "schema_version": SCHEMA_VERSION,
        "id": "test-pack",
        "name": "Test Pack",
        "version": "1",
        "rules": [
            {
                "field": "dob",
                "label": "Date of Birth",
                "severity": "soft",
                "kind": "age_range",
                "params": {"min_age": 21, "max_age": 30},
            },
            {
                "field": "email",
                "label": "Email",
                "severity": "STRICT",
                "kind": "pattern",
                "params": {"pattern": ".+@.+", "message": "Bad email."},
            },
        ],
        "rationale": {"min_length": 10, "keywords": ["dean approved"]},
        "auto_flag_threshold": 1,
    }


@pytest.fixture
def loader():
    return AdmissionPackLoader(clock=fixed_clock)


# ============================================================================
# DEFAULT PACK
# ============================================================================

class TestDefaultPack:
    """Tests for the bundled pack."""

    def test_loads(self):
        """The bundled pack validates and converts."""
        pack = load_admission_pack()
        assert pack.id == "admitguard-default"
        assert len(pack.catalog) == 11
        assert pack.auto_flag_threshold == 2
        assert pack.rationale_validator.min_length == 30

    def test_cached(self):
        """get_default_pack loads once per process."""
        assert get_default_pack() is get_default_pack()

    def test_clock_threaded_to_age_rule(self, pack):
        """The loader's clock reaches the DOB validator."""
        validator = pack.catalog.get("dob").validator
        assert isinstance(validator, AgeRangeValidator)
        assert validator.clock() == FIXED_TODAY

    def test_to_dict(self, pack):
        """to_dict is a JSON-serializable summary."""
        data = pack.to_dict()
        json.dumps(data)
        assert data["rationale"]["keywords"][0] == "approved by"
        assert [r["field"] for r in data["rules"]][:3] == ["full_name", "email", "phone"]

    def test_default_path_exists(self):
        """The bundled file ships with the package."""
        assert DEFAULT_PACK_PATH.exists()


# ============================================================================
# LOADING
# ============================================================================

class TestLoadData:
    """Tests for AdmissionPackLoader.load_data."""

    def test_minimal(self, loader, minimal_pack):
        """Severity is normalized and validators are built."""
        pack = loader.load_data(minimal_pack)
        assert pack.catalog.soft_fields() == ["dob"]
        assert pack.catalog.get("email").check("a@b", {}).valid
        assert pack.rationale_validator.keywords == ("dean approved",)

    def test_not_a_mapping(self, loader):
        """Top-level lists are rejected."""
        with pytest.raises(PackValidationError):
            loader.load_data(["rules"])

    def test_unknown_top_level_key(self, loader, minimal_pack):
        """Unknown keys fail validation."""
        minimal_pack["colour"] = "blue"
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(minimal_pack)
        assert exc_info.value.code == "AG_PACK_VALIDATION_ERROR"
        assert exc_info.value.details["errors"]

    def test_bad_severity(self, loader, minimal_pack):
        """Only STRICT and SOFT are severities."""
        minimal_pack["rules"][0]["severity"] = "MEDIUM"
        with pytest.raises(PackValidationError):
            loader.load_data(minimal_pack)

    def test_unknown_kind(self, loader, minimal_pack):
        """Validator kinds are a closed set."""
        minimal_pack["rules"][0]["kind"] = "horoscope"
        with pytest.raises(PackValidationError):
            loader.load_data(minimal_pack)

    def test_duplicate_field(self, loader, minimal_pack):
        """Two rules for one field fail validation."""
        minimal_pack["rules"].append(dict(minimal_pack["rules"][1]))
        with pytest.raises(PackValidationError):
            loader.load_data(minimal_pack)

    def test_bad_validator_params(self, loader, minimal_pack):
        """Parameters a validator doesn't take are rejected with the field named."""
        minimal_pack["rules"][0]["params"] = {"min_age": 21, "oldest": 30}
        with pytest.raises(PackValidationError) as exc_info:
            loader.load_data(minimal_pack)
        assert exc_info.value.details["field"] == "dob"

    def test_invalid_pattern(self, loader, minimal_pack):
        """Patterns that don't compile are rejected."""
        minimal_pack["rules"][1]["params"]["pattern"] = "[a-"
        with pytest.raises(PackValidationError):
            loader.load_data(minimal_pack)

    def test_empty_keyword(self, loader, minimal_pack):
        """Blank rationale keywords are rejected."""
        minimal_pack["rationale"]["keywords"] = ["  "]
        with pytest.raises(PackValidationError):
            loader.load_data(minimal_pack)


class TestSchemaVersion:
    """Tests for schema version checks."""

    def test_major_mismatch(self, loader, minimal_pack):
        """A different major version is refused."""
        minimal_pack["schema_version"] = "2.0.0"
        with pytest.raises(PackVersionMismatch) as exc_info:
            loader.load_data(minimal_pack)
        assert exc_info.value.details["expected_version"] == SCHEMA_VERSION

    def test_minor_difference_ok(self, loader, minimal_pack):
        """Minor versions are compatible."""
        minimal_pack["schema_version"] = "1.4.0"
        assert loader.load_data(minimal_pack).id == "test-pack"

    def test_lenient_loader(self, minimal_pack):
        """strict_version=False skips the check."""
        minimal_pack["schema_version"] = "2.0.0"
        pack = AdmissionPackLoader(strict_version=False).load_data(minimal_pack)
        assert pack.id == "test-pack"


class TestFiles:
    """Tests for loading from files and strings."""

    def test_yaml_file(self, tmp_path, minimal_pack):
        """YAML files load."""
        path = tmp_path / "pack.yaml"
        path.write_text(yaml.safe_dump(minimal_pack), encoding="utf-8")
        assert load_admission_pack(path).id == "test-pack"

    def test_json_file(self, tmp_path, minimal_pack):
        """JSON files load by extension."""
        path = tmp_path / "pack.json"
        path.write_text(json.dumps(minimal_pack), encoding="utf-8")
        assert load_admission_pack(path).id == "test-pack"

    def test_missing_file(self, tmp_path):
        """A missing file is a load error."""
        with pytest.raises(PackLoadError) as exc_info:
            load_admission_pack(tmp_path / "nope.yaml")
        assert exc_info.value.code == "AG_PACK_LOAD_ERROR"

    def test_malformed_yaml(self, tmp_path):
        """Unparseable YAML is a load error."""
        path = tmp_path / "bad.yaml"
        path.write_text("rules: [unclosed\n", encoding="utf-8")
        with pytest.raises(PackLoadError):
            load_admission_pack(path)

    def test_from_string(self, minimal_pack):
        """Packs load from YAML and JSON strings."""
        assert load_admission_pack_from_string(yaml.safe_dump(minimal_pack)).id == "test-pack"
        assert load_admission_pack_from_string(json.dumps(minimal_pack), format="json").id == "test-pack"

    def test_from_bad_string(self):
        """Unparseable strings are load errors."""
        with pytest.raises(PackLoadError):
            load_admission_pack_from_string("{not json", format="json")
