"""
AdmitGuard Admission Pack Loader

Loads and validates admission packs from YAML or JSON files.

Converts Pydantic schema models to AdmitGuard domain objects: a RuleCatalog,
a RationaleValidator and the auto-flag threshold.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..engine.rationale_validator import RationaleValidator
from ..engine.rule_catalog import RuleCatalog
from ..engine.validators import Clock, build_validator
from ..exceptions import PackLoadError, PackValidationError, PackVersionMismatch
from ..models import Rule, RuleSeverity
from .schema import (
    SCHEMA_VERSION,
    AdmissionPackSchema,
    RuleSchema,
    check_schema_version,
    validate_admission_pack,
)

logger = logging.getLogger(__name__)

DEFAULT_PACK_PATH = Path(__file__).parent / "admission_default.yaml"


# =============================================================================
# Admission Pack (domain object)
# =============================================================================

@dataclass(frozen=True)
class AdmissionPack:
    """A loaded admission pack, ready for evaluation."""
    id: str
    name: str
    version: str
    catalog: RuleCatalog
    rationale_validator: RationaleValidator
    auto_flag_threshold: int
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "rules": self.catalog.describe(),
            "rationale": self.rationale_validator.to_dict(),
            "auto_flag_threshold": self.auto_flag_threshold,
        }


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_rule(schema: RuleSchema, clock: Optional[Clock] = None) -> Rule:
    """Convert RuleSchema to Rule, building its validator."""
    try:
        validator = build_validator(schema.kind, schema.params, clock=clock)
    except ValueError as e:
        raise PackValidationError(
            message=f"Rule '{schema.field}' has invalid validator parameters",
            details={"field": schema.field, "kind": schema.kind, "error": str(e)},
        ) from e

    return Rule(
        field_id=schema.field,
        label=schema.label,
        severity=RuleSeverity(schema.severity),
        description=schema.description,
        validator=validator,
    )


def _convert_admission_pack(
    schema: AdmissionPackSchema,
    clock: Optional[Clock] = None,
) -> AdmissionPack:
    """Convert AdmissionPackSchema to AdmissionPack."""
    return AdmissionPack(
        id=schema.id,
        name=schema.name,
        version=schema.version,
        description=schema.description,
        catalog=RuleCatalog(_convert_rule(r, clock) for r in schema.rules),
        rationale_validator=RationaleValidator(
            min_length=schema.rationale.min_length,
            keywords=tuple(schema.rationale.keywords),
        ),
        auto_flag_threshold=schema.auto_flag_threshold,
    )


# =============================================================================
# Admission Pack Loader
# =============================================================================

class AdmissionPackLoader:
    """
    Loads admission packs from YAML or JSON files.

    Usage:
        loader = AdmissionPackLoader()
        pack = loader.load("path/to/pack.yaml")
    """

    def __init__(self, strict_version: bool = True, clock: Optional[Clock] = None):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject packs with incompatible schema versions
            clock: Date source handed to age validators (defaults to today)
        """
        self.strict_version = strict_version
        self.clock = clock

    def load(self, path: Union[str, Path]) -> AdmissionPack:
        """
        Load an admission pack from a file.

        Raises:
            PackLoadError: If file cannot be read
            PackValidationError: If validation fails
            PackVersionMismatch: If schema version incompatible
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise PackLoadError(
                message=f"Failed to load admission pack: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        pack = self.load_data(data, source=str(path))
        logger.info(
            "Loaded admission pack %s v%s (%d rules) from %s",
            pack.id, pack.version, len(pack.catalog), path,
        )
        return pack

    def load_data(self, data: Any, source: str = "<memory>") -> AdmissionPack:
        """Validate and convert already-parsed pack data."""
        if not isinstance(data, dict):
            raise PackValidationError(
                message="Admission pack must be a mapping at the top level",
                details={"path": source, "type": type(data).__name__},
            )

        if self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            raise PackVersionMismatch(
                message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        try:
            schema = validate_admission_pack(data)
        except ValidationError as e:
            raise PackValidationError(
                message=f"Admission pack validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": source},
            ) from e

        return _convert_admission_pack(schema, clock=self.clock)

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)


# =============================================================================
# Convenience Functions
# =============================================================================

def load_admission_pack(
    path: Union[str, Path, None] = None,
    clock: Optional[Clock] = None,
) -> AdmissionPack:
    """Load a pack from a file, or the bundled default pack when path is None."""
    loader = AdmissionPackLoader(clock=clock)
    return loader.load(path or DEFAULT_PACK_PATH)


def load_admission_pack_from_string(
    content: str,
    format: str = "yaml",
    clock: Optional[Clock] = None,
) -> AdmissionPack:
    """Load an admission pack from a YAML or JSON string."""
    try:
        data = json.loads(content) if format.lower() == "json" else yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise PackLoadError(
            message=f"Failed to parse admission pack: {e}",
            details={"format": format},
        ) from e
    return AdmissionPackLoader(clock=clock).load_data(data)


@lru_cache(maxsize=1)
def get_default_pack() -> AdmissionPack:
    """The bundled pack, loaded once per process."""
    return load_admission_pack(DEFAULT_PACK_PATH)
