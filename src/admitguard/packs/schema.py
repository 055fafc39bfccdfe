"""
AdmitGuard Admission Pack Schemas

Pydantic models for validating admission pack YAML/JSON files.

An admission pack declares the rule catalog (one rule per candidate field),
the rationale policy for exceptions and the auto-flag threshold. Validator
parameters are checked when the pack is converted to domain objects, since
each validator kind takes different parameters.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders should check version compatibility
"""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

SeverityValue = Literal["STRICT", "SOFT"]

ValidatorKindValue = Literal[
    "person_name", "pattern", "age_range", "choice",
    "integer_range", "academic_score", "status", "requires_status",
]


# =============================================================================
# Rule Schemas
# =============================================================================

class RuleSchema(BaseModel):
    """Schema for one admission rule."""
    field: str = Field(..., min_length=1, description="Candidate field id (e.g., 'email')")
    label: str = Field(..., description="Human label")
    severity: SeverityValue = Field(..., description="STRICT or SOFT")
    description: str = Field("", description="Plain-language requirement")
    kind: ValidatorKindValue = Field(..., description="Validator family")
    params: dict[str, Any] = Field(default_factory=dict, description="Validator parameters")

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v: Any) -> Any:
        """Accept 'strict' / 'soft' in any case."""
        return v.upper() if isinstance(v, str) else v

    model_config = {
        "extra": "forbid",
    }


class RationalePolicySchema(BaseModel):
    """Schema for the exception rationale policy."""
    min_length: int = Field(30, ge=1, description="Minimum rationale length in characters")
    keywords: list[str] = Field(..., min_length=1, description="Accepted keyword phrases")

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: list[str]) -> list[str]:
        cleaned = [k.strip() for k in v]
        if any(not k for k in cleaned):
            raise ValueError("Rationale keywords must be non-empty")
        return cleaned

    model_config = {
        "extra": "forbid",
    }


# =============================================================================
# Admission Pack Schema
# =============================================================================

class AdmissionPackSchema(BaseModel):
    """Complete admission pack."""
    schema_version: str = Field(SCHEMA_VERSION, description="Pack schema version")
    id: str = Field(..., description="Pack identifier")
    name: str = Field(..., description="Pack display name")
    version: str = Field(..., description="Pack content version")
    description: Optional[str] = Field(None, description="What this pack covers")

    rules: list[RuleSchema] = Field(..., min_length=1, description="Rules in form order")
    rationale: RationalePolicySchema = Field(..., description="Exception rationale policy")
    auto_flag_threshold: int = Field(
        2, ge=0,
        description="Records with more open exceptions than this are auto-flagged",
    )

    @model_validator(mode="after")
    def validate_unique_fields(self) -> "AdmissionPackSchema":
        seen: set[str] = set()
        duplicates: list[str] = []
        for rule in self.rules:
            if rule.field in seen:
                duplicates.append(rule.field)
            seen.add(rule.field)
        if duplicates:
            raise ValueError(f"Duplicate rule fields: {sorted(set(duplicates))}")
        return self

    model_config = {
        "extra": "forbid",
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_admission_pack(data: dict[str, Any]) -> AdmissionPackSchema:
    """
    Validate an admission pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return AdmissionPackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """True when the pack's schema major version matches ours."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    return pack_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
