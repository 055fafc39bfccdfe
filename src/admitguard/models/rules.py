"""
AdmitGuard Rule Models

A Rule binds one candidate field to a severity and a validator. Validators
are small objects sharing the FieldValidator interface; each receives the
field's value and a read-only snapshot of the whole in-progress record, so
cross-field rules never observe a half-edited draft.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from .enums import RuleSeverity


GENERIC_FAILURE_MESSAGE = "Invalid value"


# =============================================================================
# Rule Outcome
# =============================================================================

@dataclass(frozen=True)
class RuleOutcome:
    """Raw answer from a validator: pass/fail plus an optional message."""
    valid: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> RuleOutcome:
        return cls(valid=True)

    @classmethod
    def fail(cls, message: Optional[str] = None) -> RuleOutcome:
        return cls(valid=False, message=message)


class FieldValidator(Protocol):
    """Capability shared by every rule predicate."""

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        ...

    def describe(self) -> dict[str, Any]:
        ...


# =============================================================================
# Rule
# =============================================================================

@dataclass(frozen=True)
class Rule:
    """
    A single admission rule.

    Attributes:
        field_id: Candidate field the rule guards (unique within a catalog)
        label: Human label shown next to the field
        severity: STRICT blocks submission; SOFT can be overridden
        description: Plain-language statement of the requirement
        validator: Predicate object implementing FieldValidator
    """
    field_id: str
    label: str
    severity: RuleSeverity
    description: str
    validator: FieldValidator

    @property
    def is_strict(self) -> bool:
        return self.severity == RuleSeverity.STRICT

    @property
    def is_soft(self) -> bool:
        return self.severity == RuleSeverity.SOFT

    def check(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        """Run the validator."""
        return self.validator.validate(value, record)

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field_id,
            "label": self.label,
            "severity": self.severity.value,
            "description": self.description,
            "validator": self.validator.describe(),
        }


# =============================================================================
# Evaluation Result
# =============================================================================

@dataclass(frozen=True)
class EvaluationResult:
    """
    Result of evaluating one field.

    Transient: recomputed from scratch on every change, never stored.
    """
    field_id: str
    valid: bool
    severity: RuleSeverity
    message: Optional[str] = None

    @property
    def is_strict_failure(self) -> bool:
        return not self.valid and self.severity == RuleSeverity.STRICT

    @property
    def is_soft_failure(self) -> bool:
        return not self.valid and self.severity == RuleSeverity.SOFT

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field_id,
            "valid": self.valid,
            "severity": self.severity.value,
            "message": self.message,
        }
