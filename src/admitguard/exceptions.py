"""
AdmitGuard Exception Hierarchy

Domain-specific exceptions for candidate admission intake.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: AG_<CATEGORY>_<SPECIFIC>

Rule failures on user input are NOT exceptions: they surface as invalid
EvaluationResult values and are recovered by editing the field or
supplying a rationale.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class AdmitGuardError(Exception):
    """
    Base exception for all AdmitGuard errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (AG_*)
        details: Additional context about the error
        candidate_id: Associated candidate ID if applicable

    When ``details`` names a ``field``, the form field the error is about is
    reported alongside the code so a UI can point at it.
    """
    message: str
    code: str = "AG_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    candidate_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    @property
    def fields(self) -> list[str]:
        """Form fields this error concerns."""
        name = self.details.get("field")
        return [name] if name else []

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.fields:
            parts.append(f"(fields: {', '.join(self.fields)})")
        if self.candidate_id:
            parts.append(f"(candidate: {self.candidate_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging and the API error body."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.fields:
            result["fields"] = self.fields
        if self.details:
            result["details"] = self.details
        if self.candidate_id:
            result["candidate_id"] = self.candidate_id
        return result


# =============================================================================
# Admission Pack Errors
# =============================================================================

@dataclass
class PackLoadError(AdmitGuardError):
    """Failed to load admission pack from file."""
    code: str = "AG_PACK_LOAD_ERROR"


@dataclass
class PackValidationError(AdmitGuardError):
    """Admission pack schema validation failed."""
    code: str = "AG_PACK_VALIDATION_ERROR"


@dataclass
class PackVersionMismatch(AdmitGuardError):
    """Admission pack schema version doesn't match expected version."""
    code: str = "AG_PACK_VERSION_MISMATCH"


# =============================================================================
# Rule Evaluation Errors
# =============================================================================

@dataclass
class MissingRuleError(AdmitGuardError):
    """Evaluation requested for a field with no rule in the catalog."""
    code: str = "AG_MISSING_RULE"


# =============================================================================
# Submission Errors
# =============================================================================

@dataclass
class SubmissionBlockedError(AdmitGuardError):
    """
    Submission gate refused the record.

    ``details`` carries the gate breakdown. ``fields`` lists every field
    holding the submission back: missing values, then strict failures,
    then soft failures with no accepted exception (none when the record
    is flagged for review).
    """
    code: str = "AG_SUBMISSION_BLOCKED"

    @property
    def fields(self) -> list[str]:
        blocking = list(self.details.get("missing_fields", []))
        blocking += self.details.get("strict_failures", [])
        if not self.details.get("flag_waiver_applied"):
            blocking += self.details.get("unjustified_soft_failures", [])
        return list(dict.fromkeys(blocking))


@dataclass
class DuplicateEmailError(AdmitGuardError):
    """A persisted candidate already uses this email."""
    code: str = "AG_DUPLICATE_EMAIL"


# =============================================================================
# Persistence Errors
# =============================================================================

@dataclass
class PersistenceError(AdmitGuardError):
    """The candidate store failed to create, list or delete."""
    code: str = "AG_PERSISTENCE_ERROR"


@dataclass
class CandidateNotFoundError(AdmitGuardError):
    """No persisted candidate has the requested id."""
    code: str = "AG_CANDIDATE_NOT_FOUND"
