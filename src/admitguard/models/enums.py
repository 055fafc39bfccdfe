"""
AdmitGuard Enumerations

All enumeration types used throughout the AdmitGuard system.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Rule Severity
# =============================================================================

class RuleSeverity(str, Enum):
    """
    How a failing rule affects submission.

    STRICT failures block unconditionally. SOFT failures can be overridden
    by an exception carrying an accepted rationale, or waived entirely when
    the record is flagged for manual review.
    """
    STRICT = "STRICT"
    SOFT = "SOFT"


# =============================================================================
# Validator Kinds
# =============================================================================

class ValidatorKind(str, Enum):
    """Predicate families an admission pack can assign to a rule."""
    PERSON_NAME = "person_name"
    PATTERN = "pattern"
    AGE_RANGE = "age_range"
    CHOICE = "choice"
    INTEGER_RANGE = "integer_range"
    ACADEMIC_SCORE = "academic_score"
    STATUS = "status"
    REQUIRES_STATUS = "requires_status"


# =============================================================================
# Academic Score
# =============================================================================

class ScoreType(str, Enum):
    """How the academic score is expressed."""
    PERCENTAGE = "Percentage"
    CGPA = "CGPA"


