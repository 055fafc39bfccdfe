"""
AdmitGuard Models

Domain models for admission intake: rules, evaluation results, drafts and
submitted candidates.

Usage:
    from admitguard.models import CandidateDraft, RuleSeverity, EvaluationResult
"""
from __future__ import annotations

from .candidate import CANDIDATE_FIELDS, Candidate, CandidateDraft
from .enums import (
    RuleSeverity,
    ScoreType,
    ValidatorKind,
)
from .rules import (
    GENERIC_FAILURE_MESSAGE,
    EvaluationResult,
    FieldValidator,
    Rule,
    RuleOutcome,
)

__all__ = [
    # Enums
    "RuleSeverity",
    "ValidatorKind",
    "ScoreType",
    # Rules
    "GENERIC_FAILURE_MESSAGE",
    "FieldValidator",
    "Rule",
    "RuleOutcome",
    "EvaluationResult",
    # Candidates
    "CANDIDATE_FIELDS",
    "CandidateDraft",
    "Candidate",
]
