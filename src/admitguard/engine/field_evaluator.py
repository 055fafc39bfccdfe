"""
AdmitGuard Field Evaluator

Runs rules against candidate values.

Key features:
- Predicates always see a read-only snapshot of the record, with the value
  under evaluation merged in, so cross-field rules never read stale input
- Stable evaluation order (catalog order) for determinism
- A correction that makes a field pass withdraws its exception request
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from ..models import (
    GENERIC_FAILURE_MESSAGE,
    CandidateDraft,
    EvaluationResult,
)
from .rule_catalog import RuleCatalog

logger = logging.getLogger(__name__)

RecordLike = Union[CandidateDraft, Mapping[str, Any]]


def _default_catalog() -> RuleCatalog:
    from ..packs import get_default_pack
    return get_default_pack().catalog


def _snapshot(record: RecordLike, **overrides: Any) -> Mapping[str, Any]:
    """Read-only view of a draft or plain mapping."""
    if isinstance(record, CandidateDraft):
        return record.snapshot(**overrides)
    return CandidateDraft(values=dict(record or {})).snapshot(**overrides)


# =============================================================================
# Field Evaluator
# =============================================================================

@dataclass
class FieldEvaluator:
    """
    Evaluates candidate fields against a rule catalog.

    Usage:
        evaluator = FieldEvaluator()

        result = evaluator.evaluate("phone", "9876543210", draft)
        if not result.valid:
            print(result.message)

        results = evaluator.evaluate_all(draft)
    """

    catalog: RuleCatalog = field(default_factory=_default_catalog)

    def evaluate(
        self,
        field_id: str,
        value: Any,
        record: RecordLike,
    ) -> EvaluationResult:
        """
        Evaluate one field value.

        Args:
            field_id: Field to evaluate
            value: Candidate value for that field
            record: The in-progress record (draft or mapping of values)

        Returns:
            EvaluationResult for the field

        Raises:
            MissingRuleError: If no rule guards field_id
        """
        rule = self.catalog.get(field_id)
        outcome = rule.check(value, _snapshot(record, **{field_id: value}))
        message = None
        if not outcome.valid:
            message = outcome.message or GENERIC_FAILURE_MESSAGE
        return EvaluationResult(
            field_id=field_id,
            valid=outcome.valid,
            severity=rule.severity,
            message=message,
        )

    def evaluate_all(self, record: RecordLike) -> dict[str, EvaluationResult]:
        """
        Evaluate every rule against one snapshot of the record.

        Returns:
            field id -> EvaluationResult, in catalog order
        """
        snapshot = _snapshot(record)
        results: dict[str, EvaluationResult] = {}
        for rule in self.catalog:
            results[rule.field_id] = self.evaluate(
                rule.field_id, snapshot.get(rule.field_id), snapshot
            )
        return results

    def apply_edit(
        self,
        draft: CandidateDraft,
        field_id: str,
        value: Any,
    ) -> EvaluationResult:
        """
        Store an edited value on the draft and evaluate it.

        If the field now passes, any exception requested for it is removed:
        a correction supersedes an override request, whatever its rationale.
        """
        result = self.evaluate(field_id, value, draft)
        draft.set(field_id, value)
        if result.valid and field_id in draft.exceptions:
            del draft.exceptions[field_id]
            logger.debug("Field %s now passes; exception withdrawn", field_id)
        return result

    def failures(self, record: RecordLike) -> list[EvaluationResult]:
        """Only the failing results, in catalog order."""
        return [r for r in self.evaluate_all(record).values() if not r.valid]


# =============================================================================
# Convenience Functions
# =============================================================================

def evaluate_field(field_id: str, value: Any, record: RecordLike) -> EvaluationResult:
    """Evaluate one field with the default catalog."""
    return FieldEvaluator().evaluate(field_id, value, record)
