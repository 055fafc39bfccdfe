"""
AdmitGuard Submission Gate

Decides whether an in-progress record may be submitted:

1. Every catalog field has a value (not None, not "")
2. No STRICT rule fails - no override exists for these
3. Every failing SOFT rule has an open exception whose rationale is
   accepted, unless the record is flagged for manual review, which waives
   soft compliance entirely

Also computes the auto-flag decision applied when the record is assembled:
flagged by the user, or more open exceptions than the pack's threshold.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..models import CandidateDraft, EvaluationResult
from .field_evaluator import FieldEvaluator
from .rationale_validator import RationaleValidator


DEFAULT_AUTO_FLAG_THRESHOLD = 2


# =============================================================================
# Gate Result
# =============================================================================

@dataclass
class GateResult:
    """
    Breakdown of a submission decision.

    Contains:
    - Whether submission is allowed
    - Which fields are missing, strictly failing or softly failing
    - Which soft failures still lack an accepted justification
    - Whether the flag waiver was used and whether review will be required
    """
    can_submit: bool = False

    missing_fields: list[str] = field(default_factory=list)
    strict_failures: list[str] = field(default_factory=list)
    soft_failures: list[str] = field(default_factory=list)
    unjustified_soft_failures: list[str] = field(default_factory=list)

    flag_waiver_applied: bool = False
    exception_count: int = 0
    requires_review: bool = False

    messages: dict[str, str] = field(default_factory=dict)

    @property
    def blocking_reasons(self) -> list[str]:
        reasons: list[str] = []
        if self.missing_fields:
            reasons.append(f"Missing values: {', '.join(self.missing_fields)}")
        if self.strict_failures:
            reasons.append(f"Strict rule failures: {', '.join(self.strict_failures)}")
        if self.unjustified_soft_failures and not self.flag_waiver_applied:
            reasons.append(
                "Soft rule failures without an accepted exception: "
                + ", ".join(self.unjustified_soft_failures)
            )
        return reasons

    def to_dict(self) -> dict[str, Any]:
        return {
            "can_submit": self.can_submit,
            "missing_fields": list(self.missing_fields),
            "strict_failures": list(self.strict_failures),
            "soft_failures": list(self.soft_failures),
            "unjustified_soft_failures": list(self.unjustified_soft_failures),
            "flag_waiver_applied": self.flag_waiver_applied,
            "exception_count": self.exception_count,
            "requires_review": self.requires_review,
            "messages": dict(self.messages),
            "blocking_reasons": self.blocking_reasons,
        }


# =============================================================================
# Submission Gate
# =============================================================================

def _default_rationale_validator() -> RationaleValidator:
    from ..packs import get_default_pack
    return get_default_pack().rationale_validator


def _default_threshold() -> int:
    from ..packs import get_default_pack
    return get_default_pack().auto_flag_threshold


@dataclass
class SubmissionGate:
    """
    Aggregates rule results, the exception ledger and the rationale policy
    into a single submit/no-submit decision.

    Usage:
        gate = SubmissionGate()

        result = gate.check(draft)
        if not result.can_submit:
            print(result.blocking_reasons)
    """

    evaluator: FieldEvaluator = field(default_factory=FieldEvaluator)
    rationale_validator: RationaleValidator = field(default_factory=_default_rationale_validator)
    auto_flag_threshold: int = field(default_factory=_default_threshold)

    def check(
        self,
        record: CandidateDraft,
        results: Optional[Mapping[str, EvaluationResult]] = None,
    ) -> GateResult:
        """
        Evaluate submittability.

        Args:
            record: The in-progress record
            results: Current evaluation results; recomputed from the record
                when omitted

        Returns:
            GateResult with the decision and its reasons
        """
        if results is None:
            results = self.evaluator.evaluate_all(record)

        gate = GateResult(exception_count=record.exception_count)
        catalog = self.evaluator.catalog

        gate.missing_fields = [f for f in catalog.field_ids() if record.is_blank(f)]

        for field_id, result in results.items():
            if result.valid:
                continue
            gate.messages[field_id] = result.message or ""
            if result.is_strict_failure:
                gate.strict_failures.append(field_id)
            elif result.is_soft_failure:
                gate.soft_failures.append(field_id)
                if not self._is_justified(record, field_id):
                    gate.unjustified_soft_failures.append(field_id)

        soft_compliant = not gate.unjustified_soft_failures
        gate.flag_waiver_applied = record.flagged and not soft_compliant
        gate.can_submit = (
            not gate.missing_fields
            and not gate.strict_failures
            and (record.flagged or soft_compliant)
        )
        gate.requires_review = self.should_flag(record)
        return gate

    def can_submit(
        self,
        record: CandidateDraft,
        results: Optional[Mapping[str, EvaluationResult]] = None,
    ) -> bool:
        """Check if the record may be submitted."""
        return self.check(record, results).can_submit

    def should_flag(self, record: CandidateDraft) -> bool:
        """Flag when the user asked for review or exceptions exceed the threshold."""
        return record.flagged or record.exception_count > self.auto_flag_threshold

    def _is_justified(self, record: CandidateDraft, field_id: str) -> bool:
        if field_id not in record.exceptions:
            return False
        return self.rationale_validator.is_acceptable(record.exceptions[field_id])


# =============================================================================
# Convenience Functions
# =============================================================================

def can_submit(
    record: CandidateDraft,
    results: Optional[Mapping[str, EvaluationResult]] = None,
) -> bool:
    """Check submittability with the default pack."""
    return SubmissionGate().can_submit(record, results)
