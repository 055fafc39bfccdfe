"""
Tests for the AdmitGuard field evaluator

Tests cover:
- Single-field evaluation and failure messages
- Cross-field rules see the edited value merged into the record
- Snapshot isolation (predicates can't mutate the draft)
- evaluate_all ordering and determinism
- apply_edit withdrawing exceptions on correction
"""
import pytest
from dataclasses import dataclass
from typing import Any, Mapping

from admitguard.engine import FieldEvaluator, RuleCatalog
from admitguard.exceptions import MissingRuleError
from admitguard.models import (
    CANDIDATE_FIELDS,
    CandidateDraft,
    GENERIC_FAILURE_MESSAGE,
    Rule,
    RuleOutcome,
    RuleSeverity,
)

from tests.conftest import GOOD_RATIONALE, make_draft


@dataclass(frozen=True)
class SilentValidator:
    """Fails without a message."""

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        return RuleOutcome.fail()

    def describe(self) -> dict[str, Any]:
        return {"kind": "silent"}


@dataclass(frozen=True)
class MutatingValidator:
    """Tries to write into the record it is given."""

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        record["hacked"] = True
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {"kind": "mutating"}


# =============================================================================
# Scenario Tests
# =============================================================================

class TestScenarios:
    """End-to-end field scenarios from the admission rules."""

    def test_lowercase_single_name(self, evaluator):
        """'john' fails STRICT on the two-word requirement."""
        result = evaluator.evaluate("full_name", "john", make_draft())
        assert not result.valid
        assert result.severity == RuleSeverity.STRICT
        assert result.message == "Please enter both First and Last name."

    def test_score_percentage_and_cgpa(self, evaluator):
        """65 reads as a passing percentage; 5.5 as a failing CGPA."""
        draft = make_draft()
        assert evaluator.evaluate("score", 65, draft).valid

        result = evaluator.evaluate("score", 5.5, draft)
        assert not result.valid
        assert result.severity == RuleSeverity.SOFT
        assert result.message == "CGPA must be ≥ 6.0."

    def test_offer_with_waitlisted(self, evaluator):
        """Offer to a waitlisted candidate passes."""
        draft = make_draft(interview_status="Waitlisted")
        assert evaluator.evaluate("offer_sent", "Yes", draft).valid

    def test_offer_without_status(self, evaluator):
        """Offer with an empty interview status fails the cross-field rule."""
        draft = make_draft(interview_status="")
        result = evaluator.evaluate("offer_sent", "Yes", draft)
        assert not result.valid
        assert result.message == "Cannot send offer unless status is Cleared/Waitlisted."

    def test_underage_dob(self, evaluator):
        """Age 17 on the fixed clock is a SOFT failure."""
        result = evaluator.evaluate("dob", "2008-01-15", make_draft())
        assert result.is_soft_failure
        assert result.message == "Age is 17, must be 18-35."


# =============================================================================
# Evaluation Tests
# =============================================================================

class TestEvaluate:
    """Tests for FieldEvaluator.evaluate."""

    def test_valid_has_no_message(self, evaluator):
        """Passing results carry no message."""
        result = evaluator.evaluate("email", "asha.rao@example.com", make_draft())
        assert result.valid
        assert result.message is None

    def test_unknown_field(self, evaluator):
        """Unknown field ids raise MissingRuleError."""
        with pytest.raises(MissingRuleError):
            evaluator.evaluate("nickname", "Ash", make_draft())

    def test_plain_mapping_record(self, evaluator):
        """A dict of values works as the record."""
        result = evaluator.evaluate("offer_sent", "Yes", {"interview_status": "Cleared"})
        assert result.valid

    def test_value_merged_before_cross_field_check(self, evaluator):
        """The value under evaluation replaces the draft's stale one."""
        draft = make_draft(interview_status="Rejected", offer_sent="No")
        result = evaluator.evaluate("offer_sent", "Yes", draft)
        assert not result.valid

    def test_generic_message_fallback(self):
        """A failure without a message gets the generic one."""
        catalog = RuleCatalog([
            Rule("x", "X", RuleSeverity.SOFT, "always fails", SilentValidator())
        ])
        result = FieldEvaluator(catalog).evaluate("x", 1, {})
        assert result.message == GENERIC_FAILURE_MESSAGE

    def test_predicates_get_read_only_snapshot(self):
        """Predicates can't write into the record."""
        catalog = RuleCatalog([
            Rule("x", "X", RuleSeverity.STRICT, "mutates", MutatingValidator())
        ])
        draft = CandidateDraft(values={"x": 1})
        with pytest.raises(TypeError):
            FieldEvaluator(catalog).evaluate("x", 1, draft)
        assert "hacked" not in draft.values

    def test_draft_not_changed_by_evaluate(self, evaluator):
        """evaluate() never stores the value."""
        draft = make_draft()
        evaluator.evaluate("full_name", "john", draft)
        assert draft.get("full_name") == "Asha Rao"


class TestEvaluateAll:
    """Tests for FieldEvaluator.evaluate_all."""

    def test_all_pass_for_valid_draft(self, evaluator):
        """The baseline draft passes every rule."""
        results = evaluator.evaluate_all(make_draft())
        assert list(results) == list(CANDIDATE_FIELDS)
        assert all(r.valid for r in results.values())

    def test_empty_draft(self, evaluator):
        """A blank draft fails everything except the offer rule."""
        results = evaluator.evaluate_all(CandidateDraft())
        failing = [f for f, r in results.items() if not r.valid]
        assert "offer_sent" not in failing
        assert len(failing) == 10

    def test_deterministic(self, evaluator):
        """Same record, same results."""
        draft = make_draft(dob="2009-01-01", score=5.0, phone="123")
        assert evaluator.evaluate_all(draft) == evaluator.evaluate_all(draft)

    def test_failures_only(self, evaluator):
        """failures() lists failing results in catalog order."""
        draft = make_draft(phone="123", grad_year=2010)
        assert [r.field_id for r in evaluator.failures(draft)] == ["phone", "grad_year"]


class TestApplyEdit:
    """Tests for FieldEvaluator.apply_edit."""

    def test_stores_value(self, evaluator):
        """The edited value lands on the draft."""
        draft = make_draft()
        evaluator.apply_edit(draft, "phone", "123")
        assert draft.get("phone") == "123"

    def test_correction_withdraws_exception(self, evaluator):
        """A passing value removes the exception, whatever its rationale."""
        draft = make_draft(grad_year=2012, exceptions={"grad_year": GOOD_RATIONALE})
        result = evaluator.apply_edit(draft, "grad_year", 2020)
        assert result.valid
        assert "grad_year" not in draft.exceptions

    def test_still_failing_keeps_exception(self, evaluator):
        """A still-failing value leaves the exception in place."""
        draft = make_draft(grad_year=2012, exceptions={"grad_year": GOOD_RATIONALE})
        evaluator.apply_edit(draft, "grad_year", 2013)
        assert draft.exceptions == {"grad_year": GOOD_RATIONALE}

    def test_other_exceptions_untouched(self, evaluator):
        """Only the edited field's exception is withdrawn."""
        draft = make_draft(
            dob="2009-01-01",
            grad_year=2012,
            exceptions={"dob": "", "grad_year": ""},
        )
        evaluator.apply_edit(draft, "grad_year", 2020)
        assert draft.exceptions == {"dob": ""}
