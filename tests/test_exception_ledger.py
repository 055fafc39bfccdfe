"""
Tests for the AdmitGuard exception ledger

Tests cover:
- Presence-based toggle and its idempotence
- Rationale edits, including before the toggle
- Module-level convenience functions
"""
from admitguard.engine import ExceptionLedger, request_exception, set_rationale

from tests.conftest import GOOD_RATIONALE, make_draft


class TestRequestException:
    """Tests for toggling exception requests."""

    def test_opens_with_empty_rationale(self):
        """First toggle opens an unjustified entry."""
        draft = make_draft()
        assert ExceptionLedger(draft).request_exception("dob") is True
        assert draft.exceptions == {"dob": ""}

    def test_second_toggle_removes(self):
        """Second toggle closes the entry."""
        draft = make_draft()
        ledger = ExceptionLedger(draft)
        ledger.request_exception("dob")
        assert ledger.request_exception("dob") is False
        assert draft.exceptions == {}

    def test_toggle_twice_restores_ledger(self):
        """Toggling twice returns the original map, rationales included."""
        original = {"score": GOOD_RATIONALE}
        draft = make_draft(exceptions=original)
        ledger = ExceptionLedger(draft)
        ledger.request_exception("dob")
        ledger.request_exception("dob")
        assert draft.exceptions == original

    def test_toggle_closes_justified_entry(self):
        """Presence, not rationale content, decides the toggle direction."""
        draft = make_draft(exceptions={"dob": GOOD_RATIONALE})
        assert ExceptionLedger(draft).request_exception("dob") is False
        assert "dob" not in draft.exceptions


class TestSetRationale:
    """Tests for rationale edits."""

    def test_overwrites(self):
        """Later edits replace earlier text."""
        draft = make_draft(exceptions={"dob": "first"})
        ExceptionLedger(draft).set_rationale("dob", GOOD_RATIONALE)
        assert draft.exceptions["dob"] == GOOD_RATIONALE

    def test_rationale_before_toggle_opens_entry(self):
        """A rationale typed first opens the exception."""
        draft = make_draft()
        ledger = ExceptionLedger(draft)
        ledger.set_rationale("grad_year", GOOD_RATIONALE)
        assert ledger.is_open("grad_year")
        assert ledger.rationale("grad_year") == GOOD_RATIONALE


class TestLedgerQueries:
    """Tests for clear/open_fields/count."""

    def test_open_fields_and_count(self):
        """Open fields are listed in request order."""
        draft = make_draft()
        ledger = ExceptionLedger(draft)
        ledger.request_exception("score")
        ledger.request_exception("dob")
        assert ledger.open_fields() == ["score", "dob"]
        assert ledger.count() == 2 == draft.exception_count

    def test_clear_is_safe_when_absent(self):
        """Clearing an unknown field does nothing."""
        draft = make_draft(exceptions={"dob": ""})
        ledger = ExceptionLedger(draft)
        ledger.clear("score")
        ledger.clear("dob")
        assert draft.exceptions == {}

    def test_rationale_missing(self):
        """No entry, no rationale."""
        assert ExceptionLedger(make_draft()).rationale("dob") is None


class TestConvenienceFunctions:
    """Tests for the module-level helpers."""

    def test_request_exception(self):
        """request_exception toggles on the given draft."""
        draft = make_draft()
        assert request_exception("test_score", draft) is True
        assert request_exception("test_score", draft) is False

    def test_set_rationale(self):
        """set_rationale writes through to the draft."""
        draft = make_draft()
        set_rationale("test_score", GOOD_RATIONALE, draft)
        assert draft.exceptions == {"test_score": GOOD_RATIONALE}
