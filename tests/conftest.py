"""
Pytest configuration and fixtures for AdmitGuard tests.

Provides helper factories and common fixtures. Every test that touches the
date-of-birth rule runs against a fixed "today" so ages never drift.
"""
import pytest
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from admitguard.engine import FieldEvaluator, RecordAssembler, SubmissionGate
from admitguard.models import Candidate, CandidateDraft
from admitguard.packs import AdmissionPack, load_admission_pack
from admitguard.store import InMemoryCandidateStore


# =============================================================================
# Constants
# =============================================================================

FIXED_TODAY = date(2025, 6, 1)
FIXED_NOW = datetime(2025, 6, 1, 9, 30, tzinfo=timezone.utc)

GOOD_RATIONALE = "Approved by admissions head after panel review"
SHORT_RATIONALE = "Approved by dean"
NO_KEYWORD_RATIONALE = "The candidate showed excellent potential overall"


def fixed_clock() -> date:
    return FIXED_TODAY


# =============================================================================
# Factory Helpers
# =============================================================================

def valid_values(**overrides: Any) -> dict[str, Any]:
    """A complete set of field values that passes every rule."""
    values = {
        "full_name": "Asha Rao",
        "email": "asha.rao@example.com",
        "phone": "9876543210",
        "dob": "2001-04-12",
        "qualification": "B.Tech",
        "grad_year": 2023,
        "score": 78.5,
        "test_score": 65,
        "interview_status": "Cleared",
        "national_id": "123456789012",
        "offer_sent": "No",
    }
    values.update(overrides)
    return values


def make_draft(
    exceptions: Optional[dict[str, str]] = None,
    flagged: bool = False,
    score_type: Optional[str] = None,
    **overrides: Any,
) -> CandidateDraft:
    """Create a draft that passes every rule, with field overrides."""
    return CandidateDraft(
        values=valid_values(**overrides),
        exceptions=dict(exceptions or {}),
        flagged=flagged,
        score_type=score_type,
    )


def make_candidate(
    id: str = "cand-001",
    email: str = "asha.rao@example.com",
    timestamp: Optional[datetime] = None,
    exceptions: Optional[dict[str, str]] = None,
    flagged: bool = False,
    **overrides: Any,
) -> Candidate:
    """Create a persisted Candidate with required fields."""
    data = {
        "id": id,
        "full_name": "Asha Rao",
        "email": email,
        "phone": "9876543210",
        "dob": "2001-04-12",
        "qualification": "B.Tech",
        "grad_year": 2023,
        "score_type": "Percentage",
        "score": 78.5,
        "test_score": 65,
        "interview_status": "Cleared",
        "national_id": "123456789012",
        "offer_sent": "No",
        "timestamp": timestamp or FIXED_NOW,
        "exceptions": dict(exceptions or {}),
        "flagged": flagged,
    }
    data.update(overrides)
    return Candidate(**data)


def make_candidates(count: int, start: datetime = FIXED_NOW) -> list[Candidate]:
    """Candidates one minute apart, oldest first."""
    return [
        make_candidate(
            id=f"cand-{i:03d}",
            email=f"candidate{i}@example.com",
            timestamp=start + timedelta(minutes=i),
        )
        for i in range(count)
    ]


class SequentialIds:
    """Deterministic id factory for the assembler."""

    def __init__(self, prefix: str = "cand"):
        self.prefix = prefix
        self.issued = 0

    def __call__(self) -> str:
        self.issued += 1
        return f"{self.prefix}-{self.issued:03d}"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def pack() -> AdmissionPack:
    """The bundled admission pack with a fixed clock."""
    return load_admission_pack(clock=fixed_clock)


@pytest.fixture
def catalog(pack):
    return pack.catalog


@pytest.fixture
def evaluator(pack) -> FieldEvaluator:
    """Field evaluator over the fixed-clock catalog."""
    return FieldEvaluator(pack.catalog)


@pytest.fixture
def gate(pack, evaluator) -> SubmissionGate:
    """Submission gate over the fixed-clock catalog."""
    return SubmissionGate(
        evaluator=evaluator,
        rationale_validator=pack.rationale_validator,
        auto_flag_threshold=pack.auto_flag_threshold,
    )


@pytest.fixture
def memory_store() -> InMemoryCandidateStore:
    return InMemoryCandidateStore()


@pytest.fixture
def assembler(gate, memory_store) -> RecordAssembler:
    """Assembler with deterministic ids and timestamps."""
    return RecordAssembler(
        store=memory_store,
        gate=gate,
        clock=lambda: FIXED_NOW,
        id_factory=SequentialIds(),
    )
