"""
AdmitGuard Record Assembler

Turns a submittable draft into a Candidate and hands it to the store.

Steps, in order:
1. Re-run the submission gate (refuse if blocked)
2. Reject a duplicate email (checked against the store, not the rules)
3. Stamp a fresh opaque id and the current UTC timestamp
4. Fix the flagged bit once: user flag OR too many exceptions
5. Persist via the store's create operation

The draft is never mutated. A failed submission can be retried by calling
submit again: the id, timestamp and duplicate check are all redone.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from ..exceptions import AdmitGuardError, DuplicateEmailError, PersistenceError, SubmissionBlockedError
from ..models import Candidate, CandidateDraft, ScoreType
from ..store.base import CandidateStore
from .submission_gate import SubmissionGate
from .validators import to_int, to_number

logger = logging.getLogger(__name__)


def new_candidate_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_int(value: Any) -> Any:
    number = to_int(value)
    return value if number is None else number


def _as_number(value: Any) -> Any:
    number = to_number(value)
    if number is None:
        return value
    return int(number) if number.is_integer() and not isinstance(value, float) else number


def infer_score_type(score: Any, cgpa_ceiling: float = 10.0) -> str:
    """Scores above the CGPA ceiling are percentages."""
    number = to_number(score)
    if number is not None and number > cgpa_ceiling:
        return ScoreType.PERCENTAGE.value
    return ScoreType.CGPA.value


@dataclass
class RecordAssembler:
    """
    Assembles and persists submitted candidates.

    Usage:
        assembler = RecordAssembler(store=SqliteCandidateStore("admitguard.db"))
        candidate = assembler.submit(draft)
    """

    store: CandidateStore
    gate: SubmissionGate = field(default_factory=SubmissionGate)
    clock: Callable[[], datetime] = field(default=_utcnow)
    id_factory: Callable[[], str] = field(default=new_candidate_id)

    def assemble(self, draft: CandidateDraft) -> Candidate:
        """
        Build the Candidate for a draft without persisting it.

        Raises:
            SubmissionBlockedError: The gate refuses the draft
        """
        gate_result = self.gate.check(draft)
        if not gate_result.can_submit:
            raise SubmissionBlockedError(
                message="Record cannot be submitted: " + "; ".join(gate_result.blocking_reasons),
                details=gate_result.to_dict(),
            )

        values = draft.values
        score_type = draft.score_type or infer_score_type(values.get("score"))
        return Candidate(
            id=self.id_factory(),
            full_name=str(values["full_name"]).strip(),
            email=values["email"],
            phone=str(values["phone"]),
            dob=str(values["dob"]),
            qualification=values["qualification"],
            grad_year=_as_int(values["grad_year"]),
            score_type=score_type,
            score=_as_number(values["score"]),
            test_score=_as_int(values["test_score"]),
            interview_status=values["interview_status"],
            national_id=str(values["national_id"]),
            offer_sent=values["offer_sent"],
            timestamp=self.clock(),
            exceptions=dict(draft.exceptions),
            flagged=self.gate.should_flag(draft),
        )

    def submit(self, draft: CandidateDraft) -> Candidate:
        """
        Assemble a draft and persist it.

        Raises:
            SubmissionBlockedError: The gate refuses the draft
            DuplicateEmailError: A persisted candidate has the same email
            PersistenceError: The store failed
        """
        candidate = self.assemble(draft)

        existing = self._call_store("look up email", self.store.find_by_email, candidate.email)
        if existing is not None:
            logger.info("Rejected submission: duplicate email (existing %s)", existing.id)
            raise DuplicateEmailError(
                message="Email already exists in records.",
                details={"field": "email", "email": candidate.email},
                candidate_id=existing.id,
            )

        self._call_store("save candidate", self.store.create, candidate)
        logger.info(
            "Submitted candidate %s (exceptions=%d, flagged=%s)",
            candidate.id, candidate.exception_count, candidate.flagged,
            extra={"candidate_id": candidate.id},
        )
        return candidate

    def _call_store(self, operation: str, func: Callable, *args: Any) -> Any:
        try:
            return func(*args)
        except AdmitGuardError:
            raise
        except Exception as e:
            raise PersistenceError(
                message=f"Failed to {operation}: {e}",
                details={"operation": operation},
            ) from e


def assemble_and_submit(draft: CandidateDraft, store: CandidateStore) -> Candidate:
    """Submit a draft to a store using the default pack."""
    return RecordAssembler(store=store).submit(draft)
