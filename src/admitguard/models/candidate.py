"""
AdmitGuard Candidate Models

Two shapes of the same applicant:

- CandidateDraft: the in-progress record the intake form edits. Mutable,
  no identity yet.
- Candidate: the submitted record. Immutable, carries an opaque id, a
  submission timestamp and the final flagged bit.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional


# Tracked fields in form order. Each one is guarded by a rule of the same id.
CANDIDATE_FIELDS: tuple[str, ...] = (
    "full_name",
    "email",
    "phone",
    "dob",
    "qualification",
    "grad_year",
    "score",
    "test_score",
    "interview_status",
    "national_id",
    "offer_sent",
)


# =============================================================================
# Draft (in-progress record)
# =============================================================================

@dataclass
class CandidateDraft:
    """
    The record being filled in.

    Attributes:
        values: field id -> raw value as entered
        exceptions: field id -> rationale; presence of a key means an
            exception was requested, an empty string means not yet justified
        flagged: user-set manual review flag
        score_type: optional "Percentage" / "CGPA" tag for the score
    """
    values: dict[str, Any] = field(default_factory=dict)
    exceptions: dict[str, str] = field(default_factory=dict)
    flagged: bool = False
    score_type: Optional[str] = None

    def get(self, field_id: str) -> Any:
        return self.values.get(field_id)

    def set(self, field_id: str, value: Any) -> None:
        self.values[field_id] = value

    def snapshot(self, **overrides: Any) -> Mapping[str, Any]:
        """
        Read-only copy of the current values.

        Overrides are merged on top, which lets an edit be evaluated against
        the record as it will be once the edit lands.
        """
        merged = dict(self.values)
        merged.update(overrides)
        return MappingProxyType(merged)

    def is_blank(self, field_id: str) -> bool:
        """True when a field is absent, None or the empty string."""
        value = self.values.get(field_id)
        return value is None or value == ""

    @property
    def exception_count(self) -> int:
        return len(self.exceptions)

    def copy(self) -> CandidateDraft:
        return CandidateDraft(
            values=dict(self.values),
            exceptions=dict(self.exceptions),
            flagged=self.flagged,
            score_type=self.score_type,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "values": dict(self.values),
            "exceptions": dict(self.exceptions),
            "flagged": self.flagged,
            "score_type": self.score_type,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CandidateDraft:
        """Build a draft from {"values": ..., "exceptions": ..., "flagged": ...}."""
        return cls(
            values=dict(data.get("values") or {}),
            exceptions={k: str(v) for k, v in (data.get("exceptions") or {}).items()},
            flagged=bool(data.get("flagged", False)),
            score_type=data.get("score_type"),
        )


# =============================================================================
# Candidate (submitted record)
# =============================================================================

@dataclass(frozen=True)
class Candidate:
    """
    A submitted candidate as persisted in the audit log.

    Created only by the RecordAssembler; removed only by delete-by-id.
    """
    id: str
    full_name: str
    email: str
    phone: str
    dob: str
    qualification: str
    grad_year: Any
    score_type: str
    score: Any
    test_score: Any
    interview_status: str
    national_id: str
    offer_sent: str
    timestamp: datetime
    exceptions: Mapping[str, str] = field(default_factory=dict)
    flagged: bool = False

    @property
    def exception_count(self) -> int:
        return len(self.exceptions)

    @property
    def has_exceptions(self) -> bool:
        return bool(self.exceptions)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the API and JSON export."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "dob": self.dob,
            "qualification": self.qualification,
            "grad_year": self.grad_year,
            "score_type": self.score_type,
            "score": self.score,
            "test_score": self.test_score,
            "interview_status": self.interview_status,
            "national_id": self.national_id,
            "offer_sent": self.offer_sent,
            "timestamp": self.timestamp.isoformat(),
            "exceptions": dict(self.exceptions),
            "flagged": self.flagged,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Candidate:
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        return cls(
            id=data["id"],
            full_name=data["full_name"],
            email=data["email"],
            phone=data["phone"],
            dob=data["dob"],
            qualification=data["qualification"],
            grad_year=data["grad_year"],
            score_type=data["score_type"],
            score=data["score"],
            test_score=data["test_score"],
            interview_status=data["interview_status"],
            national_id=data["national_id"],
            offer_sent=data["offer_sent"],
            timestamp=timestamp,
            exceptions=dict(data.get("exceptions") or {}),
            flagged=bool(data.get("flagged", False)),
        )
