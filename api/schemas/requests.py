"""Request schemas for the API."""

from pydantic import BaseModel, Field
from typing import Any, Literal, Optional

from admitguard.models import CandidateDraft


class DraftInput(BaseModel):
    """The in-progress record as held by the form."""
    values: dict[str, Any] = Field(default_factory=dict, description="Field id -> value as entered")
    exceptions: dict[str, str] = Field(
        default_factory=dict,
        description="Field id -> rationale; an empty rationale means requested but not justified",
    )
    flagged: bool = Field(default=False, description="Manual review flag")
    score_type: Optional[Literal["Percentage", "CGPA"]] = Field(
        default=None, description="Inferred from the score when omitted"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "values": {
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
                    },
                    "exceptions": {},
                    "flagged": False,
                }
            ]
        }
    }

    def to_draft(self) -> CandidateDraft:
        return CandidateDraft(
            values=dict(self.values),
            exceptions=dict(self.exceptions),
            flagged=self.flagged,
            score_type=self.score_type,
        )


class EvaluateRequest(BaseModel):
    """Evaluate one field edit against the current draft."""
    field: str = Field(..., description="Field id, e.g., 'dob'")
    value: Any = Field(default=None, description="The new value for the field")
    draft: DraftInput = Field(default_factory=DraftInput)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "field": "offer_sent",
                    "value": "Yes",
                    "draft": {"values": {"interview_status": "Rejected"}},
                }
            ]
        }
    }


class RationaleCheckRequest(BaseModel):
    """Rationale text to check against the pack's policy."""
    text: str = Field(default="", description="Exception rationale")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"text": "Approved by admissions head, transcript documentation pending"}
            ]
        }
    }
