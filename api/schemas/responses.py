"""Response schemas for the API."""

from pydantic import BaseModel
from typing import Any, Optional


class HealthResponse(BaseModel):
    """Liveness probe response."""
    healthy: bool
    version: str
    pack_id: str
    pack_version: str
    rules_loaded: int
    store_backend: str


class RuleSummary(BaseModel):
    """One admission rule."""
    field: str
    label: str
    severity: str  # STRICT|SOFT
    description: str
    validator: dict[str, Any]


class RationalePolicy(BaseModel):
    """Acceptance policy for exception rationales."""
    min_length: int
    keywords: list[str]


class RulesResponse(BaseModel):
    """The loaded admission pack."""
    pack_id: str
    pack_name: str
    pack_version: str
    rules: list[RuleSummary]
    rationale: RationalePolicy
    auto_flag_threshold: int


class EvaluationResultResponse(BaseModel):
    """Result of evaluating one field."""
    field: str
    valid: bool
    severity: str
    message: Optional[str] = None


class EvaluateResponse(BaseModel):
    """Result of a field edit."""
    result: EvaluationResultResponse
    exception_cleared: bool
    exceptions: dict[str, str]


class GateResponse(BaseModel):
    """Submission gate breakdown for a draft."""
    can_submit: bool
    missing_fields: list[str]
    strict_failures: list[str]
    soft_failures: list[str]
    unjustified_soft_failures: list[str]
    flag_waiver_applied: bool
    exception_count: int
    requires_review: bool
    messages: dict[str, str]
    blocking_reasons: list[str]
    results: list[EvaluationResultResponse]


class RationaleCheckResponse(BaseModel):
    """Whether a rationale is accepted, and what it is missing."""
    acceptable: bool
    length: int
    min_length: int
    has_keyword: bool
    problems: list[str]


class CandidateResponse(BaseModel):
    """A submitted candidate."""
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
    timestamp: str
    exceptions: dict[str, str]
    flagged: bool


class DeleteResponse(BaseModel):
    """Result of deleting a candidate."""
    deleted: bool
    id: str


class RecentException(BaseModel):
    """A recent candidate admitted with exceptions."""
    id: str
    full_name: str
    exception_count: int
    field: str
    rationale: str
    flagged: bool
    timestamp: str


class DashboardResponse(BaseModel):
    """Audit log summary."""
    total: int
    with_exceptions: int
    flagged: int
    exception_rate: float
    compliance_rate: float
    recent_exceptions: list[RecentException]
