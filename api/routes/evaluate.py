"""Field evaluation and submission gate endpoints."""

from fastapi import APIRouter, HTTPException

from api.schemas.requests import DraftInput, EvaluateRequest, RationaleCheckRequest
from api.schemas.responses import (
    EvaluateResponse, EvaluationResultResponse, GateResponse, RationaleCheckResponse
)
from admitguard.engine import FieldEvaluator, SubmissionGate
from admitguard.exceptions import MissingRuleError
from admitguard.packs import AdmissionPack

router = APIRouter(prefix="/api", tags=["Evaluation"])

# Shared pack (set by main.py)
pack: AdmissionPack = None


def set_pack(p: AdmissionPack):
    global pack
    pack = p


def _gate() -> SubmissionGate:
    return SubmissionGate(
        evaluator=FieldEvaluator(pack.catalog),
        rationale_validator=pack.rationale_validator,
        auto_flag_threshold=pack.auto_flag_threshold,
    )


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_field(request: EvaluateRequest):
    """
    Evaluate one field edit against the draft.

    The value is merged into the draft before evaluation, so cross-field
    rules see the record as it will be after the edit. A passing value
    withdraws any exception requested for the field.
    """
    draft = request.draft.to_draft()
    had_exception = request.field in draft.exceptions

    try:
        result = FieldEvaluator(pack.catalog).apply_edit(draft, request.field, request.value)
    except MissingRuleError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())

    return EvaluateResponse(
        result=EvaluationResultResponse(**result.to_dict()),
        exception_cleared=had_exception and request.field not in draft.exceptions,
        exceptions=draft.exceptions,
    )


@router.post("/gate", response_model=GateResponse)
async def check_gate(request: DraftInput):
    """Recompute every rule and report whether the draft may be submitted."""
    draft = request.to_draft()
    gate = _gate()
    results = gate.evaluator.evaluate_all(draft)
    outcome = gate.check(draft, results)

    return GateResponse(
        **outcome.to_dict(),
        results=[EvaluationResultResponse(**r.to_dict()) for r in results.values()],
    )


@router.post("/rationale/check", response_model=RationaleCheckResponse)
async def check_rationale(request: RationaleCheckRequest):
    """Check an exception rationale against the pack's policy."""
    validator = pack.rationale_validator
    return RationaleCheckResponse(
        acceptable=validator.is_acceptable(request.text),
        length=len(request.text),
        min_length=validator.min_length,
        has_keyword=validator.has_keyword(request.text),
        problems=validator.explain(request.text),
    )
