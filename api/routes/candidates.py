"""Candidate audit log endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request

from api.schemas.requests import DraftInput
from api.schemas.responses import CandidateResponse, DeleteResponse
from admitguard.engine import FieldEvaluator, RecordAssembler, SubmissionGate
from admitguard.exceptions import (
    CandidateNotFoundError,
    DuplicateEmailError,
    PersistenceError,
    SubmissionBlockedError,
)
from admitguard.packs import AdmissionPack
from admitguard.store import CandidateStore

logger = logging.getLogger("admitguard.api")

router = APIRouter(prefix="/api/candidates", tags=["Candidates"])

# Shared pack and store (set by main.py)
pack: AdmissionPack = None
store: CandidateStore = None


def set_context(p: AdmissionPack, s: CandidateStore):
    global pack, store
    pack = p
    store = s


def _assembler() -> RecordAssembler:
    gate = SubmissionGate(
        evaluator=FieldEvaluator(pack.catalog),
        rationale_validator=pack.rationale_validator,
        auto_flag_threshold=pack.auto_flag_threshold,
    )
    return RecordAssembler(store=store, gate=gate)


@router.get("", response_model=list[CandidateResponse])
async def list_candidates():
    """List submitted candidates, most recent first."""
    try:
        candidates = store.list()
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.to_dict())
    return [CandidateResponse(**c.to_dict()) for c in candidates]


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(candidate_id: str):
    """Get one submitted candidate."""
    try:
        candidate = store.get(candidate_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.to_dict())
    if candidate is None:
        err = CandidateNotFoundError(
            message=f"Candidate '{candidate_id}' not found", candidate_id=candidate_id
        )
        raise HTTPException(status_code=404, detail=err.to_dict())
    return CandidateResponse(**candidate.to_dict())


@router.post("", response_model=CandidateResponse, status_code=201)
async def submit_candidate(draft_input: DraftInput, request: Request):
    """
    Submit a draft to the audit log.

    The gate is re-run server side. Returns 422 when the draft is blocked
    (with the gate breakdown in the error details) and 409 when a candidate
    with the same email already exists.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    try:
        candidate = _assembler().submit(draft_input.to_draft())
    except SubmissionBlockedError as e:
        logger.info("Submission blocked", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.to_dict())
    except DuplicateEmailError as e:
        raise HTTPException(status_code=409, detail=e.to_dict())
    except PersistenceError as e:
        logger.error("Submission failed: %s", e, extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail=e.to_dict())

    logger.info(
        "Candidate submitted",
        extra={"request_id": request_id, "candidate_id": candidate.id},
    )
    return CandidateResponse(**candidate.to_dict())


@router.delete("/{candidate_id}", response_model=DeleteResponse)
async def delete_candidate(candidate_id: str):
    """Delete a candidate from the audit log."""
    try:
        deleted = store.delete(candidate_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.to_dict())
    if not deleted:
        err = CandidateNotFoundError(
            message=f"Candidate '{candidate_id}' not found", candidate_id=candidate_id
        )
        raise HTTPException(status_code=404, detail=err.to_dict())
    return DeleteResponse(deleted=True, id=candidate_id)
