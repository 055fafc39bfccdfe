"""Audit log download endpoints."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from admitguard.exceptions import PersistenceError
from admitguard.export import (
    CSV_FILENAME,
    JSON_FILENAME,
    candidates_to_csv,
    candidates_to_json,
)
from admitguard.store import CandidateStore

router = APIRouter(prefix="/api/export", tags=["Export"])

# Shared store (set by main.py)
store: CandidateStore = None


def set_store(s: CandidateStore):
    global store
    store = s


def _candidates():
    try:
        return store.list()
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.to_dict())


def _download(content: str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/csv")
async def export_csv():
    """Download the audit log as CSV."""
    return _download(candidates_to_csv(_candidates()), "text/csv", CSV_FILENAME)


@router.get("/json")
async def export_json():
    """Download the audit log as JSON."""
    return _download(candidates_to_json(_candidates()), "application/json", JSON_FILENAME)
