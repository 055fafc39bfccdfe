"""
Dashboard API Router
====================
Summary figures for the admissions dashboard.

Endpoints:
  GET  /api/dashboard   - Totals, exception rate, flagged count, recent exceptions
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from api.schemas.responses import DashboardResponse
from admitguard.exceptions import PersistenceError
from admitguard.export import dashboard_stats
from admitguard.store import CandidateStore


# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------

router = APIRouter(tags=["Dashboard"])

# Shared store (set by main.py)
store: CandidateStore = None


def set_store(s: CandidateStore):
    global store
    store = s


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/api/dashboard", response_model=DashboardResponse)
async def dashboard():
    """Audit log summary for the dashboard."""
    try:
        candidates = store.list()
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.to_dict())
    return DashboardResponse(**dashboard_stats(candidates))
