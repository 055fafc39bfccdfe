"""
AdmitGuard Audit Export

Renders the audit log for download and summarizes it for the dashboard.
"""
from __future__ import annotations

import csv
import io
import json
from typing import Any, Iterable

from .models import Candidate


CSV_FILENAME = "admitguard_audit.csv"
JSON_FILENAME = "admitguard_data.json"

CSV_HEADERS = [
    "Full Name", "Email", "Phone", "DOB", "Qualification", "Grad Year",
    "Score", "Test Score", "Interview Status", "National ID", "Offer Sent",
    "Exceptions Count", "Timestamp",
]

RECENT_EXCEPTIONS_LIMIT = 5


def candidates_to_csv(candidates: Iterable[Candidate]) -> str:
    """One row per candidate under CSV_HEADERS. Fields are quoted as needed."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for c in candidates:
        writer.writerow([
            c.full_name,
            c.email,
            c.phone,
            c.dob,
            c.qualification,
            c.grad_year,
            c.score,
            c.test_score,
            c.interview_status,
            c.national_id,
            c.offer_sent,
            c.exception_count,
            c.timestamp.isoformat(),
        ])
    return buffer.getvalue()


def candidates_to_json(candidates: Iterable[Candidate]) -> str:
    return json.dumps([c.to_dict() for c in candidates], indent=2, ensure_ascii=False)


def dashboard_stats(candidates: list[Candidate]) -> dict[str, Any]:
    """
    Summary figures for the dashboard.

    ``candidates`` is expected newest first (store order); the recent
    exceptions list keeps that order.
    """
    total = len(candidates)
    with_exceptions = [c for c in candidates if c.has_exceptions]
    flagged = sum(1 for c in candidates if c.flagged)
    rate = round(len(with_exceptions) / total * 100, 1) if total else 0.0

    recent = []
    for c in with_exceptions[:RECENT_EXCEPTIONS_LIMIT]:
        first_field, first_rationale = next(iter(c.exceptions.items()))
        recent.append({
            "id": c.id,
            "full_name": c.full_name,
            "exception_count": c.exception_count,
            "field": first_field,
            "rationale": first_rationale,
            "flagged": c.flagged,
            "timestamp": c.timestamp.isoformat(),
        })

    return {
        "total": total,
        "with_exceptions": len(with_exceptions),
        "flagged": flagged,
        "exception_rate": rate,
        "compliance_rate": round(100.0 - rate, 1) if total else 0.0,
        "recent_exceptions": recent,
    }
