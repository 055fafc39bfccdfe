"""SQLite-backed candidate audit log."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from ..exceptions import PersistenceError
from ..models import Candidate

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id", "full_name", "email", "phone", "dob", "qualification", "grad_year",
    "score_type", "score", "test_score", "interview_status", "national_id",
    "offer_sent", "timestamp", "exceptions", "flagged",
)


def _candidate_to_row(candidate: Candidate) -> tuple[Any, ...]:
    return (
        candidate.id,
        candidate.full_name,
        candidate.email,
        candidate.phone,
        candidate.dob,
        candidate.qualification,
        candidate.grad_year,
        candidate.score_type,
        candidate.score,
        candidate.test_score,
        candidate.interview_status,
        candidate.national_id,
        candidate.offer_sent,
        candidate.timestamp.isoformat(timespec="microseconds"),
        json.dumps(dict(candidate.exceptions)),
        1 if candidate.flagged else 0,
    )


def _row_to_candidate(row: sqlite3.Row) -> Candidate:
    return Candidate(
        id=row["id"],
        full_name=row["full_name"],
        email=row["email"],
        phone=row["phone"],
        dob=row["dob"],
        qualification=row["qualification"],
        grad_year=row["grad_year"],
        score_type=row["score_type"],
        score=row["score"],
        test_score=row["test_score"],
        interview_status=row["interview_status"],
        national_id=row["national_id"],
        offer_sent=row["offer_sent"],
        timestamp=datetime.fromisoformat(row["timestamp"]),
        exceptions=json.loads(row["exceptions"] or "{}"),
        flagged=bool(row["flagged"]),
    )


class SqliteCandidateStore:
    """
    Candidates table in a local SQLite file.

    Opens a short-lived connection per operation. Timestamps are stored as
    UTC ISO-8601 text, so ordering by the column is chronological.
    """

    backend = "sqlite"

    def __init__(self, db_path: Union[str, Path] = "admitguard.db"):
        self.db_path = Path(db_path)
        self.init_db()

    @contextmanager
    def _connect(self, operation: str) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise PersistenceError(
                message=f"Failed to open candidate database: {e}",
                details={"operation": operation, "db_path": str(self.db_path)},
            ) from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Candidate store %s failed: %s", operation, e)
            raise PersistenceError(
                message=f"Failed to {operation}: {e}",
                details={"operation": operation, "db_path": str(self.db_path)},
            ) from e
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the candidates table if it doesn't exist."""
        if self.db_path.parent and not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect("initialize database") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS candidates (
                    id TEXT PRIMARY KEY,
                    full_name TEXT,
                    email TEXT,
                    phone TEXT,
                    dob TEXT,
                    qualification TEXT,
                    grad_year INTEGER,
                    score_type TEXT,
                    score REAL,
                    test_score INTEGER,
                    interview_status TEXT,
                    national_id TEXT,
                    offer_sent TEXT,
                    timestamp TEXT NOT NULL,
                    exceptions TEXT,
                    flagged INTEGER
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_candidates_timestamp ON candidates(timestamp DESC)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_candidates_email ON candidates(email)"
            )

    def create(self, candidate: Candidate) -> None:
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self._connect("save candidate") as conn:
            conn.execute(
                f"INSERT INTO candidates ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                _candidate_to_row(candidate),
            )
        logger.info("Stored candidate %s", candidate.id, extra={"candidate_id": candidate.id})

    def list(self) -> list[Candidate]:
        with self._connect("fetch candidates") as conn:
            rows = conn.execute(
                "SELECT * FROM candidates ORDER BY timestamp DESC"
            ).fetchall()
        return [_row_to_candidate(row) for row in rows]

    def get(self, candidate_id: str) -> Optional[Candidate]:
        with self._connect("fetch candidate") as conn:
            row = conn.execute(
                "SELECT * FROM candidates WHERE id = ?", (candidate_id,)
            ).fetchone()
        return _row_to_candidate(row) if row else None

    def find_by_email(self, email: str) -> Optional[Candidate]:
        with self._connect("look up email") as conn:
            row = conn.execute(
                "SELECT * FROM candidates WHERE email = ? LIMIT 1", (email,)
            ).fetchone()
        return _row_to_candidate(row) if row else None

    def delete(self, candidate_id: str) -> bool:
        with self._connect("delete candidate") as conn:
            cursor = conn.execute("DELETE FROM candidates WHERE id = ?", (candidate_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Deleted candidate %s", candidate_id, extra={"candidate_id": candidate_id})
        return deleted
