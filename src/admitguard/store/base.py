"""
Candidate store interface and in-memory implementation.

The engine only needs "store a record, list all records newest first,
delete by id" plus an email lookup for the duplicate check. Swap the
implementation (sqlite, Postgres, ...) and the interface stays the same.
"""
from __future__ import annotations

from typing import Optional, Protocol

from ..models import Candidate


class CandidateStore(Protocol):
    """Persistence collaborator for submitted candidates."""

    backend: str

    def create(self, candidate: Candidate) -> None:
        ...

    def list(self) -> list[Candidate]:
        """All candidates, most recent first by timestamp."""
        ...

    def get(self, candidate_id: str) -> Optional[Candidate]:
        ...

    def find_by_email(self, email: str) -> Optional[Candidate]:
        ...

    def delete(self, candidate_id: str) -> bool:
        """Delete by id. Returns False when no such candidate exists."""
        ...


class InMemoryCandidateStore:
    """Dict-backed store for tests and the ``AG_STORE=memory`` mode."""

    backend = "memory"

    def __init__(self) -> None:
        self._candidates: dict[str, Candidate] = {}

    def create(self, candidate: Candidate) -> None:
        if candidate.id in self._candidates:
            raise ValueError(f"Candidate id '{candidate.id}' already exists")
        self._candidates[candidate.id] = candidate

    def list(self) -> list[Candidate]:
        return sorted(
            self._candidates.values(),
            key=lambda c: c.timestamp,
            reverse=True,
        )

    def get(self, candidate_id: str) -> Optional[Candidate]:
        return self._candidates.get(candidate_id)

    def find_by_email(self, email: str) -> Optional[Candidate]:
        for candidate in self._candidates.values():
            if candidate.email == email:
                return candidate
        return None

    def delete(self, candidate_id: str) -> bool:
        return self._candidates.pop(candidate_id, None) is not None

    def __len__(self) -> int:
        return len(self._candidates)
