"""
AdmitGuard Candidate Stores

Persistence for submitted candidates.

Usage:
    from admitguard.store import SqliteCandidateStore, InMemoryCandidateStore

    store = SqliteCandidateStore("admitguard.db")
    store.list()
"""
from __future__ import annotations

from .base import CandidateStore, InMemoryCandidateStore
from .sqlite import SqliteCandidateStore

__all__ = [
    "CandidateStore",
    "InMemoryCandidateStore",
    "SqliteCandidateStore",
]
