"""
AdmitGuard Exception Ledger

Tracks which fields an officer has asked to override, and why.

The ledger lives on the draft as ``draft.exceptions`` (field id ->
rationale). A key's presence means an exception was requested; an empty
rationale means it has not been justified yet. The ledger knows nothing
about rule results: whether an entry actually unblocks submission is the
submission gate's call.
"""
from __future__ import annotations

import logging

from ..models import CandidateDraft

logger = logging.getLogger(__name__)


class ExceptionLedger:
    """
    Toggle and justify exception requests on a draft.

    Usage:
        ledger = ExceptionLedger(draft)
        ledger.request_exception("dob")
        ledger.set_rationale("dob", "Approved by admissions committee ...")
    """

    def __init__(self, draft: CandidateDraft):
        self.draft = draft

    @property
    def entries(self) -> dict[str, str]:
        return self.draft.exceptions

    def request_exception(self, field_id: str) -> bool:
        """
        Toggle an exception request.

        Opens the entry with an empty rationale if absent, removes it if
        present. Calling twice restores the original ledger.

        Returns:
            True if the exception is now open
        """
        if field_id in self.entries:
            del self.entries[field_id]
            logger.debug("Exception closed for %s", field_id)
            return False
        self.entries[field_id] = ""
        logger.debug("Exception opened for %s", field_id)
        return True

    def set_rationale(self, field_id: str, text: str) -> None:
        """
        Record the rationale for a field's exception.

        An edit on a field without an open exception opens one, so a
        rationale typed before the toggle is not lost.
        """
        self.entries[field_id] = text

    def clear(self, field_id: str) -> None:
        self.entries.pop(field_id, None)

    def is_open(self, field_id: str) -> bool:
        return field_id in self.entries

    def rationale(self, field_id: str) -> str | None:
        return self.entries.get(field_id)

    def open_fields(self) -> list[str]:
        return list(self.entries)

    def count(self) -> int:
        return len(self.entries)


def request_exception(field_id: str, draft: CandidateDraft) -> bool:
    """Toggle an exception request on a draft."""
    return ExceptionLedger(draft).request_exception(field_id)


def set_rationale(field_id: str, text: str, draft: CandidateDraft) -> None:
    """Set (or open with) a rationale on a draft."""
    ExceptionLedger(draft).set_rationale(field_id, text)
