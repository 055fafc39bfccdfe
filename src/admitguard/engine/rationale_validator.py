"""
AdmitGuard Rationale Validator

Decides whether the free-text justification attached to an exception is
good enough. Both conditions are required:

1. At least ``min_length`` characters (characters, not words)
2. Contains one of the approved keyword phrases, case-insensitively
"""
from __future__ import annotations

from dataclasses import dataclass, field


RATIONALE_KEYWORDS: tuple[str, ...] = (
    "approved by",
    "special case",
    "documentation pending",
    "waiver granted",
)
MIN_RATIONALE_LENGTH = 30


@dataclass(frozen=True)
class RationaleValidator:
    """
    Checks exception rationales against the admission pack's policy.

    Usage:
        validator = RationaleValidator()
        validator.is_acceptable("Approved by the dean for the 2025 intake")
    """
    min_length: int = MIN_RATIONALE_LENGTH
    keywords: tuple[str, ...] = field(default=RATIONALE_KEYWORDS)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "keywords", tuple(k.lower() for k in self.keywords)
        )

    def has_keyword(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)

    def is_acceptable(self, text: str | None) -> bool:
        if not text:
            return False
        return len(text) >= self.min_length and self.has_keyword(text)

    def explain(self, text: str | None) -> list[str]:
        """List the conditions the rationale does not meet (empty if accepted)."""
        text = text or ""
        problems: list[str] = []
        if len(text) < self.min_length:
            problems.append(
                f"Rationale must be at least {self.min_length} characters "
                f"({len(text)}/{self.min_length})."
            )
        if not self.has_keyword(text):
            problems.append(
                "Rationale must mention one of: "
                + ", ".join(f"'{k}'" for k in self.keywords)
                + "."
            )
        return problems

    def to_dict(self) -> dict:
        return {"min_length": self.min_length, "keywords": list(self.keywords)}


_DEFAULT_VALIDATOR = RationaleValidator()


def is_rationale_acceptable(text: str | None) -> bool:
    """Check a rationale against the default policy."""
    return _DEFAULT_VALIDATOR.is_acceptable(text)
