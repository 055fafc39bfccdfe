"""
AdmitGuard - Candidate Admission Intake with Rule-Based Eligibility

AdmitGuard checks candidate records against a fixed set of admission rules
before they enter the audit log. Rules are STRICT (failure blocks
submission) or SOFT (failure can be overridden by an exception carrying an
accepted rationale, or waived by flagging the record for manual review).

Key Features:
- Declarative admission pack (YAML) validated at startup
- Per-field evaluation with cross-field rules on an immutable snapshot
- Exception ledger with rationale policy (length + keyword)
- Submission gate and auto-flag for records with many exceptions
- SQLite audit log with CSV/JSON export

Quick Start:
    from admitguard import CandidateDraft, FieldEvaluator, SubmissionGate
    from admitguard import RecordAssembler, SqliteCandidateStore

    draft = CandidateDraft()
    evaluator = FieldEvaluator()
    evaluator.apply_edit(draft, "full_name", "Asha Rao")

    gate = SubmissionGate()
    if gate.can_submit(draft):
        RecordAssembler(store=SqliteCandidateStore()).submit(draft)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

from .engine import (
    ExceptionLedger,
    FieldEvaluator,
    GateResult,
    RationaleValidator,
    RecordAssembler,
    RuleCatalog,
    SubmissionGate,
    assemble_and_submit,
    can_submit,
    evaluate_field,
    is_rationale_acceptable,
    request_exception,
    set_rationale,
)
from .exceptions import (
    AdmitGuardError,
    CandidateNotFoundError,
    DuplicateEmailError,
    MissingRuleError,
    PackLoadError,
    PackValidationError,
    PackVersionMismatch,
    PersistenceError,
    SubmissionBlockedError,
)
from .models import (
    CANDIDATE_FIELDS,
    Candidate,
    CandidateDraft,
    EvaluationResult,
    Rule,
    RuleOutcome,
    RuleSeverity,
    ScoreType,
)
from .packs import AdmissionPack, get_default_pack, load_admission_pack
from .store import CandidateStore, InMemoryCandidateStore, SqliteCandidateStore

__all__ = [
    "__version__",
    # Models
    "CANDIDATE_FIELDS",
    "Candidate",
    "CandidateDraft",
    "EvaluationResult",
    "Rule",
    "RuleOutcome",
    "RuleSeverity",
    "ScoreType",
    # Engine
    "RuleCatalog",
    "FieldEvaluator",
    "ExceptionLedger",
    "RationaleValidator",
    "SubmissionGate",
    "GateResult",
    "RecordAssembler",
    "evaluate_field",
    "request_exception",
    "set_rationale",
    "is_rationale_acceptable",
    "can_submit",
    "assemble_and_submit",
    # Packs
    "AdmissionPack",
    "get_default_pack",
    "load_admission_pack",
    # Stores
    "CandidateStore",
    "InMemoryCandidateStore",
    "SqliteCandidateStore",
    # Errors
    "AdmitGuardError",
    "MissingRuleError",
    "SubmissionBlockedError",
    "DuplicateEmailError",
    "PersistenceError",
    "CandidateNotFoundError",
    "PackLoadError",
    "PackValidationError",
    "PackVersionMismatch",
]
