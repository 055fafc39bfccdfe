"""
AdmitGuard Engine

The rule evaluation and exception-gating engine.

Services:
- RuleCatalog: Ordered, read-only admission rules
- FieldEvaluator: Evaluate field values against their rules
- ExceptionLedger: Toggle and justify exception requests
- RationaleValidator: Accept or reject exception rationales
- SubmissionGate: Decide submittability and the auto-flag
- RecordAssembler: Stamp and persist submitted candidates

Usage:
    from admitguard.engine import (
        FieldEvaluator,
        ExceptionLedger,
        SubmissionGate,
        RecordAssembler,
    )
"""
from __future__ import annotations

from .exception_ledger import (
    ExceptionLedger,
    request_exception,
    set_rationale,
)
from .field_evaluator import (
    FieldEvaluator,
    evaluate_field,
)
from .rationale_validator import (
    MIN_RATIONALE_LENGTH,
    RATIONALE_KEYWORDS,
    RationaleValidator,
    is_rationale_acceptable,
)
from .record_assembler import (
    RecordAssembler,
    assemble_and_submit,
    infer_score_type,
    new_candidate_id,
)
from .rule_catalog import RuleCatalog
from .submission_gate import (
    DEFAULT_AUTO_FLAG_THRESHOLD,
    GateResult,
    SubmissionGate,
    can_submit,
)
from .validators import (
    AcademicScoreValidator,
    AgeRangeValidator,
    ChoiceValidator,
    IntegerRangeValidator,
    PatternValidator,
    PersonNameValidator,
    RequiresStatusValidator,
    StatusValidator,
    age_on,
    build_validator,
)

__all__ = [
    # Catalog
    "RuleCatalog",
    # Validators
    "PersonNameValidator",
    "PatternValidator",
    "AgeRangeValidator",
    "ChoiceValidator",
    "IntegerRangeValidator",
    "AcademicScoreValidator",
    "StatusValidator",
    "RequiresStatusValidator",
    "age_on",
    "build_validator",
    # Evaluation
    "FieldEvaluator",
    "evaluate_field",
    # Exceptions ledger
    "ExceptionLedger",
    "request_exception",
    "set_rationale",
    # Rationale
    "RationaleValidator",
    "RATIONALE_KEYWORDS",
    "MIN_RATIONALE_LENGTH",
    "is_rationale_acceptable",
    # Gate
    "SubmissionGate",
    "GateResult",
    "DEFAULT_AUTO_FLAG_THRESHOLD",
    "can_submit",
    # Assembly
    "RecordAssembler",
    "assemble_and_submit",
    "infer_score_type",
    "new_candidate_id",
]
