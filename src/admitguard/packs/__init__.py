"""
AdmitGuard Admission Packs

Schema validation and loading for admission packs.

An admission pack is a YAML or JSON file that declares the admission rules
(one per candidate field), the exception rationale policy and the
auto-flag threshold. The bundled default pack is loaded once per process.

Usage:
    from admitguard.packs import get_default_pack, load_admission_pack

    pack = get_default_pack()
    rule = pack.catalog.get("dob")

    custom = load_admission_pack("path/to/pack.yaml")
"""
from __future__ import annotations

from .loader import (
    DEFAULT_PACK_PATH,
    AdmissionPack,
    AdmissionPackLoader,
    get_default_pack,
    load_admission_pack,
    load_admission_pack_from_string,
)
from .schema import (
    SCHEMA_VERSION,
    AdmissionPackSchema,
    RationalePolicySchema,
    RuleSchema,
    check_schema_version,
    validate_admission_pack,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "DEFAULT_PACK_PATH",
    "AdmissionPack",
    "AdmissionPackLoader",
    "get_default_pack",
    "load_admission_pack",
    "load_admission_pack_from_string",
    # Validation
    "validate_admission_pack",
    "check_schema_version",
    # Schemas
    "AdmissionPackSchema",
    "RuleSchema",
    "RationalePolicySchema",
]
