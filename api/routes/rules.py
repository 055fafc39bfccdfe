"""Admission rule endpoints."""

from fastapi import APIRouter

from api.schemas.responses import RationalePolicy, RuleSummary, RulesResponse
from admitguard.packs import AdmissionPack

router = APIRouter(prefix="/api/rules", tags=["Rules"])

# Shared pack (set by main.py)
pack: AdmissionPack = None


def set_pack(p: AdmissionPack):
    global pack
    pack = p


@router.get("", response_model=RulesResponse)
async def list_rules():
    """
    List the admission rules in form order, with the rationale policy.

    STRICT rules block submission outright. SOFT rules can be overridden by
    an exception with an accepted rationale.
    """
    return RulesResponse(
        pack_id=pack.id,
        pack_name=pack.name,
        pack_version=pack.version,
        rules=[RuleSummary(**r) for r in pack.catalog.describe()],
        rationale=RationalePolicy(**pack.rationale_validator.to_dict()),
        auto_flag_threshold=pack.auto_flag_threshold,
    )
