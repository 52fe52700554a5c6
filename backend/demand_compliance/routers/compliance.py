"""
Demand Compliance - Compliance API Router

FDCPA compliance validation and disclosure generation for demand letters.
All endpoints require an authenticated, organization-scoped caller.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from ..auth import Principal, require_permission
from ..config import COMPLIANCE_REVIEW_THRESHOLD
from ..models.compliance import DebtDetails, ValidationContext
from ..services.compliance import (
    STATE_RULE_TABLE,
    evaluate_review_eligibility,
    generate_complete_disclosure,
    get_available_rules,
    get_required_disclosures,
    parse_origin_date,
    validate_demand_letter,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compliance", tags=["compliance"])


# =============================================================================
# REQUEST MODELS
# =============================================================================

class DebtDetailsRequest(BaseModel):
    """Debt details for compliance validation."""
    principal: float = Field(..., gt=0, description="Principal must be positive")
    interest: Optional[float] = Field(None, ge=0)
    fees: Optional[float] = Field(None, ge=0)
    origin_date: str = Field(..., description="ISO8601 date the debt originated")
    creditor_name: str = Field(..., min_length=1, description="Current creditor")
    original_creditor: Optional[str] = None
    account_number: Optional[str] = None

    @field_validator("origin_date")
    @classmethod
    def origin_date_parseable(cls, v: str) -> str:
        if parse_origin_date(v) is None:
            raise ValueError("Invalid date format")
        return v

    def to_debt_details(self) -> DebtDetails:
        return DebtDetails(
            principal=self.principal,
            interest=self.interest,
            fees=self.fees,
            origin_date=self.origin_date,
            creditor_name=self.creditor_name,
            original_creditor=self.original_creditor,
            account_number=self.account_number,
        )


class _StateScopedRequest(BaseModel):
    state: str = Field(..., min_length=2, max_length=2, description="Two-letter jurisdiction code")
    debt_details: DebtDetailsRequest

    @field_validator("state")
    @classmethod
    def upper_state(cls, v: str) -> str:
        return v.upper()

    def to_context(self) -> ValidationContext:
        return ValidationContext(state=self.state, debt_details=self.debt_details.to_debt_details())


class ComplianceValidateRequest(_StateScopedRequest):
    """Validate letter content against FDCPA requirements."""
    content: str = Field(..., min_length=1, description="Letter body")


class DisclosureGenerateRequest(_StateScopedRequest):
    """Generate the disclosure blocks for a letter."""
    blocks: Optional[List[str]] = Field(None, description="Restrict to these block ids")


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/validate")
async def validate_letter(
    request: ComplianceValidateRequest,
    principal: Principal = Depends(require_permission("demands:create")),
):
    """Validate letter content and report whether it may go to attorney review."""
    result = validate_demand_letter(request.content, request.to_context())
    decision = evaluate_review_eligibility(result, COMPLIANCE_REVIEW_THRESHOLD)

    logger.info(
        f"Compliance validated for org={principal.organization_id} user={principal.user_id}: "
        f"state={request.state}, score={result.score}, compliant={result.is_compliant}"
    )

    response = result.to_dict()
    response["review_gate"] = decision.to_dict()
    return response


@router.get("/rules")
async def list_rules(principal: Principal = Depends(require_permission("demands:view"))):
    """List every compliance rule the engine knows about."""
    return {"rules": get_available_rules()}


@router.post("/disclosures")
async def generate_disclosures(
    request: DisclosureGenerateRequest,
    principal: Principal = Depends(require_permission("demands:create")),
):
    """Generate required disclosure blocks, optionally filtered by block id."""
    context = request.to_context()
    disclosures = get_required_disclosures(context)

    if request.blocks:
        disclosures = [d for d in disclosures if d.id in request.blocks]

    return {
        "disclosures": [d.to_dict() for d in disclosures],
        "complete_text": generate_complete_disclosure(context),
    }


@router.get("/states/{state_code}")
async def get_state(
    state_code: str,
    principal: Principal = Depends(require_permission("demands:view")),
):
    """State rule for a jurisdiction; unknown codes return the generic fallback."""
    rule = STATE_RULE_TABLE.get_rule(state_code)
    return {
        "supported": rule is not None,
        "rule": (rule or STATE_RULE_TABLE.fallback_rule(state_code.strip().upper())).to_dict(),
        "statute_of_limitations": STATE_RULE_TABLE.get_statute_of_limitations(state_code),
        "time_barred_disclosure_required": STATE_RULE_TABLE.requires_time_barred_disclosure(state_code),
    }
