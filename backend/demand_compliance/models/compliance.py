"""
Demand Compliance - Compliance Value Objects

These models are the ONLY data structures exchanged with the compliance engine.
Inputs (ValidationContext, DebtDetails) are frozen; outputs are created fresh
on every validation call and never persisted by the engine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


OriginDate = Union[date, datetime, str]


# =============================================================================
# ENUMS
# =============================================================================

class RequirementMode(str, Enum):
    """How a requirement decides whether it gates compliance."""
    ALWAYS = "always"            # Required for every letter
    CONDITIONAL = "conditional"  # Required only when its predicate holds
    NEVER = "never"              # Advisory / informational only


# =============================================================================
# INPUTS
# =============================================================================

@dataclass(frozen=True)
class DebtDetails:
    """Debt facts the letter must be consistent with."""
    principal: float
    origin_date: OriginDate
    creditor_name: str
    interest: Optional[float] = None
    fees: Optional[float] = None
    original_creditor: Optional[str] = None
    account_number: Optional[str] = None

    @property
    def total(self) -> float:
        """Principal plus interest plus fees (no rounding)."""
        return self.principal + (self.interest or 0) + (self.fees or 0)

    @property
    def has_additional_charges(self) -> bool:
        return bool(self.interest) or bool(self.fees)

    @property
    def has_distinct_original_creditor(self) -> bool:
        return bool(self.original_creditor) and self.original_creditor != self.creditor_name


@dataclass(frozen=True)
class ValidationContext:
    """
    Immutable input to every compliance check.

    as_of pins the evaluation date for statute-of-limitations arithmetic;
    when None the current date is used.
    """
    state: str
    debt_details: DebtDetails
    as_of: Optional[date] = None
    send_time: Optional[datetime] = None
    debtor_timezone: Optional[str] = None
    is_initial_contact: Optional[bool] = None


# =============================================================================
# REFERENCE DATA
# =============================================================================

@dataclass(frozen=True)
class StateRule:
    """Per-jurisdiction debt collection rule. Loaded once, never mutated."""
    state_code: str
    state_name: str
    statute_of_limitations: int  # years
    additional_requirements: Tuple[str, ...] = ()
    time_barred_disclosure_required: bool = False
    additional_disclosures: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state_code": self.state_code,
            "state_name": self.state_name,
            "statute_of_limitations": self.statute_of_limitations,
            "additional_requirements": list(self.additional_requirements),
            "time_barred_disclosure_required": self.time_barred_disclosure_required,
            "additional_disclosures": list(self.additional_disclosures),
        }


@dataclass(frozen=True)
class ComplianceRequirement:
    """A regulatory requirement the engine knows about."""
    id: str
    section: str
    name: str
    description: str
    mode: RequirementMode
    condition_description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "section": self.section,
            "name": self.name,
            "description": self.description,
            "mode": self.mode.value,
            "condition_description": self.condition_description,
        }


# =============================================================================
# OUTPUTS
# =============================================================================

@dataclass
class ComplianceCheckResult:
    """Verdict of a single compliance rule."""
    id: str
    section: str
    name: str
    passed: bool
    required: bool
    details: str
    suggestion: Optional[str] = None
    matched_text: Optional[str] = None

    @property
    def blocks_compliance(self) -> bool:
        """Only required checks can fail the aggregate gate."""
        return self.required and not self.passed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "section": self.section,
            "name": self.name,
            "passed": self.passed,
            "required": self.required,
            "details": self.details,
            "suggestion": self.suggestion,
            "matched_text": self.matched_text,
        }


@dataclass
class ComplianceResult:
    """Aggregate verdict for one letter."""
    is_compliant: bool
    score: int
    checks: List[ComplianceCheckResult] = field(default_factory=list)
    missing_requirements: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    validated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_check(self, check_id: str) -> Optional[ComplianceCheckResult]:
        for check in self.checks:
            if check.id == check_id:
                return check
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_compliant": self.is_compliant,
            "score": self.score,
            "checks": [c.to_dict() for c in self.checks],
            "missing_requirements": list(self.missing_requirements),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
            "validated_at": self.validated_at.isoformat(),
        }


@dataclass(frozen=True)
class DisclosureBlock:
    """Ready-to-insert disclosure text."""
    id: str
    name: str
    section: str
    required: bool
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "section": self.section,
            "required": self.required,
            "content": self.content,
        }
