"""
FDCPA Requirement Registry
Reference: 15 U.S.C. § 1692 et seq. and 12 CFR § 1006 (Regulation F)

Ordered registry of the requirements the engine evaluates. Registry order is
the evaluation order, and therefore the order of ComplianceResult.checks and
ComplianceResult.missing_requirements.

Each requirement's RequirementMode decides whether it gates compliance:
CONDITIONAL requirements name a predicate in REQUIREMENT_CONDITIONS.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional

from ...models.compliance import ComplianceRequirement, RequirementMode, ValidationContext
from .state_rules import STATE_RULE_TABLE, StateRuleTable
from .time_bar import is_debt_time_barred


# Requirement ids
MINI_MIRANDA = "mini_miranda"
VALIDATION_NOTICE = "validation_notice"
DEBT_AMOUNT = "debt_amount"
CREDITOR_IDENTIFICATION = "creditor_identification"
TIME_BARRED_DISCLOSURE = "time_barred_disclosure"
DISPUTE_RIGHTS = "dispute_rights"
SEND_TIME_WINDOW = "send_time_window"
ORIGINAL_CREDITOR = "original_creditor"


FDCPA_REQUIREMENTS: List[ComplianceRequirement] = [
    ComplianceRequirement(
        id=MINI_MIRANDA,
        section="15 U.S.C. § 1692e(11)",
        name="Mini-Miranda Warning",
        description=(
            "Must disclose that this is an attempt to collect a debt and any information "
            "obtained will be used for that purpose"
        ),
        mode=RequirementMode.ALWAYS,
    ),
    ComplianceRequirement(
        id=VALIDATION_NOTICE,
        section="12 CFR § 1006.34",
        name="Validation Notice",
        description="Must include validation information within 5 days of initial communication",
        mode=RequirementMode.ALWAYS,
    ),
    ComplianceRequirement(
        id=DEBT_AMOUNT,
        section="15 U.S.C. § 1692g(a)(1)",
        name="Debt Amount Statement",
        description="Must state the amount of the debt",
        mode=RequirementMode.ALWAYS,
    ),
    ComplianceRequirement(
        id=CREDITOR_IDENTIFICATION,
        section="15 U.S.C. § 1692g(a)(2)",
        name="Creditor Identification",
        description="Must identify the name of the creditor to whom the debt is owed",
        mode=RequirementMode.ALWAYS,
    ),
    ComplianceRequirement(
        id=TIME_BARRED_DISCLOSURE,
        section="State-specific",
        name="Time-Barred Debt Disclosure",
        description=(
            "Must disclose if debt is beyond statute of limitations "
            "(state-specific requirement)"
        ),
        mode=RequirementMode.CONDITIONAL,
        condition_description=(
            "Required if debt exceeds state statute of limitations and the state "
            "mandates disclosure"
        ),
    ),
    ComplianceRequirement(
        id=DISPUTE_RIGHTS,
        section="15 U.S.C. § 1692g(a)(3)-(5)",
        name="Dispute Rights Disclosure",
        description="Should inform debtor of 30-day dispute window and verification rights",
        mode=RequirementMode.NEVER,
    ),
    ComplianceRequirement(
        id=SEND_TIME_WINDOW,
        section="12 CFR § 1006.6(b)(1)(i)",
        name="Contact Time Window",
        description="Should be delivered between 8:00 a.m. and 9:00 p.m. in the debtor's local time",
        mode=RequirementMode.NEVER,
        condition_description="Evaluated only when a send time is scheduled; advisory",
    ),
    ComplianceRequirement(
        id=ORIGINAL_CREDITOR,
        section="15 U.S.C. § 1692g(a)(5)",
        name="Original Creditor Information",
        description=(
            "Upon request, must provide name and address of original creditor if "
            "different from current"
        ),
        mode=RequirementMode.NEVER,
        condition_description="Tracked by the validation notice check; not gating",
    ),
]

REQUIREMENTS_BY_ID: Dict[str, ComplianceRequirement] = {r.id: r for r in FDCPA_REQUIREMENTS}


def time_barred_disclosure_applies(
    context: ValidationContext,
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> bool:
    """Debt is time-barred in the jurisdiction AND the jurisdiction mandates disclosure."""
    if not state_rules.requires_time_barred_disclosure(context.state):
        return False
    return is_debt_time_barred(
        context.debt_details.origin_date,
        context.state,
        today=context.as_of,
        state_rules=state_rules,
    )


RequirementCondition = Callable[[ValidationContext, StateRuleTable], bool]

REQUIREMENT_CONDITIONS: Dict[str, RequirementCondition] = {
    TIME_BARRED_DISCLOSURE: time_barred_disclosure_applies,
}


def get_requirement(requirement_id: str) -> ComplianceRequirement:
    return REQUIREMENTS_BY_ID[requirement_id]


def is_required(
    requirement: ComplianceRequirement,
    context: ValidationContext,
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> bool:
    """Resolve a requirement's mode to a yes/no for one context."""
    if requirement.mode == RequirementMode.ALWAYS:
        return True
    if requirement.mode == RequirementMode.NEVER:
        return False
    condition: Optional[RequirementCondition] = REQUIREMENT_CONDITIONS.get(requirement.id)
    if condition is None:
        raise KeyError(f"No condition registered for conditional requirement '{requirement.id}'")
    return condition(context, state_rules)


def required_requirement_ids(
    context: ValidationContext,
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> List[str]:
    """Ids of every requirement that gates compliance for this context, in registry order."""
    return [r.id for r in FDCPA_REQUIREMENTS if is_required(r, context, state_rules)]


def get_available_rules() -> List[dict]:
    """Describe the registry for API consumers."""
    return [r.to_dict() for r in FDCPA_REQUIREMENTS]
