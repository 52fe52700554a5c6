"""
Demand Compliance - Regulatory Compliance Validation Engine

Letter text + ValidationContext → ComplianceValidator → ComplianceResult
ValidationContext → Disclosure Generator → DisclosureBlocks

Pure, synchronous, no I/O. Safe to call concurrently.
"""
from .state_rules import (
    STATE_RULE_TABLE,
    StateRuleTable,
    US_STATE_CODES,
    get_state_rule,
    get_statute_of_limitations,
    requires_time_barred_disclosure,
)
from .time_bar import is_debt_time_barred, parse_origin_date, time_bar_date
from .requirements import (
    FDCPA_REQUIREMENTS,
    get_available_rules,
    is_required,
    required_requirement_ids,
)
from .rules import (
    check_mini_miranda,
    check_validation_notice,
    check_debt_amount,
    check_creditor_identification,
    check_time_barred_disclosure,
    check_dispute_rights,
    check_send_time_window,
)
from .validator import ComplianceValidator, validate_demand_letter, quick_validate
from .disclosure_generator import (
    generate_mini_miranda,
    generate_validation_notice,
    generate_dispute_rights,
    generate_creditor_block,
    generate_debt_amount_block,
    generate_time_barred_disclosure,
    get_required_disclosures,
    generate_complete_disclosure,
)
from .review_gate import ReviewGateDecision, evaluate_review_eligibility

__all__ = [
    # State rules / time bar
    "STATE_RULE_TABLE",
    "StateRuleTable",
    "US_STATE_CODES",
    "get_state_rule",
    "get_statute_of_limitations",
    "requires_time_barred_disclosure",
    "is_debt_time_barred",
    "parse_origin_date",
    "time_bar_date",
    # Requirements
    "FDCPA_REQUIREMENTS",
    "get_available_rules",
    "is_required",
    "required_requirement_ids",
    # Rules
    "check_mini_miranda",
    "check_validation_notice",
    "check_debt_amount",
    "check_creditor_identification",
    "check_time_barred_disclosure",
    "check_dispute_rights",
    "check_send_time_window",
    # Orchestrator
    "ComplianceValidator",
    "validate_demand_letter",
    "quick_validate",
    # Disclosures
    "generate_mini_miranda",
    "generate_validation_notice",
    "generate_dispute_rights",
    "generate_creditor_block",
    "generate_debt_amount_block",
    "generate_time_barred_disclosure",
    "get_required_disclosures",
    "generate_complete_disclosure",
    # Review gate
    "ReviewGateDecision",
    "evaluate_review_eligibility",
]
