"""
State Rule Table - Single Source of Truth (SSOT)
Per-jurisdiction statute of limitations and disclosure mandates.

The table is built once at import time and exposed read-only. Unknown
jurisdictions never raise: lookups degrade to a generic fallback rule.
"""
from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from ...config import DEFAULT_STATUTE_OF_LIMITATIONS_YEARS
from ...models.compliance import StateRule

logger = logging.getLogger(__name__)


CA_TIME_BARRED_DISCLOSURE = (
    "The law limits how long you can be sued on a debt. Because of the age of your debt, "
    "we will not sue you for it."
)
NY_TIME_BARRED_DISCLOSURE = (
    "The law limits how long you can be sued on a debt. Because of the age of your debt, "
    "we will not sue you for it, and we will not report it to any credit reporting agency."
)
TX_TIME_BARRED_DISCLOSURE = (
    "This debt is too old for you to be sued on it. If you pay any amount on this debt or "
    "promise to pay, the debt may become enforceable again."
)


def _rule(code: str, name: str, sol: int, **extra) -> StateRule:
    return StateRule(state_code=code, state_name=name, statute_of_limitations=sol, **extra)


# =============================================================================
# STATE RULES (50 states + DC)
# =============================================================================

_STATE_RULES = [
    _rule("AL", "Alabama", 6),
    _rule("AK", "Alaska", 3),
    _rule("AZ", "Arizona", 6),
    _rule("AR", "Arkansas", 5),
    _rule(
        "CA", "California", 4,
        additional_requirements=("Rosenthal Fair Debt Collection Practices Act compliance",),
        time_barred_disclosure_required=True,
        additional_disclosures=(CA_TIME_BARRED_DISCLOSURE,),
    ),
    _rule("CO", "Colorado", 6),
    _rule("CT", "Connecticut", 6),
    _rule("DE", "Delaware", 3),
    _rule(
        "FL", "Florida", 5,
        additional_requirements=("Florida Consumer Collection Practices Act compliance",),
        time_barred_disclosure_required=True,
    ),
    _rule("GA", "Georgia", 6),
    _rule("HI", "Hawaii", 6),
    _rule("ID", "Idaho", 5),
    _rule("IL", "Illinois", 5),
    _rule("IN", "Indiana", 6),
    _rule("IA", "Iowa", 5),
    _rule("KS", "Kansas", 5),
    _rule("KY", "Kentucky", 5),
    _rule("LA", "Louisiana", 3),
    _rule("ME", "Maine", 6),
    _rule("MD", "Maryland", 3),
    _rule("MA", "Massachusetts", 6),
    _rule("MI", "Michigan", 6),
    _rule("MN", "Minnesota", 6),
    _rule("MS", "Mississippi", 3),
    _rule("MO", "Missouri", 5),
    _rule("MT", "Montana", 5),
    _rule("NE", "Nebraska", 5),
    _rule("NV", "Nevada", 6),
    _rule("NH", "New Hampshire", 3),
    _rule("NJ", "New Jersey", 6),
    _rule(
        "NM", "New Mexico", 6,
        additional_requirements=("New Mexico time-barred debt disclosure",),
        time_barred_disclosure_required=True,
    ),
    _rule(
        "NY", "New York", 6,
        additional_requirements=("NYC specific disclosure requirements",),
        time_barred_disclosure_required=True,
        additional_disclosures=(NY_TIME_BARRED_DISCLOSURE,),
    ),
    _rule("NC", "North Carolina", 3),
    _rule("ND", "North Dakota", 6),
    _rule("OH", "Ohio", 6),
    _rule("OK", "Oklahoma", 5),
    _rule("OR", "Oregon", 6),
    _rule("PA", "Pennsylvania", 4),
    _rule("RI", "Rhode Island", 10),
    _rule("SC", "South Carolina", 3),
    _rule("SD", "South Dakota", 6),
    _rule("TN", "Tennessee", 6),
    _rule(
        "TX", "Texas", 4,
        additional_requirements=("Texas time-barred debt notice",),
        time_barred_disclosure_required=True,
        additional_disclosures=(TX_TIME_BARRED_DISCLOSURE,),
    ),
    _rule("UT", "Utah", 6),
    _rule("VT", "Vermont", 6),
    _rule("VA", "Virginia", 5),
    _rule("WA", "Washington", 6),
    _rule("WV", "West Virginia", 10),
    _rule("WI", "Wisconsin", 6),
    _rule("WY", "Wyoming", 8),
    _rule("DC", "District of Columbia", 3),
]


def normalize_state_code(state_code: Optional[str]) -> str:
    """Upper-case and strip a jurisdiction code. None becomes ''."""
    return (state_code or "").strip().upper()


class StateRuleTable:
    """
    Read-only lookup of StateRule by jurisdiction code.

    Shared freely across concurrent validations; there is no mutation path
    after construction.
    """

    def __init__(self, rules: Iterable[StateRule], default_statute_years: int):
        table: Dict[str, StateRule] = {}
        for rule in rules:
            table[normalize_state_code(rule.state_code)] = rule
        self._rules: Mapping[str, StateRule] = MappingProxyType(table)
        self.default_statute_years = default_statute_years

    def __contains__(self, state_code: object) -> bool:
        return isinstance(state_code, str) and normalize_state_code(state_code) in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def state_codes(self):
        return tuple(self._rules.keys())

    def get_rule(self, state_code: Optional[str]) -> Optional[StateRule]:
        """Return the state's rule, or None meaning "use the generic fallback"."""
        return self._rules.get(normalize_state_code(state_code))

    def get_rule_or_fallback(self, state_code: Optional[str]) -> StateRule:
        rule = self.get_rule(state_code)
        if rule is not None:
            return rule
        code = normalize_state_code(state_code)
        logger.warning(f"Unknown state '{code}' for compliance lookup, using generic fallback rule")
        return self.fallback_rule(code)

    def fallback_rule(self, state_code: str = "") -> StateRule:
        return StateRule(
            state_code=state_code,
            state_name="Unknown jurisdiction",
            statute_of_limitations=self.default_statute_years,
        )

    def get_statute_of_limitations(self, state_code: Optional[str]) -> int:
        rule = self.get_rule(state_code)
        if rule is None:
            return self.default_statute_years
        return rule.statute_of_limitations

    def requires_time_barred_disclosure(self, state_code: Optional[str]) -> bool:
        """
        Whether the state mandates a time-barred disclosure.

        Independent of whether any particular debt is actually time-barred.
        """
        rule = self.get_rule(state_code)
        return rule.time_barred_disclosure_required if rule else False


STATE_RULE_TABLE = StateRuleTable(_STATE_RULES, DEFAULT_STATUTE_OF_LIMITATIONS_YEARS)

US_STATE_CODES = STATE_RULE_TABLE.state_codes


# =============================================================================
# MODULE-LEVEL HELPERS (default table)
# =============================================================================

def get_state_rule(state_code: Optional[str]) -> Optional[StateRule]:
    return STATE_RULE_TABLE.get_rule(state_code)


def get_statute_of_limitations(state_code: Optional[str]) -> int:
    return STATE_RULE_TABLE.get_statute_of_limitations(state_code)


def requires_time_barred_disclosure(state_code: Optional[str]) -> bool:
    return STATE_RULE_TABLE.requires_time_barred_disclosure(state_code)
