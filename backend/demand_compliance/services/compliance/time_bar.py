"""
Debt Time-Bar Analyzer

Decides whether a debt's origin date places it past the state statute of
limitations. Boundary is inclusive: a debt becomes time-barred on the
anniversary of its origin date SOL years later. Future-dated debts are
never time-barred.
"""
from __future__ import annotations
import logging
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ...models.compliance import OriginDate
from .state_rules import STATE_RULE_TABLE, StateRuleTable

logger = logging.getLogger(__name__)


def parse_origin_date(origin_date: Optional[OriginDate]) -> Optional[date]:
    """
    Coerce an origin date to a date.

    Strings must be ISO-8601; partial forms like "2022-03" resolve to the
    first day. Returns None for missing or unparseable input rather than
    raising. Nothing is filled in from the current date.
    """
    if origin_date is None:
        return None
    if isinstance(origin_date, datetime):
        return origin_date.date()
    if isinstance(origin_date, date):
        return origin_date
    text = str(origin_date).strip()
    if not text:
        return None
    try:
        return date_parser.isoparse(text).date()
    except (ValueError, OverflowError):
        logger.warning("Unparseable debt origin date, treating debt as not time-barred")
        return None


def time_bar_date(
    origin_date: Optional[OriginDate],
    state_code: Optional[str],
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> Optional[date]:
    """Date on which the debt becomes time-barred, or None if unknown."""
    origin = parse_origin_date(origin_date)
    if origin is None:
        return None
    sol_years = state_rules.get_statute_of_limitations(state_code)
    return origin + relativedelta(years=sol_years)


def is_debt_time_barred(
    origin_date: Optional[OriginDate],
    state_code: Optional[str],
    today: Optional[date] = None,
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> bool:
    """True iff today - origin_date >= statute of limitations for the state."""
    origin = parse_origin_date(origin_date)
    if origin is None:
        return False

    today = today or date.today()
    if isinstance(today, datetime):
        today = today.date()
    if origin > today:
        return False

    barred_on = time_bar_date(origin, state_code, state_rules)
    return barred_on <= today
