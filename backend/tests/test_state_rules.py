"""
Tests for the state rule table and the debt time-bar analyzer.

Covers jurisdiction lookup, unknown-state fallback, and the inclusive
statute-of-limitations boundary.
"""
from datetime import date, datetime

import pytest
from dateutil.relativedelta import relativedelta


class TestStateRuleTable:
    """Tests for state_rules.py"""

    def test_table_covers_fifty_states_and_dc(self):
        from demand_compliance.services.compliance.state_rules import STATE_RULE_TABLE, US_STATE_CODES

        assert len(STATE_RULE_TABLE) == 51
        assert "DC" in US_STATE_CODES
        assert "CA" in STATE_RULE_TABLE
        assert "ca" in STATE_RULE_TABLE

    def test_get_rule_known_state(self):
        from demand_compliance.services.compliance.state_rules import get_state_rule

        rule = get_state_rule("CA")
        assert rule.state_name == "California"
        assert rule.statute_of_limitations == 4
        assert rule.time_barred_disclosure_required is True
        assert "Rosenthal" in rule.additional_requirements[0]

    def test_lookup_is_case_insensitive(self):
        from demand_compliance.services.compliance.state_rules import get_state_rule

        assert get_state_rule(" tx ") == get_state_rule("TX")

    def test_unknown_state_returns_none(self):
        from demand_compliance.services.compliance.state_rules import get_state_rule

        assert get_state_rule("ZZ") is None
        assert get_state_rule(None) is None

    def test_unknown_state_fallback_values(self):
        from demand_compliance.services.compliance.state_rules import (
            STATE_RULE_TABLE, get_statute_of_limitations, requires_time_barred_disclosure,
        )

        assert get_statute_of_limitations("ZZ") == STATE_RULE_TABLE.default_statute_years
        assert requires_time_barred_disclosure("ZZ") is False

        fallback = STATE_RULE_TABLE.get_rule_or_fallback("zz")
        assert fallback.state_code == "ZZ"
        assert fallback.state_name == "Unknown jurisdiction"
        assert fallback.additional_requirements == ()
        assert fallback.time_barred_disclosure_required is False

    def test_mandating_states(self):
        from demand_compliance.services.compliance.state_rules import STATE_RULE_TABLE

        mandating = {
            code for code in STATE_RULE_TABLE.state_codes
            if STATE_RULE_TABLE.requires_time_barred_disclosure(code)
        }
        assert mandating == {"CA", "FL", "NM", "NY", "TX"}

    def test_custom_table(self):
        from demand_compliance.models.compliance import StateRule
        from demand_compliance.services.compliance.state_rules import StateRuleTable

        table = StateRuleTable([StateRule("QQ", "Testland", 2)], default_statute_years=9)
        assert table.get_statute_of_limitations("qq") == 2
        assert table.get_statute_of_limitations("CA") == 9

    def test_state_rule_to_dict(self):
        from demand_compliance.services.compliance.state_rules import get_state_rule

        data = get_state_rule("NY").to_dict()
        assert data["state_code"] == "NY"
        assert isinstance(data["additional_disclosures"], list)
        assert "credit reporting agency" in data["additional_disclosures"][0]


class TestParseOriginDate:
    """Tests for time_bar.parse_origin_date"""

    def test_iso_string(self):
        from demand_compliance.services.compliance.time_bar import parse_origin_date

        assert parse_origin_date("2019-03-15") == date(2019, 3, 15)
        assert parse_origin_date("2019-03-15T10:30:00Z") == date(2019, 3, 15)

    def test_date_and_datetime_passthrough(self):
        from demand_compliance.services.compliance.time_bar import parse_origin_date

        assert parse_origin_date(date(2020, 1, 2)) == date(2020, 1, 2)
        assert parse_origin_date(datetime(2020, 1, 2, 8, 0)) == date(2020, 1, 2)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date"])
    def test_unparseable_returns_none(self, value):
        from demand_compliance.services.compliance.time_bar import parse_origin_date

        assert parse_origin_date(value) is None

    @pytest.mark.parametrize("value", ["March 2022", "12/2021", "5", "Jan 3"])
    def test_free_form_dates_are_rejected(self, value):
        from demand_compliance.services.compliance.time_bar import parse_origin_date

        assert parse_origin_date(value) is None

    def test_partial_iso_resolves_to_first_day(self):
        from demand_compliance.services.compliance.time_bar import parse_origin_date

        assert parse_origin_date("2022-03") == date(2022, 3, 1)


class TestIsDebtTimeBarred:
    """Tests for time_bar.is_debt_time_barred"""

    TODAY = date(2026, 6, 1)

    def test_one_day_past_sol_is_barred(self):
        from demand_compliance.services.compliance.time_bar import is_debt_time_barred

        origin = self.TODAY - relativedelta(years=4, days=1)
        assert is_debt_time_barred(origin, "CA", today=self.TODAY) is True

    def test_one_day_short_of_sol_is_not_barred(self):
        from demand_compliance.services.compliance.time_bar import is_debt_time_barred

        origin = self.TODAY - relativedelta(years=4) + relativedelta(days=1)
        assert is_debt_time_barred(origin, "CA", today=self.TODAY) is False

    def test_exact_anniversary_is_barred(self):
        from demand_compliance.services.compliance.time_bar import is_debt_time_barred

        origin = self.TODAY - relativedelta(years=4)
        assert is_debt_time_barred(origin, "CA", today=self.TODAY) is True

    def test_future_origin_is_not_barred(self):
        from demand_compliance.services.compliance.time_bar import is_debt_time_barred

        assert is_debt_time_barred(self.TODAY + relativedelta(days=10), "CA", today=self.TODAY) is False

    def test_datetime_today_is_accepted(self):
        from demand_compliance.services.compliance.time_bar import is_debt_time_barred

        now = datetime(2026, 6, 1, 12, 30)
        assert is_debt_time_barred("2022-06-01", "CA", today=now) is True
        assert is_debt_time_barred("2022-06-02", "CA", today=now) is False
        assert is_debt_time_barred(datetime(2026, 6, 1, 18, 0), "CA", today=now) is False

    def test_unparseable_origin_is_not_barred(self):
        from demand_compliance.services.compliance.time_bar import is_debt_time_barred

        assert is_debt_time_barred("garbage", "CA", today=self.TODAY) is False

    def test_unknown_state_uses_default_sol(self):
        from demand_compliance.services.compliance.state_rules import STATE_RULE_TABLE
        from demand_compliance.services.compliance.time_bar import is_debt_time_barred

        years = STATE_RULE_TABLE.default_statute_years
        barred = self.TODAY - relativedelta(years=years, days=1)
        fresh = self.TODAY - relativedelta(years=years) + relativedelta(days=1)
        assert is_debt_time_barred(barred, "ZZ", today=self.TODAY) is True
        assert is_debt_time_barred(fresh, "ZZ", today=self.TODAY) is False

    def test_time_bar_date(self):
        from demand_compliance.services.compliance.time_bar import time_bar_date

        assert time_bar_date("2020-02-29", "TX") == date(2024, 2, 29)
        assert time_bar_date(None, "TX") is None
