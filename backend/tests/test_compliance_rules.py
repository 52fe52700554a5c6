"""
Tests for the individual compliance rules.

Each rule is a pure (content, context) -> ComplianceCheckResult function;
these tests pin the pass/fail paths and the remediation text they produce.
"""
from datetime import date

import pytest

AS_OF = date(2026, 6, 1)

MINI_MIRANDA_TEXT = (
    "This is an attempt to collect a debt and any information obtained will be used for that purpose."
)


def make_context(state="OH", as_of=AS_OF, **debt_overrides):
    from demand_compliance.models.compliance import DebtDetails, ValidationContext

    debt = {
        "principal": 1000.0,
        "interest": 0.0,
        "fees": 0.0,
        "origin_date": "2024-01-15",
        "creditor_name": "Acme Bank",
    }
    debt.update(debt_overrides)
    return ValidationContext(state=state, debt_details=DebtDetails(**debt), as_of=as_of)


class TestMiniMiranda:
    """Tests for check_mini_miranda"""

    def test_full_warning_passes(self):
        from demand_compliance.services.compliance.rules import check_mini_miranda

        result = check_mini_miranda(MINI_MIRANDA_TEXT, make_context())
        assert result.passed is True
        assert result.required is True
        assert result.suggestion is None
        assert "debt collector identification and purpose statement" in result.details
        assert result.matched_text.lower() == "this is an attempt to collect a debt"

    def test_collector_only_names_missing_purpose(self):
        from demand_compliance.services.compliance.rules import check_mini_miranda

        result = check_mini_miranda("This is an attempt to collect a debt.", make_context())
        assert result.passed is False
        assert "purpose statement missing" in result.details
        assert "purpose statement" in result.suggestion
        assert "used for that purpose" in result.suggestion

    def test_purpose_only_names_missing_collector_id(self):
        from demand_compliance.services.compliance.rules import check_mini_miranda

        result = check_mini_miranda("Any information obtained will be used for that purpose.", make_context())
        assert result.passed is False
        assert "debt collector identification missing" in result.details
        assert "debt collector identification" in result.suggestion

    @pytest.mark.parametrize("phrase", [
        "This communication is from a debt collector.",
        "We are a debt collector.",
        "Our firm is acting as a debt collector.",
    ])
    def test_collector_synonyms(self, phrase):
        from demand_compliance.services.compliance.rules import check_mini_miranda

        content = f"{phrase} Any information obtained will be used for that purpose."
        assert check_mini_miranda(content, make_context()).passed is True

    def test_neither_half(self):
        from demand_compliance.services.compliance.rules import check_mini_miranda

        result = check_mini_miranda("Hello.", make_context())
        assert result.passed is False
        assert result.details == "Mini-Miranda warning not detected"
        assert result.matched_text is None


class TestValidationNotice:
    """Tests for check_validation_notice"""

    def test_generated_notice_passes(self):
        from demand_compliance.services.compliance.disclosure_generator import generate_validation_notice
        from demand_compliance.services.compliance.rules import check_validation_notice

        result = check_validation_notice(generate_validation_notice().content, make_context())
        assert result.passed is True
        assert result.details == "Complete validation notice present"

    def test_missing_verification_is_reported_individually(self):
        from demand_compliance.services.compliance.rules import check_validation_notice

        result = check_validation_notice("You may dispute this debt within 30 days.", make_context())
        assert result.passed is False
        assert result.details == "Validation notice incomplete - missing: verification rights"
        assert "verification" in result.suggestion
        assert "30 days of receiving" not in result.suggestion

    def test_initial_contact_note(self):
        from dataclasses import replace
        from demand_compliance.services.compliance.rules import check_validation_notice

        context = replace(make_context(), is_initial_contact=True)
        result = check_validation_notice("Please pay.", context)
        assert result.passed is False
        assert "initial communication" in result.details

    def test_original_creditor_is_not_gating(self):
        from demand_compliance.services.compliance.rules import check_validation_notice

        content = (
            "Within thirty days you have the right to dispute the debt. "
            "We will obtain verification of the debt."
        )
        result = check_validation_notice(content, make_context(original_creditor="Old Bank"))
        assert result.passed is True
        assert "optional/conditional" in result.details


class TestDebtAmount:
    """Tests for check_debt_amount"""

    def test_amount_owed_phrase_passes(self):
        from demand_compliance.services.compliance.rules import check_debt_amount

        result = check_debt_amount("Please note the amount owed is $1,000.00.", make_context())
        assert result.passed is True
        assert result.details == "Debt amount stated ($1,000.00)"
        assert result.matched_text == "$1,000.00"

    def test_bare_amount_is_context_unclear(self):
        from demand_compliance.services.compliance.rules import check_debt_amount

        result = check_debt_amount("$1,000.00", make_context())
        assert result.passed is False
        assert result.details == "Currency amounts found but context unclear"
        assert "the amount owed is $1,000.00" in result.suggestion

    def test_expected_total_with_debt_reference_passes(self):
        from demand_compliance.services.compliance.rules import check_debt_amount

        result = check_debt_amount("Regarding your account: $1,000.00.", make_context())
        assert result.passed is True
        assert result.matched_text == "$1,000.00"

    def test_no_amount(self):
        from demand_compliance.services.compliance.rules import check_debt_amount

        result = check_debt_amount("You owe us money.", make_context())
        assert result.passed is False
        assert result.details == "No debt amount found in letter"
        assert result.suggestion == "Add the debt amount: $1,000.00"

    def test_context_without_expected_amount_suggests_verification(self):
        from demand_compliance.services.compliance.rules import check_debt_amount

        result = check_debt_amount("You owe $999.99 today.", make_context())
        assert result.passed is True
        assert result.details == "Debt amount stated"
        assert "$1,000.00" in result.suggestion

    def test_itemization_note_is_non_gating(self):
        from demand_compliance.services.compliance.rules import check_debt_amount

        context = make_context(principal=5000.0, interest=250.0, fees=100.0)
        result = check_debt_amount("The amount owed is $5,350.00.", context)
        assert result.passed is True
        assert "Consider adding itemized breakdown" in result.details

    def test_itemized_letter_has_no_note(self):
        from demand_compliance.services.compliance.rules import check_debt_amount

        context = make_context(principal=5000.0, interest=250.0, fees=100.0)
        content = "The amount owed is $5,350.00. Principal: $5,000.00 Interest: $250.00 Fees: $100.00"
        result = check_debt_amount(content, context)
        assert result.passed is True
        assert "itemized" not in result.details

    def test_dollar_sign_without_digits_is_not_an_amount(self):
        from demand_compliance.services.compliance.rules import check_debt_amount, extract_currency_amounts

        assert extract_currency_amounts("Please pay the amount of $, today.") == []
        result = check_debt_amount("Please pay the amount of $, today.", make_context())
        assert result.passed is False
        assert result.details == "No debt amount found in letter"
        assert result.matched_text is None

    def test_currency_helpers(self):
        from demand_compliance.services.compliance.rules import format_currency, parse_currency

        assert format_currency(5350) == "$5,350.00"
        assert parse_currency("$1,234.56") == 1234.56
        assert parse_currency("$") is None
        assert parse_currency("$,") is None


class TestCreditorIdentification:
    """Tests for check_creditor_identification"""

    def test_owed_to_creditor_passes(self):
        from demand_compliance.services.compliance.rules import check_creditor_identification

        result = check_creditor_identification("This debt is owed to Acme Bank.", make_context())
        assert result.passed is True
        assert result.matched_text == "Acme Bank"

    def test_matched_text_keeps_letter_casing(self):
        from demand_compliance.services.compliance.rules import check_creditor_identification

        result = check_creditor_identification("We write on behalf of ACME BANK.", make_context())
        assert result.passed is True
        assert result.matched_text == "ACME BANK"

    def test_name_missing(self):
        from demand_compliance.services.compliance.rules import check_creditor_identification

        result = check_creditor_identification("This debt is owed to someone.", make_context())
        assert result.passed is False
        assert result.details == "Creditor name not found in letter content"
        assert "Acme Bank" in result.suggestion

    def test_name_without_relationship_language(self):
        from demand_compliance.services.compliance.rules import check_creditor_identification

        result = check_creditor_identification("Acme Bank sent this letter.", make_context())
        assert result.passed is False
        assert result.details == "Creditor name present but context unclear"

    def test_unmentioned_original_creditor_only_adds_note(self):
        from demand_compliance.services.compliance.rules import check_creditor_identification

        context = make_context(original_creditor="First Card Co")
        result = check_creditor_identification("This debt is owed to Acme Bank.", context)
        assert result.passed is True
        assert 'Original creditor "First Card Co" not mentioned' in result.details


class TestTimeBarredDisclosure:
    """Tests for check_time_barred_disclosure"""

    def test_not_time_barred_is_inapplicable(self):
        from demand_compliance.services.compliance.rules import check_time_barred_disclosure

        result = check_time_barred_disclosure("", make_context(state="CA"))
        assert result.passed is True
        assert result.required is False
        assert "within CA statute of limitations (4 years)" in result.details

    def test_barred_in_non_mandating_state_is_advisory(self):
        from demand_compliance.services.compliance.rules import check_time_barred_disclosure

        result = check_time_barred_disclosure("", make_context(state="OH", origin_date="2010-01-01"))
        assert result.passed is True
        assert result.required is False
        assert "does not require time-barred disclosure" in result.details

    def test_barred_in_mandating_state_without_disclosure_fails(self):
        from demand_compliance.services.compliance.rules import check_time_barred_disclosure

        result = check_time_barred_disclosure(
            "Please pay.", make_context(state="CA", origin_date="2015-01-01"),
        )
        assert result.passed is False
        assert result.required is True
        assert result.suggestion.startswith("Add CA-required disclosure")

    def test_state_sentence_passes_cleanly(self):
        from demand_compliance.services.compliance.rules import check_time_barred_disclosure
        from demand_compliance.services.compliance.state_rules import TX_TIME_BARRED_DISCLOSURE

        result = check_time_barred_disclosure(
            TX_TIME_BARRED_DISCLOSURE, make_context(state="TX", origin_date="2015-01-01"),
        )
        assert result.passed is True
        assert result.required is True
        assert result.details == "Time-barred debt disclosure present for TX"

    def test_generic_phrase_notes_revival_and_state_language(self):
        from demand_compliance.services.compliance.rules import check_time_barred_disclosure

        result = check_time_barred_disclosure(
            "This account is past the statute of limitations.",
            make_context(state="NY", origin_date="2015-01-01"),
        )
        assert result.passed is True
        assert "consider adding revival warning" in result.details
        assert "NY may require specific language" in result.details

    def test_blank_state_is_labelled(self):
        from demand_compliance.services.compliance.rules import check_time_barred_disclosure

        fresh = check_time_barred_disclosure("", make_context(state=""))
        barred = check_time_barred_disclosure("", make_context(state="", origin_date="2000-01-01"))
        assert fresh.details.startswith("Debt is within unknown jurisdiction statute of limitations")
        assert barred.details.startswith("unknown jurisdiction does not require")
        assert "  " not in fresh.details

    def test_florida_has_no_mandated_sentence(self):
        from demand_compliance.services.compliance.rules import check_time_barred_disclosure

        result = check_time_barred_disclosure(
            "", make_context(state="FL", origin_date="2015-01-01"),
        )
        assert result.passed is False
        assert "The law limits how long you can be sued on a debt" in result.suggestion


class TestDisputeRights:
    """Tests for check_dispute_rights"""

    def test_never_required(self):
        from demand_compliance.services.compliance.rules import check_dispute_rights

        result = check_dispute_rights("", make_context())
        assert result.passed is False
        assert result.required is False
        assert result.suggestion.startswith("Add:")

    def test_generated_block_passes(self):
        from demand_compliance.services.compliance.disclosure_generator import generate_dispute_rights
        from demand_compliance.services.compliance.rules import check_dispute_rights

        result = check_dispute_rights(generate_dispute_rights().content, make_context())
        assert result.passed is True


class TestMalformedContent:
    """Rules degrade to failures, never exceptions."""

    @pytest.mark.parametrize("content", ["", None, "Ceci n'est pas une lettre.", "$$$,,,"])
    def test_rules_do_not_raise(self, content):
        from demand_compliance.services.compliance.rules import (
            check_mini_miranda, check_validation_notice, check_debt_amount,
            check_creditor_identification, check_time_barred_disclosure, check_dispute_rights,
        )

        context = make_context(state="CA", origin_date="2015-01-01")
        for rule in (
            check_mini_miranda, check_validation_notice, check_debt_amount,
            check_creditor_identification, check_time_barred_disclosure, check_dispute_rights,
        ):
            result = rule(content, context)
            assert result.passed is False


class TestSendTimeWindow:
    """Tests for check_send_time_window"""

    def scheduled(self, send_time, debtor_timezone=None):
        from dataclasses import replace

        return replace(make_context(), send_time=send_time, debtor_timezone=debtor_timezone)

    def test_no_send_time_is_not_evaluated(self):
        from demand_compliance.services.compliance.rules import check_send_time_window

        result = check_send_time_window("", make_context())
        assert result.passed is True
        assert result.required is False
        assert "not evaluated" in result.details

    @pytest.mark.parametrize("hour,minute,allowed", [
        (7, 59, False),
        (8, 0, True),
        (20, 59, True),
        (21, 0, False),
    ])
    def test_window_edges_in_local_time(self, hour, minute, allowed):
        from datetime import datetime
        from demand_compliance.services.compliance.rules import check_send_time_window

        context = self.scheduled(datetime(2026, 6, 1, hour, minute), "America/Chicago")
        result = check_send_time_window("", context)
        assert result.passed is allowed
        assert result.required is False

    def test_aware_send_time_converted_to_debtor_zone(self):
        from datetime import datetime, timezone
        from demand_compliance.services.compliance.rules import check_send_time_window

        # 05:00 UTC is 22:00 the previous evening in Los Angeles (PDT)
        context = self.scheduled(datetime(2026, 6, 1, 5, 0, tzinfo=timezone.utc), "America/Los_Angeles")
        result = check_send_time_window("", context)
        assert result.passed is False
        assert "2026-05-31 22:00 America/Los_Angeles" in result.details
        assert "America/Los_Angeles" in result.suggestion

    def test_unknown_timezone_uses_default(self):
        from datetime import datetime
        from demand_compliance.config import DEFAULT_DEBTOR_TIMEZONE
        from demand_compliance.services.compliance.rules import check_send_time_window

        result = check_send_time_window("", self.scheduled(datetime(2026, 6, 1, 10, 0), "Mars/Olympus"))
        assert result.passed is True
        assert DEFAULT_DEBTOR_TIMEZONE in result.details
