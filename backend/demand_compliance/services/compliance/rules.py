"""
Demand Compliance - Compliance Rules

Deterministic rule-based compliance detection.
NO LLMs used here - pure logic only.

Every rule is a pure function (content, context) -> ComplianceCheckResult.
Rules share no state, may run in any order, and never raise on malformed
content: missing or garbage text degrades to passed=False with an
explanation.

Rules:
1. Mini-Miranda - debt collector identification + purpose statement
2. Validation Notice - 30-day window, dispute rights, verification rights
3. Debt Amount - currency amount stated with context
4. Creditor Identification - creditor named with relationship language
5. Time-Barred Disclosure - state-conditional SOL disclosure
6. Dispute Rights - advisory 1692g(a)(3)-(5) detail
7. Contact Time Window - advisory Regulation F 8am-9pm delivery window
"""
from __future__ import annotations
import re
from typing import List, Optional

from dateutil import tz

from ...config import DEFAULT_DEBTOR_TIMEZONE
from ...models.compliance import ComplianceCheckResult, StateRule, ValidationContext
from . import patterns as P
from .requirements import (
    MINI_MIRANDA, VALIDATION_NOTICE, DEBT_AMOUNT, CREDITOR_IDENTIFICATION,
    TIME_BARRED_DISCLOSURE, DISPUTE_RIGHTS, SEND_TIME_WINDOW, get_requirement,
)
from .state_rules import STATE_RULE_TABLE, StateRuleTable, normalize_state_code
from .time_bar import is_debt_time_barred


def _result(
    requirement_id: str,
    passed: bool,
    required: bool,
    details: str,
    suggestion: Optional[str] = None,
    matched_text: Optional[str] = None,
) -> ComplianceCheckResult:
    requirement = get_requirement(requirement_id)
    return ComplianceCheckResult(
        id=requirement.id,
        section=requirement.section,
        name=requirement.name,
        passed=passed,
        required=required,
        details=details,
        suggestion=suggestion,
        matched_text=matched_text,
    )


# =============================================================================
# CURRENCY HELPERS
# =============================================================================

def format_currency(amount: float) -> str:
    """Format as US dollars, e.g. 5350 -> '$5,350.00'."""
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def parse_currency(text: str) -> Optional[float]:
    """Strip '$' and ',' and parse. Returns None when no digits remain."""
    cleaned = text.replace("$", "").replace(",", "")
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def extract_currency_amounts(content: str) -> List[str]:
    return P.CURRENCY_PATTERN.findall(content or "")


# =============================================================================
# RULE 1: MINI-MIRANDA
# =============================================================================

def check_mini_miranda(content: str, context: ValidationContext) -> ComplianceCheckResult:
    """
    Check for the Mini-Miranda warning.

    15 U.S.C. § 1692e(11) requires (or substantial equivalent):
    "This is an attempt to collect a debt and any information obtained will
    be used for that purpose."

    Both halves are required. When only one half is present the suggestion
    names the missing half.
    """
    content = content or ""
    collector_match = P.first_match(P.DEBT_COLLECTOR_ID_PATTERNS, content)
    purpose_match = P.first_match(P.INFORMATION_PURPOSE_PATTERNS, content)

    has_collector_id = collector_match is not None
    has_purpose = purpose_match is not None
    passed = has_collector_id and has_purpose

    suggestion = None
    matched_text = None

    if passed:
        details = "Mini-Miranda warning present (debt collector identification and purpose statement)"
        matched_text = collector_match
    elif has_collector_id:
        details = "Debt collector identification found, but purpose statement missing"
        suggestion = 'Add the purpose statement: "any information obtained will be used for that purpose"'
        matched_text = collector_match
    elif has_purpose:
        details = "Purpose statement found, but debt collector identification missing"
        suggestion = 'Add the debt collector identification: "This is an attempt to collect a debt" or similar language'
        matched_text = purpose_match
    else:
        details = "Mini-Miranda warning not detected"
        suggestion = (
            'Add: "This is an attempt to collect a debt and any information obtained '
            'will be used for that purpose."'
        )

    return _result(MINI_MIRANDA, passed, True, details, suggestion, matched_text)


# =============================================================================
# RULE 2: VALIDATION NOTICE
# =============================================================================

THIRTY_DAY_COMPONENT = "30-day dispute window"
DISPUTE_COMPONENT = "dispute rights"
VERIFICATION_COMPONENT = "verification rights"
ORIGINAL_CREDITOR_COMPONENT = "original creditor disclosure"

_VALIDATION_COMPONENT_SUGGESTIONS = {
    THIRTY_DAY_COMPONENT: 'Add: "Within 30 days of receiving this notice, you may dispute this debt."',
    DISPUTE_COMPONENT: "Add language explaining the right to dispute the debt validity.",
    VERIFICATION_COMPONENT: 'Add: "If you dispute this debt, we will provide verification."',
}


def check_validation_notice(content: str, context: ValidationContext) -> ComplianceCheckResult:
    """
    Check for the Regulation F validation notice (12 CFR § 1006.34).

    Core components (all gating): 30-day window, dispute rights, verification
    rights. Original creditor disclosure is tracked but never gating.
    """
    content = content or ""
    components = {
        THIRTY_DAY_COMPONENT: P.any_match(P.THIRTY_DAY_WINDOW_PATTERNS, content),
        DISPUTE_COMPONENT: P.any_match(P.DISPUTE_RIGHTS_PATTERNS, content),
        VERIFICATION_COMPONENT: P.any_match(P.VERIFICATION_RIGHTS_PATTERNS, content),
    }
    has_original_creditor = P.any_match(P.ORIGINAL_CREDITOR_PATTERNS, content)

    missing_core = [name for name, present in components.items() if not present]
    passed = not missing_core

    suggestion = None
    if passed:
        if has_original_creditor:
            details = "Complete validation notice present"
        else:
            details = f"Validation notice present ({ORIGINAL_CREDITOR_COMPONENT} optional/conditional)"
    else:
        details = f"Validation notice incomplete - missing: {', '.join(missing_core)}"
        if context.is_initial_contact:
            details += " (initial communication: the notice must be included or follow within 5 days)"
        suggestion = " ".join(_VALIDATION_COMPONENT_SUGGESTIONS[name] for name in missing_core)

    return _result(VALIDATION_NOTICE, passed, True, details, suggestion)


# =============================================================================
# RULE 3: DEBT AMOUNT
# =============================================================================

def _has_itemization(content: str, context: ValidationContext) -> bool:
    debt = context.debt_details
    has_principal = P.ITEMIZATION_PRINCIPAL.search(content) is not None
    has_interest = P.ITEMIZATION_INTEREST.search(content) is not None if debt.interest else True
    has_fees = P.ITEMIZATION_FEES.search(content) is not None if debt.fees else True
    return has_principal and has_interest and has_fees


def check_debt_amount(content: str, context: ValidationContext) -> ComplianceCheckResult:
    """
    Check that the debt amount is stated (15 U.S.C. § 1692g(a)(1)).

    Passes when a currency amount is present AND either amount-context
    phrasing exists or the expected total/principal appears among the
    amounts alongside a reference to the debt. A bare dollar figure with no
    surrounding language fails as "context unclear".

    Expected-amount matching is an exact float comparison against
    principal + interest + fees (or principal); there is no cent tolerance.
    Itemization is reported but never gating.
    """
    content = content or ""
    debt = context.debt_details
    total_expected = debt.total
    expected_formatted = format_currency(total_expected)

    currency_matches = extract_currency_amounts(content)
    has_amount_context = P.any_match(P.AMOUNT_CONTEXT_PATTERNS, content)

    expected_match = None
    for match in currency_matches:
        value = parse_currency(match)
        if value is not None and (value == total_expected or value == debt.principal):
            expected_match = match
            break

    has_expected_amount = expected_match is not None
    has_debt_reference = P.any_match(P.DEBT_REFERENCE_PATTERNS, content)
    passed = bool(currency_matches) and (
        has_amount_context or (has_expected_amount and has_debt_reference)
    )

    suggestion = None
    matched_text = None

    if passed and has_expected_amount:
        details = f"Debt amount stated ({expected_formatted})"
        matched_text = expected_match
        if debt.has_additional_charges and not _has_itemization(content, context):
            details += " - Consider adding itemized breakdown"
    elif passed:
        details = "Debt amount stated"
        matched_text = currency_matches[0]
        if total_expected > 0:
            suggestion = f"Verify the stated amount matches the debt total of {expected_formatted}"
    elif currency_matches:
        details = "Currency amounts found but context unclear"
        suggestion = (
            f'Add clear language such as "the amount owed is {expected_formatted}" '
            f'or "total balance due: {expected_formatted}"'
        )
    else:
        details = "No debt amount found in letter"
        suggestion = f"Add the debt amount: {expected_formatted}"

    return _result(DEBT_AMOUNT, passed, True, details, suggestion, matched_text)


# =============================================================================
# RULE 4: CREDITOR IDENTIFICATION
# =============================================================================

def check_creditor_identification(content: str, context: ValidationContext) -> ComplianceCheckResult:
    """
    Check that the creditor is identified (15 U.S.C. § 1692g(a)(2)).

    Creditor name (case-insensitive substring) AND relationship language
    must both be present. A distinct original creditor that is not mentioned
    only adds a note to the details.
    """
    content = content or ""
    debt = context.debt_details
    creditor_name = (debt.creditor_name or "").strip()
    lowered = content.lower()

    creditor_mentioned = bool(creditor_name) and creditor_name.lower() in lowered
    has_relationship_language = P.CREDITOR_RELATIONSHIP_PATTERN.search(content) is not None
    passed = creditor_mentioned and has_relationship_language

    suggestion = None
    matched_text = None

    if passed:
        details = f'Creditor "{creditor_name}" identified in letter'
        matched_text = _original_casing(content, creditor_name)
    elif not creditor_mentioned:
        details = "Creditor name not found in letter content"
        suggestion = f'Ensure the creditor name "{creditor_name}" appears in the letter'
    else:
        details = "Creditor name present but context unclear"
        suggestion = 'Add clear language like "debt owed to [creditor name]" or "on behalf of [creditor name]"'

    if passed and debt.has_distinct_original_creditor:
        if debt.original_creditor.lower() not in lowered:
            details += (
                f'. Note: Original creditor "{debt.original_creditor}" not mentioned '
                "(may be required upon request)"
            )

    return _result(CREDITOR_IDENTIFICATION, passed, True, details, suggestion, matched_text)


def _original_casing(content: str, needle: str) -> str:
    """Return needle as it is cased in content (for UI highlighting)."""
    match = re.search(re.escape(needle), content, re.IGNORECASE)
    return match.group(0) if match else needle


# =============================================================================
# RULE 5: TIME-BARRED DISCLOSURE
# =============================================================================

def _has_state_specific_language(content: str, state_rule: Optional[StateRule]) -> bool:
    """Any key phrase (>10 chars) of a state-mandated sentence appears in content."""
    if state_rule is None or not state_rule.additional_disclosures:
        return True
    lowered = content.lower()
    for disclosure in state_rule.additional_disclosures:
        key_phrases = [p.strip() for p in re.split(r"[.,;]+", disclosure.lower()) if len(p.strip()) > 10]
        if any(phrase in lowered for phrase in key_phrases):
            return True
    return False


def time_barred_suggestion(state_code: str, state_rule: Optional[StateRule]) -> str:
    if state_rule is not None and state_rule.additional_disclosures:
        return f'Add {state_code}-required disclosure: "{state_rule.additional_disclosures[0]}"'
    return (
        'Add disclosure: "The law limits how long you can be sued on a debt. '
        'Because of the age of your debt, we will not sue you for it."'
    )


def check_time_barred_disclosure(
    content: str,
    context: ValidationContext,
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> ComplianceCheckResult:
    """
    Check for a time-barred debt disclosure (state-specific).

    - Debt not time-barred: inapplicable, passes, not required.
    - Time-barred, state does not mandate disclosure: passes with advisory note.
    - Time-barred, state mandates disclosure: a time-bar phrase is required.
      Revival warning and state-mandated wording only change the details.
    """
    content = content or ""
    state = normalize_state_code(context.state)
    label = state or "unknown jurisdiction"
    sol = state_rules.get_statute_of_limitations(state)

    time_barred = is_debt_time_barred(
        context.debt_details.origin_date, state, today=context.as_of, state_rules=state_rules,
    )
    if not time_barred:
        return _result(
            TIME_BARRED_DISCLOSURE, True, False,
            f"Debt is within {label} statute of limitations ({sol} years)",
        )

    if not state_rules.requires_time_barred_disclosure(state):
        return _result(
            TIME_BARRED_DISCLOSURE, True, False,
            f"{label} does not require time-barred disclosure, but consider adding for consumer protection",
        )

    state_rule = state_rules.get_rule(state)
    disclosure_match = P.first_match(P.TIME_BARRED_PATTERNS, content)
    passed = disclosure_match is not None

    suggestion = None
    if passed:
        details = f"Time-barred debt disclosure present for {label}"
        if not P.any_match(P.REVIVAL_WARNING_PATTERNS, content):
            details += " (consider adding revival warning)"
        if not _has_state_specific_language(content, state_rule):
            details += f" ({label} may require specific language)"
    else:
        details = f"Missing required time-barred debt disclosure for {label} (SOL: {sol} years)"
        suggestion = time_barred_suggestion(state, state_rule)

    return _result(TIME_BARRED_DISCLOSURE, passed, True, details, suggestion, disclosure_match)


# =============================================================================
# RULE 6: DISPUTE RIGHTS (advisory)
# =============================================================================

_DISPUTE_SUGGESTIONS = {
    "30-day dispute window": '"You have 30 days from receipt of this notice to dispute this debt."',
    "verification provision": '"If you dispute this debt in writing, we will provide verification."',
    "validity assumption statement": '"If not disputed within 30 days, the debt will be assumed valid."',
}


def check_dispute_rights(content: str, context: ValidationContext) -> ComplianceCheckResult:
    """
    Advisory check of the 1692g(a)(3)-(5) dispute rights detail.

    Passes on 30-day window + verification provision. Never required.
    """
    content = content or ""
    core = {
        "30-day dispute window": P.any_match(P.DISPUTE_WINDOW_PATTERNS, content),
        "verification provision": P.any_match(P.VERIFICATION_PROVISION_PATTERNS, content),
    }
    extras = {
        "validity assumption statement": P.any_match(P.ASSUME_VALID_PATTERNS, content),
        "written request instruction": P.any_match(P.WRITTEN_REQUEST_PATTERNS, content),
    }

    missing_core = [name for name, present in core.items() if not present]
    missing_extras = [name for name, present in extras.items() if not present]
    passed = not missing_core

    suggestion = None
    if passed:
        if missing_extras:
            details = f"Core dispute rights present (consider adding: {', '.join(missing_extras)})"
        else:
            details = "Complete dispute rights disclosure present"
    else:
        details = f"Dispute rights incomplete - missing: {', '.join(missing_core)}"
        phrases = [
            _DISPUTE_SUGGESTIONS[name]
            for name in missing_core + missing_extras
            if name in _DISPUTE_SUGGESTIONS
        ]
        suggestion = f"Add: {' '.join(phrases)}"

    return _result(DISPUTE_RIGHTS, passed, False, details, suggestion)


# =============================================================================
# RULE 7: CONTACT TIME WINDOW (advisory)
# =============================================================================

EARLIEST_CONTACT_HOUR = 8   # 8:00 a.m. local
LATEST_CONTACT_HOUR = 21    # 9:00 p.m. local, exclusive


def check_send_time_window(content: str, context: ValidationContext) -> ComplianceCheckResult:
    """
    Advisory check that a scheduled send time falls inside the Regulation F
    contact window in the debtor's local time. Never required.

    A naive send_time is read as wall-clock time in the debtor's timezone.
    An unknown or missing timezone falls back to DEFAULT_DEBTOR_TIMEZONE.
    """
    send_time = context.send_time
    if send_time is None:
        return _result(SEND_TIME_WINDOW, True, False, "No scheduled send time; contact window not evaluated")

    zone_name = context.debtor_timezone or DEFAULT_DEBTOR_TIMEZONE
    zone = tz.gettz(zone_name)
    if zone is None:
        zone_name = DEFAULT_DEBTOR_TIMEZONE
        zone = tz.gettz(zone_name)

    if send_time.tzinfo is None:
        local = send_time.replace(tzinfo=zone)
    else:
        local = send_time.astimezone(zone)

    local_text = f"{local:%Y-%m-%d %H:%M} {zone_name}"
    if EARLIEST_CONTACT_HOUR <= local.hour < LATEST_CONTACT_HOUR:
        return _result(
            SEND_TIME_WINDOW, True, False,
            f"Scheduled send time {local_text} is within permitted contact hours",
        )

    return _result(
        SEND_TIME_WINDOW, False, False,
        f"Scheduled send time {local_text} is outside permitted contact hours (8:00 AM - 9:00 PM)",
        f"Schedule delivery between 8:00 AM and 9:00 PM in the debtor's timezone ({zone_name})",
    )
