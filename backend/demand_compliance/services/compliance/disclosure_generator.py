"""
Disclosure Generator
Generates the FDCPA disclosure blocks a demand letter must carry.

The generator emits what the compliance rules expect: block ids are rule ids,
and a block is marked required exactly when the matching rule is required
for the same context. Every generated block passes its own rule.
"""
from __future__ import annotations
from typing import List, Optional

from ...models.compliance import DisclosureBlock, ValidationContext
from .requirements import (
    MINI_MIRANDA, VALIDATION_NOTICE, DISPUTE_RIGHTS, CREDITOR_IDENTIFICATION, DEBT_AMOUNT,
    TIME_BARRED_DISCLOSURE, get_requirement, is_required,
)
from .rules import format_currency
from .state_rules import STATE_RULE_TABLE, StateRuleTable, normalize_state_code
from .time_bar import is_debt_time_barred

DISCLOSURE_SEPARATOR = "\n\n---\n\n"

GENERIC_TIME_BARRED_TEXT = (
    "The law limits how long you can be sued on a debt. Because of the age of your debt, "
    "we will not sue you for it."
)
REVIVAL_WARNING_TEXT = "If you make a payment on this debt, the debt may become enforceable against you."


def _block(block_id: str, content: str, required: bool, name: Optional[str] = None) -> DisclosureBlock:
    requirement = get_requirement(block_id)
    return DisclosureBlock(
        id=block_id,
        name=name or requirement.name,
        section=requirement.section,
        required=required,
        content=content,
    )


def generate_mini_miranda() -> DisclosureBlock:
    return _block(
        MINI_MIRANDA,
        "This is an attempt to collect a debt. Any information obtained will be used for that "
        "purpose. This communication is from a debt collector.",
        required=True,
    )


def generate_validation_notice() -> DisclosureBlock:
    return _block(
        VALIDATION_NOTICE,
        "IMPORTANT NOTICE REGARDING YOUR RIGHTS\n\n"
        "Unless you dispute the validity of this debt, or any portion thereof, within thirty (30) "
        "days after receipt of this notice, this debt will be assumed to be valid by us. If you "
        "notify us in writing within the thirty (30) day period that the debt, or any portion "
        "thereof, is disputed, we will obtain verification of the debt or a copy of a judgment "
        "against you and mail a copy of such verification or judgment to you. Upon your written "
        "request within the thirty (30) day period, we will provide you with the name and address "
        "of the original creditor, if different from the current creditor.",
        required=True,
    )


def generate_dispute_rights() -> DisclosureBlock:
    """Advisory block; mirrors the non-gating dispute rights rule."""
    return _block(
        DISPUTE_RIGHTS,
        "YOUR RIGHTS UNDER FEDERAL LAW\n\n"
        "You have the right to dispute this debt. Within 30 days of receiving this notice:\n\n"
        "• If you dispute the debt in writing, we will provide verification of the debt.\n"
        "• If you request in writing, we will provide the name and address of the original "
        "creditor if different from the current creditor.\n"
        "• If you do not dispute this debt within 30 days, we will assume the debt is valid.\n\n"
        "To dispute this debt or request verification, send your written request to the address above.",
        required=False,
    )


def generate_creditor_block(creditor_name: str, original_creditor: Optional[str] = None) -> DisclosureBlock:
    content = f"This debt is owed to {creditor_name}."
    if original_creditor and original_creditor != creditor_name:
        content += f" The original creditor was {original_creditor}."
    return _block(CREDITOR_IDENTIFICATION, content, required=True)


def generate_debt_amount_block(
    principal: float,
    interest: Optional[float] = None,
    fees: Optional[float] = None,
) -> DisclosureBlock:
    """Amount statement; itemization appended only when interest or fees are non-zero."""
    total = principal + (interest or 0) + (fees or 0)
    content = f"The amount owed is {format_currency(total)}."

    if interest or fees:
        items = [f"Principal: {format_currency(principal)}"]
        if interest:
            items.append(f"Interest: {format_currency(interest)}")
        if fees:
            items.append(f"Fees: {format_currency(fees)}")
        items.append(f"Total: {format_currency(total)}")
        content += "\n\nItemized breakdown:\n" + "\n".join(items)

    return _block(DEBT_AMOUNT, content, required=True)


def generate_time_barred_disclosure(
    state: str,
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> DisclosureBlock:
    """
    Time-barred disclosure for a jurisdiction.

    Uses the state's mandated sentence when one exists. Unknown jurisdictions
    get the generic text plus a revival warning and are never required.
    """
    code = normalize_state_code(state)
    state_rule = state_rules.get_rule(code)

    if state_rule is None:
        return _block(
            TIME_BARRED_DISCLOSURE,
            f"{GENERIC_TIME_BARRED_TEXT} {REVIVAL_WARNING_TEXT}",
            required=False,
        )

    if state_rule.additional_disclosures:
        content = state_rule.additional_disclosures[0]
    else:
        content = GENERIC_TIME_BARRED_TEXT

    return _block(
        TIME_BARRED_DISCLOSURE,
        content,
        required=state_rule.time_barred_disclosure_required,
        name=f"Time-Barred Debt Disclosure ({code})",
    )


def get_required_disclosures(
    context: ValidationContext,
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> List[DisclosureBlock]:
    """
    All disclosure blocks for a context.

    The time-barred block is included only when the debt is time-barred.
    Block required flags match the rule required flags for the same context.
    """
    debt = context.debt_details
    blocks = [
        generate_mini_miranda(),
        generate_validation_notice(),
        generate_dispute_rights(),
        generate_creditor_block(debt.creditor_name, debt.original_creditor),
        generate_debt_amount_block(debt.principal, debt.interest, debt.fees),
    ]

    if is_debt_time_barred(debt.origin_date, context.state, today=context.as_of, state_rules=state_rules):
        block = generate_time_barred_disclosure(context.state, state_rules)
        expected = is_required(get_requirement(TIME_BARRED_DISCLOSURE), context, state_rules)
        if block.required != expected:
            raise RuntimeError(
                f"Time-barred block required={block.required} disagrees with rule required={expected}"
            )
        blocks.append(block)

    return blocks


def generate_complete_disclosure(
    context: ValidationContext,
    state_rules: StateRuleTable = STATE_RULE_TABLE,
) -> str:
    """Join every block's content with a stable separator for letter assembly."""
    return DISCLOSURE_SEPARATOR.join(b.content for b in get_required_disclosures(context, state_rules))
