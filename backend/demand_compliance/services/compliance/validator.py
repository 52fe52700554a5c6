"""
Demand Compliance - FDCPA Validator

Main orchestrator that runs every compliance rule against a letter body and
aggregates the verdicts into a ComplianceResult.

- is_compliant: every required check passed
- score: percentage of required checks that passed (100 when none fail)
- missing_requirements: failed required check ids, in registry order
- suggestions: remediation text of failed checks, de-duplicated

Rule exceptions are programming defects and propagate to the caller. A
compliance verdict is never fabricated.
"""
from __future__ import annotations
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Dict, List

from ...models.compliance import (
    ComplianceCheckResult, ComplianceRequirement, ComplianceResult, ValidationContext,
)
from .requirements import (
    FDCPA_REQUIREMENTS, MINI_MIRANDA, VALIDATION_NOTICE, DEBT_AMOUNT,
    CREDITOR_IDENTIFICATION, TIME_BARRED_DISCLOSURE, DISPUTE_RIGHTS, SEND_TIME_WINDOW, is_required,
)
from .rules import (
    check_mini_miranda, check_validation_notice, check_debt_amount,
    check_creditor_identification, check_time_barred_disclosure, check_dispute_rights,
    check_send_time_window,
)
from .state_rules import STATE_RULE_TABLE, StateRuleTable

logger = logging.getLogger(__name__)

RuleValidator = Callable[[str, ValidationContext], ComplianceCheckResult]


def calculate_score(checks: List[ComplianceCheckResult]) -> int:
    """Percentage of required checks that passed. Non-required checks are ignored."""
    required = [c for c in checks if c.required]
    if not required:
        return 100
    passed = sum(1 for c in required if c.passed)
    return int(round(100 * passed / len(required)))


def dedupe(items: List[str]) -> List[str]:
    """Remove exact duplicates, keeping first occurrence order."""
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


class ComplianceValidator:
    """
    Runs all registered compliance rules against one letter.

    Stateless with respect to validation inputs: one instance may serve
    concurrent validations. The StateRuleTable is shared read-only.
    """

    def __init__(self, state_rules: StateRuleTable = STATE_RULE_TABLE):
        self.state_rules = state_rules
        self.rule_validators: Dict[str, RuleValidator] = {
            MINI_MIRANDA: check_mini_miranda,
            VALIDATION_NOTICE: check_validation_notice,
            DEBT_AMOUNT: check_debt_amount,
            CREDITOR_IDENTIFICATION: check_creditor_identification,
            TIME_BARRED_DISCLOSURE: partial(check_time_barred_disclosure, state_rules=state_rules),
            DISPUTE_RIGHTS: check_dispute_rights,
            SEND_TIME_WINDOW: check_send_time_window,
        }

    @property
    def requirements(self) -> List[ComplianceRequirement]:
        """Registered requirements that have a rule, in evaluation order."""
        return [r for r in FDCPA_REQUIREMENTS if r.id in self.rule_validators]

    def run_check(
        self,
        requirement: ComplianceRequirement,
        content: str,
        context: ValidationContext,
    ) -> ComplianceCheckResult:
        result = self.rule_validators[requirement.id](content, context)
        expected_required = is_required(requirement, context, self.state_rules)
        if result.required != expected_required:
            raise RuntimeError(
                f"Rule '{requirement.id}' reported required={result.required} "
                f"but requirement mode resolves to {expected_required}"
            )
        return result

    def validate(self, content: str, context: ValidationContext) -> ComplianceResult:
        """
        Validate a letter body against every registered requirement.

        Args:
            content: Letter text (AI-drafted, template-filled or hand-edited)
            context: Jurisdiction and debt details

        Returns:
            A fresh ComplianceResult
        """
        checks: List[ComplianceCheckResult] = []
        missing_requirements: List[str] = []
        warnings: List[str] = []
        suggestions: List[str] = []

        for requirement in self.requirements:
            result = self.run_check(requirement, content, context)
            checks.append(result)

            if result.passed:
                continue

            if result.required:
                missing_requirements.append(result.id)
            else:
                warnings.append(f"{result.name}: {result.details}")

            if result.suggestion:
                suggestions.append(result.suggestion)

            logger.debug(f"Compliance check failed: {result.id} (required={result.required})")

        state_rule = self.state_rules.get_rule_or_fallback(context.state)
        for requirement_text in state_rule.additional_requirements:
            warnings.append(f"State requirement: {requirement_text}")

        compliance = ComplianceResult(
            is_compliant=not missing_requirements,
            score=calculate_score(checks),
            checks=checks,
            missing_requirements=missing_requirements,
            warnings=warnings,
            suggestions=dedupe(suggestions),
            validated_at=datetime.now(timezone.utc),
        )

        logger.info(
            f"Compliance validation complete: state={state_rule.state_code or 'unknown'}, "
            f"score={compliance.score}, compliant={compliance.is_compliant}, "
            f"missing={len(missing_requirements)}, warnings={len(warnings)}"
        )

        return compliance

    def quick_validate(self, content: str, context: ValidationContext) -> bool:
        """Pass/fail only. Agrees with validate().is_compliant; stops at the first failure."""
        for requirement in self.requirements:
            if not is_required(requirement, context, self.state_rules):
                continue
            if not self.run_check(requirement, content, context).passed:
                return False
        return True


_default_validator = ComplianceValidator()


def validate_demand_letter(content: str, context: ValidationContext) -> ComplianceResult:
    """Convenience function using the default state rule table."""
    return _default_validator.validate(content, context)


def quick_validate(content: str, context: ValidationContext) -> bool:
    return _default_validator.quick_validate(content, context)
