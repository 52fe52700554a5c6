"""Demand Compliance - Data Models"""
from .compliance import (
    # Enums
    RequirementMode,
    # Inputs
    DebtDetails, ValidationContext,
    # Reference data
    StateRule, ComplianceRequirement,
    # Outputs
    ComplianceCheckResult, ComplianceResult, DisclosureBlock,
)

__all__ = [
    "RequirementMode",
    "DebtDetails", "ValidationContext",
    "StateRule", "ComplianceRequirement",
    "ComplianceCheckResult", "ComplianceResult", "DisclosureBlock",
]
