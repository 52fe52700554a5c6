"""
Review Gate

A letter may be submitted for attorney review only when its compliance
result is compliant and its score meets the workflow's threshold. The
threshold is workflow policy; the engine only reports facts.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ...models.compliance import ComplianceResult


@dataclass
class ReviewGateDecision:
    allowed: bool
    score: int
    threshold: int
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "allowed": self.allowed,
            "score": self.score,
            "threshold": self.threshold,
            "reasons": list(self.reasons),
        }


def evaluate_review_eligibility(result: ComplianceResult, threshold: int) -> ReviewGateDecision:
    reasons = []
    if not result.is_compliant:
        reasons.append(
            "Cannot submit non-compliant letter for review "
            f"(missing: {', '.join(result.missing_requirements)})"
        )
    if result.score < threshold:
        reasons.append(f"Compliance score {result.score} is below the required {threshold}")
    return ReviewGateDecision(
        allowed=not reasons,
        score=result.score,
        threshold=threshold,
        reasons=reasons,
    )
