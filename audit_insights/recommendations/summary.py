"""
Header counts for a batch of assembled recommendations.

``critical`` counts Critical-tier recommendations. ``improvements_needed``
is NOT the High tier: it counts Partial findings whose score clears the
critical bound, which also includes Partial findings that land in Medium.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from audit_insights.config import PriorityConfig
from audit_insights.models.recommendation import AssembledRecommendation
from audit_insights.taxonomy.compliance_taxonomy import ComplianceStatus, PriorityTier


@dataclass
class RecommendationSummary:
    """Counts shown above the recommendation list.

    Attributes:
        critical:            Recommendations in the Critical tier.
        improvements_needed: Partial findings with score >= critical bound.
        total:               All recommendations.
        by_tier:             Count per tier; every tier present, zero-filled.
    """

    critical:            int = 0
    improvements_needed: int = 0
    total:               int = 0
    by_tier:             dict[PriorityTier, int] = field(
        default_factory=lambda: {tier: 0 for tier in PriorityTier}
    )

    def to_dict(self) -> dict:
        return {
            "critical": self.critical,
            "improvements_needed": self.improvements_needed,
            "total": self.total,
            "by_tier": {tier.value: n for tier, n in self.by_tier.items()},
        }


def summarize(
    recommendations: Iterable[AssembledRecommendation],
    config:          Optional[PriorityConfig] = None,
) -> RecommendationSummary:
    """Count recommendations for the summary header.

    Args:
        recommendations: Assembled recommendations (any order).
        config:          Must match the config used for classification so
                         ``improvements_needed`` uses the same critical bound.

    Returns:
        ``RecommendationSummary``.
    """
    cfg = config or PriorityConfig()
    summary = RecommendationSummary()

    for rec in recommendations:
        summary.total += 1
        summary.by_tier[rec.tier] += 1
        if rec.tier == PriorityTier.CRITICAL:
            summary.critical += 1
        if (
            rec.finding.status == ComplianceStatus.PARTIAL
            and rec.finding.similarity_score >= cfg.critical_below
        ):
            summary.improvements_needed += 1

    return summary
