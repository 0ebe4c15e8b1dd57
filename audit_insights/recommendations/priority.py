"""
Priority classification: maps a finding's (status, similarity_score) pair to
a ``PriorityTier``.

Rules (evaluated in order, first match wins)
--------------------------------------------
    1. CRITICAL : status == Non-Compliant  OR  score < critical_below (0.45)
    2. HIGH     : score < high_below (0.55)
    3. MEDIUM   : everything else

Status and score come from independent upstream signals and may disagree.
Rule 1 is a disjunction: a Non-Compliant verdict forces Critical
even at a high score, and a very low score forces Critical even when the
status is only Partial. Both bounds are strict ``<``.

The score is compared as given. Out-of-range values (negative, > 1.0, NaN)
are not an error here; NaN compares False everywhere and lands in MEDIUM
unless the status is Non-Compliant.
"""

from __future__ import annotations

from typing import Optional

from audit_insights.config import PriorityConfig
from audit_insights.taxonomy.compliance_taxonomy import ComplianceStatus, PriorityTier

_DEFAULT_PRIORITY = PriorityConfig()


def classify(
    status:           ComplianceStatus | str,
    similarity_score: float,
    config:           Optional[PriorityConfig] = None,
) -> PriorityTier:
    """Return the priority tier for one finding.

    Args:
        status:           Upstream verdict; enum member or its string value.
        similarity_score: Document/control similarity, nominally 0–1.
        config:           Score boundaries; defaults to 0.45 / 0.55.

    Returns:
        ``PriorityTier.CRITICAL``, ``HIGH`` or ``MEDIUM``.
    """
    cfg = config or _DEFAULT_PRIORITY
    if status == ComplianceStatus.NON_COMPLIANT or similarity_score < cfg.critical_below:
        return PriorityTier.CRITICAL
    if similarity_score < cfg.high_below:
        return PriorityTier.HIGH
    return PriorityTier.MEDIUM
