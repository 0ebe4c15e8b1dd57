"""
Compliance taxonomy for audit findings and derived recommendations.

Three small vocabularies:
  - ``ComplianceStatus`` — upstream verdict for one control.
  - ``PriorityTier``     — display urgency derived from status + score.
  - ``ExtractionTier``   — which narrative-parsing strategy produced a result.

``NarrativeField`` names the three parts of a parsed narrative and doubles
as the category key of the heuristic keyword table.

Usage example::

    from audit_insights.taxonomy.compliance_taxonomy import PriorityTier

    tiers = sorted(tiers, key=lambda t: t.rank)

This module has NO imports from any other ``audit_insights`` package.
"""

from enum import StrEnum


class ComplianceStatus(StrEnum):
    """Upstream compliance verdict for a single control."""

    COMPLIANT = "Compliant"
    """The document satisfies the control."""

    PARTIAL = "Partial"
    """The document addresses the control incompletely."""

    NON_COMPLIANT = "Non-Compliant"
    """The document does not address the control."""


class PriorityTier(StrEnum):
    """Recommendation urgency. There is deliberately no ``Low`` tier."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"

    @property
    def rank(self) -> int:
        """Stable sort key: 1 is most urgent."""
        return _TIER_RANK[self]


_TIER_RANK: dict[PriorityTier, int] = {
    PriorityTier.CRITICAL: 1,
    PriorityTier.HIGH: 2,
    PriorityTier.MEDIUM: 3,
}


class NarrativeField(StrEnum):
    """The three parts of a parsed remediation narrative."""

    ISSUE = "issue"
    WHY = "why"
    ACTIONS = "actions"


class ExtractionTier(StrEnum):
    """Which parsing strategy produced a ``ParsedNarrative``."""

    STRUCTURED = "structured"
    """Numbered ``ISSUE IDENTIFIED`` / ``WHY IT MATTERS`` / ``RECOMMENDED ACTION`` labels."""

    HEURISTIC = "heuristic"
    """Keyword-based sentence classification."""

    VERBATIM = "verbatim"
    """Whole normalized text surfaced as the issue."""

    EMPTY = "empty"
    """Input was empty or absent."""
