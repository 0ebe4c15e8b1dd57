"""
Derived recommendation models.

``ParsedNarrative`` is the structured breakdown of a remediation text:
``issue``, ``why`` and an ordered tuple of ``actions``.

``AssembledRecommendation`` pairs a ``Finding`` with its ``PriorityTier`` and
``ParsedNarrative``. It is built per render and thrown away afterwards.

Both models are frozen.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from audit_insights.models.finding import Finding
from audit_insights.taxonomy.compliance_taxonomy import ExtractionTier, PriorityTier


class ParsedNarrative(BaseModel):
    """Structured view of one remediation text.

    Attributes:
        issue: What is wrong; may be empty.
        why: Why it matters; may be empty.
        actions: Remediation steps in document order; may be empty.
        extraction: Which parsing tier produced this result.
    """

    model_config = ConfigDict(frozen=True)

    issue: str = ""
    why: str = ""
    actions: tuple[str, ...] = ()
    extraction: ExtractionTier = ExtractionTier.EMPTY

    @property
    def is_empty(self) -> bool:
        return not (self.issue or self.why or self.actions)

    @property
    def is_verbatim(self) -> bool:
        """True when no structure was found and the raw text is the issue."""
        return self.extraction == ExtractionTier.VERBATIM


class AssembledRecommendation(BaseModel):
    """Display-ready pairing of a finding with its tier and narrative."""

    model_config = ConfigDict(frozen=True)

    finding: Finding
    tier: PriorityTier
    narrative: ParsedNarrative

    @property
    def rank(self) -> int:
        return self.tier.rank

    def to_record(self) -> dict[str, Any]:
        """Flatten into a JSON-serialisable dict (one object per recommendation)."""
        f = self.finding
        return {
            "audit_id": f.audit_id,
            "document_id": f.document_id,
            "document_name": f.document_name,
            "framework_id": f.framework_id,
            "control_id": f.control_id,
            "control_title": f.control_title,
            "status": f.status.value,
            "similarity_score": f.similarity_score,
            "priority": self.tier.value,
            "priority_rank": self.rank,
            "issue": self.narrative.issue,
            "why": self.narrative.why,
            "actions": list(self.narrative.actions),
            "extraction": self.narrative.extraction.value,
        }
