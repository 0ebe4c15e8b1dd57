"""
Recommendation assembler: pairs each ``Finding`` with its ``PriorityTier``
and ``ParsedNarrative``.

Usage flow
----------
1. filter_by_document(findings, document_id)
   -> list[Finding]  (optional document filter; None keeps everything)

2. assemble_all(findings)
   -> list[AssembledRecommendation]  (input order preserved)

3. sort_by_priority(recommendations)
   -> list[AssembledRecommendation]  (Critical first, stable within a tier)

``assemble()`` adds no logic of its own: it calls ``classify()`` and
``parse()`` and packages the results. Neither dependency raises, so neither
does the assembler. Each finding is handled independently, which makes
``assemble`` safe to map over findings concurrently.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from audit_insights.config import ParserConfig, PriorityConfig
from audit_insights.models.finding import Finding
from audit_insights.models.recommendation import AssembledRecommendation
from audit_insights.narrative.parser import parse
from audit_insights.recommendations.priority import classify


def assemble(
    finding:         Finding,
    priority_config: Optional[PriorityConfig] = None,
    parser_config:   Optional[ParserConfig] = None,
) -> AssembledRecommendation:
    """Build the display-ready recommendation for one finding."""
    return AssembledRecommendation(
        finding=finding,
        tier=classify(finding.status, finding.similarity_score, priority_config),
        narrative=parse(finding.recommendation_text, parser_config),
    )


def assemble_all(
    findings:        Iterable[Finding],
    priority_config: Optional[PriorityConfig] = None,
    parser_config:   Optional[ParserConfig] = None,
) -> list[AssembledRecommendation]:
    """Assemble every finding, preserving input order."""
    return [assemble(f, priority_config, parser_config) for f in findings]


def sort_by_priority(
    recommendations: Iterable[AssembledRecommendation],
) -> list[AssembledRecommendation]:
    """Return recommendations ordered by tier rank (Critical first).

    The sort is stable: recommendations in the same tier keep their
    incoming order.
    """
    return sorted(recommendations, key=lambda rec: rec.rank)


def filter_by_document(
    findings:    Iterable[Finding],
    document_id: Optional[str],
) -> list[Finding]:
    """Keep findings for ``document_id``; ``None`` keeps all findings."""
    if document_id is None:
        return list(findings)
    return [f for f in findings if f.document_id == document_id]
