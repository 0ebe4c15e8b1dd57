"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept assembled recommendations (or a summary) and return
plain multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Card layout
-----------
::

  [CRITICAL PRIORITY]  ISO27001                              Match: 32%
  A.8.24: Use of cryptography
  Document: security_policy.pdf
    Issue Identified:
      No encryption at rest
    Why It Matters:
      Data breach risk
    Recommended Actions:
      - Enable encryption
      - Rotate keys

When the parser fell back to verbatim text, the card shows the raw text
under "AI Analysis" instead of an "Issue Identified" heading.
"""

from __future__ import annotations

import textwrap

from audit_insights.models.recommendation import AssembledRecommendation
from audit_insights.recommendations.summary import RecommendationSummary
from audit_insights.taxonomy.compliance_taxonomy import PriorityTier

_WRAP_WIDTH = 76
_INDENT = "      "


# ── Summary ───────────────────────────────────────────────────────────────────


def format_summary(summary: RecommendationSummary) -> str:
    """Return the three header counts plus a per-tier breakdown."""
    lines = [
        f"  Critical issues:      {summary.critical:>4}",
        f"  Improvements needed:  {summary.improvements_needed:>4}",
        f"  Total:                {summary.total:>4}",
    ]
    tiers = "  ".join(f"{tier.value}={summary.by_tier.get(tier, 0)}" for tier in PriorityTier)
    lines.append(f"  By tier:              {tiers}")
    return "\n".join(lines)


# ── Single card ───────────────────────────────────────────────────────────────


def format_recommendation_card(rec: AssembledRecommendation) -> str:
    """Format one recommendation as a text card (see module docstring)."""
    f = rec.finding
    n = rec.narrative

    label = f"[{rec.tier.value.upper()} PRIORITY]"
    match = f"Match: {f.similarity_score * 100:.0f}%"
    header = f"  {label}  {f.framework_id.upper()}"
    lines = [f"{header:<62}{match:>12}"]
    lines.append(f"  {f.control_id}: {f.control_title}")
    lines.append(f"  Document: {f.document_name}")

    if n.is_empty:
        lines.append("    (no recommendation text)")
        return "\n".join(lines)

    if n.is_verbatim:
        lines.append("    AI Analysis:")
        lines.extend(_wrap(n.issue))
        return "\n".join(lines)

    if n.issue:
        lines.append("    Issue Identified:")
        lines.extend(_wrap(n.issue))
    if n.why:
        lines.append("    Why It Matters:")
        lines.extend(_wrap(n.why))
    if n.actions:
        lines.append("    Recommended Actions:")
        for action in n.actions:
            wrapped = textwrap.wrap(
                action,
                width=_WRAP_WIDTH,
                initial_indent=_INDENT + "- ",
                subsequent_indent=_INDENT + "  ",
            )
            lines.extend(wrapped)

    return "\n".join(lines)


# ── Full report ───────────────────────────────────────────────────────────────


def format_recommendations_report(
    recommendations: list[AssembledRecommendation],
    summary:         RecommendationSummary,
    document_id:     str | None = None,
) -> str:
    """Format the summary header followed by one card per recommendation.

    Args:
        recommendations: Already ordered (see ``sort_by_priority``).
        summary:         Counts for the header.
        document_id:     Active document filter, shown in the header if set.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== AI Recommendations ===")
    if document_id:
        lines.append(f"  Document filter: {document_id}")
    lines.append(format_summary(summary))

    if not recommendations:
        lines.append("")
        lines.append("  All clear: no compliance issues found.")
        return "\n".join(lines)

    for rec in recommendations:
        lines.append("")
        lines.append(format_recommendation_card(rec))

    return "\n".join(lines)


# ── Helper ────────────────────────────────────────────────────────────────────


def _wrap(text: str) -> list[str]:
    """Wrap each paragraph of ``text`` with the card body indent."""
    out: list[str] = []
    for para in text.splitlines():
        if not para.strip():
            continue
        out.extend(
            textwrap.wrap(
                para.strip(),
                width=_WRAP_WIDTH,
                initial_indent=_INDENT,
                subsequent_indent=_INDENT,
            )
        )
    return out
