"""
Keyword table for heuristic sentence classification.

The table maps each ``NarrativeField`` to the substrings that mark a sentence
as belonging to it. Matching is plain lowercase containment, so ``"fail"``
also matches ``"fails"`` and ``"failure"``, and ``"add"`` matches
``"address"``.

Categories are evaluated in ``CATEGORY_ORDER``; a sentence lands in the first
category it matches. Keep the table as data: tune keywords through
``[parser.keywords]`` in the TOML config rather than editing control flow.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from audit_insights.taxonomy.compliance_taxonomy import NarrativeField

CATEGORY_ORDER: tuple[NarrativeField, ...] = (
    NarrativeField.ISSUE,
    NarrativeField.WHY,
    NarrativeField.ACTIONS,
)

DEFAULT_KEYWORDS: dict[str, tuple[str, ...]] = {
    NarrativeField.ISSUE.value:   ("fail", "lack", "missing", "does not"),
    NarrativeField.WHY.value:     ("risk", "consequence", "matter"),
    NarrativeField.ACTIONS.value: ("should", "must", "create", "implement", "add"),
}


def matches_any(sentence_lower: str, keywords: Iterable[str]) -> bool:
    """Return True if any keyword is a substring of ``sentence_lower``."""
    return any(kw in sentence_lower for kw in keywords)


def classify_sentence(
    sentence: str,
    table: Mapping[str, Iterable[str]],
    skip: Iterable[NarrativeField] = (),
) -> NarrativeField | None:
    """Return the first category in ``CATEGORY_ORDER`` whose keywords match.

    Args:
        sentence: Sentence text (any case).
        table:    ``{category value -> keywords}``; missing categories never match.
        skip:     Categories that are already filled and must not be assigned
                  again. A skipped category does not stop evaluation, so a
                  sentence can fall through to the next category.

    Returns:
        Matching ``NarrativeField`` or ``None``.
    """
    lower = sentence.lower()
    skipped = set(skip)
    for category in CATEGORY_ORDER:
        if category in skipped:
            continue
        if matches_any(lower, table.get(category.value, ())):
            return category
    return None
