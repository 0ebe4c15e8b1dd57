"""
Narrative parser: turns free-form AI remediation text into a
``ParsedNarrative`` (issue / why / actions).

The upstream language model is asked for a three-part answer but nothing
guarantees it complies, so parsing is a cascade of tiers run in order. The
first tier that fills any field wins; later tiers never run.

Tier order
----------
    A. structured : numbered section labels, matched case-insensitively
                    1. ISSUE IDENTIFIED   → issue
                    2. WHY IT MATTERS     → why
                    3. RECOMMENDED ACTION → actions (one item per line/bullet)
    B. heuristic  : sentence split + keyword table (see ``keywords``).
                    issue and why take the FIRST matching sentence only;
                    actions collects EVERY matching sentence, duplicates
                    included.
    C. verbatim   : the whole normalized text becomes the issue.

Every tier sees the same normalized text (emphasis stripped, trimmed).
Empty or ``None`` input short-circuits to an empty narrative.

``parse()`` never raises. Degraded input shows up as a lower tier in
``ParsedNarrative.extraction``, not as an exception.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from audit_insights.config import ParserConfig
from audit_insights.models.recommendation import ParsedNarrative
from audit_insights.narrative.keywords import classify_sentence
from audit_insights.narrative.text import (
    clean_block,
    normalize_text,
    split_actions,
    split_sentences,
)
from audit_insights.taxonomy.compliance_taxonomy import ExtractionTier, NarrativeField

logger = logging.getLogger(__name__)

_ISSUE_LABEL = r"1\.\s*ISSUE IDENTIFIED"
_WHY_LABEL = r"2\.\s*WHY IT MATTERS"
_ACTION_LABEL = r"3\.\s*RECOMMENDED ACTIONS?"
_LABEL_SEP = r"[:\s]*"

_ISSUE_RE = re.compile(
    rf"{_ISSUE_LABEL}{_LABEL_SEP}(.*?)(?={_WHY_LABEL}|{_ACTION_LABEL}|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_WHY_RE = re.compile(
    rf"{_WHY_LABEL}{_LABEL_SEP}(.*?)(?={_ACTION_LABEL}|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_ACTION_RE = re.compile(
    rf"{_ACTION_LABEL}{_LABEL_SEP}(.*)\Z",
    re.IGNORECASE | re.DOTALL,
)


@dataclass
class NarrativeSections:
    """Mutable scratch result shared by the tier functions."""

    issue: str = ""
    why: str = ""
    actions: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.issue or self.why or self.actions)


TierFn = Callable[[str, ParserConfig], Optional[NarrativeSections]]


# ── Tiers ─────────────────────────────────────────────────────────────────────

def extract_structured(text: str, config: ParserConfig) -> Optional[NarrativeSections]:
    """Tier A: pull the three numbered sections out of ``text``.

    Sections are matched independently; a missing label leaves its field
    empty. Returns ``None`` when no field ends up non-empty.
    """
    sections = NarrativeSections()

    if m := _ISSUE_RE.search(text):
        sections.issue = clean_block(m.group(1))
    if m := _WHY_RE.search(text):
        sections.why = clean_block(m.group(1))
    if m := _ACTION_RE.search(text):
        sections.actions = split_actions(m.group(1))

    return None if sections.is_empty else sections


def classify_sentences(text: str, config: ParserConfig) -> Optional[NarrativeSections]:
    """Tier B: classify each sentence against the keyword table."""
    sections = NarrativeSections()

    for sentence in split_sentences(text, config.min_sentence_chars):
        filled = []
        if sections.issue:
            filled.append(NarrativeField.ISSUE)
        if sections.why:
            filled.append(NarrativeField.WHY)

        category = classify_sentence(sentence, config.keywords, skip=filled)
        if category == NarrativeField.ISSUE:
            sections.issue = sentence
        elif category == NarrativeField.WHY:
            sections.why = sentence
        elif category == NarrativeField.ACTIONS:
            sections.actions.append(sentence)

    return None if sections.is_empty else sections


def surface_verbatim(text: str, config: ParserConfig) -> Optional[NarrativeSections]:
    """Tier C: the whole text is the issue."""
    if not text:
        return None
    return NarrativeSections(issue=text)


TIERS: tuple[tuple[ExtractionTier, TierFn], ...] = (
    (ExtractionTier.STRUCTURED, extract_structured),
    (ExtractionTier.HEURISTIC, classify_sentences),
    (ExtractionTier.VERBATIM, surface_verbatim),
)


# ── Entry point ───────────────────────────────────────────────────────────────

def parse(raw_text: Optional[str], config: Optional[ParserConfig] = None) -> ParsedNarrative:
    """Parse a remediation text into a ``ParsedNarrative``.

    Args:
        raw_text: AI-generated remediation text; ``None`` or ``""`` allowed.
        config:   Parser tuning; defaults to ``ParserConfig()``.

    Returns:
        ``ParsedNarrative``. All fields are empty only when the normalized
        input is empty.
    """
    cfg = config or ParserConfig()
    text = normalize_text(raw_text)
    if not text:
        return ParsedNarrative()

    for extraction, tier_fn in TIERS:
        sections = tier_fn(text, cfg)
        if sections is not None:
            logger.debug(
                "Narrative parsed via %s tier (%d chars, %d actions)",
                extraction.value, len(text), len(sections.actions),
            )
            return ParsedNarrative(
                issue=sections.issue,
                why=sections.why,
                actions=tuple(sections.actions),
                extraction=extraction,
            )

    # Unreachable: the verbatim tier accepts any non-empty text.
    return ParsedNarrative(issue=text, extraction=ExtractionTier.VERBATIM)
