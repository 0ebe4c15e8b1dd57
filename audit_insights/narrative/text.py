"""
Text normalization helpers shared by the narrative parser tiers.

All helpers are pure string → string (or list) functions with no logging and
no configuration. They are safe to apply repeatedly: normalizing already
normalized text is a no-op.
"""

from __future__ import annotations

import re
from typing import Optional

BULLET_CHARS = "-•"

_EMPHASIS_RE = re.compile(r"\*+")
_LEADING_BULLETS_RE = re.compile(rf"^[{BULLET_CHARS}]\s*", re.MULTILINE)
_LEADING_BULLET_RE = re.compile(rf"^[{BULLET_CHARS}]\s*")
_ACTION_BOUNDARY_RE = re.compile(rf"\n|(?=[{BULLET_CHARS}])")
_SENTENCE_BOUNDARY_RE = re.compile(r"[.!?]+")


def strip_emphasis(text: str) -> str:
    """Remove markdown bold (``**``) and italic (``*``) markers."""
    return _EMPHASIS_RE.sub("", text)


def normalize_text(raw: Optional[str]) -> str:
    """Strip emphasis markers and surrounding whitespace; ``None`` → ``""``."""
    if not raw:
        return ""
    return strip_emphasis(raw).strip()


def clean_block(block: str) -> str:
    """Trim a section block and drop the bullet marker at the start of each line."""
    return _LEADING_BULLETS_RE.sub("", block.strip()).strip()


def split_actions(block: str) -> list[str]:
    """Split an actions block into items.

    Items break on newlines and immediately before every bullet marker, so
    ``"- a - b"`` yields two items even without a newline. Each item loses
    its leading bullet and surrounding whitespace; empty items are dropped.
    Source order is kept.
    """
    items: list[str] = []
    for piece in _ACTION_BOUNDARY_RE.split(block.strip()):
        item = _LEADING_BULLET_RE.sub("", piece.strip()).strip()
        if item:
            items.append(item)
    return items


def split_sentences(text: str, min_chars: int = 10) -> list[str]:
    """Split on runs of ``.``, ``!`` and ``?``; keep trimmed sentences of ``min_chars`` or more."""
    sentences = (s.strip() for s in _SENTENCE_BOUNDARY_RE.split(text))
    return [s for s in sentences if len(s) >= min_chars]
