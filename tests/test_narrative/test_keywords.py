"""Tests for audit_insights.narrative.keywords."""

from __future__ import annotations

from audit_insights.narrative.keywords import (
    CATEGORY_ORDER,
    DEFAULT_KEYWORDS,
    classify_sentence,
    matches_any,
)
from audit_insights.taxonomy.compliance_taxonomy import NarrativeField


def test_default_table_covers_every_category() -> None:
    assert set(DEFAULT_KEYWORDS) == {f.value for f in NarrativeField}


def test_default_keywords() -> None:
    assert DEFAULT_KEYWORDS["issue"] == ("fail", "lack", "missing", "does not")
    assert DEFAULT_KEYWORDS["why"] == ("risk", "consequence", "matter")
    assert DEFAULT_KEYWORDS["actions"] == ("should", "must", "create", "implement", "add")


def test_category_order_is_issue_why_actions() -> None:
    assert CATEGORY_ORDER == (NarrativeField.ISSUE, NarrativeField.WHY, NarrativeField.ACTIONS)


def test_matches_any_substring() -> None:
    assert matches_any("controls are lacking", ("lack",))
    assert not matches_any("all good", ("lack", "fail"))


def test_classify_first_category_wins() -> None:
    # contains both an issue keyword and a why keyword
    assert classify_sentence("Missing logs raise risk", DEFAULT_KEYWORDS) == NarrativeField.ISSUE


def test_classify_is_case_insensitive() -> None:
    assert classify_sentence("The Policy DOES NOT cover vendors", DEFAULT_KEYWORDS) == NarrativeField.ISSUE


def test_classify_skip_falls_through() -> None:
    result = classify_sentence(
        "Missing logs raise risk", DEFAULT_KEYWORDS, skip=[NarrativeField.ISSUE]
    )
    assert result == NarrativeField.WHY


def test_classify_skip_all_matching_returns_none() -> None:
    result = classify_sentence(
        "Missing logs raise risk",
        DEFAULT_KEYWORDS,
        skip=[NarrativeField.ISSUE, NarrativeField.WHY],
    )
    assert result is None


def test_classify_no_match() -> None:
    assert classify_sentence("Everything is fine", DEFAULT_KEYWORDS) is None


def test_classify_missing_category_never_matches() -> None:
    table = {"actions": ("must",)}
    assert classify_sentence("You must act, it fails", table) == NarrativeField.ACTIONS
