"""
Export helpers for spreadsheet and downstream analysis.

All write functions write to disk and return the written ``Path``.
They accept generic ``list[dict]`` data to stay decoupled from specific
report shapes.

CSV exports are flat (no nested lists) so they load directly in Excel or
pandas. ``flatten_recommendations_for_export()`` is the adapter: it turns
assembled recommendations into one row each, with the action list joined
by ``ACTION_SEPARATOR``.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from audit_insights.models.recommendation import AssembledRecommendation

ACTION_SEPARATOR = " | "

EXPORT_COLUMNS: list[str] = [
    "audit_id",
    "document_id",
    "document_name",
    "framework_id",
    "control_id",
    "control_title",
    "status",
    "similarity_score",
    "priority",
    "priority_rank",
    "issue",
    "why",
    "actions",
    "action_count",
    "extraction",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.
                    When given, the header row is written even for zero
                    records.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records and not fieldnames:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def flatten_recommendations_for_export(
    recommendations: list[AssembledRecommendation],
) -> list[dict]:
    """Flatten assembled recommendations into CSV-ready rows.

    Each row has the ``EXPORT_COLUMNS`` keys. ``actions`` is a single string
    (items joined with ``ACTION_SEPARATOR``) and ``action_count`` keeps the
    original item count.

    Args:
        recommendations: Assembled recommendations, in the desired row order.

    Returns:
        List of flat row dicts.
    """
    rows: list[dict] = []
    for rec in recommendations:
        record = rec.to_record()
        actions = record.pop("actions")
        record["actions"] = ACTION_SEPARATOR.join(actions)
        record["action_count"] = len(actions)
        rows.append({col: record.get(col, "") for col in EXPORT_COLUMNS})
    return rows
