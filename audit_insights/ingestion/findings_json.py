"""
JSON import for audit findings.

Accepted shapes (the dashboard's ``/recommendations`` payload and a bare list)::

    {"recommendations": [ {...finding...}, ... ]}
    {"findings":        [ {...finding...}, ... ]}
    [ {...finding...}, ... ]

Required keys per record:
  control_id, control_title, framework_id, document_name, status,
  similarity_score

Optional keys:
  recommendation_text (or ``recommendation``), audit_id, document_id

Valid ``status`` values: "Compliant", "Partial", "Non-Compliant".
``similarity_score`` is not range-checked.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from audit_insights.models.finding import Finding

logger = logging.getLogger(__name__)

RECORD_LIST_KEYS: tuple[str, ...] = ("recommendations", "findings")


def load_findings(path: Path) -> list[Finding]:
    """Load and validate findings from a JSON file.

    All records are validated before any are returned. If **any** record
    fails, a single :class:`ValueError` is raised listing the first 10 failures.

    Args:
        path: Path to the JSON file (must exist).

    Returns:
        List of validated :class:`Finding` instances, in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On malformed JSON, an unsupported top-level shape, or any
            record failing validation.
    """
    if not path.exists():
        raise FileNotFoundError(f"Findings file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc

    records = extract_records(payload)
    if not records:
        logger.warning("Findings file contains no records: %s", path)
        return []

    findings = parse_findings(records, source=path.name)
    logger.info("Loaded %d findings from %s", len(findings), path.name)
    return findings


def extract_records(payload: Any) -> list[Any]:
    """Return the list of raw finding records inside ``payload``.

    Raises:
        ValueError: If ``payload`` is neither a list nor an object holding
            one of ``RECORD_LIST_KEYS`` as a list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in RECORD_LIST_KEYS:
            if key in payload:
                records = payload[key]
                if not isinstance(records, list):
                    raise ValueError(f"'{key}' must be a JSON array.")
                return records
    raise ValueError(
        "Findings JSON must be an array or an object with one of "
        f"{list(RECORD_LIST_KEYS)} holding an array."
    )


def parse_findings(records: list[Any], source: str = "<memory>") -> list[Finding]:
    """Validate raw records into :class:`Finding` objects, all-or-nothing."""
    findings: list[Finding] = []
    errors: list[tuple[int, str]] = []

    for i, raw in enumerate(records):
        if not isinstance(raw, dict):
            errors.append((i, f"expected an object, got {type(raw).__name__}"))
            continue
        try:
            findings.append(Finding.model_validate(raw))
        except ValidationError as exc:
            errors.append((i, _first_line(exc)))

    if errors:
        max_shown = 10
        detail = "\n".join(f"  Record #{idx}: {msg}" for idx, msg in errors[:max_shown])
        suffix = f"\n  … and {len(errors) - max_shown} more" if len(errors) > max_shown else ""
        raise ValueError(
            f"{len(errors)} record(s) failed validation in {source}:\n{detail}{suffix}"
        )

    return findings


def _first_line(exc: ValidationError) -> str:
    """Compact one-line summary of a pydantic error."""
    first = exc.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ())) or "<record>"
    return f"{loc}: {first.get('msg', 'invalid value')}"
