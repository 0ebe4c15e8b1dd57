"""
Shared pytest fixtures for the audit-insights test suite.

Provides:
  - ``make_finding``: factory for ``Finding`` objects with sensible defaults.
  - Canonical remediation texts (structured, heuristic, plain).
  - ``config_file``: a minimal TOML config written to ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from audit_insights.models.finding import Finding
from audit_insights.taxonomy.compliance_taxonomy import ComplianceStatus

STRUCTURED_TEXT = (
    "1. ISSUE IDENTIFIED: No encryption at rest\n"
    "2. WHY IT MATTERS: Data breach risk\n"
    "3. RECOMMENDED ACTION: - Enable encryption\n"
    "- Rotate keys"
)

HEURISTIC_TEXT = (
    "The system fails to log access attempts. "
    "This creates a major risk. "
    "You must implement audit logging."
)


# ── Environment isolation ─────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _clear_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer AUDIT_INSIGHTS_* variables out of config tests."""
    for name in (
        "AUDIT_INSIGHTS_LOG_LEVEL",
        "AUDIT_INSIGHTS_CRITICAL_BELOW",
        "AUDIT_INSIGHTS_HIGH_BELOW",
        "AUDIT_INSIGHTS_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


# ── Domain object factories ───────────────────────────────────────────────────

@pytest.fixture
def make_finding() -> Callable[..., Finding]:
    """Return a factory building a valid ``Finding``; kwargs override defaults."""

    def _make(**overrides: Any) -> Finding:
        fields: dict[str, Any] = {
            "control_id": "A.8.24",
            "control_title": "Use of cryptography",
            "framework_id": "iso27001",
            "document_name": "security_policy.pdf",
            "status": ComplianceStatus.PARTIAL,
            "similarity_score": 0.5,
            "recommendation_text": STRUCTURED_TEXT,
            "audit_id": "audit-1",
            "document_id": "doc-1",
        }
        fields.update(overrides)
        return Finding(**fields)

    return _make


@pytest.fixture
def structured_text() -> str:
    return STRUCTURED_TEXT


@pytest.fixture
def heuristic_text() -> str:
    return HEURISTIC_TEXT


# ── Config fixture ────────────────────────────────────────────────────────────

@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a minimal config with quiet logging and return its path."""
    path = tmp_path / "config" / "default.toml"
    path.parent.mkdir(parents=True)
    path.write_text(
        "[priority]\n"
        "critical_below = 0.45\n"
        "high_below = 0.55\n"
        "\n"
        "[logging]\n"
        'level = "WARNING"\n',
        encoding="utf-8",
    )
    return path
