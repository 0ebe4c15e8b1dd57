"""
Tests for audit_insights/cli.py using Typer's CliRunner.

Every invocation passes ``--config`` pointing at a temp TOML with WARNING
logging so command output is not interleaved with log lines.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from audit_insights.cli import app

runner = CliRunner()


@pytest.fixture
def findings_file(tmp_path: Path) -> Path:
    payload = {
        "recommendations": [
            {
                "document_id": "doc-1",
                "control_id": "M1",
                "control_title": "Backups",
                "framework_id": "iso27001",
                "document_name": "policy.pdf",
                "status": "Partial",
                "similarity_score": 0.8,
                "recommendation": "You should test restores quarterly.",
            },
            {
                "document_id": "doc-2",
                "control_id": "C1",
                "control_title": "Encryption",
                "framework_id": "iso27001",
                "document_name": "other.pdf",
                "status": "Non-Compliant",
                "similarity_score": 0.9,
                "recommendation": (
                    "1. ISSUE IDENTIFIED: No encryption at rest\n"
                    "2. WHY IT MATTERS: Data breach risk\n"
                    "3. RECOMMENDED ACTION: - Enable encryption\n- Rotate keys"
                ),
            },
        ]
    }
    path = tmp_path / "findings.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


# ── validate-config ───────────────────────────────────────────────────────────

def test_validate_config_ok(config_file: Path) -> None:
    result = runner.invoke(app, ["validate-config", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "[OK] Config valid." in result.output
    assert "0.45" in result.output


def test_validate_config_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "none.toml")])
    assert result.exit_code == 1


# ── classify ──────────────────────────────────────────────────────────────────

def test_classify_command(config_file: Path) -> None:
    result = runner.invoke(
        app, ["classify", "--status", "Partial", "--score", "0.5", "--config", str(config_file)]
    )
    assert result.exit_code == 0
    assert "High (rank 2)" in result.output


def test_classify_non_compliant(config_file: Path) -> None:
    result = runner.invoke(
        app,
        ["classify", "--status", "Non-Compliant", "--score", "0.9", "--config", str(config_file)],
    )
    assert result.exit_code == 0
    assert "Critical" in result.output


def test_classify_rejects_unknown_status(config_file: Path) -> None:
    result = runner.invoke(
        app, ["classify", "--status", "Maybe", "--score", "0.5", "--config", str(config_file)]
    )
    assert result.exit_code == 1


# ── parse-text ────────────────────────────────────────────────────────────────

def test_parse_text_argument(config_file: Path) -> None:
    result = runner.invoke(
        app,
        ["parse-text", "3. RECOMMENDED ACTION: - Enable MFA\n- Rotate keys", "--config", str(config_file)],
    )
    assert result.exit_code == 0
    assert "Extraction: structured" in result.output
    assert "1. Enable MFA" in result.output
    assert "2. Rotate keys" in result.output


def test_parse_text_json(config_file: Path) -> None:
    result = runner.invoke(
        app, ["parse-text", "ok", "--json", "--config", str(config_file)]
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["issue"] == "ok"
    assert data["extraction"] == "verbatim"
    assert data["actions"] == []


def test_parse_text_from_file(tmp_path: Path, config_file: Path) -> None:
    text_path = tmp_path / "rec.txt"
    text_path.write_text("The system fails to log access attempts.", encoding="utf-8")
    result = runner.invoke(
        app, ["parse-text", "--file", str(text_path), "--config", str(config_file)]
    )
    assert result.exit_code == 0
    assert "Extraction: heuristic" in result.output


def test_parse_text_requires_input(config_file: Path) -> None:
    result = runner.invoke(app, ["parse-text", "--config", str(config_file)])
    assert result.exit_code == 1


# ── report ────────────────────────────────────────────────────────────────────

def test_report_sorted_by_priority(config_file: Path, findings_file: Path) -> None:
    result = runner.invoke(
        app, ["report", "--file", str(findings_file), "--config", str(config_file)]
    )
    assert result.exit_code == 0
    assert result.output.index("C1: Encryption") < result.output.index("M1: Backups")


def test_report_no_sort_keeps_file_order(config_file: Path, findings_file: Path) -> None:
    result = runner.invoke(
        app,
        ["report", "--file", str(findings_file), "--no-sort", "--config", str(config_file)],
    )
    assert result.exit_code == 0
    assert result.output.index("M1: Backups") < result.output.index("C1: Encryption")


def test_report_json_with_document_filter(config_file: Path, findings_file: Path) -> None:
    result = runner.invoke(
        app,
        [
            "report", "--file", str(findings_file), "--document-id", "doc-2",
            "--json", "--config", str(config_file),
        ],
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["summary"]["total"] == 1
    assert data["summary"]["critical"] == 1
    rec = data["recommendations"][0]
    assert rec["control_id"] == "C1"
    assert rec["priority"] == "Critical"
    assert rec["actions"] == ["Enable encryption", "Rotate keys"]


def test_report_missing_findings_file(tmp_path: Path, config_file: Path) -> None:
    result = runner.invoke(
        app, ["report", "--file", str(tmp_path / "none.json"), "--config", str(config_file)]
    )
    assert result.exit_code == 1


# ── export ────────────────────────────────────────────────────────────────────

def test_export_csv(tmp_path: Path, config_file: Path, findings_file: Path) -> None:
    out = tmp_path / "out" / "recs.csv"
    result = runner.invoke(
        app,
        ["export", "--out", str(out), "--file", str(findings_file), "--config", str(config_file)],
    )
    assert result.exit_code == 0
    with out.open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["control_id"] for r in rows] == ["C1", "M1"]


def test_export_json(tmp_path: Path, config_file: Path, findings_file: Path) -> None:
    out = tmp_path / "recs.json"
    result = runner.invoke(
        app,
        ["export", "--out", str(out), "--file", str(findings_file), "--config", str(config_file)],
    )
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["total"] == 2


def test_export_rejects_unknown_format(tmp_path: Path, config_file: Path, findings_file: Path) -> None:
    result = runner.invoke(
        app,
        [
            "export", "--out", str(tmp_path / "recs.xlsx"),
            "--file", str(findings_file), "--config", str(config_file),
        ],
    )
    assert result.exit_code == 1


def test_export_defaults_to_output_dir(tmp_path: Path, findings_file: Path) -> None:
    out_dir = tmp_path / "outputs"
    cfg = tmp_path / "export.toml"
    cfg.write_text(
        f'[data]\noutput_dir = "{out_dir.as_posix()}"\n\n[logging]\nlevel = "WARNING"\n',
        encoding="utf-8",
    )
    result = runner.invoke(
        app, ["export", "--file", str(findings_file), "--config", str(cfg)]
    )
    assert result.exit_code == 0
    assert (out_dir / "recommendations.csv").exists()


def test_export_csv_no_match_keeps_header(tmp_path: Path, config_file: Path, findings_file: Path) -> None:
    out = tmp_path / "none.csv"
    result = runner.invoke(
        app,
        [
            "export", "--out", str(out), "--file", str(findings_file),
            "--document-id", "doc-missing", "--config", str(config_file),
        ],
    )
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8").startswith("audit_id,document_id,")
