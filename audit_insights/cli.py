"""
audit-insights — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (classify, parse, assemble, export).
  5. Report result to stdout.

Install and run::

    pip install -e .
    audit-insights --help
    audit-insights validate-config
    audit-insights classify --status Partial --score 0.5
    audit-insights parse-text "1. ISSUE IDENTIFIED: ..."
    audit-insights report --file data/findings.json
    audit-insights export --out data/outputs/recommendations.csv
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="audit-insights",
    help="Compliance audit recommendations — narrative parsing and prioritisation.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from audit_insights.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from audit_insights.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_recommendations_or_exit(config, findings_file: Optional[str], document_id: Optional[str]):
    """Load findings, apply the document filter and assemble them."""
    from audit_insights.ingestion.findings_json import load_findings
    from audit_insights.recommendations.assembler import assemble_all, filter_by_document

    path = Path(findings_file) if findings_file else Path(config.data.findings_file)
    try:
        findings = load_findings(path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] Findings load failed:\n{exc}", err=True)
        raise typer.Exit(code=1)

    findings = filter_by_document(findings, document_id)
    return assemble_all(findings, config.priority, config.parser)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Critical below:     {config.priority.critical_below}")
    typer.echo(f"  High below:         {config.priority.high_below}")
    typer.echo(f"  Min sentence chars: {config.parser.min_sentence_chars}")
    typer.echo(f"  Findings file:      {config.data.findings_file}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("classify")
def classify_cmd(
    status: str = typer.Option(
        ...,
        "--status",
        help="Compliance status: Compliant, Partial or Non-Compliant.",
    ),
    score: float = typer.Option(
        ...,
        "--score",
        help="Similarity score (nominally 0-1; not range-checked).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the priority tier for a status/score pair."""
    from audit_insights.recommendations.priority import classify
    from audit_insights.taxonomy.compliance_taxonomy import ComplianceStatus

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    valid = [s.value for s in ComplianceStatus]
    if status not in valid:
        typer.echo(f"[ERROR] Unknown status '{status}'. Use one of: {', '.join(valid)}.", err=True)
        raise typer.Exit(code=1)

    tier = classify(ComplianceStatus(status), score, config.priority)
    typer.echo(f"{tier.value} (rank {tier.rank})")


@app.command("parse-text")
def parse_text(
    text: Optional[str] = typer.Argument(
        None,
        help="Recommendation text. Omit and use --file to read from a file.",
    ),
    text_file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Read the recommendation text from this UTF-8 file.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the parsed narrative as JSON.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Parse one remediation text into issue / why / actions."""
    from audit_insights.narrative.parser import parse

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if text is None and text_file is None:
        typer.echo("[ERROR] Provide TEXT or --file.", err=True)
        raise typer.Exit(code=1)

    if text_file is not None:
        path = Path(text_file)
        if not path.exists():
            typer.echo(f"[ERROR] Text file not found: {path}", err=True)
            raise typer.Exit(code=1)
        text = path.read_text(encoding="utf-8")

    narrative = parse(text, config.parser)

    if as_json:
        typer.echo(json.dumps(narrative.model_dump(mode="json"), indent=2))
        return

    typer.echo(f"Extraction: {narrative.extraction.value}")
    typer.echo(f"Issue:      {narrative.issue or '-'}")
    typer.echo(f"Why:        {narrative.why or '-'}")
    typer.echo(f"Actions:    {len(narrative.actions)}")
    for i, action in enumerate(narrative.actions, start=1):
        typer.echo(f"  {i:>2}. {action}")


@app.command("report")
def report(
    findings_file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Findings JSON file. Defaults to config.data.findings_file.",
    ),
    document_id: Optional[str] = typer.Option(
        None,
        "--document-id",
        help="Only include findings for this document.",
    ),
    sort: bool = typer.Option(
        True,
        "--sort/--no-sort",
        help="Order by priority (Critical first) or keep file order.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print recommendations and summary as JSON.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Assemble recommendations from a findings file and print them."""
    from audit_insights.recommendations.assembler import sort_by_priority
    from audit_insights.recommendations.summary import summarize
    from audit_insights.reporting.formatters import format_recommendations_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    recs = _load_recommendations_or_exit(config, findings_file, document_id)
    if sort:
        recs = sort_by_priority(recs)
    summary = summarize(recs, config.priority)

    if as_json:
        payload = {
            "summary": summary.to_dict(),
            "recommendations": [r.to_record() for r in recs],
        }
        typer.echo(json.dumps(payload, indent=2, default=str))
        return

    typer.echo(format_recommendations_report(recs, summary, document_id=document_id))


@app.command("export")
def export(
    out: Optional[str] = typer.Option(
        None,
        "--out",
        "-o",
        help="Destination file (.csv or .json). Defaults to <output_dir>/recommendations.csv.",
    ),
    findings_file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Findings JSON file. Defaults to config.data.findings_file.",
    ),
    document_id: Optional[str] = typer.Option(
        None,
        "--document-id",
        help="Only include findings for this document.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Export prioritised recommendations to CSV or JSON."""
    from audit_insights.recommendations.assembler import sort_by_priority
    from audit_insights.recommendations.summary import summarize
    from audit_insights.reporting.export import (
        EXPORT_COLUMNS,
        export_to_csv,
        export_to_json,
        flatten_recommendations_for_export,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    out_path = Path(out) if out else Path(config.data.output_dir) / "recommendations.csv"
    fmt = out_path.suffix.lower()
    if fmt not in (".csv", ".json"):
        typer.echo(f"[ERROR] Unsupported export format '{fmt}'. Use .csv or .json.", err=True)
        raise typer.Exit(code=1)

    recs = sort_by_priority(_load_recommendations_or_exit(config, findings_file, document_id))

    if fmt == ".csv":
        written = export_to_csv(
            flatten_recommendations_for_export(recs), out_path, fieldnames=EXPORT_COLUMNS
        )
    else:
        payload = {
            "summary": summarize(recs, config.priority).to_dict(),
            "recommendations": [r.to_record() for r in recs],
        }
        written = export_to_json(payload, out_path)

    typer.echo(f"  Exported {len(recs)} recommendation(s) to {written}")
    typer.echo("[OK] Export complete.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
