"""
audit_insights.reporting — Text formatting and flat-file export.

This package renders already-assembled recommendations. It never parses or
classifies: tiers and narratives arrive ready-made from
``audit_insights.recommendations``.

Modules:
  formatters — ASCII formatters for Typer CLI commands.
  export     — CSV/JSON flat-file export helpers.
"""
