"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``AUDIT_INSIGHTS_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The classifier and parser take their own config section as an optional
argument and fall back to the section's defaults, so library callers never
need a config file. The CLI always goes through ``load_config()``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from audit_insights.narrative.keywords import DEFAULT_KEYWORDS
from audit_insights.taxonomy.compliance_taxonomy import NarrativeField

# ── Sub-config models ─────────────────────────────────────────────────────────


class PriorityConfig(BaseModel):
    """Similarity-score boundaries for the priority classifier.

    Both bounds are exclusive upper bounds of the tier below:
    ``score < critical_below`` is Critical, ``score < high_below`` is High.
    """

    model_config = ConfigDict(frozen=True)

    critical_below: float = 0.45
    high_below: float = 0.55

    @model_validator(mode="after")
    def validate_bounds_order(self) -> "PriorityConfig":
        if self.critical_below > self.high_below:
            raise ValueError(
                f"critical_below ({self.critical_below}) must be <= "
                f"high_below ({self.high_below})."
            )
        return self


class ParserConfig(BaseModel):
    """Narrative parser tuning.

    ``keywords`` overrides are merged over ``DEFAULT_KEYWORDS`` per category,
    so a TOML file may override ``actions`` alone.
    """

    model_config = ConfigDict(frozen=True)

    min_sentence_chars: int = 10
    keywords: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(DEFAULT_KEYWORDS)
    )

    @field_validator("min_sentence_chars")
    @classmethod
    def validate_min_sentence_chars(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"min_sentence_chars must be >= 0, got {v}.")
        return v

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        valid = {f.value for f in NarrativeField}
        unknown = set(v) - valid
        if unknown:
            raise ValueError(
                f"Unknown keyword categories {sorted(unknown)}; "
                f"expected a subset of {sorted(valid)}."
            )
        merged = dict(DEFAULT_KEYWORDS)
        for category, words in v.items():
            merged[category] = tuple(w.lower() for w in words if w.strip())
        return merged


class DataConfig(BaseModel):
    """Filesystem paths for findings input and report output."""

    model_config = ConfigDict(frozen=True)

    findings_file: str = "data/findings.json"
    output_dir: str = "data/outputs"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration."""

    model_config = ConfigDict(frozen=True)

    priority: PriorityConfig = PriorityConfig()
    parser: ParserConfig = ParserConfig()
    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply AUDIT_INSIGHTS_* environment variable overrides
    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply AUDIT_INSIGHTS_* env vars to the raw config dict.

    Supported overrides:
      AUDIT_INSIGHTS_LOG_LEVEL      → raw["logging"]["level"]
      AUDIT_INSIGHTS_CRITICAL_BELOW → raw["priority"]["critical_below"]
      AUDIT_INSIGHTS_HIGH_BELOW     → raw["priority"]["high_below"]
      AUDIT_INSIGHTS_DEBUG          → raw["debug"]
    """
    if log_level := os.environ.get("AUDIT_INSIGHTS_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if critical_below := os.environ.get("AUDIT_INSIGHTS_CRITICAL_BELOW"):
        raw.setdefault("priority", {})["critical_below"] = float(critical_below)

    if high_below := os.environ.get("AUDIT_INSIGHTS_HIGH_BELOW"):
        raw.setdefault("priority", {})["high_below"] = float(high_below)

    if debug := os.environ.get("AUDIT_INSIGHTS_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        priority=PriorityConfig(**raw.get("priority", {})),
        parser=ParserConfig(**raw.get("parser", {})),
        data=DataConfig(**raw.get("data", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
