"""
Finding model — one control's compliance evaluation result.

A ``Finding`` is produced upstream by the framework scoring pipeline and the
AI remediation-text generator. This package only consumes it.

``status`` and ``similarity_score`` are independent signals and may disagree
(e.g. ``Partial`` with a very low score). The score is deliberately NOT
range-validated here: reconciling or rejecting odd values is the upstream
scorer's job, and the priority classifier compares whatever it is given.

``recommendation_text`` accepts the ``recommendation`` key as an alias, which
is how the dashboard's ``/recommendations`` payload names it.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from audit_insights.taxonomy.compliance_taxonomy import ComplianceStatus


class Finding(BaseModel):
    """A single control evaluation with its raw remediation narrative.

    Attributes:
        control_id: Framework-specific control identifier, e.g. ``"A.8.24"``.
        control_title: Human-readable control title.
        framework_id: Framework slug, e.g. ``"iso27001"``.
        document_name: Name of the audited document.
        status: Upstream compliance verdict.
        similarity_score: Document/control similarity, nominally in [0, 1].
        recommendation_text: Free-form AI remediation text; ``""`` when absent.
        audit_id: Audit run identifier, or ``None``.
        document_id: Audited document identifier, or ``None``.
    """

    model_config = ConfigDict(frozen=True)

    control_id: str
    control_title: str
    framework_id: str
    document_name: str
    status: ComplianceStatus
    similarity_score: float
    recommendation_text: str = Field(
        default="",
        validation_alias=AliasChoices("recommendation_text", "recommendation"),
    )
    audit_id: Optional[str] = None
    document_id: Optional[str] = None

    @field_validator("recommendation_text", mode="before")
    @classmethod
    def coerce_missing_text(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("control_id", "framework_id")
    @classmethod
    def validate_identifier_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("identifier must not be blank.")
        return v.strip()
