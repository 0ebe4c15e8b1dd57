"""
Recommendation engine: converts compliance findings into prioritised,
structured recommendations ready for display.

Modules
-------
priority  : classify() — (status, similarity_score) -> PriorityTier.
            Pure function, no I/O.
assembler : assemble() + assemble_all() + sort_by_priority()
            + filter_by_document() — pairs each Finding with its tier and
            parsed narrative.
summary   : RecommendationSummary dataclass + summarize() — header counts.

Narrative parsing lives in ``audit_insights.narrative``.
"""
