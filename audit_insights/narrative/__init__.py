"""
Narrative parsing: AI remediation text -> ParsedNarrative (issue / why / actions).

Submodules:
  text     — normalization, bullet cleanup, action and sentence splitting
  keywords — default keyword table and sentence classifier
  parser   — tier cascade (structured -> heuristic -> verbatim) and parse()
"""
