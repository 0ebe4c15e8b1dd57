"""
Ingestion layer: loads compliance findings produced by the upstream audit.

Submodules:
  findings_json — JSON import for Finding records (bare list, or an object
                  wrapping the list under ``recommendations`` / ``findings``)
"""
