"""
Analytics Package
=================
Deterministic report analytics over routine and mood records.

Modules:
  formatting - duration / date / percent text
  statistics - aggregate report statistics and streaks
  insights   - templated insights derived from records + statistics
  charts     - chart-ready time series and checklist bars
"""
