"""
Pipeline Package
================
Report assembly on top of the analytics modules.

Modules:
  report_builder  - runs statistics / insights / charts into one envelope
  summary_builder - plain-text rendering of that envelope
"""
