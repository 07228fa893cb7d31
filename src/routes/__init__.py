"""
API Routes Package
==================
Shared utilities for the report API in api.py.

Modules:
  helpers - request coercion, clock access, report assembly from rows
"""
