"""Pydantic Schemas — validation for site details and frames crossing into the core.

Invariants:
    - Schemas validate at the boundary (app state dicts, tab snapshots)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core records: schemas speak the camelCase app-state shape,
      core records are snake_case frozen dataclasses
"""
