"""Core Layer — pure site list logic, no IO, no logging, no globals.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - Every operation takes a site list and returns a new one; inputs are never mutated
    - Clock and settings reads arrive as explicit parameters

Design Decisions:
    - Functional core separated from imperative shell (services/site_store.py)
"""
