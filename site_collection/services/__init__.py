"""Services Layer — imperative shell that owns the authoritative site list.

Invariants:
    - Services call core pure functions; they never reimplement list logic
    - Logging and settings reads happen here, not in core/
"""
