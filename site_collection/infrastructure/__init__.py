"""Infrastructure Layer — default collaborators and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core mutation or query logic
    - Every collaborator here satisfies a Protocol from core/boundary_protocols.py

Design Decisions:
    - Defaults live outside core so callers can swap normalizer or settings source
"""
