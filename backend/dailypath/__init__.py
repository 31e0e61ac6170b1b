"""Daily Path Puzzle Package — daily puzzle distribution and session scoring.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
