"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Picker, codec, catalog lookups and scoring are pure and deterministic
"""
