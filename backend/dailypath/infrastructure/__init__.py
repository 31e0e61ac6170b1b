"""Infrastructure Layer — stores, clients and cross-cutting concerns.

Invariants:
    - Implements the protocols in core.repository_protocols
    - Database and network failures are mapped to DailyPathError subclasses here

Design Decisions:
    - Resilient wrappers over raw clients: retry policy stays out of services
"""
