"""Services Layer — orchestration over core logic and injected stores.

Invariants:
    - Services depend on core protocols, never on concrete stores
    - The server side (daily puzzle, admin override) is async; the game
      session state machine is synchronous and timer-driven
"""
