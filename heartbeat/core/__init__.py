"""Core Layer — pure domain logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - All functions are pure and deterministic, except cycle id generation
      (clock + randomness behind a single lock)

Design Decisions:
    - Functional core separated from imperative shell: the context builder in
      services/ owns the one await, everything it assembles is computed here
"""
