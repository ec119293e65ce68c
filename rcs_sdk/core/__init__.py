"""Core Layer — pure domain logic: errors, enums, phone numbers, message builders.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - No I/O, no async

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
