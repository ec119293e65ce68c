"""Services Layer — provider adapters, selection registries, and the RCSClient facade.

Invariants:
    - Provider and auth selection use explicit dict mappings (no auto-discovery)
    - Wire translation is pure; adapters sequence I/O around it

Design Decisions:
    - One adapter module plus one wire module per backend (ADR: ExMA no god objects)
"""
