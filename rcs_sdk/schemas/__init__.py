"""Pydantic Schemas — outward message, capability and configuration models.

Invariants:
    - Schemas validate at the SDK boundary (caller input, provider responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Outward models are provider-neutral; wire shapes are produced in services/ (ADR: DDD boundary)
"""
