"""Infrastructure Layer — credentials, the authenticated HTTP pipeline, logging.

Invariants:
    - Every outbound call goes through AuthenticatedHttpClient
    - Transport failures mapped to RCSError exactly once, at this layer

Design Decisions:
    - Wrappers over raw clients (ADR: ExMA single responsibility)
"""
