"""Longears RCS SDK — provider-neutral client for sending RCS business messages.

Invariants:
    - Package root contains no executable code beyond the version constant
      (import side-effects prohibited, logging never configured on import)

Design Decisions:
    - No star exports: import from the defining module, e.g.
      `from rcs_sdk.services.client import RCSClient` (ADR: ExMA no convention-over-config)
"""

__version__ = "0.1.0"
