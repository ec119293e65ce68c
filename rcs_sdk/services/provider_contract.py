"""Provider Contract — the capability set every RCS provider adapter implements.

Invariants:
    - send_message / initialize raise RCSError on failure, never degrade silently
    - validate_phone_number raises only for preconditions; downstream failures come
      back as ValidationResult(success=False)

Design Decisions:
    - Protocol over an abstract base: structural contract, adapters stay free of
      inheritance (ADR: one concrete provider today, room for more)
"""

from typing import Protocol, runtime_checkable

from rcs_sdk.schemas.capabilities import RCSCapabilities, ValidationResult
from rcs_sdk.schemas.config import ProviderOptions
from rcs_sdk.schemas.messages import MessageResponse, RCSMessage


@runtime_checkable
class RCSProvider(Protocol):
    """Minimal contract for a messaging backend adapter."""

    name: str

    async def initialize(self, config: ProviderOptions | None = None) -> None: ...

    async def send_message(self, message: RCSMessage) -> MessageResponse: ...

    async def get_capabilities(self, phone_number: str) -> RCSCapabilities: ...

    async def validate_phone_number(
        self, phone_number: str, agent_id: str | None = None,
    ) -> ValidationResult: ...

    async def aclose(self) -> None: ...
