"""Longears RCS Provider — the adapter that speaks the longears REST API.

Invariants:
    - Lifecycle: uninitialized → initializing → ready | failed; failed is terminal
      (a new adapter must be constructed, initialization is never retried here)
    - initialize() is a no-op when ready and performs exactly one GET /status probe otherwise;
      overlapping calls await the same in-flight probe and share its outcome
    - send_message validates E.164 before any I/O; an invalid number issues zero requests
    - validate_phone_number raises only NOT_INITIALIZED; every downstream failure is
      returned as ValidationResult(success=False, error=...)
    - Endpoint never ends with "/"

Design Decisions:
    - Adapter owns its AuthenticatedHttpClient; the credential issuer is shared in from the facade
    - Wire shapes live in longears_wire.py: this module sequences calls and logs (ADR: ExMA single responsibility)
    - Capability reports never cached: every check is a fresh GET
"""

import asyncio
import logging

import httpx

from rcs_sdk.core.domain_types import ProviderState
from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.core.phone import format_phone_number, is_valid_e164
from rcs_sdk.infrastructure.credentials import CredentialIssuer
from rcs_sdk.infrastructure.http_pipeline import AuthenticatedHttpClient
from rcs_sdk.schemas.capabilities import RCSCapabilities, ValidationResult
from rcs_sdk.schemas.config import ProviderOptions
from rcs_sdk.schemas.messages import MessageResponse, RCSMessage
from rcs_sdk.services.longears_wire import (
    parse_capabilities,
    to_capability_report,
    to_message_response,
    to_rcs_capabilities,
    to_wire_message,
)

logger = logging.getLogger(__name__)

DEFAULT_API_ENDPOINT = "https://api.longears.mobi/v1"

STATUS_PATH = "/status"
MESSAGES_PATH = "/messages"
CAPABILITIES_PATH = "/capabilities"


class LongearsRCSProvider:
    """RCS provider adapter for the longears backend."""

    name = "longears"

    def __init__(
        self,
        issuer: CredentialIssuer,
        config: ProviderOptions | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        log: logging.Logger | None = None,
    ):
        self._config = config or ProviderOptions()
        self._api_endpoint = self._config.api_endpoint or DEFAULT_API_ENDPOINT
        self._log = log or logger
        self._http = AuthenticatedHttpClient(
            issuer,
            self.name,
            timeout_seconds=self._config.timeout,
            user_agent=self._config.user_agent,
            transport=transport,
            log=self._log,
        )
        self._state = ProviderState.UNINITIALIZED
        self._init_task: asyncio.Task | None = None

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def api_endpoint(self) -> str:
        return self._api_endpoint

    @property
    def config(self) -> ProviderOptions:
        return self._config

    # ─── lifecycle ───────────────────────────────────────────────

    async def initialize(self, config: ProviderOptions | None = None) -> None:
        """Apply config overrides and probe GET /status once.

        Concurrent callers await the same in-flight probe.
        """
        if self._state == ProviderState.READY:
            return
        if self._state == ProviderState.FAILED:
            raise RCSError(
                "Longears RCS provider failed to initialize earlier; "
                "construct a new provider instance",
                RCSErrorCode.INITIALIZATION_FAILED,
                self.name,
            )
        if self._init_task is None:
            self._state = ProviderState.INITIALIZING
            self._init_task = asyncio.create_task(self._run_initialize(config))
        await asyncio.shield(self._init_task)

    async def _run_initialize(self, config: ProviderOptions | None) -> None:
        self._log.info("Initializing Longears RCS provider", extra={"provider": self.name})
        try:
            if config is not None:
                self._config = config
                if config.api_endpoint:
                    self._api_endpoint = config.api_endpoint
            await self._test_connection()
        except Exception as e:
            self._state = ProviderState.FAILED
            self._log.error(
                f"Failed to initialize Longears RCS provider: {e}",
                extra={"provider": self.name},
            )
            raise RCSError(
                "Failed to initialize Longears RCS provider",
                RCSErrorCode.INITIALIZATION_FAILED,
                self.name,
                e,
            ) from e

        self._state = ProviderState.READY
        self._log.info(
            "Longears RCS provider initialized successfully",
            extra={"provider": self.name, "url": self._api_endpoint},
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    # ─── operations ──────────────────────────────────────────────

    async def send_message(self, message: RCSMessage) -> MessageResponse:
        """Translate, POST /messages, translate the receipt back."""
        self._ensure_ready()
        if not is_valid_e164(message.to):
            raise RCSError(
                "Invalid phone number format. Must be in E.164 format.",
                RCSErrorCode.INVALID_PHONE_NUMBER,
                self.name,
                {"phoneNumber": message.to},
            )

        try:
            self._log.debug(
                "Sending message via Longears RCS",
                extra={"provider": self.name, "phone_number": message.to},
            )
            body = await self._http.post(
                f"{self._api_endpoint}{MESSAGES_PATH}",
                json=to_wire_message(message),
            )
            response = to_message_response(body)
        except RCSError as e:
            self._log.error(
                f"Failed to send message via Longears RCS: {e.message}",
                extra={"provider": self.name, "error_code": e.code.value},
            )
            raise
        except Exception as e:
            self._log.error(
                f"Failed to send message via Longears RCS: {e}", exc_info=True,
            )
            raise RCSError(
                "Failed to send message via Longears RCS",
                RCSErrorCode.MESSAGE_SEND_FAILED,
                self.name,
                e,
            ) from e

        self._log.info(
            "Message sent successfully via Longears RCS",
            extra={"provider": self.name, "message_id": response.message_id},
        )
        return response

    async def validate_phone_number(
        self, phone_number: str, agent_id: str | None = None,
    ) -> ValidationResult:
        """Capability check that never raises past the precondition."""
        self._ensure_ready()
        formatted = format_phone_number(phone_number) or phone_number

        try:
            body = await self._http.get(
                f"{self._api_endpoint}{CAPABILITIES_PATH}",
                params=self._capability_params(formatted, agent_id),
                not_found_code=RCSErrorCode.RCS_NOT_SUPPORTED,
            )
            report = to_capability_report(formatted, parse_capabilities(body))
        except Exception as e:
            self._log.error(
                f"Failed to validate phone number via Longears RCS: {e}",
                extra={"provider": self.name, "phone_number": formatted},
            )
            return ValidationResult(
                success=False, error=f"Failed to validate phone number: {e}",
            )

        self._log.debug(
            "Phone number capability result from Longears RCS",
            extra={
                "provider": self.name,
                "phone_number": formatted,
                "is_capable": report.is_capable,
            },
        )
        return ValidationResult(success=True, capability=report)

    async def get_capabilities(
        self, phone_number: str, agent_id: str | None = None,
    ) -> RCSCapabilities:
        """Feature limits for a destination. Raises on any failure."""
        self._ensure_ready()
        formatted = format_phone_number(phone_number) or phone_number
        try:
            body = await self._http.get(
                f"{self._api_endpoint}{CAPABILITIES_PATH}",
                params=self._capability_params(formatted, agent_id),
                not_found_code=RCSErrorCode.RCS_NOT_SUPPORTED,
            )
            return to_rcs_capabilities(parse_capabilities(body))
        except RCSError:
            raise
        except Exception as e:
            self._log.error(f"Failed to get capabilities: {e}", exc_info=True)
            raise RCSError(
                "Failed to get capabilities",
                RCSErrorCode.CAPABILITY_CHECK_FAILED,
                self.name,
                e,
            ) from e

    # ─── internals ───────────────────────────────────────────────

    def _ensure_ready(self) -> None:
        if self._state != ProviderState.READY:
            raise RCSError(
                "Provider not initialized. Call initialize() first.",
                RCSErrorCode.NOT_INITIALIZED,
                self.name,
            )

    def _capability_params(
        self, phone_number: str, agent_id: str | None,
    ) -> dict[str, str]:
        params = {"phoneNumber": phone_number}
        agent = agent_id or self._config.agent_id
        if agent:
            params["agentId"] = agent
        return params

    async def _test_connection(self) -> None:
        try:
            await self._http.get(f"{self._api_endpoint}{STATUS_PATH}")
        except RCSError as e:
            raise RCSError(
                "Failed to connect to Longears API",
                RCSErrorCode.NETWORK_ERROR,
                self.name,
                e,
            ) from e
