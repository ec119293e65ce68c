"""RCS Client — facade composing credential issuer + provider adapter behind one surface.

Invariants:
    - Lifecycle: uninitialized → initialized (terminal, never reverts)
    - initialize() is idempotent, overlapping calls included (they share the adapter's
      in-flight probe); order is credential issuance, then adapter initialization;
      an issuance failure aborts before the adapter is touched
    - Every operation except initialize / is_initialized / get_provider requires initialized
      state and fails fast with NOT_INITIALIZED (zero network calls)
    - initialize() reports any failure as INITIALIZATION_FAILED with the cause attached;
      other operations pass RCSError through unchanged and wrap anything else once

Design Decisions:
    - Config is an injected value (SDKConfig or its dict form); only from_settings()
      reads the environment (ADR: library never reaches into process state)
    - No internal locks: concurrent callers share only the issuer's read-mostly state
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from rcs_sdk.config import Settings, get_settings
from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.schemas.capabilities import RCSCapabilities, ValidationResult
from rcs_sdk.schemas.config import SDKConfig
from rcs_sdk.schemas.messages import MessageResponse, RCSMessage
from rcs_sdk.services.selection import create_auth_provider, create_provider

logger = logging.getLogger(__name__)


class RCSClient:
    """Entry point for applications: initialize, send, check capabilities."""

    def __init__(
        self,
        config: SDKConfig | dict[str, Any],
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        log: logging.Logger | None = None,
    ):
        self._config = _coerce_config(config)
        self._log = log or logger
        self._auth = create_auth_provider(self._config.auth, log=self._log)
        self._provider = create_provider(
            self._config.provider,
            self._auth,
            self._config.options,
            transport=transport,
            log=self._log,
        )
        self._initialized = False

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, **kwargs: Any,
    ) -> "RCSClient":
        """Build a client from RCS_* environment variables / .env."""
        settings = settings or get_settings()
        config = dict(
            provider=settings.provider,
            auth={
                "type": settings.auth_type,
                "credentials": {
                    "api_key": settings.api_key,
                    "api_secret": settings.api_secret,
                },
            },
            options={
                "api_endpoint": settings.api_endpoint,
                "timeout": settings.timeout_seconds,
                "user_agent": settings.user_agent,
                "agent_id": settings.agent_id,
            },
        )
        return cls(config, **kwargs)

    async def __aenter__(self) -> "RCSClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ─── lifecycle ───────────────────────────────────────────────

    async def initialize(self) -> None:
        """Issue the first credential, then initialize the provider adapter."""
        if self._initialized:
            return

        try:
            self._log.info(
                f"Initializing RCS client with provider: {self._config.provider}",
                extra={"provider": self._config.provider},
            )
            self._auth.issue()
            await self._provider.initialize(self._config.options)
        except Exception as e:
            self._log.error(
                f"Failed to initialize RCS client: {e}",
                extra={"provider": self._config.provider},
            )
            raise RCSError(
                "Failed to initialize RCS client",
                RCSErrorCode.INITIALIZATION_FAILED,
                self._config.provider,
                e,
            ) from e

        self._initialized = True
        self._log.info("RCS client initialized successfully")

    async def aclose(self) -> None:
        await self._provider.aclose()

    # ─── operations ──────────────────────────────────────────────

    async def send_message(self, message: RCSMessage | dict[str, Any]) -> MessageResponse:
        self._ensure_initialized()
        message = self._coerce_message(message)

        try:
            self._log.debug(
                "Sending RCS message",
                extra={"provider": self._config.provider, "phone_number": message.to},
            )
            response = await self._provider.send_message(message)
        except RCSError:
            raise
        except Exception as e:
            self._log.error(f"Failed to send message: {e}", exc_info=True)
            raise RCSError(
                "Failed to send message",
                RCSErrorCode.MESSAGE_SEND_FAILED,
                self._config.provider,
                e,
            ) from e

        self._log.info(
            "Message sent successfully",
            extra={"message_id": response.message_id},
        )
        return response

    async def get_capabilities(self, phone_number: str) -> RCSCapabilities:
        self._ensure_initialized()
        try:
            return await self._provider.get_capabilities(phone_number)
        except RCSError:
            raise
        except Exception as e:
            self._log.error(f"Failed to get capabilities: {e}", exc_info=True)
            raise RCSError(
                "Failed to get capabilities",
                RCSErrorCode.CAPABILITY_CHECK_FAILED,
                self._config.provider,
                e,
            ) from e

    async def validate_phone_number(
        self, phone_number: str, agent_id: str | None = None,
    ) -> ValidationResult:
        """Check RCS support. Raises only when the client is not initialized."""
        self._ensure_initialized()
        try:
            return await self._provider.validate_phone_number(phone_number, agent_id)
        except RCSError:
            raise
        except Exception as e:
            self._log.error(f"Failed to validate phone number: {e}", exc_info=True)
            raise RCSError(
                "Failed to validate phone number",
                RCSErrorCode.VALIDATION_FAILED,
                self._config.provider,
                e,
            ) from e

    def get_provider(self) -> str:
        return self._provider.name

    def is_initialized(self) -> bool:
        return self._initialized

    # ─── internals ───────────────────────────────────────────────

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RCSError(
                "RCS client not initialized. Call initialize() first.",
                RCSErrorCode.NOT_INITIALIZED,
                self._config.provider,
            )

    def _coerce_message(self, message: RCSMessage | dict[str, Any]) -> RCSMessage:
        if isinstance(message, RCSMessage):
            return message
        try:
            return RCSMessage.model_validate(message)
        except ValidationError as e:
            raise RCSError(
                "Invalid message",
                RCSErrorCode.VALIDATION_FAILED,
                self._config.provider,
                e,
            ) from e


def _coerce_config(config: SDKConfig | dict[str, Any]) -> SDKConfig:
    if isinstance(config, SDKConfig):
        return config
    try:
        return SDKConfig.model_validate(config)
    except ValidationError as e:
        raise RCSError(
            "Invalid SDK configuration",
            RCSErrorCode.INVALID_CONFIGURATION,
            config.get("provider") if isinstance(config, dict) else None,
            e,
        ) from e
