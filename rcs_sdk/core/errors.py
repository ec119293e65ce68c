"""Error Taxonomy — one structured exception type for every RCS SDK failure mode.

Invariants:
    - Every error has a message, a code (RCSErrorCode), an originating provider and a UTC timestamp
    - Transport failures are classified once at the HTTP pipeline boundary, never re-classified upstream
    - to_response() produces a JSON-safe envelope (no raw exception objects leak out)

Design Decisions:
    - Single RCSError class with a closed code enum over a subclass per failure:
      callers branch on `err.code` the same way for every provider (ADR: uniform error shape)
    - details carries either the nested cause or a small payload dict (status, body)
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class RCSErrorCode(str, Enum):
    """Closed set of error kinds surfaced to callers."""
    # General
    UNKNOWN = "UNKNOWN"
    INITIALIZATION_FAILED = "INITIALIZATION_FAILED"
    NOT_INITIALIZED = "NOT_INITIALIZED"

    # Provider
    PROVIDER_NOT_FOUND = "PROVIDER_NOT_FOUND"
    PROVIDER_ERROR = "PROVIDER_ERROR"

    # Authentication
    AUTH_FAILED = "AUTH_FAILED"
    AUTH_EXPIRED = "AUTH_EXPIRED"
    AUTH_INVALID = "AUTH_INVALID"

    # Message
    MESSAGE_SEND_FAILED = "MESSAGE_SEND_FAILED"
    MESSAGE_TOO_LONG = "MESSAGE_TOO_LONG"
    INVALID_CONTENT = "INVALID_CONTENT"

    # Phone number
    INVALID_PHONE_NUMBER = "INVALID_PHONE_NUMBER"
    RCS_NOT_SUPPORTED = "RCS_NOT_SUPPORTED"

    # Capability
    CAPABILITY_CHECK_FAILED = "CAPABILITY_CHECK_FAILED"
    FEATURE_NOT_SUPPORTED = "FEATURE_NOT_SUPPORTED"

    # Network
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Validation
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"


class RCSError(Exception):
    """Base (and only) exception raised by the SDK."""

    def __init__(
        self,
        message: str,
        code: RCSErrorCode = RCSErrorCode.UNKNOWN,
        provider: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.provider = provider
        self.details = details
        self.timestamp = datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return (
            f"RCSError(code={self.code.value!r}, message={self.message!r}, "
            f"provider={self.provider!r})"
        )

    def to_response(self) -> dict:
        """Convert to a JSON-safe error envelope."""
        return {
            "error": {
                "name": "RCSError",
                "code": self.code.value,
                "message": self.message,
                "provider": self.provider,
                "details": _serialize_details(self.details),
                "timestamp": self.timestamp.isoformat(),
            }
        }

    @classmethod
    def from_provider_error(
        cls,
        provider: str,
        status_code: int | None,
        message: str | None = None,
        details: Any = None,
    ) -> "RCSError":
        """Map a provider HTTP failure (status + message) onto an error code.

        404 is mapped here to RCS_NOT_SUPPORTED; the HTTP pipeline handles
        404 itself and only falls through to this for unlisted statuses.
        """
        code = RCSErrorCode.PROVIDER_ERROR
        message = message or "Provider error occurred"

        if status_code == 404:
            code = RCSErrorCode.RCS_NOT_SUPPORTED
            message = "Phone number does not support RCS"
        elif status_code in (401, 403):
            code = RCSErrorCode.AUTH_FAILED
            message = "Authentication failed"
        elif status_code == 429:
            code = RCSErrorCode.RATE_LIMIT_EXCEEDED
            message = "Rate limit exceeded"
        elif status_code == 400:
            lowered = message.lower()
            if "phone" in lowered:
                code = RCSErrorCode.INVALID_PHONE_NUMBER
            elif "content" in lowered:
                code = RCSErrorCode.INVALID_CONTENT

        return cls(message, code, provider, details)

    @staticmethod
    def is_rcs_error(error: object) -> bool:
        return isinstance(error, RCSError)


def _serialize_details(details: Any) -> Any:
    """Render nested causes as dicts/strings so the envelope stays JSON-safe."""
    if details is None:
        return None
    if isinstance(details, RCSError):
        return details.to_response()["error"]
    if isinstance(details, BaseException):
        return {"type": type(details).__name__, "message": str(details)}
    if isinstance(details, dict):
        return {k: _serialize_details(v) for k, v in details.items()}
    if isinstance(details, (list, tuple)):
        return [_serialize_details(v) for v in details]
    if isinstance(details, (str, int, float, bool)):
        return details
    return str(details)
