"""Credential Issuer — HMAC-signed, time-limited credentials for the longears API.

Invariants:
    - Construction fails (AUTH_INVALID) before any network access if key or secret is empty
    - token = "{key}:{ts_ms}:{hex(hmac_sha256(secret, key:ts_ms))}" (three colon fields)
    - A credential is valid strictly before expires_at; expiry = issue time + 3600s (fixed)
    - issue() never returns an expired credential
    - The signed timestamp is the clock reading in ms (never pinned after a backward
      clock step); expiry is measured from that same reading
    - refresh() always changes the token: a reading equal to the previous one is bumped by 1 ms

Design Decisions:
    - Synthesis is a pure local computation: no lock around the credential swap,
      concurrent callers may redundantly re-sign and that is harmless
    - Clock injectable (epoch seconds callable) so expiry is testable without sleeping
"""

import hashlib
import hmac
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable

from rcs_sdk.core.domain_types import AuthScheme
from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.schemas.config import AuthCredentials

logger = logging.getLogger(__name__)

LONGEARS_AUTH_HEADER = "X-Longears-Auth"
TOKEN_TTL = timedelta(seconds=3600)


@dataclass(frozen=True)
class AuthToken:
    """An issued credential. Never persisted."""
    token: str
    scheme: AuthScheme
    expires_at: datetime


@runtime_checkable
class CredentialIssuer(Protocol):
    """What the HTTP pipeline needs from an auth provider."""

    @property
    def scheme(self) -> AuthScheme: ...

    @property
    def header_name(self) -> str: ...

    def issue(self) -> AuthToken: ...

    def refresh(self) -> AuthToken: ...

    def is_valid(self) -> bool: ...


class LongearsCredentialIssuer:
    """Signs `key:timestamp` with the API secret. Custom scheme, no prefix."""

    name = "longears"
    scheme = AuthScheme.CUSTOM
    header_name = LONGEARS_AUTH_HEADER

    def __init__(
        self,
        credentials: AuthCredentials,
        *,
        clock: Callable[[], float] = time.time,
        log: logging.Logger | None = None,
    ):
        if not credentials.api_key or not credentials.api_secret:
            raise RCSError(
                "Longears authentication requires apiKey and apiSecret",
                RCSErrorCode.AUTH_INVALID,
                self.name,
            )
        self._api_key = credentials.api_key
        self._api_secret = credentials.api_secret.encode("utf-8")
        self._clock = clock
        self._log = log or logger
        self._token: AuthToken | None = None
        self._last_timestamp_ms = 0

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def current(self) -> AuthToken | None:
        return self._token

    def issue(self) -> AuthToken:
        """Return the current credential if still valid, else sign a new one."""
        if self.is_valid():
            self._log.debug("Using existing longears credential")
            return self._token  # type: ignore[return-value]
        return self._synthesize()

    def refresh(self) -> AuthToken:
        """Discard the current credential and sign a new one."""
        self._log.debug("Refreshing longears credential")
        self._token = None
        return self._synthesize()

    def is_valid(self) -> bool:
        if self._token is None:
            return False
        return self._now() < self._token.expires_at

    def get_auth_headers(self) -> dict[str, str]:
        if self._token is None:
            raise RCSError(
                "No valid token available. Call issue() first.",
                RCSErrorCode.AUTH_FAILED,
                self.name,
            )
        return {self.header_name: self._token.token}

    # ─── internals ───────────────────────────────────────────────

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self._clock(), tz=timezone.utc)

    def _signing_timestamp_ms(self, now: float) -> int:
        """Clock time in ms; bumped by 1 only when it equals the previous one."""
        ts = int(now * 1000)
        if ts == self._last_timestamp_ms:
            ts += 1
        self._last_timestamp_ms = ts
        return ts

    def _synthesize(self) -> AuthToken:
        now = self._clock()
        try:
            timestamp_ms = self._signing_timestamp_ms(now)
            token = sign_credential(self._api_key, self._api_secret, str(timestamp_ms))
        except Exception as e:
            self._log.error(f"Longears credential signing failed: {e}", exc_info=True)
            raise RCSError(
                "Failed to authenticate with Longears",
                RCSErrorCode.AUTH_FAILED,
                self.name,
                e,
            ) from e
        issued_at = datetime.fromtimestamp(now, tz=timezone.utc)
        self._token = AuthToken(
            token=token,
            scheme=self.scheme,
            expires_at=issued_at + TOKEN_TTL,
        )
        self._log.debug("Longears credential issued", extra={"provider": self.name})
        return self._token


def sign_credential(api_key: str, api_secret: bytes, timestamp: str) -> str:
    """Build `key:timestamp:signature` where signature = hex HMAC-SHA256(secret, key:timestamp)."""
    message = f"{api_key}:{timestamp}".encode("utf-8")
    signature = hmac.new(api_secret, message, hashlib.sha256).hexdigest()
    return f"{api_key}:{timestamp}:{signature}"
