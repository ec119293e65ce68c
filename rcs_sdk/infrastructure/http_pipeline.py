"""Authenticated HTTP Pipeline — wraps httpx.AsyncClient with credential injection and error mapping.

Invariants:
    - Every request asks the issuer for a credential first (issue() re-signs when stale)
    - Header shape follows the credential scheme: custom → raw token under the provider header,
      bearer/basic → "Authorization: <Scheme> <token>"
    - All failures mapped to RCSError (core/errors.py) exactly once, here
      - 401/403 → AUTH_FAILED, 404 → caller-chosen code (PROVIDER_ERROR by default),
        429 → RATE_LIMIT_EXCEEDED, other statuses → RCSError.from_provider_error
      - no response (connect error, timeout) → NETWORK_ERROR
    - Success returns the decoded body unmodified (JSON when parseable, else text, None when empty)
    - No retries: retry policy belongs to the caller

Design Decisions:
    - Wrapper over raw client: isolates auth + error mapping from provider adapters (ADR: single responsibility)
    - Pipeline holds no credential state: the issuer owns it
    - transport injectable: tests drive the pipeline with httpx.MockTransport
"""

import logging
from typing import Any

import httpx

from rcs_sdk import __version__
from rcs_sdk.core.domain_types import AuthScheme
from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.infrastructure.credentials import CredentialIssuer

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = f"longears-rcs-sdk/{__version__}"


class AuthenticatedHttpClient:
    """Executes provider requests with a fresh credential attached."""

    def __init__(
        self,
        issuer: CredentialIssuer,
        provider: str,
        *,
        timeout_seconds: float | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        log: logging.Logger | None = None,
    ):
        self.issuer = issuer
        self.provider = provider
        self.timeout_seconds = timeout_seconds or DEFAULT_TIMEOUT_SECONDS
        self._log = log or logger
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            headers={
                "Content-Type": "application/json",
                "User-Agent": user_agent or DEFAULT_USER_AGENT,
            },
            transport=transport,
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
        not_found_code: RCSErrorCode = RCSErrorCode.PROVIDER_ERROR,
    ) -> Any:
        """Send one authenticated request. Returns the decoded body or raises RCSError."""
        headers = self._auth_headers()
        try:
            response = await self._client.request(
                method, url, json=json, params=params, headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._classify_status(e.response, not_found_code) from e
        except httpx.TimeoutException as e:
            self._log_failure(method, url, f"timed out after {self.timeout_seconds}s")
            raise RCSError(
                "No response received from provider (timeout)",
                RCSErrorCode.NETWORK_ERROR,
                self.provider,
                e,
            ) from e
        except httpx.TransportError as e:
            self._log_failure(method, url, str(e))
            raise RCSError(
                "No response received from provider",
                RCSErrorCode.NETWORK_ERROR,
                self.provider,
                e,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._log_failure(method, url, str(e))
            raise RCSError(
                "Request setup failed",
                RCSErrorCode.PROVIDER_ERROR,
                self.provider,
                e,
            ) from e

        self._log_success(method, url, response)
        return _decode_body(response)

    async def get(self, url: str, **kwargs) -> Any:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> Any:
        return await self.request("POST", url, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    # ─── internals ───────────────────────────────────────────────

    def _auth_headers(self) -> dict[str, str]:
        """Obtain a credential and render it per its scheme."""
        try:
            credential = self.issuer.issue()
        except RCSError:
            raise
        except Exception as e:
            self._log.error(f"Authentication failed: {e}", exc_info=True)
            raise RCSError(
                "Failed to authenticate request",
                RCSErrorCode.AUTH_FAILED,
                self.provider,
                e,
            ) from e

        if credential.scheme == AuthScheme.BEARER:
            return {"Authorization": f"Bearer {credential.token}"}
        if credential.scheme == AuthScheme.BASIC:
            return {"Authorization": f"Basic {credential.token}"}
        return {self.issuer.header_name: credential.token}

    def _classify_status(
        self, response: httpx.Response, not_found_code: RCSErrorCode,
    ) -> RCSError:
        status = response.status_code
        data = _decode_body(response)
        details = {"status": status, "data": data}
        self._log.error(
            f"HTTP request failed for {self.provider} provider: {status}",
            extra={
                "provider": self.provider,
                "status_code": status,
                "method": response.request.method,
                "url": str(response.request.url),
            },
        )

        if status in (401, 403):
            return RCSError(
                "Authentication failed", RCSErrorCode.AUTH_FAILED, self.provider, details,
            )
        if status == 404:
            message = (
                "Phone number does not support RCS"
                if not_found_code == RCSErrorCode.RCS_NOT_SUPPORTED
                else "Resource not found"
            )
            return RCSError(message, not_found_code, self.provider, details)
        if status == 429:
            details["retry_after"] = _extract_retry_after(response)
            return RCSError(
                "Rate limit exceeded", RCSErrorCode.RATE_LIMIT_EXCEEDED, self.provider, details,
            )

        message = None
        if isinstance(data, dict) and isinstance(data.get("error"), str):
            message = data["error"]
        return RCSError.from_provider_error(
            self.provider, status, message or "Provider request failed", details,
        )

    def _log_success(self, method: str, url: str, response: httpx.Response) -> None:
        self._log.debug(
            f"{method} {url} -> {response.status_code}",
            extra={
                "provider": self.provider,
                "method": method,
                "url": url,
                "status_code": response.status_code,
            },
        )

    def _log_failure(self, method: str, url: str, reason: str) -> None:
        self._log.error(
            f"HTTP request failed for {self.provider} provider: {reason}",
            extra={"provider": self.provider, "method": method, "url": url},
        )


def _decode_body(response: httpx.Response) -> Any:
    """JSON when parseable, raw text otherwise, None for an empty body."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _extract_retry_after(response: httpx.Response) -> int | None:
    """Retry-After header in seconds, when present and numeric."""
    val = response.headers.get("retry-after")
    if val and val.strip().isdigit():
        return int(val)
    return None
