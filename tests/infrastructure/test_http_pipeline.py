"""Authenticated HTTP Pipeline — tests for credential injection and error mapping.

Tests cover:
    - Header shape per scheme (custom raw header, bearer, basic)
    - Default Content-Type / User-Agent headers
    - Status mapping: 401/403, 404 (default and capability code), 429, 400, 500
    - No response → NETWORK_ERROR
    - Body decoding: JSON, text, empty
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from rcs_sdk import __version__
from rcs_sdk.core.domain_types import AuthScheme
from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.infrastructure.credentials import AuthToken
from rcs_sdk.infrastructure.http_pipeline import AuthenticatedHttpClient

URL = "https://api.test/v1/thing"


@dataclass
class StubIssuer:
    scheme: AuthScheme
    header_name: str = "X-Test-Auth"
    issued: int = 0

    def issue(self) -> AuthToken:
        self.issued += 1
        return AuthToken(
            token="tok", scheme=self.scheme,
            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
        )

    def refresh(self) -> AuthToken:
        return self.issue()

    def is_valid(self) -> bool:
        return True


def _client(handler, scheme=AuthScheme.CUSTOM, **kwargs):
    issuer = StubIssuer(scheme)
    client = AuthenticatedHttpClient(
        issuer, "longears", transport=httpx.MockTransport(handler), **kwargs,
    )
    return client, issuer


def _respond(status, **kwargs):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(status, **kwargs)
    return handler, seen


async def test_custom_scheme_sends_raw_token_under_provider_header():
    handler, seen = _respond(200, json={})
    client, issuer = _client(handler)
    await client.get(URL)
    assert seen[0].headers["X-Test-Auth"] == "tok"
    assert "authorization" not in seen[0].headers
    assert issuer.issued == 1


async def test_bearer_scheme_header():
    handler, seen = _respond(200, json={})
    client, _ = _client(handler, AuthScheme.BEARER)
    await client.get(URL)
    assert seen[0].headers["Authorization"] == "Bearer tok"


async def test_basic_scheme_header():
    handler, seen = _respond(200, json={})
    client, _ = _client(handler, AuthScheme.BASIC)
    await client.get(URL)
    assert seen[0].headers["Authorization"] == "Basic tok"


async def test_default_headers():
    handler, seen = _respond(200, json={})
    client, _ = _client(handler)
    await client.post(URL, json={"a": 1})
    assert seen[0].headers["Content-Type"] == "application/json"
    assert seen[0].headers["User-Agent"] == f"longears-rcs-sdk/{__version__}"


async def test_custom_user_agent_and_timeout():
    handler, seen = _respond(200, json={})
    client, _ = _client(handler, user_agent="my-app/2", timeout_seconds=5)
    await client.get(URL)
    assert seen[0].headers["User-Agent"] == "my-app/2"
    assert client.timeout_seconds == 5


async def test_success_returns_decoded_json():
    handler, _ = _respond(200, json={"ok": True})
    client, _ = _client(handler)
    assert await client.get(URL) == {"ok": True}


async def test_success_returns_text_when_not_json():
    handler, _ = _respond(200, text="plain")
    client, _ = _client(handler)
    assert await client.get(URL) == "plain"


async def test_success_returns_none_for_empty_body():
    handler, _ = _respond(204)
    client, _ = _client(handler)
    assert await client.get(URL) is None


@pytest.mark.parametrize("status", [401, 403])
async def test_auth_statuses_map_to_auth_failed(status):
    handler, _ = _respond(status, json={"error": "denied"})
    client, _ = _client(handler)
    with pytest.raises(RCSError) as exc_info:
        await client.get(URL)
    assert exc_info.value.code == RCSErrorCode.AUTH_FAILED
    assert exc_info.value.details["status"] == status


async def test_404_defaults_to_provider_error():
    handler, _ = _respond(404)
    client, _ = _client(handler)
    with pytest.raises(RCSError) as exc_info:
        await client.get(URL)
    assert exc_info.value.code == RCSErrorCode.PROVIDER_ERROR


async def test_404_uses_caller_code():
    handler, _ = _respond(404)
    client, _ = _client(handler)
    with pytest.raises(RCSError) as exc_info:
        await client.get(URL, not_found_code=RCSErrorCode.RCS_NOT_SUPPORTED)
    assert exc_info.value.code == RCSErrorCode.RCS_NOT_SUPPORTED


async def test_429_maps_to_rate_limit_with_retry_after():
    handler, _ = _respond(429, headers={"Retry-After": "30"}, json={})
    client, _ = _client(handler)
    with pytest.raises(RCSError) as exc_info:
        await client.get(URL)
    assert exc_info.value.code == RCSErrorCode.RATE_LIMIT_EXCEEDED
    assert exc_info.value.details["retry_after"] == 30


async def test_400_with_phone_message_maps_to_invalid_phone():
    handler, _ = _respond(400, json={"error": "Invalid phone number"})
    client, _ = _client(handler)
    with pytest.raises(RCSError) as exc_info:
        await client.post(URL, json={})
    assert exc_info.value.code == RCSErrorCode.INVALID_PHONE_NUMBER
    assert exc_info.value.details["data"] == {"error": "Invalid phone number"}


async def test_500_maps_to_provider_error():
    handler, _ = _respond(500, text="oops")
    client, _ = _client(handler)
    with pytest.raises(RCSError) as exc_info:
        await client.get(URL)
    assert exc_info.value.code == RCSErrorCode.PROVIDER_ERROR
    assert exc_info.value.details == {"status": 500, "data": "oops"}


async def test_connect_error_maps_to_network_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)
    client, _ = _client(handler)
    with pytest.raises(RCSError) as exc_info:
        await client.get(URL)
    assert exc_info.value.code == RCSErrorCode.NETWORK_ERROR
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


async def test_timeout_maps_to_network_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)
    client, _ = _client(handler)
    with pytest.raises(RCSError) as exc_info:
        await client.get(URL)
    assert exc_info.value.code == RCSErrorCode.NETWORK_ERROR


async def test_issuer_failure_maps_to_auth_failed():
    class BrokenIssuer(StubIssuer):
        def issue(self):
            raise RuntimeError("clock broke")

    client = AuthenticatedHttpClient(
        BrokenIssuer(AuthScheme.CUSTOM), "longears",
        transport=httpx.MockTransport(lambda r: httpx.Response(200)),
    )
    with pytest.raises(RCSError) as exc_info:
        await client.get(URL)
    assert exc_info.value.code == RCSErrorCode.AUTH_FAILED
