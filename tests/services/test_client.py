"""RCS Client — tests for the facade lifecycle and the end-to-end happy path.

Tests cover:
    - End-to-end: construct, initialize, send → MessageResponse(msg-1, sent, 2023-01-01 UTC)
    - initialize() idempotent (one /status probe), also when calls overlap
    - Operations before initialize → NOT_INITIALIZED with zero requests
    - Bad configuration → INVALID_CONFIGURATION / PROVIDER_NOT_FOUND / AUTH_INVALID
    - Adapter failure wrapped once as INITIALIZATION_FAILED
    - validate_phone_number never raises past the precondition
    - from_settings builds from RCS_* environment
"""

import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from rcs_sdk.config import Settings
from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.core.builders import MessageBuilder
from rcs_sdk.core.domain_types import MessageStatus
from rcs_sdk.schemas.messages import MessageResponse
from rcs_sdk.services.client import RCSClient
from tests.fakes import (
    API_KEY, API_SECRET, CAPABILITIES_PATH, ENDPOINT, MESSAGES_PATH, STATUS_PATH, slow_route,
)

TO = "+14155552671"


async def test_end_to_end_send(sdk_config, backend):
    async with RCSClient(sdk_config, transport=backend.transport) as client:
        await client.initialize()
        assert client.is_initialized()
        response = await client.send_message({"to": "+12345678901", "content": {"text": "hi"}})

    assert response == MessageResponse(
        message_id="msg-1",
        status=MessageStatus.SENT,
        timestamp=datetime(2023, 1, 1, tzinfo=timezone.utc),
        provider_response={
            "messageId": "msg-1", "status": "success", "timestamp": "2023-01-01T00:00:00Z",
        },
    )
    assert backend.paths() == [STATUS_PATH, MESSAGES_PATH]
    assert str(backend.requests[1].url) == f"{ENDPOINT}/messages"


async def test_send_built_message(sdk_config, backend):
    client = RCSClient(sdk_config, transport=backend.transport)
    await client.initialize()
    message = MessageBuilder(TO).set_text("Hi").add_reply("Yes").build()
    await client.send_message(message)
    assert backend.json_of(1)["suggestions"] == [
        {"type": "reply", "text": "Yes", "postbackData": "Yes"},
    ]
    await client.aclose()


async def test_initialize_is_idempotent(sdk_config, backend):
    client = RCSClient(sdk_config, transport=backend.transport)
    assert not client.is_initialized()
    await client.initialize()
    await client.initialize()
    assert client.is_initialized()
    assert backend.paths() == [STATUS_PATH]


async def test_overlapping_initialize_both_succeed(sdk_config, backend):
    backend.routes[STATUS_PATH] = slow_route(httpx.Response(200))
    client = RCSClient(sdk_config, transport=backend.transport)

    results = await asyncio.gather(client.initialize(), client.initialize())

    assert results == [None, None]
    assert client.is_initialized()
    assert backend.paths() == [STATUS_PATH]


async def test_operations_before_initialize(sdk_config, backend):
    client = RCSClient(sdk_config, transport=backend.transport)
    for call in (
        client.send_message({"to": TO, "content": {"text": "x"}}),
        client.get_capabilities(TO),
        client.validate_phone_number(TO),
    ):
        with pytest.raises(RCSError) as exc_info:
            await call
        assert exc_info.value.code == RCSErrorCode.NOT_INITIALIZED
    assert backend.requests == []


def test_get_provider_name(sdk_config):
    assert RCSClient(sdk_config).get_provider() == "longears"


def test_invalid_configuration():
    with pytest.raises(RCSError) as exc_info:
        RCSClient({"provider": "longears"})
    assert exc_info.value.code == RCSErrorCode.INVALID_CONFIGURATION
    assert exc_info.value.provider == "longears"


def test_unknown_provider(sdk_config):
    sdk_config["provider"] = "other"
    with pytest.raises(RCSError) as exc_info:
        RCSClient(sdk_config)
    assert exc_info.value.code == RCSErrorCode.PROVIDER_NOT_FOUND


def test_unknown_auth_type(sdk_config):
    sdk_config["auth"]["type"] = "oauth"
    with pytest.raises(RCSError) as exc_info:
        RCSClient(sdk_config)
    assert exc_info.value.code == RCSErrorCode.AUTH_INVALID


def test_missing_secret(sdk_config):
    del sdk_config["auth"]["credentials"]["apiSecret"]
    with pytest.raises(RCSError) as exc_info:
        RCSClient(sdk_config)
    assert exc_info.value.code == RCSErrorCode.AUTH_INVALID


async def test_initialize_failure_wrapped(sdk_config, backend):
    backend.routes[STATUS_PATH] = lambda req: httpx.Response(500)
    client = RCSClient(sdk_config, transport=backend.transport)
    with pytest.raises(RCSError) as exc_info:
        await client.initialize()
    assert exc_info.value.code == RCSErrorCode.INITIALIZATION_FAILED
    assert exc_info.value.details.code == RCSErrorCode.INITIALIZATION_FAILED
    assert not client.is_initialized()


async def test_invalid_message_dict(sdk_config, backend):
    client = RCSClient(sdk_config, transport=backend.transport)
    await client.initialize()
    with pytest.raises(RCSError) as exc_info:
        await client.send_message({"to": TO})
    assert exc_info.value.code == RCSErrorCode.VALIDATION_FAILED
    assert backend.paths() == [STATUS_PATH]


async def test_send_invalid_number_passes_through(sdk_config, backend):
    client = RCSClient(sdk_config, transport=backend.transport)
    await client.initialize()
    with pytest.raises(RCSError) as exc_info:
        await client.send_message({"to": "4155552671", "content": {"text": "x"}})
    assert exc_info.value.code == RCSErrorCode.INVALID_PHONE_NUMBER
    assert backend.paths() == [STATUS_PATH]


async def test_validate_phone_number_failure_is_a_result(sdk_config, backend):
    backend.routes[CAPABILITIES_PATH] = lambda req: httpx.Response(429)
    client = RCSClient(sdk_config, transport=backend.transport)
    await client.initialize()
    result = await client.validate_phone_number(TO)
    assert result.success is False
    assert "Rate limit exceeded" in result.error


async def test_validate_phone_number_agent_id(sdk_config, backend):
    client = RCSClient(sdk_config, transport=backend.transport)
    await client.initialize()
    result = await client.validate_phone_number(TO, agent_id="agent-9")
    assert result.success
    assert backend.requests[-1].url.params["agentId"] == "agent-9"


async def test_get_capabilities(sdk_config, backend):
    client = RCSClient(sdk_config, transport=backend.transport)
    await client.initialize()
    caps = await client.get_capabilities(TO)
    assert caps.supports_suggestions


async def test_from_settings_reads_environment(monkeypatch, backend):
    monkeypatch.setenv("RCS_API_KEY", API_KEY)
    monkeypatch.setenv("RCS_API_SECRET", API_SECRET)
    monkeypatch.setenv("RCS_API_ENDPOINT", ENDPOINT + "/")
    monkeypatch.setenv("RCS_AGENT_ID", "env-agent")

    client = RCSClient.from_settings(transport=backend.transport)
    await client.initialize()
    await client.validate_phone_number(TO)
    assert str(backend.requests[0].url) == f"{ENDPOINT}/status"
    assert backend.requests[1].url.params["agentId"] == "env-agent"


def test_from_settings_explicit_settings_without_credentials():
    with pytest.raises(RCSError) as exc_info:
        RCSClient.from_settings(Settings(_env_file=None))
    assert exc_info.value.code == RCSErrorCode.AUTH_INVALID


def test_millisecond_timeout_is_invalid_configuration(sdk_config):
    sdk_config["options"]["timeout"] = 30000
    with pytest.raises(RCSError) as exc_info:
        RCSClient(sdk_config)
    assert exc_info.value.code == RCSErrorCode.INVALID_CONFIGURATION


def test_from_settings_millisecond_timeout_is_invalid_configuration(monkeypatch):
    monkeypatch.setenv("RCS_API_KEY", API_KEY)
    monkeypatch.setenv("RCS_API_SECRET", API_SECRET)
    monkeypatch.setenv("RCS_TIMEOUT_SECONDS", "30000")
    with pytest.raises(RCSError) as exc_info:
        RCSClient.from_settings()
    assert exc_info.value.code == RCSErrorCode.INVALID_CONFIGURATION
