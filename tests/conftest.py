"""Root conftest — shared fixtures: credentials, config, and a fake longears backend.

Invariants:
    - No test touches the network: every HTTP call goes through httpx.MockTransport
    - Tests never read real RCS_* variables (cleared per test)

Design Decisions:
    - FakeBackend (tests/fakes.py) records every request: tests assert on call counts,
      paths and headers instead of patching httpx internals
"""

import os

import pytest

from rcs_sdk.config import get_settings
from rcs_sdk.infrastructure.credentials import LongearsCredentialIssuer
from rcs_sdk.schemas.config import AuthCredentials
from tests.fakes import API_KEY, API_SECRET, ENDPOINT, FakeBackend


@pytest.fixture(autouse=True)
def _clean_rcs_env(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("RCS_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def issuer():
    return LongearsCredentialIssuer(
        AuthCredentials(api_key=API_KEY, api_secret=API_SECRET),
    )


@pytest.fixture
def sdk_config() -> dict:
    return {
        "provider": "longears",
        "auth": {
            "type": "longears",
            "credentials": {"apiKey": API_KEY, "apiSecret": API_SECRET},
        },
        "options": {"apiEndpoint": ENDPOINT},
    }
