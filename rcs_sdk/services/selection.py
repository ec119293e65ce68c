"""Selection Layer — explicit tag → constructor registries for providers and auth types.

Invariants:
    - Provider names match case-insensitively; unknown → PROVIDER_NOT_FOUND
    - Auth types match exactly; unknown → AUTH_INVALID ("unsupported auth type")
    - Pure dispatch: no state, no I/O, construction errors propagate unchanged

Design Decisions:
    - Explicit dict over auto-discovery: every mapping visible in one place,
      adding a backend requires editing this module (ADR: ExMA no convention-over-config)
"""

from collections.abc import Callable
from typing import Any

from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.infrastructure.credentials import CredentialIssuer, LongearsCredentialIssuer
from rcs_sdk.schemas.config import AuthConfig, ProviderOptions
from rcs_sdk.services.longears_provider import LongearsRCSProvider
from rcs_sdk.services.provider_contract import RCSProvider

ProviderFactory = Callable[..., RCSProvider]
AuthFactory = Callable[..., CredentialIssuer]

# ADR: aliases point at the same constructor; keys are lower-case
_PROVIDERS: dict[str, ProviderFactory] = {
    "longears": LongearsRCSProvider,
    "longears-rcs": LongearsRCSProvider,
}

_AUTH_TYPES: dict[str, AuthFactory] = {
    "longears": LongearsCredentialIssuer,
}


def create_provider(
    provider_name: str,
    issuer: CredentialIssuer,
    config: ProviderOptions | None = None,
    **kwargs: Any,
) -> RCSProvider:
    """Instantiate the adapter registered under provider_name (case-insensitive)."""
    factory = _PROVIDERS.get(provider_name.lower())
    if factory is None:
        raise RCSError(
            f"Unknown provider: {provider_name}",
            RCSErrorCode.PROVIDER_NOT_FOUND,
            provider_name,
        )
    return factory(issuer, config or ProviderOptions(), **kwargs)


def create_auth_provider(config: AuthConfig, **kwargs: Any) -> CredentialIssuer:
    """Instantiate the credential issuer registered under config.type (exact match)."""
    factory = _AUTH_TYPES.get(config.type)
    if factory is None:
        raise RCSError(
            f"Unknown auth type: {config.type}",
            RCSErrorCode.AUTH_INVALID,
            config.type,
        )
    return factory(config.credentials, **kwargs)


def get_available_providers() -> list[str]:
    return ["longears"]


def is_provider_supported(provider_name: str) -> bool:
    return provider_name.lower() in _PROVIDERS


def get_available_auth_types() -> list[str]:
    return list(_AUTH_TYPES)


def is_auth_type_supported(auth_type: str) -> bool:
    return auth_type in _AUTH_TYPES
