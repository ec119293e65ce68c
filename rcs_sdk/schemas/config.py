"""Config Schemas — the plain configuration value handed to RCSClient.

Invariants:
    - ProviderOptions is frozen: an adapter's config never changes after construction
    - api_endpoint never ends with "/" once validated
    - timeout is in seconds, 0 < timeout <= MAX_TIMEOUT_SECONDS
    - Credentials may be absent here; the credential issuer rejects them (AUTH_INVALID),
      so a missing key surfaces as an RCSError rather than a pydantic ValidationError

Design Decisions:
    - Injected value over ambient env reads: only RCSClient.from_settings() touches
      the environment (ADR: library code does not read process state)
    - extra="allow" on options: provider-specific knobs pass through untouched
"""

from pydantic import ConfigDict, Field, field_validator

from rcs_sdk.schemas.messages import CamelModel

MAX_TIMEOUT_SECONDS = 600


def strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


class AuthCredentials(CamelModel):
    api_key: str | None = None
    api_secret: str | None = Field(default=None, repr=False)


class AuthConfig(CamelModel):
    type: str
    credentials: AuthCredentials = Field(default_factory=AuthCredentials)


class ProviderOptions(CamelModel):
    """Adapter-level options. timeout is in seconds, not milliseconds."""
    model_config = ConfigDict(frozen=True, extra="allow")

    retry_attempts: int | None = Field(default=None, ge=0)
    retry_delay: float | None = Field(default=None, ge=0)
    # seconds, not ms
    timeout: float | None = Field(default=None, gt=0, le=MAX_TIMEOUT_SECONDS)
    region: str | None = None
    api_endpoint: str | None = None
    webhook_url: str | None = None
    user_agent: str | None = None
    debug: bool = False
    agent_id: str | None = None

    @field_validator("api_endpoint")
    @classmethod
    def normalize_endpoint(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return strip_trailing_slash(v.strip())


class SDKConfig(CamelModel):
    provider: str = Field(min_length=1)
    auth: AuthConfig
    options: ProviderOptions = Field(default_factory=ProviderOptions)
