"""Capability Schemas — outward capability report and the backend capability response.

Invariants:
    - CapabilityReport is produced fresh on every check (never cached)
    - ValidationResult.success=False always carries a human-readable error
    - Backend models ignore unknown keys: the provider may add fields

Design Decisions:
    - Backend response models live beside the outward ones so translation in
      services/longears_wire.py is model→model, not dict poking
"""

from datetime import datetime

from pydantic import ConfigDict, Field, model_validator

from rcs_sdk.core.domain_types import CapabilityFeature
from rcs_sdk.schemas.messages import CamelModel


# ─── Outward ─────────────────────────────────────────────────────

class RCSCapabilities(CamelModel):
    """Feature limits for a destination, provider-neutral."""
    supports_rich_cards: bool = False
    supports_carousels: bool = False
    supports_suggestions: bool = False
    supports_file_transfer: bool = False
    supported_media_types: list[str] = Field(default_factory=list)
    max_message_length: int = 0
    max_suggestions: int | None = None
    max_file_size: int | None = None


class CapabilityReport(CamelModel):
    phone_number: str
    is_capable: bool
    features: list[CapabilityFeature] = Field(default_factory=list)
    timestamp: datetime


class ValidationResult(CamelModel):
    success: bool
    capability: CapabilityReport | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_outcome(self) -> "ValidationResult":
        if self.success and self.capability is None:
            raise ValueError("successful validation requires a capability report")
        if not self.success and not self.error:
            raise ValueError("failed validation requires an error message")
        return self


# ─── Backend (longears wire) ─────────────────────────────────────

class BackendFeatures(CamelModel):
    model_config = ConfigDict(extra="ignore")

    rich_cards: bool = False
    carousels: bool = False
    suggestions: bool = False
    file_transfer: bool = False
    supported_media_types: list[str] | None = None
    max_message_length: int = 0
    max_suggestions: int | None = None
    max_file_size: int | None = None


class BackendCapabilitiesResponse(CamelModel):
    model_config = ConfigDict(extra="ignore")

    phone_number: str | None = None
    is_rcs_supported: bool = False
    features: BackendFeatures | None = None
    carrier: str | None = None
    country_code: str | None = None
