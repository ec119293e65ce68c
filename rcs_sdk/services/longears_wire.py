"""Longears Wire Translation — outward models ⇄ longears REST payloads.

Invariants:
    - to_wire_message is deterministic and total over valid RCSMessage values
    - destination and metadata ({} by default) always present; text/media/richCard/suggestions
      only when set on the outward message
    - standalone card defaults orientation to "vertical"; carousel defaults width to "medium"
    - suggestions map 1:1 preserving order (type/text/postbackData/action)
    - ACTION_COMPOSE reported only if supportedMediaTypes lists the "compose" marker

Design Decisions:
    - Pure functions, no I/O: the provider adapter owns the HTTP calls and tests hit
      translation directly (ADR: responsibility separation)
    - Unset keys omitted rather than sent as null: matches the JSON the backend has always received
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from rcs_sdk.core.domain_types import (
    CapabilityFeature, CardOrientation, CardWidth, MessageStatus,
)
from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.schemas.capabilities import (
    BackendCapabilitiesResponse, CapabilityReport, RCSCapabilities,
)
from rcs_sdk.schemas.messages import (
    CarouselCard, MessageResponse, RCSMessage, StandaloneCard, Suggestion,
)

COMPOSE_MARKER = "compose"
PROVIDER_NAME = "longears"

# Action tags unlocked by the backend's `suggestions` flag, in report order
_SUGGESTION_ACTIONS = (
    CapabilityFeature.ACTION_DIAL,
    CapabilityFeature.ACTION_OPEN_URL,
    CapabilityFeature.ACTION_OPEN_URL_IN_WEBVIEW,
    CapabilityFeature.ACTION_SHARE_LOCATION,
    CapabilityFeature.ACTION_VIEW_LOCATION,
    CapabilityFeature.ACTION_CREATE_CALENDAR_EVENT,
)


# ─── Outward → wire ──────────────────────────────────────────────

def to_wire_message(message: RCSMessage) -> dict[str, Any]:
    """Translate an outward message into the longears POST /messages body."""
    wire: dict[str, Any] = {
        "destination": message.to,
        "metadata": message.metadata.to_wire() if message.metadata else {},
    }
    content = message.content

    if content.text:
        wire["text"] = content.text
    if content.media is not None:
        wire["media"] = content.media.to_wire()
    if content.rich_card is not None:
        wire["richCard"] = rich_card_to_wire(content.rich_card)
    if message.suggestions:
        wire["suggestions"] = [suggestion_to_wire(s) for s in message.suggestions]

    return wire


def rich_card_to_wire(card: StandaloneCard | CarouselCard) -> dict[str, Any]:
    if isinstance(card, CarouselCard):
        return {
            "type": "carousel",
            "cards": [c.to_wire() for c in card.cards],
            "width": (card.width or CardWidth.MEDIUM).value,
        }
    wire = {
        "type": "standalone",
        "title": card.title,
        "description": card.description,
        "media": card.media.to_wire() if card.media else None,
        "orientation": (card.orientation or CardOrientation.VERTICAL).value,
        "suggestions": (
            [suggestion_to_wire(s) for s in card.suggestions]
            if card.suggestions is not None else None
        ),
    }
    return _drop_none(wire)


def suggestion_to_wire(suggestion: Suggestion) -> dict[str, Any]:
    return _drop_none({
        "type": suggestion.type.value,
        "text": suggestion.text,
        "postbackData": suggestion.postback_data,
        "action": suggestion.action.to_wire() if suggestion.action else None,
    })


# ─── Wire → outward ──────────────────────────────────────────────

def to_message_response(body: Any) -> MessageResponse:
    """Translate a POST /messages response. "success" → sent, anything else → pending."""
    if not isinstance(body, dict) or not body.get("messageId"):
        raise RCSError(
            "Malformed message response from provider",
            RCSErrorCode.PROVIDER_ERROR,
            PROVIDER_NAME,
            {"data": body},
        )
    status = (
        MessageStatus.SENT if body.get("status") == "success"
        else MessageStatus.PENDING
    )
    try:
        return MessageResponse(
            message_id=str(body["messageId"]),
            status=status,
            timestamp=body.get("timestamp") or datetime.now(timezone.utc),
            provider_response=body,
        )
    except ValidationError as e:
        raise RCSError(
            "Malformed message response from provider",
            RCSErrorCode.PROVIDER_ERROR,
            PROVIDER_NAME,
            e,
        ) from e


def parse_capabilities(body: Any) -> BackendCapabilitiesResponse:
    if not isinstance(body, dict):
        raise RCSError(
            "Malformed capabilities response from provider",
            RCSErrorCode.PROVIDER_ERROR,
            PROVIDER_NAME,
            {"data": body},
        )
    try:
        return BackendCapabilitiesResponse.model_validate(body)
    except ValidationError as e:
        raise RCSError(
            "Malformed capabilities response from provider",
            RCSErrorCode.PROVIDER_ERROR,
            PROVIDER_NAME,
            e,
        ) from e


def features_from_capabilities(
    response: BackendCapabilitiesResponse,
) -> list[CapabilityFeature]:
    """Backend boolean flags → feature tag vocabulary."""
    features: list[CapabilityFeature] = []
    flags = response.features
    if flags is None:
        return features

    if flags.rich_cards:
        features.append(CapabilityFeature.RICHCARD_STANDALONE)
    if flags.carousels:
        features.append(CapabilityFeature.RICHCARD_CAROUSEL)
    if flags.suggestions:
        features.extend(_SUGGESTION_ACTIONS)
        if COMPOSE_MARKER in (flags.supported_media_types or []):
            features.append(CapabilityFeature.ACTION_COMPOSE)
    return features


def to_capability_report(
    phone_number: str, response: BackendCapabilitiesResponse,
) -> CapabilityReport:
    return CapabilityReport(
        phone_number=phone_number,
        is_capable=response.is_rcs_supported,
        features=features_from_capabilities(response),
        timestamp=datetime.now(timezone.utc),
    )


def to_rcs_capabilities(response: BackendCapabilitiesResponse) -> RCSCapabilities:
    flags = response.features
    if flags is None:
        return RCSCapabilities()
    return RCSCapabilities(
        supports_rich_cards=flags.rich_cards,
        supports_carousels=flags.carousels,
        supports_suggestions=flags.suggestions,
        supports_file_transfer=flags.file_transfer,
        supported_media_types=list(flags.supported_media_types or []),
        max_message_length=flags.max_message_length,
        max_suggestions=flags.max_suggestions,
        max_file_size=flags.max_file_size,
    )


def _drop_none(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}
