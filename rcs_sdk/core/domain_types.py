"""Domain Types — enums for every closed vocabulary in the SDK.

Invariants:
    - All valid states and tags encoded as Enums — no raw string matching in services
    - Enum values are the exact strings used on the wire / in the outward API

Design Decisions:
    - str Enums: serialize to JSON without custom encoders and compare equal to
      their raw values (ADR: wire payloads are plain JSON)
"""

from enum import Enum


# ─── Authentication ──────────────────────────────────────────────

class AuthScheme(str, Enum):
    """How a credential is transmitted. CUSTOM means: send the raw token, no prefix."""
    BEARER = "bearer"
    BASIC = "basic"
    CUSTOM = "custom"


# ─── Lifecycle ───────────────────────────────────────────────────

class ProviderState(str, Enum):
    """Adapter lifecycle. READY and FAILED are terminal."""
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


# ─── Messages ────────────────────────────────────────────────────

class MessageStatus(str, Enum):
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"
    PENDING = "pending"


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"


class SuggestionType(str, Enum):
    REPLY = "reply"
    ACTION = "action"


class ActionType(str, Enum):
    DIAL = "dial"
    OPEN_URL = "openUrl"
    SHARE_LOCATION = "shareLocation"
    CREATE_CALENDAR_EVENT = "createCalendarEvent"


class CardOrientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class CardWidth(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"


class MessagePriority(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


# ─── Capabilities ────────────────────────────────────────────────

class CapabilityFeature(str, Enum):
    """Feature tags reported by a capability check."""
    RICHCARD_STANDALONE = "RICHCARD_STANDALONE"
    RICHCARD_CAROUSEL = "RICHCARD_CAROUSEL"
    ACTION_DIAL = "ACTION_DIAL"
    ACTION_OPEN_URL = "ACTION_OPEN_URL"
    ACTION_OPEN_URL_IN_WEBVIEW = "ACTION_OPEN_URL_IN_WEBVIEW"
    ACTION_SHARE_LOCATION = "ACTION_SHARE_LOCATION"
    ACTION_VIEW_LOCATION = "ACTION_VIEW_LOCATION"
    ACTION_CREATE_CALENDAR_EVENT = "ACTION_CREATE_CALENDAR_EVENT"
    # Deprecated by carriers; only reported when the backend lists the compose marker
    ACTION_COMPOSE = "ACTION_COMPOSE"
