"""Message Builders — fluent helpers for composing outward RCS messages.

Invariants:
    - build() requires a recipient and at least one of text / media / rich card
    - Reply suggestions default their postback payload to the reply text
    - Builders never validate E.164; the provider does that at send time

Design Decisions:
    - Plain value helpers: no I/O, no provider knowledge
"""

from typing import Any

from rcs_sdk.core.domain_types import ActionType, MediaType, SuggestionType
from rcs_sdk.core.errors import RCSError, RCSErrorCode
from rcs_sdk.schemas.messages import (
    CarouselCard, MediaContent, MessageContent, MessageMetadata,
    RCSMessage, StandaloneCard, Suggestion, SuggestionAction,
)


class SuggestionBuilder:
    """Factories for the suggestion variants."""

    @staticmethod
    def reply(text: str, postback_data: str | None = None) -> Suggestion:
        return Suggestion(
            type=SuggestionType.REPLY, text=text, postback_data=postback_data or text,
        )

    @staticmethod
    def action(
        text: str, action_type: ActionType | str, data: str | None = None,
    ) -> Suggestion:
        return Suggestion(
            type=SuggestionType.ACTION,
            text=text,
            action=SuggestionAction(type=ActionType(action_type), data=data),
        )

    @classmethod
    def dial(cls, text: str, phone_number: str) -> Suggestion:
        return cls.action(text, ActionType.DIAL, phone_number)

    @classmethod
    def open_url(cls, text: str, url: str) -> Suggestion:
        return cls.action(text, ActionType.OPEN_URL, url)

    @classmethod
    def share_location(cls, text: str) -> Suggestion:
        return cls.action(text, ActionType.SHARE_LOCATION)

    @classmethod
    def create_calendar_event(cls, text: str, event_data: str | None = None) -> Suggestion:
        return cls.action(text, ActionType.CREATE_CALENDAR_EVENT, event_data)


class MessageBuilder:
    """Fluent builder: MessageBuilder("+1...").set_text("hi").add_reply("Yes").build()."""

    def __init__(self, to: str | None = None):
        self._to = to
        self._text: str | None = None
        self._media: MediaContent | None = None
        self._rich_card: StandaloneCard | CarouselCard | None = None
        self._suggestions: list[Suggestion] = []
        self._metadata: MessageMetadata | None = None

    def to(self, phone_number: str) -> "MessageBuilder":
        self._to = phone_number
        return self

    def set_text(self, text: str) -> "MessageBuilder":
        self._text = text
        return self

    def add_media(
        self,
        url: str,
        media_type: MediaType | str,
        thumbnail_url: str | None = None,
    ) -> "MessageBuilder":
        self._media = MediaContent(
            url=url, type=MediaType(media_type), thumbnail_url=thumbnail_url,
        )
        return self

    def set_rich_card(self, card: StandaloneCard | CarouselCard) -> "MessageBuilder":
        self._rich_card = card
        return self

    def add_reply(self, text: str, postback_data: str | None = None) -> "MessageBuilder":
        self._suggestions.append(SuggestionBuilder.reply(text, postback_data))
        return self

    def add_action(
        self, text: str, action_type: ActionType | str, data: str | None = None,
    ) -> "MessageBuilder":
        self._suggestions.append(SuggestionBuilder.action(text, action_type, data))
        return self

    def set_metadata(
        self, metadata: MessageMetadata | dict[str, Any],
    ) -> "MessageBuilder":
        self._metadata = (
            metadata if isinstance(metadata, MessageMetadata)
            else MessageMetadata.model_validate(metadata)
        )
        return self

    def build(self) -> RCSMessage:
        if not self._to:
            raise RCSError(
                "Recipient phone number is required", RCSErrorCode.VALIDATION_FAILED,
            )
        content = MessageContent(
            text=self._text, media=self._media, rich_card=self._rich_card,
        )
        if content.is_empty():
            raise RCSError("Message must have content", RCSErrorCode.VALIDATION_FAILED)
        return RCSMessage(
            to=self._to,
            content=content,
            suggestions=list(self._suggestions),
            metadata=self._metadata,
        )
