"""Message Schemas — provider-neutral Pydantic models for outgoing RCS messages.

Invariants:
    - The rich-card slot holds exactly one variant, discriminated by `type`
      ("standalone" | "carousel")
    - A reply suggestion never carries an action; an action suggestion always does
    - Models accept both snake_case and camelCase input; dumping by_alias yields camelCase

Design Decisions:
    - CamelModel base with to_camel alias generator: one model serves Python callers
      and JSON callers without a parallel set of dicts (ADR: boundary validation)
    - Defaults (orientation, width) are applied at translation time, not here, so the
      outward model round-trips exactly what the caller set
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from rcs_sdk.core.domain_types import (
    ActionType, CardOrientation, CardWidth, MediaType,
    MessagePriority, MessageStatus, SuggestionType,
)


class CamelModel(BaseModel):
    """Base model: camelCase aliases, population by field name allowed."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """camelCase dict with unset/None fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class MediaContent(CamelModel):
    url: str = Field(min_length=1)
    type: MediaType
    thumbnail_url: str | None = None
    mime_type: str | None = None
    file_name: str | None = None


class SuggestionAction(CamelModel):
    type: ActionType
    data: str | None = None
    parameters: dict[str, Any] | None = None


class Suggestion(CamelModel):
    """Quick reply or suggested action attached to a message or card."""
    type: SuggestionType
    text: str = Field(min_length=1)
    postback_data: str | None = None
    action: SuggestionAction | None = None

    @model_validator(mode="after")
    def check_variant(self) -> "Suggestion":
        if self.type == SuggestionType.ACTION and self.action is None:
            raise ValueError("action suggestions require an action")
        if self.type == SuggestionType.REPLY and self.action is not None:
            raise ValueError("reply suggestions cannot carry an action")
        return self


class RichCard(CamelModel):
    """A single card, used standalone or as an element of a carousel."""
    title: str | None = None
    description: str | None = None
    media: MediaContent | None = None
    suggestions: list[Suggestion] | None = None


class StandaloneCard(RichCard):
    type: Literal["standalone"] = "standalone"
    orientation: CardOrientation | None = None


class CarouselCard(CamelModel):
    type: Literal["carousel"] = "carousel"
    cards: list[RichCard] = Field(min_length=1)
    width: CardWidth | None = None


RichCardContent = Annotated[
    Union[StandaloneCard, CarouselCard], Field(discriminator="type"),
]


class MessageContent(CamelModel):
    text: str | None = None
    media: MediaContent | None = None
    rich_card: RichCardContent | None = None

    def is_empty(self) -> bool:
        return not (self.text or self.media or self.rich_card)


class MessageMetadata(CamelModel):
    """Free-form metadata. Known keys are typed; anything else passes through."""
    model_config = ConfigDict(extra="allow")

    expiry_time: str | None = None
    priority: MessagePriority | None = None
    tags: list[str] | None = None
    custom_data: dict[str, Any] | None = None


class RCSMessage(CamelModel):
    """Outward message handed to a provider adapter."""
    to: str
    content: MessageContent
    suggestions: list[Suggestion] = Field(default_factory=list)
    metadata: MessageMetadata | None = None


class MessageResponse(CamelModel):
    """Receipt for a sent message, already translated out of the wire shape."""
    message_id: str
    status: MessageStatus
    timestamp: datetime
    error: str | None = None
    provider_response: dict[str, Any] | None = None
