"""Minimal activity model exchanged with the channel adapter."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ActivityTypes(StrEnum):
    MESSAGE = "message"
    TYPING = "typing"
    EVENT = "event"
    CONVERSATION_UPDATE = "conversationUpdate"
    END_OF_CONVERSATION = "endOfConversation"


class InputHints(StrEnum):
    ACCEPTING_INPUT = "acceptingInput"
    EXPECTING_INPUT = "expectingInput"
    IGNORING_INPUT = "ignoringInput"


class ActionTypes(StrEnum):
    IM_BACK = "imBack"
    POST_BACK = "postBack"
    MESSAGE_BACK = "messageBack"
    OPEN_URL = "openUrl"


class CardAction(BaseModel):
    """A clickable action rendered by the channel."""

    type: str = ActionTypes.IM_BACK
    title: str | None = None
    value: Any = None


class SuggestedActions(BaseModel):
    actions: list[CardAction] = Field(default_factory=list)


class Attachment(BaseModel):
    content_type: str
    content_url: str | None = None
    content: Any = None
    name: str | None = None


class Activity(BaseModel):
    """One inbound or outbound exchange with the user."""

    type: str = ActivityTypes.MESSAGE
    text: str | None = None
    speak: str | None = None
    input_hint: str | None = None
    locale: str | None = None
    channel_id: str = ""
    conversation_id: str = ""
    from_id: str | None = None
    attachments: list[Attachment] = Field(default_factory=list)
    suggested_actions: SuggestedActions | None = None
    value: Any = None
    name: str | None = None

    @property
    def is_message(self) -> bool:
        return self.type == ActivityTypes.MESSAGE

    @property
    def conversation_key(self) -> str:
        channel = self.channel_id or "default"
        conversation = self.conversation_id or "default"
        return f"{channel}:{conversation}"


def text_message(text: str | None, speak: str | None = None, input_hint: str | None = None) -> Activity:
    """Create a plain message activity."""

    return Activity(text=text, speak=speak, input_hint=input_hint)


def suggested_actions_message(
    actions: list[CardAction],
    text: str | None = None,
    speak: str | None = None,
    input_hint: str | None = None,
) -> Activity:
    """Create a message activity carrying suggested actions."""

    return Activity(
        text=text,
        speak=speak,
        input_hint=input_hint,
        suggested_actions=SuggestedActions(actions=list(actions)),
    )
