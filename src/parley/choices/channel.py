"""Channel capability lookups used to pick a choice rendering style."""

from __future__ import annotations

from parley.turn import TurnContext


class Channels:
    CONSOLE = "console"
    CORTANA = "cortana"
    DIRECTLINE = "directline"
    EMAIL = "email"
    EMULATOR = "emulator"
    FACEBOOK = "facebook"
    KIK = "kik"
    MSTEAMS = "msteams"
    SKYPE = "skype"
    SLACK = "slack"
    SMS = "sms"
    TELEGRAM = "telegram"
    TEST = "test"
    WEBCHAT = "webchat"


_SUGGESTED_ACTION_LIMITS: dict[str, int] = {
    Channels.FACEBOOK: 10,
    Channels.SKYPE: 10,
    Channels.KIK: 20,
    Channels.SLACK: 100,
    Channels.TELEGRAM: 100,
    Channels.EMULATOR: 100,
    Channels.DIRECTLINE: 100,
    Channels.WEBCHAT: 100,
}

_CARD_ACTION_LIMITS: dict[str, int] = {
    Channels.FACEBOOK: 3,
    Channels.SKYPE: 3,
    Channels.MSTEAMS: 3,
    Channels.SLACK: 100,
    Channels.EMULATOR: 100,
    Channels.DIRECTLINE: 100,
    Channels.WEBCHAT: 100,
    Channels.CORTANA: 100,
}

MAX_ACTION_TITLE_LENGTH = 20


def supports_suggested_actions(channel_id: str | None, button_count: int = 100) -> bool:
    limit = _SUGGESTED_ACTION_LIMITS.get(channel_id or "")
    return limit is not None and button_count <= limit


def supports_card_actions(channel_id: str | None, button_count: int = 100) -> bool:
    limit = _CARD_ACTION_LIMITS.get(channel_id or "")
    return limit is not None and button_count <= limit


def has_message_feed(channel_id: str | None) -> bool:
    return channel_id != Channels.CORTANA


def max_action_title_length(channel_id: str | None) -> int:
    _ = channel_id
    return MAX_ACTION_TITLE_LENGTH


def get_channel_id(turn_context: TurnContext) -> str:
    return turn_context.activity.channel_id or ""
