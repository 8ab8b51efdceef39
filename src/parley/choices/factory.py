"""Render a list of choices into an outbound message."""

from __future__ import annotations

from collections.abc import Sequence

from parley.activity import ActionTypes, Activity, CardAction, InputHints, suggested_actions_message, text_message
from parley.choices import channel
from parley.choices.models import Choice, ChoiceFactoryOptions, to_choices


class ChoiceFactory:
    """Formats choices as suggested actions, an inline sentence or a numbered list."""

    @staticmethod
    def for_channel(
        channel_id: str | None,
        choices: Sequence[Choice] | None,
        text: str | None = None,
        speak: str | None = None,
        options: ChoiceFactoryOptions | None = None,
    ) -> Activity:
        """Pick the richest style the channel can display for these choices."""

        choices = list(choices or [])
        max_title_length = max((len(choice.title) for choice in choices), default=0)

        supports_suggested = channel.supports_suggested_actions(channel_id, len(choices))
        supports_cards = channel.supports_card_actions(channel_id, len(choices))
        long_titles = max_title_length > channel.max_action_title_length(channel_id)

        if not long_titles and (supports_suggested or (not channel.has_message_feed(channel_id) and supports_cards)):
            return ChoiceFactory.suggested_action(choices, text, speak)
        if not long_titles and len(choices) <= 3:
            return ChoiceFactory.inline(choices, text, speak, options)
        return ChoiceFactory.list_style(choices, text, speak, options)

    @staticmethod
    def inline(
        choices: Sequence[Choice] | None,
        text: str | None = None,
        speak: str | None = None,
        options: ChoiceFactoryOptions | None = None,
    ) -> Activity:
        """Render as "text (1) Red, (2) Green, or (3) Blue"."""

        choices = list(choices or [])
        options = options or ChoiceFactoryOptions()
        separator = options.inline_separator if options.inline_separator is not None else ", "
        inline_or = options.inline_or if options.inline_or is not None else " or "
        inline_or_more = options.inline_or_more if options.inline_or_more is not None else ", or "
        include_numbers = options.include_numbers if options.include_numbers is not None else True

        parts = [text or "", " "]
        connector = ""
        for index, choice in enumerate(choices):
            parts.append(connector)
            if include_numbers:
                parts.append(f"({index + 1}) ")
            parts.append(choice.title)
            if index == len(choices) - 2:
                connector = inline_or if index == 0 else inline_or_more
            else:
                connector = separator

        return text_message("".join(parts), speak, InputHints.EXPECTING_INPUT)

    @staticmethod
    def list_style(
        choices: Sequence[Choice] | None,
        text: str | None = None,
        speak: str | None = None,
        options: ChoiceFactoryOptions | None = None,
    ) -> Activity:
        """Render as a numbered (or bulleted) list under the prompt text."""

        choices = list(choices or [])
        options = options or ChoiceFactoryOptions()
        include_numbers = options.include_numbers if options.include_numbers is not None else True

        lines = []
        for index, choice in enumerate(choices):
            prefix = f"{index + 1}. " if include_numbers else "- "
            lines.append(f"{prefix}{choice.title}")

        body = (text or "") + "\n\n   " + "\n   ".join(lines)
        return text_message(body, speak, InputHints.EXPECTING_INPUT)

    @staticmethod
    def suggested_action(
        choices: Sequence[Choice] | None,
        text: str | None = None,
        speak: str | None = None,
    ) -> Activity:
        """Render the choices as suggested action buttons."""

        actions = [
            choice.action
            if choice.action is not None
            else CardAction(type=ActionTypes.IM_BACK, value=choice.value, title=choice.value)
            for choice in (choices or [])
        ]
        return suggested_actions_message(actions, text, speak, InputHints.EXPECTING_INPUT)

    @staticmethod
    def to_choices(values: list[str] | None) -> list[Choice]:
        return to_choices(values)
