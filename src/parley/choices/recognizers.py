"""Choice, ordinal, number and yes/no recognition over raw utterances.

Numbers, ordinals and booleans come from the Microsoft Recognizers-Text models;
cultures they do not know fall back to English.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

import recognizers_choice
import recognizers_number
from recognizers_text import Culture

from parley.choices.find import find_choices
from parley.choices.models import Choice, FindChoicesOptions, FoundChoice, ModelResult

type Resolution = dict[str, Any]


def recognize_choices(
    utterance: str | None,
    choices: Sequence[Choice | str],
    options: FindChoicesOptions | None = None,
) -> list[ModelResult[FoundChoice]]:
    """Match an utterance against choices by text, then by ordinal, then by index.

    Only one strategy contributes results so "the third one" is never also read
    as the number one.
    """

    normalized = [Choice(value=choice) if isinstance(choice, str) else choice for choice in choices]
    locale = options.locale if options is not None and options.locale else Culture.English

    matched = find_choices(utterance, normalized, options)
    if matched or not utterance:
        return matched

    candidates = recognize_ordinal(utterance, locale) or recognize_number(utterance, locale)
    for candidate in candidates:
        _match_choice_by_index(normalized, matched, candidate)
    matched.sort(key=lambda match: match.start)
    return matched


def recognize_ordinal(utterance: str | None, locale: str | None = None) -> list[ModelResult[Resolution]]:
    """Recognize ordinals such as "first", "2nd" or "the last one"."""

    if not utterance:
        return []
    return [_wrap(result) for result in recognizers_number.recognize_ordinal(utterance, _culture(locale))]


def recognize_number(utterance: str | None, locale: str | None = None) -> list[ModelResult[Resolution]]:
    """Recognize cardinal numbers written as numerals or words."""

    if not utterance:
        return []
    return [_wrap(result) for result in recognizers_number.recognize_number(utterance, _culture(locale))]


def recognize_boolean(utterance: str | None, locale: str | None = None) -> bool | None:
    """Return True/False for a yes/no style answer, or None when neither is found."""

    if not utterance:
        return None
    for result in recognizers_choice.recognize_boolean(utterance, _culture(locale)):
        value = (result.resolution or {}).get("value")
        if isinstance(value, bool):
            return value
    return None


def resolved_number(result: ModelResult[Resolution]) -> Decimal | None:
    """Numeric value of a number or ordinal result; None for relative ordinals."""

    raw = result.resolution.get("value")
    if raw is None:
        return None
    # Cultures with a decimal comma resolve "1,5" rather than "1.5".
    try:
        return Decimal(str(raw).replace(",", "."))
    except InvalidOperation:
        return None


def _match_choice_by_index(
    choices: list[Choice],
    matched: list[ModelResult[FoundChoice]],
    candidate: ModelResult[Resolution],
) -> None:
    index = _choice_index(candidate.resolution, len(choices))
    if index is not None and 0 <= index < len(choices):
        matched.append(
            ModelResult(
                text=candidate.text,
                start=candidate.start,
                end=candidate.end,
                type_name="choice",
                resolution=FoundChoice(value=choices[index].value, index=index, score=1.0),
            )
        )


def _choice_index(resolution: Resolution, count: int) -> int | None:
    if resolution.get("relativeTo") == "end":
        offset = _whole(resolution.get("offset"))
        return None if offset is None else count - 1 + offset
    value = _whole(resolution.get("value"))
    return None if value is None else value - 1


def _whole(raw: Any) -> int | None:
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        return None
    if not value.is_finite() or value != value.to_integral_value():
        return None
    return int(value)


def _wrap(result: Any) -> ModelResult[Resolution]:
    return ModelResult(
        text=result.text,
        start=result.start,
        end=result.end,
        type_name=result.type_name,
        resolution=dict(result.resolution or {}),
    )


def _culture(locale: str | None) -> str:
    return (locale or Culture.English).lower()
