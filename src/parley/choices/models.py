"""Data types shared by choice recognition and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from parley.activity import CardAction

if TYPE_CHECKING:
    from parley.choices.tokenizer import TokenizerFunction


@dataclass(frozen=True)
class Token:
    """A span of the original text; ``start`` and ``end`` are inclusive."""

    start: int
    end: int
    text: str
    normalized: str


class Choice(BaseModel):
    """One option offered to the user."""

    value: str
    action: CardAction | None = None
    synonyms: list[str] | None = None

    @property
    def title(self) -> str:
        if self.action is not None and self.action.title:
            return self.action.title
        return self.value


@dataclass(frozen=True)
class SortedValue:
    """A searchable value paired with the index of the choice it came from."""

    value: str
    index: int


@dataclass
class FoundValue:
    value: str
    index: int
    score: float


@dataclass
class FoundChoice:
    value: str
    index: int
    score: float
    synonym: str | None = None


@dataclass
class ModelResult[T]:
    """A recognized span of an utterance and what it resolved to."""

    text: str
    start: int
    end: int
    type_name: str
    resolution: T


class ListStyle(StrEnum):
    NONE = "none"
    AUTO = "auto"
    INLINE = "inline"
    LIST = "list"
    SUGGESTED_ACTION = "suggestedAction"


@dataclass
class FindValuesOptions:
    allow_partial_matches: bool = False
    locale: str | None = None
    max_token_distance: int | None = None
    tokenizer: TokenizerFunction | None = None


@dataclass
class FindChoicesOptions(FindValuesOptions):
    no_value: bool = False
    no_action: bool = False


@dataclass
class ChoiceFactoryOptions:
    inline_separator: str | None = None
    inline_or: str | None = None
    inline_or_more: str | None = None
    include_numbers: bool | None = None


def to_choices(values: list[str] | None) -> list[Choice]:
    """Wrap plain strings as choices."""

    if not values:
        return []
    return [Choice(value=value) for value in values]


def coerce_choices(values: list[Any] | None) -> list[Choice]:
    """Accept a mix of strings, mappings and ``Choice`` objects."""

    choices: list[Choice] = []
    for value in values or []:
        if isinstance(value, Choice):
            choices.append(value)
        elif isinstance(value, str):
            choices.append(Choice(value=value))
        else:
            choices.append(Choice.model_validate(value))
    return choices
