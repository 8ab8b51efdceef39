"""Prompt configuration and the values passed to prompt validators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, field_validator

from parley.activity import Activity
from parley.choices.models import Choice, coerce_choices
from parley.turn import TurnContext


class PromptOptions(BaseModel):
    """Per-invocation prompt settings, stored on the prompt's frame between turns."""

    prompt: Activity | None = None
    retry_prompt: Activity | None = None
    choices: list[Choice] | None = None
    validations: Any = None

    @field_validator("prompt", "retry_prompt", mode="before")
    @classmethod
    def _coerce_activity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Activity(text=value)
        return value

    @field_validator("choices", mode="before")
    @classmethod
    def _coerce_choices(cls, value: Any) -> list[Choice] | None:
        if value is None:
            return None
        return coerce_choices(list(value))


@dataclass
class PromptRecognizerResult[T]:
    succeeded: bool = False
    value: T | None = None


@dataclass
class PromptValidatorContext[T]:
    """What a validator sees for one recognition attempt.

    ``state`` is the prompt's auxiliary state and survives across retries, so a
    validator can count attempts or remember earlier answers.
    """

    context: TurnContext
    recognized: PromptRecognizerResult[T]
    state: dict[str, Any] = field(default_factory=dict)
    options: PromptOptions = field(default_factory=PromptOptions)
