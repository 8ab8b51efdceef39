"""Choice tokenization, recognition and rendering."""

from .factory import ChoiceFactory
from .find import find_choices, find_values
from .models import (
    Choice,
    ChoiceFactoryOptions,
    FindChoicesOptions,
    FindValuesOptions,
    FoundChoice,
    FoundValue,
    ListStyle,
    ModelResult,
    SortedValue,
    Token,
    to_choices,
)
from .recognizers import recognize_boolean, recognize_choices, recognize_number, recognize_ordinal, resolved_number
from .tokenizer import TokenizerFunction, tokenize

__all__ = [
    "Choice",
    "ChoiceFactory",
    "ChoiceFactoryOptions",
    "FindChoicesOptions",
    "FindValuesOptions",
    "FoundChoice",
    "FoundValue",
    "ListStyle",
    "ModelResult",
    "SortedValue",
    "Token",
    "TokenizerFunction",
    "find_choices",
    "find_values",
    "recognize_boolean",
    "recognize_choices",
    "recognize_number",
    "recognize_ordinal",
    "resolved_number",
    "to_choices",
    "tokenize",
]
