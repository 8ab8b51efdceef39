"""Simple tokenizer that breaks on spaces and punctuation."""

from __future__ import annotations

from collections.abc import Callable

from parley.choices.models import Token

type TokenizerFunction = Callable[[str | None, str | None], list[Token]]

# Inclusive code point ranges that end a token and are dropped from the output.
BREAKING_RANGES: tuple[tuple[int, int], ...] = (
    (0x0000, 0x002F),
    (0x003A, 0x0040),
    (0x005B, 0x0060),
    (0x007B, 0x00BF),
    (0x02B9, 0x036F),
    (0x2000, 0x2BFF),
    (0x2E00, 0x2E7F),
)

BMP_LIMIT = 0xFFFF


def is_breaking_char(code_point: int) -> bool:
    return any(low <= code_point <= high for low, high in BREAKING_RANGES)


def tokenize(text: str | None, locale: str | None = None) -> list[Token]:
    """Split text into tokens; the only normalization applied is lowercasing.

    Offsets are code point indexes into ``text`` and ``end`` is inclusive.
    Characters outside the Basic Multilingual Plane (emoji) always become a
    token of their own.
    """

    _ = locale
    tokens: list[Token] = []
    if not text:
        return tokens

    start: int | None = None
    for index, char in enumerate(text):
        code_point = ord(char)
        if is_breaking_char(code_point):
            _flush(tokens, text, start, index - 1)
            start = None
        elif code_point > BMP_LIMIT:
            _flush(tokens, text, start, index - 1)
            start = None
            tokens.append(Token(start=index, end=index, text=char, normalized=char))
        elif start is None:
            start = index

    _flush(tokens, text, start, len(text) - 1)
    return tokens


def _flush(tokens: list[Token], text: str, start: int | None, end: int) -> None:
    if start is None:
        return
    raw = text[start : end + 1]
    tokens.append(Token(start=start, end=end, text=raw, normalized=raw.lower()))
