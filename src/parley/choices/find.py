"""Locate choice values inside an utterance by token matching."""

from __future__ import annotations

from collections.abc import Sequence

from parley.choices.models import (
    Choice,
    FindChoicesOptions,
    FindValuesOptions,
    FoundChoice,
    FoundValue,
    ModelResult,
    SortedValue,
    Token,
)
from parley.choices.tokenizer import tokenize

DEFAULT_MAX_TOKEN_DISTANCE = 2


def find_choices(
    utterance: str | None,
    choices: Sequence[Choice | str],
    options: FindChoicesOptions | None = None,
) -> list[ModelResult[FoundChoice]]:
    """Search an utterance for the values, action titles and synonyms of a list of choices.

    Each match is mapped back to the choice it came from, so ``resolution.index``
    is always the choice's position in ``choices``.
    """

    if not utterance or not utterance.strip():
        return []

    opt = options or FindChoicesOptions()
    normalized = [Choice(value=choice) if isinstance(choice, str) else choice for choice in choices]

    synonyms: list[SortedValue] = []
    for index, choice in enumerate(normalized):
        if not opt.no_value:
            synonyms.append(SortedValue(value=choice.value, index=index))
        if choice.action is not None and choice.action.title and not opt.no_action:
            synonyms.append(SortedValue(value=choice.action.title, index=index))
        for synonym in choice.synonyms or []:
            synonyms.append(SortedValue(value=synonym, index=index))

    results: list[ModelResult[FoundChoice]] = []
    for found in find_values(utterance, synonyms, opt):
        choice = normalized[found.resolution.index]
        results.append(
            ModelResult(
                text=found.text,
                start=found.start,
                end=found.end,
                type_name="choice",
                resolution=FoundChoice(
                    value=choice.value,
                    index=found.resolution.index,
                    score=found.resolution.score,
                    synonym=found.resolution.value,
                ),
            )
        )
    return results


def find_values(
    utterance: str,
    values: Sequence[SortedValue],
    options: FindValuesOptions | None = None,
) -> list[ModelResult[FoundValue]]:
    """Find every value in the utterance, longest values first.

    Returned ``start``/``end`` are inclusive character offsets into ``utterance``.
    A choice index is reported at most once and no two results share a token.
    """

    opt = options or FindValuesOptions()
    tokenizer = opt.tokenizer or tokenize
    max_distance = opt.max_token_distance if opt.max_token_distance is not None else DEFAULT_MAX_TOKEN_DISTANCE
    tokens = tokenizer(utterance, opt.locale)

    entries = sorted(values, key=lambda entry: len(entry.value), reverse=True)
    matches: list[ModelResult[FoundValue]] = []
    for entry in entries:
        # Re-search after each hit so "last one" is found twice in "the last time I chose the last one".
        start_pos = 0
        searched = tokenizer(entry.value.strip(), opt.locale)
        while start_pos < len(tokens):
            match = _match_value(tokens, max_distance, opt, entry.index, entry.value, searched, start_pos)
            if match is None:
                break
            start_pos = match.end + 1
            matches.append(match)

    matches.sort(key=lambda match: match.resolution.score, reverse=True)

    results: list[ModelResult[FoundValue]] = []
    found_indexes: set[int] = set()
    used_tokens: set[int] = set()
    for match in matches:
        span = range(match.start, match.end + 1)
        if match.resolution.index in found_indexes or any(pos in used_tokens for pos in span):
            continue
        found_indexes.add(match.resolution.index)
        used_tokens.update(span)

        # Token positions become character positions from here on.
        match.start = tokens[match.start].start
        match.end = tokens[match.end].end
        match.text = utterance[match.start : match.end + 1]
        results.append(match)

    results.sort(key=lambda match: match.start)
    return results


def _index_of_token(tokens: list[Token], token: Token, start_pos: int) -> int:
    for index in range(start_pos, len(tokens)):
        if tokens[index].normalized == token.normalized:
            return index
    return -1


def _match_value(
    source_tokens: list[Token],
    max_distance: int,
    options: FindValuesOptions,
    index: int,
    value: str,
    searched_tokens: list[Token],
    start_pos: int,
) -> ModelResult[FoundValue] | None:
    # Tokens are matched in order: "second last" matches "the second from last one"
    # with a deviation of 1 but never "the last from the second one".
    if not searched_tokens:
        return None

    matched = 0
    total_deviation = 0
    start = -1
    end = -1
    for token in searched_tokens:
        pos = _index_of_token(source_tokens, token, start_pos)
        if pos < 0:
            continue
        distance = pos - start_pos if matched > 0 else 0
        if distance > max_distance:
            continue
        matched += 1
        total_deviation += distance
        start_pos = pos + 1
        if start < 0:
            start = pos
        end = pos

    if matched == 0 or (matched != len(searched_tokens) and not options.allow_partial_matches):
        return None

    completeness = matched / len(searched_tokens)
    accuracy = matched / (matched + total_deviation)
    return ModelResult(
        text="",
        start=start,
        end=end,
        type_name="value",
        resolution=FoundValue(value=value, index=index, score=completeness * accuracy),
    )
