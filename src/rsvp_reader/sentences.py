from __future__ import annotations

from typing import Sequence, Tuple

SENTENCE_TERMINATORS = (".", "?", "!")


def ends_sentence(token: str) -> bool:
    """True when the token closes a sentence (no abbreviation heuristics)."""
    return token.endswith(SENTENCE_TERMINATORS)


def _clamp(position: int, tokens: Sequence[str]) -> int:
    return min(max(position, 0), max(len(tokens) - 1, 0))


def current_sentence_start(tokens: Sequence[str], position: int) -> int:
    """Index of the first token of the sentence that contains ``position``."""
    if not tokens:
        return 0
    index = _clamp(position, tokens)
    while index > 0 and not ends_sentence(tokens[index - 1]):
        index -= 1
    return index


def next_sentence_start(tokens: Sequence[str], position: int) -> int:
    """Index just after the first sentence-ending token at or after ``position``.

    Never points past the last token; when no terminator remains the last
    valid index is returned.
    """
    if not tokens:
        return 0
    last = len(tokens) - 1
    for index in range(max(position, 0), len(tokens)):
        if ends_sentence(tokens[index]):
            return min(index + 1, last)
    return last


def previous_sentence_start(tokens: Sequence[str], position: int) -> int:
    """Start of the current sentence, or of the one before it when already there."""
    if not tokens:
        return 0
    index = _clamp(position, tokens)
    start = current_sentence_start(tokens, index)
    if start < index:
        return start
    if start == 0:
        return 0
    return current_sentence_start(tokens, start - 1)


def sentence_span(tokens: Sequence[str], position: int) -> Tuple[int, int]:
    """Inclusive (start, end) token indices of the sentence holding ``position``.

    An empty sequence yields ``(0, -1)`` so that ``tokens[start:end + 1]`` is empty.
    """
    if not tokens:
        return 0, -1
    index = _clamp(position, tokens)
    start = current_sentence_start(tokens, index)
    end = index
    while end < len(tokens) - 1 and not ends_sentence(tokens[end]):
        end += 1
    return start, end


class SentenceBoundaryDetector:
    """Sentence navigation bound to one token sequence."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self._tokens = tokens

    def ends_sentence(self, index: int) -> bool:
        return 0 <= index < len(self._tokens) and ends_sentence(self._tokens[index])

    def next_sentence_start(self, position: int) -> int:
        return next_sentence_start(self._tokens, position)

    def previous_sentence_start(self, position: int) -> int:
        return previous_sentence_start(self._tokens, position)

    def sentence_span(self, position: int) -> Tuple[int, int]:
        return sentence_span(self._tokens, position)

    def sentence_tokens(self, position: int) -> list[str]:
        start, end = self.sentence_span(position)
        return list(self._tokens[start : end + 1])
