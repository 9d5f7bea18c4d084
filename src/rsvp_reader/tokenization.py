from __future__ import annotations

import re
from typing import List

HORIZONTAL_SPACE_RE = re.compile(r"[^\S\n]+")
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

# Tokens longer than this are candidates for hyphen splitting.
HYPHEN_SPLIT_MIN_LENGTH = 15
HYPHEN_PART_MIN_LENGTH = 2


def normalize_whitespace(text: str) -> str:
    """Unify line endings, collapse spaces and cap blank runs at a paragraph break."""
    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = HORIZONTAL_SPACE_RE.sub(" ", cleaned)
    return EXCESS_NEWLINES_RE.sub("\n\n", cleaned)


def split_long_hyphenated(word: str) -> List[str]:
    """Break a very long hyphenated word into parts that keep a trailing hyphen."""
    if len(word) <= HYPHEN_SPLIT_MIN_LENGTH or "-" not in word:
        return [word]

    parts = word.split("-")
    if len(parts) < 2 or any(len(part) < HYPHEN_PART_MIN_LENGTH for part in parts):
        return [word]

    last = len(parts) - 1
    return [part if idx == last else f"{part}-" for idx, part in enumerate(parts)]


def process_text(raw_text: str) -> List[str]:
    """Turn raw extracted text into the ordered display tokens for playback."""
    tokens: List[str] = []
    for candidate in normalize_whitespace(raw_text).split():
        tokens.extend(split_long_hyphenated(candidate))
    return tokens
