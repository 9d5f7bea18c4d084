from __future__ import annotations

import json
from pathlib import Path

import click

from .config import ReaderConfig
from .fixation import fixation_index, split_fixation
from .sentences import ends_sentence, sentence_span
from .textutils import estimated_reading_time, format_duration, format_word_count
from .tokenization import process_text


@click.group(name="text")
def text_group() -> None:
    """Text preparation commands for RSVP playback."""


@text_group.command("tokenize")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json-output", type=click.Path(), default=None)
@click.option(
    "--wpm",
    type=int,
    default=ReaderConfig().words_per_minute,
    show_default=True,
    help="Speed used for the reading-time estimate.",
)
def tokenize(input_file: str, json_output: str | None, wpm: int) -> None:
    """Tokenize a text file and report the display tokens."""
    tokens = _read_tokens(Path(input_file))
    seconds = estimated_reading_time(len(tokens), wpm)

    click.echo(f"File: {input_file}")
    click.echo(f"Tokens: {format_word_count(len(tokens))}")
    click.echo(f"Estimated reading time at {wpm} wpm: {format_duration(seconds)}")

    if json_output is not None:
        payload = {
            "file": input_file,
            "tokens": tokens,
            "count": len(tokens),
            "estimated_seconds": seconds,
        }
        Path(json_output).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        click.echo(f"Wrote tokens to {json_output}")


@text_group.command("fixation")
@click.argument("words", nargs=-1, required=True)
def fixation(words: tuple[str, ...]) -> None:
    """Show where the eye anchors in each word."""
    for word in words:
        split = split_fixation(word)
        click.echo(
            f"{word}\t{fixation_index(word)}\t"
            f"{split.prefix}[{split.focal or ''}]{split.suffix}"
        )


@text_group.command("sentences")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
def sentences(input_file: str) -> None:
    """List sentence spans as inclusive token ranges."""
    tokens = _read_tokens(Path(input_file))
    position = 0
    while position < len(tokens):
        start, end = sentence_span(tokens, position)
        marker = "" if ends_sentence(tokens[end]) else "  (unterminated)"
        click.echo(f"{start}-{end}: {' '.join(tokens[start : end + 1])}{marker}")
        position = end + 1


def _read_tokens(path: Path) -> list[str]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise click.BadParameter(f"Parsing failed for {path}: {exc}") from exc
    tokens = process_text(text)
    if not tokens:
        raise click.BadParameter(f"{path} contains no readable text.")
    return tokens
