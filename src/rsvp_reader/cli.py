from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, TypedDict

import typer
import yaml

from .config import ReaderConfig, load_config
from .engine import PlaybackEngine
from .fixation import MAX_FIXATION_INDEX, split_fixation
from .models import EngineSnapshot, PlaybackState
from .progress import ReadingProgressRecorder
from .scheduling import LoopScheduler
from .textutils import format_duration, format_word_count
from .tokenization import process_text

logger = logging.getLogger(__name__)

app = typer.Typer(help="RSVP speed reader CLI.", no_args_is_help=True)

# Column the focal character is pinned to in terminal output.
FOCAL_COLUMN = MAX_FIXATION_INDEX + 2


class SessionPayload(TypedDict):
    word_index: int
    elapsed_seconds: float
    words_advanced: int


class ReadSummary(TypedDict):
    source: str
    position: int
    total_words: int
    finished: bool
    words_read: int
    reading_time: str
    average_wpm: int
    sessions: List[SessionPayload]


@app.command()
def read(
    input_path: Path = typer.Argument(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    wpm: int | None = typer.Option(
        None, "--wpm", "-w", help="Override words_per_minute from the config."
    ),
    pause_on_punctuation: bool | None = typer.Option(
        None,
        "--pause-on-punctuation/--no-pause-on-punctuation",
        help="Linger on sentence and clause endings.",
    ),
    start: int = typer.Option(
        0, "--start", "-s", help="Token index to resume from (clamped)."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
) -> None:
    """Flash a text file word by word in the terminal, then print a JSON summary."""
    _configure_logging(verbose)
    cfg = load_config(config)
    _apply_overrides(cfg, wpm, pause_on_punctuation)
    tokens = _load_tokens(input_path)

    recorder = ReadingProgressRecorder()
    scheduler = _build_scheduler()
    engine = PlaybackEngine(cfg, scheduler=scheduler, recorder=recorder)
    engine.subscribe(_render_frame)
    engine.load(tokens)
    # Resume: seek after load, before play.
    engine.seek(start)
    engine.play()
    try:
        scheduler.run_until_idle()
    except KeyboardInterrupt:
        engine.pause()
    typer.echo("")

    progress = recorder.progress
    summary: ReadSummary = {
        "source": str(input_path),
        "position": engine.position,
        "total_words": engine.total_words,
        "finished": engine.is_at_end,
        "words_read": progress.words_read,
        "reading_time": format_duration(progress.total_reading_time),
        "average_wpm": progress.average_wpm,
        "sessions": [
            {
                "word_index": event.word_index,
                "elapsed_seconds": round(event.elapsed_seconds, 3),
                "words_advanced": event.words_advanced,
            }
            for event in recorder.events
        ],
    }
    typer.echo(json.dumps(summary, indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = ReaderConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _apply_overrides(
    config: ReaderConfig,
    wpm: int | None,
    pause_on_punctuation: bool | None,
) -> None:
    """Apply CLI overrides to the loaded config when provided."""
    if wpm is not None:
        config.words_per_minute = wpm
    if pause_on_punctuation is not None:
        config.pause_on_punctuation = pause_on_punctuation


def _build_scheduler() -> LoopScheduler:
    return LoopScheduler()


def _load_tokens(path: Path) -> List[str]:
    """Read a UTF-8 text file and tokenize it; nothing is loaded on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"Parsing failed for {path}: {exc}") from exc
    tokens = process_text(text)
    if not tokens:
        raise typer.BadParameter(f"{path} contains no readable text.")
    logger.info("Loaded %s tokens from %s", format_word_count(len(tokens)), path)
    return tokens


def _render_frame(snapshot: EngineSnapshot) -> None:
    """Draw the current token with its focal character pinned to one column."""
    if snapshot.state is not PlaybackState.PLAYING or not snapshot.current_token:
        return
    split = split_fixation(snapshot.current_token)
    padding = " " * max(0, FOCAL_COLUMN - split.leading_count)
    focal = typer.style(split.focal or "", fg=typer.colors.RED, bold=True)
    line = f"{padding}{split.prefix}{focal}{split.suffix}"
    typer.echo(f"\r\x1b[2K{line}", nl=False)


if __name__ == "__main__":
    main()
