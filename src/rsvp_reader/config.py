from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class ReaderConfig:
    """Settings pushed into the playback engine."""

    words_per_minute: int = 300
    min_words_per_minute: int = 200
    max_words_per_minute: int = 1000
    pause_on_punctuation: bool = True
    skip_words: int = 10

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))

    def clamp_speed(self, wpm: int) -> int:
        """Bound a words-per-minute value to the configured range."""
        return min(max(int(wpm), self.min_words_per_minute), self.max_words_per_minute)


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(ReaderConfig)}
    return {key: data[key] for key in data if key in allowed}


def config_from_dict(data: Mapping[str, Any] | None) -> ReaderConfig:
    """Build a ReaderConfig from a dictionary-like input."""
    if data is None:
        return ReaderConfig()
    return ReaderConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> ReaderConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> ReaderConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return ReaderConfig()
    return config_from_yaml(path)
