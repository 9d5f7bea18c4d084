from pathlib import Path

import pytest

from rsvp_reader.config import ReaderConfig, config_from_dict, config_from_yaml, load_config


def test_defaults():
    cfg = load_config()
    assert cfg.words_per_minute == 300
    assert cfg.min_words_per_minute == 200
    assert cfg.max_words_per_minute == 1000
    assert cfg.pause_on_punctuation is True
    assert cfg.skip_words == 10


def test_config_from_dict_ignores_unknown_keys():
    cfg = config_from_dict({"words_per_minute": 450, "font_size": 48})
    assert cfg.words_per_minute == 450
    assert config_from_dict(None) == ReaderConfig()


def test_config_from_yaml(tmp_path: Path):
    path = tmp_path / "reader.yaml"
    path.write_text("words_per_minute: 500\npause_on_punctuation: false\n", encoding="utf-8")
    cfg = config_from_yaml(path)
    assert cfg.words_per_minute == 500
    assert cfg.pause_on_punctuation is False


def test_config_from_yaml_rejects_non_mapping(tmp_path: Path):
    path = tmp_path / "reader.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        config_from_yaml(path)


def test_clamp_speed():
    cfg = ReaderConfig()
    assert cfg.clamp_speed(10) == 200
    assert cfg.clamp_speed(350) == 350
    assert cfg.clamp_speed(2000) == 1000
