import pytest

from rsvp_reader.fixation import FIXATION_TABLE, fixation_index, split_fixation


@pytest.mark.parametrize(
    ("length", "expected"),
    [(1, 0), (2, 0), (3, 1), (5, 1), (6, 2), (8, 2), (9, 3), (11, 3), (12, 4), (13, 4), (14, 4), (30, 4)],
)
def test_fixation_index_follows_length_bands(length: int, expected: int):
    assert fixation_index("x" * length) == expected


def test_fixation_index_of_empty_token_is_zero():
    assert fixation_index("") == 0


def test_fixation_index_always_in_bounds():
    for length in range(0, 40):
        index = fixation_index("y" * length)
        assert 0 <= index < max(1, length)


def test_table_covers_lengths_one_through_thirteen():
    assert sorted(FIXATION_TABLE) == list(range(1, 14))


def test_split_reconstructs_token():
    for word in ["a", "to", "cat", "recognition.", "anextraordinarily", "ünïcödé"]:
        split = split_fixation(word)
        assert split.prefix + (split.focal or "") + split.suffix == word
        assert split.joined() == word
        assert split.total_count == len(word)


def test_split_parts():
    split = split_fixation("reading")
    assert split.prefix == "re"
    assert split.focal == "a"
    assert split.suffix == "ding"
    assert split.leading_count == 2


def test_split_of_empty_token():
    split = split_fixation("")
    assert split.prefix == ""
    assert split.focal is None
    assert split.suffix == ""
