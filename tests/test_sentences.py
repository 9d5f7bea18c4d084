from rsvp_reader.sentences import (
    SentenceBoundaryDetector,
    ends_sentence,
    next_sentence_start,
    previous_sentence_start,
    sentence_span,
)
from tests.utils import SENTENCE_TOKENS


def test_ends_sentence_only_on_terminal_punctuation():
    assert ends_sentence("ran.")
    assert ends_sentence("why?")
    assert ends_sentence("stop!")
    assert not ends_sentence("wait,")
    assert not ends_sentence("Mr")


def test_navigation_from_middle_of_first_sentence():
    assert previous_sentence_start(SENTENCE_TOKENS, 2) == 0
    assert next_sentence_start(SENTENCE_TOKENS, 2) == 5


def test_previous_from_sentence_start_goes_to_preceding_sentence():
    assert previous_sentence_start(SENTENCE_TOKENS, 5) == 0
    assert previous_sentence_start(SENTENCE_TOKENS, 6) == 5
    assert previous_sentence_start(SENTENCE_TOKENS, 0) == 0


def test_next_from_terminator_and_last_sentence():
    assert next_sentence_start(SENTENCE_TOKENS, 4) == 5
    # The final terminator is the last token, so stay on the last valid index.
    assert next_sentence_start(SENTENCE_TOKENS, 6) == 7
    assert next_sentence_start(["no", "ending", "here"], 0) == 2


def test_sentence_span():
    assert sentence_span(SENTENCE_TOKENS, 2) == (0, 4)
    assert sentence_span(SENTENCE_TOKENS, 4) == (0, 4)
    assert sentence_span(SENTENCE_TOKENS, 6) == (5, 7)
    assert sentence_span(SENTENCE_TOKENS, 99) == (5, 7)


def test_empty_sequence_is_safe():
    assert next_sentence_start([], 3) == 0
    assert previous_sentence_start([], 3) == 0
    assert sentence_span([], 0) == (0, -1)


def test_detector_sentence_tokens():
    detector = SentenceBoundaryDetector(SENTENCE_TOKENS)
    assert detector.sentence_tokens(6) == ["Then", "it", "ran."]
    assert detector.ends_sentence(4)
    assert not detector.ends_sentence(99)
