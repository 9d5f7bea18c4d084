from rsvp_reader.tokenization import normalize_whitespace, process_text, split_long_hyphenated


def test_process_text_collapses_whitespace_and_blank_lines():
    assert process_text("Hello   world.\n\n\n\nBye") == ["Hello", "world.", "Bye"]


def test_normalize_whitespace_keeps_paragraph_breaks():
    text = "One\r\ntwo\rthree\t\t four\n\n\n\n\nfive"
    assert normalize_whitespace(text) == "One\ntwo\nthree four\n\nfive"


def test_process_text_drops_empty_input():
    assert process_text("") == []
    assert process_text(" \n\t\r\n ") == []


def test_long_hyphenated_words_are_split():
    assert process_text("super-extra-ordinary") == ["super-", "extra-", "ordinary"]


def test_long_hyphenated_word_with_short_part_is_kept():
    word = "a-verylongcompound1"
    assert len(word) > 15
    assert split_long_hyphenated(word) == [word]


def test_short_hyphenated_word_is_kept():
    assert split_long_hyphenated("well-known") == ["well-known"]


def test_process_text_is_idempotent():
    text = "It was a state-of-the-art, never-before-seen\n\n\nmachine.  Really!"
    tokens = process_text(text)
    assert process_text(" ".join(tokens)) == tokens
    assert all(token and not token.isspace() for token in tokens)


def test_punctuation_stays_attached():
    assert process_text("Wait, what? Yes!") == ["Wait,", "what?", "Yes!"]
