"""Tests for text normalization and heading detection."""

import pytest

from qadd.core.text import MAX_HEADING_CHARS, is_heading, normalize_text


class TestNormalizeText:

    def test_strips_carriage_returns(self):
        assert normalize_text("one\r\ntwo\r\n") == "one\ntwo"

    def test_joins_hyphenated_line_wrap(self):
        assert normalize_text("infor-\nmation retrieval") == "information retrieval"

    def test_hyphen_join_is_ascii_only(self):
        assert normalize_text("caf\u00e9-\nteria") == "caf\u00e9-\nteria"

    def test_keeps_hyphen_not_followed_by_newline(self):
        assert normalize_text("well-known fact") == "well-known fact"

    def test_page_break_becomes_paragraph_break(self):
        assert normalize_text("page one\fpage two") == "page one\n\npage two"

    def test_collapses_blank_line_runs(self):
        assert normalize_text("a\n\n\n\n\nb") == "a\n\nb"

    def test_strips_trailing_horizontal_whitespace(self):
        assert normalize_text("first line  \t\nsecond") == "first line\nsecond"

    def test_trims_document(self):
        assert normalize_text("\n\n   body text   \n\n") == "body text"

    def test_is_deterministic(self):
        raw = "Title\r\n\r\n\r\nsome wrap-\nped text \f next"
        assert normalize_text(raw) == normalize_text(raw)


class TestIsHeading:

    def test_numbered_outline(self):
        assert is_heading("1.2 Introduction") is True

    @pytest.mark.parametrize("text", ["3", "4:", "2.1.3: Scope", "7 Results and discussion, with notes."])
    def test_numbered_variants(self, text):
        assert is_heading(text) is True

    def test_non_ascii_digits_are_not_outline(self):
        assert is_heading("\u0661 Intro") is False

    def test_number_glued_to_word_is_not_outline(self):
        assert is_heading("1.2Introduction to the topic, with some words.") is False

    def test_normal_sentence(self):
        assert is_heading("This is a normal sentence, with punctuation.") is False

    def test_all_uppercase(self):
        assert is_heading("TABLE OF CONTENTS") is True

    def test_all_uppercase_with_digits_and_symbols(self):
        assert is_heading("APPENDIX B - 2024 FIGURES!") is True

    def test_no_letters_is_not_uppercase_heading(self):
        assert is_heading("--- *** ---") is False

    def test_length_short_circuit(self):
        text = ("The quick brown fox jumps over the lazy dog while Mixed Case Words "
                "continue onward forevermore")
        text = text[:91]
        assert len(text) == 91
        assert is_heading(text) is False

    def test_uppercase_over_limit_is_not_heading(self):
        assert is_heading("A" * (MAX_HEADING_CHARS + 1)) is False

    def test_length_exactly_limit_is_still_classified(self):
        text = "A" * MAX_HEADING_CHARS
        assert len(text) == 90
        assert is_heading(text) is True

    def test_cap_ratio_exactly_threshold_is_not_heading(self):
        # 3 of 5 words capitalized -> 0.6, must be strictly greater
        assert is_heading("Alpha Beta Gamma delta epsilon") is False

    def test_cap_ratio_above_threshold(self):
        # 4 of 5 words capitalized -> 0.8
        assert is_heading("Alpha Beta Gamma Delta epsilon") is True

    def test_single_punctuation_mark_allowed(self):
        assert is_heading("Getting Started With Python.") is True

    def test_two_punctuation_marks_rejected(self):
        assert is_heading("Getting Started, With Python.") is False
