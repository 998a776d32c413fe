"""
Significant words and the fuzzy similarity predicate.
"""

import pytest
from hypothesis import given, strategies as st

from services.text import significant_words, is_similar, find_best_match

from .fixtures import phrases


class TestSignificantWords:

    def test_lowercases_and_drops_stop_words(self):
        assert significant_words("The Root Cause of the Bug") == ["root", "cause", "bug"]

    def test_strips_punctuation_without_splitting_tokens(self):
        assert significant_words("Don't re-run: CSS/JS!") == ["dont", "rerun", "cssjs"]

    def test_drops_tokens_of_two_chars_or_less(self):
        assert significant_words("go to db ui api") == ["api"]

    def test_preserves_order_and_repeats(self):
        assert significant_words("tests tests fail tests") == ["tests", "tests", "fail", "tests"]

    def test_no_stemming(self):
        assert significant_words("configuration configurations") == ["configuration", "configurations"]

    def test_newlines_separate_words(self):
        assert significant_words("first line\nsecond line") == ["first", "line", "second", "line"]

    @pytest.mark.parametrize("text", ["", "   ", "!!! ... ???", "the and of it", "a an to"])
    def test_empty_signatures(self, text):
        assert significant_words(text) == []


class TestIsSimilar:

    def test_subset_title_matches_verbose_title(self):
        assert is_similar("Debugging Root Causes", "Debugging Wrong Root Causes")

    def test_disjoint_titles_do_not_match(self):
        assert not is_similar("CSS Scoping Issues", "SQL Query Failures")

    def test_paraphrased_frictions_match_at_threshold(self):
        # 4 of 5 significant words shared on each side
        assert is_similar("Incorrect CSS scoping component styles", "Wrong CSS scoping component styles")

    def test_ratio_exactly_at_threshold_matches(self):
        assert is_similar("alpha bravo charlie delta echo", "alpha bravo charlie delta foxtrot")

    def test_ratio_below_threshold_on_both_sides_does_not_match(self):
        # 3/4 on both sides
        assert not is_similar("alpha bravo charlie delta", "alpha bravo charlie echo")
        # 11/14 on both sides
        shared = "one1 two2 three3 four4 five5 six6 seven7 eight8 nine9 ten10 eleven11"
        assert not is_similar(f"{shared} aaa bbb ccc", f"{shared} ddd eee fff")

    def test_only_one_direction_needs_to_reach_threshold(self):
        short = "flaky selectors"
        verbose = "flaky selectors break visual regression snapshots during nightly runs"
        assert is_similar(short, verbose)
        assert is_similar(verbose, short)

    def test_case_and_punctuation_are_ignored(self):
        assert is_similar("CSS: scoping, issues!", "css scoping issues")

    def test_stop_word_only_text_never_matches(self):
        assert not is_similar("the and of", "the and of")

    def test_repeated_words_do_not_break_symmetry(self):
        a = "alpha alpha"
        b = "alpha bravo charlie delta echo"
        assert is_similar(a, b) == is_similar(b, a)
        assert is_similar(a, b)

    @given(phrases, phrases)
    def test_symmetry(self, a, b):
        assert is_similar(a, b) == is_similar(b, a)

    @given(st.one_of(phrases, st.text()))
    def test_empty_side_is_never_similar(self, a):
        assert not is_similar(a, "")
        assert not is_similar("", a)

    @given(phrases)
    def test_reflexive_for_non_empty_signatures(self, a):
        assert is_similar(a, a) == bool(significant_words(a))


class TestFindBestMatch:

    def test_picks_largest_overlap(self):
        candidates = [
            ("Run the linter", "lint"),
            ("Confirm the root cause with logs", "root-cause"),
            ("Root cause analysis for debugging failures", "debug"),
        ]
        assert find_best_match("Debugging root cause failures", candidates) == "debug"

    def test_first_candidate_wins_ties(self):
        candidates = [("css scoping", 1), ("css layout", 2)]
        assert find_best_match("css bugs", candidates) == 1

    def test_none_without_shared_words(self):
        assert find_best_match("database migration", [("css scoping", 1)]) is None
        assert find_best_match("anything", []) is None
