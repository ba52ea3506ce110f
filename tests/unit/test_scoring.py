"""Unit tests for relevance scoring, edit distance and highlight spans."""

import pytest

from tasklens.search.scoring import (
    calculate_score,
    count_word_matches,
    find_highlights,
    levenshtein_distance,
)


class TestLevenshteinDistance:
    """Edit distance behaviour."""

    @pytest.mark.parametrize(
        ("s1", "s2", "expected"),
        [
            ("kitten", "sitting", 3),
            ("hello", "hallo", 1),
            ("", "abc", 3),
            ("abc", "", 3),
            ("same", "same", 0),
            ("flaw", "lawn", 2),
        ],
    )
    def test_known_distances(self, s1: str, s2: str, expected: int) -> None:
        assert levenshtein_distance(s1, s2) == expected

    def test_distance_is_symmetric(self) -> None:
        assert levenshtein_distance("design", "resign") == levenshtein_distance(
            "resign", "design"
        )


class TestCalculateScore:
    """Tier precedence and bounds of the score."""

    def test_identical_strings_score_100(self) -> None:
        assert calculate_score("Design homepage", "design homepage") == 100

    def test_exact_match_ignores_surrounding_whitespace(self) -> None:
        assert calculate_score("  login ", "LOGIN") == 100

    def test_prefix_beats_substring(self) -> None:
        prefix = calculate_score("abc", "abcdef")
        substring = calculate_score("bcd", "abcdef")

        assert prefix == 90
        assert substring == 70
        assert prefix > substring

    def test_word_overlap_scores_at_most_50(self) -> None:
        # "fix" matches, "crash" does not: half the query words
        assert calculate_score("fix crash", "Fix login bug") == 25

    def test_word_overlap_counts_partial_words(self) -> None:
        # "log" is contained in "login" and "bugs" contains "bug"
        assert calculate_score("bugs log", "fix login bug") == 50

    def test_fuzzy_tier_scores_at_most_30(self) -> None:
        score = calculate_score("hompage", "homepage")

        # distance 1 over 8 characters: floor(30 * 7 / 8)
        assert score == 26
        assert score <= 30

    def test_unrelated_text_scores_low(self) -> None:
        assert calculate_score("zzzz", "design homepage") < 10

    @pytest.mark.parametrize(
        ("query", "text"),
        [("", "text"), ("query", ""), ("   ", "text"), (None, "text"), ("q", None)],
    )
    def test_empty_input_scores_zero(self, query, text) -> None:
        assert calculate_score(query, text) == 0

    @pytest.mark.parametrize(
        ("query", "text"),
        [
            ("a", "b"),
            ("task", "tasks"),
            ("x" * 40, "y"),
            ("release notes", "write release notes"),
            ("ab cd ef", "cd"),
        ],
    )
    def test_score_is_bounded(self, query: str, text: str) -> None:
        assert 0 <= calculate_score(query, text) <= 100


def test_count_word_matches_reports_matched_and_total() -> None:
    assert count_word_matches("fix crash now", "fix it now") == (2, 3)


class TestFindHighlights:
    """Literal highlight spans."""

    def test_single_occurrence(self) -> None:
        assert find_highlights("lo", "hello world") == [(3, 5)]

    def test_multiple_occurrences(self) -> None:
        assert find_highlights("o", "hello world") == [(4, 5), (7, 8)]

    def test_occurrences_do_not_overlap(self) -> None:
        assert find_highlights("aa", "aaaa") == [(0, 2), (2, 4)]

    def test_matching_is_case_insensitive(self) -> None:
        assert find_highlights("LOGIN", "Fix Login bug") == [(4, 9)]

    def test_offsets_index_the_untrimmed_text(self) -> None:
        assert find_highlights("fix", "  fix it") == [(2, 5)]

    def test_fuzzy_match_has_no_spans(self) -> None:
        assert find_highlights("hompage", "homepage") == []

    def test_empty_query_has_no_spans(self) -> None:
        assert find_highlights("", "anything") == []
        assert find_highlights("  ", "anything") == []
