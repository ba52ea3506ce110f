"""Relevance scoring between a query and a piece of text.

Scores are integers in ``[0, 100]`` assigned by the first tier that applies:

- exact match: 100
- text starts with the query: 90
- text contains the query: 70
- word overlap: up to 50, proportional to matched query words
- fuzzy similarity from edit distance: up to 30

Nothing here raises; missing or blank input scores 0.
"""

from __future__ import annotations

EXACT_SCORE = 100
PREFIX_SCORE = 90
SUBSTRING_SCORE = 70
WORD_MATCH_MAX_SCORE = 50
FUZZY_MAX_SCORE = 30


def _normalize(value: str | None) -> str:
    return (value or "").lower().strip()


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate the Levenshtein (edit) distance between two strings.

    Insertions, deletions and substitutions each cost 1. Only two rows of
    the dynamic-programming table are kept.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "abc")
        3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    # Use shorter string as columns for space efficiency
    if len(s1) > len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)
    prev_row = list(range(m + 1))
    curr_row = [0] * (m + 1)

    for j in range(1, n + 1):
        curr_row[0] = j
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            curr_row[i] = min(
                prev_row[i] + 1,  # deletion
                curr_row[i - 1] + 1,  # insertion
                prev_row[i - 1] + cost,  # substitution
            )
        prev_row, curr_row = curr_row, prev_row

    return prev_row[m]


def count_word_matches(query: str, text: str) -> tuple[int, int]:
    """Count query words that overlap some text word.

    A query word overlaps a text word when either contains the other.
    Both arguments are expected to be normalized already. Returns
    ``(matched, total)`` query word counts.
    """
    query_words = query.split()
    text_words = text.split()
    matched = [
        qw for qw in query_words if any(tw in qw or qw in tw for tw in text_words)
    ]
    return len(matched), len(query_words)


def calculate_score(query: str | None, text: str | None) -> int:
    """Score how well ``text`` answers ``query``, from 0 to 100."""
    normalized_query = _normalize(query)
    normalized_text = _normalize(text)

    if not normalized_query or not normalized_text:
        return 0

    if normalized_text == normalized_query:
        return EXACT_SCORE

    if normalized_text.startswith(normalized_query):
        return PREFIX_SCORE

    if normalized_query in normalized_text:
        return SUBSTRING_SCORE

    matched, total = count_word_matches(normalized_query, normalized_text)
    if matched > 0:
        return WORD_MATCH_MAX_SCORE * matched // total

    distance = levenshtein_distance(normalized_query, normalized_text)
    max_length = max(len(normalized_query), len(normalized_text))
    # floor(30 * (1 - distance / max_length)) in integer arithmetic
    return FUZZY_MAX_SCORE * (max_length - distance) // max_length


def find_highlights(query: str | None, text: str | None) -> list[tuple[int, int]]:
    """Locate every non-overlapping literal occurrence of ``query`` in ``text``.

    Matching ignores case. Offsets index into ``text`` as given, so the text
    itself is lowercased but not trimmed. Fuzzy matches have no literal span
    and give an empty list.
    """
    normalized_query = _normalize(query)
    if not normalized_query or not text:
        return []

    lowered_text = text.lower()
    highlights: list[tuple[int, int]] = []
    start = 0
    while start < len(lowered_text):
        index = lowered_text.find(normalized_query, start)
        if index == -1:
            break
        end = index + len(normalized_query)
        highlights.append((index, end))
        start = end

    return highlights
