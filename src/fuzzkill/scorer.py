"""Fuzzy subsequence scoring and regex matching for process lookup.

Scoring is fzf-like: every needle character must appear in the haystack in
order, with bonuses for runs of consecutive matches and for matches that land
on the start of a word.
"""

import re

from fuzzkill.errors import InvalidPattern

# Characters after which a match counts as the start of a new word
SEPARATORS = frozenset(" -_.\\/:")

BASE_POINTS = 1
BOUNDARY_BONUS = 3
MAX_RUN_BONUS = 3


def is_word_boundary(text: str, index: int) -> bool:
    """Return True if text[index] begins a new logical token."""
    if index <= 0:
        return True
    prev = text[index - 1]
    curr = text[index]
    if not prev.isalnum() and curr.isalnum():
        return True
    if prev.islower() and curr.isupper():
        return True
    return prev in SEPARATORS


def fuzzy_score(haystack: str, needle: str) -> int:
    """Score how well needle matches haystack as an ordered subsequence.

    Args:
        haystack: Text to search (process name or command line)
        needle: Query; surrounding whitespace is ignored

    Returns:
        0 when either side is blank or the needle is not fully consumed,
        otherwise the accumulated score.
    """
    if not haystack or not haystack.strip():
        return 0
    needle = needle.strip() if needle else ""
    if not needle:
        return 0

    j = 0
    score = 0
    run = 0
    last_match = -2
    for i, ch in enumerate(haystack):
        if j >= len(needle):
            break
        if ch.lower() != needle[j].lower():
            continue

        score += BASE_POINTS
        if i == last_match + 1:
            run += 1
            score += min(MAX_RUN_BONUS, run)
        else:
            run = 0
        if is_word_boundary(haystack, i):
            score += BOUNDARY_BONUS
        last_match = i
        j += 1

    return score if j == len(needle) else 0


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a case-insensitive search pattern.

    Raises:
        InvalidPattern: If the expression does not compile.
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise InvalidPattern(pattern, str(e)) from e


def regex_matches(haystack: str, pattern: str | re.Pattern[str]) -> bool:
    """Return True if pattern matches anywhere in haystack."""
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)
    return pattern.search(haystack) is not None
