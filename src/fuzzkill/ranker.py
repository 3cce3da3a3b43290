"""Candidate ranking: score every process record against a query.

Fuzzy mode keeps a record only when its best field score clears
``min_score_per_char * len(query)``; regex mode keeps any record whose name
or command line matches. Survivors are ordered best-first.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

import structlog

from fuzzkill import logging as console
from fuzzkill.errors import InvalidPattern
from fuzzkill.records import ProcessRecord
from fuzzkill.scorer import compile_pattern, fuzzy_score, regex_matches

log = structlog.get_logger()

DEFAULT_MIN_SCORE_PER_CHAR = 3
REGEX_SCORE = 1


@dataclass(frozen=True)
class Candidate:
    """A process record that passed the threshold for a query."""

    record: ProcessRecord
    score: int
    name_length: int


class SnapshotProvider(Protocol):
    """Anything that can list the processes on this host."""

    def list(self) -> list[ProcessRecord]: ...


def _sort_key(candidate: Candidate) -> tuple[int, int, int]:
    return (-candidate.score, candidate.name_length, candidate.record.id)


def rank(
    records: Iterable[ProcessRecord],
    query: str,
    use_regex: bool = False,
    min_score_per_char: int = DEFAULT_MIN_SCORE_PER_CHAR,
) -> list[Candidate]:
    """Score records against a query and return the ordered survivors.

    Args:
        records: Snapshot to search
        query: Fuzzy query or regular expression; surrounding whitespace ignored
        use_regex: Treat query as a case-insensitive regular expression
        min_score_per_char: Fuzzy threshold multiplier

    Returns:
        Candidates ordered by score (desc), name length (asc), pid (asc).
        Empty for a blank query or an invalid pattern.
    """
    q = query.strip() if query else ""
    if not q:
        return []

    pattern = None
    if use_regex:
        try:
            pattern = compile_pattern(q)
        except InvalidPattern as e:
            log.warning("invalid_pattern", pattern=q, reason=e.reason)
            console.invalid_pattern(q, e.reason)
            return []

    min_score = min_score_per_char * len(q)
    results: list[Candidate] = []

    for record in records:
        name = record.name or ""
        cmd = record.command_line or ""

        if pattern is not None:
            if regex_matches(name, pattern) or (cmd and regex_matches(cmd, pattern)):
                results.append(Candidate(record, REGEX_SCORE, len(name)))
            continue

        best = max(fuzzy_score(name, q), fuzzy_score(cmd, q) if cmd else 0)
        if best >= min_score:
            results.append(Candidate(record, best, len(name)))

    results.sort(key=_sort_key)
    log.debug("ranked", query=q, regex=use_regex, matches=len(results))
    return results


def discover(
    provider: SnapshotProvider,
    query: str,
    use_regex: bool = False,
    min_score_per_char: int = DEFAULT_MIN_SCORE_PER_CHAR,
) -> list[Candidate]:
    """Take a snapshot from provider and rank it against query."""
    if not query or not query.strip():
        return []
    return rank(provider.list(), query, use_regex, min_score_per_char)


def records_of(candidates: Sequence[Candidate]) -> list[ProcessRecord]:
    """Unwrap candidates in rank order (bulk mode, no grouping)."""
    return [c.record for c in candidates]
