"""Selection grouping for the interactive picker.

Candidates are grouped by case-insensitive process name so the operator can
pick "all chrome" in one go. Every candidate still gets its own leaf entry;
expansion turns whatever was picked back into a deduplicated record list.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from fuzzkill.formatting import group_label, leaf_label
from fuzzkill.ranker import Candidate
from fuzzkill.records import ProcessRecord


@dataclass(frozen=True)
class GroupChoice:
    """Select-all entry for a name shared by more than one candidate."""

    label: str
    key: str
    name: str
    members: tuple[Candidate, ...]

    @property
    def records(self) -> list[ProcessRecord]:
        return [c.record for c in self.members]


@dataclass(frozen=True)
class LeafChoice:
    """Entry for exactly one candidate."""

    label: str
    candidate: Candidate

    @property
    def record(self) -> ProcessRecord:
        return self.candidate.record

    @property
    def records(self) -> list[ProcessRecord]:
        return [self.candidate.record]


Choice = GroupChoice | LeafChoice


def group_key(name: str | None) -> str:
    """Case-insensitive grouping key for a process name."""
    return (name or "").casefold()


def group_candidates(candidates: Iterable[Candidate]) -> list[tuple[str, list[Candidate]]]:
    """Partition candidates by name.

    Returns:
        (display name, members) pairs in ascending case-insensitive name
        order; members ascending by pid. The display name is the first
        spelling seen.
    """
    groups: dict[str, list[Candidate]] = {}
    names: dict[str, str] = {}
    for candidate in candidates:
        key = group_key(candidate.record.name)
        groups.setdefault(key, []).append(candidate)
        names.setdefault(key, candidate.record.name or "")

    return [
        (names[key], sorted(groups[key], key=lambda c: c.record.id))
        for key in sorted(groups)
    ]


def build_choices(candidates: Iterable[Candidate]) -> list[Choice]:
    """Build the flat choice list shown to the operator.

    Groups with more than one member get a GroupChoice ahead of their
    leaves. Leaves map 1:1 onto the input candidates.
    """
    choices: list[Choice] = []
    for name, members in group_candidates(candidates):
        if len(members) > 1:
            choices.append(
                GroupChoice(
                    label=group_label(name, len(members)),
                    key=group_key(name),
                    name=name,
                    members=tuple(members),
                )
            )
        for candidate in members:
            choices.append(LeafChoice(label=leaf_label(candidate.record), candidate=candidate))
    return choices


def expand(selected: Sequence[Choice]) -> list[ProcessRecord]:
    """Expand picked choices into records, each identity at most once.

    Order is first occurrence across the expansion, so picking a group and
    one of its own leaves yields that process once.
    """
    seen: set[tuple[str, int]] = set()
    unique: list[ProcessRecord] = []
    for choice in selected:
        for record in choice.records:
            if record.identity in seen:
                continue
            seen.add(record.identity)
            unique.append(record)
    return unique
