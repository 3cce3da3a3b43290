"""Shared test fixtures for fuzzkill."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from fuzzkill.ranker import Candidate
from fuzzkill.records import ProcessRecord


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep config and log files out of the real home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    yield home
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


def _make_record(
    id: int = 123,
    name: str = "test_proc",
    command_line: str | None = None,
    title: str = "",
    owner_domain: str | None = None,
    owner_user: str | None = None,
    owner_sid: str | None = None,
    is_system_owned: bool = False,
    handle: object = None,
) -> ProcessRecord:
    return ProcessRecord(
        id=id,
        name=name,
        command_line=command_line,
        title=title,
        owner_domain=owner_domain,
        owner_user=owner_user,
        owner_sid=owner_sid,
        is_system_owned=is_system_owned,
        handle=handle,
    )


@pytest.fixture
def make_record() -> Callable[..., ProcessRecord]:
    """Factory for ProcessRecord with sensible defaults."""
    return _make_record


@pytest.fixture
def make_candidate() -> Callable[..., Candidate]:
    """Factory for Candidate wrapping a fresh record."""

    def factory(id: int = 123, name: str = "test_proc", score: int = 1, **kwargs) -> Candidate:
        record = _make_record(id=id, name=name, **kwargs)
        return Candidate(record=record, score=score, name_length=len(name))

    return factory


@pytest.fixture
def browser_records(make_record) -> list[ProcessRecord]:
    """Two chrome processes and a notepad."""
    return [
        make_record(id=10, name="chrome", command_line="chrome.exe --tab"),
        make_record(id=11, name="chrome", command_line="chrome.exe --profile"),
        make_record(id=20, name="notepad", command_line="notepad.exe"),
    ]
