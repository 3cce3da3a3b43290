"""Process snapshot via psutil.

One pass over the process table per invocation. Anything psutil cannot read
for a single process comes back as None; a process that disappears mid-scan
is skipped. Only a failure of the enumeration itself empties the snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

import psutil
import structlog

from fuzzkill import logging as console
from fuzzkill.records import UNKNOWN_PID, ProcessRecord

log = structlog.get_logger()

_ATTRS = ["pid", "name", "cmdline"]

# LocalSystem, LocalService, NetworkService, root
SYSTEM_OWNER_SIDS = frozenset({"S-1-5-18", "S-1-5-19", "S-1-5-20", "0"})

# Windows reports well-known accounts by name; psutil has no SID lookup
_WELL_KNOWN_ACCOUNTS = {
    "system": "S-1-5-18",
    "local service": "S-1-5-19",
    "network service": "S-1-5-20",
}


@dataclass(frozen=True)
class Owner:
    """Account that owns a process."""

    domain: str | None
    user: str | None
    sid: str | None


def is_system_sid(sid: str | None) -> bool:
    """True if sid belongs to a well-known system account."""
    return sid is not None and sid.upper() in SYSTEM_OWNER_SIDS


def split_username(username: str | None) -> tuple[str | None, str | None]:
    """Split DOMAIN\\user into (domain, user)."""
    if not username:
        return None, None
    if "\\" in username:
        domain, _, user = username.partition("\\")
        return domain or None, user or None
    return None, username


def _owner_sid(proc: psutil.Process, domain: str | None, user: str | None) -> str | None:
    if user and (domain or "").upper() == "NT AUTHORITY":
        sid = _WELL_KNOWN_ACCOUNTS.get(user.lower())
        if sid:
            return sid
    uids = getattr(proc, "uids", None)
    if uids is None:
        return None
    try:
        return str(uids().real)
    except (psutil.Error, OSError):
        return None


def owner_of(proc: psutil.Process) -> Owner | None:
    """Resolve the owner of a live process handle, or None if unknown."""
    try:
        username = proc.username()
    except (psutil.Error, OSError) as e:
        log.debug("owner_unresolvable", pid=proc.pid, error=str(e))
        return None

    domain, user = split_username(username)
    sid = _owner_sid(proc, domain, user)
    if domain is None and user is None and sid is None:
        return None
    return Owner(domain=domain, user=user, sid=sid)


def resolve_owner(pid: int) -> Owner | None:
    """Resolve the owner of a process by pid, or None if unknown."""
    if pid <= 0:
        return None
    try:
        proc = psutil.Process(pid)
    except (psutil.Error, OSError):
        return None
    return owner_of(proc)


def _join_cmdline(cmdline: list[str] | None) -> str | None:
    if not cmdline:
        return None
    return " ".join(cmdline)


def record_from_process(proc: psutil.Process, info: dict) -> ProcessRecord:
    """Build a ProcessRecord from a psutil handle and its pre-fetched info."""
    pid = info.get("pid")
    if not isinstance(pid, int) or pid <= 0:
        pid = UNKNOWN_PID

    owner = owner_of(proc) if pid != UNKNOWN_PID else None

    return ProcessRecord(
        id=pid,
        name=info.get("name") or "",
        command_line=_join_cmdline(info.get("cmdline")),
        owner_domain=owner.domain if owner else None,
        owner_user=owner.user if owner else None,
        owner_sid=owner.sid if owner else None,
        is_system_owned=is_system_sid(owner.sid) if owner else False,
        handle=proc,
    )


def own_lineage() -> frozenset[int]:
    """Pids of this process and all of its ancestors."""
    me = psutil.Process()
    try:
        parents = me.parents()
    except (psutil.Error, OSError) as e:
        log.debug("parents_unreadable", error=str(e))
        parents = []
    return frozenset({me.pid, *(p.pid for p in parents)})


class ProcessSnapshot:
    """Snapshot provider backed by psutil.process_iter.

    The process table is read on the first call to list() and reused after.
    This process and its ancestors (the shell that launched it) are never
    listed, since the query always appears in their command lines.
    """

    def __init__(self) -> None:
        self._records: list[ProcessRecord] | None = None

    def list(self) -> list[ProcessRecord]:
        """Return the snapshot, reading the process table if needed."""
        if self._records is None:
            self._records = self._capture()
        return list(self._records)

    def _capture(self) -> list[ProcessRecord]:
        records: list[ProcessRecord] = []
        try:
            skip = own_lineage()
            # process_iter already drops processes that vanish mid-scan
            for proc in psutil.process_iter(_ATTRS, ad_value=None):
                if proc.info.get("pid") in skip:
                    continue
                records.append(record_from_process(proc, proc.info))
        except (psutil.Error, OSError) as e:
            log.warning("snapshot_failed", error=str(e))
            console.snapshot_failed(str(e))
            return []

        log.debug("snapshot_captured", count=len(records))
        return records
