"""Process records: the normalized view of one OS process.

A record is read once per invocation by the snapshot provider and never
changes afterwards. Fields the OS refused to give us are None, not raised.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any

UNKNOWN_PID = -1

# Surrogate identity for records whose pid is unknown
_tokens = itertools.count(1)


def _next_token() -> int:
    return next(_tokens)


@dataclass(frozen=True)
class ProcessRecord:
    """Single process as seen at snapshot time.

    The live psutil handle (if any) is kept alongside the data rather than
    subclassed, and never takes part in equality.
    """

    # ─────────────────────────────────────────────────────────────
    # Identity
    # ─────────────────────────────────────────────────────────────
    id: int
    name: str
    command_line: str | None = None
    title: str = ""

    # ─────────────────────────────────────────────────────────────
    # Owner
    # ─────────────────────────────────────────────────────────────
    owner_domain: str | None = None
    owner_user: str | None = None
    owner_sid: str | None = None
    is_system_owned: bool = False

    token: int = field(default_factory=_next_token)
    handle: Any = field(default=None, compare=False, repr=False)

    @property
    def has_pid(self) -> bool:
        """True when the OS gave us a usable pid."""
        return self.id > 0

    @property
    def identity(self) -> tuple[str, int]:
        """Deduplication key: the pid when known, else the surrogate token."""
        if self.has_pid:
            return ("pid", self.id)
        return ("token", self.token)

    @property
    def user_display(self) -> str | None:
        """Owner as DOMAIN\\user, or whichever half is known."""
        if not self.owner_user and not self.owner_domain:
            return None
        if not self.owner_user:
            return self.owner_domain
        if not self.owner_domain:
            return self.owner_user
        return f"{self.owner_domain}\\{self.owner_user}"

    def to_dict(self) -> dict:
        """Serialize to a dictionary (handle excluded)."""
        return {
            "id": self.id,
            "name": self.name,
            "command_line": self.command_line,
            "title": self.title,
            "owner_domain": self.owner_domain,
            "owner_user": self.owner_user,
            "owner_sid": self.owner_sid,
            "is_system_owned": self.is_system_owned,
        }
