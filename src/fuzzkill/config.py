"""Configuration system for fuzzkill."""

from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path

import tomlkit


@dataclass
class MatchingConfig:
    """Fuzzy matching configuration."""

    # Fuzzy threshold is min_score_per_char * len(query)
    min_score_per_char: int = 3


@dataclass
class TerminateConfig:
    """How selected processes are stopped."""

    graceful: bool = False  # SIGTERM instead of SIGKILL
    wait_timeout: float = 3.0  # Seconds to wait for processes to exit


@dataclass
class SystemConfig:
    """Log file configuration."""

    log_max_bytes: int = 1024 * 1024  # Max log file size (1MB)
    log_backup_count: int = 2  # Number of backup log files to keep


def _dataclass_to_table(obj: object) -> tomlkit.items.Table:
    """Convert a dataclass instance to a tomlkit Table recursively."""
    table = tomlkit.table()
    for f in fields(obj):  # type: ignore[arg-type]
        value = getattr(obj, f.name)
        if is_dataclass(value) and not isinstance(value, type):
            table.add(f.name, _dataclass_to_table(value))
        else:
            table.add(f.name, value)
    return table


@dataclass
class Config:
    """Main configuration container."""

    matching: MatchingConfig = field(default_factory=MatchingConfig)
    terminate: TerminateConfig = field(default_factory=TerminateConfig)
    system: SystemConfig = field(default_factory=SystemConfig)

    @property
    def config_dir(self) -> Path:
        """Configuration directory."""
        return Path.home() / ".config" / "fuzzkill"

    @property
    def config_path(self) -> Path:
        """Path to config file."""
        return self.config_dir / "config.toml"

    @property
    def state_dir(self) -> Path:
        """State directory for logs."""
        return Path.home() / ".local" / "state" / "fuzzkill"

    @property
    def log_path(self) -> Path:
        """JSON log path."""
        return self.state_dir / "fuzzkill.log"

    def save(self, path: Path | None = None) -> None:
        """Save config to TOML file."""
        path = path or self.config_path
        path.parent.mkdir(parents=True, exist_ok=True)

        doc = tomlkit.document()
        for name in ("matching", "terminate", "system"):
            doc.add(name, _dataclass_to_table(getattr(self, name)))
            doc.add(tomlkit.nl())

        path.write_text(tomlkit.dumps(doc))

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load config from TOML file, returning defaults for missing values.

        All defaults come from the dataclass definitions.
        """
        defaults = cls()
        path = path or defaults.config_path
        if not path.exists():
            return defaults

        try:
            with open(path) as f:
                data = tomlkit.load(f)
        except tomlkit.exceptions.TOMLKitError as e:
            raise ValueError(f"Failed to parse config file {path}: {e}") from e

        return cls(
            matching=_load_matching_config(data.get("matching", {})),
            terminate=_load_terminate_config(data.get("terminate", {})),
            system=_load_system_config(data.get("system", {})),
        )


def _load_matching_config(data: dict) -> MatchingConfig:
    """Load matching config from TOML data."""
    defaults = MatchingConfig()
    min_score_per_char = data.get("min_score_per_char", defaults.min_score_per_char)
    if isinstance(min_score_per_char, bool) or not isinstance(min_score_per_char, int):
        raise ValueError(
            f"min_score_per_char must be an integer, got {min_score_per_char!r}"
        )
    if min_score_per_char < 1:
        raise ValueError(f"min_score_per_char must be >= 1, got {min_score_per_char}")
    return MatchingConfig(min_score_per_char=min_score_per_char)


def _load_terminate_config(data: dict) -> TerminateConfig:
    """Load terminate config from TOML data."""
    defaults = TerminateConfig()
    wait_timeout = data.get("wait_timeout", defaults.wait_timeout)
    if isinstance(wait_timeout, bool) or not isinstance(wait_timeout, (int, float)):
        raise ValueError(f"wait_timeout must be a number, got {wait_timeout!r}")
    if wait_timeout < 0:
        raise ValueError(f"wait_timeout must be >= 0, got {wait_timeout}")
    return TerminateConfig(
        graceful=data.get("graceful", defaults.graceful),
        wait_timeout=float(wait_timeout),
    )


def _load_system_config(data: dict) -> SystemConfig:
    """Load system config from TOML data."""
    d = SystemConfig()
    return SystemConfig(
        log_max_bytes=data.get("log_max_bytes", d.log_max_bytes),
        log_backup_count=data.get("log_backup_count", d.log_backup_count),
    )
