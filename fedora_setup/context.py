from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import SetupConfig
from .errors import ConfigurationError

DEFAULT_STATE_FILE = "~/.config/fedora-setup/state.txt"
DEFAULT_BACKUP_ROOT = "~/.config/fedora-setup-backups"
DEFAULT_LOG_DIR = "/tmp"

RUN_ID_FORMAT = "%Y%m%d_%H%M%S"


class Profile(str, enum.Enum):
    MINIMAL = "minimal"
    DEV = "dev"
    GAMING = "gaming"
    FULL = "full"

    @classmethod
    def parse(cls, name: str) -> "Profile":
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ConfigurationError(f"Unknown profile: {name} (use {choices})") from None


@dataclass(frozen=True)
class ExecutionContext:
    profile: Profile
    dry_run: bool
    force: bool
    state_file: Path
    backup_root: Path
    log_file: Path
    run_id: str
    home: Path

    @property
    def backup_dir(self) -> Path:
        """Snapshot directory for this run (created lazily by the vault)."""
        return self.backup_root / self.run_id

    @property
    def zshrc(self) -> Path:
        return self.home / ".zshrc"

    @property
    def bashrc(self) -> Path:
        return self.home / ".bashrc"

    @property
    def mangohud_conf(self) -> Path:
        return self.home / ".config/MangoHud/MangoHud.conf"

    @property
    def dnf_conf(self) -> Path:
        return Path("/etc/dnf/dnf.conf")


def new_run_id() -> str:
    return time.strftime(RUN_ID_FORMAT)


def build_context(
    *,
    profile: str,
    dry_run: bool = False,
    force: bool = False,
    config: Optional[SetupConfig] = None,
    state_file: Optional[str] = None,
    backup_root: Optional[str] = None,
    log_dir: Optional[str] = None,
    run_id: Optional[str] = None,
    home: Optional[str] = None,
) -> ExecutionContext:
    """Build the run context once. CLI values win over config values."""

    cfg = config or SetupConfig()
    rid = run_id or new_run_id()
    log_base = Path(log_dir or cfg.log_dir or DEFAULT_LOG_DIR).expanduser()

    return ExecutionContext(
        profile=Profile.parse(profile),
        dry_run=bool(dry_run),
        force=bool(force),
        state_file=Path(state_file or cfg.state_file or DEFAULT_STATE_FILE).expanduser(),
        backup_root=Path(backup_root or cfg.backup_root or DEFAULT_BACKUP_ROOT).expanduser(),
        log_file=log_base / f"fedora-setup-{rid}.log",
        run_id=rid,
        home=Path(home).expanduser() if home else Path.home(),
    )
