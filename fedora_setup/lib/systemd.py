from __future__ import annotations

from .command import CmdResult, run_cmd


def systemctl(*args: str, check: bool = False, dry_run: bool = False) -> CmdResult:
    return run_cmd(["systemctl", *args], sudo=True, check=check, dry_run=dry_run)


def enable(unit: str, *, dry_run: bool = False) -> CmdResult:
    return systemctl("enable", unit, dry_run=dry_run)


def start(unit: str, *, dry_run: bool = False) -> CmdResult:
    return systemctl("start", unit, dry_run=dry_run)


def stop(unit: str, *, dry_run: bool = False) -> CmdResult:
    return systemctl("stop", unit, dry_run=dry_run)


def is_active(unit: str) -> bool:
    return run_cmd(["systemctl", "is-active", "--quiet", unit], sudo=True, check=False).ok


def is_failed(unit: str) -> bool:
    return run_cmd(["systemctl", "is-failed", unit], sudo=True, check=False).ok
