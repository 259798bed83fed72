from __future__ import annotations

from typing import Sequence

from .command import CmdResult, run_cmd

FLATHUB_URL = "https://flathub.org/repo/flathub.flatpakrepo"


def add_flathub(*, dry_run: bool = False) -> CmdResult:
    return run_cmd(
        ["flatpak", "remote-add", "--if-not-exists", "flathub", FLATHUB_URL],
        check=False,
        dry_run=dry_run,
    )


def flatpak_install(apps: Sequence[str], *, dry_run: bool = False) -> CmdResult:
    return run_cmd(["flatpak", "install", "-y", "flathub", *apps], check=False, dry_run=dry_run)


def flatpak_has(app_id: str) -> bool:
    r = run_cmd(["flatpak", "list"], check=False)
    return r.ok and app_id in r.stdout
