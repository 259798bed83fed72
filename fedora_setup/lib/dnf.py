from __future__ import annotations

import logging
from typing import Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


def dnf_install(
    packages: Sequence[str],
    *,
    skip_unavailable: bool = False,
    check: bool = True,
    dry_run: bool = False,
) -> CmdResult | None:
    if not packages:
        return None
    argv = ["dnf", "install", "-y"]
    if skip_unavailable:
        argv.append("--skip-unavailable")
    return run_cmd([*argv, *packages], sudo=True, check=check, interactive=True, dry_run=dry_run)


def dnf_swap(old: str, new: str, *, allow_erasing: bool = False, dry_run: bool = False) -> CmdResult:
    argv = ["dnf", "swap", "-y", old, new]
    if allow_erasing:
        argv.append("--allowerasing")
    return run_cmd(argv, sudo=True, check=False, interactive=True, dry_run=dry_run)


def dnf_group_upgrade(group: str, *extra: str, dry_run: bool = False) -> CmdResult:
    return run_cmd(
        ["dnf", "group", "upgrade", "-y", group, *extra],
        sudo=True,
        check=False,
        interactive=True,
        dry_run=dry_run,
    )


def dnf_add_repo(repofile_url: str, *, dry_run: bool = False) -> CmdResult:
    return run_cmd(
        ["dnf", "config-manager", "addrepo", f"--from-repofile={repofile_url}", "--overwrite"],
        sudo=True,
        check=False,
        dry_run=dry_run,
    )


def copr_install(repo: str, packages: Sequence[str], *, dry_run: bool = False) -> bool:
    """Enable a COPR repo and install from it. Returns False on any failure."""

    r = run_cmd(["dnf", "copr", "enable", "-y", repo], sudo=True, check=False, dry_run=dry_run)
    if not r.ok:
        logger.warning("COPR %s could not be enabled", repo)
        return False
    r = run_cmd(["dnf", "install", "-y", *packages], sudo=True, check=False, interactive=True, dry_run=dry_run)
    if not r.ok:
        logger.warning("COPR %s: install of %s failed", repo, " ".join(packages))
        return False
    return True


def rpm_installed(package: str, *, dry_run: bool = False) -> bool:
    if dry_run:
        # Be permissive in dry-run so planning doesn't fail.
        return True
    return run_cmd(["rpm", "-q", package], check=False).ok
