from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from .command import have_command, run_cmd

logger = logging.getLogger(__name__)

TRACKED_PACKAGES = ("zsh", "brave-browser", "code", "antigravity", "docker", "tlp", "steam", "ffmpeg")


def check_version(pkg: str) -> Optional[str]:
    """Installed version of pkg from rpm, else from `pkg --version`, else None."""

    r = run_cmd(["rpm", "-q", "--queryformat", "%{VERSION}", pkg], check=False)
    if r.ok and r.stdout.strip():
        return r.stdout.strip()

    if have_command(pkg):
        r = run_cmd([pkg, "--version"], check=False)
        first = (r.stdout or "").strip().splitlines()
        return first[0] if first else "installed"
    return None


def show_versions(packages: Sequence[str] = TRACKED_PACKAGES) -> Dict[str, Optional[str]]:
    logger.info("Checking installed versions...")
    found: Dict[str, Optional[str]] = {}
    for pkg in packages:
        ver = check_version(pkg)
        found[pkg] = ver
        if ver:
            logger.info("  %s: %s", pkg, ver)
        else:
            logger.info("  %s: not installed", pkg)
    return found
