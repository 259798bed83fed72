from __future__ import annotations

import logging

from .command import run_cmd

logger = logging.getLogger(__name__)

PING_TARGETS = ("8.8.8.8", "1.1.1.1")


def is_online(*, dry_run: bool = False) -> bool:
    """Best-effort online check."""

    if dry_run:
        return True
    for host in PING_TARGETS:
        try:
            r = run_cmd(["ping", "-c", "1", "-W", "2", host], check=False)
        except Exception:
            logger.debug("ping %s failed", host, exc_info=True)
            continue
        if r.returncode == 0:
            return True
    return False
