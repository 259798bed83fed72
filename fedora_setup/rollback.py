from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .backup import BackupVault
from .context import ExecutionContext
from .lib import systemd
from .pipeline import RunStats

logger = logging.getLogger(__name__)


class RollbackHandler:
    """Best-effort quiescing and diagnostics after a fatal step failure.

    Nothing is undone: completed steps stay recorded and backups are only
    reported, never restored automatically.
    """

    def __init__(self, *, ctx: ExecutionContext, vault: BackupVault) -> None:
        self.ctx = ctx
        self.vault = vault
        self.stopped: List[str] = []
        self.latest_backup: Optional[Path] = None

    def handle(self, stats: RunStats, error: BaseException) -> None:
        logger.error("Run aborted: %s", error)
        self.stop_services(stats.services)
        self.report(stats)

    def stop_services(self, services: List[str]) -> None:
        for svc in reversed(services):
            try:
                r = systemd.stop(svc, dry_run=self.ctx.dry_run)
            except Exception as e:
                logger.warning("Could not stop %s: %s", svc, e)
                continue
            if r.ok:
                self.stopped.append(svc)
                logger.info("Stopped service: %s", svc)
            else:
                logger.warning("Could not stop %s (exit %s)", svc, r.returncode)

    def report(self, stats: RunStats) -> None:
        self.latest_backup = self.vault.latest_snapshot()
        if self.latest_backup is not None:
            logger.info("Most recent backup: %s (restore with --restore)", self.latest_backup)
        else:
            logger.info("No backups were taken")

        logger.info("Progress before abort: %d/%d", stats.completed, stats.total)
        logger.info("Log file: %s", self.ctx.log_file)
        logger.info("State file: %s (re-run to resume from the failed step)", self.ctx.state_file)
