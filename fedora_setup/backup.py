from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .confirm import ConfirmationGate
from .errors import RestoreError
from .lib.command import run_cmd
from .state_store import StateStore

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"


class BackupVault:
    """Per-run snapshots of files a step is about to modify.

    Snapshots live in <backup_root>/<run_id>/ as <basename>.backup. The run
    directory is created on the first snapshot, and a file already captured
    in this run is never overwritten.
    """

    def __init__(
        self,
        *,
        backup_root: Path,
        run_id: str,
        known_paths: Sequence[Path],
        state: StateStore,
        gate: ConfirmationGate,
        dry_run: bool = False,
    ) -> None:
        self.backup_root = Path(backup_root)
        self.run_dir = self.backup_root / run_id
        self.known_paths = [Path(p) for p in known_paths]
        self.state = state
        self.gate = gate
        self.dry_run = dry_run

    def snapshot(self, path: Path) -> Optional[Path]:
        src = Path(path)
        if not src.is_file():
            return None

        dst = self.run_dir / (src.name + BACKUP_SUFFIX)
        if self.dry_run:
            logger.info("[DRY-RUN] Would back up %s -> %s", src, dst)
            return None
        if dst.exists():
            return dst

        self.run_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
        logger.info("Backed up: %s -> %s", src, dst)
        return dst

    def snapshot_dirs(self) -> List[Path]:
        if not self.backup_root.is_dir():
            return []
        return sorted(p for p in self.backup_root.iterdir() if p.is_dir())

    def latest_snapshot(self) -> Optional[Path]:
        dirs = self.snapshot_dirs()
        return dirs[-1] if dirs else None

    def _originals_by_name(self) -> Dict[str, Path]:
        return {p.name: p for p in self.known_paths}

    def _copy_back(self, saved: Path, original: Path) -> None:
        try:
            original.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(saved, original)
        except PermissionError:
            run_cmd(["cp", str(saved), str(original)], sudo=True)

    def restore(self) -> bool:
        """Restore the newest snapshot over the recognized originals.

        Restoring invalidates completion records of steps that configured
        those files, so the state store is reset afterwards. Every file is
        attempted; if any copy fails, RestoreError is raised and the state
        store is not reset.
        """

        latest = self.latest_snapshot()
        if latest is None:
            logger.warning("No backups found")
            return False

        logger.info("Latest backup: %s", latest)
        if not self.gate.ask("Restore all files from this backup?", default_yes=False):
            return False

        originals = self._originals_by_name()
        failed: List[Path] = []
        for saved in sorted(latest.iterdir()):
            name = saved.name
            if name.endswith(BACKUP_SUFFIX):
                name = name[: -len(BACKUP_SUFFIX)]
            original = originals.get(name)
            if original is None:
                logger.warning("Unrecognized backup file, skipping: %s", saved)
                continue
            if self.dry_run:
                logger.info("[DRY-RUN] Would execute: cp %s %s", saved, original)
                continue
            try:
                self._copy_back(saved, original)
            except (OSError, RuntimeError) as e:
                logger.error("Could not restore %s: %s", original, e)
                failed.append(original)
                continue
            logger.info("Restored: %s", original)

        if failed:
            # State is left untouched so the operator can retry the restore.
            names = ", ".join(str(p) for p in failed)
            raise RestoreError(f"Restore incomplete, {len(failed)} file(s) not restored: {names}")

        if not self.dry_run:
            self.state.reset()
            logger.warning("State reset due to restore - all steps will re-run")
        return True
