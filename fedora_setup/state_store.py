from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateStore:
    """Durable set of completed step ids.

    The file is a plain list of ids, one per line. It is only ever appended
    to, except by reset(). Ids this version does not know about are left in
    place and simply never looked up.
    """

    path: Path

    def completed_ids(self) -> List[str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning("Cannot read state file %s: %s", self.path, e)
            return []

        ids: List[str] = []
        for line in text.splitlines():
            token = line.strip()
            if token and token not in ids:
                ids.append(token)
        return ids

    def is_completed(self, step_id: str) -> bool:
        return step_id in self.completed_ids()

    def mark_completed(self, step_id: str) -> None:
        if self.is_completed(step_id):
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)

        # A torn previous append must not swallow this id into its line.
        prefix = ""
        if self.path.exists() and self.path.stat().st_size > 0:
            with self.path.open("rb") as f:
                f.seek(-1, os.SEEK_END)
                if f.read(1) != b"\n":
                    prefix = "\n"

        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"{prefix}{step_id}\n")
            f.flush()
            os.fsync(f.fileno())
        logger.debug("Marked %s completed in %s", step_id, self.path)

    def reset(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        logger.info("State cleared (%s) - all steps will re-run", self.path)
