from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

BEGIN_MARKER = "# BEGIN fedora-setup"
END_MARKER = "# END fedora-setup"

_BLOCK_RE = re.compile(
    rf"^{re.escape(BEGIN_MARKER)}$.*?^{re.escape(END_MARKER)}$\n?",
    re.MULTILINE | re.DOTALL,
)


def replace_managed_block(text: str, body: Sequence[str]) -> str:
    """Drop any previous managed block and append a fresh one."""

    stripped = _BLOCK_RE.sub("", text)
    if stripped and not stripped.endswith("\n"):
        stripped += "\n"
    block = "\n".join([BEGIN_MARKER, *body, END_MARKER]) + "\n"
    return stripped + block


def has_managed_block(path: Path) -> bool:
    try:
        return BEGIN_MARKER in path.read_text(encoding="utf-8")
    except OSError:
        return False


def write_text(path: Path, contents: str, *, sudo: bool = False, dry_run: bool = False) -> None:
    if dry_run:
        logger.info("[DRY-RUN] Would write %s", path)
        return
    if sudo:
        run_cmd(["tee", str(path)], sudo=True, input_text=contents)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")


def append_text(path: Path, contents: str, *, dry_run: bool = False) -> None:
    if dry_run:
        logger.info("[DRY-RUN] Would append to %s", path)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(contents)


def write_managed_block(path: Path, body: Sequence[str], *, sudo: bool = False, dry_run: bool = False) -> None:
    try:
        current = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        current = ""
    write_text(path, replace_managed_block(current, body), sudo=sudo, dry_run=dry_run)
