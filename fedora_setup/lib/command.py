from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def have_command(name: str) -> bool:
    return shutil.which(name) is not None


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    sudo: bool = False,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    quiet: bool = False,
    interactive: bool = False,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - sudo prefixes the argv with sudo.
    - quiet logs the command at DEBUG instead of INFO.
    - interactive leaves stdin/stdout/stderr on the terminal so prompts and
      progress reach the operator; the result carries no output.
    - dry_run logs but does not execute, and reports success.
    """

    argv_list = (["sudo"] if sudo else []) + list(argv)

    if dry_run:
        logger.info("[DRY-RUN] Would execute: %s", _fmt_argv(argv_list))
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    logger.log(logging.DEBUG if quiet else logging.INFO, "CMD %s", _fmt_argv(argv_list))

    # Interactive commands share the terminal, so there is nothing to capture.
    capture = {} if interactive else {"stdout": subprocess.PIPE, "stderr": subprocess.PIPE}
    try:
        p = subprocess.run(
            argv_list,
            input=None if interactive else input_text,
            text=True,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            **capture,
        )
    except FileNotFoundError:
        if check:
            raise RuntimeError(f"Command not found: {argv_list[0]}") from None
        logger.warning("Command not found: %s", argv_list[0])
        return CmdResult(argv=argv_list, returncode=127, stdout="", stderr="")

    stdout = p.stdout or ""
    stderr = p.stderr or ""
    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if check and p.returncode != 0:
        raise RuntimeError(f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}\n{stderr}")

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)


def run_shell(
    script: str,
    *,
    check: bool = True,
    sudo: bool = False,
    interactive: bool = False,
    dry_run: bool = False,
) -> CmdResult:
    """Run a shell snippet (pipes, redirects) through sh -c."""
    return run_cmd(["sh", "-c", script], check=check, sudo=sudo, interactive=interactive, dry_run=dry_run)
