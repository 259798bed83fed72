from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .backup import BackupVault
from .config import load_setup_config
from .confirm import ConfirmationGate, InputFn
from .context import ExecutionContext, Profile, build_context
from .errors import ConfigurationError, SetupError
from .keepalive import SudoKeepAlive, validate_sudo
from .lib.command import run_cmd
from .lib.net import is_online
from .lib.versions import show_versions
from .logging_utils import configure_logging
from .pipeline import RunStats, Step, StepRunner
from .profiles import ProfileFilter
from .report import show_summary
from .rollback import RollbackHandler
from .state_store import StateStore
from .steps import build_catalogue

logger = logging.getLogger(__name__)

CLEANUP_LEFTOVERS = ["msttcore-fonts-installer*.rpm", "FiraCode.zip", "squashfs-root"]


def _banner(ctx: ExecutionContext) -> None:
    if ctx.dry_run:
        logger.info("========================================")
        logger.info("   DRY-RUN MODE - No changes will be made")
        logger.info("========================================")
    logger.info("Fedora Post-Install Setup v%s", __version__)
    logger.info("Log file: %s", ctx.log_file)


def cleanup(ctx: ExecutionContext, gate: ConfirmationGate) -> None:
    logger.info("Cleaning up...")
    run_cmd(["sh", "-c", "rm -rf " + " ".join(CLEANUP_LEFTOVERS)], check=False, dry_run=ctx.dry_run)
    if gate.ask("Clear DNF cache?", default_yes=False):
        run_cmd(["dnf", "clean", "all"], sudo=True, check=False, dry_run=ctx.dry_run)


def run(
    ctx: ExecutionContext,
    *,
    steps: Optional[Sequence[Step]] = None,
    input_fn: Optional[InputFn] = None,
    restore: bool = False,
    reset_state: bool = False,
    skip_network_check: bool = False,
) -> Optional[RunStats]:
    """Run one setup session. Returns None when the session was a restore/reset only."""

    catalogue = list(steps) if steps is not None else build_catalogue()
    profiles = ProfileFilter([s.step_id for s in catalogue])
    profiles.validate()

    state = StateStore(ctx.state_file)
    gate = ConfirmationGate(dry_run=ctx.dry_run, input_fn=input_fn)
    vault = BackupVault(
        backup_root=ctx.backup_root,
        run_id=ctx.run_id,
        known_paths=[ctx.zshrc, ctx.bashrc, ctx.dnf_conf, ctx.mangohud_conf],
        state=state,
        gate=gate,
        dry_run=ctx.dry_run,
    )

    _banner(ctx)

    if reset_state:
        if gate.ask("Clear all completed step records?", default_yes=False) and not ctx.dry_run:
            state.reset()
        return None
    if restore:
        vault.restore()
        return None

    keepalive: Optional[SudoKeepAlive] = None
    if not ctx.dry_run:
        validate_sudo()
        keepalive = SudoKeepAlive().start()

    try:
        # Pre-flight menu. Skipped under dry-run, where every prompt is a yes
        # and a restore would end the preview before any step ran.
        if not ctx.dry_run:
            if gate.ask("Show currently installed versions?", default_yes=False):
                show_versions()
            if gate.ask("Restore from previous backup?", default_yes=False):
                vault.restore()
                return None
            if not skip_network_check and not is_online():
                raise ConfigurationError("No internet connection")

        logger.info("Profile: %s", ctx.profile.value)
        if ctx.profile is not Profile.FULL:
            logger.info("Running steps: %s", " ".join(profiles.ordered_ids(ctx.profile)))

        runner = StepRunner(
            ctx=ctx,
            steps=catalogue,
            profiles=profiles,
            state=state,
            gate=gate,
            vault=vault,
            rollback=RollbackHandler(ctx=ctx, vault=vault),
        )
        stats = runner.run()

        if not ctx.dry_run and ctx.profile is Profile.FULL:
            cleanup(ctx, gate)

        show_summary(ctx, stats, gate)

        logger.info("Full log saved to: %s", ctx.log_file)
        if ctx.backup_dir.is_dir():
            logger.info("Config backups saved to: %s", ctx.backup_dir)
        return stats
    finally:
        if keepalive is not None:
            keepalive.stop()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fedora-setup",
        description=f"Fedora Post-Install Setup v{__version__}",
    )
    p.add_argument(
        "--profile",
        default=Profile.FULL.value,
        help="Setup profile: minimal (DNF, fonts, shell), dev (minimal + dev tools, Docker, "
        "Antigravity), gaming (minimal + drivers, packages, MangoHud), full (all steps, default)",
    )
    p.add_argument("-n", "--dry-run", action="store_true", help="Preview changes without executing")
    p.add_argument("-f", "--force", action="store_true", help="Re-run completed steps")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--state", default=None, help="Path to the completed-steps state file")
    p.add_argument("--backup-root", default=None, help="Directory holding per-run backups")
    p.add_argument("--log-dir", default=None, help="Directory for the per-run log file")
    p.add_argument("--restore", action="store_true", help="Restore the most recent backup and exit")
    p.add_argument("--reset-state", action="store_true", help="Clear all completed step records and exit")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_setup_config(args.config)
        ctx = build_context(
            profile=args.profile,
            dry_run=args.dry_run,
            force=args.force,
            config=cfg,
            state_file=args.state,
            backup_root=args.backup_root,
            log_dir=args.log_dir,
        )
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    configure_logging(log_path=str(ctx.log_file))

    try:
        run(
            ctx,
            restore=args.restore,
            reset_state=args.reset_state,
            skip_network_check=cfg.skip_network_check,
        )
    except SetupError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
