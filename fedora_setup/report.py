from __future__ import annotations

import logging
import os
import shutil
from typing import Dict

from .confirm import ConfirmationGate
from .context import ExecutionContext
from .lib import systemd
from .lib.command import have_command, run_cmd
from .pipeline import RunStats, StepOutcome

logger = logging.getLogger(__name__)

NEXT_STEPS = [
    "Reboot (for driver/docker changes)",
    "p10k configure (Powerlevel10k theme)",
    "warp-cli connect",
    "docker run hello-world",
]


def service_status() -> Dict[str, bool]:
    status = {
        "TLP": systemd.is_active("tlp"),
        "Docker": systemd.is_active("docker"),
        "ZSH default": os.environ.get("SHELL", "") == (shutil.which("zsh") or "/usr/bin/zsh"),
    }
    if have_command("nvidia-smi"):
        status["NVIDIA drivers"] = True
    if have_command("warp-cli"):
        r = run_cmd(["warp-cli", "account"], check=False, quiet=True)
        status["Warp registered"] = r.ok and "Account" in r.stdout
    return status


def verify_hw_accel() -> None:
    logger.info("Checking hardware acceleration...")
    if have_command("ffmpeg"):
        r = run_cmd(["ffmpeg", "-hide_banner", "-encoders"], check=False, quiet=True)
        lines = [ln for ln in r.stdout.splitlines() if "264" in ln][:5]
        logger.info("H.264 Encoders:\n%s", "\n".join(lines) or "  none")
    else:
        logger.info("H.264 Encoders: ffmpeg not found")
    if have_command("vainfo"):
        r = run_cmd(["vainfo"], check=False, quiet=True)
        lines = [ln for ln in (r.stdout + r.stderr).splitlines() if "VAProfileH264" in ln][:3]
        logger.info("VA-API Profiles:\n%s", "\n".join(lines) or "  none")
    else:
        logger.info("VA-API Profiles: vainfo not found")


def show_summary(ctx: ExecutionContext, stats: RunStats, gate: ConfirmationGate) -> None:
    mins, secs = divmod(int(stats.elapsed), 60)
    logger.info("=== INSTALLATION SUMMARY ===")
    logger.info("Time: %dm %ds | Steps: %d/%d", mins, secs, stats.completed, stats.total)

    for outcome in (StepOutcome.SKIPPED_ALREADY_DONE, StepOutcome.SKIPPED_BY_USER, StepOutcome.RAN_WITH_ISSUES):
        ids = stats.ids_with(outcome)
        if ids:
            logger.info("%s: %s", outcome.value.capitalize(), ", ".join(ids))

    if ctx.dry_run:
        logger.info("[DRY-RUN] %d prompt(s) auto-approved; no changes were made", len(gate.recorded))
        return

    logger.info("Service Status:")
    for name, ok in service_status().items():
        logger.info("  %s %s", "[ok]" if ok else "[--]", name)

    if gate.ask("Verify hardware video acceleration?", default_yes=False):
        verify_hw_accel()

    logger.info("Next Steps:")
    for i, text in enumerate(NEXT_STEPS, start=1):
        logger.info("%d. %s", i, text)
