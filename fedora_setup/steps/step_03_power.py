from __future__ import annotations

import logging
from pathlib import Path

from ..context import ExecutionContext
from ..lib import systemd
from ..lib.command import run_cmd
from ..lib.dnf import dnf_install
from ..lib.files import write_text
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

AUTOSTART_UNIT = Path("/etc/systemd/system/tlp-autostart.service")

AUTOSTART_UNIT_TEXT = """[Unit]
Description=Force TLP apply after boot
After=multi-user.target
Wants=multi-user.target
[Service]
Type=oneshot
ExecStart=/usr/sbin/tlp start
RemainAfterExit=yes
[Install]
WantedBy=multi-user.target
"""


class SetupPowerStep:
    step_id = "setup_power"
    display_name = "Power Management"
    services = ("tlp",)

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.warning("TLP vs GNOME Power Profiles")
        logger.info("TLP disables GNOME's power profiles UI; Fedora upstream prefers power-profiles-daemon.")

        if not tools.gate.ask("Use TLP instead of GNOME power profiles?", default_yes=False):
            logger.info("Keeping GNOME power-profiles-daemon (no changes made)")
            return StepResult.OK

        logger.info("Installing TLP...")
        dnf_install(["tlp", "tlp-rdw"], dry_run=ctx.dry_run)
        systemd.enable("tlp.service", dry_run=ctx.dry_run)
        systemd.systemctl("mask", "power-profiles-daemon.service", dry_run=ctx.dry_run)

        write_text(AUTOSTART_UNIT, AUTOSTART_UNIT_TEXT, sudo=True, dry_run=ctx.dry_run)
        systemd.systemctl("daemon-reload", check=True, dry_run=ctx.dry_run)
        systemd.enable("tlp-autostart.service", dry_run=ctx.dry_run)

        if not run_cmd(["tlp", "start"], sudo=True, check=False, dry_run=ctx.dry_run).ok:
            logger.warning("tlp start failed")
            return StepResult.ISSUES
        return StepResult.OK
