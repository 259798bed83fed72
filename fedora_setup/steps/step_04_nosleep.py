from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.command import run_cmd
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

POWER_SCHEMA = "org.gnome.settings-daemon.plugins.power"

NO_SLEEP_KEYS = [
    ("sleep-inactive-ac-timeout", "0"),
    ("sleep-inactive-ac-type", "nothing"),
    ("sleep-inactive-battery-timeout", "0"),
    ("sleep-inactive-battery-type", "nothing"),
]


class SetupNoSleepStep:
    step_id = "setup_nosleep"
    display_name = "No-Sleep Settings"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Disabling auto-sleep...")
        dry_run = ctx.dry_run

        run_cmd(["mkdir", "-p", "/var/lib/gdm/.config/dconf"], sudo=True, dry_run=dry_run)
        run_cmd(["chown", "-R", "gdm:gdm", "/var/lib/gdm/.config"], sudo=True, check=False, dry_run=dry_run)
        run_cmd(["chmod", "0700", "/var/lib/gdm/.config"], sudo=True, check=False, dry_run=dry_run)

        # Settings are best-effort; a missing schema on non-GNOME hosts is not an error.
        for key, value in NO_SLEEP_KEYS:
            run_cmd(
                ["-u", "gdm", "dbus-run-session", "gsettings", "set", POWER_SCHEMA, key, value],
                sudo=True,
                check=False,
                dry_run=dry_run,
            )
        for key, value in NO_SLEEP_KEYS:
            run_cmd(["gsettings", "set", POWER_SCHEMA, key, value], check=False, dry_run=dry_run)

        return StepResult.OK
