from __future__ import annotations

import getpass
import logging
import time

from ..context import ExecutionContext
from ..lib import systemd
from ..lib.command import have_command, run_cmd
from ..lib.dnf import rpm_installed
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)


class SetupDockerStep:
    step_id = "setup_docker"
    display_name = "Docker Setup"
    services = ("docker",)

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Configuring Docker...")
        dry_run = ctx.dry_run

        if not (rpm_installed("moby-engine", dry_run=dry_run) or rpm_installed("docker-ce", dry_run=dry_run)):
            logger.warning("Docker (moby-engine/docker-ce) not installed - skipping configuration")
            return StepResult.OK

        run_cmd(["usermod", "-aG", "docker", getpass.getuser()], sudo=True, dry_run=dry_run)
        systemd.enable("docker", dry_run=dry_run)

        result = StepResult.OK
        if dry_run:
            systemd.start("docker", dry_run=True)
        else:
            if systemd.is_failed("docker"):
                logger.warning("Docker service in failed state - attempting reset")
                systemd.systemctl("reset-failed", "docker")
            if not systemd.is_active("docker"):
                systemd.start("docker")
                time.sleep(2)
            if systemd.is_active("docker"):
                logger.info("Docker running. After reboot, verify with: docker run --rm hello-world")
            else:
                logger.warning("Docker failed to start - check: sudo systemctl status docker")
                logger.info("Check: sudo journalctl -u docker --no-pager -n 20")
                result = StepResult.ISSUES

        if dry_run or have_command("npm"):
            run_cmd(["npm", "install", "-g", "corepack"], sudo=True, check=False, dry_run=dry_run)
            run_cmd(["corepack", "enable"], sudo=True, check=False, dry_run=dry_run)
            logger.info("Corepack enabled. After reboot verify: npm --version && yarn --version && pnpm --version")
        return result
