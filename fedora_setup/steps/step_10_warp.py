from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.command import run_cmd
from ..lib.dnf import dnf_add_repo, dnf_install
from ..lib.net import is_online
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

WARP_REPO = "https://pkg.cloudflareclient.com/cloudflare-warp-ascii.repo"


def warp_registered() -> bool:
    r = run_cmd(["warp-cli", "account"], check=False)
    return r.ok and "Account type" in r.stdout


class SetupWarpStep:
    step_id = "setup_warp"
    display_name = "Cloudflare Warp"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing Cloudflare Warp...")
        dry_run = ctx.dry_run
        dnf_install(["sassc", "glib2-devel", "libxml2", "glibc-devel"], dry_run=dry_run)
        dnf_add_repo(WARP_REPO, dry_run=dry_run)
        dnf_install(["cloudflare-warp"], dry_run=dry_run)

        if dry_run:
            run_cmd(["warp-cli", "registration", "new"], dry_run=True)
            return StepResult.OK

        if warp_registered():
            logger.info("Warp already registered")
            return StepResult.OK

        if is_online() and run_cmd(["warp-cli", "registration", "new"], check=False).ok:
            return StepResult.OK
        logger.warning("Run 'warp-cli registration new' manually")
        return StepResult.ISSUES
