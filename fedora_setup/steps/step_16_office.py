from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.dnf import dnf_install
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

ONLYOFFICE_REPO_RPM = "https://download.onlyoffice.com/repo/centos/main/noarch/onlyoffice-repo.noarch.rpm"


class SetupOfficeStep:
    step_id = "setup_office"
    display_name = "OnlyOffice"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing OnlyOffice...")
        dnf_install([ONLYOFFICE_REPO_RPM], dry_run=ctx.dry_run)
        dnf_install(["onlyoffice-desktopeditors"], dry_run=ctx.dry_run)
        return StepResult.OK
