from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.flatpak import flatpak_install
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

FLATPAK_APPS = ["org.localsend.localsend_app", "io.missioncenter.MissionCenter", "com.vysp3r.ProtonPlus"]


class SetupFlatpaksStep:
    step_id = "setup_flatpaks"
    display_name = "Flatpak Apps"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing Flatpaks...")
        if not flatpak_install(FLATPAK_APPS, dry_run=ctx.dry_run).ok:
            logger.warning("Some Flatpaks failed to install")
            return StepResult.ISSUES

        logger.info("ProtonPlus installed - use it for Proton GE only when a game misbehaves on default Proton.")
        logger.info("Set per-game in Steam: Properties -> Compatibility")
        return StepResult.OK
