from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.dnf import dnf_install
from ..lib.flatpak import flatpak_install
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

RECOMMENDED_EXTENSIONS = [
    "Blur My Shell",
    "Clipboard Indicator",
    "Dash to Dock / Dash2Dock Animated",
    "Coverflow Alt+Tab",
    "GSConnect",
    "Net Speed",
    "Space Bar",
    "User Themes",
]


class SetupGnomeStep:
    step_id = "setup_gnome"
    display_name = "GNOME Tools"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing GNOME tools...")
        dnf_install(["gnome-tweaks"], dry_run=ctx.dry_run)
        flatpak_install(["com.mattjakeman.ExtensionManager"], dry_run=ctx.dry_run)

        logger.info("Recommended GNOME Extensions (install via Extension Manager):")
        for ext in RECOMMENDED_EXTENSIONS:
            logger.info("  - %s", ext)
        logger.info("  Note: Some extensions (Compiz effects) may not work on GNOME 45+")
        return StepResult.OK
