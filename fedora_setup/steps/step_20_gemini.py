from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.command import have_command, run_cmd
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

GEMINI_PACKAGE = "@google/gemini-cli"


class SetupGeminiStep:
    step_id = "setup_gemini"
    display_name = "Gemini CLI"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing Gemini CLI...")
        if not (ctx.dry_run or have_command("npm")):
            logger.warning("npm not found - install nodejs first")
            return StepResult.ISSUES
        run_cmd(["npm", "install", "-g", GEMINI_PACKAGE], sudo=True, dry_run=ctx.dry_run)
        return StepResult.OK
