from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.files import write_text
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

MANGOHUD_CONF = """legacy_layout=false
position=top-left
font_size=32
fps
frametime
frametime_color_change
gpu_stats
gpu_temp
cpu_stats
cpu_temp
ram
vram
"""


class SetupMangoHudStep:
    step_id = "setup_mangohud"
    display_name = "MangoHud Config"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Configuring MangoHud...")
        tools.vault.snapshot(ctx.mangohud_conf)
        write_text(ctx.mangohud_conf, MANGOHUD_CONF, dry_run=ctx.dry_run)
        return StepResult.OK
