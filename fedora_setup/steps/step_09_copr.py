from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.dnf import copr_install
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

COPR_PACKAGES = [
    ("elxreno/preload", ["preload"]),
    ("terjeros/eza", ["eza"]),
    ("zeno/scrcpy", ["scrcpy"]),
    (
        "lihaohong/yazi",
        ["yazi", "file", "ffmpeg", "7zip", "jq", "poppler", "fd", "rg", "fzf", "zoxide", "resvg",
         "xclip", "wl-clipboard", "xsel", "ImageMagick"],
    ),
    ("derisis13/ani-cli", ["mpv", "ani-cli"]),
]


class SetupCoprStep:
    step_id = "setup_copr"
    display_name = "COPR Packages"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing COPR packages...")
        failed = [repo for repo, pkgs in COPR_PACKAGES if not copr_install(repo, pkgs, dry_run=ctx.dry_run)]
        if failed:
            logger.warning("COPR repos with problems: %s", ", ".join(failed))
            return StepResult.ISSUES
        return StepResult.OK
