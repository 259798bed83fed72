from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.command import run_cmd
from ..lib.dnf import dnf_install
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

FONT_PACKAGES = [
    "mscore-fonts",
    "mscore-fonts-all",
    "dejavu-sans-fonts",
    "dejavu-serif-fonts",
    "dejavu-sans-mono-fonts",
    "liberation-sans-fonts",
    "liberation-serif-fonts",
    "liberation-mono-fonts",
    "google-noto-sans-fonts",
    "google-noto-serif-fonts",
    "google-noto-mono-fonts",
    "google-carlito-fonts",
    "google-caladea-fonts",
    "curl",
    "cabextract",
    "xorg-x11-font-utils",
    "fontconfig",
]

MSTTCORE_RPM = "msttcore-fonts-installer-2.6-1.noarch.rpm"
MSTTCORE_URL = f"https://downloads.sourceforge.net/project/mscorefonts2/rpms/{MSTTCORE_RPM}"
FIRACODE_URL = "https://github.com/ryanoasis/nerd-fonts/releases/latest/download/FiraCode.zip"
FIRACODE_ZIP = "/tmp/FiraCode.zip"


class SetupFontsStep:
    step_id = "setup_fonts"
    display_name = "System Fonts"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing fonts...")
        dry_run = ctx.dry_run
        dnf_install(FONT_PACKAGES, skip_unavailable=True, dry_run=dry_run)

        rpm_path = f"/tmp/{MSTTCORE_RPM}"
        if run_cmd(["curl", "-sL", "-o", rpm_path, MSTTCORE_URL], check=False, dry_run=dry_run).ok:
            run_cmd(["rpm", "-ivh", "--nodigest", "--nofiledigest", rpm_path], sudo=True, check=False, dry_run=dry_run)
        run_cmd(["rm", "-f", rpm_path], check=False, dry_run=dry_run)

        logger.info("Downloading FiraCode Nerd Font...")
        fonts_dir = ctx.home / ".local/share/fonts"
        run_cmd(["mkdir", "-p", str(fonts_dir)], dry_run=dry_run)

        ok = True
        if run_cmd(["wget", "-qO", FIRACODE_ZIP, FIRACODE_URL], check=False, dry_run=dry_run).ok:
            ok = run_cmd(["unzip", "-oq", FIRACODE_ZIP, "-d", str(fonts_dir)], check=False, dry_run=dry_run).ok
            run_cmd(["rm", "-f", FIRACODE_ZIP], check=False, dry_run=dry_run)
        else:
            logger.warning("FiraCode Nerd Font download failed")
            ok = False

        run_cmd(["fc-cache", "-fv"], check=False, dry_run=dry_run)
        return StepResult.OK if ok else StepResult.ISSUES
