from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Optional

from ..context import ExecutionContext
from ..lib.command import run_cmd
from ..lib.dnf import dnf_install
from ..lib.files import write_text
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

APPIMAGE_URL = "https://releases.lmstudio.ai/linux/x64/latest/LM-Studio-latest-x64.AppImage"
APPIMAGE_GLOB = "LM-Studio*.AppImage"

DESKTOP_ENTRY = """[Desktop Entry]
Name=LM Studio
Comment=Local LLM runner
Type=Application
Exec={app} --no-sandbox
Icon=lmstudio
Terminal=false
Categories=Development;AI;
"""


def find_appimage(directory: Path) -> Optional[Path]:
    if not directory.is_dir():
        return None
    found = sorted(directory.glob(APPIMAGE_GLOB))
    return found[0] if found else None


class SetupLmStudioStep:
    step_id = "setup_lmstudio"
    display_name = "LM Studio"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Setting up LM Studio...")
        dry_run = ctx.dry_run
        dnf_install(["fuse-libs"], dry_run=dry_run)

        downloads = ctx.home / "Downloads"
        apps = ctx.home / "Applications"
        image = find_appimage(downloads) or find_appimage(apps)

        if image is None and tools.gate.ask("Download LM Studio?", default_yes=False):
            run_cmd(["wget", "-P", str(downloads), APPIMAGE_URL], check=False, dry_run=dry_run)
            image = find_appimage(downloads)

        if image is None:
            if dry_run:
                logger.info("[DRY-RUN] Would install LM Studio AppImage into %s", apps)
            return StepResult.OK

        if dry_run:
            logger.info("[DRY-RUN] Would install %s into %s", image, apps)
            return StepResult.OK

        icons = ctx.home / ".local/share/icons/hicolor/512x512/apps"
        desktop_dir = ctx.home / ".local/share/applications"
        for d in (apps, icons, desktop_dir):
            d.mkdir(parents=True, exist_ok=True)

        app = apps / image.name
        if image != app:
            image.replace(app)
        app.chmod(0o755)

        with tempfile.TemporaryDirectory() as tmp:
            run_cmd([str(app), "--appimage-extract"], cwd=tmp, check=False)
            pngs = sorted((Path(tmp) / "squashfs-root").rglob("*.png"))
            if pngs:
                (icons / "lmstudio.png").write_bytes(pngs[0].read_bytes())

        write_text(desktop_dir / "lmstudio.desktop", DESKTOP_ENTRY.format(app=app))
        run_cmd(["update-desktop-database", str(desktop_dir)], check=False)
        run_cmd(["gtk-update-icon-cache", str(ctx.home / ".local/share/icons/hicolor")], check=False)
        logger.info("LM Studio installed")
        logger.info("Suggested model settings: max GPU offload, Flash Attention on, K/V cache F16.")
        return StepResult.OK
