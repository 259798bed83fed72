from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.command import run_cmd
from ..lib.dnf import dnf_install
from ..lib.flatpak import flatpak_has
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

ESSENTIAL_PACKAGES = [
    "gcc", "clang", "fastfetch", "make", "cmake", "perl", "wmctrl", "cargo", "maven", "bat",
    "java-latest-openjdk", "java-latest-openjdk-devel", "nodejs", "python3", "python3-pip",
    "wget", "htop", "unzip", "unrar", "p7zip", "p7zip-plugins", "ntfs-3g", "gparted",
    "timeshift", "vlc", "docker", "steam", "mangohud", "discord", "telegram-desktop", "vim",
    "nvim", "gh", "android-tools", "libva-utils", "gstreamer1-plugin-openh264",
]

STEAM_H264_URL = "steam://unlockh264/"


class SetupPackagesStep:
    step_id = "setup_packages"
    display_name = "Essential Packages"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing essential packages...")
        dry_run = ctx.dry_run
        dnf_install(ESSENTIAL_PACKAGES, skip_unavailable=True, dry_run=dry_run)
        run_cmd(
            ["dnf", "config-manager", "setopt", "fedora-cisco-openh264.enabled=1"],
            sudo=True,
            check=False,
            dry_run=dry_run,
        )

        logger.info("Unlocking Steam H264 codec...")
        if not dry_run and flatpak_has("com.valvesoftware.Steam"):
            logger.info("Flatpak Steam detected")
        run_cmd(["xdg-open", STEAM_H264_URL], check=False, dry_run=dry_run)

        logger.info("Steam Settings (configure manually):")
        logger.info("  - Library: enable 'Show Steam Deck compatibility info'")
        logger.info("  - Downloads: disable 'Shader Pre-Caching'")
        logger.info("  - Interface: Client Beta Participation -> Steam Beta Update")

        if tools.gate.ask("Install Yaru theme (Ubuntu-style)?", default_yes=False):
            dnf_install(["yaru-theme"], dry_run=dry_run)
            logger.info("Yaru installed. Apply in GNOME Tweaks.")
        return StepResult.OK
