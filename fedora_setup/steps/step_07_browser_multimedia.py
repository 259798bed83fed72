from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.dnf import dnf_add_repo, dnf_group_upgrade, dnf_install, dnf_swap, rpm_installed
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

BRAVE_REPO = "https://brave-browser-rpm-release.s3.brave.com/brave-browser.repo"


class SetupBrowserMultimediaStep:
    step_id = "setup_browser_multimedia"
    display_name = "Brave + Multimedia"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing Brave & multimedia...")
        dry_run = ctx.dry_run

        if not rpm_installed("rpmfusion-free-release", dry_run=dry_run):
            logger.warning("RPM Fusion may not be installed correctly - multimedia packages may fail")

        dnf_install(["dnf-plugins-core"], dry_run=dry_run)
        dnf_add_repo(BRAVE_REPO, dry_run=dry_run)
        dnf_install(["brave-browser", "mozilla-openh264"], dry_run=dry_run)

        ok = dnf_swap("ffmpeg-free", "ffmpeg", allow_erasing=True, dry_run=dry_run).ok
        ok = dnf_group_upgrade(
            "multimedia",
            "--setopt=install_weak_deps=False",
            "--exclude=PackageKit-gstreamer-plugin",
            dry_run=dry_run,
        ).ok and ok
        ok = dnf_group_upgrade("sound-and-video", dry_run=dry_run).ok and ok

        if not ok:
            logger.warning("Some multimedia codec operations failed")
            return StepResult.ISSUES
        return StepResult.OK
