from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.command import run_cmd
from ..lib.dnf import dnf_install
from ..lib.files import has_managed_block, write_managed_block
from ..lib.flatpak import add_flathub
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

DNF_OPTIONS = ["fastestmirror=True", "max_parallel_downloads=10", "keepcache=True"]

RPMFUSION_URL = "https://mirrors.rpmfusion.org/{kind}/fedora/rpmfusion-{kind}-release-{release}.noarch.rpm"

# Used when the release cannot be queried (dry-run on a non-Fedora host).
FEDORA_RELEASE_FALLBACK = "43"


def fedora_release(*, dry_run: bool = False) -> str:
    r = run_cmd(["rpm", "-E", "%fedora"], check=False, quiet=True)
    release = r.stdout.strip() if r.ok else ""
    if release.isdigit():
        return release
    if dry_run:
        return FEDORA_RELEASE_FALLBACK
    raise RuntimeError("Cannot determine Fedora release (rpm -E %fedora)")


class SetupDnfStep:
    step_id = "setup_dnf"
    display_name = "DNF Configuration"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Configuring DNF...")
        tools.vault.snapshot(ctx.dnf_conf)

        opts = list(DNF_OPTIONS)
        if tools.gate.ask("Enable defaultyes (auto-confirm)?", default_yes=False):
            opts.append("defaultyes=True")
        write_managed_block(ctx.dnf_conf, opts, sudo=True, dry_run=ctx.dry_run)

        logger.info("Enabling RPM Fusion & Flathub...")
        release = fedora_release(dry_run=ctx.dry_run)
        dnf_install(
            [RPMFUSION_URL.format(kind=kind, release=release) for kind in ("free", "nonfree")],
            dry_run=ctx.dry_run,
        )
        if not add_flathub(dry_run=ctx.dry_run).ok:
            logger.warning("Flathub already configured or failed")

        run_cmd(["dnf", "update", "-y", "--refresh"], sudo=True, interactive=True, dry_run=ctx.dry_run)

        if not ctx.dry_run and not has_managed_block(ctx.dnf_conf):
            logger.warning("Validation failed: DNF config block missing in %s", ctx.dnf_conf)
            return StepResult.ISSUES
        return StepResult.OK
