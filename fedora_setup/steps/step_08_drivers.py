from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.command import run_cmd
from ..lib.dnf import dnf_install, dnf_swap
from ..lib.hwdetect import detect_hardware, is_laptop
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

NVIDIA_PACKAGES = [
    "kmodtool",
    "akmods",
    "mokutil",
    "openssl",
    "nvtop",
    "akmod-nvidia",
    "xorg-x11-drv-nvidia-cuda",
    "libva-nvidia-driver",
]

AKMODS_PUBLIC_KEY = "/etc/pki/akmods/certs/public_key.der"


class SetupDriversStep:
    step_id = "setup_drivers"
    display_name = "GPU Drivers"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Detecting Hardware...")
        dry_run = ctx.dry_run
        hw = detect_hardware()
        gpus = hw["gpus"]

        if "intel" in gpus:
            logger.info("Intel GPU Detected: Installing intel-media-driver...")
            dnf_install(["intel-media-driver"], dry_run=dry_run)

        if "amd" in gpus:
            logger.info("AMD GPU Detected: Swapping for freeworld drivers...")
            dnf_swap("mesa-va-drivers", "mesa-va-drivers-freeworld", dry_run=dry_run)
            dnf_swap("mesa-vdpau-drivers", "mesa-vdpau-drivers-freeworld", dry_run=dry_run)

        if "nvidia" not in gpus:
            logger.info("No NVIDIA GPU found. Skipping proprietary drivers.")
            return StepResult.OK

        return self._nvidia(hw, tools, dry_run=dry_run)

    def _nvidia(self, hw, tools: StepTools, *, dry_run: bool) -> StepResult:
        logger.info("NVIDIA GPU Detected.")
        dnf_install(NVIDIA_PACKAGES, dry_run=dry_run)

        logger.info("Building NVIDIA kernel modules (this may take a few minutes)...")
        run_cmd(["akmods", "--force"], sudo=True, check=False, interactive=True, dry_run=dry_run)
        if run_cmd(["modinfo", "nvidia"], check=False, dry_run=dry_run).ok:
            logger.info("NVIDIA module built successfully")
        else:
            logger.warning("NVIDIA module not yet available - may require reboot after MOK enrollment")

        if is_laptop(hw):
            if {"intel", "amd"} & set(hw["gpus"]):
                logger.info("Hybrid Graphics (Optimus) detected.")
            else:
                logger.info("Dedicated Nvidia only (MUX Switch or Desktop replacement).")

        logger.info("Generating Secure Boot keys...")
        run_cmd(["kmodgenca", "-a"], sudo=True, check=False, dry_run=dry_run)

        logger.warning("SECURE BOOT ENROLLMENT REQUIRED")
        logger.info("NVIDIA drivers require Secure Boot to be enabled in BIOS/UEFI before enrollment.")

        sb = run_cmd(["mokutil", "--sb-state"], sudo=True, check=False, dry_run=dry_run)
        sb_enabled = dry_run or "enabled" in sb.stdout.lower()
        if not sb_enabled:
            logger.warning("Secure Boot appears to be DISABLED or in an unknown state.")
            logger.info("Manual enrollment: sudo mokutil --import %s", AKMODS_PUBLIC_KEY)
            return StepResult.OK

        logger.info("Secure Boot is currently ENABLED.")
        if tools.gate.ask("Do you want to enroll the NVIDIA driver key now?", default_yes=False):
            logger.warning("IMPORTANT: Remember the password you set! You'll need it during next boot!")
            if not run_cmd(
                ["mokutil", "--import", AKMODS_PUBLIC_KEY], sudo=True, check=False, interactive=True, dry_run=dry_run
            ).ok:
                logger.warning("Key enrollment failed")
                return StepResult.ISSUES
            logger.info("Key enrolled. After reboot choose 'Enroll MOK' in the MOK Manager and enter the password.")
            logger.warning("The system will NOT load NVIDIA drivers until MOK enrollment is complete!")
        return StepResult.OK
