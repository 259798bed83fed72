from __future__ import annotations

from typing import List

from ..pipeline import Step
from .step_01_dnf import SetupDnfStep
from .step_02_dns import SetupDnsStep
from .step_03_power import SetupPowerStep
from .step_04_nosleep import SetupNoSleepStep
from .step_05_fonts import SetupFontsStep
from .step_06_shell import SetupShellStep
from .step_07_browser_multimedia import SetupBrowserMultimediaStep
from .step_08_drivers import SetupDriversStep
from .step_09_copr import SetupCoprStep
from .step_10_warp import SetupWarpStep
from .step_11_gnome import SetupGnomeStep
from .step_12_packages import SetupPackagesStep
from .step_13_dev import SetupDevStep
from .step_14_mangohud import SetupMangoHudStep
from .step_15_antigravity import SetupAntigravityStep
from .step_16_office import SetupOfficeStep
from .step_17_flatpaks import SetupFlatpaksStep
from .step_18_docker import SetupDockerStep
from .step_19_lmstudio import SetupLmStudioStep
from .step_20_gemini import SetupGeminiStep


def build_catalogue() -> List[Step]:
    """All steps in execution order. Ids are persisted in state files; never rename them."""

    return [
        SetupDnfStep(),
        SetupDnsStep(),
        SetupPowerStep(),
        SetupNoSleepStep(),
        SetupFontsStep(),
        SetupShellStep(),
        SetupBrowserMultimediaStep(),
        SetupDriversStep(),
        SetupCoprStep(),
        SetupWarpStep(),
        SetupGnomeStep(),
        SetupPackagesStep(),
        SetupDevStep(),
        SetupMangoHudStep(),
        SetupAntigravityStep(),
        SetupOfficeStep(),
        SetupFlatpaksStep(),
        SetupDockerStep(),
        SetupLmStudioStep(),
        SetupGeminiStep(),
    ]


__all__ = [
    "build_catalogue",
    "SetupDnfStep",
    "SetupDnsStep",
    "SetupPowerStep",
    "SetupNoSleepStep",
    "SetupFontsStep",
    "SetupShellStep",
    "SetupBrowserMultimediaStep",
    "SetupDriversStep",
    "SetupCoprStep",
    "SetupWarpStep",
    "SetupGnomeStep",
    "SetupPackagesStep",
    "SetupDevStep",
    "SetupMangoHudStep",
    "SetupAntigravityStep",
    "SetupOfficeStep",
    "SetupFlatpaksStep",
    "SetupDockerStep",
    "SetupLmStudioStep",
    "SetupGeminiStep",
]
