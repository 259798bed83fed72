from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from .command import run_cmd

logger = logging.getLogger(__name__)

_DISPLAY_CLASS_RE = re.compile(r"VGA|3D|Display", re.IGNORECASE)

_GPU_VENDOR_HINTS = {
    "nvidia": "nvidia",
    "amd": "amd",
    "intel": "intel",
}

LAPTOP_CHASSIS = {"laptop", "notebook", "convertible"}


def parse_gpu_vendors(lspci_output: str) -> List[str]:
    """Vendors of display controllers in `lspci` output, in first-seen order."""

    vendors: List[str] = []
    for line in lspci_output.splitlines():
        if not _DISPLAY_CLASS_RE.search(line):
            continue
        low = line.lower()
        for hint, vendor in _GPU_VENDOR_HINTS.items():
            if hint in low and vendor not in vendors:
                vendors.append(vendor)
    return vendors


def detect_hardware() -> Dict[str, Any]:
    """Read-only probe, so it also runs under dry-run."""

    r = run_cmd(["hostnamectl", "chassis"], check=False)
    chassis = r.stdout.strip() if r.ok and r.stdout.strip() else "unknown"

    r = run_cmd(["lspci"], check=False)
    gpus = parse_gpu_vendors(r.stdout) if r.ok else []

    logger.info("Detected chassis=%s gpus=%s", chassis, ",".join(gpus) or "none")
    return {"chassis": chassis, "gpus": gpus}


def is_laptop(hw: Dict[str, Any]) -> bool:
    return str(hw.get("chassis") or "").lower() in LAPTOP_CHASSIS
