from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"
CONSOLE_FORMAT = "%(levelname)-7s %(message)s"


def _open_log_file(log_path: str) -> tuple[logging.FileHandler, str]:
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path, encoding="utf-8"), log_path
    except OSError:
        fallback = str(Path.cwd() / os.path.basename(log_path))
        return logging.FileHandler(fallback, encoding="utf-8"), fallback


def configure_logging(
    log_path: str,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging for one setup run.

    The operator sees `level` and above on the console; the per-run log file
    additionally keeps DEBUG lines (quiet commands and their stdout/stderr),
    so it is the complete record of what ran.

    Notes:
    - If the requested log location is not writable we fall back to a file
      in the working directory and report the path actually used.

    Returns the actual file path being used.
    """

    root = logging.getLogger()

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(root, "_fedora_setup_configured", False):
        return getattr(root, "_fedora_setup_log_path", log_path)

    root.setLevel(logging.DEBUG)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(file_handler)

    console: Optional[logging.Handler] = None
    if also_console:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
        root.addHandler(console)

    setattr(root, "_fedora_setup_configured", True)
    setattr(root, "_fedora_setup_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
