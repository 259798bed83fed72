from __future__ import annotations

import logging
import threading
from typing import Optional

from .errors import ConfigurationError
from .lib.command import run_cmd

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 60.0


def validate_sudo() -> None:
    """Prompt for sudo once up front; missing privilege is a configuration error."""

    try:
        r = run_cmd(["sudo", "-v"], check=False)
    except Exception as e:
        raise ConfigurationError("Requires sudo") from e
    if not r.ok:
        raise ConfigurationError("Requires sudo")


class SudoKeepAlive:
    """Refreshes the sudo timestamp in a daemon thread until stopped."""

    def __init__(self, interval: float = REFRESH_INTERVAL) -> None:
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                run_cmd(["sudo", "-n", "true"], check=False, quiet=True)
            except Exception:
                logger.debug("sudo refresh failed", exc_info=True)

    def start(self) -> "SudoKeepAlive":
        if self._thread is None:
            self._thread = threading.Thread(target=self._loop, name="sudo-keepalive", daemon=True)
            self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None

    def __enter__(self) -> "SudoKeepAlive":
        return self.start()

    def __exit__(self, *exc) -> None:
        self.stop()
