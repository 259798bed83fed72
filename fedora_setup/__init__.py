"""Fedora post-install setup (Python-first, state-driven).

Core design goals:
- Resumable: completed steps are recorded and skipped on the next run
- Previewable: dry-run simulates every step without touching the system
- Recoverable: files are backed up before modification; fatal errors leave
  state intact and report how to resume
- Profile-driven selection of steps from a fixed catalogue
- Centralized logging
"""

__version__ = "3.0.0"

__all__ = ["__version__"]
