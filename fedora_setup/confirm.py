from __future__ import annotations

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]

_YES = {"y", "yes"}


class ConfirmationGate:
    """Yes/no decision point for whole steps and for sub-decisions inside them.

    Under dry-run every question is answered yes without blocking; the
    question is recorded and logged so the transcript shows where the real
    run would have stopped to ask.
    """

    def __init__(self, *, dry_run: bool, input_fn: Optional[InputFn] = None) -> None:
        self.dry_run = dry_run
        self._input = input_fn if input_fn is not None else input
        self.recorded: List[str] = []

    def ask(self, prompt: str, default_yes: bool = False) -> bool:
        if self.dry_run:
            self.recorded.append(prompt)
            logger.info("[DRY-RUN] Prompt: %s (auto-yes in dry-run)", prompt)
            return True

        suffix = "(Y/n)" if default_yes else "(y/N)"
        try:
            answer = self._input(f"{prompt} {suffix}: ")
        except EOFError:
            answer = ""

        answer = (answer or "").strip().lower()
        approved = answer in _YES if answer else default_yes
        logger.debug("Prompt: %s -> %s", prompt, "yes" if approved else "no")
        return approved

    def choose(self, prompt: str, options: List[str], default: int) -> int:
        """Pick one of numbered options (1-based). Dry-run returns the default."""

        if self.dry_run:
            self.recorded.append(prompt)
            logger.info("[DRY-RUN] Prompt: %s (default %d in dry-run)", prompt, default)
            return default

        for i, opt in enumerate(options, start=1):
            logger.info("  %d. %s", i, opt)
        try:
            answer = self._input(f"{prompt} [1-{len(options)}] (default: {default}): ")
        except EOFError:
            answer = ""

        answer = (answer or "").strip()
        choice = int(answer) if answer.isdigit() and 1 <= int(answer) <= len(options) else default
        logger.debug("Prompt: %s -> %d", prompt, choice)
        return choice
