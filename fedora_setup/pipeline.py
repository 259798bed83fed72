from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from .backup import BackupVault
from .confirm import ConfirmationGate
from .context import ExecutionContext
from .errors import StepFatalError
from .profiles import ProfileFilter
from .state_store import StateStore

logger = logging.getLogger(__name__)


class StepResult(enum.Enum):
    OK = "ok"
    ISSUES = "handled-failure"
    FATAL = "fatal"

    @classmethod
    def coerce(cls, value: Any) -> "StepResult":
        if isinstance(value, cls):
            return value
        if value is None or value is True:
            return cls.OK
        if value is False:
            return cls.ISSUES
        raise TypeError(f"Step returned {value!r}, expected StepResult")


class StepOutcome(str, enum.Enum):
    SKIPPED_BY_PROFILE = "not in profile"
    SKIPPED_ALREADY_DONE = "already completed"
    SKIPPED_BY_USER = "skipped by user"
    RAN_OK = "completed"
    RAN_WITH_ISSUES = "had issues"
    FATAL = "fatal"


class RunStatus(str, enum.Enum):
    FINISHED = "finished"
    ABORTED = "aborted"


@dataclass(frozen=True)
class StepTools:
    """What a step action may use besides the context."""

    gate: ConfirmationGate
    vault: BackupVault


class Step(Protocol):
    """A single, idempotent-intended step."""

    step_id: str
    display_name: str
    services: Tuple[str, ...]

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        ...


class FatalHandler(Protocol):
    def handle(self, stats: "RunStats", error: BaseException) -> None:
        ...


@dataclass
class RunStats:
    total: int
    completed: int = 0
    status: Optional[RunStatus] = None
    outcomes: Dict[str, StepOutcome] = field(default_factory=dict)
    attempted: List[str] = field(default_factory=list)
    services: List[str] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    started_at: float = field(default_factory=time.monotonic)
    finished_at: Optional[float] = None

    @property
    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    def ids_with(self, outcome: StepOutcome) -> List[str]:
        return [k for k, v in self.outcomes.items() if v is outcome]


class StepRunner:
    """Runs the catalogue in order with profile, resume and dry-run semantics."""

    def __init__(
        self,
        *,
        ctx: ExecutionContext,
        steps: Sequence[Step],
        profiles: ProfileFilter,
        state: StateStore,
        gate: ConfirmationGate,
        vault: BackupVault,
        rollback: Optional[FatalHandler] = None,
    ) -> None:
        self.ctx = ctx
        self.steps = list(steps)
        self.profiles = profiles
        self.state = state
        self.gate = gate
        self.tools = StepTools(gate=gate, vault=vault)
        self.rollback = rollback

    def run(self) -> RunStats:
        ctx = self.ctx
        stats = RunStats(total=self.profiles.total_for(ctx.profile))

        for step in self.steps:
            outcome = self._run_step(step, stats)
            stats.outcomes[step.step_id] = outcome

        stats.status = RunStatus.FINISHED
        stats.finished_at = time.monotonic()
        return stats

    def _progress(self, stats: RunStats, message: str) -> None:
        stats.completed += 1
        logger.info("[%d/%d] %s", stats.completed, stats.total, message)

    def _run_step(self, step: Step, stats: RunStats) -> StepOutcome:
        ctx = self.ctx
        step_id = step.step_id
        name = step.display_name

        if not self.profiles.includes(ctx.profile, step_id):
            logger.debug("Skipping %s (not in profile %s)", name, ctx.profile.value)
            return StepOutcome.SKIPPED_BY_PROFILE

        if (not ctx.force) and self.state.is_completed(step_id):
            logger.info("Already completed: %s (use --force to re-run)", name)
            self._progress(stats, f"{name} (already completed)")
            return StepOutcome.SKIPPED_ALREADY_DONE

        logger.info("Step: %s", name)
        if not self.gate.ask("Run this step?", default_yes=True):
            logger.warning("Skipped: %s", name)
            self._progress(stats, f"{name} (skipped by user)")
            return StepOutcome.SKIPPED_BY_USER

        stats.attempted.append(step_id)
        for svc in getattr(step, "services", ()) or ():
            if svc not in stats.services:
                stats.services.append(svc)

        try:
            result = StepResult.coerce(step.run(ctx, self.tools))
        except Exception as e:
            raise self._abort(step, stats, e) from e

        if result is StepResult.FATAL:
            raise self._abort(step, stats, None)

        if result is StepResult.ISSUES:
            logger.warning("%s had issues", name)
            stats.issues.append(step_id)
            self._progress(stats, f"{name} (had issues)")
            return StepOutcome.RAN_WITH_ISSUES

        logger.info("%s completed", name)
        if not ctx.dry_run:
            self.state.mark_completed(step_id)
        self._progress(stats, name)
        return StepOutcome.RAN_OK

    def _abort(self, step: Step, stats: RunStats, cause: Optional[BaseException]) -> StepFatalError:
        error = StepFatalError(step.step_id, cause)
        logger.error("Fatal error in %s: %s", step.display_name, cause or "step reported fatal")
        stats.outcomes[step.step_id] = StepOutcome.FATAL
        stats.failed_step = step.step_id
        stats.status = RunStatus.ABORTED
        stats.finished_at = time.monotonic()

        if self.rollback is not None:
            self.rollback.handle(stats, error)
        return error
