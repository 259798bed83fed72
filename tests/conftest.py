"""
Pytest configuration and fixtures for fedora-setup tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple, Union

import pytest

from fedora_setup.backup import BackupVault
from fedora_setup.confirm import ConfirmationGate
from fedora_setup.context import ExecutionContext, build_context
from fedora_setup.pipeline import StepResult, StepRunner, StepTools
from fedora_setup.profiles import ProfileFilter
from fedora_setup.state_store import StateStore
from fedora_setup.steps import build_catalogue

RUN_ID = "20260101_120000"


# ============================================================================
# Fake steps
# ============================================================================


@dataclass
class FakeStep:
    """Step double that records its invocations."""

    step_id: str
    display_name: str = ""
    services: Tuple[str, ...] = ()
    result: Union[StepResult, BaseException] = StepResult.OK
    calls: List[bool] = field(default_factory=list)

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        self.calls.append(ctx.dry_run)
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


@pytest.fixture
def fake_catalogue() -> List[FakeStep]:
    """Fake steps carrying the real catalogue ids, in catalogue order."""
    return [FakeStep(step_id=s.step_id, display_name=s.display_name) for s in build_catalogue()]


def by_id(steps: Iterable[FakeStep], step_id: str) -> FakeStep:
    for s in steps:
        if s.step_id == step_id:
            return s
    raise KeyError(step_id)


# ============================================================================
# Context / components
# ============================================================================


def scripted_input(*answers: str) -> Callable[[str], str]:
    """Input function returning the given answers, then empty lines."""

    queue = list(answers)
    prompts: List[str] = []

    def _input(prompt: str) -> str:
        prompts.append(prompt)
        return queue.pop(0) if queue else ""

    _input.prompts = prompts  # type: ignore[attr-defined]
    return _input


@pytest.fixture
def make_ctx(tmp_path):
    def _make(profile: str = "full", *, dry_run: bool = False, force: bool = False) -> ExecutionContext:
        home = tmp_path / "home"
        home.mkdir(exist_ok=True)
        return build_context(
            profile=profile,
            dry_run=dry_run,
            force=force,
            state_file=str(tmp_path / "state" / "state.txt"),
            backup_root=str(tmp_path / "backups"),
            log_dir=str(tmp_path / "logs"),
            run_id=RUN_ID,
            home=str(home),
        )

    return _make


@dataclass
class Harness:
    runner: StepRunner
    state: StateStore
    gate: ConfirmationGate
    vault: BackupVault
    rollback: Optional[object]


class RecordingRollback:
    def __init__(self) -> None:
        self.calls = []

    def handle(self, stats, error) -> None:
        self.calls.append((stats, error))


@pytest.fixture
def make_harness():
    def _make(ctx: ExecutionContext, steps, *, input_fn=None, rollback=None) -> Harness:
        state = StateStore(ctx.state_file)
        gate = ConfirmationGate(dry_run=ctx.dry_run, input_fn=input_fn or scripted_input())
        vault = BackupVault(
            backup_root=ctx.backup_root,
            run_id=ctx.run_id,
            known_paths=[ctx.zshrc, ctx.bashrc, ctx.mangohud_conf],
            state=state,
            gate=gate,
            dry_run=ctx.dry_run,
        )
        profiles = ProfileFilter([s.step_id for s in steps])
        profiles.validate()
        runner = StepRunner(
            ctx=ctx,
            steps=steps,
            profiles=profiles,
            state=state,
            gate=gate,
            vault=vault,
            rollback=rollback,
        )
        return Harness(runner=runner, state=state, gate=gate, vault=vault, rollback=rollback)

    return _make


# ============================================================================
# Logging isolation
# ============================================================================


@pytest.fixture
def clean_root_logger():
    """Undo configure_logging() side effects on the root logger."""

    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    root.setLevel(level)
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    for attr in ("_fedora_setup_configured", "_fedora_setup_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
