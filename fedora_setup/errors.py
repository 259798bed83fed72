from __future__ import annotations


class SetupError(Exception):
    """Base class for errors raised by the setup tool."""


class ConfigurationError(SetupError):
    """Invalid run configuration. Raised before any step executes."""


class StepFatalError(SetupError):
    def __init__(self, step_id: str, cause: BaseException | None = None) -> None:
        self.step_id = step_id
        self.cause = cause
        msg = f"Step {step_id} failed fatally"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class RestoreError(SetupError):
    """One or more files could not be copied back from a snapshot."""
