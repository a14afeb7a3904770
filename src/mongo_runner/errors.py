"""Exception hierarchy for mongo-runner."""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from mongo_runner.models.topology import LaunchProgress


class RunnerError(Exception):
    """Base class for all mongo-runner errors."""


class ConfigError(RunnerError):
    """Persisted configuration could not be read or written."""


class TemplateError(RunnerError):
    """Base class for Dockerfile/script template errors."""


class TemplateNotFoundError(TemplateError):
    """No template file exists for the requested name."""


class TemplateRenderError(TemplateError):
    """Template placeholders could not be resolved."""


class LaunchError(RunnerError):
    """A topology launch failed part way through."""

    def __init__(self, message: str, progress: Optional["LaunchProgress"] = None):
        super().__init__(message)
        self.progress = progress


class InitiationError(LaunchError):
    """The replica set initiation script exited with an error."""

    def __init__(
        self,
        message: str,
        exit_code: int,
        output: str = "",
        progress: Optional["LaunchProgress"] = None,
    ):
        super().__init__(message, progress)
        self.exit_code = exit_code
        self.output = output
