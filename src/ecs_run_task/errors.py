"""
Error types raised by each stage of a run.
"""

from typing import List, Optional


class EcsRunTaskError(Exception):
    """Base class for all stage errors."""


class LoadError(EcsRunTaskError):
    """The task definition file could not be read or parsed."""


class RegistrationError(EcsRunTaskError):
    """The register task definition call failed."""


class LaunchError(EcsRunTaskError):
    """The run task call failed."""


class WaitError(EcsRunTaskError):
    """The tasks-stopped waiter or the describe tasks call failed."""


class ExecutionError(EcsRunTaskError):
    """Tasks stopped, but at least one container did not exit cleanly."""

    def __init__(self, message: str, task_arns: Optional[List[str]] = None):
        super().__init__(message)
        self.task_arns = list(task_arns or [])
