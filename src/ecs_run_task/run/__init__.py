"""Run configuration, reporting and orchestration."""

from .config import RunConfig
from .report import Reporter, ConsoleReporter, GithubActionsReporter, default_reporter
from .orchestrator import RunOrchestrator, RunResult, RunState

__all__ = [
    'RunConfig',
    'Reporter',
    'ConsoleReporter',
    'GithubActionsReporter',
    'default_reporter',
    'RunOrchestrator',
    'RunResult',
    'RunState',
]
