"""
Run orchestrator - loads, registers, launches and optionally waits.

Stages run strictly in order:
    IDLE -> LOADED -> REGISTERED -> LAUNCHED -> (WAITED) -> DONE

Each stage returns either the input of the next stage or a StageFailure.
The first failure is reported and ends the run in FAILED; no later stage
runs and nothing already done remotely is rolled back.

Usage:
    orch = RunOrchestrator(config, backend, reporter)
    result = orch.run()
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..definition.loader import Reader, load
from ..ecs.backend import EcsBackend
from ..ecs.launch import launch
from ..ecs.register import register
from ..ecs.wait import LaunchedTask, await_completion
from ..errors import ExecutionError, LaunchError, LoadError, RegistrationError, WaitError
from .config import RunConfig
from .report import Reporter


SUCCESS_MESSAGE = "All tasks have exited successfully."


class RunState(Enum):
    IDLE = 'idle'
    LOADED = 'loaded'
    REGISTERED = 'registered'
    LAUNCHED = 'launched'
    WAITED = 'waited'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class StageFailure:
    """
    A stage error and how to report it.

    With a prefix the failure is reported twice: first decorated with the
    stage prefix, then the bare error message.
    """
    error: Exception
    prefix: Optional[str] = None

    @property
    def messages(self) -> List[str]:
        message = str(self.error)
        if self.prefix:
            return [f"{self.prefix}: {message}", message]
        return [message]


@dataclass
class RunResult:
    """Outcome of one run."""
    state: RunState = RunState.IDLE
    task_definition_arn: Optional[str] = None
    task_arns: List[str] = field(default_factory=list)
    succeeded: Optional[bool] = None  # Only set when waiting was requested
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.state == RunState.DONE


class RunOrchestrator:
    """
    Drives a single run against an ECS backend.

    Given a RunConfig, this class:
    1. Loads and cleans the task definition
    2. Registers it
    3. Launches tasks, with overrides if configured
    4. Waits for them to stop, if configured
    5. Reports outputs and failures through the reporter

    A RunOrchestrator runs once; create a new one per run.
    """

    def __init__(
        self,
        config: RunConfig,
        backend: EcsBackend,
        reporter: Reporter,
        reader: Optional[Reader] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config: Run configuration
            backend: ECS backend used for every remote call
            reporter: Sink for outputs, failures and log lines
            reader: Optional file reader for the task definition
        """
        self.config = config
        self.backend = backend
        self.reporter = reporter
        self.reader = reader
        self.result = RunResult()

    # =========================================================================
    # Stages
    # =========================================================================

    def load_definition(self) -> Union[Dict[str, Any], StageFailure]:
        path = self.config.task_definition_path
        self.reporter.debug(f"Loading task definition from {path}")
        try:
            return load(path, reader=self.reader)
        except LoadError as e:
            return StageFailure(e)

    def register_definition(self, definition: Dict[str, Any]) -> Union[str, StageFailure]:
        self.reporter.debug("Registering the task definition")
        try:
            return register(self.backend, definition)
        except RegistrationError as e:
            return StageFailure(e, "Failed to register task definition in ECS")

    def launch_tasks(self, task_definition_arn: str) -> Union[List[str], StageFailure]:
        config = self.config
        overrides = config.overrides
        count = config.count

        self.reporter.debug(
            f"Running {count} task(s) of {task_definition_arn} on cluster {config.cluster}"
        )
        try:
            return launch(
                self.backend,
                cluster=config.cluster,
                task_definition_arn=task_definition_arn,
                count=count,
                started_by=config.started_by,
                overrides=overrides,
            )
        except LaunchError as e:
            return StageFailure(e, "Failed to run task in ECS")

    def wait_for_tasks(self, task_arns: List[str]) -> Union[List[LaunchedTask], StageFailure]:
        minutes = self.config.wait_for_minutes
        self.reporter.debug(f"Waiting up to {minutes} minutes for tasks to stop")
        try:
            return await_completion(
                self.backend,
                cluster=self.config.cluster,
                task_arns=task_arns,
                max_wait_minutes=minutes,
            )
        except WaitError as e:
            return StageFailure(e, "Failed to wait for tasks to stop in ECS")
        except ExecutionError as e:
            return StageFailure(e)

    # =========================================================================
    # Run
    # =========================================================================

    def _fail(self, failure: StageFailure) -> RunResult:
        for message in failure.messages:
            self.reporter.set_failed(message)
        self.result.state = RunState.FAILED
        self.result.error = failure.error
        if isinstance(failure.error, ExecutionError):
            self.result.succeeded = False
        return self.result

    def _run(self) -> RunResult:
        result = self.result

        definition = self.load_definition()
        if isinstance(definition, StageFailure):
            return self._fail(definition)
        result.state = RunState.LOADED

        task_definition_arn = self.register_definition(definition)
        if isinstance(task_definition_arn, StageFailure):
            return self._fail(task_definition_arn)
        result.state = RunState.REGISTERED
        result.task_definition_arn = task_definition_arn
        self.reporter.set_output('task-definition-arn', task_definition_arn)

        task_arns = self.launch_tasks(task_definition_arn)
        if isinstance(task_arns, StageFailure):
            return self._fail(task_arns)
        result.state = RunState.LAUNCHED
        result.task_arns = task_arns
        self.reporter.set_output('task-arn', task_arns)

        if self.config.wait_for_finish:
            waited = self.wait_for_tasks(task_arns)
            if isinstance(waited, StageFailure):
                return self._fail(waited)
            result.state = RunState.WAITED
            result.succeeded = True
            self.reporter.info(SUCCESS_MESSAGE)

        result.state = RunState.DONE
        return result

    def run(self) -> RunResult:
        """
        Run all stages once.

        Errors never escape a stage: anything raised inside one (invalid
        overrides JSON, a bad count, an unexpected error) is reported as
        a failure.

        Returns:
            RunResult with the final state and identifiers
        """
        if self.result.state != RunState.IDLE:
            raise RuntimeError("RunOrchestrator can only run once")

        try:
            return self._run()
        except Exception as e:
            return self._fail(StageFailure(e))
