"""
Wait for launched tasks to stop and check how their containers exited.

The blocking wait is the ECS `tasks_stopped` waiter; its polling cadence
and timeout are configured here but owned by the waiter itself.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import ExecutionError, WaitError
from .backend import EcsBackend


WAIT_DELAY_SECONDS = 15
DEFAULT_WAIT_MINUTES = 30
MAX_WAIT_MINUTES = 360


@dataclass
class ContainerStatus:
    """Final state of one container in a task."""
    name: Optional[str]
    last_status: Optional[str] = None
    exit_code: Optional[int] = None
    reason: Optional[str] = None

    @property
    def failed(self) -> bool:
        # A missing exit code on its own is not a failure
        if self.exit_code is not None and self.exit_code != 0:
            return True
        return bool(self.reason)

    def describe(self) -> str:
        exit_code = self.exit_code if self.exit_code is not None else 'none'
        text = f"{self.name or 'container'}: exit code {exit_code}"
        if self.reason:
            text += f", reason: {self.reason}"
        return text

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> 'ContainerStatus':
        return cls(
            name=data.get('name'),
            last_status=data.get('lastStatus'),
            exit_code=data.get('exitCode'),
            reason=data.get('reason'),
        )


@dataclass
class LaunchedTask:
    """A task as seen by DescribeTasks."""
    task_arn: str
    last_status: Optional[str] = None
    containers: List[ContainerStatus] = field(default_factory=list)
    stopped_reason: Optional[str] = None

    @property
    def failed(self) -> bool:
        return any(c.failed for c in self.containers)

    def describe_failure(self) -> str:
        """ARN followed by each failed container and the stopped reason."""
        details = [c.describe() for c in self.containers if c.failed]
        if self.stopped_reason:
            details.append(f"stopped: {self.stopped_reason}")
        return f"{self.task_arn} ({'; '.join(details)})"

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> 'LaunchedTask':
        return cls(
            task_arn=data['taskArn'],
            last_status=data.get('lastStatus'),
            containers=[
                ContainerStatus.from_response(c) for c in data.get('containers', [])
            ],
            stopped_reason=data.get('stoppedReason'),
        )


def waiter_attempts(max_wait_minutes: int, delay: int = WAIT_DELAY_SECONDS) -> int:
    """
    Convert a wait budget in minutes into waiter attempts.

    The budget is capped at MAX_WAIT_MINUTES; at least one attempt is made.
    """
    minutes = min(max_wait_minutes, MAX_WAIT_MINUTES)
    return max(1, (minutes * 60) // delay)


def find_failed_tasks(response: Dict[str, Any]) -> List[str]:
    """
    Classify a DescribeTasks response.

    A task failed if any container has a non-zero exit code or a reason.
    ARNs listed under `failures` (e.g. MISSING) count as failed too.

    Returns:
        Failing task ARNs, described tasks first, in response order
    """
    failed = []
    for data in response.get('tasks') or []:
        task = LaunchedTask.from_response(data)
        if task.failed:
            failed.append(task.task_arn)

    for failure in response.get('failures') or []:
        arn = failure.get('arn')
        if arn and arn not in failed:
            failed.append(arn)

    return failed


def describe_failed_tasks(response: Dict[str, Any]) -> List[str]:
    """
    One line per failing task, in the same order as `find_failed_tasks`.

    Described tasks list their failed containers (exit code and reason)
    and the stopped reason; `failures` entries give their own reason.
    """
    lines = []
    seen = set()
    for data in response.get('tasks') or []:
        task = LaunchedTask.from_response(data)
        if task.failed:
            lines.append(task.describe_failure())
            seen.add(task.task_arn)

    for failure in response.get('failures') or []:
        arn = failure.get('arn')
        if arn and arn not in seen:
            lines.append(f"{arn} ({failure.get('reason', 'unknown reason')})")
            seen.add(arn)

    return lines


def await_completion(
    backend: EcsBackend,
    cluster: str,
    task_arns: List[str],
    max_wait_minutes: int = DEFAULT_WAIT_MINUTES,
) -> List[LaunchedTask]:
    """
    Block until tasks stop, then check their containers.

    Args:
        backend: ECS backend
        cluster: Cluster the tasks run on
        task_arns: Tasks returned by `launch`
        max_wait_minutes: Waiter budget (capped at MAX_WAIT_MINUTES)

    Returns:
        Described tasks, all of which exited cleanly

    Raises:
        WaitError: If the waiter or DescribeTasks call fails
        ExecutionError: If any task has a failed container
    """
    try:
        backend.wait_tasks_stopped(
            cluster=cluster,
            task_arns=task_arns,
            delay=WAIT_DELAY_SECONDS,
            max_attempts=waiter_attempts(max_wait_minutes),
        )
        response = backend.describe_tasks(cluster=cluster, task_arns=task_arns)
    except Exception as e:
        raise WaitError(str(e)) from e

    response = response or {}
    failed = find_failed_tasks(response)
    if failed:
        raise ExecutionError(
            "Task(s) did not exit successfully: "
            + ", ".join(describe_failed_tasks(response)),
            task_arns=failed,
        )

    return [LaunchedTask.from_response(t) for t in response.get('tasks') or []]
