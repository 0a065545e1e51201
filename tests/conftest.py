"""Shared fixtures: an in-memory ECS backend and a recording reporter."""

import json
from typing import Any, Dict, List

import pytest

from ecs_run_task.ecs.backend import EcsBackend
from ecs_run_task.run.config import RunConfig
from ecs_run_task.run.report import Reporter


TASK_DEF_ARN = 'task:def:arn'
TASK_ARN = 'arn:aws:ecs:fake-region:account_id:task/arn'


def make_task(task_arn: str = TASK_ARN, exit_code=0, reason: str = '', last_status='STOPPED'):
    container = {'name': 'app', 'lastStatus': last_status, 'reason': reason}
    if exit_code is not None:
        container['exitCode'] = exit_code
    return {
        'taskArn': task_arn,
        'lastStatus': last_status,
        'desiredStatus': 'STOPPED',
        'containers': [container],
    }


class FakeBackend(EcsBackend):
    """Records every call; responses and errors are set per operation."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.errors: Dict[str, Exception] = {}
        self.responses: Dict[str, Any] = {
            'register_task_definition': {
                'taskDefinition': {'taskDefinitionArn': TASK_DEF_ARN},
            },
            'run_task': {
                'tasks': [make_task(last_status='RUNNING')],
                'failures': [],
            },
            'wait_tasks_stopped': None,
            'describe_tasks': {
                'tasks': [make_task()],
                'failures': [],
            },
        }

    def _call(self, name: str, payload: Any) -> Any:
        self.calls.append((name, payload))
        if name in self.errors:
            raise self.errors[name]
        return self.responses[name]

    def calls_to(self, name: str) -> List[Any]:
        return [payload for op, payload in self.calls if op == name]

    def register_task_definition(self, definition):
        return self._call('register_task_definition', definition)

    def run_task(self, request):
        return self._call('run_task', request)

    def wait_tasks_stopped(self, cluster, task_arns, delay, max_attempts):
        return self._call('wait_tasks_stopped', {
            'cluster': cluster,
            'tasks': task_arns,
            'delay': delay,
            'max_attempts': max_attempts,
        })

    def describe_tasks(self, cluster, task_arns):
        return self._call('describe_tasks', {'cluster': cluster, 'tasks': task_arns})


class RecordingReporter(Reporter):
    """Keeps every reported event in order."""

    def __init__(self):
        super().__init__()
        self.events: List[tuple] = []

    def set_output(self, name, value):
        self.events.append(('output', name, value))

    def error(self, message):
        self.events.append(('failed', message))

    def info(self, message):
        self.events.append(('info', message))

    def debug(self, message):
        self.events.append(('debug', message))

    @property
    def failures(self) -> List[str]:
        return [e[1] for e in self.events if e[0] == 'failed']

    @property
    def infos(self) -> List[str]:
        return [e[1] for e in self.events if e[0] == 'info']

    @property
    def outputs(self) -> List[tuple]:
        return [(e[1], e[2]) for e in self.events if e[0] == 'output']


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def workspace(tmp_path):
    """Workspace holding task-definition.json with a single family key."""
    (tmp_path / 'task-definition.json').write_text(
        json.dumps({'family': 'task-def-family'}), encoding='utf-8'
    )
    return tmp_path


@pytest.fixture
def make_config(workspace):
    def _make(**inputs):
        data = {
            'task-definition': 'task-definition.json',
            'cluster': 'cluster-789',
            'count': '1',
            'started-by': 'amazon-ecs-run-task-for-github-actions',
        }
        data.update({k.replace('_', '-'): v for k, v in inputs.items()})
        return RunConfig(data, workspace=str(workspace))
    return _make
