"""Tests for the boto3 ECS backend."""

import boto3
import pytest
from botocore.exceptions import WaiterError
from botocore.stub import Stubber

from ecs_run_task.ecs.backend import Boto3EcsBackend
from ecs_run_task.ecs.register import register
from ecs_run_task.ecs.wait import await_completion
from ecs_run_task.errors import RegistrationError


TASK_DEF_ARN = 'arn:aws:ecs:us-east-1:123456789012:task-definition/sample:1'
TASK_ARN = 'arn:aws:ecs:us-east-1:123456789012:task/cluster-789/abc'

DEFINITION = {
    'family': 'sample',
    'containerDefinitions': [
        {'name': 'app', 'image': 'busybox', 'cpu': 0, 'essential': True},
    ],
}


@pytest.fixture
def client():
    return boto3.client(
        'ecs',
        region_name='us-east-1',
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
    )


@pytest.fixture
def stubber(client):
    with Stubber(client) as stub:
        yield stub
        stub.assert_no_pending_responses()


def test_register_task_definition(client, stubber):
    stubber.add_response(
        'register_task_definition',
        {'taskDefinition': {'taskDefinitionArn': TASK_DEF_ARN, 'family': 'sample'}},
        DEFINITION,
    )

    assert register(Boto3EcsBackend(client), DEFINITION) == TASK_DEF_ARN


def test_register_client_error(client, stubber):
    stubber.add_client_error(
        'register_task_definition',
        service_error_code='ClientException',
        service_message='Could not parse',
    )

    with pytest.raises(RegistrationError, match='Could not parse'):
        register(Boto3EcsBackend(client), DEFINITION)


def test_run_task(client, stubber):
    request = {
        'cluster': 'cluster-789',
        'taskDefinition': TASK_DEF_ARN,
        'count': 1,
        'startedBy': 'ci',
        'overrides': {'containerOverrides': [{'name': 'app', 'command': ['echo', 'hi']}]},
    }
    stubber.add_response(
        'run_task',
        {'tasks': [{'taskArn': TASK_ARN}], 'failures': []},
        request,
    )

    response = Boto3EcsBackend(client).run_task(request)

    assert response['tasks'][0]['taskArn'] == TASK_ARN


def test_wait_then_describe(client, stubber):
    stopped = {
        'tasks': [{
            'taskArn': TASK_ARN,
            'lastStatus': 'STOPPED',
            'containers': [{'name': 'app', 'exitCode': 0, 'reason': ''}],
        }],
        'failures': [],
    }
    expected = {'cluster': 'cluster-789', 'tasks': [TASK_ARN]}
    # First for the waiter's poll, second for the final describe
    stubber.add_response('describe_tasks', stopped, expected)
    stubber.add_response('describe_tasks', stopped, expected)

    tasks = await_completion(Boto3EcsBackend(client), 'cluster-789', [TASK_ARN])

    assert [t.task_arn for t in tasks] == [TASK_ARN]
    assert tasks[0].containers[0].exit_code == 0


def test_waiter_gives_up_after_max_attempts(client, stubber):
    stubber.add_response(
        'describe_tasks',
        {'tasks': [{'taskArn': TASK_ARN, 'lastStatus': 'RUNNING'}], 'failures': []},
        {'cluster': 'cluster-789', 'tasks': [TASK_ARN]},
    )

    with pytest.raises(WaiterError):
        Boto3EcsBackend(client).wait_tasks_stopped(
            'cluster-789', [TASK_ARN], delay=1, max_attempts=1
        )
