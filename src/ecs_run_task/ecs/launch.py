"""
Task launch.
"""

from typing import Any, Dict, List, Optional

from ..errors import LaunchError
from .backend import EcsBackend


def build_run_task_request(
    cluster: str,
    task_definition_arn: str,
    count: int,
    started_by: str,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the RunTask request.
    
    The overrides key is left out entirely when there are no overrides.
    """
    request = {
        'cluster': cluster,
        'taskDefinition': task_definition_arn,
        'count': count,
        'startedBy': started_by,
    }
    if overrides is not None:
        request['overrides'] = overrides
    return request


def _describe_failures(failures: List[Dict[str, Any]]) -> str:
    parts = []
    for failure in failures:
        arn = failure.get('arn', 'unknown')
        reason = failure.get('reason', 'unknown reason')
        detail = failure.get('detail')
        parts.append(f"{arn}: {reason}" + (f" ({detail})" if detail else ""))
    return "; ".join(parts)


def launch(
    backend: EcsBackend,
    cluster: str,
    task_definition_arn: str,
    count: int,
    started_by: str,
    overrides: Optional[Dict[str, Any]] = None,
) -> List[str]:
    """
    Run tasks from a registered task definition.
    
    Args:
        backend: ECS backend
        cluster: Cluster name or ARN
        task_definition_arn: ARN returned by `register`
        count: Number of tasks to start
        started_by: Tag recorded on the tasks as startedBy
        overrides: Optional TaskOverride dict, passed through unmodified
        
    Returns:
        Task ARNs in the order ECS returned them
        
    Raises:
        LaunchError: If the call fails, ECS reports failures, or no task
            was started
    """
    request = build_run_task_request(
        cluster=cluster,
        task_definition_arn=task_definition_arn,
        count=count,
        started_by=started_by,
        overrides=overrides,
    )
    
    try:
        response = backend.run_task(request)
    except Exception as e:
        raise LaunchError(str(e)) from e
    
    response = response or {}
    tasks = response.get('tasks') or []
    failures = response.get('failures') or []
    
    if failures:
        raise LaunchError(f"ECS reported failures: {_describe_failures(failures)}")
    if not tasks:
        raise LaunchError("No tasks were started")
    
    return [task['taskArn'] for task in tasks]
