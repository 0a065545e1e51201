"""
Remote ECS capability interface.

The stages only talk to ECS through `EcsBackend`, so they can be driven by
a boto3 client in production and by an in-memory fake in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import boto3


TASKS_STOPPED_WAITER = 'tasks_stopped'


class EcsBackend(ABC):
    """
    Abstract base class for the ECS operations a run needs.
    
    Implementations return the raw response dicts of the ECS API and
    raise whatever their client raises; the stages translate errors.
    """
    
    @abstractmethod
    def register_task_definition(self, definition: Dict[str, Any]) -> Dict[str, Any]:
        """
        Register a task definition.
        
        Args:
            definition: Cleaned task definition, sent as the whole request
            
        Returns:
            RegisterTaskDefinition response
        """
        pass
    
    @abstractmethod
    def run_task(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Start tasks from a registered task definition.
        
        Args:
            request: RunTask request (cluster, taskDefinition, count, ...)
            
        Returns:
            RunTask response
        """
        pass
    
    @abstractmethod
    def wait_tasks_stopped(
        self,
        cluster: str,
        task_arns: List[str],
        delay: int,
        max_attempts: int,
    ) -> None:
        """
        Block until every task has stopped.
        
        Polling cadence and timeout belong to the remote waiter; `delay`
        and `max_attempts` are only handed over to it.
        """
        pass
    
    @abstractmethod
    def describe_tasks(self, cluster: str, task_arns: List[str]) -> Dict[str, Any]:
        """Return the DescribeTasks response for the given tasks."""
        pass


class Boto3EcsBackend(EcsBackend):
    """
    EcsBackend backed by a boto3 ECS client.
    
    Example:
        backend = Boto3EcsBackend.from_session(region_name='us-east-1')
        response = backend.describe_tasks('my-cluster', [task_arn])
    """
    
    def __init__(self, client):
        self.client = client
    
    @classmethod
    def from_session(
        cls,
        region_name: Optional[str] = None,
        profile_name: Optional[str] = None,
    ) -> 'Boto3EcsBackend':
        """Create a backend from a new boto3 session."""
        session = boto3.Session(region_name=region_name, profile_name=profile_name)
        return cls(session.client('ecs'))
    
    def register_task_definition(self, definition: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.register_task_definition(**definition)
    
    def run_task(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.run_task(**request)
    
    def wait_tasks_stopped(
        self,
        cluster: str,
        task_arns: List[str],
        delay: int,
        max_attempts: int,
    ) -> None:
        waiter = self.client.get_waiter(TASKS_STOPPED_WAITER)
        waiter.wait(
            cluster=cluster,
            tasks=task_arns,
            WaiterConfig={'Delay': delay, 'MaxAttempts': max_attempts},
        )
    
    def describe_tasks(self, cluster: str, task_arns: List[str]) -> Dict[str, Any]:
        return self.client.describe_tasks(cluster=cluster, tasks=task_arns)
