"""ECS register, launch and wait stages."""

from .backend import EcsBackend, Boto3EcsBackend
from .register import register
from .launch import launch, build_run_task_request
from .wait import (
    await_completion, find_failed_tasks, describe_failed_tasks, LaunchedTask, ContainerStatus,
)

__all__ = [
    # Remote interface
    'EcsBackend',
    'Boto3EcsBackend',
    # Stages
    'register',
    'launch',
    'build_run_task_request',
    'await_completion',
    'find_failed_tasks',
    'describe_failed_tasks',
    # Task state
    'LaunchedTask',
    'ContainerStatus',
]
