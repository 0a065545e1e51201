"""
ECS Run Task - register an ECS task definition and run one-off tasks from it.

This package provides tools for:
- Cleaning task definition JSON into a form the ECS API accepts
- Registering task definitions and launching tasks with overrides
- Waiting for launched tasks to stop and checking container exit codes
- Running as a CLI or a GitHub Actions step
"""

__version__ = "1.0.0"
