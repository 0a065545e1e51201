"""Setup script for ecs_run_task package."""

from setuptools import setup, find_packages

setup(
    name="ecs-run-task",
    version="1.0.0",
    description="Register an Amazon ECS task definition and run one-off tasks from it",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "boto3>=1.26",
        "click>=8.0",
        "pyyaml>=5.4",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ecs-run-task=ecs_run_task.cli.main:cli",
        ],
    },
)
