"""
Command-line interface for ecs_run_task.

Run Pattern:
    ecs-run-task run --task-definition task-def.json --cluster my-cluster \\
        --count 1 --started-by deploy-bot [--wait-for-finish true] \\
        [--overrides '{"containerOverrides": [...]}']

    ecs-run-task run --config run.yaml

Inside a GitHub Actions step every run option can also come from the
matching INPUT_* variable (INPUT_TASK-DEFINITION, INPUT_CLUSTER, ...), and
relative task definition paths resolve against GITHUB_WORKSPACE.

Inspection:
    ecs-run-task clean --task-definition task-def.json [--output clean.json]
"""

import json
import sys
from pathlib import Path

import click

from ..ecs.backend import Boto3EcsBackend, EcsBackend
from ..run.config import env_name


def make_backend(region=None, profile=None) -> EcsBackend:
    """Create the ECS backend used by `run`."""
    return Boto3EcsBackend.from_session(region_name=region, profile_name=profile)


@click.group()
@click.version_option(package_name='ecs-run-task')
def cli():
    """ECS Run Task - register a task definition and run one-off ECS tasks."""
    pass


@cli.command('run')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True),
              help='Run config YAML file (options given here take precedence)')
@click.option('--task-definition', '-t', envvar=env_name('task-definition'),
              help='Task definition JSON file, relative to the workspace')
@click.option('--cluster', envvar=env_name('cluster'), help='Cluster name or ARN')
@click.option('--count', envvar=env_name('count'), help='Number of tasks to run')
@click.option('--started-by', envvar=env_name('started-by'),
              help='Value recorded as startedBy on the tasks')
@click.option('--wait-for-finish', envvar=env_name('wait-for-finish'),
              help="Wait for the tasks to stop ('true' to enable)")
@click.option('--wait-for-minutes', envvar=env_name('wait-for-minutes'),
              help='Maximum minutes to wait (default: 30, max: 360)')
@click.option('--overrides', envvar=env_name('overrides'),
              help='Task overrides as a JSON string')
@click.option('--workspace', '-w', envvar='GITHUB_WORKSPACE', type=click.Path(),
              help='Root for relative task definition paths (default: cwd)')
@click.option('--region', envvar='AWS_REGION', help='AWS region')
@click.option('--profile', envvar='AWS_PROFILE', help='AWS profile name')
@click.option('--verbose', '-v', is_flag=True, help='Show progress lines')
def run_task(config_path, task_definition, cluster, count, started_by,
             wait_for_finish, wait_for_minutes, overrides, workspace,
             region, profile, verbose):
    """Register the task definition, run tasks and optionally wait."""
    from ..run import RunConfig, RunOrchestrator, default_reporter

    reporter = default_reporter(verbose=verbose)

    values = {
        'task-definition': task_definition,
        'cluster': cluster,
        'count': count,
        'started-by': started_by,
        'wait-for-finish': wait_for_finish,
        'wait-for-minutes': wait_for_minutes,
        'overrides': overrides,
    }

    try:
        data = {}
        if config_path:
            data.update(RunConfig.read_yaml(config_path))
        data.update({k: v for k, v in values.items() if v is not None})
        config = RunConfig(data, workspace=workspace)
        backend = make_backend(region=region, profile=profile)
    except Exception as e:
        reporter.set_failed(str(e))
        sys.exit(1)

    result = RunOrchestrator(config, backend, reporter).run()

    if not result.ok:
        sys.exit(1)


@cli.command('clean')
@click.option('--task-definition', '-t', required=True, envvar=env_name('task-definition'),
              help='Task definition JSON file, relative to the workspace')
@click.option('--workspace', '-w', envvar='GITHUB_WORKSPACE', type=click.Path(),
              help='Root for relative task definition paths (default: cwd)')
@click.option('--output', '-o', type=click.Path(), help='Write cleaned JSON here')
@click.option('--indent', default=2, type=int, help='JSON indentation')
def clean_definition(task_definition, workspace, output, indent):
    """Print the task definition as it would be registered."""
    from ..definition import load
    from ..errors import LoadError

    path = Path(task_definition)
    if not path.is_absolute() and workspace:
        path = Path(workspace) / path

    try:
        definition = load(path)
    except LoadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    text = json.dumps(definition, indent=indent)

    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        Path(output).write_text(text + "\n", encoding='utf-8')
        click.echo(f"✓ Saved cleaned task definition to {output}")
    else:
        click.echo(text)


if __name__ == '__main__':
    cli()
