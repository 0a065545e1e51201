"""
Reporting sinks for run outputs, failures and log lines.

ConsoleReporter prints with click. GithubActionsReporter speaks the
GitHub Actions workflow command protocol and writes step outputs to the
$GITHUB_OUTPUT file.
"""

import json
import os
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

import click


def to_output_value(value: Any) -> str:
    """Strings go out as-is, everything else as JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


class Reporter(ABC):
    """
    Where a run sends its outputs, failures and log lines.

    `set_failed` may be called several times per run; `failed` records
    whether it was called at all.
    """

    def __init__(self):
        self.failed = False

    @abstractmethod
    def set_output(self, name: str, value: Any) -> None:
        pass

    def set_failed(self, message: str) -> None:
        self.failed = True
        self.error(message)

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def debug(self, message: str) -> None:
        pass


class ConsoleReporter(Reporter):
    """Plain terminal output. Debug lines only show when verbose."""

    def __init__(self, verbose: bool = False):
        super().__init__()
        self.verbose = verbose

    def set_output(self, name: str, value: Any) -> None:
        click.echo(f"{name}={to_output_value(value)}")

    def error(self, message: str) -> None:
        click.echo(f"Error: {message}", err=True)

    def info(self, message: str) -> None:
        click.echo(message)

    def debug(self, message: str) -> None:
        if self.verbose:
            click.echo(f"  {message}")


def escape_data(message: str) -> str:
    return message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


class GithubActionsReporter(Reporter):
    """
    GitHub Actions workflow commands.

    Outputs are appended to the file named by GITHUB_OUTPUT using the
    multiline `name<<delimiter` form. Without that file the runner has
    nowhere to read step outputs from, so they are only printed through
    ConsoleReporter, preceded by a warning.
    """

    def __init__(self, output_file: Optional[Union[str, Path]] = None):
        super().__init__()
        if output_file is None:
            output_file = os.environ.get('GITHUB_OUTPUT')
        self.output_file = Path(output_file) if output_file else None
        self._console = ConsoleReporter()

    def set_output(self, name: str, value: Any) -> None:
        value = to_output_value(value)
        if self.output_file is None:
            click.echo(f"::warning::GITHUB_OUTPUT is not set, {name} is not a step output")
            self._console.set_output(name, value)
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(self.output_file, 'a', encoding='utf-8') as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def error(self, message: str) -> None:
        click.echo(f"::error::{escape_data(message)}")

    def info(self, message: str) -> None:
        click.echo(message)

    def debug(self, message: str) -> None:
        click.echo(f"::debug::{escape_data(message)}")


def default_reporter(verbose: bool = False) -> Reporter:
    """GithubActionsReporter inside a GitHub Actions job, else ConsoleReporter."""
    if os.environ.get('GITHUB_ACTIONS') == 'true':
        return GithubActionsReporter()
    return ConsoleReporter(verbose=verbose)
