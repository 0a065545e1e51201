"""
Run configuration.

The RunConfig wraps the run inputs (task definition path, cluster, count,
...) keyed by their input names. It can be built from CLI values, a YAML
file, or (through the CLI) GitHub Actions style INPUT_* environment
variables named by `env_name`.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..ecs.wait import DEFAULT_WAIT_MINUTES


REQUIRED_INPUTS = ['task-definition', 'cluster', 'count', 'started-by']

TRUE_VALUES = {'true', 'yes', '1', 'on'}


def parse_bool(value: Any) -> bool:
    """Interpret a boolean-as-string input; anything unrecognised is False."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_VALUES


def env_name(input_name: str) -> str:
    """GitHub Actions environment variable for an input (hyphens are kept)."""
    return 'INPUT_' + input_name.replace(' ', '_').upper()


class RunConfig:
    """
    Loads and validates the inputs of a run.

    Values are kept as given (usually strings) and converted on access,
    so a bad optional value only fails the stage that needs it.

    Example:
        config = RunConfig.from_yaml('run.yaml')
        print(config.cluster, config.count)
    """

    def __init__(self, data: Dict[str, Any], workspace: Optional[str] = None):
        self._data = {k: v for k, v in data.items() if v is not None and v != ''}
        self._workspace = workspace
        self._validate()

    @staticmethod
    def read_yaml(path: str) -> Dict[str, Any]:
        """Read raw run inputs from a YAML file without validating them."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Run config not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Run config must be a mapping: {path}")

        return data

    @classmethod
    def from_yaml(cls, path: str, workspace: Optional[str] = None) -> 'RunConfig':
        """Load run config from YAML file."""
        return cls(cls.read_yaml(path), workspace=workspace)

    def _validate(self):
        """Validate required inputs."""
        for name in REQUIRED_INPUTS:
            if name not in self._data:
                raise ValueError(f"Input required and not supplied: {name}")

    # --- Task definition ---

    @property
    def task_definition(self) -> str:
        return str(self._data['task-definition'])

    @property
    def workspace(self) -> Path:
        """Root for relative task definition paths (default: cwd)."""
        return Path(self._workspace) if self._workspace else Path.cwd()

    @property
    def task_definition_path(self) -> Path:
        path = Path(self.task_definition)
        if path.is_absolute():
            return path
        return self.workspace / path

    # --- Launch ---

    @property
    def cluster(self) -> str:
        return str(self._data['cluster'])

    @property
    def count(self) -> int:
        raw = self._data['count']
        try:
            count = int(str(raw).strip())
        except ValueError:
            raise ValueError(f"Input 'count' must be an integer, got {raw!r}")
        if count < 1:
            raise ValueError(f"Input 'count' must be at least 1, got {count}")
        return count

    @property
    def started_by(self) -> str:
        return str(self._data['started-by'])

    @property
    def overrides(self) -> Optional[Dict[str, Any]]:
        """
        Parsed task overrides, or None when not supplied.

        A YAML config may give the overrides as a mapping instead of a
        JSON string.
        """
        raw = self._data.get('overrides')
        if raw is None:
            return None
        if isinstance(raw, dict):
            return raw
        return json.loads(raw)

    # --- Wait ---

    @property
    def wait_for_finish(self) -> bool:
        return parse_bool(self._data.get('wait-for-finish'))

    @property
    def wait_for_minutes(self) -> int:
        raw = self._data.get('wait-for-minutes')
        if raw is None:
            return DEFAULT_WAIT_MINUTES
        try:
            minutes = int(str(raw).strip())
        except ValueError:
            raise ValueError(f"Input 'wait-for-minutes' must be an integer, got {raw!r}")
        return minutes if minutes > 0 else DEFAULT_WAIT_MINUTES
