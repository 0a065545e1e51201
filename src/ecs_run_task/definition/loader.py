"""
Load a task definition JSON file and clean it.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from ..errors import LoadError
from .sanitize import clean


DEFAULT_ENCODING = 'utf-8'

Reader = Callable[[Union[str, Path], str], str]


def read_text(path: Union[str, Path], encoding: str) -> str:
    """Default reader: read the whole file as text."""
    return Path(path).read_text(encoding=encoding)


def load(
    path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
    reader: Optional[Reader] = None,
) -> Dict[str, Any]:
    """
    Read, parse and clean a task definition.
    
    Args:
        path: Task definition JSON file
        encoding: Text encoding used for the single read
        reader: Callable (path, encoding) -> str, defaults to a file read
        
    Returns:
        Cleaned task definition dict
        
    Raises:
        LoadError: If the file can't be read, isn't JSON, or isn't an object
    """
    reader = reader or read_text
    
    try:
        text = reader(path, encoding)
    except Exception as e:
        raise LoadError(f"Could not read task definition file {path}: {e}") from e
    
    try:
        data = json.loads(text)
    except ValueError as e:
        raise LoadError(f"Task definition file {path} is not valid JSON: {e}") from e
    
    if not isinstance(data, dict):
        raise LoadError(
            f"Task definition file {path} must contain a JSON object, "
            f"got {type(data).__name__}"
        )
    
    return clean(data)
