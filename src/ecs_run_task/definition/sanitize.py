"""
Task definition cleanup.

Task definitions exported from the console or from `describe-task-definition`
carry server-assigned fields and empty placeholders that
`register_task_definition` rejects. `clean` strips them without touching
anything meaningful.
"""

from typing import Any, Dict, List


# Server-assigned fields that may only appear at the top level
READ_ONLY_KEYS = frozenset([
    'taskDefinitionArn',
    'revision',
    'status',
    'compatibilities',
])


def is_empty(value: Any) -> bool:
    """
    Check whether a value should be dropped from its container.
    
    None, empty strings, empty lists and empty dicts are empty.
    0 and False are not.
    """
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def _clean_value(value: Any) -> Any:
    if isinstance(value, dict):
        cleaned: Dict[str, Any] = {}
        for key, child in value.items():
            child = _clean_value(child)
            if not is_empty(child):
                cleaned[key] = child
        return cleaned
    
    if isinstance(value, (list, tuple)):
        items: List[Any] = []
        for child in value:
            child = _clean_value(child)
            if not is_empty(child):
                items.append(child)
        return items
    
    return value


def clean(value: Any) -> Any:
    """
    Return a cleaned copy of a parsed task definition.
    
    Read-only keys are removed from the root mapping first. Then, bottom-up,
    every dict entry or list element that is (or became) None, "", [] or {}
    is dropped. Order is kept and the input is never modified.
    
    Args:
        value: Parsed JSON value, normally the whole task definition dict
        
    Returns:
        New cleaned value. A root dict that loses every entry becomes {}.
    """
    if isinstance(value, dict):
        value = {k: v for k, v in value.items() if k not in READ_ONLY_KEYS}
    return _clean_value(value)
