"""
Task definition registration.
"""

from typing import Any, Dict

from ..errors import RegistrationError
from .backend import EcsBackend


def register(backend: EcsBackend, definition: Dict[str, Any]) -> str:
    """
    Register a cleaned task definition and return its ARN.
    
    Args:
        backend: ECS backend
        definition: Cleaned task definition, sent unchanged
        
    Returns:
        taskDefinitionArn of the new revision
        
    Raises:
        RegistrationError: If the call fails or the response has no ARN
    """
    try:
        response = backend.register_task_definition(definition)
    except Exception as e:
        raise RegistrationError(str(e)) from e
    
    task_definition = (response or {}).get('taskDefinition') or {}
    arn = task_definition.get('taskDefinitionArn')
    if not arn:
        raise RegistrationError("Response did not include a taskDefinitionArn")
    
    return arn
