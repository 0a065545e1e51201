"""Task definition loading and cleanup."""

from .sanitize import clean, READ_ONLY_KEYS
from .loader import load

__all__ = ['clean', 'load', 'READ_ONLY_KEYS']
