"""
Re-export exceptions module for cleaner imports.

This allows: from filtercore.exceptions import InvalidFilterError
Instead of: from filtercore.errors import InvalidFilterError
"""

from .errors import (
    FilterCoreError,
    FilterValueError,
    InvalidClassError,
    InvalidDefaultError,
    InvalidFilterError,
    InvalidInteractionError,
    InvalidNestedValueError,
    InvalidValueError,
    MissingValueError,
    TracedException,
    format_exception,
)

__all__ = [
    "TracedException",
    "format_exception",
    "FilterCoreError",
    "InvalidFilterError",
    "InvalidDefaultError",
    "InvalidClassError",
    "FilterValueError",
    "MissingValueError",
    "InvalidValueError",
    "InvalidNestedValueError",
    "InvalidInteractionError",
]
