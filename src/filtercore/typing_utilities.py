"""
Re-export utilities module for cleaner imports.

This allows: from filtercore.typing_utilities import is_union
Instead of: from filtercore.meta.typing.utilities import is_union
"""

from .meta.typing.utilities import (
    is_class_var,
    is_optional,
    is_union,
    resolve_class_annotations,
    strip_optional,
)

__all__ = [
    "is_union",
    "is_optional",
    "is_class_var",
    "strip_optional",
    "resolve_class_annotations",
]
