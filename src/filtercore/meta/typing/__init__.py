"""Type annotation helpers."""

from .utilities import is_class_var, is_optional, is_union, strip_optional

__all__ = [
    "is_union",
    "is_optional",
    "is_class_var",
    "strip_optional",
]
