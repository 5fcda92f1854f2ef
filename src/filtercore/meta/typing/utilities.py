"""Type annotation utility functions.

This module provides helper functions for working with Python type annotations,
including utilities for checking union types, optional types, and resolving
the annotations of a class body.
"""

import inspect
from types import NoneType, UnionType
from typing import Any, ClassVar, TypeAlias, Union, get_args, get_origin

Annotation: TypeAlias = Any


def is_union(annotation: Annotation) -> bool:
    """Check if an annotation is a union. A union is a Union or UnionType type.

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation is a union.
    """
    o = get_origin(annotation) or annotation
    return o in (Union, UnionType)


def is_optional(annotation: Annotation) -> bool:
    """Check if an annotation is an optional. An optional is a Union with NoneType.

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation is an optional.
    """
    return is_union(annotation) and NoneType in get_args(annotation)


def strip_optional(annotation: Annotation) -> tuple[Annotation, bool]:
    """Remove NoneType from an optional annotation.

    Examples:
        >>> strip_optional(int | None)
        (<class 'int'>, True)
        >>> strip_optional(int)
        (<class 'int'>, False)

    Args:
        annotation (Any): The annotation to strip.

    Returns:
        tuple[Any, bool]: The annotation without NoneType, and whether it was optional.
    """
    if not is_optional(annotation):
        return annotation, False
    args = tuple(a for a in get_args(annotation) if a is not NoneType)
    if len(args) == 1:
        return args[0], True
    return Union[args], True  # type: ignore[return-value]


def is_class_var(annotation: Annotation) -> bool:
    """Check if an annotation is ClassVar or ClassVar[...]."""
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def resolve_class_annotations(cls: type) -> dict[str, Annotation]:
    """Get the evaluated annotations declared in the body of `cls` only, bases excluded.

    String annotations (from `from __future__ import annotations`) are evaluated in the module
    of the class.

    Args:
        cls (type): The class to inspect.

    Raises:
        NameError: Raised when an annotation refers to an unknown name.

    Returns:
        dict[str, Any]: The annotations by attribute name, in declaration order.
    """
    return dict(inspect.get_annotations(cls, eval_str=True))
