"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2025-10-19
Description: Base filter and the registry of filter kinds. A filter is a declared input: a name,
            a kind, an optional default, and the cast logic of its kind. Kinds register
            themselves when their class is created, see register_kind.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Final, Self, TypeAlias

from ..errors import (
    FilterValueError,
    InvalidDefaultError,
    InvalidFilterError,
    InvalidValueError,
    MissingValueError,
)
from ..inputs import ABSENT

logger = logging.getLogger(__name__)


class _NoDefault(Enum):
    NO_DEFAULT = "no default"

    def __repr__(self) -> str:
        return "<no default>"


NO_DEFAULT: Final = _NoDefault.NO_DEFAULT
"""Marks a filter declared without default, hence required."""

Default: TypeAlias = Any | Callable[[], Any]


@dataclass(frozen=True, slots=True)
class Coerced:
    """Outcome of cleaning one value: either a value or a failure."""

    value: Any = None
    failure: FilterValueError | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


_kinds: dict[str, type[Filter]] = {}


def register_kind(filter_class: type[Filter]) -> type[Filter]:
    """Register a filter class under its `kind`. Can be used as a decorator.

    Subclasses of Filter defining `kind` are registered automatically, registering the same kind
    again replaces the previous class.

    Args:
        filter_class (type[Filter]): the filter class to register.

    Raises:
        InvalidFilterError: Raised when the class has no kind.

    Returns:
        type[Filter]: the registered class.
    """
    if not filter_class.kind:
        raise InvalidFilterError(
            f"Filter class '{filter_class.__name__}' cannot be registered without a kind."
        )
    _kinds[filter_class.kind] = filter_class
    logger.debug("Registered filter kind %r -> %s", filter_class.kind, filter_class.__name__)
    return filter_class


def filter_class_for_kind(kind: str | type[Filter]) -> type[Filter]:
    """Get the filter class of a kind.

    Args:
        kind (str | type[Filter]): a registered kind name, or a Filter subclass returned as is.

    Raises:
        InvalidFilterError: Raised when the kind is unknown.

    Returns:
        type[Filter]: the filter class.
    """
    if isinstance(kind, type) and issubclass(kind, Filter):
        return kind
    try:
        return _kinds[kind]  # type: ignore[index]
    except (KeyError, TypeError) as e:
        raise InvalidFilterError(f"Unknown filter kind {kind!r}.") from e


def registered_kinds() -> list[str]:
    """All the registered kind names, for introspection."""
    return list(_kinds)


class Filter:
    """Base class of all filters.

    Subclasses set `kind` and implement `cast`. A filter is immutable once declared; `named`
    returns a renamed copy.

    Args:
        name (str | None): the filter name. Usually given by the declaring class.
        default (Any): value used when the input is absent. A callable is called without argument
            each time the default is needed. None makes the filter optional without value.
            When omitted, the filter is required.
        desc (str | None): free description, for documentation purposes.
    """

    kind: ClassVar[str | None] = None
    column_type: ClassVar[str] = "string"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("kind"):
            register_kind(cls)

    def __init__(
        self,
        *,
        name: str | None = None,
        default: Default = NO_DEFAULT,
        desc: str | None = None,
    ) -> None:
        self._name = name
        self._default = default
        self.desc = desc

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def has_default(self) -> bool:
        return self._default is not NO_DEFAULT

    @property
    def required(self) -> bool:
        return not self.has_default

    @property
    def deferred_default(self) -> bool:
        """Whether the default is computed on demand."""
        return callable(self._default)

    def named(self, name: str) -> Self:
        """Return a copy of this filter with a new name."""
        clone = copy.copy(self)
        clone._name = name
        return clone

    def with_default(self, default: Default) -> Self:
        """Return a copy of this filter with a new default."""
        clone = copy.copy(self)
        clone._default = default
        return clone

    def check_default(self) -> None:
        """Verify at declaration time that a static default can be cast.

        Raises:
            InvalidDefaultError: Raised when the static default is invalid for the kind.
        """
        if not self.has_default or self.deferred_default or self._default is None:
            return
        try:
            self.cast(self._default)
        except FilterValueError as e:
            raise InvalidDefaultError(
                f"Invalid default {self._default!r} for filter '{self.name}': {e}"
            ) from e

    def default(self) -> Any:
        """Evaluate the default and cast it like a supplied value.

        Raises:
            MissingValueError: Raised when the filter has no default.
            InvalidValueError: Raised when the evaluated default is invalid.

        Returns:
            Any: the cast default.
        """
        if not self.has_default:
            raise MissingValueError(self.name)
        value = self._default() if self.deferred_default else self._default
        if value is None:
            return None
        return self.cast(value)

    def resolve(self, value: Any = ABSENT) -> Any:
        """Cast `value`, or fall back to the default when it is absent or None.

        Raises:
            FilterValueError: Raised when the value is missing or invalid.
        """
        if value is ABSENT or value is None:
            return self.default()
        return self.cast(value)

    def clean(self, value: Any = ABSENT) -> Coerced:
        """Clean a raw value. Never raises for an invalid or missing value.

        Args:
            value (Any): the raw value, ABSENT when the input key was not supplied.

        Returns:
            Coerced: the typed value, or the failure.
        """
        try:
            return Coerced(self.resolve(value))
        except FilterValueError as error:
            return Coerced(failure=error)

    def cast(self, value: Any) -> Any:
        """Convert a present, non None value to the filter kind.

        Raises:
            InvalidValueError: Raised when the value cannot be converted.
        """
        raise NotImplementedError(f"{type(self).__name__} does not implement cast.")

    def invalid(self, value: Any, reason: str | None = None) -> InvalidValueError:
        """Build the error for a value this filter rejects."""
        return InvalidValueError(self.name, value, reason)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
