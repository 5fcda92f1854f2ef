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
Description: Exception hierarchy of filtercore. Declaration errors are raised immediately,
            value errors are raised by the filters casts and turned into validation failures
            by the cleaning pass.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import traceback
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .validation import Errors


class ErrorKind(StrEnum):
    """Kind of a validation failure.

    MISSING: A required filter received no value and has no default.
    INVALID: A value was supplied but could not be cast to the filter kind.
    INVALID_NESTED: A composite filter (hash, array) has failing members.
    """

    MISSING = "missing"
    INVALID = "invalid"
    INVALID_NESTED = "invalid_nested"


def format_exception(e: BaseException) -> str:
    """Format the provided exception to a string with its traceback.

    Args:
        e (BaseException): The exception to format.

    Returns:
        str: The string representation of the exception with its traceback.
    """
    return "".join(traceback.format_exception(type(e), e, e.__traceback__))


class TracedException(Exception):
    """Base traceable exception class."""

    def traceback_format(self) -> str:
        """Format the exception to a string with its traceback."""
        return format_exception(self)


class FilterCoreError(TracedException):
    """Root of all the errors raised by filtercore."""


class InvalidFilterError(FilterCoreError):
    """A filter declaration is malformed (no name, reserved name, bad options...)."""


class InvalidDefaultError(InvalidFilterError):
    """The static default of a filter cannot be cast to the filter kind."""


class InvalidClassError(InvalidFilterError):
    """The class of a model filter cannot be resolved."""


class FilterValueError(FilterCoreError):
    """Base class of the errors produced while cleaning a single filter value.

    Attributes:
        name (str | int | None): name of the failing filter, or index for array members.
        kind (ErrorKind): the failure kind recorded in the error collection.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, name: str | int | None, message: str) -> None:
        super().__init__(message)
        self.name = name


class MissingValueError(FilterValueError):
    """A required filter received no value."""

    kind = ErrorKind.MISSING

    def __init__(self, name: str | int | None) -> None:
        super().__init__(name, f"Missing value for filter '{name}'.")


class InvalidValueError(FilterValueError):
    """A supplied value cannot be cast to the filter kind."""

    kind = ErrorKind.INVALID

    def __init__(
        self, name: str | int | None, value: Any, reason: str | None = None
    ) -> None:
        message = f"Invalid value {value!r} for filter '{name}'."
        if reason:
            message = f"{message} Reason: {reason}"
        super().__init__(name, message)
        self.value = value
        self.reason = reason


class InvalidNestedValueError(InvalidValueError):
    """Members of a composite value failed. Carries the nested error collection."""

    kind = ErrorKind.INVALID_NESTED

    def __init__(self, name: str | int | None, value: Any, errors: Errors) -> None:
        failing = ", ".join(repr(n) for n in errors.names())
        super().__init__(name, value, f"nested failures for {failing}")
        self.errors = errors


class InvalidInteractionError(FilterCoreError):
    """Raised by run_or_raise when the inputs of an interaction are invalid."""

    def __init__(self, errors: Errors) -> None:
        pairs = ", ".join(f"{name}: {kind}" for name, kind in errors.pairs())
        super().__init__(f"Interaction inputs are invalid ({pairs}).")
        self.errors = errors
