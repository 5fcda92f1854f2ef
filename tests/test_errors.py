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
Description: Tests for the error hierarchy and its traceback formatting.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import pytest

from filtercore.errors import ErrorKind
from filtercore.exceptions import (
    FilterCoreError,
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
from filtercore.validation import Errors


# =============================================================================
# Traceback Formatting Tests
# =============================================================================


class TestFormatException:
    """Test cases for the format_exception function."""

    def test_format_raised_exception(self):
        """Test formatting a raised exception with its traceback."""
        try:
            raise ValueError("Test error message")
        except ValueError as e:
            result = format_exception(e)

        assert "ValueError: Test error message" in result
        assert "Traceback" in result
        assert "test_format_raised_exception" in result

    def test_format_exception_with_no_traceback(self):
        """Test formatting an exception that was never raised."""
        result = format_exception(ValueError("No traceback"))

        assert "ValueError: No traceback" in result
        assert "Traceback" not in result

    def test_format_chained_exception(self):
        """Test that the cause of an exception is formatted too."""
        try:
            try:
                raise KeyError("inner")
            except KeyError as inner:
                raise InvalidFilterError("outer") from inner
        except InvalidFilterError as e:
            result = format_exception(e)

        assert "KeyError: 'inner'" in result
        assert "InvalidFilterError: outer" in result


class TestTracedException:
    """Test cases for the traceback_format method."""

    def test_traceback_format(self):
        """Test that traceback_format renders the exception and its traceback."""
        try:
            raise MissingValueError("count")
        except MissingValueError as e:
            result = e.traceback_format()

        assert "MissingValueError: Missing value for filter 'count'." in result
        assert "test_traceback_format" in result


# =============================================================================
# Hierarchy Tests
# =============================================================================


class TestHierarchy:
    """Test the relations between the error classes."""

    @pytest.mark.parametrize(
        "error_class",
        [
            InvalidFilterError,
            InvalidDefaultError,
            InvalidClassError,
            MissingValueError,
            InvalidValueError,
            InvalidNestedValueError,
            InvalidInteractionError,
        ],
    )
    def test_all_errors_are_traced(self, error_class):
        """Test that every error derives from FilterCoreError and TracedException."""
        assert issubclass(error_class, FilterCoreError)
        assert issubclass(error_class, TracedException)

    def test_declaration_errors(self):
        """Test that default and class errors are declaration errors."""
        assert issubclass(InvalidDefaultError, InvalidFilterError)
        assert issubclass(InvalidClassError, InvalidFilterError)

    def test_nested_is_invalid(self):
        """Test that nested errors are invalid value errors."""
        assert issubclass(InvalidNestedValueError, InvalidValueError)

    def test_kinds(self):
        """Test the failure kind carried by each value error."""
        assert MissingValueError.kind is ErrorKind.MISSING
        assert InvalidValueError.kind is ErrorKind.INVALID
        assert InvalidNestedValueError.kind is ErrorKind.INVALID_NESTED
        assert ErrorKind.INVALID_NESTED == "invalid_nested"


# =============================================================================
# Value Errors Tests
# =============================================================================


class TestValueErrors:
    """Test the data carried by value errors."""

    def test_invalid_value(self):
        """Test the attributes and message of InvalidValueError."""
        error = InvalidValueError("count", "abc", "not an integer")

        assert error.name == "count"
        assert error.value == "abc"
        assert error.reason == "not an integer"
        assert str(error) == "Invalid value 'abc' for filter 'count'. Reason: not an integer"

    def test_invalid_value_without_reason(self):
        """Test the message of InvalidValueError without reason."""
        assert str(InvalidValueError("count", 1)) == "Invalid value 1 for filter 'count'."

    def test_nested_value(self):
        """Test that the nested errors are carried and listed in the message."""
        nested = Errors()
        nested.add("x", ErrorKind.MISSING)
        error = InvalidNestedValueError("point", {}, nested)

        assert error.errors is nested
        assert "'x'" in str(error)

    def test_invalid_interaction(self):
        """Test that InvalidInteractionError lists the failures."""
        errors = Errors()
        errors.add("count", ErrorKind.MISSING)
        errors.add("flag", ErrorKind.INVALID)
        error = InvalidInteractionError(errors)

        assert error.errors is errors
        assert "count: missing" in str(error)
        assert "flag: invalid" in str(error)
