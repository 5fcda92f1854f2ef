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
Description: Tests for the failures and their ordered collection.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from filtercore.errors import (
    ErrorKind,
    InvalidNestedValueError,
    InvalidValueError,
    MissingValueError,
)
from filtercore.filters.base import Coerced
from filtercore.validation import Errors, FilterFailure, collect_errors


# =============================================================================
# FilterFailure Tests
# =============================================================================


class TestFilterFailure:
    """Test single failures."""

    def test_from_error(self):
        """Test that the failure takes the kind of the error."""
        error = InvalidValueError("count", "abc")
        failure = FilterFailure.from_error("count", error)

        assert failure.as_pair() == ("count", ErrorKind.INVALID)
        assert failure.error is error
        assert failure.nested is None
        assert failure.message == str(error)

    def test_from_nested_error(self):
        """Test that nested errors are kept on the failure."""
        nested = Errors()
        nested.add("x", ErrorKind.MISSING)
        failure = FilterFailure.from_error("point", InvalidNestedValueError("point", {}, nested))

        assert failure.kind is ErrorKind.INVALID_NESTED
        assert failure.nested is nested

    def test_message_without_error(self):
        """Test that the message falls back to the kind."""
        assert FilterFailure("count", ErrorKind.MISSING).message == "missing"

    def test_to_dict(self):
        """Test the plain representation, nested failures included."""
        nested = Errors()
        nested.add(0, ErrorKind.INVALID)
        failure = FilterFailure("tags", ErrorKind.INVALID_NESTED, nested=nested)

        assert failure.to_dict() == {
            "name": "tags",
            "kind": "invalid_nested",
            "nested": [{"name": 0, "kind": "invalid"}],
        }


# =============================================================================
# Errors Tests
# =============================================================================


class TestErrors:
    """Test the ordered collection of failures."""

    def test_empty(self):
        """Test an empty collection."""
        errors = Errors()

        assert not errors
        assert len(errors) == 0
        assert errors.pairs() == []

    def test_order_is_kept(self):
        """Test that failures keep the order in which they were added."""
        errors = Errors()
        errors.add("b", ErrorKind.INVALID)
        errors.add("a", ErrorKind.MISSING)
        errors.add("b", ErrorKind.MISSING)

        assert errors.pairs() == [
            ("b", ErrorKind.INVALID),
            ("a", ErrorKind.MISSING),
            ("b", ErrorKind.MISSING),
        ]
        assert errors.names() == ["b", "a"]
        assert [f.kind for f in errors.for_name("b")] == [ErrorKind.INVALID, ErrorKind.MISSING]

    def test_container_protocol(self):
        """Test membership, indexing and iteration."""
        errors = Errors([FilterFailure("count", ErrorKind.MISSING)])

        assert "count" in errors
        assert "flag" not in errors
        assert errors[0].name == "count"
        assert [f.name for f in errors] == ["count"]

    def test_extend_and_clear(self):
        """Test extending with another collection, then clearing."""
        errors = Errors()
        other = Errors()
        other.add("x", ErrorKind.INVALID)
        errors.extend(other)

        assert errors.pairs() == [("x", ErrorKind.INVALID)]
        errors.clear()
        assert not errors


# =============================================================================
# Collection Tests
# =============================================================================


class TestCollectErrors:
    """Test the conversion of cleaning outcomes into errors."""

    def test_collect_in_outcome_order(self):
        """Test that only failing outcomes are collected, in order."""
        outcomes = {
            "first": Coerced(failure=InvalidValueError("first", "x")),
            "second": Coerced(2),
            "third": Coerced(failure=MissingValueError("third")),
        }

        assert collect_errors(outcomes).pairs() == [
            ("first", ErrorKind.INVALID),
            ("third", ErrorKind.MISSING),
        ]
