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
Description: Tests for the cleaning pass and the attribute set it fills.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from unittest.mock import MagicMock

import pytest

from filtercore.attributes import AttributeSet
from filtercore.cleaning import clean_inputs, validate
from filtercore.errors import ErrorKind
from filtercore.filters import Boolean, Date, Hash, Integer, String
from filtercore.inputs import InputProcessor


@pytest.fixture
def counting_filters():
    """required_count: integer, flag: boolean (default False)."""
    return {
        "required_count": Integer(name="required_count"),
        "flag": Boolean(name="flag", default=False),
    }


# =============================================================================
# AttributeSet Tests
# =============================================================================


class TestAttributeSet:
    """Test the typed slots filled by the cleaning pass."""

    def test_slots_start_as_none(self):
        """Test that every declared slot starts as None, in order."""
        attributes = AttributeSet(["b", "a"])

        assert list(attributes) == ["b", "a"]
        assert attributes.to_dict() == {"b": None, "a": None}
        assert not attributes.present("a")

    def test_assignment(self):
        """Test item and attribute access after assignment."""
        attributes = AttributeSet(["count"])
        attributes["count"] = 0

        assert attributes["count"] == 0
        assert attributes.count == 0
        assert attributes.present("count")

    def test_undeclared_names(self):
        """Test that undeclared names can be neither set nor read."""
        attributes = AttributeSet(["count"])

        with pytest.raises(KeyError):
            attributes["other"] = 1
        with pytest.raises(AttributeError):
            _ = attributes.other

    def test_method_names_need_item_access(self):
        """Test that a slot named after a mapping method is read by item access."""
        attributes = AttributeSet(["keys", "present"])
        attributes["keys"] = 1
        attributes["present"] = 2

        assert attributes["keys"] == 1
        assert list(attributes.keys()) == ["keys", "present"]
        assert attributes.present("present")
        assert attributes.to_dict() == {"keys": 1, "present": 2}


# =============================================================================
# Cleaning Pass Tests
# =============================================================================


class TestCleanInputs:
    """Test the per invocation cleaning pass."""

    def test_valid_inputs(self, counting_filters):
        """Test that supplied values are cast and defaults fill the absent ones."""
        result = clean_inputs(counting_filters, {"required_count": "5"})

        assert result.valid
        assert result.attributes.to_dict() == {"required_count": 5, "flag": False}
        assert not result.errors

    def test_missing_required(self, counting_filters):
        """Test that an absent required value is missing while defaults still apply."""
        result = clean_inputs(counting_filters, {})

        assert result.errors.pairs() == [("required_count", ErrorKind.MISSING)]
        assert result.attributes.flag is False
        assert result.attributes.required_count is None
        assert result.failed == {"required_count"}

    def test_invalid_value(self, counting_filters):
        """Test that a value that cannot be cast is invalid."""
        result = clean_inputs(counting_filters, {"required_count": "abc"})

        assert result.errors.pairs() == [("required_count", ErrorKind.INVALID)]

    def test_no_short_circuit(self):
        """Test that every failure is reported, in declaration order."""
        filters = {
            "first": Integer(name="first"),
            "second": String(name="second"),
            "third": Boolean(name="third"),
        }
        result = clean_inputs(filters, {"first": "one", "second": "two", "third": "three"})

        assert result.errors.pairs() == [
            ("first", ErrorKind.INVALID),
            ("third", ErrorKind.INVALID),
        ]
        assert result.attributes.second == "two"

    def test_errors_follow_declaration_not_input_order(self):
        """Test that the order of the input keys does not change the error order."""
        filters = {"a": Integer(name="a"), "b": Integer(name="b")}
        result = clean_inputs(filters, {"b": "x", "a": "y"})

        assert result.errors.names() == ["a", "b"]

    def test_determinism(self, counting_filters):
        """Test that the same inputs always give the same outcome."""
        first = clean_inputs(counting_filters, {"required_count": "x", "flag": "maybe"})
        second = clean_inputs(counting_filters, {"required_count": "x", "flag": "maybe"})

        assert first.errors.pairs() == second.errors.pairs()
        assert first.attributes == second.attributes

    def test_unknown_keys_are_ignored(self, counting_filters):
        """Test that keys without filter are not errors."""
        result = clean_inputs(counting_filters, {"required_count": 1, "other": "x"})

        assert result.valid
        assert "other" not in result.attributes
        assert result.inputs["other"] == "x"

    def test_none_is_absent(self, counting_filters):
        """Test that None takes the default, or is missing when required."""
        result = clean_inputs(counting_filters, {"required_count": None, "flag": None})

        assert result.errors.pairs() == [("required_count", ErrorKind.MISSING)]
        assert result.attributes.flag is False

    def test_default_is_lazy(self):
        """Test that a deferred default is not evaluated when a value is supplied."""
        default = MagicMock(side_effect=RuntimeError("must not be called"))
        filters = {"count": Integer(name="count", default=default)}

        result = clean_inputs(filters, {"count": "3"})

        assert result.valid
        assert result.attributes.count == 3
        default.assert_not_called()

    def test_deferred_default_is_cast(self):
        """Test that a deferred default is evaluated per pass and cast."""
        default = MagicMock(return_value="7")
        filters = {"count": Integer(name="count", default=default)}

        assert clean_inputs(filters, {}).attributes.count == 7
        assert clean_inputs(filters, {}).attributes.count == 7
        assert default.call_count == 2

    def test_invalid_deferred_default(self):
        """Test that a deferred default that cannot be cast is invalid."""
        filters = {"count": Integer(name="count", default=lambda: "many")}

        assert clean_inputs(filters, {}).errors.pairs() == [("count", ErrorKind.INVALID)]

    def test_non_string_keys(self):
        """Test that keys are normalized before lookup."""
        filters = {"1": String(name="1")}

        assert clean_inputs(filters, {1: "one"}).attributes["1"] == "one"

    def test_non_mapping_inputs(self, counting_filters):
        """Test that inputs must be a mapping."""
        with pytest.raises(TypeError):
            clean_inputs(counting_filters, ["required_count"])

    def test_validate(self, counting_filters):
        """Test that validate only returns the errors."""
        assert validate(counting_filters, {}).pairs() == [("required_count", ErrorKind.MISSING)]


# =============================================================================
# Processor Tests
# =============================================================================


class TestCleanWithProcessor:
    """Test the cleaning pass with reserved keys and grouped inputs."""

    def test_reserved_keys_come_first(self, counting_filters):
        """Test that reserved keys fail even when every filter is valid."""
        processor = InputProcessor({"run"})
        result = clean_inputs(counting_filters, {"required_count": 1, "run": 1}, processor)

        assert result.errors.pairs() == [("run", ErrorKind.INVALID)]
        assert result.attributes.required_count == 1

    def test_reserved_keys_do_not_stop_the_pass(self, counting_filters):
        """Test that filter failures are reported after the reserved keys."""
        processor = InputProcessor()
        result = clean_inputs(counting_filters, {"_interaction_x": 1}, processor)

        assert result.errors.pairs() == [
            ("_interaction_x", ErrorKind.INVALID),
            ("required_count", ErrorKind.MISSING),
        ]

    def test_grouped_date(self):
        """Test that multi-part keys build a date."""
        filters = {"start": Date(name="start")}
        inputs = {"start(1i)": "2025", "start(2i)": "10", "start(3i)": "19"}

        result = clean_inputs(filters, inputs, InputProcessor())

        assert result.attributes.start.isoformat() == "2025-10-19"

    def test_grouped_inputs_need_a_processor(self):
        """Test that without processor multi-part keys are plain keys."""
        filters = {"start": Date(name="start")}

        result = clean_inputs(filters, {"start(1i)": "2025"})

        assert result.errors.pairs() == [("start", ErrorKind.MISSING)]


# =============================================================================
# Nested Pass Tests
# =============================================================================


class TestNestedPass:
    """Test that composite filters run nested passes."""

    def test_nested_aggregation(self):
        """Test that a failing child is attributed to the outer filter and identified."""
        filters = {
            "point": Hash({"x": Integer(), "y": Integer()}, name="point"),
        }
        result = clean_inputs(filters, {"point": {"x": "1", "y": "up"}})

        assert result.errors.pairs() == [("point", ErrorKind.INVALID_NESTED)]
        nested = result.errors[0].nested
        assert nested.pairs() == [("y", ErrorKind.INVALID)]
