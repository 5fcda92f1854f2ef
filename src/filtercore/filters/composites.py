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
Description: Composite filter kinds. An array cleans each of its members with an element filter,
            a hash runs a whole nested cleaning pass over its child filters.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..cleaning import clean_inputs
from ..errors import InvalidFilterError, InvalidNestedValueError
from ..inputs import normalize_keys
from ..validation import Errors, FilterFailure
from .base import Default, Filter, NO_DEFAULT


class Array(Filter):
    """Accepts lists and tuples, cleaned into a list.

    Args:
        of (Filter | None): unnamed filter applied to every member. Members are kept as is when
            None.

    Raises:
        InvalidFilterError: Raised when the element filter is not an unnamed filter.

    Examples:
        >>> tags = Array(String())
        >>> tags.clean(["a ", "b"]).value
        ['a', 'b']
    """

    kind = "array"

    def __init__(
        self,
        of: Filter | None = None,
        *,
        name: str | None = None,
        default: Default = NO_DEFAULT,
        desc: str | None = None,
    ) -> None:
        super().__init__(name=name, default=default, desc=desc)
        if of is not None:
            if not isinstance(of, Filter):
                raise InvalidFilterError(f"Array element filter must be a Filter, got {of!r}.")
            if of.name is not None:
                raise InvalidFilterError(
                    f"Array element filters cannot be named, got '{of.name}'."
                )
            of.check_default()
        self.of = of

    def cast(self, value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            raise self.invalid(value, "not an array")
        if self.of is None:
            return list(value)

        items: list[Any] = []
        errors = Errors()
        for index, item in enumerate(value):
            outcome = self.of.clean(item)
            if outcome.failure is not None:
                errors.add_failure(FilterFailure.from_error(index, outcome.failure))
            else:
                items.append(outcome.value)
        if errors:
            raise InvalidNestedValueError(self.name, value, errors)
        return items


class Hash(Filter):
    """Accepts mappings. Child filters are cleaned with a nested pass over the mapping.

    Args:
        children (Mapping[str, Filter] | None): child filters by name. The filters view of an
            interaction can be given to reuse its declarations.
        strip (bool): when True, only the children keys are kept. Otherwise undeclared keys are
            kept untouched next to the cleaned children.

    Raises:
        InvalidFilterError: Raised when a child is not a filter or has an empty name.

    Examples:
        >>> point = Hash({"x": Integer(), "y": Integer(default=0)})
        >>> point.clean({"x": "3"}).value
        {'x': 3, 'y': 0}
    """

    kind = "hash"

    def __init__(
        self,
        children: Mapping[str, Filter] | None = None,
        *,
        strip: bool = True,
        name: str | None = None,
        default: Default = NO_DEFAULT,
        desc: str | None = None,
    ) -> None:
        super().__init__(name=name, default=default, desc=desc)
        named: dict[str, Filter] = {}
        for child_name, child in (children or {}).items():
            if not isinstance(child, Filter):
                raise InvalidFilterError(f"Hash child '{child_name}' must be a Filter.")
            if not isinstance(child_name, str) or not child_name:
                raise InvalidFilterError(f"Invalid hash child name {child_name!r}.")
            if child.name != child_name:
                child = child.named(child_name)
            child.check_default()
            named[child_name] = child
        self.children = MappingProxyType(named)
        self.strip = strip

    def cast(self, value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            raise self.invalid(value, "not a mapping")
        result = clean_inputs(self.children, value)
        if result.errors:
            raise InvalidNestedValueError(self.name, value, result.errors)
        cleaned = result.attributes.to_dict()
        if self.strip:
            return cleaned
        return normalize_keys(value) | cleaned
