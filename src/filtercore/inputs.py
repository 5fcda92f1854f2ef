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
Description: Pre-pass over raw inputs. Keys are normalized, reserved keys are rejected and
            multi-part keys such as "start(1i)" are grouped before any filter runs.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Final

from .errors import InvalidValueError


class _Absent(Enum):
    ABSENT = "absent"

    def __repr__(self) -> str:
        return "<absent>"


ABSENT: Final = _Absent.ABSENT
"""Marks an input key that was not supplied."""

RESERVED_PREFIX: Final[str] = "_interaction_"

_GROUPED_KEY: Final = re.compile(r"\A(?P<name>.+)\((?P<index>\d+)i\)\Z")


class GroupedInput(dict[int, Any]):
    """Parts of a value split over several input keys, indexed from 1.

    {"start(1i)": "2025", "start(2i)": "10", "start(3i)": "19"} is grouped as
    GroupedInput({1: "2025", 2: "10", 3: "19"}) under the "start" key.
    """

    def integers(self) -> list[int]:
        """The parts ordered by index and converted to int.

        Raises:
            ValueError: Raised when a part is not an integer.
        """
        return [int(self[index]) for index in sorted(self)]

    def __repr__(self) -> str:
        return f"GroupedInput({dict(self)!r})"


def normalize_key(key: Any) -> str:
    """Canonical form of an input key: strings are kept, anything else goes through str."""
    return key if isinstance(key, str) else str(key)


def normalize_keys(inputs: Mapping[Any, Any]) -> dict[str, Any]:
    """Copy a mapping with normalized keys. Later duplicates win.

    Raises:
        TypeError: Raised when inputs is not a mapping.
    """
    if not isinstance(inputs, Mapping):
        raise TypeError(f"Inputs must be a mapping, got {type(inputs).__name__}.")
    return {normalize_key(k): v for k, v in inputs.items()}


class InputProcessor:
    """Guard and normalize a raw input mapping before cleaning.

    Args:
        reserved_names (Iterable[str]): names reserved by the surrounding machinery, on top of
            every name starting with RESERVED_PREFIX.
    """

    def __init__(self, reserved_names: Iterable[str] = ()) -> None:
        self.reserved_names = frozenset(reserved_names)

    def reserved(self, name: str) -> bool:
        """Whether `name` collides with internal machinery."""
        return name.startswith(RESERVED_PREFIX) or name in self.reserved_names

    def reserved_key_errors(self, inputs: Mapping[str, Any]) -> list[InvalidValueError]:
        """One error per reserved key of `inputs`, in key order."""
        return [
            InvalidValueError(key, value, "reserved input name")
            for key, value in inputs.items()
            if self.reserved(key)
        ]

    @staticmethod
    def group(inputs: Mapping[str, Any]) -> dict[str, Any]:
        """Group multi-part keys into GroupedInput values. A plain key and a group sharing a name
        resolve to the group.
        """
        result: dict[str, Any] = {}
        for key, value in inputs.items():
            match = _GROUPED_KEY.match(key)
            if match is None:
                result.setdefault(key, value)
                continue
            group = result.get(match["name"])
            if not isinstance(group, GroupedInput):
                group = result[match["name"]] = GroupedInput()
            group[int(match["index"])] = value
        return result

    def process(
        self, inputs: Mapping[Any, Any]
    ) -> tuple[dict[str, Any], list[InvalidValueError]]:
        """Normalize `inputs`, then collect reserved key errors and group multi-part keys.

        Args:
            inputs (Mapping[Any, Any]): the raw inputs.

        Raises:
            TypeError: Raised when inputs is not a mapping.

        Returns:
            tuple[dict[str, Any], list[InvalidValueError]]: the processed inputs and the errors
                of the reserved keys. Reserved keys are kept in the processed inputs, filters
                never read them since no filter can be declared with a reserved name.
        """
        normalized = normalize_keys(inputs)
        return self.group(normalized), self.reserved_key_errors(normalized)
