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
Description: Container of the typed values produced by a cleaning pass.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class AttributeSet(Mapping[str, Any]):
    """One slot per declared filter, in declaration order. Slots start as None and receive the
    cleaned values. Only declared names can be assigned.

    Attribute access is a shortcut for item access. Names of the mapping methods (keys, items,
    values, get, present, to_dict) resolve to the methods and are only reachable by item access.

    Examples:
        >>> attributes = AttributeSet(["count", "flag"])
        >>> attributes["count"] = 5
        >>> attributes.count
        5
        >>> attributes.present("flag")
        False
    """

    def __init__(self, names: Iterable[str]) -> None:
        self._values: dict[str, Any] = dict.fromkeys(names)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if name not in self._values:
            raise KeyError(f"'{name}' is not a declared attribute.")
        self._values[name] = value

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError as e:
            raise AttributeError(f"'{name}' is not a declared attribute.") from e

    def present(self, name: str) -> bool:
        """Whether the slot holds a value other than None."""
        return self[name] is not None

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"<AttributeSet({values})>"
