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
Description: Scalar filter kinds: boolean, string, symbol, integer, float and decimal.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import decimal
import math
import numbers
import sys
from typing import Any

from .base import Default, Filter, NO_DEFAULT

_TRUE_STRINGS = frozenset({"1", "true"})
_FALSE_STRINGS = frozenset({"0", "false"})


class Boolean(Filter):
    """Accepts True and False, and their string forms "1", "true", "0", "false" in any case."""

    kind = "boolean"
    column_type = "boolean"

    def cast(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise self.invalid(value, "not a boolean")


class String(Filter):
    """Accepts strings only. Surrounding whitespace is stripped unless strip=False."""

    kind = "string"
    column_type = "string"

    def __init__(
        self,
        *,
        strip: bool = True,
        name: str | None = None,
        default: Default = NO_DEFAULT,
        desc: str | None = None,
    ) -> None:
        super().__init__(name=name, default=default, desc=desc)
        self.strip = strip

    def cast(self, value: Any) -> str:
        if not isinstance(value, str):
            raise self.invalid(value, "not a string")
        return value.strip() if self.strip else value


class Symbol(Filter):
    """Accepts identifier-like strings and interns them."""

    kind = "symbol"
    column_type = "string"

    def cast(self, value: Any) -> str:
        if not isinstance(value, str) or not value.isidentifier():
            raise self.invalid(value, "not an identifier")
        return sys.intern(value)


class Integer(Filter):
    """Accepts real numbers (truncated toward zero) and base 10 integer strings.
    Booleans are rejected even though bool is an int subclass.
    """

    kind = "integer"
    column_type = "integer"

    def cast(self, value: Any) -> int:
        if isinstance(value, bool):
            raise self.invalid(value, "booleans are not integers")
        if isinstance(value, int):
            return value
        try:
            if isinstance(value, (numbers.Real, decimal.Decimal)):
                return int(value)
            if isinstance(value, str):
                return int(value.strip(), 10)
        except (ValueError, OverflowError) as e:
            raise self.invalid(value, str(e)) from e
        raise self.invalid(value, "not an integer")


class Float(Filter):
    """Accepts real numbers and numeric strings. Non finite strings are rejected."""

    kind = "float"
    column_type = "float"

    def cast(self, value: Any) -> float:
        if isinstance(value, bool):
            raise self.invalid(value, "booleans are not floats")
        if isinstance(value, (numbers.Real, decimal.Decimal)):
            return float(value)
        if isinstance(value, str):
            try:
                result = float(value.strip())
            except ValueError as e:
                raise self.invalid(value, str(e)) from e
            if not math.isfinite(result):
                raise self.invalid(value, "not a finite number")
            return result
        raise self.invalid(value, "not a float")


class Decimal(Filter):
    """Accepts decimals, real numbers and numeric strings.

    Args:
        digits (int | None): number of significant digits to round to. None keeps them all.
    """

    kind = "decimal"
    column_type = "decimal"

    def __init__(
        self,
        *,
        digits: int | None = None,
        name: str | None = None,
        default: Default = NO_DEFAULT,
        desc: str | None = None,
    ) -> None:
        super().__init__(name=name, default=default, desc=desc)
        self.digits = digits

    def _to_decimal(self, value: Any) -> decimal.Decimal:
        if isinstance(value, bool):
            raise self.invalid(value, "booleans are not decimals")
        if isinstance(value, decimal.Decimal):
            return value
        if isinstance(value, float):
            # shortest round trip form, not the binary expansion.
            return decimal.Decimal(repr(value))
        if isinstance(value, (int, str)):
            try:
                return decimal.Decimal(value.strip() if isinstance(value, str) else value)
            except decimal.InvalidOperation as e:
                raise self.invalid(value, "not a decimal number") from e
        raise self.invalid(value, "not a decimal")

    def cast(self, value: Any) -> decimal.Decimal:
        result = self._to_decimal(value)
        if not result.is_finite():
            raise self.invalid(value, "not a finite number")
        if self.digits is None:
            return result
        with decimal.localcontext() as ctx:
            ctx.prec = self.digits
            return +result
