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
Description: Date and time filter kinds: date, date_time and time (timestamps).
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import numbers
from datetime import date, datetime, timezone
from typing import Any

from ..inputs import GroupedInput
from .base import Default, Filter, NO_DEFAULT


class _TemporalFilter(Filter):
    """Shared parsing of strings and grouped inputs.

    Args:
        format (str | None): strptime format for strings. ISO 8601 is expected when None.
    """

    def __init__(
        self,
        *,
        format: str | None = None,  # pylint: disable=redefined-builtin
        name: str | None = None,
        default: Default = NO_DEFAULT,
        desc: str | None = None,
    ) -> None:
        super().__init__(name=name, default=default, desc=desc)
        self.format = format

    def _parse(self, value: str) -> datetime:
        text = value.strip()
        if self.format:
            return datetime.strptime(text, self.format)
        return datetime.fromisoformat(text)

    def _convert(self, value: Any) -> Any:
        raise NotImplementedError

    def cast(self, value: Any) -> Any:
        try:
            return self._convert(value)
        except (ValueError, TypeError, OverflowError, OSError) as e:
            raise self.invalid(value, str(e)) from e


class Date(_TemporalFilter):
    """Accepts dates, datetimes (their date part), strings and grouped inputs (year, month, day)."""

    kind = "date"
    column_type = "date"

    def _convert(self, value: Any) -> date:
        match value:
            case datetime():
                return value.date()
            case date():
                return value
            case str():
                if self.format:
                    return self._parse(value).date()
                return date.fromisoformat(value.strip())
            case GroupedInput():
                return date(*value.integers()[:3])
        raise self.invalid(value, "not a date")


class DateTime(_TemporalFilter):
    """Accepts datetimes, strings and grouped inputs (year, month, day[, hour, minute, second])."""

    kind = "date_time"
    column_type = "datetime"

    def _convert(self, value: Any) -> datetime:
        match value:
            case datetime():
                return value
            case str():
                return self._parse(value)
            case GroupedInput():
                return datetime(*value.integers()[:6])
        raise self.invalid(value, "not a datetime")


class Time(DateTime):
    """A point in time. Accepts what DateTime accepts plus POSIX timestamps, converted to aware
    UTC datetimes.
    """

    kind = "time"
    column_type = "time"

    def _convert(self, value: Any) -> datetime:
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        return super()._convert(value)
