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
Description: Validation failures and their ordered collection. The collection is what callers
            inspect after a cleaning pass: an empty collection means the inputs are valid.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

from .errors import ErrorKind, FilterValueError, InvalidNestedValueError

if TYPE_CHECKING:
    from .filters.base import Coerced


@dataclass(frozen=True)
class FilterFailure:
    """A single validation failure.

    Attributes:
        name (str | int): the failing filter name, or the member index inside an array.
        kind (ErrorKind): what went wrong.
        error (FilterValueError | None): the error that produced the failure, if any.
        nested (Errors | None): failures of the members of a composite value.
    """

    name: str | int
    kind: ErrorKind
    error: FilterValueError | None = None
    nested: Errors | None = None

    @classmethod
    def from_error(cls, name: str | int, error: FilterValueError) -> Self:
        """Build a failure attributed to `name` from a cast error."""
        nested = error.errors if isinstance(error, InvalidNestedValueError) else None
        return cls(name, error.kind, error, nested)

    @property
    def message(self) -> str:
        """Human readable description. Falls back to the kind."""
        return str(self.error) if self.error else str(self.kind)

    def as_pair(self) -> tuple[str | int, ErrorKind]:
        return self.name, self.kind

    def to_dict(self) -> dict[str, Any]:
        """Plain representation, suited for API error bodies."""
        d: dict[str, Any] = {"name": self.name, "kind": str(self.kind)}
        if self.nested is not None:
            d["nested"] = self.nested.to_list()
        return d


class Errors:
    """Ordered collection of FilterFailure. Order is the order in which failures were added,
    which the cleaning pass keeps equal to the filters declaration order.
    """

    def __init__(self, failures: Iterable[FilterFailure] = ()) -> None:
        self._failures: list[FilterFailure] = list(failures)

    def add(
        self,
        name: str | int,
        kind: ErrorKind,
        error: FilterValueError | None = None,
        nested: Errors | None = None,
    ) -> FilterFailure:
        """Record a new failure and return it."""
        failure = FilterFailure(name, kind, error, nested)
        self._failures.append(failure)
        return failure

    def add_failure(self, failure: FilterFailure) -> None:
        self._failures.append(failure)

    def extend(self, failures: Iterable[FilterFailure]) -> None:
        """Append all the provided failures, keeping their order."""
        self._failures.extend(failures)

    def clear(self) -> None:
        self._failures.clear()

    def pairs(self) -> list[tuple[str | int, ErrorKind]]:
        """All the failures as (name, kind) pairs."""
        return [f.as_pair() for f in self._failures]

    def names(self) -> list[str | int]:
        """Failing names without duplicates, in order of first failure."""
        return list(dict.fromkeys(f.name for f in self._failures))

    def for_name(self, name: str | int) -> list[FilterFailure]:
        return [f for f in self._failures if f.name == name]

    def to_list(self) -> list[dict[str, Any]]:
        return [f.to_dict() for f in self._failures]

    def __iter__(self) -> Iterator[FilterFailure]:
        return iter(self._failures)

    def __len__(self) -> int:
        return len(self._failures)

    def __bool__(self) -> bool:
        return bool(self._failures)

    def __getitem__(self, index: int) -> FilterFailure:
        return self._failures[index]

    def __contains__(self, name: object) -> bool:
        return any(f.name == name for f in self._failures)

    def __repr__(self) -> str:
        return f"<Errors {self.pairs()!r}>"


def collect_errors(outcomes: Mapping[str, Coerced]) -> Errors:
    """Convert the failing outcomes of a cleaning pass into an error collection.

    Args:
        outcomes (Mapping[str, Coerced]): outcome per filter name, in declaration order.

    Returns:
        Errors: one failure per failing filter, in the order of `outcomes`.
    """
    return Errors(
        FilterFailure.from_error(name, outcome.failure)
        for name, outcome in outcomes.items()
        if outcome.failure is not None
    )
