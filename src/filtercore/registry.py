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
Description: Ordered registry of the filters declared by a class. Subclasses start from a copy of
            their parent registry and registries can import each other's filters.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import keyword
import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Callable, TypeAlias

from .errors import InvalidFilterError
from .filters.base import Filter, filter_class_for_kind

logger = logging.getLogger(__name__)

Names: TypeAlias = str | Iterable[str]


def _name_set(names: Names | None) -> frozenset[str] | None:
    if names is None:
        return None
    if isinstance(names, str):
        return frozenset((names,))
    return frozenset(names)


def filters_of(source: Any) -> Mapping[str, Filter]:
    """Get the filters of an import source: a mapping of filters, or an object with a
    `filters()` method such as an interaction class.

    Raises:
        InvalidFilterError: Raised when the source holds no filters.
    """
    if isinstance(source, Mapping):
        return source
    getter = getattr(source, "filters", None)
    if callable(getter):
        return getter()
    raise InvalidFilterError(f"Cannot import filters from {source!r}.")


class FilterImport:
    """A deferred import of filters, used in class keywords:

    Examples:
        >>> class UpdateUser(Interaction, imports=FilterImport(CreateUser, exclude="password")):
        ...     id: int

    Args:
        source (Any): the interaction class or filters mapping to import from.
        only (str | Iterable[str] | None): import only these names.
        exclude (str | Iterable[str] | None): do not import these names.
    """

    def __init__(
        self, source: Any, *, only: Names | None = None, exclude: Names | None = None
    ) -> None:
        self.source = source
        self.only = only
        self.exclude = exclude

    def apply(self, registry: FilterRegistry) -> list[str]:
        """Import into `registry`. Returns the imported names."""
        return registry.import_from(self.source, only=self.only, exclude=self.exclude)

    def __repr__(self) -> str:
        return f"FilterImport({self.source!r}, only={self.only!r}, exclude={self.exclude!r})"


class FilterRegistry(Mapping[str, Filter]):
    """Filters by name, in declaration order.

    Args:
        filters (Mapping[str, Filter] | None): initial filters, copied.
        reserved (Callable[[str], bool] | None): predicate of the names that cannot be declared.
    """

    def __init__(
        self,
        filters: Mapping[str, Filter] | None = None,
        *,
        reserved: Callable[[str], bool] | None = None,
    ) -> None:
        self._filters: dict[str, Filter] = dict(filters or {})
        self._reserved = reserved

    def copy(self) -> FilterRegistry:
        """Independent shallow copy: filters are shared, the mapping is not."""
        return FilterRegistry(self._filters, reserved=self._reserved)

    def view(self) -> Mapping[str, Filter]:
        """Read-only live view of the filters."""
        return MappingProxyType(self._filters)

    def verify_name(self, name: Any) -> None:
        """Verify that `name` can be declared.

        Raises:
            InvalidFilterError: Raised when the name is not an identifier, is a keyword or is
                reserved.
        """
        if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
            raise InvalidFilterError(f"Invalid filter name {name!r}.")
        if self._reserved is not None and self._reserved(name):
            raise InvalidFilterError(f"Filter name {name!r} is reserved.")

    def add(self, filter_: Filter) -> Filter:
        """Declare a named filter, replacing any filter of the same name.

        Raises:
            InvalidFilterError: Raised when the name cannot be declared.
            InvalidDefaultError: Raised when the static default of the filter is invalid.
        """
        self.verify_name(filter_.name)
        filter_.check_default()
        self._filters[filter_.name] = filter_  # type: ignore[index]
        logger.debug("Declared %s filter %r", filter_.kind, filter_.name)
        return filter_

    def declare(self, kind: str | type[Filter], *names: str, **options: Any) -> list[Filter]:
        """Declare one filter per name, all of the same kind and options.

        Examples:
            >>> registry.declare("integer", "width", "height", default=0)

        Args:
            kind (str | type[Filter]): a registered kind name or a Filter subclass.
            *names (str): the filter names.
            **options (Any): the filter options (default, desc and kind specific options).

        Raises:
            InvalidFilterError: Raised when no name is given, a name is invalid or reserved, the
                kind is unknown or the options are not accepted by the kind.

        Returns:
            list[Filter]: the declared filters.
        """
        if not names:
            raise InvalidFilterError("Missing filter name.")
        filter_class = filter_class_for_kind(kind)
        for name in names:
            self.verify_name(name)
        declared = []
        for name in names:
            try:
                created = filter_class(name=name, **options)
            except TypeError as e:
                raise InvalidFilterError(
                    f"Invalid options for {filter_class.kind} filter '{name}': {e}"
                ) from e
            declared.append(self.add(created))
        return declared

    def remove(self, name: str) -> Filter:
        """Remove a filter. Raises KeyError when it is not declared."""
        return self._filters.pop(name)

    def import_from(
        self, source: Any, *, only: Names | None = None, exclude: Names | None = None
    ) -> list[str]:
        """Copy the filters of another registry. The filter objects are shared.

        `only` is applied first, then `exclude` on the result. Names present in the source but not
        in `only` are never imported. Imported names overwrite existing ones.

        Args:
            source (Any): a mapping of filters or an object with a `filters()` method.
            only (str | Iterable[str] | None): import only these names.
            exclude (str | Iterable[str] | None): do not import these names.

        Returns:
            list[str]: the imported names, in the source order.
        """
        selected = dict(filters_of(source))
        only_names = _name_set(only)
        if only_names is not None:
            selected = {k: v for k, v in selected.items() if k in only_names}
        excluded = _name_set(exclude)
        if excluded is not None:
            selected = {k: v for k, v in selected.items() if k not in excluded}

        for name in selected:
            self.verify_name(name)
        self._filters.update(selected)
        logger.debug("Imported filters %s", list(selected))
        return list(selected)

    def __getitem__(self, name: str) -> Filter:
        return self._filters[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __repr__(self) -> str:
        return f"<FilterRegistry {list(self._filters)}>"
