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
Description: Translation of type annotations into filters, so that `count: int` in an interaction
            body declares an integer filter. The translation can be extended with
            register_creator and register_filter.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import datetime
import decimal
import io
from functools import lru_cache
from typing import Any, Callable, TypeAlias, get_args, get_origin

from ..errors import InvalidFilterError
from ..meta.typing.utilities import Annotation, is_union, strip_optional
from .base import Default, Filter, NO_DEFAULT
from .composites import Array, Hash
from .objects import File, Model
from .scalars import Boolean, Decimal, Float, Integer, String
from .temporal import Date, DateTime

FilterCreator: TypeAlias = Callable[[list[Filter], Annotation], Filter]


class AnnotationFilters:
    """
    A registry of filter creators by annotation. Creators receive the filters of the inner
    annotations (for list[int], [Integer()]) and the complete annotation.
    """

    __creators: dict[Annotation, FilterCreator]

    def __init__(self) -> None:
        self.__creators = {}

    def register_creator(self, annotation: Annotation, creator: FilterCreator) -> None:
        """Register a filter creator for an annotation or an annotation origin.

        Args:
            annotation (Annotation): The annotation (int) or origin (list) to register.
            creator (FilterCreator): Creates the filter from the inner filters and the annotation.
        """
        self.__creators[annotation] = creator

    def register_filter(self, annotation: Annotation, filter_class: type[Filter]) -> None:
        """Shortcut to register a filter class instantiated without argument."""
        self.register_creator(annotation, lambda _inner, _annotation: filter_class())

    def has_creator(self, annotation: Annotation) -> bool:
        return annotation in self.__creators

    def list_registered_types(self) -> list[Annotation]:
        """Get all registered types for debugging/introspection."""
        return list(self.__creators)

    def __filter_from_annotation(self, annotation: Annotation) -> Filter:
        creator = self.__creators.get(annotation)
        if creator:
            return creator([], annotation)

        # Retrieve the origin of the annotation. Ex.: list[int] -> list
        origin = get_origin(annotation)
        if origin is not None and origin in self.__creators:
            inner = [
                self.filter_from_annotation(arg)
                for arg in get_args(annotation)
                if arg is not Ellipsis
            ]
            return self.__creators[origin](inner, annotation)

        if is_union(annotation):
            raise InvalidFilterError(
                f"Could not deduce filter from annotation: {annotation}. Unions are only"
                " supported with None."
            )
        if annotation is Any:
            raise InvalidFilterError("Could not deduce filter from annotation: Any.")
        if isinstance(annotation, type):
            return Model(annotation)
        raise InvalidFilterError(
            f"Could not deduce filter from annotation: {annotation}. Not a type and no"
            " registered origin found."
        )

    def filter_from_annotation(
        self, annotation: Annotation, default: Default = NO_DEFAULT
    ) -> Filter:
        """Create an unnamed filter from an annotation. Optionals default to None unless a default
        is given.

        Examples:
            >>> annotation_filters().filter_from_annotation(list[int] | None)
            <Array None>

        Args:
            annotation (Annotation): The annotation to translate.
            default (Any): The default of the created filter.

        Raises:
            InvalidFilterError: Raised when the annotation cannot be translated.

        Returns:
            Filter: The filter.
        """
        inner, optional = strip_optional(annotation)
        if optional and default is NO_DEFAULT:
            default = None
        created = self.__filter_from_annotation(inner)
        return created if default is NO_DEFAULT else created.with_default(default)


@lru_cache(1)
def annotation_filters() -> AnnotationFilters:
    """Default annotation registry, with the builtin types registered.

    Returns:
        AnnotationFilters: the registry instance.
    """
    af = AnnotationFilters()
    af.register_filter(bool, Boolean)
    af.register_filter(int, Integer)
    af.register_filter(float, Float)
    af.register_filter(decimal.Decimal, Decimal)
    af.register_filter(str, String)
    af.register_filter(datetime.date, Date)
    af.register_filter(datetime.datetime, DateTime)
    af.register_filter(io.IOBase, File)
    af.register_creator(list, lambda inner, _: Array(inner[0] if inner else None))
    af.register_creator(dict, lambda _inner, _: Hash(strip=False))
    return af


def filter_from_annotation(annotation: Annotation, default: Default = NO_DEFAULT) -> Filter:
    """This function is a shortcut to `annotation_filters().filter_from_annotation()`."""
    return annotation_filters().filter_from_annotation(annotation, default)
