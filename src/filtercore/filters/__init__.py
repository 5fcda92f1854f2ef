"""Filter kinds of filtercore.

Examples:
    >>> from filtercore import filters
    >>> filters.Integer().clean("42").value
    42
"""

from .annotations import AnnotationFilters, annotation_filters, filter_from_annotation
from .base import (
    NO_DEFAULT,
    Coerced,
    Filter,
    filter_class_for_kind,
    register_kind,
    registered_kinds,
)
from .composites import Array, Hash
from .objects import File, Interface, Model
from .scalars import Boolean, Decimal, Float, Integer, String, Symbol
from .temporal import Date, DateTime, Time

__all__ = [
    # Base
    "Filter",
    "Coerced",
    "NO_DEFAULT",
    "register_kind",
    "filter_class_for_kind",
    "registered_kinds",
    # Kinds
    "Boolean",
    "String",
    "Symbol",
    "Integer",
    "Float",
    "Decimal",
    "Date",
    "DateTime",
    "Time",
    "Array",
    "Hash",
    "File",
    "Interface",
    "Model",
    # Annotations
    "AnnotationFilters",
    "annotation_filters",
    "filter_from_annotation",
]
