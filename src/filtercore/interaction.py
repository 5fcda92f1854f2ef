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
Description: This module provides Interaction, the base class of units of business logic whose
            inputs are declared in the class body and cleaned before the logic runs.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Final, Self

from .cleaning import clean_inputs
from .errors import FilterCoreError, InvalidFilterError, InvalidInteractionError
from .filters.annotations import filter_from_annotation
from .filters.base import Filter, NO_DEFAULT
from .inputs import ABSENT, InputProcessor, normalize_keys
from .meta.typing.utilities import is_class_var, resolve_class_annotations
from .registry import FilterImport, FilterRegistry, Names
from .validation import Errors

logger = logging.getLogger(__name__)

RESERVED_NAMES: Final = frozenset(
    {
        "run",
        "run_or_raise",
        "execute",
        "errors",
        "inputs",
        "raw_inputs",
        "result",
        "is_valid",
        "compose",
        "filters",
        "declare",
        "import_filters",
        "desc",
    }
)
"""Names of the Interaction machinery. They can be neither declared nor supplied as inputs."""

PROCESSOR: Final = InputProcessor(RESERVED_NAMES)


def reserved_name(name: str) -> bool:
    """Whether `name` cannot be used as a filter name."""
    return PROCESSOR.reserved(name) or (name.startswith("__") and name.endswith("__"))


class _Interrupt(FilterCoreError):
    """Stops the execute of an interaction when a composed interaction fails."""

    def __init__(self, errors: Errors) -> None:
        super().__init__("Composed interaction failed.")
        self.errors = errors


class FilterAttribute:
    """Data descriptor giving access to the cleaned value of a filter. Accessed on the class, it
    returns the filter itself.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: Interaction | None, owner: type[Interaction]) -> Any:
        if instance is None:
            return owner.__filters__[self.name]
        return instance._interaction_attributes[self.name]

    def __set__(self, instance: Interaction, value: Any) -> None:
        instance._interaction_attributes[self.name] = value
        instance._interaction_failed.discard(self.name)

    def __repr__(self) -> str:
        return f"<FilterAttribute {self.name!r}>"


def _presence_predicate(name: str) -> Callable[[Interaction], bool]:
    def predicate(self: Interaction) -> bool:
        return self._interaction_attributes.present(name)

    predicate.__name__ = predicate.__qualname__ = f"has_{name}"
    predicate.__doc__ = f"Whether '{name}' holds a value."
    predicate.__presence_of__ = name  # type: ignore[attr-defined]
    return predicate


def _is_predicate(attribute: Any) -> bool:
    return getattr(attribute, "__presence_of__", None) is not None


def _install_accessors(cls: InteractionMeta, names: Iterable[str]) -> None:
    """Install the descriptor and the `has_<name>` predicate of each filter name.

    Raises:
        InvalidFilterError: Raised when an accessor would hide an attribute that is not a filter
            accessor.
    """
    names = list(names)
    batch = set(names)
    for name in names:
        if f"has_{name}" in batch:
            raise InvalidFilterError(
                f"Filters 'has_{name}' and '{name}' of '{cls.__name__}' cannot both be declared:"
                f" 'has_{name}' is the presence predicate of '{name}'."
            )
        if _is_predicate(getattr(cls, name, None)):
            raise InvalidFilterError(
                f"Filter '{name}' of '{cls.__name__}' collides with a presence predicate."
            )
        existing = getattr(cls, f"has_{name}", None)
        if existing is not None and getattr(existing, "__presence_of__", None) != name:
            raise InvalidFilterError(
                f"Filter '{name}' of '{cls.__name__}' needs the 'has_{name}' attribute, which is"
                " already defined."
            )
    for name in names:
        type.__setattr__(cls, name, FilterAttribute(name))
        type.__setattr__(cls, f"has_{name}", _presence_predicate(name))


def _as_imports(imports: Any) -> list[FilterImport]:
    if imports is None:
        return []
    if isinstance(imports, (FilterImport, type, Mapping)):
        imports = [imports]
    return [i if isinstance(i, FilterImport) else FilterImport(i) for i in imports]


def _public(name: str, allow_private: bool) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    return allow_private or not name.startswith("_")


def _body_filters(
    cls: type, namespace: dict[str, Any], allow_private: bool
) -> dict[str, Filter]:
    """Collect the filters declared in a class body: annotated names first, then plain filter
    assignments.

    Raises:
        InvalidFilterError: Raised when an annotation cannot be evaluated or translated.
    """
    try:
        annotations = resolve_class_annotations(cls)
    except NameError as e:
        raise InvalidFilterError(
            f"Could not evaluate the annotations of '{cls.__name__}': {e}"
        ) from e

    found: dict[str, Filter] = {}
    for attr, annotation in annotations.items():
        if is_class_var(annotation) or not _public(attr, allow_private):
            continue
        value = namespace.get(attr, NO_DEFAULT)
        if isinstance(value, Filter):
            found[attr] = value.named(attr)
            continue
        try:
            found[attr] = filter_from_annotation(annotation, value).named(attr)
        except InvalidFilterError as e:
            raise InvalidFilterError(f"Filter '{attr}' of '{cls.__name__}': {e}") from e

    for attr, value in namespace.items():
        if isinstance(value, Filter) and attr not in found and _public(attr, allow_private):
            found[attr] = value.named(attr)
    return found


class InteractionMeta(type):
    """Builds the filter registry of an interaction class.

    The registry starts from the filters of the interaction bases, then receives the `imports`
    and finally the filters declared in the class body.

    Args:
        allow_private (bool): whether names starting with "_" declare filters.
        imports (Any): an interaction class, a FilterImport, or a sequence of them.
        desc (str | None): description of the interaction.
    """

    __filters__: FilterRegistry
    __description__: str | None

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        /,
        allow_private: bool = False,
        imports: Any = None,
        desc: str | None = None,
        **kwargs: Any,
    ) -> Any:
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        # inherited filters, the first base wins.
        registry = FilterRegistry(reserved=reserved_name)
        for base in reversed(bases):
            if isinstance(base, InteractionMeta):
                registry.import_from(base.__filters__)

        for filter_import in _as_imports(imports):
            filter_import.apply(registry)

        for filter_ in _body_filters(cls, namespace, allow_private).values():
            registry.add(filter_)

        _install_accessors(cls, registry)
        type.__setattr__(cls, "__filters__", registry)
        type.__setattr__(cls, "__description__", desc)
        logger.debug("Created interaction %s with filters %s", name, list(registry))
        return cls

    def _update_filters(cls, change: Callable[[FilterRegistry], list[str]]) -> list[str]:
        # the registry is swapped only once the accessors are installed.
        registry = cls.__filters__.copy()
        names = change(registry)
        _install_accessors(cls, names)
        type.__setattr__(cls, "__filters__", registry)
        return names


class Interaction(metaclass=InteractionMeta):
    """Base class of the units of business logic with declared inputs.

    Examples:
        >>> class Resize(Interaction):
        ...     width: int
        ...     height: int = 100
        ...     keep_ratio = filters.Boolean(default=False)
        ...
        ...     def execute(self):
        ...         return self.width * self.height

        >>> Resize.run(width="3").result
        300

        >>> outcome = Resize.run({})
        >>> outcome.errors.pairs()
        [('width', <ErrorKind.MISSING: 'missing'>)]

        >>> Resize.run_or_raise(width="three") # raises InvalidInteractionError.

    Args:
        inputs (Mapping[Any, Any] | None): the raw inputs.
        **kwargs (Any): more raw inputs, merged over `inputs`.

    Raises:
        TypeError: Raised when inputs is not a mapping.
    """

    __filters__: ClassVar[FilterRegistry]
    __description__: ClassVar[str | None]

    def __init__(self, inputs: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> None:
        raw = normalize_keys(inputs) if inputs is not None else {}
        raw.update(kwargs)
        cleaned = clean_inputs(type(self).__filters__, raw, PROCESSOR)
        self._interaction_inputs = cleaned.inputs
        self._interaction_attributes = cleaned.attributes
        self._interaction_failed = cleaned.failed
        self._interaction_errors = cleaned.errors
        # reserved keys never name a filter.
        self._interaction_reserved = [
            f for f in cleaned.errors if f.name not in type(self).__filters__
        ]
        self._interaction_result: Any = None
        self._interaction_ran = False

    # -------------------------------------------------------------------------
    # Class surface
    # -------------------------------------------------------------------------

    @classmethod
    def filters(cls) -> Mapping[str, Filter]:
        """Read-only view of the declared filters, in declaration order."""
        return cls.__filters__.view()

    @classmethod
    def desc(cls) -> str | None:
        return cls.__description__

    @classmethod
    def declare(cls, kind: str | type[Filter], *names: str, **options: Any) -> list[Filter]:
        """Declare filters after the class creation. See FilterRegistry.declare.

        Examples:
            >>> Resize.declare("integer", "depth", default=1)
        """
        declared: list[Filter] = []

        def change(registry: FilterRegistry) -> list[str]:
            declared.extend(registry.declare(kind, *names, **options))
            return [f.name for f in declared]  # type: ignore[misc]

        cls._update_filters(change)
        return declared

    @classmethod
    def import_filters(
        cls, source: Any, *, only: Names | None = None, exclude: Names | None = None
    ) -> list[str]:
        """Import the filters of another interaction or filters mapping. `only` is applied first,
        then `exclude`.

        Returns:
            list[str]: the imported names.
        """
        return cls._update_filters(
            lambda registry: registry.import_from(source, only=only, exclude=exclude)
        )

    @classmethod
    def run(cls, inputs: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> Self:
        """Clean the inputs and call execute when they are valid.

        Returns:
            Self: the interaction, holding either the result or the errors.
        """
        interaction = cls(inputs, **kwargs)
        interaction._interaction_run()
        return interaction

    @classmethod
    def run_or_raise(cls, inputs: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> Any:
        """Like run, but return the result.

        Raises:
            InvalidInteractionError: Raised when the inputs are invalid.
        """
        interaction = cls.run(inputs, **kwargs)
        if interaction.errors:
            raise InvalidInteractionError(interaction.errors)
        return interaction.result

    # -------------------------------------------------------------------------
    # Instance surface
    # -------------------------------------------------------------------------

    @property
    def inputs(self) -> Mapping[str, Any]:
        """The current value of every filter, in declaration order."""
        return MappingProxyType(self._interaction_attributes.to_dict())

    @property
    def raw_inputs(self) -> Mapping[str, Any]:
        """The raw inputs, keys normalized and multi-part keys grouped."""
        return MappingProxyType(self._interaction_inputs)

    @property
    def errors(self) -> Errors:
        return self._interaction_errors

    @property
    def result(self) -> Any:
        return self._interaction_result

    def is_valid(self) -> bool:
        """Validate the current values. Once run, report the outcome of the run."""
        if not self._interaction_ran:
            self._interaction_errors = self._interaction_validate()
        return not self._interaction_errors

    def execute(self) -> Any:
        """The business logic. Only called with valid inputs."""
        raise NotImplementedError(f"{type(self).__name__} does not implement execute.")

    def compose(
        self, other: type[Interaction], inputs: Mapping[Any, Any] | None = None, /, **kwargs: Any
    ) -> Any:
        """Run another interaction from execute and return its result. When it fails, the
        current execute stops and the errors of `other` are merged into the current errors.
        """
        outcome = other.run(inputs, **kwargs)
        if outcome.errors:
            raise _Interrupt(outcome.errors)
        return outcome.result

    def _interaction_validate(self) -> Errors:
        values: dict[str, Any] = {}
        for name in type(self).__filters__:
            if name in self._interaction_failed:
                values[name] = self._interaction_inputs.get(name, ABSENT)
            else:
                values[name] = self._interaction_attributes[name]
        errors = Errors(self._interaction_reserved)
        errors.extend(clean_inputs(type(self).__filters__, values).errors)
        return errors

    def _interaction_run(self) -> None:
        valid = self.is_valid()
        self._interaction_ran = True
        if not valid:
            logger.debug(
                "%s not executed: %s", type(self).__name__, self._interaction_errors.pairs()
            )
            return
        try:
            self._interaction_result = self.execute()
        except _Interrupt as interrupt:
            self._interaction_errors.extend(interrupt.errors)
            logger.debug("%s interrupted by a composed interaction", type(self).__name__)

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self._interaction_attributes.items())
        return f"<{type(self).__name__}({values})>"
