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
Description: Object filter kinds: file, interface and model. They never convert, they only check
            the value and return it.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import importlib
import io
from collections.abc import Iterable
from typing import Any

from ..errors import InvalidClassError, InvalidFilterError
from .base import Default, Filter, NO_DEFAULT


def _unchecked_protocol(class_: type) -> bool:
    """Whether `class_` is a Protocol that isinstance cannot check."""
    return bool(getattr(class_, "_is_protocol", False)) and not getattr(
        class_, "_is_runtime_protocol", False
    )


class File(Filter):
    """Accepts file objects: io.IOBase instances, or anything with a callable read."""

    kind = "file"
    column_type = "file"

    def cast(self, value: Any) -> Any:
        if isinstance(value, io.IOBase) or callable(getattr(value, "read", None)):
            return value
        raise self.invalid(value, "not a file")


class Interface(Filter):
    """Accepts objects providing a set of methods, or instances of a protocol.

    Args:
        methods (Iterable[str]): names of the callables the value must provide.
        protocol (type | None): a runtime checkable Protocol or an ABC the value must implement.

    Raises:
        InvalidFilterError: Raised when neither methods nor protocol is given, or when the protocol
            is not a class that isinstance can check.
    """

    kind = "interface"

    def __init__(
        self,
        *,
        methods: Iterable[str] = (),
        protocol: type | None = None,
        name: str | None = None,
        default: Default = NO_DEFAULT,
        desc: str | None = None,
    ) -> None:
        super().__init__(name=name, default=default, desc=desc)
        self.methods = tuple(methods)
        self.protocol = protocol
        if not self.methods and protocol is None:
            raise InvalidFilterError("Interface filters need methods or a protocol.")
        if protocol is not None and (
            not isinstance(protocol, type) or _unchecked_protocol(protocol)
        ):
            raise InvalidFilterError(
                f"Interface protocol {protocol!r} must be a class or a runtime checkable Protocol."
            )

    def cast(self, value: Any) -> Any:
        if self.protocol is not None and not isinstance(value, self.protocol):
            raise self.invalid(value, f"does not implement {self.protocol.__name__}")
        missing = [m for m in self.methods if not callable(getattr(value, m, None))]
        if missing:
            raise self.invalid(value, f"missing methods {', '.join(missing)}")
        return value


class Model(Filter):
    """Accepts instances of a class.

    Args:
        class_ (type | str): the class, or its dotted path ("package.module.Class") imported the
            first time it is needed.

    Raises:
        InvalidFilterError: Raised when the class is a Protocol that is not runtime checkable.
    """

    kind = "model"

    def __init__(
        self,
        class_: type | str,
        *,
        name: str | None = None,
        default: Default = NO_DEFAULT,
        desc: str | None = None,
    ) -> None:
        super().__init__(name=name, default=default, desc=desc)
        if not isinstance(class_, (type, str)):
            raise InvalidFilterError(
                f"Model filters need a class or a dotted path, got {class_!r}."
            )
        if isinstance(class_, type) and _unchecked_protocol(class_):
            raise InvalidFilterError(
                f"Model class {class_.__name__} is a Protocol that is not runtime checkable."
            )
        self._class = class_

    @property
    def model_class(self) -> type:
        """The accepted class. Dotted paths are resolved on first access.

        Raises:
            InvalidClassError: Raised when the dotted path does not lead to a class or leads to a
                Protocol that is not runtime checkable.
        """
        if isinstance(self._class, str):
            self._class = _import_class(self._class)
        return self._class

    def cast(self, value: Any) -> Any:
        if isinstance(value, self.model_class):
            return value
        raise self.invalid(value, f"not a {self.model_class.__name__}")


def _import_class(path: str) -> type:
    module_name, _, class_name = path.rpartition(".")
    if not module_name:
        raise InvalidClassError(f"'{path}' is not a dotted path to a class.")
    try:
        found = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError) as e:
        raise InvalidClassError(f"Could not import class '{path}'.") from e
    if not isinstance(found, type):
        raise InvalidClassError(f"'{path}' is not a class.")
    if _unchecked_protocol(found):
        raise InvalidClassError(f"'{path}' is a Protocol that is not runtime checkable.")
    return found
