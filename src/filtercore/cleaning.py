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
Description: The cleaning pass. Every declared filter is cleaned against the raw inputs, failures
            are collected instead of stopping the pass, so a single call reports all of them.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .attributes import AttributeSet
from .inputs import ABSENT, InputProcessor, normalize_keys
from .validation import Errors, FilterFailure, collect_errors

if TYPE_CHECKING:
    from .filters.base import Coerced, Filter

logger = logging.getLogger(__name__)


@dataclass
class CleanResult:
    """Everything a cleaning pass produces.

    Attributes:
        attributes (AttributeSet): the typed values. Failing filters keep None.
        errors (Errors): reserved key failures first, then filter failures in declaration order.
        inputs (dict[str, Any]): the processed raw inputs.
        outcomes (dict[str, Coerced]): the outcome of each filter.
    """

    attributes: AttributeSet
    errors: Errors
    inputs: dict[str, Any]
    outcomes: dict[str, Coerced]

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> set[str]:
        """Names of the filters that failed to clean."""
        return {name for name, outcome in self.outcomes.items() if not outcome.ok}


def clean_inputs(
    filters: Mapping[str, Filter],
    inputs: Mapping[Any, Any],
    processor: InputProcessor | None = None,
) -> CleanResult:
    """Clean raw inputs against filters.

    Args:
        filters (Mapping[str, Filter]): the filters by name, in declaration order.
        inputs (Mapping[Any, Any]): the raw inputs. Keys are normalized, see normalize_key.
        processor (InputProcessor | None): guards reserved keys and groups multi-part keys.
            Nested passes run without processor: keys are only normalized.

    Raises:
        TypeError: Raised when inputs is not a mapping.

    Returns:
        CleanResult: the typed attributes and the errors.
    """
    errors = Errors()
    if processor is None:
        processed = normalize_keys(inputs)
    else:
        processed, reserved = processor.process(inputs)
        errors.extend(FilterFailure.from_error(e.name, e) for e in reserved)

    attributes = AttributeSet(filters)
    outcomes: dict[str, Coerced] = {}
    for name, filter_ in filters.items():
        outcome = filter_.clean(processed.get(name, ABSENT))
        outcomes[name] = outcome
        if outcome.ok:
            attributes[name] = outcome.value

    errors.extend(collect_errors(outcomes))
    logger.debug(
        "Cleaned %d filters from %d inputs: %d errors", len(filters), len(processed), len(errors)
    )
    return CleanResult(attributes, errors, processed, outcomes)


def validate(
    filters: Mapping[str, Filter],
    inputs: Mapping[Any, Any],
    processor: InputProcessor | None = None,
) -> Errors:
    """Run a cleaning pass and keep only the errors. See clean_inputs."""
    return clean_inputs(filters, inputs, processor).errors
