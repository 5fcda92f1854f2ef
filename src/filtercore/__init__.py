"""
filtercore: Declarative filtering and validation of inputs.

This library provides:
- Filters that clean raw values into typed values (boolean, integer, date, hash, array...)
- Interaction, a base class whose inputs are declared in the class body
- A cleaning pass that aggregates every failure instead of stopping at the first one
- TracedException based errors with structured failures
"""

__version__ = "0.1.0"
__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from .cleaning import CleanResult, clean_inputs, validate
from .errors import ErrorKind
from .interaction import Interaction
from .registry import FilterImport, FilterRegistry
from .validation import Errors, FilterFailure

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Interactions
    "Interaction",
    "FilterImport",
    "FilterRegistry",
    # Cleaning
    "clean_inputs",
    "validate",
    "CleanResult",
    "Errors",
    "ErrorKind",
    "FilterFailure",
]
