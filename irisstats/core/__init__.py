"""
Core infrastructure for irisstats.

Shared abstractions used by every analysis domain (descriptive,
correlation, distance, regression).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Named-column table with listwise extraction
    compute: Timing, tolerances, linear algebra kernels
"""

from irisstats.core.datasource import DataSource
from irisstats.core.result import Result
from irisstats.core.exceptions import (
    IrisStatsError,
    ValidationError,
    EmptyInputError,
    DimensionError,
    InsufficientDataError,
    NumericalError,
    SingularMatrixError,
    InsufficientDegreesOfFreedomError,
)

__all__ = [
    "DataSource",
    "Result",
    # Exceptions
    "IrisStatsError",
    "ValidationError",
    "EmptyInputError",
    "DimensionError",
    "InsufficientDataError",
    "NumericalError",
    "SingularMatrixError",
    "InsufficientDegreesOfFreedomError",
]
