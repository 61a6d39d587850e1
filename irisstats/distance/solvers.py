"""
Solver dispatch for case distances.
"""

from __future__ import annotations

from typing import Literal, Mapping, Sequence, Union
from numpy.typing import ArrayLike

from irisstats.core.datasource import DataSource
from irisstats.core.exceptions import ValidationError
from irisstats.core.validation import check_choice
from irisstats.distance.design import DistanceDesign
from irisstats.distance.solution import DistanceSolution
from irisstats.distance.backends.cpu import CPUDistanceBackend, METRICS


Metric = Literal['euclidean', 'squared_euclidean', 'manhattan', 'chebyshev']

DistanceData = Union[
    ArrayLike, Sequence[ArrayLike], Mapping[str, ArrayLike], DataSource, DistanceDesign,
]


def _ensure_design(
    data: DistanceData, columns: Sequence[str] | None
) -> DistanceDesign:
    if isinstance(data, DistanceDesign):
        return data
    if isinstance(data, DataSource):
        return DistanceDesign.from_datasource(
            data, columns=data.keys() if columns is None else columns
        )
    if columns is not None:
        raise ValidationError("columns= is only valid with a DataSource")
    if isinstance(data, (Mapping, list, tuple)):
        return DistanceDesign.from_columns(data)
    return DistanceDesign.from_array(data)


def distances(
    data: DistanceData,
    metric: Metric = 'euclidean',
    *,
    columns: Sequence[str] | None = None,
) -> DistanceSolution:
    """
    Distance between every pair of cases.

    Parameters
    ----------
    data : array-like, sequence of columns, mapping, DataSource or DistanceDesign
        A 2D array has cases in rows and variables in columns; a list,
        tuple or mapping is read as variable columns. Array input must
        not contain NaN. A DataSource drops incomplete cases first.
    metric : str
        'euclidean'          sqrt(sum((a - b)^2))
        'squared_euclidean'  sum((a - b)^2)
        'manhattan'          sum(|a - b|)
        'chebyshev'          max(|a - b|)
    columns : sequence of str, optional
        Columns to use from a DataSource (default: all of them).

    Returns
    -------
    DistanceSolution with an n x n symmetric matrix, zero diagonal.

    Raises
    ------
    EmptyInputError
        If there are no cases or no variables.
    ValidationError
        For an unknown metric or non-finite input.
    """
    check_choice(metric, tuple(METRICS), 'metric')
    design = _ensure_design(data, columns)
    result = CPUDistanceBackend().solve(design, metric=metric)
    return DistanceSolution(_result=result)
