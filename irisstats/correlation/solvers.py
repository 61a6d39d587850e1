"""
Solver dispatch for correlation.

Provides cor() for Pearson/Spearman correlation matrices and
partial_cor() for partial correlations controlling for other variables.
"""

from __future__ import annotations

from typing import Literal, Mapping, Sequence, Union
from numpy.typing import ArrayLike

from irisstats.core.datasource import DataSource
from irisstats.core.exceptions import DimensionError, InsufficientDataError, ValidationError
from irisstats.core.validation import check_choice
from irisstats.correlation.design import CorrelationDesign
from irisstats.correlation.solution import CorrelationSolution
from irisstats.correlation.backends.cpu import (
    CPUCorrelationBackend,
    CPUPartialCorrelationBackend,
)
from irisstats.correlation._missing import USE_POLICIES


CorMethod = Literal['pearson', 'spearman']
Tails = Literal['two', 'one']
UseMethod = Literal['listwise', 'pairwise']

CorrelationData = Union[
    ArrayLike, Sequence[ArrayLike], Mapping[str, ArrayLike], DataSource, CorrelationDesign,
]


def _ensure_design(
    data: CorrelationData,
    names: Sequence[str] | None,
    columns: Sequence[str] | None,
) -> CorrelationDesign:
    """
    Build a CorrelationDesign from any supported input.

    An ndarray is read as (cases x variables); a list or tuple is read
    as a sequence of variable columns.
    """
    if isinstance(data, CorrelationDesign):
        return data
    if isinstance(data, DataSource):
        if columns is None:
            columns = data.keys()
        return CorrelationDesign.from_datasource(data, columns=columns)
    if columns is not None:
        raise ValidationError("columns= is only valid with a DataSource")
    if isinstance(data, Mapping):
        return CorrelationDesign.from_columns(data)
    if isinstance(data, (list, tuple)):
        return CorrelationDesign.from_columns(data, names=names)
    return CorrelationDesign.from_array(data, names=names)


def _subset(design: CorrelationDesign, wanted: Sequence[str]) -> CorrelationDesign:
    """Design restricted to `wanted` columns, in that order."""
    missing = [nm for nm in wanted if nm not in design.names]
    if missing:
        raise DimensionError(
            f"Unknown variable(s) {missing}. Available: {design.names}"
        )
    idx = [design.names.index(nm) for nm in wanted]
    return CorrelationDesign.from_array(design.data[:, idx], names=list(wanted))


def cor(
    data: CorrelationData,
    *,
    names: Sequence[str] | None = None,
    columns: Sequence[str] | None = None,
    method: CorMethod = 'pearson',
    tails: Tails = 'two',
    use: UseMethod = 'listwise',
) -> CorrelationSolution:
    """
    Correlation matrix with per-pair significance flags.

    Parameters
    ----------
    data : array-like, sequence of columns, mapping, DataSource or CorrelationDesign
        A 2D array has cases in rows and variables in columns. NaN marks
        a missing value.
    names : sequence of str, optional
        Variable names for array or sequence input (default V1..Vk).
    columns : sequence of str, optional
        Columns to use from a DataSource (default: all of them).
    method : str
        'pearson', or 'spearman' (Pearson on midranks).
    tails : str
        'two' or 'one'; selects the critical-value table.
    use : str
        'listwise' drops every row with any missing value before
        computing; 'pairwise' uses, for each pair, the rows where both
        values are present.

    Returns
    -------
    CorrelationSolution

    Raises
    ------
    InsufficientDataError
        If there are fewer than 2 cases, or listwise deletion leaves
        fewer than 2.
    ValidationError
        For unknown method / tails / use values or malformed input.
    """
    check_choice(method, ('pearson', 'spearman'), 'method')
    check_choice(tails, ('two', 'one'), 'tails')
    check_choice(use, USE_POLICIES, 'use')

    design = _ensure_design(data, names, columns)
    if design.n < 2:
        raise InsufficientDataError(
            f"Correlation needs at least 2 cases, got {design.n}",
            n_available=design.n,
            n_required=2,
        )

    result = CPUCorrelationBackend().solve(design, method=method, tails=tails, use=use)
    return CorrelationSolution(_result=result)


def partial_cor(
    data: CorrelationData,
    variables: Sequence[str],
    controls: Sequence[str],
    *,
    names: Sequence[str] | None = None,
) -> CorrelationSolution:
    """
    Partial correlations among `variables`, controlling for `controls`.

    Rows with a missing value in any of the variables or controls are
    dropped first. Significance uses |t| > 1.96 with
    df = n - 2 - len(controls); the result is always Pearson, two-tailed.

    Parameters
    ----------
    data : mapping, DataSource, array-like or sequence of columns
        Named columns. For array or sequence input supply `names`.
    variables : sequence of str
        At least two variables of interest.
    controls : sequence of str
        One or more control variables, disjoint from `variables`.

    Raises
    ------
    ValidationError
        If controls is empty, a name repeats, or variables and controls
        overlap.
    DimensionError
        If a name is not a column of `data`.
    SingularMatrixError
        If the correlation matrix of variables + controls is singular.
    """
    variables = [str(v) for v in variables]
    controls = [str(c) for c in controls]

    if len(variables) < 2:
        raise ValidationError(
            f"Partial correlation needs at least 2 variables, got {len(variables)}"
        )
    if not controls:
        raise ValidationError("Partial correlation needs at least 1 control variable")
    overlap = sorted(set(variables) & set(controls))
    if overlap:
        raise ValidationError(f"Variables also listed as controls: {overlap}")
    combined = variables + controls
    if len(set(combined)) != len(combined):
        raise ValidationError(f"Duplicate names in variables/controls: {combined}")

    if isinstance(data, DataSource):
        design = CorrelationDesign.from_datasource(data, columns=combined)
    else:
        design = _subset(_ensure_design(data, names, None), combined)

    result = CPUPartialCorrelationBackend().solve(design, n_variables=len(variables))
    return CorrelationSolution(_result=result)
