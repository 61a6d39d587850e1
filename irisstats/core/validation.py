"""
Input checks shared by every design constructor.

Each check either returns quietly (or returns the converted value) or
raises with the offending parameter name and the actual value in the
message. Nothing is silently repaired: NaN handling, for instance, is a
decision of the missing-data policy, not of these helpers.
"""

from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from irisstats.core.exceptions import (
    ValidationError,
    DimensionError,
    EmptyInputError,
)


def check_array(array: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Convert to a float64 ndarray.

    Bool and integer input is promoted. Anything numpy can only hold as
    object dtype (None cells, mixed strings and numbers) or as a
    non-numeric dtype is rejected.

    Raises:
        ValidationError: If the input is not numeric
    """
    try:
        arr = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if arr.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype; cells must all be numbers"
        )
    if arr.dtype != np.bool_ and not np.issubdtype(arr.dtype, np.number):
        raise ValidationError(f"{name}: non-numeric dtype {arr.dtype}")

    return arr.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Reject NaN and Inf.

    Raises:
        ValidationError: Reporting how many of each were found
    """
    finite = np.isfinite(array)
    if not finite.all():
        n_nan = int(np.isnan(array).sum())
        n_inf = int(np.isinf(array).sum())
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_no_inf(array: NDArray[np.floating[Any]], name: str) -> None:
    """Reject Inf; NaN passes because it marks a missing cell."""
    where = np.argwhere(np.isinf(array))
    if where.size:
        first = tuple(int(i) for i in where[0])
        raise ValidationError(f"{name}: contains infinite values (first at index {first})")


def _check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    _check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    _check_ndim(array, 2, name)


def check_square(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Require a non-empty (n x n) matrix.

    Raises:
        DimensionError: If the matrix is not 2D, not square, or 0 x 0
    """
    check_2d(array, name)
    rows, cols = array.shape
    if rows != cols or rows == 0:
        raise DimensionError(
            f"{name}: expected non-empty square matrix, got shape {array.shape}"
        )


def check_nonempty(array: NDArray[np.floating[Any]], name: str) -> None:
    if array.size == 0:
        raise EmptyInputError(f"{name}: requires at least 1 value, got 0")


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Require equal first dimensions.

    Raises:
        ValueError: If `names` does not label every array (caller bug)
        DimensionError: Listing each array's length
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )
    lengths = [a.shape[0] for a in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{nm}={ln}" for nm, ln in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def stack_columns(columns: Sequence[ArrayLike], what: str = 'column') -> NDArray[np.floating[Any]]:
    """
    Stack per-variable 1D columns into an (n cases x k variables) block.

    Raises:
        EmptyInputError: If no columns are given
        ValidationError: If a column is not numeric
        DimensionError: If a column is not 1D or lengths differ
    """
    if len(columns) == 0:
        raise EmptyInputError(f"At least one {what} is required")

    arrays = []
    labels = []
    for i, col in enumerate(columns):
        label = f"{what} {i}"
        arr = check_array(col, label)
        check_1d(arr, label)
        arrays.append(arr)
        labels.append(label)
    check_consistent_length(*arrays, names=tuple(labels))

    return np.column_stack(arrays)


def check_names(
    names: Sequence[str] | None, k: int, prefix: str
) -> tuple[str, ...]:
    """
    Validate variable names for k columns, defaulting to prefix1..prefixk.

    Raises:
        DimensionError: If the count does not match k
        ValidationError: If a name repeats
    """
    if names is None:
        return tuple(f"{prefix}{i + 1}" for i in range(k))
    names = tuple(str(nm) for nm in names)
    if len(names) != k:
        raise DimensionError(f"Got {len(names)} names for {k} variables")
    if len(set(names)) != k:
        repeated = sorted(nm for nm in set(names) if names.count(nm) > 1)
        raise ValidationError(f"Variable names must be unique; repeated: {repeated}")
    return names


def check_choice(value: str, choices: tuple[str, ...], name: str) -> None:
    """
    Require a string option from a fixed set.

    Raises:
        ValidationError: Naming the option and the allowed values
    """
    if value not in choices:
        allowed = ", ".join(repr(c) for c in choices)
        raise ValidationError(f"Invalid {name}={value!r}. Must be one of {allowed}.")
