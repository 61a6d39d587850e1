"""
LU factorization and explicit matrix inversion.

Used by partial correlation (correlation matrix -> precision matrix) and
by regression standard errors ((X'X)^-1).

The factorization is LAPACK getrf with partial pivoting (via SciPy);
the inverse is formed from the factors by solving against the identity.
Singular or numerically degenerate pivots raise instead of returning a
pseudo-inverse.
"""

import warnings
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from irisstats.core.exceptions import SingularMatrixError
from irisstats.core.validation import check_array, check_square, check_finite
from irisstats.core.compute.linalg._rank import numerical_rank


@dataclass(frozen=True)
class LUResult:
    """
    Packed LU factorization with partial pivoting.

    Attributes:
        lu: Packed factors (unit lower L below the diagonal, U on and above)
        piv: LAPACK pivot indices (row i was swapped with row piv[i])
        rank: Number of pivots above the degeneracy tolerance
    """
    lu: NDArray[np.floating[Any]]
    piv: NDArray[np.integer[Any]]
    rank: int

    @property
    def pivots(self) -> NDArray[np.floating[Any]]:
        """Diagonal of U."""
        return np.diag(self.lu)


def lu_decompose(A: NDArray[np.floating[Any]], name: str = 'A') -> LUResult:
    """
    LU factorization with partial pivoting.

    Args:
        A: Square matrix (n x n); not modified
        name: Matrix name used in error messages

    Returns:
        LUResult with packed factors, pivots and numerical rank

    Raises:
        DimensionError: If A is not square
        ValidationError: If A has non-finite entries
    """
    A = check_array(A, name)
    check_square(A, name)
    check_finite(A, name)

    # Exact zero pivots are reported through rank, not LinAlgWarning
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", LinAlgWarning)
        lu, piv = lu_factor(A, check_finite=False)

    rank = numerical_rank(np.diag(lu), A.shape[0])
    return LUResult(lu=lu, piv=piv, rank=rank)


def lu_inverse(A: NDArray[np.floating[Any]], name: str = 'A') -> NDArray[np.floating[Any]]:
    """
    Invert a general real square matrix via LU decomposition.

    Algorithm:
        1. PA = LU with partial pivoting
        2. Reject zero or near-zero pivots
        3. Solve LU X = P I column by column

    Args:
        A: Square matrix (n x n)
        name: Matrix name used in error messages

    Returns:
        A^-1 (n x n)

    Raises:
        DimensionError: If A is not square
        SingularMatrixError: If any pivot is zero or below tolerance
    """
    factors = lu_decompose(A, name)
    n = factors.lu.shape[0]

    if factors.rank < n:
        raise SingularMatrixError(
            f"{name} is singular or numerically degenerate: "
            f"{n - factors.rank} of {n} pivots below tolerance",
            matrix_name=name,
            rank=factors.rank,
            expected_rank=n,
        )

    inverse = lu_solve((factors.lu, factors.piv), np.eye(n), check_finite=False)

    if not np.all(np.isfinite(inverse)):
        raise SingularMatrixError(
            f"{name} inverse contains non-finite values",
            matrix_name=name,
            rank=factors.rank,
            expected_rank=n,
        )

    return inverse
