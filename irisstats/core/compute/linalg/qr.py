"""
Least squares through Householder QR.

Regression coefficients are computed as b = R^-1 Q'y with a triangular
solve; X'X is never inverted on this path. The factorization runs on a
scratch copy, so the caller's design matrix stays valid for fitted
values afterwards.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from irisstats.core.exceptions import SingularMatrixError, DimensionError
from irisstats.core.compute.linalg._rank import numerical_rank


@dataclass(frozen=True)
class QRResult:
    """
    Economy QR factors of an (n x p) matrix, n >= p.

    Attributes:
        Q: (n x p) with orthonormal columns
        R: (p x p) upper triangular
        rank: Number of R diagonal entries above max(n, p) * eps * max|R_ii|
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


def qr_decompose(X: NDArray[np.floating[Any]]) -> QRResult:
    """Economy QR of a private float64 copy of X (LAPACK geqrf via NumPy)."""
    work = np.array(X, dtype=np.float64, copy=True)
    Q, R = np.linalg.qr(work, mode='reduced')
    return QRResult(Q=Q, R=R, rank=numerical_rank(np.diag(R), max(work.shape)))


def qr_solve(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    check_rank: bool = True,
) -> NDArray[np.floating[Any]]:
    """
    Minimize ||y - Xb|| for b.

    Args:
        X: Design matrix (n x p), intercept column included by the caller
        y: Response (n,)
        check_rank: Raise on collinear columns instead of returning
            an ill-determined solution

    Returns:
        Coefficients b (p,)

    Raises:
        DimensionError: If y does not match X, or n < p
        SingularMatrixError: If check_rank and X has rank < p
    """
    n, p = X.shape
    if y.shape[0] != n:
        raise DimensionError(f"Inconsistent lengths: X has {n} rows, y has {y.shape[0]}")
    if n < p:
        raise DimensionError(
            f"Least squares with {p} columns needs at least {p} rows, got {n}"
        )

    factors = qr_decompose(X)
    if check_rank and factors.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient (rank {factors.rank} of {p}): "
            f"some predictors are exact linear combinations of others",
            matrix_name='X',
            rank=factors.rank,
            expected_rank=p,
        )

    return solve_triangular(factors.R, factors.Q.T @ y, lower=False)
