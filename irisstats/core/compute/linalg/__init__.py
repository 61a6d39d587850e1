"""
Linear algebra kernels for irisstats.

All functions follow these conventions:
    - NumPy/SciPy (LAPACK under the hood)
    - Each factorization returns a structured result dataclass
    - Singular inputs raise SingularMatrixError immediately

Submodules:
    lu: LU factorization and explicit inversion
    _rank: numerical rank shared by both factorizations
    qr: QR decomposition and least squares
"""

from irisstats.core.compute.linalg.lu import (
    LUResult,
    lu_decompose,
    lu_inverse,
)
from irisstats.core.compute.linalg.qr import (
    QRResult,
    qr_decompose,
    qr_solve,
)

__all__ = [
    # LU
    "LUResult",
    "lu_decompose",
    "lu_inverse",
    # QR
    "QRResult",
    "qr_decompose",
    "qr_solve",
]
