"""
Failure taxonomy for irisstats.

An engine either hands back a complete result or raises one of these.
Callers that only need "did the analysis produce output?" catch
IrisStatsError; callers that want to explain the failure inspect the
subclass and its attributes.

    IrisStatsError
    ├── ValidationError            bad input, detected before computing
    │   ├── EmptyInputError
    │   ├── DimensionError
    │   └── InsufficientDataError
    └── NumericalError             input was valid, the arithmetic was not
        ├── SingularMatrixError
        └── InsufficientDegreesOfFreedomError

Degenerate per-pair cases (constant columns, too few shared rows) are
not failures: they are reported as r = 0, not significant, plus a
warning on the result.
"""


class IrisStatsError(Exception):
    """Root of every error raised by irisstats."""


class ValidationError(IrisStatsError):
    """Input rejected: wrong type, non-finite values, unknown option or name."""


class EmptyInputError(ValidationError):
    """A sample, table or variable list has no elements."""


class DimensionError(ValidationError):
    """
    Shapes do not line up.

    Columns of unequal length, a non-square matrix where a square one is
    required, or a variable name that is not a column of the table.
    """


class InsufficientDataError(ValidationError):
    """
    Too few usable cases after missing values were removed.

    Attributes:
        n_available: Cases left after deletion, if known
        n_required: Minimum the analysis needs, if known
    """

    def __init__(
        self,
        message: str,
        n_available: int | None = None,
        n_required: int | None = None,
    ):
        super().__init__(message)
        self.n_available = n_available
        self.n_required = n_required


class NumericalError(IrisStatsError):
    """The computation itself broke down."""


class SingularMatrixError(NumericalError):
    """
    A matrix that must be inverted or factored is (numerically) singular.

    Typical causes: collinear predictors in a regression, a control
    variable that duplicates one of the variables in a partial
    correlation, or more variables than cases.

    Attributes:
        matrix_name: Which matrix failed, e.g. 'X' or 'correlation matrix'
        rank: Numerical rank that was found
        expected_rank: Rank a usable matrix would have
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank

    @property
    def rank_deficit(self) -> int | None:
        """How many dimensions are missing, when both ranks are known."""
        if self.rank is None or self.expected_rank is None:
            return None
        return self.expected_rank - self.rank


class InsufficientDegreesOfFreedomError(NumericalError):
    """
    A regression has no residual degrees of freedom (n <= k + 1).

    Attributes:
        n: Number of cases
        n_params: Coefficients to estimate, intercept included
    """

    def __init__(self, message: str, n: int, n_params: int):
        super().__init__(message)
        self.n = n
        self.n_params = n_params
