"""
CPU backends for correlation and partial correlation.

Ordinary correlation is Pearson on centered columns, or Pearson on
midranks for Spearman. Partial correlation inverts the full Pearson
matrix of variables + controls and reads the partials off the precision
matrix: r_ij = -P_ij / sqrt(P_ii * P_jj).
"""

from __future__ import annotations

import math
import numpy as np
from numpy.typing import NDArray
from scipy.stats import rankdata

from irisstats.core.result import Result
from irisstats.core.compute.timing import Timer
from irisstats.core.compute.linalg import lu_inverse
from irisstats.correlation.design import CorrelationDesign
from irisstats.correlation.solution import CorrelationParams
from irisstats.correlation._missing import listwise_complete, pairwise_mask
from irisstats.correlation._significance import is_significant, is_partial_significant


def _rank_columns(data: NDArray) -> NDArray:
    return rankdata(data, method='average', axis=0).astype(np.float64)


def _pearson(x: NDArray, y: NDArray) -> float | None:
    """Pearson r of two complete vectors; None when either is constant."""
    xc = x - x.mean()
    yc = y - y.mean()
    denom = math.sqrt(float(np.sum(xc * xc)) * float(np.sum(yc * yc)))
    if denom == 0:
        return None
    return float(np.sum(xc * yc)) / denom


def _pearson_matrix(data: NDArray) -> tuple[NDArray, list[tuple[int, int]]]:
    """
    Full Pearson matrix of complete data in one pass.

    Returns the matrix (diagonal 1.0) and the (i, j) pairs whose
    denominator was zero; those cells are 0.0.
    """
    centered = data - data.mean(axis=0)
    cross = centered.T @ centered
    ss = np.diag(cross).copy()
    denom = np.sqrt(np.outer(ss, ss))

    k = data.shape[1]
    matrix = np.zeros((k, k), dtype=np.float64)
    nonzero = denom > 0
    matrix[nonzero] = cross[nonzero] / denom[nonzero]
    np.fill_diagonal(matrix, 1.0)

    zero_pairs = [
        (i, j) for i in range(k) for j in range(i + 1, k) if not nonzero[i, j]
    ]
    return matrix, zero_pairs


def _zero_variance_warning(names: tuple[str, ...], pairs: list[tuple[int, int]]) -> str:
    listed = ", ".join(f"({names[i]}, {names[j]})" for i, j in pairs)
    return f"Zero variance, correlation set to 0: {listed}"


class CPUCorrelationBackend:
    """Pearson/Spearman correlation matrix with significance flags."""

    @property
    def name(self) -> str:
        return 'cpu_correlation'

    def solve(
        self,
        design: CorrelationDesign,
        *,
        method: str = 'pearson',
        tails: str = 'two',
        use: str = 'listwise',
    ) -> Result[CorrelationParams]:
        timer = Timer()
        timer.start()

        if use == 'pairwise':
            with timer.section('pairwise'):
                matrix, pairwise_n, warnings_list = self._pairwise(design, method)
            n = design.n
        else:
            with timer.section('listwise'):
                data = listwise_complete(design.data)
                n = int(data.shape[0])
                if method == 'spearman':
                    data = _rank_columns(data)
                matrix, zero_pairs = _pearson_matrix(data)
            pairwise_n = None
            warnings_list = []
            if zero_pairs:
                warnings_list.append(_zero_variance_warning(design.names, zero_pairs))

        with timer.section('significance'):
            k = design.k
            significant = np.eye(k, dtype=bool)
            for i in range(k):
                for j in range(i + 1, k):
                    n_ij = n if pairwise_n is None else int(pairwise_n[i, j])
                    flag = is_significant(float(matrix[i, j]), n_ij, tails)
                    significant[i, j] = significant[j, i] = flag

        timer.stop()

        matrix.setflags(write=False)
        significant.setflags(write=False)
        if pairwise_n is not None:
            pairwise_n.setflags(write=False)

        return Result(
            params=CorrelationParams(
                matrix=matrix,
                significant=significant,
                variables=design.names,
                method=method,
                tails=tails,
                n=n,
                pairwise_n=pairwise_n,
            ),
            info={
                'method': method,
                'tails': tails,
                'use': use,
                'n_total': design.n,
                'n_dropped': design.n - n if pairwise_n is None else 0,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _pairwise(
        self, design: CorrelationDesign, method: str
    ) -> tuple[NDArray, NDArray, list[str]]:
        """
        Per-pair deletion. Each pair is centered (and, for Spearman,
        ranked) on its own shared rows only.
        """
        data = design.data
        names = design.names
        k = design.k
        matrix = np.eye(k, dtype=np.float64)
        n_pairs = np.empty((k, k), dtype=np.int64)
        too_few: list[tuple[int, int]] = []
        zero_var: list[tuple[int, int]] = []

        for i in range(k):
            n_pairs[i, i] = int((~np.isnan(data[:, i])).sum())
            for j in range(i + 1, k):
                mask = pairwise_mask(data[:, i], data[:, j])
                n_ij = int(mask.sum())
                n_pairs[i, j] = n_pairs[j, i] = n_ij

                if n_ij < 2:
                    too_few.append((i, j))
                    continue

                xi = data[mask, i]
                xj = data[mask, j]
                if method == 'spearman':
                    xi = rankdata(xi, method='average')
                    xj = rankdata(xj, method='average')

                r = _pearson(xi, xj)
                if r is None:
                    zero_var.append((i, j))
                    continue
                matrix[i, j] = matrix[j, i] = r

        warnings_list = []
        if too_few:
            listed = ", ".join(f"({names[i]}, {names[j]})" for i, j in too_few)
            warnings_list.append(
                f"Fewer than 2 shared cases, correlation set to 0: {listed}"
            )
        if zero_var:
            warnings_list.append(_zero_variance_warning(names, zero_var))

        return matrix, n_pairs, warnings_list


class CPUPartialCorrelationBackend:
    """Partial correlations through the inverse of the Pearson matrix."""

    @property
    def name(self) -> str:
        return 'cpu_partial_correlation'

    def solve(
        self,
        design: CorrelationDesign,
        *,
        n_variables: int,
    ) -> Result[CorrelationParams]:
        """
        Compute partial correlations among the first `n_variables`
        columns of the design, controlling for the remaining columns.

        Raises
        ------
        InsufficientDataError
            If listwise deletion leaves fewer than 2 rows.
        SingularMatrixError
            If the correlation matrix cannot be inverted.
        """
        timer = Timer()
        timer.start()

        names = design.names
        variables = names[:n_variables]
        controls = names[n_variables:]
        warnings_list: list[str] = []

        with timer.section('correlation'):
            data = listwise_complete(design.data)
            n = int(data.shape[0])
            full, zero_pairs = _pearson_matrix(data)
            if zero_pairs:
                warnings_list.append(_zero_variance_warning(names, zero_pairs))

        with timer.section('inversion'):
            precision = lu_inverse(full, name='correlation matrix')

        with timer.section('partials'):
            df = n - 2 - len(controls)
            k = n_variables
            matrix = np.eye(k, dtype=np.float64)
            significant = np.eye(k, dtype=bool)
            for i in range(k):
                for j in range(i + 1, k):
                    r = -precision[i, j] / math.sqrt(precision[i, i] * precision[j, j])
                    matrix[i, j] = matrix[j, i] = r
                    flag = is_partial_significant(r, df)
                    significant[i, j] = significant[j, i] = flag

        if df <= 0:
            warnings_list.append(
                f"Partial correlation df = {df} (n={n}, controls={len(controls)}); "
                f"no pair is reported significant"
            )

        timer.stop()

        matrix.setflags(write=False)
        significant.setflags(write=False)

        return Result(
            params=CorrelationParams(
                matrix=matrix,
                significant=significant,
                variables=variables,
                method='pearson',
                tails='two',
                n=n,
                controls=controls,
            ),
            info={
                'method': 'pearson',
                'tails': 'two',
                'use': 'listwise',
                'df': df,
                'n_total': design.n,
                'n_dropped': design.n - n,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
