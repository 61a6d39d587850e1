"""
CPU backend for case distances.

scipy.spatial.distance.pdist evaluates each unordered pair once (the
condensed upper triangle); squareform mirrors it and fills a zero
diagonal.
"""

from __future__ import annotations

import numpy as np
from scipy.spatial.distance import pdist, squareform

from irisstats.core.result import Result
from irisstats.core.compute.timing import Timer
from irisstats.distance.design import DistanceDesign
from irisstats.distance.solution import DistanceParams


# metric name -> pdist metric
METRICS = {
    'euclidean': 'euclidean',
    'squared_euclidean': 'sqeuclidean',
    'manhattan': 'cityblock',
    'chebyshev': 'chebyshev',
}


class CPUDistanceBackend:
    """Pairwise case-distance matrix."""

    @property
    def name(self) -> str:
        return 'cpu_distance'

    def solve(self, design: DistanceDesign, *, metric: str = 'euclidean') -> Result[DistanceParams]:
        if metric not in METRICS:
            raise ValueError(f"Unknown metric: {metric!r}")

        timer = Timer()
        timer.start()

        with timer.section('pdist'):
            if design.n == 1:
                matrix = np.zeros((1, 1), dtype=np.float64)
            else:
                condensed = pdist(design.cases, metric=METRICS[metric])
                matrix = squareform(condensed, checks=False)

        timer.stop()
        matrix = np.ascontiguousarray(matrix, dtype=np.float64)
        matrix.setflags(write=False)

        return Result(
            params=DistanceParams(matrix=matrix, metric=metric),
            info={'metric': metric, 'n_cases': design.n, 'n_variables': design.k},
            timing=timer.result(),
            backend_name=self.name,
        )
