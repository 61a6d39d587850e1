"""
Case distance module.

Public API:
    distances(data, metric) - n x n proximity matrix between cases
"""

from irisstats.distance.design import DistanceDesign
from irisstats.distance.solution import DistanceParams, DistanceSolution
from irisstats.distance.solvers import distances

__all__ = [
    "distances",
    "DistanceDesign",
    "DistanceParams",
    "DistanceSolution",
]
