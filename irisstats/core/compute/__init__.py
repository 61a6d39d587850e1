"""
Shared compute infrastructure for irisstats.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numeric configuration and fixed statistical constants
    linalg: Linear algebra kernels (LU, QR)
"""

from irisstats.core.compute.timing import Timer

__all__ = [
    "Timer",
]
