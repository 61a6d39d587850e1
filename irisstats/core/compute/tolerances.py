"""
Numeric configuration for irisstats.

Holds every tolerance and fixed statistical constant the engines use, so
observable behaviour is defined by data here rather than scattered
literals:

- comparison tiers used by the test suite
- the alpha = 0.05 t critical-value tables used for correlation
  significance (a deliberate piecewise approximation, not a t-CDF)
- normal-approximation critical values used for partial correlation
  significance and regression confidence intervals
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Relative and absolute tolerance pair for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Double precision reference
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision reference',
)


# Significance level baked into the critical-value tables below
SIGNIFICANCE_ALPHA = 0.05

# Normal critical values, used beyond the table and as fixed approximations
Z_TWO_TAILED = 1.96
Z_ONE_TAILED = 1.645

# Largest df covered by the critical-value tables
T_TABLE_MAX_DF = 120


@dataclass(frozen=True)
class CriticalValueBand:
    """
    Linear segment of the critical-value table.

    For df in [lo, hi]: value = start - (df - lo) * step
    """
    lo: int
    hi: int
    start: float
    step: float

    def value(self, df: int) -> float:
        return self.start - (df - self.lo) * self.step


# Exact entries for df 1..10
T_CRITICAL_TWO_TAILED_EXACT = {
    1: 12.706, 2: 4.303, 3: 3.182, 4: 2.776, 5: 2.571,
    6: 2.447, 7: 2.365, 8: 2.306, 9: 2.262, 10: 2.228,
}
T_CRITICAL_ONE_TAILED_EXACT = {
    1: 6.314, 2: 2.920, 3: 2.353, 4: 2.132, 5: 2.015,
    6: 1.943, 7: 1.895, 8: 1.860, 9: 1.833, 10: 1.812,
}

# Interpolated bands for df 11..120
T_CRITICAL_TWO_TAILED_BANDS = (
    CriticalValueBand(11, 15, 2.201, 0.027),
    CriticalValueBand(16, 20, 2.120, 0.018),
    CriticalValueBand(21, 30, 2.086, 0.010),
    CriticalValueBand(31, 60, 2.042, 0.006),
    CriticalValueBand(61, 120, 2.000, 0.003),
)
T_CRITICAL_ONE_TAILED_BANDS = (
    CriticalValueBand(11, 15, 1.796, 0.020),
    CriticalValueBand(16, 20, 1.746, 0.013),
    CriticalValueBand(21, 30, 1.721, 0.008),
    CriticalValueBand(31, 60, 1.697, 0.007),
    CriticalValueBand(61, 120, 1.671, 0.004),
)

# |z| above this marks an outlier in distribution analysis
OUTLIER_Z = 3.0

# Last histogram edge is max + range * BIN_EDGE_EPSILON
BIN_EDGE_EPSILON = 1e-6
