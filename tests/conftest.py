"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from irisstats.core import DataSource


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def linear_data():
    """Noise-free y = 2x + 3."""
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
    return x, 2.0 * x + 3.0


@pytest.fixture
def survey_source():
    """Small table with missing cells, as handed over by a spreadsheet."""
    return DataSource.from_columns({
        'age':    [23.0, 35.0, 31.0, np.nan, 52.0, 46.0, 29.0, 38.0],
        'income': [31.0, 48.0, 45.0, 39.0, np.nan, 61.0, 40.0, 50.0],
        'score':  [7.0, 5.0, 6.0, 4.0, 3.0, 2.0, np.nan, 5.0],
    })


@pytest.fixture
def collinear_predictors(rng):
    """Predictors with perfect collinearity (should fail)."""
    n = 50
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    X = np.column_stack([x1, x2, x1 + x2])
    y = rng.standard_normal(n)
    return X, y
