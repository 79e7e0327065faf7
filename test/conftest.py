"""
Pytest fixtures shared by the pygeom3 tests.
"""
import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so random cases are reproducible."""
    return np.random.default_rng(42)
