"""
Pytest configuration and fixtures for halfplanepy tests.
"""

import numpy as np
import pytest

from halfplanepy.complex_numbers import Complex
from halfplanepy.mobius import Mobius
from halfplanepy.points import to_interior_point


@pytest.fixture
def rng():
    """Seeded generator so that random cases are reproducible."""
    return np.random.default_rng(0)


@pytest.fixture
def num_samples():
    """Default number of random cases per test."""
    return 20


@pytest.fixture
def random_complex(rng, num_samples):
    """Random finite complex numbers in [-5, 5]^2."""
    return [Complex(float(re), float(im)) for re, im in rng.uniform(-5, 5, size=(num_samples, 2))]


@pytest.fixture
def random_points(rng, num_samples):
    """Random interior points with re in [-3, 3] and im in [0.2, 3]."""
    res = rng.uniform(-3, 3, size=num_samples)
    ims = rng.uniform(0.2, 3, size=num_samples)
    return [to_interior_point(float(re), float(im)) for re, im in zip(res, ims)]


@pytest.fixture
def random_mobius(rng, num_samples):
    """Random Mobius transformations with complex coefficients and |det| >= 0.5."""
    maps = []
    while len(maps) < num_samples:
        parts = rng.uniform(-2, 2, size=(4, 2))
        m = Mobius(*(Complex(float(re), float(im)) for re, im in parts))
        if m.determinant().modulus >= 0.5:
            maps.append(m)
    return maps


@pytest.fixture
def random_real_mobius(rng, num_samples):
    """Random Mobius transformations with real coefficients and det >= 0.5."""
    maps = []
    while len(maps) < num_samples:
        a, b, c, d = (float(x) for x in rng.uniform(-2, 2, size=4))
        if a * d - b * c < 0:
            a, b = -a, -b
        if a * d - b * c >= 0.5:
            maps.append(Mobius(a, b, c, d))
    return maps
