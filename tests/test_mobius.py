"""
Tests for Mobius transformations.

Composition follows matrix multiplication: m.compose(n) applies n first.
"""

import logging
import math

import numpy as np
import pytest

from halfplanepy.complex_numbers import Complex, I, INFINITY, ONE, ZERO
from halfplanepy.errors import InvalidValueError, NonInvertibleError
from halfplanepy.mobius import (
    CAYLEY,
    IDENTITY,
    Mobius,
    cayley,
    from_coefficients,
    identity,
    make_mobius,
    unit_circle_rotation,
)
from halfplanepy.tolerance import Tolerance


# =============================================================================
# Construction
# =============================================================================

class TestMobiusCreation:
    """Tests for Mobius construction."""

    def test_real_coefficients_are_promoted(self):
        m = make_mobius(1, 2, 3, 4)
        assert m.a == Complex(1.0, 0.0)
        assert m.coeffs[3] == Complex(4.0, 0.0)

    def test_python_complex_coefficients(self):
        m = Mobius(1j, 0, 0, 1)
        assert m.a == I

    def test_zero_denominator_rejected(self):
        """c and d cannot both be zero."""
        with pytest.raises(InvalidValueError):
            Mobius(1, 2, 0, 0)
        with pytest.raises(InvalidValueError):
            Mobius(1, 2, 1e-12, 0)

    def test_infinite_coefficient_rejected(self):
        with pytest.raises(InvalidValueError):
            Mobius(INFINITY, 0, 0, 1)

    def test_from_coefficients(self):
        assert from_coefficients([1, 0, 0, 1]) == IDENTITY
        with pytest.raises(InvalidValueError):
            from_coefficients([1, 0, 0])

    def test_matrix_round_trip(self):
        m = Mobius(1, 2j, 3, 4)
        matrix = m.as_matrix()
        assert matrix.shape == (2, 2)
        assert matrix.dtype == np.complex128
        assert Mobius.from_matrix(matrix) == m

    def test_from_matrix_shape(self):
        with pytest.raises(InvalidValueError):
            Mobius.from_matrix(np.eye(3))

    def test_tolerance_propagates(self):
        tol = Tolerance(rtol=1e-3, atol=1e-6)
        m = identity(tol)
        assert m.tol == tol
        assert m.a.tol == tol
        assert m.compose(m).tol == tol

    def test_immutable(self):
        with pytest.raises(AttributeError):
            IDENTITY.a = ONE


# =============================================================================
# Action
# =============================================================================

class TestMobiusApply:
    """Tests for the action on the extended plane."""

    def test_identity(self, random_complex):
        for z in random_complex:
            assert IDENTITY.apply(z) == z

    def test_apply_formula(self):
        m = Mobius(1, 2, 3, 4)
        assert m.apply(ONE) == Complex(3.0 / 7.0, 0.0)
        assert m(I) == (I + 2) / (I * 3 + 4)

    def test_apply_infinity(self):
        """Infinity maps to a / c, or to itself when c = 0."""
        assert Mobius(1, 2, 3, 4).apply(INFINITY) == Complex(1.0 / 3.0, 0.0)
        assert Mobius(2, 1, 0, 1).apply(INFINITY).is_infinite

    def test_pole_maps_to_infinity(self):
        """A zero denominator gives infinity."""
        inversion = Mobius(0, 1, 1, 0)
        assert inversion.apply(ZERO).is_infinite
        assert inversion.apply(INFINITY) == ZERO

    def test_scalar_multiples_are_equal(self):
        assert Mobius(2, 4, 6, 8) == Mobius(1, 2, 3, 4)
        assert Mobius(1, 2, 3, 4) != Mobius(1, 2, 3, 5)

    def test_cayley(self):
        """The Cayley map sends i to 0, 0 to -1 and infinity to 1."""
        assert CAYLEY.apply(I) == ZERO
        assert cayley().apply(ZERO) == Complex(-1.0, 0.0)
        assert CAYLEY.apply(INFINITY) == ONE

    def test_unit_circle_rotation(self):
        assert unit_circle_rotation(math.pi / 2).apply(ONE) == I
        assert unit_circle_rotation(math.pi).apply(I) == Complex(0.0, -1.0)


# =============================================================================
# Algebra
# =============================================================================

class TestMobiusAlgebra:
    """Tests for composition, inversion, conjugation and reduction."""

    def test_compose_applies_right_first(self, random_mobius, random_complex):
        for m, n, z in zip(random_mobius, random_mobius[1:], random_complex):
            assert m.compose(n).apply(z) == m.apply(n.apply(z))

    def test_identity_is_neutral(self, random_mobius):
        for m in random_mobius:
            assert m.compose(IDENTITY) == m
            assert IDENTITY.compose(m) == m

    def test_matmul_operator(self, random_mobius):
        m, n = random_mobius[:2]
        assert m @ n == m.compose(n)

    def test_compose_associative(self, random_mobius):
        for m, n, p in zip(random_mobius, random_mobius[1:], random_mobius[2:]):
            assert m.compose(n).compose(p) == m.compose(n.compose(p))

    def test_determinant_multiplicative(self, random_mobius):
        for m, n in zip(random_mobius, random_mobius[1:]):
            assert m.compose(n).determinant() == m.determinant() * n.determinant()

    def test_inverse(self, random_mobius, random_complex):
        for m, z in zip(random_mobius, random_complex):
            inv = m.inverse()
            assert m.compose(inv) == IDENTITY
            assert inv.compose(m) == IDENTITY
            assert inv.apply(m.apply(z)) == z

    def test_inverse_of_singular_map(self, caplog):
        """Non-invertible maps raise and log their coefficients."""
        singular = Mobius(1, 2, 2, 4)
        assert not singular.is_invertible()
        with caplog.at_level(logging.DEBUG, logger="halfplanepy.mobius"):
            with pytest.raises(NonInvertibleError):
                singular.inverse()
        assert "Non-invertible" in caplog.text

    def test_reduce(self, random_mobius):
        for m in random_mobius:
            reduced = m.reduce()
            assert reduced.determinant() == ONE
            assert reduced == m

    def test_reduce_singular_is_unchanged(self):
        singular = Mobius(1, 2, 2, 4)
        assert singular.reduce() is singular

    def test_reduce_flags(self, random_mobius):
        m, n = random_mobius[:2]
        assert m.compose(n, reduce=True).determinant() == ONE
        assert m.inverse(reduce=True).determinant() == ONE

    def test_conjugate(self, random_mobius, random_complex):
        """m.conjugate(by) is by^-1 * m * by."""
        for m, by, z in zip(random_mobius, random_mobius[1:], random_complex):
            conj = m.conjugate(by)
            assert conj.apply(z) == by.inverse().apply(m.apply(by.apply(z)))

    def test_conjugate_by_singular_map(self):
        with pytest.raises(NonInvertibleError):
            IDENTITY.conjugate(Mobius(1, 2, 2, 4))

    def test_conjugate_by_cayley(self, random_mobius):
        for m in random_mobius[:5]:
            assert m.conjugate_by_cayley() == CAYLEY.inverse().compose(m.compose(CAYLEY))

    def test_trace(self):
        assert Mobius(1, 2, 3, 4).trace == Complex(5.0, 0.0)
