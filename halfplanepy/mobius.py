"""Mobius transformations z -> (a*z + b) / (c*z + d) with complex coefficients.

Composition follows matrix multiplication: ``m.compose(n)`` applies n first,
then m, so that ``m.compose(n).apply(z) == m.apply(n.apply(z))``.

Application is total on the extended plane: a denominator that is
tolerance-zero maps to the point at infinity instead of raising.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import numpy as np

from .complex_numbers import Complex, Number, point_on_unit_circle
from .errors import InvalidValueError, NonInvertibleError
from .tolerance import DEFAULT_TOLERANCE, Tolerance
from ._utils import is_real_number

logger = logging.getLogger(__name__)


def _as_coefficient(value: Number, tol: Tolerance) -> Complex:
    if isinstance(value, Complex):
        if value.is_infinite:
            raise InvalidValueError("Mobius coefficients must be finite")
        return value.with_tolerance(tol) if value.tol != tol else value
    if is_real_number(value):
        return Complex(value, 0.0, tol)
    if isinstance(value, complex):
        return Complex(value.real, value.imag, tol)
    raise InvalidValueError(f"Invalid Mobius coefficient: {value!r}")


class Mobius:
    """Immutable Mobius transformation.

    Args:
        a, b, c, d: Complex (or real) coefficients of (a*z + b) / (c*z + d)
        tol: Tolerance; defaults to the tolerance of ``a`` when it is a
            Complex value, otherwise DEFAULT_TOLERANCE

    Raises:
        InvalidValueError: if c and d are both tolerance-zero, or a
            coefficient is infinite or not a number.
    """

    __slots__ = ("_coeffs", "_tol")

    def __init__(self, a: Number, b: Number, c: Number, d: Number, tol: Optional[Tolerance] = None):
        if tol is None:
            tol = a.tol if isinstance(a, Complex) else DEFAULT_TOLERANCE
        coeffs = tuple(_as_coefficient(x, tol) for x in (a, b, c, d))

        if coeffs[2].is_zero() and coeffs[3].is_zero():
            raise InvalidValueError("Denominator of a Mobius transformation cannot be zero")

        object.__setattr__(self, "_coeffs", coeffs)
        object.__setattr__(self, "_tol", tol)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_matrix(cls, matrix, tol: Tolerance = DEFAULT_TOLERANCE) -> "Mobius":
        """Build from a 2x2 array-like [[a, b], [c, d]]."""
        matrix = np.asarray(matrix, dtype=np.complex128)
        if matrix.shape != (2, 2):
            raise InvalidValueError(f"Expected a 2x2 matrix, got shape {matrix.shape}")
        a, b, c, d = (complex(x) for x in matrix.reshape(-1))
        return cls(a, b, c, d, tol)

    # =========================================================================
    # Attributes
    # =========================================================================

    @property
    def coeffs(self) -> tuple:
        return self._coeffs

    @property
    def a(self) -> Complex:
        return self._coeffs[0]

    @property
    def b(self) -> Complex:
        return self._coeffs[1]

    @property
    def c(self) -> Complex:
        return self._coeffs[2]

    @property
    def d(self) -> Complex:
        return self._coeffs[3]

    @property
    def tol(self) -> Tolerance:
        return self._tol

    @property
    def trace(self) -> Complex:
        return self.a + self.d

    def determinant(self) -> Complex:
        a, b, c, d = self._coeffs
        return a * d - b * c

    def is_invertible(self) -> bool:
        return not self.determinant().is_zero()

    def as_matrix(self) -> np.ndarray:
        """Coefficients as a 2x2 complex128 array [[a, b], [c, d]]."""
        return np.array([[complex(x.re, x.im) for x in self._coeffs[:2]],
                         [complex(x.re, x.im) for x in self._coeffs[2:]]],
                        dtype=np.complex128)

    # =========================================================================
    # Action
    # =========================================================================

    def apply(self, z: Complex) -> Complex:
        """Image of z, including the point at infinity.

        Returns the point at infinity whenever the denominator c*z + d is
        tolerance-zero.
        """
        a, b, c, d = self._coeffs
        if z.is_infinite:
            if c.is_zero():
                return _infinity(self._tol)
            return a / c

        z = z.with_tolerance(self._tol) if z.tol != self._tol else z
        denominator = c * z + d
        if denominator.is_zero():
            return _infinity(self._tol)
        return (a * z + b) / denominator

    __call__ = apply

    def is_equal_to(self, other: "Mobius") -> bool:
        """True when both maps agree on 0, 1, -1, i and infinity.

        Scalar multiples of the same coefficient tuple are therefore equal.
        """
        return all(self.apply(z).is_equal_to(other.apply(z)) for z in _test_points(self._tol))

    def __eq__(self, other):
        if not isinstance(other, Mobius):
            return NotImplemented
        return self.is_equal_to(other)

    __hash__ = None

    # =========================================================================
    # Algebra
    # =========================================================================

    def reduce(self) -> "Mobius":
        """Rescale by 1/sqrt(det) so that the determinant is one.

        Singular transformations are returned unchanged.
        """
        det = self.determinant()
        if det.is_zero():
            return self
        sqrt_det = det.nth_root(2)
        return Mobius(*(x / sqrt_det for x in self._coeffs), tol=self._tol)

    def compose(self, other: "Mobius", reduce: bool = False) -> "Mobius":
        """Matrix product self * other: apply other, then self."""
        a, b, c, d = self._coeffs
        oa, ob, oc, od = other.coeffs

        composition = Mobius(
            a * oa + b * oc,
            a * ob + b * od,
            c * oa + d * oc,
            c * ob + d * od,
            tol=self._tol,
        )
        return composition.reduce() if reduce else composition

    __matmul__ = compose

    def inverse(self, reduce: bool = False) -> "Mobius":
        """Inverse transformation (d, -b, -c, a).

        Raises:
            NonInvertibleError: if the determinant is tolerance-zero.
        """
        det = self.determinant()
        if det.is_zero():
            logger.debug("Non-invertible transformation %r with determinant %r", self, det)
            raise NonInvertibleError("Non-invertible transformation")

        a, b, c, d = self._coeffs
        inv = Mobius(d, -b, -c, a, tol=self._tol)
        return inv.reduce() if reduce else inv

    def conjugate(self, by: "Mobius", reduce: bool = False) -> "Mobius":
        """Conjugation by^-1 * self * by.

        Raises:
            NonInvertibleError: if ``by`` has a tolerance-zero determinant.
        """
        det = by.determinant()
        if det.is_zero():
            logger.debug("Cannot conjugate by %r with determinant %r", by, det)
            raise NonInvertibleError("Cannot conjugate by a non-invertible transformation")
        return by.inverse(reduce).compose(self.compose(by), reduce)

    def conjugate_by_cayley(self, reduce: bool = False) -> "Mobius":
        return self.conjugate(cayley(self._tol), reduce)

    def __repr__(self):
        a, b, c, d = self._coeffs
        return f"Mobius(a={a!r}, b={b!r}, c={c!r}, d={d!r})"


# =============================================================================
# Factory and constants
# =============================================================================


def _infinity(tol: Tolerance) -> Complex:
    return Complex(float("inf"), float("inf"), tol)


def _test_points(tol: Tolerance) -> Iterable[Complex]:
    return (
        Complex(0.0, 0.0, tol),
        Complex(1.0, 0.0, tol),
        Complex(-1.0, 0.0, tol),
        Complex(0.0, 1.0, tol),
        _infinity(tol),
    )


def make_mobius(a: Number, b: Number, c: Number, d: Number, tol: Tolerance = DEFAULT_TOLERANCE) -> Mobius:
    """Construct a Mobius transformation; raises InvalidValueError when c = d = 0."""
    return Mobius(a, b, c, d, tol)


def from_coefficients(coeffs: Sequence[Number], tol: Tolerance = DEFAULT_TOLERANCE) -> Mobius:
    """Construct a Mobius transformation from a sequence [a, b, c, d].

    Args:
        coeffs: sequence of four Complex (or real) coefficients
        tol: Tolerance, carried by the result

    Returns:
        Mobius

    Raises:
        InvalidValueError: if coeffs does not hold exactly four values.
    """
    if len(coeffs) != 4:
        raise InvalidValueError(f"Expected 4 coefficients, got {len(coeffs)}")
    return Mobius(*coeffs, tol=tol)


def identity(tol: Tolerance = DEFAULT_TOLERANCE) -> Mobius:
    """The identity map z -> z.

    Args:
        tol: Tolerance, carried by the result

    Returns:
        Mobius with coefficients (1, 0, 0, 1)
    """
    return Mobius(1.0, 0.0, 0.0, 1.0, tol)


def cayley(tol: Tolerance = DEFAULT_TOLERANCE) -> Mobius:
    """The Cayley map z -> (z - i) / (z + i), sending the UHP to the unit disk."""
    return Mobius(
        Complex(1.0, 0.0, tol),
        Complex(0.0, -1.0, tol),
        Complex(1.0, 0.0, tol),
        Complex(0.0, 1.0, tol),
        tol,
    )


def unit_circle_rotation(theta: float, tol: Tolerance = DEFAULT_TOLERANCE) -> Mobius:
    """Rotation z -> e^{i*theta} * z of the unit disk."""
    return Mobius(point_on_unit_circle(theta, tol), 0.0, 0.0, 1.0, tol)


IDENTITY = identity()
CAYLEY = cayley()
