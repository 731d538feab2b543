"""Tolerance-aware complex numbers on the extended complex plane.

A complex value is an immutable (re, im) pair of floats carrying the
Tolerance used for its equality tests. The point at infinity is encoded
canonically as (re=+inf, im=+inf); a value with exactly one infinite
component is rejected.

Convention:
    - Equality is component-wise within |a-b| <= atol + rtol*max(|a|,|b|)
    - Infinity is equal only to itself
    - Arithmetic follows the Riemann sphere where it is well defined
      (inf + z = inf, inf * w = inf for w != 0, 1 / inf = 0); indeterminate
      forms raise InvalidValueError
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional, Union

from .errors import DivisionByZeroError, InvalidValueError
from .tolerance import DEFAULT_TOLERANCE, Tolerance
from ._utils import clamp, is_real_number


Number = Union["Complex", int, float]


class Complex:
    """Immutable complex number with tolerance-based equality.

    Args:
        re: float, real part
        im: float, imaginary part
        tol: Tolerance used for comparisons (default: DEFAULT_TOLERANCE)

    Raises:
        InvalidValueError: if a component is NaN, not a real number, or if
            exactly one component is infinite.
    """

    __slots__ = ("_re", "_im", "_tol")

    def __init__(self, re: float = 0.0, im: float = 0.0, tol: Tolerance = DEFAULT_TOLERANCE):
        if not is_real_number(re) or not is_real_number(im):
            raise InvalidValueError(f"Real and imaginary parts must be real numbers, got ({re!r}, {im!r})")
        if not isinstance(tol, Tolerance):
            raise InvalidValueError(f"tol must be a Tolerance, got {tol!r}")

        # Adding 0.0 folds -0.0 into 0.0, keeping arguments of reals at 0 or pi
        re, im = float(re) + 0.0, float(im) + 0.0
        if math.isnan(re) or math.isnan(im):
            raise InvalidValueError("Complex numbers cannot have NaN components")

        if math.isinf(re) or math.isinf(im):
            if not (re == math.inf and im == math.inf):
                raise InvalidValueError(
                    f"The point at infinity must be (inf, inf), got ({re}, {im})"
                )

        object.__setattr__(self, "_re", re)
        object.__setattr__(self, "_im", im)
        object.__setattr__(self, "_tol", tol)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # =========================================================================
    # Attributes
    # =========================================================================

    @property
    def re(self) -> float:
        return self._re

    @property
    def im(self) -> float:
        return self._im

    @property
    def tol(self) -> Tolerance:
        return self._tol

    @property
    def rtol(self) -> float:
        return self._tol.rtol

    @property
    def atol(self) -> float:
        return self._tol.atol

    @property
    def is_infinite(self) -> bool:
        return self._re == math.inf

    @property
    def modulus(self) -> float:
        if self.is_infinite:
            return math.inf
        return math.hypot(self._re, self._im)

    @property
    def argument(self) -> Optional[float]:
        """Angle in (-pi, pi], or None for the point at infinity."""
        if self.is_infinite:
            return None
        return math.atan2(self._im, self._re)

    def is_zero(self) -> bool:
        return not self.is_infinite and self._tol.is_zero(self._re) and self._tol.is_zero(self._im)

    def is_real(self) -> bool:
        """True for finite values whose imaginary part is tolerance-zero."""
        return not self.is_infinite and self._tol.is_zero(self._im)

    # =========================================================================
    # Equality
    # =========================================================================

    def is_equal_to(self, other: Number) -> bool:
        """Tolerance-based equality, using this value's tolerance."""
        other = self._coerce(other)
        if self.is_infinite or other.is_infinite:
            return self.is_infinite and other.is_infinite
        return self._tol.isclose(self._re, other.re) and self._tol.isclose(self._im, other.im)

    def __eq__(self, other):
        if not isinstance(other, (Complex, int, float)) or isinstance(other, bool):
            return NotImplemented
        return self.is_equal_to(other)

    __hash__ = None

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def _coerce(self, other: Number) -> "Complex":
        if isinstance(other, Complex):
            return other
        if is_real_number(other):
            return Complex(other, 0.0, self._tol)
        raise InvalidValueError(f"Cannot combine a complex number with {other!r}")

    def _new(self, re: float, im: float) -> "Complex":
        return Complex(re, im, self._tol)

    def _infinity(self) -> "Complex":
        return Complex(math.inf, math.inf, self._tol)

    def clone(self) -> "Complex":
        return self._new(self._re, self._im)

    def with_tolerance(self, tol: Tolerance) -> "Complex":
        return Complex(self._re, self._im, tol)

    def scale(self, factor: float) -> "Complex":
        """Multiply by a real scalar."""
        if self.is_infinite:
            if factor == 0:
                raise InvalidValueError("Scaling infinity by zero is indeterminate")
            return self._infinity()
        return self._new(factor * self._re, factor * self._im)

    def negate(self) -> "Complex":
        return self.scale(-1.0)

    def conjugate(self) -> "Complex":
        if self.is_infinite:
            return self._infinity()
        return self._new(self._re, -self._im)

    def add(self, other: Number) -> "Complex":
        other = self._coerce(other)
        if self.is_infinite and other.is_infinite:
            raise InvalidValueError("The sum of infinity with itself is indeterminate")
        if self.is_infinite or other.is_infinite:
            return self._infinity()
        return self._new(self._re + other.re, self._im + other.im)

    def subtract(self, other: Number) -> "Complex":
        other = self._coerce(other)
        if self.is_infinite and other.is_infinite:
            raise InvalidValueError("The difference of infinity with itself is indeterminate")
        if self.is_infinite or other.is_infinite:
            return self._infinity()
        return self._new(self._re - other.re, self._im - other.im)

    def multiply(self, other: Number) -> "Complex":
        other = self._coerce(other)
        if self.is_infinite or other.is_infinite:
            if self.is_zero() or other.is_zero():
                raise InvalidValueError("The product of infinity and zero is indeterminate")
            return self._infinity()
        return self._new(
            self._re * other.re - self._im * other.im,
            self._re * other.im + self._im * other.re,
        )

    def inverse(self) -> "Complex":
        """Multiplicative inverse; the inverse of infinity is zero.

        Raises:
            DivisionByZeroError: if this value is tolerance-equal to zero.
        """
        if self.is_infinite:
            return self._new(0.0, 0.0)
        if self.is_zero():
            raise DivisionByZeroError("Zero has no inverse")
        mod_sq = self._re * self._re + self._im * self._im
        return self.conjugate().scale(1.0 / mod_sq)

    def divide(self, other: Number) -> "Complex":
        """Quotient self / other.

        Raises:
            DivisionByZeroError: if other is tolerance-equal to zero.
            InvalidValueError: for infinity / infinity.
        """
        other = self._coerce(other)
        if other.is_zero():
            raise DivisionByZeroError("Cannot divide by zero")
        return self.multiply(other.inverse())

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __truediv__ = divide

    def __radd__(self, other):
        return self._coerce(other).add(self)

    def __rsub__(self, other):
        return self._coerce(other).subtract(self)

    def __rmul__(self, other):
        return self._coerce(other).multiply(self)

    def __rtruediv__(self, other):
        return self._coerce(other).divide(self)

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.modulus

    # =========================================================================
    # Metric helpers
    # =========================================================================

    def euc_distance(self, other: "Complex") -> float:
        """Euclidean distance; infinite when exactly one value is infinity."""
        if self.is_infinite and other.is_infinite:
            return 0.0
        if self.is_infinite or other.is_infinite:
            return math.inf
        return math.hypot(other.re - self._re, other.im - self._im)

    def angle_between(self, other: "Complex") -> float:
        """Unsigned angle in [0, pi] between two nonzero finite vectors.

        Raises:
            InvalidValueError: if either value is zero or infinity.
        """
        if self.is_infinite or other.is_infinite:
            raise InvalidValueError("Angles are not defined for the point at infinity")
        if self.is_zero() or other.is_zero():
            raise InvalidValueError("Angles are not defined for the zero vector")

        dot = self._re * other.re + self._im * other.im
        cos_angle = dot / (self.modulus * other.modulus)
        return math.acos(clamp(cos_angle))

    def nth_root(self, n: int = 2) -> "Complex":
        """Principal n-th root: modulus**(1/n) at angle argument/n.

        Args:
            n: int, non-negative root order (default: 2). n=0 gives one.

        Raises:
            InvalidValueError: for infinity or a negative/non-integer n.
        """
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise InvalidValueError(f"Root order must be a non-negative integer, got {n!r}")
        if self.is_infinite:
            raise InvalidValueError("The point at infinity has no n-th root")
        if n == 0:
            return self._new(1.0, 0.0)
        if self.is_zero():
            return self._new(0.0, 0.0)

        mod = self.modulus ** (1.0 / n)
        arg = self.argument / n
        return self._new(mod * math.cos(arg), mod * math.sin(arg))

    def __repr__(self):
        if self.is_infinite:
            return "Complex(inf, inf)"
        return f"Complex({self._re!r}, {self._im!r})"


# =============================================================================
# Factory and constants
# =============================================================================


class ComplexConstants(NamedTuple):
    ZERO: Complex
    ONE: Complex
    NEGONE: Complex
    I: Complex
    NEGI: Complex
    INFINITY: Complex


def make_complex(re: float, im: float, tol: Tolerance = DEFAULT_TOLERANCE) -> Complex:
    """Construct a Complex value; raises InvalidValueError on bad input."""
    return Complex(re, im, tol)


def complex_constants(tol: Tolerance = DEFAULT_TOLERANCE) -> ComplexConstants:
    """Named constants bound to the given tolerance."""
    return ComplexConstants(
        ZERO=Complex(0.0, 0.0, tol),
        ONE=Complex(1.0, 0.0, tol),
        NEGONE=Complex(-1.0, 0.0, tol),
        I=Complex(0.0, 1.0, tol),
        NEGI=Complex(0.0, -1.0, tol),
        INFINITY=Complex(math.inf, math.inf, tol),
    )


def point_on_unit_circle(theta: float, tol: Tolerance = DEFAULT_TOLERANCE) -> Complex:
    """The point e^{i*theta} on the unit circle.

    Args:
        theta: float, angle in radians
        tol: Tolerance, carried by the result

    Returns:
        Complex (cos(theta), sin(theta))
    """
    return Complex(math.cos(theta), math.sin(theta), tol)


ZERO, ONE, NEGONE, I, NEGI, INFINITY = complex_constants()
