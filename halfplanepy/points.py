"""Points of the upper half-plane and its boundary.

Every point falls in exactly one of three forms, fixed at construction:

    interior          finite re, im > 0
    on the real line  finite re, im = 0
    infinity          re = im = +inf

An imaginary part within ``atol`` of zero is snapped to 0 so that images of
boundary points under isometries keep their classification.
"""

from __future__ import annotations

import enum
import math
from typing import NamedTuple, Optional

from .complex_numbers import Complex
from .errors import InvalidValueError
from .tolerance import DEFAULT_TOLERANCE, Tolerance
from ._utils import is_real_number


class PointKind(enum.Enum):
    INTERIOR = "interior"
    BOUNDARY = "boundary"


class BoundaryKind(enum.Enum):
    ON_REAL_LINE = "on-real-line"
    INFINITY = "infinity"


class UhpPoint(Complex):
    """A validated point of the closed upper half-plane.

    Use the factory functions ``to_point``, ``to_interior_point`` and
    ``to_boundary_point`` rather than the constructor.

    Attributes:
        kind: PointKind.INTERIOR or PointKind.BOUNDARY
        boundary_kind: BoundaryKind for boundary points, None for interior ones
    """

    __slots__ = ("_kind", "_boundary_kind")

    def __init__(self, re: float = 0.0, im: float = 0.0, tol: Tolerance = DEFAULT_TOLERANCE):
        if not is_real_number(re) or not is_real_number(im):
            raise InvalidValueError(f"Real and imaginary parts must be real numbers, got ({re!r}, {im!r})")
        if not isinstance(tol, Tolerance):
            raise InvalidValueError(f"tol must be a Tolerance, got {tol!r}")

        if math.isfinite(im) and abs(im) <= tol.atol:
            im = 0.0
        if im < 0:
            raise InvalidValueError(f"Imaginary part cannot be negative, got {im}")

        super().__init__(re, im, tol)

        if self.is_infinite:
            kind, boundary_kind = PointKind.BOUNDARY, BoundaryKind.INFINITY
        elif self.im > 0:
            kind, boundary_kind = PointKind.INTERIOR, None
        else:
            kind, boundary_kind = PointKind.BOUNDARY, BoundaryKind.ON_REAL_LINE

        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_boundary_kind", boundary_kind)

    @property
    def kind(self) -> PointKind:
        return self._kind

    @property
    def boundary_kind(self) -> Optional[BoundaryKind]:
        return self._boundary_kind

    @property
    def is_interior(self) -> bool:
        return self._kind is PointKind.INTERIOR

    @property
    def is_boundary(self) -> bool:
        return self._kind is PointKind.BOUNDARY

    @property
    def is_on_real_line(self) -> bool:
        return self._boundary_kind is BoundaryKind.ON_REAL_LINE

    def clone(self) -> "UhpPoint":
        return UhpPoint(self.re, self.im, self.tol)

    def __repr__(self):
        if self.is_infinite:
            return "UhpPoint(inf, inf)"
        return f"UhpPoint({self.re!r}, {self.im!r})"


# =============================================================================
# Validated constructors
# =============================================================================


def to_point(re: float, im: float, tol: Tolerance = DEFAULT_TOLERANCE) -> UhpPoint:
    """Any UHP point: (inf, inf), (finite, 0) or (finite, positive).

    Raises:
        InvalidValueError: otherwise.
    """
    try:
        return UhpPoint(re, im, tol)
    except InvalidValueError as e:
        raise InvalidValueError(
            "Invalid UHP point. Must be one of the forms (inf, inf); "
            f"(finite, 0); (finite, positive). Got ({re}, {im})"
        ) from e


def to_interior_point(re: float, im: float, tol: Tolerance = DEFAULT_TOLERANCE) -> UhpPoint:
    """An interior point: finite re and finite im > 0.

    Raises:
        InvalidValueError: otherwise.
    """
    if is_real_number(re) and not math.isfinite(re):
        raise InvalidValueError("Real part must be finite")
    if is_real_number(im) and not math.isfinite(im):
        raise InvalidValueError("Imaginary part must be finite")

    z = to_point(re, im, tol)
    if not z.is_interior:
        raise InvalidValueError(f"Imaginary part must be positive, got {im}")
    return z


def to_boundary_point(re: float, im: float, tol: Tolerance = DEFAULT_TOLERANCE) -> UhpPoint:
    """A boundary point: (finite, 0) or (inf, inf).

    Raises:
        InvalidValueError: otherwise.
    """
    message = (
        "Invalid UHP boundary point. Must be of the form (inf, inf) or "
        f"(finite, 0). Got ({re}, {im})"
    )
    try:
        z = UhpPoint(re, im, tol)
    except InvalidValueError as e:
        raise InvalidValueError(message) from e
    if not z.is_boundary:
        raise InvalidValueError(message)
    return z


def as_point(z: Complex) -> UhpPoint:
    """Re-validate an arbitrary Complex value as a UHP point."""
    if isinstance(z, UhpPoint):
        return z
    return to_point(z.re, z.im, z.tol)


# =============================================================================
# Constants
# =============================================================================


class UhpConstants(NamedTuple):
    ZERO: UhpPoint
    ONE: UhpPoint
    NEGONE: UhpPoint
    I: UhpPoint
    INFINITY: UhpPoint


def uhp_constants(tol: Tolerance = DEFAULT_TOLERANCE) -> UhpConstants:
    return UhpConstants(
        ZERO=UhpPoint(0.0, 0.0, tol),
        ONE=UhpPoint(1.0, 0.0, tol),
        NEGONE=UhpPoint(-1.0, 0.0, tol),
        I=UhpPoint(0.0, 1.0, tol),
        INFINITY=UhpPoint(math.inf, math.inf, tol),
    )


ZERO, ONE, NEGONE, I, INFINITY = uhp_constants()
