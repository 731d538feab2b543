"""Isometries of the upper half-plane as invertible Mobius transformations.

General isometries are built by conjugating a standard form to the desired
position: a configuration is moved to a standard one (point -> i,
geodesic -> imaginary axis, boundary point -> infinity), the closed form is
applied there, and the result is moved back.

Classification uses a determinant-one representative with trace tr:

    tr^2 = 4    parabolic   one fixed boundary point
    tr^2 > 4    hyperbolic  two fixed boundary points
    tr^2 < 4    elliptic    one fixed interior point

The identity fixes every point and has no fixed-point set (None).
"""

from __future__ import annotations

import enum
import logging
import math
from typing import Optional, Tuple, Union

from .complex_numbers import Complex
from .errors import (
    DegenerateInputError,
    InternalInconsistencyError,
    InvalidValueError,
    NonInvertibleError,
)
from .geometry import distance as uhp_distance
from .geometry import geodesic_from_base_and_direction, geodesic_through_points
from .mobius import Mobius, identity as mobius_identity
from .points import UhpPoint, as_point, to_boundary_point, to_point, uhp_constants
from .tolerance import DEFAULT_TOLERANCE, Tolerance

logger = logging.getLogger(__name__)


FixedPoints = Union[None, UhpPoint, Tuple[UhpPoint, UhpPoint]]


class IsometryKind(enum.Enum):
    IDENTITY = "identity"
    ELLIPTIC = "elliptic"
    PARABOLIC = "parabolic"
    HYPERBOLIC = "hyperbolic"


class Isometry:
    """An isometry of the upper half-plane.

    Args:
        mobius: Mobius transformation with nonzero determinant

    Raises:
        NonInvertibleError: if the determinant is tolerance-zero.
    """

    __slots__ = ("_mobius",)

    def __init__(self, mobius: Mobius):
        det = mobius.determinant()
        if det.is_zero():
            logger.debug("Rejecting isometry %r with determinant %r", mobius, det)
            raise NonInvertibleError("The determinant of an isometry must be nonzero")
        object.__setattr__(self, "_mobius", mobius)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_coefficients(cls, a, b, c, d, tol: Tolerance = DEFAULT_TOLERANCE) -> "Isometry":
        """Isometry with the Mobius coefficients (a, b, c, d).

        Args:
            a, b, c, d: Complex (or real) coefficients
            tol: Tolerance, carried by the result

        Raises:
            NonInvertibleError: if ad - bc is tolerance-zero.
        """
        return cls(Mobius(a, b, c, d, tol))

    @property
    def mobius(self) -> Mobius:
        return self._mobius

    @property
    def tol(self) -> Tolerance:
        return self._mobius.tol

    @property
    def determinant(self) -> Complex:
        return self._mobius.determinant()

    @property
    def trace(self) -> Complex:
        """Trace of the determinant-one representative."""
        return self._mobius.reduce().trace

    @property
    def kind(self) -> IsometryKind:
        return classify(self)

    @property
    def fixed_points(self) -> FixedPoints:
        return fixed_points(self)

    # =========================================================================
    # Algebra
    # =========================================================================

    def compose(self, other: "Isometry") -> "Isometry":
        """Apply other, then self."""
        return Isometry(self._mobius.compose(other.mobius))

    __matmul__ = compose

    def inverse(self) -> "Isometry":
        return Isometry(self._mobius.inverse())

    def conjugate(self, by: "Isometry") -> "Isometry":
        """by^-1 * self * by."""
        return Isometry(self._mobius.conjugate(by.mobius))

    def apply(self, z: UhpPoint) -> UhpPoint:
        """Image of z, re-validated as a UHP point.

        Raises:
            InvalidValueError: if the image leaves the closed upper half-plane.
        """
        return as_point(self._mobius.apply(as_point(z)))

    __call__ = apply

    def is_equal_to(self, other: "Isometry") -> bool:
        return self._mobius.is_equal_to(other.mobius)

    def __eq__(self, other):
        if not isinstance(other, Isometry):
            return NotImplemented
        return self.is_equal_to(other)

    __hash__ = None

    # =========================================================================
    # Standard forms
    # =========================================================================

    @property
    def conjugation_to_standard(self) -> Optional["Isometry"]:
        """The isometry g with ``self.conjugate(g) == self.standard_form``.

        Parabolic standard forms are normalized to a displacement of +1 or -1
        and hyperbolic ones to a non-negative translation length, so that
        conjugate isometries share a standard form. None for the identity.
        """
        kind = self.kind
        tol = self.tol
        if kind is IsometryKind.IDENTITY:
            return None

        if kind is IsometryKind.ELLIPTIC:
            return move_point_to_i(self.fixed_points, tol).inverse()

        if kind is IsometryKind.PARABOLIC:
            to_infinity = move_point_to_infinity(self.fixed_points, tol)
            translation = self.conjugate(to_infinity.inverse()).mobius.reduce()
            displacement = abs((translation.b / translation.d).re)
            rescale = Isometry(Mobius(1.0, 0.0, 0.0, displacement, tol))
            return rescale.compose(to_infinity).inverse()

        e0, e1 = self.fixed_points
        to_axis = move_geodesic_to_imaginary_axis(e0, e1, tol)
        dilation = self.conjugate(to_axis.inverse()).mobius
        if abs(dilation.a / dilation.d) < 1:
            to_axis = move_geodesic_to_imaginary_axis(e1, e0, tol)
        return to_axis.inverse()

    @property
    def standard_form(self) -> "Isometry":
        """The standard elliptic, parabolic or hyperbolic isometry conjugate to this one."""
        g = self.conjugation_to_standard
        if g is None:
            return self

        conjugated = self.conjugate(g).mobius.reduce()
        a, b, d = conjugated.a, conjugated.b, conjugated.d
        kind = self.kind
        tol = self.tol

        if kind is IsometryKind.ELLIPTIC:
            # (cos t, sin t, -sin t, cos t) up to an overall sign
            theta = math.atan2(b.re, a.re) % math.pi
            return standard_elliptic(theta, tol)
        if kind is IsometryKind.PARABOLIC:
            return standard_parabolic((b / d).re, tol)
        return standard_hyperbolic(math.log(abs(a / d)), tol)

    def is_conjugate_to(self, other: "Isometry") -> Optional["Isometry"]:
        """An isometry k with ``self.conjugate(k) == other``, or None.

        Two isometries are reported conjugate when they have the same kind
        and equal standard forms.
        """
        kind = self.kind
        if kind is not other.kind:
            return None
        if kind is IsometryKind.IDENTITY:
            return Isometry(mobius_identity(self.tol))
        if not self.standard_form.is_equal_to(other.standard_form):
            return None
        return self.conjugation_to_standard.compose(other.conjugation_to_standard.inverse())

    def __repr__(self):
        a, b, c, d = self._mobius.coeffs
        return f"Isometry(a={a!r}, b={b!r}, c={c!r}, d={d!r})"


def identity(tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """The identity isometry.

    Args:
        tol: Tolerance, carried by the result

    Returns:
        Isometry of kind IDENTITY
    """
    return Isometry(mobius_identity(tol))


def _as_isometry(m: Union[Isometry, Mobius]) -> Isometry:
    return m if isinstance(m, Isometry) else Isometry(m)


# =============================================================================
# Classification and fixed points
# =============================================================================


def classify(m: Union[Isometry, Mobius]) -> IsometryKind:
    """Classify by the trace squared of the determinant-one representative."""
    m = _as_isometry(m)
    tol = m.tol
    if m.mobius.is_equal_to(mobius_identity(tol)):
        return IsometryKind.IDENTITY

    tr = m.trace
    tr_squared = (tr * tr).re
    logger.debug("Classifying %r: trace squared %s", m, tr_squared)

    if tol.isclose(tr_squared, 4.0):
        return IsometryKind.PARABOLIC
    if tr_squared > 4.0:
        return IsometryKind.HYPERBOLIC
    return IsometryKind.ELLIPTIC


def fixed_points(m: Union[Isometry, Mobius]) -> FixedPoints:
    """Fixed points of an isometry.

    Returns:
        None for the identity; a boundary point for a parabolic isometry; a
        pair of boundary points for a hyperbolic one; an interior point for
        an elliptic one.

    Raises:
        InternalInconsistencyError: if a computed fixed point does not have
            the form required by the classification.
    """
    m = _as_isometry(m)
    kind = classify(m)
    if kind is IsometryKind.IDENTITY:
        return None

    tol = m.tol
    reduced = m.mobius.reduce()
    a, b, c, d = reduced.coeffs
    constants = uhp_constants(tol)

    if c.is_zero():
        # z -> (a z + b) / d fixes infinity and, unless a = d, b / (d - a)
        if kind is IsometryKind.PARABOLIC:
            return constants.INFINITY
        if kind is IsometryKind.HYPERBOLIC:
            finite = b / (d - a)
            return _boundary_fixed_point(finite, tol), constants.INFINITY
        raise InternalInconsistencyError("An elliptic isometry cannot fix the point at infinity")

    # Roots of c z^2 + (d - a) z - b = 0
    denominator = c.scale(2.0)
    if kind is IsometryKind.PARABOLIC:
        return _boundary_fixed_point((a - d) / denominator, tol)

    tr = a + d
    root_term = (tr * tr - 4.0).nth_root(2)
    plus = (a - d + root_term) / denominator
    minus = (a - d - root_term) / denominator

    if kind is IsometryKind.HYPERBOLIC:
        return _boundary_fixed_point(minus, tol), _boundary_fixed_point(plus, tol)

    for z in (plus, minus):
        if z.im > tol.atol:
            return to_point(z.re, z.im, tol)
    raise InternalInconsistencyError("The fixed point of an elliptic isometry should be an interior point")


def _boundary_fixed_point(z: Complex, tol: Tolerance) -> UhpPoint:
    if not tol.is_zero(z.im):
        raise InternalInconsistencyError(f"Expected a boundary fixed point, got {z!r}")
    return to_boundary_point(z.re, 0.0, tol)


# =============================================================================
# Standard isometries
# =============================================================================


def standard_elliptic(theta: float, tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """Elliptic isometry fixing i: coefficients (cos t, sin t, -sin t, cos t).

    Tangent vectors at i are rotated by 2 * theta.
    """
    cos, sin = math.cos(theta), math.sin(theta)
    return Isometry(Mobius(cos, sin, -sin, cos, tol))


def standard_hyperbolic(distance: float, tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """Hyperbolic isometry moving i up the imaginary axis by ``distance``."""
    return Isometry(Mobius(math.exp(distance / 2), 0.0, 0.0, math.exp(-distance / 2), tol))


def standard_parabolic(displacement: float, tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """Parabolic isometry fixing infinity: z -> z + displacement."""
    return Isometry(Mobius(1.0, displacement, 0.0, 1.0, tol))


# =============================================================================
# Conjugations to standard position
# =============================================================================


def move_point_to_i(z: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """The isometry w -> (w - z.re) / z.im, sending z to i.

    Raises:
        InvalidValueError: if z is not an interior point.
    """
    z = as_point(z)
    if not z.is_interior:
        raise InvalidValueError("Only interior points can be moved to i")
    return Isometry(Mobius(1 / z.im, -z.re / z.im, 0.0, 1.0, tol))


def move_point_to_infinity(z: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """The isometry w -> -1 / (w - z), or the identity when z is infinity."""
    z = as_point(z)
    if z.is_infinite:
        return identity(tol)
    return Isometry(Mobius(0.0, -1.0, 1.0, z.with_tolerance(tol).negate(), tol))


def move_geodesic_to_imaginary_axis(e0: UhpPoint, e1: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """Orientation-preserving isometry sending e0 to 0 and e1 to infinity.

    Args:
        e0, e1: distinct boundary points, the endpoints of a geodesic

    Raises:
        InvalidValueError: if either endpoint is interior.
        DegenerateInputError: if the endpoints coincide.
    """
    e0, e1 = as_point(e0), as_point(e1)
    if not e0.is_boundary or not e1.is_boundary:
        raise InvalidValueError("Geodesic endpoints must be boundary points")
    if e0.is_equal_to(e1):
        raise DegenerateInputError("Geodesic endpoints must be distinct")

    if e1.is_infinite:
        return Isometry(Mobius(1.0, -e0.re, 0.0, 1.0, tol))
    if e0.is_infinite:
        return Isometry(Mobius(0.0, -1.0, 1.0, -e1.re, tol))

    # z -> (z - e0) / (z - e1) up to a sign chosen to keep the determinant positive
    if e0.re < e1.re:
        return Isometry(Mobius(-1.0, e0.re, 1.0, -e1.re, tol))
    return Isometry(Mobius(1.0, -e0.re, 1.0, -e1.re, tol))


def move_geodesic_through_points_to_imaginary_axis(
    z: UhpPoint, w: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE
) -> Isometry:
    """Send the geodesic through z and w to the imaginary axis, z's end to 0."""
    points = geodesic_through_points(z, w, tol).points
    return move_geodesic_to_imaginary_axis(points[0], points[3], tol)


# =============================================================================
# General isometries
# =============================================================================


def elliptic(center: UhpPoint, theta: float, tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """Elliptic isometry fixing ``center``, conjugate to standard_elliptic(theta)."""
    return standard_elliptic(theta, tol).conjugate(move_point_to_i(center, tol))


def hyperbolic(
    z: UhpPoint, w: UhpPoint, distance: Optional[float] = None, tol: Tolerance = DEFAULT_TOLERANCE
) -> Isometry:
    """Hyperbolic isometry translating along the geodesic through z and w.

    Args:
        z, w: UHP points determining the axis, oriented from z toward w
        distance: float, translation length; defaults to the distance from z
            to w, so that z is sent to w

    Returns:
        The identity if z and w coincide or distance is zero.

    Raises:
        InvalidValueError: if distance is omitted and either point lies on
            the boundary.
    """
    z, w = as_point(z), as_point(w)
    if z.is_equal_to(w) or distance == 0:
        return identity(tol)

    if distance is None:
        distance = uhp_distance(z, w)
        if math.isinf(distance):
            raise InvalidValueError("A translation length is required when a point lies on the boundary")

    g = move_geodesic_through_points_to_imaginary_axis(z, w, tol)
    # Vertical axes always end at infinity, which may lie behind w
    if g.apply(w).modulus < g.apply(z).modulus:
        distance = -distance
    return standard_hyperbolic(distance, tol).conjugate(g)


def hyperbolic_from_base_and_direction(
    base: UhpPoint, direction: Complex, distance: float, tol: Tolerance = DEFAULT_TOLERANCE
) -> Isometry:
    """Hyperbolic isometry translating ``base`` by ``distance`` along ``direction``."""
    if distance == 0:
        return identity(tol)
    points = geodesic_from_base_and_direction(base, direction, tol).points
    g = move_geodesic_to_imaginary_axis(points[0], points[3], tol)
    return standard_hyperbolic(distance, tol).conjugate(g)


def parabolic(base: UhpPoint, displacement: float, tol: Tolerance = DEFAULT_TOLERANCE) -> Isometry:
    """Parabolic isometry fixing the boundary point ``base``.

    Raises:
        InvalidValueError: if base is an interior point.
    """
    base = as_point(base)
    if not base.is_boundary:
        raise InvalidValueError("Parabolic isometries fix a boundary point")
    return standard_parabolic(displacement, tol).conjugate(move_point_to_infinity(base, tol))
