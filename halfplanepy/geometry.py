"""Geodesics, circles, horocycles and polygons in the upper half-plane.

Geodesics are either vertical rays (center at infinity, infinite radius) or
semicircles centered on the real axis. Every geodesic carries four canonical
points [endpoint, interior, interior, endpoint] whose order encodes the
orientation supplied by the caller.

The "position" of a point on a non-vertical geodesic is its angle in the
parameterization (radius * cos(t) + center.re, radius * sin(t)), t in [0, pi].
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .complex_numbers import Complex
from .errors import DegenerateInputError, InvalidValueError
from .points import UhpPoint, as_point, to_boundary_point, to_interior_point, uhp_constants
from .tolerance import DEFAULT_TOLERANCE, Tolerance
from ._utils import is_positive_number


# =============================================================================
# Result types
# =============================================================================


@dataclass(frozen=True)
class Geodesic:
    # Points compare within a tolerance and are unhashable, so results are too
    __hash__ = None

    is_vertical: bool
    center: UhpPoint  # point at infinity when vertical, otherwise on the real line
    radius: float  # inf when vertical
    points: Tuple[UhpPoint, UhpPoint, UhpPoint, UhpPoint]


@dataclass(frozen=True)
class GeodesicSegment(Geodesic):
    __hash__ = None

    int_angles: Optional[Tuple[float, float]]  # positions of the two points, None when vertical
    int_heights: Optional[Tuple[float, float]]  # heights of the two points, None unless vertical
    length: float


@dataclass(frozen=True)
class GeodesicRay(Geodesic):
    __hash__ = None

    base_angle: Optional[float]
    heading_right: Optional[bool]
    base_height: Optional[float]
    heading_up: Optional[bool]


@dataclass(frozen=True)
class Circle:
    __hash__ = None

    center: UhpPoint
    radius: float
    euc_center: UhpPoint
    euc_radius: float


@dataclass(frozen=True)
class Horocycle:
    __hash__ = None

    center: UhpPoint
    base_point: UhpPoint
    witness: UhpPoint  # any point lying on the horocycle
    euc_radius: float  # inf when based at infinity (a horizontal line)


@dataclass(frozen=True)
class Polygon:
    __hash__ = None

    vertices: Tuple[UhpPoint, ...]
    sides: Tuple[GeodesicSegment, ...]
    angles: Tuple[float, ...]
    area: float
    perimeter: float


# =============================================================================
# Distance and angles
# =============================================================================


def distance(z: UhpPoint, w: UhpPoint) -> float:
    """Hyperbolic distance between two UHP points.

    Formula: d(z, w) = 2 * asinh(|z - w| / (2 * sqrt(z.im * w.im)))

    Returns:
        float, inf if either point lies on the boundary
    """
    z, w = as_point(z), as_point(w)
    if z.is_boundary or w.is_boundary:
        return math.inf
    return 2 * math.asinh(z.euc_distance(w) / (2 * math.sqrt(z.im * w.im)))


def position_on_geodesic(z: UhpPoint, geodesic: Geodesic, tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """Angular position of z on a non-vertical geodesic.

    Raises:
        InvalidValueError: if the geodesic is vertical or z is not on it.
    """
    if geodesic.is_vertical:
        raise InvalidValueError("Points on vertical geodesics are not parameterized by angle")

    center, radius = geodesic.center, geodesic.radius
    if z.is_infinite or not tol.isclose(math.hypot(z.re - center.re, z.im), radius):
        raise InvalidValueError(f"Point {z!r} does not lie on this geodesic")

    return math.atan2(z.im, z.re - center.re)


def tangent_at_point_on_geodesic(
    base: UhpPoint, heading: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE
) -> Complex:
    """Unit tangent at ``base`` of the geodesic through base and heading.

    Of the two unit tangents, the one pointing toward ``heading`` is returned.
    """
    geodesic = geodesic_through_points(base, heading, tol)

    if geodesic.is_vertical:
        return Complex(0.0, 1.0 if heading.im > base.im else -1.0, tol)

    base_position = position_on_geodesic(base, geodesic, tol)
    heading_position = position_on_geodesic(heading, geodesic, tol)

    # Positions decrease from left to right along the arc
    heading_right = base_position - heading_position > 0
    tangent = Complex(-math.sin(base_position), math.cos(base_position), tol)

    return tangent.negate() if heading_right else tangent


def angle_from_three_points(
    p: UhpPoint, q: UhpPoint, r: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE
) -> float:
    """Angle at q between the pq-geodesic and the qr-geodesic.

    Zero when q is the point at infinity or p and r coincide.
    """
    p, q, r = as_point(p), as_point(q), as_point(r)
    if q.is_infinite or p.is_equal_to(r):
        return 0.0

    pq_tangent = tangent_at_point_on_geodesic(q, p, tol)
    qr_tangent = tangent_at_point_on_geodesic(q, r, tol)

    return pq_tangent.angle_between(qr_tangent)


# =============================================================================
# Geodesics
# =============================================================================


def point_on_geodesic(
    radius: float, center_re: float, theta: float, tol: Tolerance = DEFAULT_TOLERANCE
) -> UhpPoint:
    """Point at position theta on the semicircle with the given center and radius.

    Multiples of pi (within tolerance) give boundary points.

    Raises:
        InvalidValueError: if radius is not a positive finite number.
    """
    if not is_positive_number(radius) or not math.isfinite(radius):
        raise InvalidValueError(f"Radius must be a positive number, got {radius}")

    re = radius * math.cos(theta) + center_re
    if tol.is_zero(math.remainder(theta, math.pi)):
        return to_boundary_point(re, 0.0, tol)
    return to_interior_point(re, radius * math.sin(theta), tol)


def geodesic_with_point_at_infinity(
    z: UhpPoint, infinity_first: bool = False, tol: Tolerance = DEFAULT_TOLERANCE
) -> Geodesic:
    """Vertical geodesic joining a finite point z to the point at infinity.

    Witness points sit directly above z when z is on the real line, and
    straddle z when it is interior.

    Raises:
        DegenerateInputError: if z is itself the point at infinity.
    """
    z = as_point(z)
    infinity = uhp_constants(tol).INFINITY
    if z.is_infinite:
        raise DegenerateInputError("Both points cannot be the point at infinity")

    if z.is_boundary:
        points = (z, to_interior_point(z.re, 1.0, tol), to_interior_point(z.re, 2.0, tol), infinity)
    else:
        points = (to_boundary_point(z.re, 0.0, tol), z, to_interior_point(z.re, 2 * z.im, tol), infinity)

    if infinity_first:
        points = tuple(reversed(points))

    return Geodesic(is_vertical=True, center=infinity, radius=math.inf, points=points)


def geodesic_center_and_radius(
    z: UhpPoint, w: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE
) -> Tuple[UhpPoint, float]:
    """Center (on the real line) and radius of the semicircle through z and w.

    The center is where the perpendicular bisector of the segment zw meets the
    real axis.

    Raises:
        DegenerateInputError: if z and w lie on a common vertical line.
    """
    midpoint_re = (z.re + w.re) / 2
    delta_re = w.re - z.re
    delta_im = w.im - z.im

    if tol.is_zero(delta_re):
        raise DegenerateInputError("Points on a vertical line do not determine a semicircle")

    if tol.is_zero(delta_im):
        center_re = midpoint_re
    else:
        # Perpendicular bisector y - mid_im = (-1 / slope) * (x - mid_re), solved at y = 0
        midpoint_im = (z.im + w.im) / 2
        slope = delta_im / delta_re
        center_re = midpoint_re + slope * midpoint_im

    center = to_boundary_point(center_re, 0.0, tol)
    return center, math.hypot(z.re - center_re, z.im)


def _geodesic_connecting_finite_points(z: UhpPoint, w: UhpPoint, tol: Tolerance) -> Geodesic:
    infinity = uhp_constants(tol).INFINITY

    if tol.is_zero(w.re - z.re):
        # Vertical: the point at infinity is always the last endpoint
        if z.is_interior and w.is_interior:
            points = (to_boundary_point(z.re, 0.0, tol), z, w, infinity)
        elif z.is_boundary and w.is_interior:
            points = (z, to_interior_point(w.re, w.im / 2, tol), w, infinity)
        elif z.is_interior and w.is_boundary:
            points = (w, to_interior_point(z.re, z.im / 2, tol), z, infinity)
        else:
            raise DegenerateInputError("Two distinct boundary points cannot form a vertical geodesic")
        return Geodesic(is_vertical=True, center=infinity, radius=math.inf, points=points)

    z_left_of_w = z.re < w.re

    if z.is_boundary and w.is_boundary:
        center = to_boundary_point((z.re + w.re) / 2, 0.0, tol)
        radius = abs(z.re - w.re) / 2
        one_quarter = point_on_geodesic(radius, center.re, 0.25 * math.pi, tol)
        three_quarter = point_on_geodesic(radius, center.re, 0.75 * math.pi, tol)

        if z_left_of_w:
            points = (z, three_quarter, one_quarter, w)
        else:
            points = (z, one_quarter, three_quarter, w)
        return Geodesic(is_vertical=False, center=center, radius=radius, points=points)

    center, radius = geodesic_center_and_radius(z, w, tol)
    left_endpoint = to_boundary_point(center.re - radius, 0.0, tol)
    right_endpoint = to_boundary_point(center.re + radius, 0.0, tol)

    if z.is_interior and w.is_boundary:
        z_position = math.atan2(z.im, z.re - center.re)
        witness = point_on_geodesic(radius, center.re, z_position / 2, tol)
        if z_left_of_w:
            points = (left_endpoint, z, witness, w)
        else:
            points = (right_endpoint, witness, z, w)
    elif z.is_boundary and w.is_interior:
        w_position = math.atan2(w.im, w.re - center.re)
        witness = point_on_geodesic(radius, center.re, w_position / 2, tol)
        if z_left_of_w:
            points = (z, w, witness, right_endpoint)
        else:
            points = (z, witness, w, left_endpoint)
    else:
        if z_left_of_w:
            points = (left_endpoint, z, w, right_endpoint)
        else:
            points = (right_endpoint, z, w, left_endpoint)

    return Geodesic(is_vertical=False, center=center, radius=radius, points=points)


def geodesic_through_points(z: UhpPoint, w: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE) -> Geodesic:
    """The geodesic through two distinct UHP points.

    The canonical points are ordered from z's side to w's side.

    Raises:
        DegenerateInputError: if z and w coincide (within tolerance).
    """
    z, w = as_point(z), as_point(w)
    if z.is_equal_to(w):
        raise DegenerateInputError("Input points must be distinct")

    if z.is_infinite:
        return geodesic_with_point_at_infinity(w, infinity_first=True, tol=tol)
    if w.is_infinite:
        return geodesic_with_point_at_infinity(z, tol=tol)

    return _geodesic_connecting_finite_points(z, w, tol)


def geodesic_from_base_and_direction(
    base: UhpPoint, direction: Complex, tol: Tolerance = DEFAULT_TOLERANCE
) -> Geodesic:
    """The geodesic leaving ``base`` with the given tangent direction.

    The canonical points run [endpoint behind, base, point ahead, endpoint
    ahead] for interior bases.

    Raises:
        InvalidValueError: if base is the point at infinity, direction is zero
            or infinite, or a non-vertical direction is given at a point on
            the real line.
    """
    base = as_point(base)
    if base.is_infinite:
        raise InvalidValueError("The base point must be finite")
    if direction.is_infinite:
        raise InvalidValueError("The point at infinity is not a valid direction vector")
    if direction.is_zero():
        raise InvalidValueError("The direction vector cannot be zero")

    if tol.is_zero(direction.re):
        return geodesic_with_point_at_infinity(base, infinity_first=direction.im < 0, tol=tol)

    if base.is_boundary:
        raise InvalidValueError("Geodesics leave the real line vertically; the direction must be vertical")

    center_re = base.re + base.im * (direction.im / direction.re)
    center = to_boundary_point(center_re, 0.0, tol)
    radius = math.hypot(base.re - center_re, base.im)

    left_endpoint = to_boundary_point(center_re - radius, 0.0, tol)
    right_endpoint = to_boundary_point(center_re + radius, 0.0, tol)
    base_position = math.atan2(base.im, base.re - center_re)

    if direction.re > 0:
        ahead = point_on_geodesic(radius, center_re, base_position / 2, tol)
        points = (left_endpoint, base, ahead, right_endpoint)
    else:
        ahead = point_on_geodesic(radius, center_re, (math.pi + base_position) / 2, tol)
        points = (right_endpoint, base, ahead, left_endpoint)

    return Geodesic(is_vertical=False, center=center, radius=radius, points=points)


# =============================================================================
# Segments and rays
# =============================================================================


def segment_between_points(z: UhpPoint, w: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE) -> GeodesicSegment:
    """Geodesic segment from z to w with its positions and hyperbolic length.

    Raises:
        DegenerateInputError: if z and w coincide.
    """
    z, w = as_point(z), as_point(w)
    geodesic = geodesic_through_points(z, w, tol)

    if geodesic.is_vertical:
        int_angles, int_heights = None, (z.im, w.im)
    else:
        int_angles = (position_on_geodesic(z, geodesic, tol), position_on_geodesic(w, geodesic, tol))
        int_heights = None

    return GeodesicSegment(
        is_vertical=geodesic.is_vertical,
        center=geodesic.center,
        radius=geodesic.radius,
        points=geodesic.points,
        int_angles=int_angles,
        int_heights=int_heights,
        length=distance(z, w),
    )


def ray_from_point_and_direction(
    base: UhpPoint, direction: Complex, tol: Tolerance = DEFAULT_TOLERANCE
) -> GeodesicRay:
    """Geodesic ray leaving ``base`` in the given direction."""
    base = as_point(base)
    geodesic = geodesic_from_base_and_direction(base, direction, tol)

    if geodesic.is_vertical:
        base_angle, heading_right = None, None
        base_height, heading_up = base.im, direction.im > 0
    else:
        base_angle, heading_right = position_on_geodesic(base, geodesic, tol), direction.re > 0
        base_height, heading_up = None, None

    return GeodesicRay(
        is_vertical=geodesic.is_vertical,
        center=geodesic.center,
        radius=geodesic.radius,
        points=geodesic.points,
        base_angle=base_angle,
        heading_right=heading_right,
        base_height=base_height,
        heading_up=heading_up,
    )


def ray_from_point_toward_point(
    base: UhpPoint, point: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE
) -> GeodesicRay:
    """Geodesic ray leaving ``base`` and passing through ``point``.

    Raises:
        DegenerateInputError: if base and point coincide.
    """
    base, point = as_point(base), as_point(point)
    geodesic = geodesic_through_points(base, point, tol)

    if base.is_infinite:
        base_angle, heading_right = None, None
        base_height, heading_up = math.inf, False
    elif geodesic.is_vertical:
        base_angle, heading_right = None, None
        base_height, heading_up = base.im, point.im > base.im
    else:
        base_angle = position_on_geodesic(base, geodesic, tol)
        heading_right = position_on_geodesic(point, geodesic, tol) < base_angle
        base_height, heading_up = None, None

    return GeodesicRay(
        is_vertical=geodesic.is_vertical,
        center=geodesic.center,
        radius=geodesic.radius,
        points=geodesic.points,
        base_angle=base_angle,
        heading_right=heading_right,
        base_height=base_height,
        heading_up=heading_up,
    )


# =============================================================================
# Circles
# =============================================================================


def circle_from_center_and_radius(
    center: UhpPoint, radius: float, tol: Tolerance = DEFAULT_TOLERANCE
) -> Circle:
    """Hyperbolic circle with its Euclidean center and radius.

    eucCenter = (center.re, center.im * cosh(radius))
    eucRadius = center.im * sinh(radius)

    Raises:
        InvalidValueError: if center is not interior or radius is not a
            positive finite number.
    """
    center = as_point(center)
    if not center.is_interior:
        raise InvalidValueError("The center of a circle must be an interior point")
    if not is_positive_number(radius) or not math.isfinite(radius):
        raise InvalidValueError(f"Radius must be a positive number, got {radius}")

    return Circle(
        center=center,
        radius=radius,
        euc_center=to_interior_point(center.re, math.cosh(radius) * center.im, tol),
        euc_radius=math.sinh(radius) * center.im,
    )


def circle_from_center_and_boundary_point(
    center: UhpPoint, point: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE
) -> Circle:
    """Hyperbolic circle centered at ``center`` passing through ``point``.

    Raises:
        DegenerateInputError: if point coincides with center.
        InvalidValueError: if either point is not interior.
    """
    center, point = as_point(center), as_point(point)
    if not center.is_interior or not point.is_interior:
        raise InvalidValueError("Circles are determined by two interior points")
    if center.is_equal_to(point):
        raise DegenerateInputError("A point on the circle must differ from its center")

    return circle_from_center_and_radius(center, distance(center, point), tol)


# =============================================================================
# Horocycles
# =============================================================================


def horocycle_from_center(center: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE) -> Horocycle:
    """Horocycle with the given Euclidean center.

    An interior center c gives the circle tangent to the real line at
    (c.re, 0). The point at infinity gives the horizontal line at height 1.

    Raises:
        InvalidValueError: if center is a point on the real line.
    """
    center = as_point(center)
    constants = uhp_constants(tol)

    if center.is_infinite:
        return Horocycle(center=center, base_point=constants.INFINITY, witness=constants.I, euc_radius=math.inf)
    if not center.is_interior:
        raise InvalidValueError("A horocycle cannot be centered on the real line")

    return Horocycle(
        center=center,
        base_point=to_boundary_point(center.re, 0.0, tol),
        witness=to_interior_point(center.re, 2 * center.im, tol),
        euc_radius=center.im,
    )


def horocycle_from_base_and_witness(
    base: UhpPoint, witness: UhpPoint, tol: Tolerance = DEFAULT_TOLERANCE
) -> Horocycle:
    """Horocycle based at a boundary point and passing through ``witness``.

    eucRadius = ((w.re - base.re)^2 + w.im^2) / (2 * w.im)

    Raises:
        InvalidValueError: if base is interior or witness is not interior.
    """
    base, witness = as_point(base), as_point(witness)
    if not base.is_boundary:
        raise InvalidValueError("The base of a horocycle must be a boundary point")
    if not witness.is_interior:
        raise InvalidValueError("The witness point of a horocycle must be interior")

    if base.is_infinite:
        return Horocycle(center=base, base_point=base, witness=witness, euc_radius=math.inf)

    euc_radius = ((witness.re - base.re) ** 2 + witness.im ** 2) / (2 * witness.im)
    return Horocycle(
        center=to_interior_point(base.re, euc_radius, tol),
        base_point=base,
        witness=witness,
        euc_radius=euc_radius,
    )


# =============================================================================
# Polygons
# =============================================================================


def polygon_perimeter(sides: Sequence[GeodesicSegment]) -> float:
    """Total hyperbolic length of a polygon.

    Args:
        sides: GeodesicSegment sequence, the sides of the polygon

    Returns:
        float, the sum of the side lengths (inf if any vertex is ideal)
    """
    return sum(side.length for side in sides)


def polygon_area(angles: Sequence[float]) -> float:
    """Area of a polygon from its interior angles.

    Formula (Gauss-Bonnet): area = (n - 2) * pi - sum(angles)

    Args:
        angles: float sequence, interior angles in radians

    Returns:
        float, the hyperbolic area
    """
    return (len(angles) - 2) * math.pi - sum(angles)


def polygon_from_vertices(vertices: Sequence[UhpPoint], tol: Tolerance = DEFAULT_TOLERANCE) -> Polygon:
    """Geodesic polygon with its sides, interior angles, area and perimeter.

    Raises:
        DegenerateInputError: for fewer than three vertices or consecutive
            coincident vertices.
    """
    vertices = tuple(as_point(v) for v in vertices)
    n = len(vertices)
    if n < 3:
        raise DegenerateInputError(f"A polygon needs at least three vertices, got {n}")

    angles = []
    sides = []
    for i, vertex in enumerate(vertices):
        prev_vertex = vertices[i - 1]
        next_vertex = vertices[(i + 1) % n]
        angles.append(angle_from_three_points(prev_vertex, vertex, next_vertex, tol))
        sides.append(segment_between_points(vertex, next_vertex, tol))

    return Polygon(
        vertices=vertices,
        sides=tuple(sides),
        angles=tuple(angles),
        area=polygon_area(angles),
        perimeter=polygon_perimeter(sides),
    )
