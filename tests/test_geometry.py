"""
Tests for geodesics, circles, horocycles and polygons.
"""

import math

import pytest

from halfplanepy.complex_numbers import Complex
from halfplanepy.errors import DegenerateInputError, InvalidValueError
from halfplanepy.geometry import (
    Geodesic,
    angle_from_three_points,
    circle_from_center_and_boundary_point,
    circle_from_center_and_radius,
    distance,
    geodesic_center_and_radius,
    geodesic_from_base_and_direction,
    geodesic_through_points,
    geodesic_with_point_at_infinity,
    horocycle_from_base_and_witness,
    horocycle_from_center,
    point_on_geodesic,
    polygon_from_vertices,
    position_on_geodesic,
    ray_from_point_and_direction,
    ray_from_point_toward_point,
    segment_between_points,
    tangent_at_point_on_geodesic,
)
from halfplanepy.points import I, INFINITY, ZERO, to_point

SQRT2 = math.sqrt(2)


# =============================================================================
# Distance
# =============================================================================

class TestDistance:
    """Tests for the hyperbolic distance."""

    def test_along_imaginary_axis(self):
        """d(i, e*i) = 1."""
        assert distance(I, to_point(0.0, math.e)) == pytest.approx(1.0)

    def test_symmetric_and_zero_on_diagonal(self, random_points):
        for z, w in zip(random_points, random_points[1:]):
            assert distance(z, w) == pytest.approx(distance(w, z))
            assert distance(z, z) == pytest.approx(0.0)

    def test_triangle_inequality(self, random_points):
        for p, q, r in zip(random_points, random_points[1:], random_points[2:]):
            assert distance(p, r) <= distance(p, q) + distance(q, r) + 1e-12

    def test_boundary_points_are_infinitely_far(self):
        assert distance(I, ZERO) == math.inf
        assert distance(INFINITY, I) == math.inf


# =============================================================================
# Geodesics
# =============================================================================

class TestGeodesicThroughPoints:
    """Tests for the geodesic through two points."""

    def test_semicircle(self):
        """Through (-1, 1) and (1, 1): center 0, radius sqrt(2)."""
        z, w = to_point(-1.0, 1.0), to_point(1.0, 1.0)
        g = geodesic_through_points(z, w)
        assert isinstance(g, Geodesic)
        assert not g.is_vertical
        assert g.center == ZERO
        assert g.radius == pytest.approx(SQRT2)
        assert g.points == (to_point(-SQRT2, 0.0), z, w, to_point(SQRT2, 0.0))

    def test_orientation_follows_input_order(self):
        z, w = to_point(-1.0, 1.0), to_point(1.0, 1.0)
        g = geodesic_through_points(w, z)
        assert g.points == (to_point(SQRT2, 0.0), w, z, to_point(-SQRT2, 0.0))

    def test_vertical(self):
        z, w = I, to_point(0.0, 2.0)
        g = geodesic_through_points(z, w)
        assert g.is_vertical
        assert g.center.is_infinite
        assert g.radius == math.inf
        assert g.points == (ZERO, z, w, INFINITY)

    def test_vertical_keeps_infinity_last(self):
        """Vertical geodesics through two finite points end at infinity."""
        g = geodesic_through_points(to_point(0.0, 2.0), I)
        assert g.points[0] == ZERO
        assert g.points[3].is_infinite

    def test_vertical_with_boundary_point(self):
        g = geodesic_through_points(to_point(1.0, 0.0), to_point(1.0, 4.0))
        assert g.points == (to_point(1.0, 0.0), to_point(1.0, 2.0), to_point(1.0, 4.0), INFINITY)

    def test_two_boundary_points(self):
        z, w = to_point(-1.0, 0.0), to_point(1.0, 0.0)
        g = geodesic_through_points(z, w)
        assert g.center == ZERO
        assert g.radius == pytest.approx(1.0)
        assert g.points[0] == z
        assert g.points[1] == to_point(-SQRT2 / 2, SQRT2 / 2)
        assert g.points[2] == to_point(SQRT2 / 2, SQRT2 / 2)
        assert g.points[3] == w

    def test_interior_and_boundary_point(self):
        """Through i and 1: the unit semicircle."""
        g = geodesic_through_points(I, to_point(1.0, 0.0))
        assert g.center == ZERO
        assert g.radius == pytest.approx(1.0)
        assert g.points[0] == to_point(-1.0, 0.0)
        assert g.points[1] == I
        assert g.points[2] == to_point(SQRT2 / 2, SQRT2 / 2)
        assert g.points[3] == to_point(1.0, 0.0)

    def test_boundary_and_interior_point(self):
        g = geodesic_through_points(to_point(1.0, 0.0), I)
        assert g.points[0] == to_point(1.0, 0.0)
        assert g.points[2] == I
        assert g.points[3] == to_point(-1.0, 0.0)

    def test_point_at_infinity(self):
        g = geodesic_through_points(I, INFINITY)
        assert g.is_vertical
        assert g.points == (ZERO, I, to_point(0.0, 2.0), INFINITY)

    def test_point_at_infinity_first(self):
        g = geodesic_through_points(INFINITY, I)
        assert g.points[0].is_infinite
        assert g.points[3] == ZERO

    def test_points_lie_on_geodesic(self, random_points):
        for z, w in zip(random_points, random_points[1:]):
            g = geodesic_through_points(z, w)
            if g.is_vertical:
                continue
            for p in g.points:
                assert math.hypot(p.re - g.center.re, p.im) == pytest.approx(g.radius)

    def test_coincident_points(self):
        with pytest.raises(DegenerateInputError):
            geodesic_through_points(I, to_point(0.0, 1.0 + 1e-12))

    def test_two_points_at_infinity(self):
        with pytest.raises(DegenerateInputError):
            geodesic_with_point_at_infinity(INFINITY)

    def test_center_and_radius_rejects_vertical(self):
        with pytest.raises(DegenerateInputError):
            geodesic_center_and_radius(I, to_point(0.0, 3.0))

    def test_center_far_above_real_line(self):
        """A small height difference still tilts the bisector at large heights."""
        z, w = to_point(0.0, 1000.0), to_point(1.0, 1000.005)
        center, radius = geodesic_center_and_radius(z, w)
        assert center.re == pytest.approx(5.5000125, rel=1e-6)
        assert math.hypot(w.re - center.re, w.im) == pytest.approx(radius, rel=1e-12)
        g = geodesic_through_points(z, w)
        assert g.points[0].re == pytest.approx(center.re - radius)
        assert g.points[0].re > -995.0

    def test_center_follows_horizontal_shift(self, random_points):
        shift = 1000.0
        for z, w in zip(random_points, random_points[1:]):
            center, radius = geodesic_center_and_radius(z, w)
            moved_center, moved_radius = geodesic_center_and_radius(
                to_point(z.re + shift, z.im), to_point(w.re + shift, w.im)
            )
            assert moved_center.re == pytest.approx(center.re + shift, rel=1e-6)
            assert moved_radius == pytest.approx(radius, rel=1e-6)

    def test_shifted_pair_stays_non_vertical(self):
        """Verticality depends on the horizontal gap, not on where the pair sits."""
        for shift in (0.0, 1000.0):
            z, w = to_point(shift, 1.0), to_point(shift + 0.005, 2.0)
            g = geodesic_through_points(z, w)
            assert not g.is_vertical
            assert g.center.re == pytest.approx(shift + 300.0025)

    def test_results_are_unhashable(self):
        g = geodesic_through_points(I, to_point(1.0, 1.0))
        with pytest.raises(TypeError):
            hash(g)
        with pytest.raises(TypeError):
            hash(segment_between_points(I, to_point(1.0, 1.0)))


class TestGeodesicFromBaseAndDirection:
    """Tests for geodesics given by a base point and a tangent direction."""

    def test_horizontal_direction(self):
        g = geodesic_from_base_and_direction(I, Complex(1.0, 0.0))
        assert g.center == ZERO
        assert g.radius == pytest.approx(1.0)
        assert g.points[0] == to_point(-1.0, 0.0)
        assert g.points[1] == I
        assert g.points[2] == to_point(SQRT2 / 2, SQRT2 / 2)
        assert g.points[3] == to_point(1.0, 0.0)

    def test_leftward_direction(self):
        g = geodesic_from_base_and_direction(I, Complex(-1.0, 0.0))
        assert g.points[0] == to_point(1.0, 0.0)
        assert g.points[2] == to_point(-SQRT2 / 2, SQRT2 / 2)
        assert g.points[3] == to_point(-1.0, 0.0)

    def test_oblique_direction(self):
        """The direction is tangent to the resulting semicircle at the base."""
        base = to_point(0.5, 1.5)
        direction = Complex(1.0, 2.0)
        g = geodesic_from_base_and_direction(base, direction)
        radial = Complex(base.re - g.center.re, base.im)
        dot = radial.re * direction.re + radial.im * direction.im
        assert dot == pytest.approx(0.0, abs=1e-12)

    def test_vertical_direction(self):
        up = geodesic_from_base_and_direction(I, Complex(0.0, 1.0))
        assert up.is_vertical
        assert up.points[3].is_infinite
        down = geodesic_from_base_and_direction(I, Complex(0.0, -1.0))
        assert down.points[0].is_infinite

    def test_invalid_inputs(self):
        with pytest.raises(InvalidValueError):
            geodesic_from_base_and_direction(INFINITY, Complex(1.0, 0.0))
        with pytest.raises(InvalidValueError):
            geodesic_from_base_and_direction(I, Complex(0.0, 0.0))
        with pytest.raises(InvalidValueError):
            geodesic_from_base_and_direction(I, Complex(math.inf, math.inf))
        with pytest.raises(InvalidValueError):
            geodesic_from_base_and_direction(ZERO, Complex(1.0, 1.0))


class TestPositionsAndAngles:
    """Tests for positions, tangents and angles."""

    def test_point_on_geodesic(self):
        assert point_on_geodesic(1.0, 0.0, math.pi / 2) == I
        assert point_on_geodesic(2.0, 1.0, 0.0).is_on_real_line
        assert point_on_geodesic(2.0, 1.0, math.pi) == to_point(-1.0, 0.0)

    def test_point_on_geodesic_rejects_bad_radius(self):
        with pytest.raises(InvalidValueError):
            point_on_geodesic(0.0, 0.0, 1.0)
        with pytest.raises(InvalidValueError):
            point_on_geodesic(math.inf, 0.0, 1.0)

    def test_position_on_geodesic(self):
        g = geodesic_through_points(to_point(-1.0, 0.0), to_point(1.0, 0.0))
        assert position_on_geodesic(I, g) == pytest.approx(math.pi / 2)
        assert position_on_geodesic(to_point(-1.0, 0.0), g) == pytest.approx(math.pi)

    def test_position_rejects_points_off_geodesic(self):
        g = geodesic_through_points(to_point(-1.0, 0.0), to_point(1.0, 0.0))
        with pytest.raises(InvalidValueError):
            position_on_geodesic(to_point(0.0, 2.0), g)

    def test_tangent(self):
        right = tangent_at_point_on_geodesic(I, to_point(1.0, 0.0))
        assert right == Complex(1.0, 0.0)
        up = tangent_at_point_on_geodesic(I, INFINITY)
        assert up == Complex(0.0, 1.0)

    def test_right_angle(self):
        """The imaginary axis meets the unit semicircle at a right angle."""
        angle = angle_from_three_points(to_point(0.0, 2.0), I, to_point(1.0, 0.0))
        assert angle == pytest.approx(math.pi / 2)

    def test_straight_angle(self):
        angle = angle_from_three_points(to_point(0.0, 2.0), I, to_point(0.0, 0.5))
        assert angle == pytest.approx(math.pi)

    def test_degenerate_angles(self):
        assert angle_from_three_points(I, INFINITY, to_point(1.0, 1.0)) == 0.0
        assert angle_from_three_points(to_point(1.0, 1.0), I, to_point(1.0, 1.0)) == 0.0


# =============================================================================
# Segments and rays
# =============================================================================

class TestSegmentsAndRays:
    """Tests for geodesic segments and rays."""

    def test_segment(self):
        z, w = to_point(-1.0, 1.0), to_point(1.0, 1.0)
        segment = segment_between_points(z, w)
        assert segment.length == pytest.approx(distance(z, w))
        assert segment.int_angles[0] == pytest.approx(3 * math.pi / 4)
        assert segment.int_angles[1] == pytest.approx(math.pi / 4)
        assert segment.int_heights is None

    def test_vertical_segment(self):
        segment = segment_between_points(I, to_point(0.0, math.e))
        assert segment.is_vertical
        assert segment.int_angles is None
        assert segment.int_heights == (1.0, math.e)
        assert segment.length == pytest.approx(1.0)

    def test_ray_from_direction(self):
        ray = ray_from_point_and_direction(I, Complex(1.0, 0.0))
        assert ray.base_angle == pytest.approx(math.pi / 2)
        assert ray.heading_right is True
        assert ray.base_height is None

    def test_vertical_ray(self):
        ray = ray_from_point_and_direction(I, Complex(0.0, -2.0))
        assert ray.is_vertical
        assert ray.base_height == 1.0
        assert ray.heading_up is False

    def test_ray_toward_point(self):
        ray = ray_from_point_toward_point(I, to_point(-1.0, 0.0))
        assert ray.heading_right is False
        assert ray.base_angle == pytest.approx(math.pi / 2)
        up = ray_from_point_toward_point(I, INFINITY)
        assert up.heading_up is True

    def test_ray_from_infinity(self):
        ray = ray_from_point_toward_point(INFINITY, I)
        assert ray.base_height == math.inf
        assert ray.heading_up is False


# =============================================================================
# Circles and horocycles
# =============================================================================

class TestCircles:
    """Tests for hyperbolic circles."""

    def test_circle_at_i(self):
        circle = circle_from_center_and_radius(I, 1.0)
        assert circle.euc_center == to_point(0.0, math.cosh(1.0))
        assert circle.euc_radius == pytest.approx(math.sinh(1.0))

    def test_euclidean_circle_contains_hyperbolic_circle(self, random_points):
        """Points at hyperbolic distance r from the center lie on the Euclidean circle."""
        for center in random_points[:5]:
            circle = circle_from_center_and_radius(center, 0.7)
            top = to_point(center.re, center.im * math.exp(0.7))
            assert distance(center, top) == pytest.approx(0.7)
            assert circle.euc_center.euc_distance(top) == pytest.approx(circle.euc_radius)

    def test_circle_through_point(self):
        circle = circle_from_center_and_boundary_point(I, to_point(0.0, math.e))
        assert circle.radius == pytest.approx(1.0)

    def test_invalid_circles(self):
        with pytest.raises(InvalidValueError):
            circle_from_center_and_radius(ZERO, 1.0)
        with pytest.raises(InvalidValueError):
            circle_from_center_and_radius(I, -1.0)
        with pytest.raises(InvalidValueError):
            circle_from_center_and_radius(I, math.inf)
        with pytest.raises(DegenerateInputError):
            circle_from_center_and_boundary_point(I, I)

    def test_equal_circles(self):
        assert circle_from_center_and_radius(I, 1.0) == circle_from_center_and_radius(I, 1.0)
        with pytest.raises(TypeError):
            hash(circle_from_center_and_radius(I, 1.0))


class TestHorocycles:
    """Tests for horocycles."""

    def test_horocycle_at_i(self):
        h = horocycle_from_center(I)
        assert h.base_point == ZERO
        assert h.witness == to_point(0.0, 2.0)
        assert h.euc_radius == pytest.approx(1.0)

    def test_horocycle_at_infinity(self):
        h = horocycle_from_center(INFINITY)
        assert h.base_point.is_infinite
        assert h.euc_radius == math.inf

    def test_horocycle_on_real_line_rejected(self):
        with pytest.raises(InvalidValueError):
            horocycle_from_center(ZERO)

    def test_from_base_and_witness(self):
        h = horocycle_from_base_and_witness(ZERO, to_point(0.0, 2.0))
        assert h.center == I
        assert h.euc_radius == pytest.approx(1.0)

    def test_witness_lies_on_horocycle(self):
        base, witness = to_point(1.0, 0.0), to_point(2.0, 1.5)
        h = horocycle_from_base_and_witness(base, witness)
        assert h.center.euc_distance(witness) == pytest.approx(h.euc_radius)
        assert h.center.re == pytest.approx(base.re)

    def test_invalid_horocycles(self):
        with pytest.raises(InvalidValueError):
            horocycle_from_base_and_witness(I, to_point(0.0, 2.0))
        with pytest.raises(InvalidValueError):
            horocycle_from_base_and_witness(ZERO, to_point(1.0, 0.0))


# =============================================================================
# Polygons
# =============================================================================

class TestPolygons:
    """Tests for geodesic polygons."""

    def test_ideal_triangle(self):
        """An ideal triangle has zero angles and area pi."""
        polygon = polygon_from_vertices([to_point(-1.0, 0.0), to_point(1.0, 0.0), INFINITY])
        assert polygon.angles == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)
        assert polygon.area == pytest.approx(math.pi)
        assert polygon.perimeter == math.inf

    def test_finite_triangle(self):
        vertices = [I, to_point(0.0, 2.0), to_point(1.0, 1.5)]
        polygon = polygon_from_vertices(vertices)
        assert len(polygon.sides) == 3
        assert 0 < polygon.area < math.pi
        assert polygon.area == pytest.approx(math.pi - sum(polygon.angles))
        expected = distance(vertices[0], vertices[1]) + distance(vertices[1], vertices[2]) + distance(vertices[2], vertices[0])
        assert polygon.perimeter == pytest.approx(expected)

    def test_quadrilateral(self):
        vertices = [to_point(-1.0, 1.0), to_point(1.0, 1.0), to_point(1.0, 3.0), to_point(-1.0, 3.0)]
        polygon = polygon_from_vertices(vertices)
        assert polygon.area == pytest.approx(2 * math.pi - sum(polygon.angles))
        assert polygon.area > 0

    def test_too_few_vertices(self):
        with pytest.raises(DegenerateInputError):
            polygon_from_vertices([I, to_point(0.0, 2.0)])
