"""halfplanepy: Geometry of the Poincare upper half-plane.

A package for hyperbolic plane geometry in the upper half-plane model, with
tolerance-aware complex arithmetic and isometries as Mobius transformations.

Main features:
- Complex numbers on the extended plane with tolerance-based equality
- Mobius transformations (compose, invert, conjugate, reduce)
- Validated UHP points (interior, on the real line, infinity)
- Geodesics, segments, rays, circles, horocycles and polygons
- Elliptic, parabolic and hyperbolic isometries and their classification
- Batched torch operations (distance, Mobius action, Poincare disk)

Convention:
    - The point at infinity is (inf, inf)
    - a == b iff |a - b| <= atol + rtol * max(|a|, |b|) per component
    - Default tolerance rtol=1e-5, atol=1e-8; pass tol=Tolerance(...) to override
    - m.compose(n) applies n first, then m
    - ZERO, I, INFINITY etc. at the package root are Complex constants; the
      UHP point constants come from uhp_constants()
    - identity() is the identity Mobius map; Isometry(IDENTITY) wraps it
"""

# Configuration and errors
from .tolerance import Tolerance, DEFAULT_TOLERANCE
from .errors import (
    HalfPlaneError,
    InvalidValueError,
    DivisionByZeroError,
    NonInvertibleError,
    DegenerateInputError,
    InternalInconsistencyError,
)

# Complex arithmetic
from .complex_numbers import (
    Complex,
    ComplexConstants,
    make_complex,
    complex_constants,
    point_on_unit_circle,
    ZERO,
    ONE,
    NEGONE,
    I,
    NEGI,
    INFINITY,
)

# Mobius transformations
from .mobius import (
    Mobius,
    make_mobius,
    from_coefficients,
    identity,
    cayley,
    unit_circle_rotation,
    IDENTITY,
    CAYLEY,
)

# Points
from .points import (
    UhpPoint,
    PointKind,
    BoundaryKind,
    to_point,
    to_interior_point,
    to_boundary_point,
    uhp_constants,
)

# Geometry
from .geometry import (
    Geodesic,
    GeodesicSegment,
    GeodesicRay,
    Circle,
    Horocycle,
    Polygon,
    distance,
    angle_from_three_points,
    geodesic_through_points,
    geodesic_from_base_and_direction,
    segment_between_points,
    ray_from_point_and_direction,
    ray_from_point_toward_point,
    circle_from_center_and_radius,
    circle_from_center_and_boundary_point,
    horocycle_from_center,
    horocycle_from_base_and_witness,
    polygon_from_vertices,
)

# Isometries
from .isometries import (
    Isometry,
    IsometryKind,
    classify,
    fixed_points,
    standard_elliptic,
    standard_hyperbolic,
    standard_parabolic,
    move_point_to_i,
    move_point_to_infinity,
    move_geodesic_to_imaginary_axis,
    move_geodesic_through_points_to_imaginary_axis,
    elliptic,
    hyperbolic,
    hyperbolic_from_base_and_direction,
    parabolic,
)

# Batched torch operations (less commonly needed directly)
from . import batched

__all__ = [
    # Configuration
    "Tolerance",
    "DEFAULT_TOLERANCE",
    # Errors
    "HalfPlaneError",
    "InvalidValueError",
    "DivisionByZeroError",
    "NonInvertibleError",
    "DegenerateInputError",
    "InternalInconsistencyError",
    # Complex
    "Complex",
    "make_complex",
    "ComplexConstants",
    "complex_constants",
    "point_on_unit_circle",
    "ZERO",
    "ONE",
    "NEGONE",
    "I",
    "NEGI",
    "INFINITY",
    # Mobius
    "Mobius",
    "make_mobius",
    "from_coefficients",
    "identity",
    "cayley",
    "unit_circle_rotation",
    "IDENTITY",
    "CAYLEY",
    # Points
    "UhpPoint",
    "PointKind",
    "BoundaryKind",
    "to_point",
    "to_interior_point",
    "to_boundary_point",
    "uhp_constants",
    # Geometry
    "Geodesic",
    "GeodesicSegment",
    "GeodesicRay",
    "Circle",
    "Horocycle",
    "Polygon",
    "distance",
    "angle_from_three_points",
    "geodesic_through_points",
    "geodesic_from_base_and_direction",
    "segment_between_points",
    "ray_from_point_and_direction",
    "ray_from_point_toward_point",
    "circle_from_center_and_radius",
    "circle_from_center_and_boundary_point",
    "horocycle_from_center",
    "horocycle_from_base_and_witness",
    "polygon_from_vertices",
    # Isometries
    "Isometry",
    "IsometryKind",
    "classify",
    "fixed_points",
    "standard_elliptic",
    "standard_hyperbolic",
    "standard_parabolic",
    "move_point_to_i",
    "move_point_to_infinity",
    "move_geodesic_to_imaginary_axis",
    "move_geodesic_through_points_to_imaginary_axis",
    "elliptic",
    "hyperbolic",
    "hyperbolic_from_base_and_direction",
    "parabolic",
    # Modules
    "batched",
]

__version__ = "0.1.0"
