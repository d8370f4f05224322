"""
Plane geometry helpers for the triangle and circle tools.

Every function is pure: coordinates in, numbers or Points out. Degenerate
input (collinear or coincident vertices) raises DegenerateGeometryError rather
than returning NaN, so a page can tell "no circumcenter" apart from a number.

Index convention: sides[i] and angles[i] belong to the side / angle opposite
vertex i, i.e. sides = [|BC|, |AC|, |AB|] for a triangle [A, B, C].
"""
import logging
import math
from typing import NamedTuple, Optional, Tuple

from .config import DEGENERACY_EPS
from .errors import DegenerateGeometryError, InvalidParameterError

logger = logging.getLogger(__name__)


class Point(NamedTuple):
    x: float
    y: float


class Circle(NamedTuple):
    center: Point
    radius: float


class GeometryCalculations(NamedTuple):
    area: Optional[float] = None
    perimeter: Optional[float] = None
    sides: Optional[Tuple[float, float, float]] = None
    angles: Optional[Tuple[float, float, float]] = None
    centroid: Optional[Point] = None
    circumcenter: Optional[Point] = None
    incenter: Optional[Point] = None
    orthocenter: Optional[Point] = None


def as_point(value):
    """Accept a Point, an (x, y) pair or a {'x': .., 'y': ..} mapping."""
    if isinstance(value, Point):
        return value
    try:
        if isinstance(value, dict):
            x, y = value["x"], value["y"]
        else:
            x, y = value
        return Point(float(x), float(y))
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidParameterError(f"Not a 2-D point: {value!r}") from e


def as_triangle(values):
    points = tuple(as_point(v) for v in values)
    if len(points) != 3:
        raise InvalidParameterError(f"A triangle needs exactly 3 vertices, got {len(points)}")
    return points


def distance(p1, p2):
    return math.sqrt((p2.x - p1.x) ** 2 + (p2.y - p1.y) ** 2)


def triangle_sides(triangle):
    a, b, c = triangle
    return (distance(b, c), distance(a, c), distance(a, b))


def triangle_perimeter(triangle):
    return sum(triangle_sides(triangle))


def triangle_area(triangle):
    """Heron's formula. Collinear vertices give exactly 0.0, never NaN."""
    side_a, side_b, side_c = triangle_sides(triangle)
    s = (side_a + side_b + side_c) / 2
    radicand = s * (s - side_a) * (s - side_b) * (s - side_c)
    # rounding can push a flat triangle slightly below zero
    return math.sqrt(max(radicand, 0.0))


def _clamped_acos(value):
    return math.acos(min(1.0, max(-1.0, value)))


def triangle_angles(triangle):
    """Interior angles in radians by the law of cosines.

    A collinear triangle with three distinct vertices is allowed and yields
    (0, pi, 0) in some order; a zero-length side leaves two angles undefined
    and raises DegenerateGeometryError.
    """
    a, b, c = triangle_sides(triangle)
    if min(a, b, c) < DEGENERACY_EPS:
        raise DegenerateGeometryError("Two vertices coincide; the angles are undefined")

    angle_a = _clamped_acos((b * b + c * c - a * a) / (2 * b * c))
    angle_b = _clamped_acos((a * a + c * c - b * b) / (2 * a * c))
    angle_c = _clamped_acos((a * a + b * b - c * c) / (2 * a * b))
    return (angle_a, angle_b, angle_c)


def triangle_centroid(triangle):
    a, b, c = triangle
    return Point((a.x + b.x + c.x) / 3, (a.y + b.y + c.y) / 3)


def triangle_circumcenter(triangle):
    """Intersection of the perpendicular bisectors."""
    a, b, c = triangle
    # d = 2 (B - A) x (C - A); relative to |AB| |AC| it is twice the sine of angle A
    d = 2 * (a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))
    if abs(d) <= 2 * DEGENERACY_EPS * distance(a, b) * distance(a, c):
        raise DegenerateGeometryError("The three points are collinear; no circumcenter exists")

    a2 = a.x * a.x + a.y * a.y
    b2 = b.x * b.x + b.y * b.y
    c2 = c.x * c.x + c.y * c.y
    ux = (a2 * (b.y - c.y) + b2 * (c.y - a.y) + c2 * (a.y - b.y)) / d
    uy = (a2 * (c.x - b.x) + b2 * (a.x - c.x) + c2 * (b.x - a.x)) / d
    return Point(ux, uy)


def triangle_incenter(triangle):
    a, b, c = triangle
    side_a, side_b, side_c = triangle_sides(triangle)
    perimeter = side_a + side_b + side_c
    if perimeter < DEGENERACY_EPS:
        raise DegenerateGeometryError("All three vertices coincide; no incenter exists")

    return Point(
        (side_a * a.x + side_b * b.x + side_c * c.x) / perimeter,
        (side_a * a.y + side_b * b.y + side_c * c.y) / perimeter,
    )


def triangle_orthocenter(triangle):
    """Intersection of the altitudes from A and B.

    The altitude from A is {P : (P - A) . (C - B) = 0} and the one from B is
    {P : (P - B) . (C - A) = 0}. Solving the 2x2 system by Cramer's rule
    needs no slopes, so vertical and horizontal sides are ordinary cases.
    The system is singular when the two normals are parallel, tested on the
    sine of the angle between them so the check does not depend on size.
    """
    a, b, c = triangle
    # rows are the altitude normals (C - B) and (C - A)
    m11, m12 = c.x - b.x, c.y - b.y
    m21, m22 = c.x - a.x, c.y - a.y
    det = m11 * m22 - m12 * m21
    if abs(det) <= DEGENERACY_EPS * math.hypot(m11, m12) * math.hypot(m21, m22):
        raise DegenerateGeometryError("The three points are collinear; the altitudes do not meet")

    r1 = a.x * m11 + a.y * m12
    r2 = b.x * m21 + b.y * m22
    return Point((r1 * m22 - m12 * r2) / det, (m11 * r2 - r1 * m21) / det)


def triangle_properties(triangle):
    """Everything the triangle panel shows, in one record.

    DegenerateGeometryError from any of the centers is propagated as-is.
    """
    triangle = as_triangle(triangle)
    sides = triangle_sides(triangle)
    result = GeometryCalculations(
        area=triangle_area(triangle),
        perimeter=sum(sides),
        sides=sides,
        angles=triangle_angles(triangle),
        centroid=triangle_centroid(triangle),
        circumcenter=triangle_circumcenter(triangle),
        incenter=triangle_incenter(triangle),
        orthocenter=triangle_orthocenter(triangle),
    )
    logger.debug("Triangle %s -> area=%.6g perimeter=%.6g", triangle, result.area, result.perimeter)
    return result


def _check_radius(radius):
    if not (math.isfinite(radius) and radius > 0):
        raise InvalidParameterError(f"Radius must be a positive number, got {radius!r}")


def circle_area(radius):
    _check_radius(radius)
    return math.pi * radius * radius


def circle_circumference(radius):
    _check_radius(radius)
    return 2 * math.pi * radius


def circle_properties(circle):
    return GeometryCalculations(
        area=circle_area(circle.radius),
        perimeter=circle_circumference(circle.radius),
    )


def radians_to_degrees(radians):
    return radians * (180 / math.pi)


def degrees_to_radians(degrees):
    return degrees * (math.pi / 180)


def is_point_in_circle(point, center, radius):
    """Boundary counts as inside."""
    return distance(point, center) <= radius


def is_point_in_triangle(point, triangle):
    """Barycentric test; vertices and edges count as inside."""
    a, b, c = triangle
    v0x, v0y = c.x - a.x, c.y - a.y
    v1x, v1y = b.x - a.x, b.y - a.y
    v2x, v2y = point.x - a.x, point.y - a.y

    dot00 = v0x * v0x + v0y * v0y
    dot01 = v0x * v1x + v0y * v1y
    dot02 = v0x * v2x + v0y * v2y
    dot11 = v1x * v1x + v1y * v1y
    dot12 = v1x * v2x + v1y * v2y

    # denom = |v0|^2 |v1|^2 sin^2(A), so compare it relative to the side lengths
    denom = dot00 * dot11 - dot01 * dot01
    if abs(denom) <= DEGENERACY_EPS * dot00 * dot11:
        raise DegenerateGeometryError("The triangle has zero area; containment is undefined")

    u = (dot11 * dot02 - dot01 * dot12) / denom
    v = (dot00 * dot12 - dot01 * dot02) / denom
    return u >= 0 and v >= 0 and u + v <= 1
