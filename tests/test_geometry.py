"""Unit tests for mathlab/geometry.py: triangle metrics, centers and circle helpers."""

import math
import random

import pytest

from mathlab.errors import DegenerateGeometryError, InvalidParameterError
from mathlab.geometry import (
    Circle,
    GeometryCalculations,
    Point,
    as_point,
    as_triangle,
    circle_area,
    circle_circumference,
    circle_properties,
    degrees_to_radians,
    distance,
    is_point_in_circle,
    is_point_in_triangle,
    radians_to_degrees,
    triangle_angles,
    triangle_area,
    triangle_centroid,
    triangle_circumcenter,
    triangle_incenter,
    triangle_orthocenter,
    triangle_perimeter,
    triangle_properties,
    triangle_sides,
)

pytestmark = pytest.mark.unit

SQRT34 = math.sqrt(34)


def random_triangle(rng):
    while True:
        pts = tuple(Point(rng.uniform(-10, 10), rng.uniform(-10, 10)) for _ in range(3))
        if triangle_area(pts) > 1.0:
            return pts


class TestDistance:
    def test_coincident_points(self):
        p = Point(2.5, -1.0)
        assert distance(p, p) == 0

    def test_three_four_five(self):
        assert distance(Point(0, 0), Point(3, 4)) == 5

    def test_symmetry(self):
        rng = random.Random(7)
        for _ in range(50):
            p1 = Point(rng.uniform(-100, 100), rng.uniform(-100, 100))
            p2 = Point(rng.uniform(-100, 100), rng.uniform(-100, 100))
            assert distance(p1, p2) == distance(p2, p1)


class TestTriangleSides:
    def test_opposite_side_convention(self, right_triangle):
        # A(0,0) B(4,0) C(0,3): BC = 5, AC = 3, AB = 4
        assert triangle_sides(right_triangle) == (5.0, 3.0, 4.0)

    def test_sample_triangle(self, sample_triangle):
        a, b, c = triangle_sides(sample_triangle)
        assert a == pytest.approx(SQRT34)
        assert b == pytest.approx(SQRT34)
        assert c == pytest.approx(6.0)

    def test_perimeter_is_sum_of_sides(self, sample_triangle):
        assert triangle_perimeter(sample_triangle) == pytest.approx(2 * SQRT34 + 6)


class TestTriangleArea:
    def test_sample_triangle(self, sample_triangle):
        # base AB = 6, height from C = 5
        assert triangle_area(sample_triangle) == pytest.approx(15.0)

    def test_right_triangle(self, right_triangle):
        assert triangle_area(right_triangle) == pytest.approx(6.0)

    def test_collinear_is_zero_not_nan(self, collinear_triangle):
        assert triangle_area(collinear_triangle) == 0.0

    def test_nearly_flat_never_nan(self):
        tri = (Point(0.1, 0.1), Point(0.2, 0.2), Point(0.30000000000000004, 0.3))
        area = triangle_area(tri)
        assert not math.isnan(area)
        assert area >= 0

    def test_area_never_negative(self):
        rng = random.Random(11)
        for _ in range(100):
            pts = tuple(Point(rng.uniform(-5, 5), rng.uniform(-5, 5)) for _ in range(3))
            assert triangle_area(pts) >= 0

    def test_vertex_order_does_not_matter(self, sample_triangle):
        a, b, c = sample_triangle
        assert triangle_area((c, a, b)) == pytest.approx(triangle_area((a, b, c)))


class TestTriangleAngles:
    def test_right_angle_at_a(self, right_triangle):
        angle_a, angle_b, angle_c = triangle_angles(right_triangle)
        assert angle_a == pytest.approx(math.pi / 2)
        assert angle_b == pytest.approx(math.atan2(3, 4))
        assert angle_c == pytest.approx(math.atan2(4, 3))

    def test_equilateral(self):
        tri = (Point(0, 0), Point(2, 0), Point(1, math.sqrt(3)))
        for angle in triangle_angles(tri):
            assert angle == pytest.approx(math.pi / 3)

    def test_angles_sum_to_pi(self):
        rng = random.Random(3)
        for _ in range(200):
            tri = random_triangle(rng)
            angles = triangle_angles(tri)
            assert sum(angles) == pytest.approx(math.pi, abs=1e-9)
            assert all(0 < a < math.pi for a in angles)

    def test_collinear_gives_zero_and_pi(self, collinear_triangle):
        angle_a, angle_b, angle_c = triangle_angles(collinear_triangle)
        assert angle_a == pytest.approx(0.0, abs=1e-7)
        assert angle_b == pytest.approx(math.pi)
        assert angle_c == pytest.approx(0.0, abs=1e-7)

    def test_nearly_flat_is_not_nan(self):
        tri = (Point(0, 0), Point(1e8, 1e-8), Point(2e8, 0))
        assert not any(math.isnan(a) for a in triangle_angles(tri))

    def test_coincident_vertices_raise(self):
        tri = (Point(1, 1), Point(1, 1), Point(3, 0))
        with pytest.raises(DegenerateGeometryError):
            triangle_angles(tri)


class TestTriangleCenters:
    def test_centroid_is_vertex_mean(self):
        tri = (Point(1, 2), Point(3, 5), Point(-4, 0.5))
        assert triangle_centroid(tri) == Point(0.0, 2.5)

    def test_centroid_of_sample(self, sample_triangle):
        g = triangle_centroid(sample_triangle)
        assert g.x == pytest.approx(0.0)
        assert g.y == pytest.approx(-1 / 3)

    def test_centroid_defined_for_degenerate(self, collinear_triangle):
        assert triangle_centroid(collinear_triangle) == Point(1.0, 0.0)

    def test_circumcenter_of_sample(self, sample_triangle):
        o = triangle_circumcenter(sample_triangle)
        assert o.x == pytest.approx(0.0)
        assert o.y == pytest.approx(-0.4)

    def test_circumcenter_is_equidistant(self):
        rng = random.Random(5)
        for _ in range(50):
            tri = random_triangle(rng)
            o = triangle_circumcenter(tri)
            ra, rb, rc = (distance(o, p) for p in tri)
            assert ra == pytest.approx(rb, rel=1e-6)
            assert rb == pytest.approx(rc, rel=1e-6)

    def test_right_triangle_circumcenter_is_hypotenuse_midpoint(self, right_triangle):
        assert triangle_circumcenter(right_triangle) == pytest.approx(Point(2.0, 1.5))

    def test_circumcenter_collinear_raises(self, collinear_triangle):
        with pytest.raises(DegenerateGeometryError):
            triangle_circumcenter(collinear_triangle)

    def test_incenter_of_right_triangle(self, right_triangle):
        # inradius (3 + 4 - 5) / 2 = 1
        assert triangle_incenter(right_triangle) == pytest.approx(Point(1.0, 1.0))

    def test_incenter_of_sample(self, sample_triangle):
        i = triangle_incenter(sample_triangle)
        inradius = 15.0 / (SQRT34 + 3)
        assert i.x == pytest.approx(0.0)
        assert i.y == pytest.approx(-2 + inradius)

    def test_incenter_coincident_points_raise(self):
        p = Point(1.0, 1.0)
        with pytest.raises(DegenerateGeometryError):
            triangle_incenter((p, p, p))

    def test_orthocenter_of_sample(self, sample_triangle):
        h = triangle_orthocenter(sample_triangle)
        assert h.x == pytest.approx(0.0)
        assert h.y == pytest.approx(-0.2)

    def test_orthocenter_of_right_triangle_is_right_angle_vertex(self, right_triangle):
        assert triangle_orthocenter(right_triangle) == pytest.approx(Point(0.0, 0.0))

    def test_orthocenter_with_vertical_side(self):
        tri = (Point(1, 0), Point(1, 4), Point(4, 2))
        assert triangle_orthocenter(tri) == pytest.approx(Point(7 / 3, 2.0))

    def test_orthocenter_on_euler_line(self):
        # H = A + B + C - 2O
        rng = random.Random(9)
        for _ in range(50):
            a, b, c = tri = random_triangle(rng)
            o = triangle_circumcenter(tri)
            h = triangle_orthocenter(tri)
            assert h.x == pytest.approx(a.x + b.x + c.x - 2 * o.x, abs=1e-6)
            assert h.y == pytest.approx(a.y + b.y + c.y - 2 * o.y, abs=1e-6)

    def test_orthocenter_collinear_raises(self, collinear_triangle):
        with pytest.raises(DegenerateGeometryError):
            triangle_orthocenter(collinear_triangle)

    def test_orthocenter_collinear_vertical_raises(self):
        tri = (Point(2, 0), Point(2, 1), Point(2, 5))
        with pytest.raises(DegenerateGeometryError):
            triangle_orthocenter(tri)


class TestTriangleProperties:
    def test_sample_triangle(self, sample_triangle):
        props = triangle_properties(sample_triangle)
        assert isinstance(props, GeometryCalculations)
        assert props.area == pytest.approx(15.0)
        assert props.perimeter == pytest.approx(sum(props.sides))
        assert props.sides == pytest.approx((SQRT34, SQRT34, 6.0))
        assert sum(props.angles) == pytest.approx(math.pi)
        assert props.centroid == pytest.approx(Point(0.0, -1 / 3))
        assert props.circumcenter == pytest.approx(Point(0.0, -0.4))
        assert props.orthocenter == pytest.approx(Point(0.0, -0.2))

    def test_accepts_plain_pairs(self):
        props = triangle_properties([(0, 0), (4, 0), (0, 3)])
        assert props.area == pytest.approx(6.0)

    def test_degenerate_propagates(self, collinear_triangle):
        with pytest.raises(DegenerateGeometryError):
            triangle_properties(collinear_triangle)


class TestCircle:
    def test_area_radius_four(self):
        assert circle_area(4) == pytest.approx(16 * math.pi)

    def test_circumference_radius_four(self):
        assert circle_circumference(4) == pytest.approx(8 * math.pi)

    def test_properties(self):
        props = circle_properties(Circle(Point(0, 0), 4))
        assert props.area == pytest.approx(16 * math.pi)
        assert props.perimeter == pytest.approx(8 * math.pi)
        assert props.centroid is None

    @pytest.mark.parametrize("radius", [0, -1.5, float("nan"), float("inf")])
    def test_invalid_radius_raises(self, radius):
        with pytest.raises(InvalidParameterError):
            circle_area(radius)
        with pytest.raises(InvalidParameterError):
            circle_circumference(radius)

    def test_point_in_circle(self):
        center = Point(0, 0)
        assert is_point_in_circle(Point(1, 1), center, 4)
        assert is_point_in_circle(Point(4, 0), center, 4)  # boundary
        assert not is_point_in_circle(Point(3, 3), center, 4)


class TestPointInTriangle:
    def test_centroid_is_inside(self):
        rng = random.Random(13)
        for _ in range(50):
            tri = random_triangle(rng)
            assert is_point_in_triangle(triangle_centroid(tri), tri)

    def test_far_point_is_outside(self, sample_triangle):
        assert not is_point_in_triangle(Point(100, 100), sample_triangle)

    def test_vertex_counts_as_inside(self, sample_triangle):
        assert is_point_in_triangle(sample_triangle[0], sample_triangle)

    def test_just_outside_an_edge(self, right_triangle):
        assert not is_point_in_triangle(Point(2.0, -0.01), right_triangle)

    def test_degenerate_raises(self, collinear_triangle):
        with pytest.raises(DegenerateGeometryError):
            is_point_in_triangle(Point(1, 0), collinear_triangle)


class TestConversions:
    def test_degrees_radians(self):
        assert radians_to_degrees(math.pi) == pytest.approx(180.0)
        assert degrees_to_radians(90) == pytest.approx(math.pi / 2)

    def test_as_point_accepts_pairs_and_dicts(self):
        assert as_point((1, 2)) == Point(1.0, 2.0)
        assert as_point({"x": 3, "y": -1}) == Point(3.0, -1.0)

    @pytest.mark.parametrize("value", [(1,), {"x": 1}, "ab", None])
    def test_as_point_rejects_junk(self, value):
        with pytest.raises(InvalidParameterError):
            as_point(value)

    def test_as_triangle_needs_three_vertices(self):
        with pytest.raises(InvalidParameterError):
            as_triangle([(0, 0), (1, 1)])


def scaled(triangle, factor):
    return tuple(Point(p.x * factor, p.y * factor) for p in triangle)


class TestTriangleScale:
    CENTERS = (triangle_centroid, triangle_circumcenter, triangle_incenter, triangle_orthocenter)

    @pytest.mark.parametrize("factor", [1e-6, 1e-4, 1e6])
    def test_centers_scale_with_triangle(self, sample_triangle, factor):
        tri = scaled(sample_triangle, factor)
        for center in self.CENTERS:
            expected = center(sample_triangle)
            got = center(tri)
            assert got.x == pytest.approx(expected.x * factor, abs=1e-9 * factor)
            assert got.y == pytest.approx(expected.y * factor, abs=1e-9 * factor)

    @pytest.mark.parametrize("factor", [1e-6, 1e-4, 1e6])
    def test_area_and_angles(self, sample_triangle, factor):
        tri = scaled(sample_triangle, factor)
        assert triangle_area(tri) == pytest.approx(15.0 * factor * factor)
        assert sum(triangle_angles(tri)) == pytest.approx(math.pi, abs=1e-9)

    @pytest.mark.parametrize("factor", [1e-6, 1e-4, 1e6])
    def test_containment(self, sample_triangle, factor):
        tri = scaled(sample_triangle, factor)
        assert is_point_in_triangle(triangle_centroid(tri), tri)
        assert not is_point_in_triangle(Point(0.0, 4 * factor), tri)

    def test_small_right_triangle_contains_interior_point(self):
        tri = (Point(0.0, 0.0), Point(0.002, 0.0), Point(0.0, 0.002))
        assert triangle_area(tri) == pytest.approx(2e-6)
        assert is_point_in_triangle(Point(0.0005, 0.0005), tri)

    def test_tiny_right_triangle_orthocenter_is_right_angle_vertex(self):
        tri = (Point(0.0, 0.0), Point(1e-6, 0.0), Point(0.0, 1e-6))
        assert triangle_orthocenter(tri) == pytest.approx(Point(0.0, 0.0), abs=1e-18)
        assert triangle_circumcenter(tri) == pytest.approx(Point(5e-7, 5e-7))

    def test_tiny_collinear_still_degenerate(self):
        tri = scaled((Point(0, 0), Point(1, 1), Point(3, 3)), 1e-6)
        with pytest.raises(DegenerateGeometryError):
            triangle_orthocenter(tri)
        with pytest.raises(DegenerateGeometryError):
            triangle_circumcenter(tri)
        with pytest.raises(DegenerateGeometryError):
            is_point_in_triangle(Point(1e-6, 1e-6), tri)
