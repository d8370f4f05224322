"""Smoke tests for mathlab/plotting.py: figures build headless and use the framed limits."""

import pytest
from matplotlib.figure import Figure

from mathlab import curves
from mathlab.framing import DEFAULT_VIEWPORT
from mathlab.geometry import Circle, Point, triangle_properties
from mathlab.plotting import (
    figure_png,
    plot_box,
    plot_circle,
    plot_conic,
    plot_curve,
    plot_histogram,
    plot_scatter,
    plot_triangle,
)

pytestmark = pytest.mark.unit


def limits(fig):
    ax = fig.axes[0]
    return tuple(ax.get_xlim()) + tuple(ax.get_ylim())


class TestShapes:
    def test_triangle_with_all_centers(self, sample_triangle):
        props = triangle_properties(sample_triangle)
        fig = plot_triangle(sample_triangle, props,
                            show=("centroid", "circumcenter", "incenter", "orthocenter"))
        assert isinstance(fig, Figure)
        labels = fig.axes[0].get_legend_handles_labels()[1]
        assert len(labels) == 4

    def test_degenerate_triangle_draws_vertices_only(self, collinear_triangle):
        fig = plot_triangle(collinear_triangle, None)
        assert fig.axes[0].get_legend() is None

    def test_circle_uses_default_viewport(self):
        fig = plot_circle(Circle(Point(0, 0), 4), test_point=Point(1, 1))
        ax = fig.axes[0]
        assert ax.get_xlim() == pytest.approx(DEFAULT_VIEWPORT.xlim, abs=2.0)


class TestStatistics:
    def test_histogram_limits(self):
        fig = plot_histogram([1, 2, 2, 3, 3, 3, 4, 4, 5], bins=5)
        assert limits(fig) == pytest.approx((0.0, 6.0, -2.0, 5.0))
        assert len(fig.axes[0].patches) == 5

    def test_empty_histogram(self):
        fig = plot_histogram([], bins=5)
        assert limits(fig) == pytest.approx((-4.0, 4.0, -4.0, 4.0))
        assert not fig.axes[0].patches

    def test_scatter_title_has_correlation(self):
        fig = plot_scatter([(1, 2), (2, 4), (3, 6)])
        assert "r = 1.000" in fig.axes[0].get_title()

    def test_empty_scatter(self):
        fig = plot_scatter([])
        assert fig.axes[0].get_title() == "Scatter plot"

    def test_box_limits(self):
        fig = plot_box(list(range(1, 11)))
        assert limits(fig) == pytest.approx((-1.0, 12.0, -3.0, 3.0))

    def test_empty_box(self):
        assert limits(plot_box([])) == pytest.approx((-4.0, 4.0, -4.0, 4.0))


class TestCurves:
    def test_curve_with_everything(self):
        curve = curves.sample("quadratic", {"a": 1.0, "b": 0.0, "c": -4.0}, -5.0, 5.0, 201)
        fig = plot_curve(curve, "y = x^2 - 4", show_derivative=True, tangent_x=1.0, show_area=True)
        xmin, xmax, ymin, ymax = limits(fig)
        assert (xmin, xmax) == pytest.approx((-5.0, 5.0))
        assert ymin < -4.0 < 21.0 < ymax

    def test_steep_curve_is_clipped(self):
        curve = curves.sample("reciprocal", {"a": 1.0, "b": 1.0, "c": 0.0}, -1.0, 1.0, 401)
        _, _, ymin, ymax = limits(plot_curve(curve, "1/x"))
        assert ymin >= -50.0 and ymax <= 50.0

    def test_conic(self):
        x, branches, features = curves.conic_branches("ellipse", {"h": 0.0, "k": 0.0, "a": 5.0, "b": 3.0})
        fig = plot_conic(x, branches, features, "ellipse")
        assert isinstance(fig, Figure)


def test_png_export(sample_triangle):
    buf = figure_png(plot_triangle(sample_triangle))
    assert buf.read(8) == b"\x89PNG\r\n\x1a\n"
