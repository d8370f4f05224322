"""
Matplotlib figure builders used by the Streamlit pages.

Each ``plot_*`` returns a fresh ``matplotlib.figure.Figure`` (no pyplot state,
so figures are safe to build inside Streamlit reruns). Axis limits always come
from a Viewport produced by mathlab.framing.
"""
import logging
from io import BytesIO

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle as CirclePatch
from matplotlib.patches import Polygon, Rectangle

from . import curves
from .framing import DEFAULT_VIEWPORT, box_plot_summary, correlation, frame, histogram_bins

logger = logging.getLogger(__name__)

CENTER_STYLES = {
    "centroid": ("o", "#FF4136", "G"),
    "circumcenter": ("s", "#0074D9", "O"),
    "incenter": ("^", "#2ECC40", "I"),
    "orthocenter": ("D", "#B10DC9", "H"),
}


def _new_axes(viewport, title=None, figsize=(8, 5)):
    fig = Figure(figsize=figsize)
    ax = fig.subplots()
    ax.axhline(0, color='black', linewidth=0.8)
    ax.axvline(0, color='black', linewidth=0.8)
    ax.set_xlim(viewport.xlim)
    ax.set_ylim(viewport.ylim)
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.grid(True, which='both', linestyle='--', linewidth=0.4)
    if title:
        ax.set_title(title)
    return fig, ax


def _label(ax, label):
    # one legend entry per label
    return label if label not in ax.get_legend_handles_labels()[1] else ""


def plot_triangle(triangle, props=None, show=("centroid",), viewport=DEFAULT_VIEWPORT):
    """Triangle ABC with the requested centers.

    ``props`` is the GeometryCalculations for the triangle, or None when it is
    degenerate; in that case only the vertices are drawn.
    """
    fig, ax = _new_axes(viewport, "Triangle ABC")
    ax.set_aspect('equal', adjustable='box')
    ax.add_patch(Polygon([(p.x, p.y) for p in triangle], closed=True, fill=True,
                         facecolor="#7FDBFF", edgecolor="#001f3f", alpha=0.35, linewidth=2))
    for name, p in zip("ABC", triangle):
        ax.plot(p.x, p.y, 'o', color="#001f3f")
        ax.annotate(f"{name}({p.x:g}, {p.y:g})", xy=(p.x, p.y), xytext=(6, 6), textcoords='offset points')

    if props is not None:
        for center in show:
            point = getattr(props, center)
            if point is None:
                continue
            marker, color, letter = CENTER_STYLES[center]
            ax.plot(point.x, point.y, marker, color=color, markersize=8, label=f"{center} {letter}")
            ax.annotate(letter, xy=(point.x, point.y), xytext=(6, -12), textcoords='offset points', color=color)
        if "circumcenter" in show and props.circumcenter is not None:
            r = np.hypot(triangle[0].x - props.circumcenter.x, triangle[0].y - props.circumcenter.y)
            ax.add_patch(CirclePatch(props.circumcenter, r, fill=False, linestyle=':', edgecolor=CENTER_STYLES["circumcenter"][1]))
        if "incenter" in show and props.incenter is not None and props.perimeter:
            r = 2 * props.area / props.perimeter
            ax.add_patch(CirclePatch(props.incenter, r, fill=False, linestyle=':', edgecolor=CENTER_STYLES["incenter"][1]))
        if ax.get_legend_handles_labels()[1]:
            ax.legend(loc='upper right', fontsize='small')
    return fig


def plot_circle(circle, viewport=DEFAULT_VIEWPORT, test_point=None):
    fig, ax = _new_axes(viewport, "Circle")
    ax.set_aspect('equal', adjustable='box')
    cx, cy = circle.center
    ax.add_patch(CirclePatch((cx, cy), circle.radius, fill=False, edgecolor="#FF4136", linewidth=2))
    ax.plot(cx, cy, 'o', color="#FF4136")
    ax.annotate(f"center ({cx:g}, {cy:g})", xy=(cx, cy), xytext=(6, 6), textcoords='offset points')
    if test_point is not None:
        ax.plot(test_point.x, test_point.y, 'x', markersize=10, color="#111111", label="P")
    return fig


def plot_curve(curve, title, show_derivative=False, show_roots=True, tangent_x=None, show_area=False):
    """Function graph in the explorer: the curve plus optional derivative, roots, tangent and area."""
    x, y, mask = curve.x, curve.y, curve.mask
    y_finite = y[mask & np.isfinite(y)]
    if y_finite.size:
        lo, hi = float(y_finite.min()), float(y_finite.max())
        pad = max(1.0, 0.1 * (hi - lo))
        # clip very steep curves (reciprocal, tan, exponential) to something readable
        lo, hi = max(lo - pad, -50.0), min(hi + pad, 50.0)
    else:
        lo, hi = DEFAULT_VIEWPORT.ylim
    viewport = DEFAULT_VIEWPORT._replace(x_min=float(x[0]), x_max=float(x[-1]), y_min=lo, y_max=hi)

    fig, ax = _new_axes(viewport, title)
    ax.plot(x[mask], y[mask], linewidth=2, label=title)

    if show_derivative:
        dy = curves.derivative_sampled(x, y)
        ax.plot(x[mask], dy[mask], linestyle='--', linewidth=1, label="dy/dx")

    if show_roots:
        for z in curves.find_zeros_sampled(x, y):
            ax.plot(z, 0, 'o', markersize=8, markerfacecolor='white', markeredgewidth=2, label=_label(ax, 'root'))

    for name, (fx, fy) in curve.features.items():
        ax.plot(fx, fy, 's', label=name)
        ax.annotate(f"{name} ({fx:.2f}, {fy:.2f})", xy=(fx, fy), xytext=(10, -20), textcoords='offset points')

    if tangent_x is not None:
        idx = int(np.abs(x - tangent_x).argmin())
        if mask[idx] and np.isfinite(y[idx]):
            slope = curves.derivative_sampled(x, y)[idx]
            tangent_line = slope * (x - tangent_x) + y[idx]
            ax.plot(x, tangent_line, linestyle='-.', linewidth=1.3, label=f'tangent @ {tangent_x:.2f}')
            ax.plot(tangent_x, y[idx], 'x', markersize=10)

    if show_area:
        y_valid = np.where(mask & np.isfinite(y), y, 0.0)
        ax.fill_between(x, y_valid, alpha=0.12)

    ax.legend(loc='upper right', fontsize='small')
    return fig


def plot_conic(x, branches, features, title, viewport=None):
    if viewport is None:
        viewport = DEFAULT_VIEWPORT._replace(x_min=float(x[0]), x_max=float(x[-1]),
                                             y_min=float(x[0]), y_max=float(x[-1]))
    fig, ax = _new_axes(viewport, title)
    ax.set_aspect('equal', adjustable='datalim')
    for i, y in enumerate(branches):
        ax.plot(x, y, linewidth=2, color="#0074D9", label=title if i == 0 else "")
    for name, (fx, fy) in features.items():
        ax.plot(fx, fy, 'o', color="#0074D9")
        ax.annotate(name, xy=(fx, fy), xytext=(6, 6), textcoords='offset points')
    return fig


def plot_histogram(data, bins=5):
    viewport = frame("histogram", data=data, bins=bins)
    fig, ax = _new_axes(viewport, f"Histogram (n = {len(data)}, bins = {bins})")
    if len(data) == 0:
        return fig
    result = histogram_bins(data, bins)
    width = result.bin_width
    for start, freq, height in zip(result.edges[:-1], result.frequencies, result.heights):
        ax.add_patch(Rectangle((start, 0), width, height, facecolor="#FF6B6B", edgecolor="#FF6B6B", alpha=0.6))
        if freq > 0:
            ax.text(start + width / 2, height + 0.1, str(int(freq)), ha='center', color="#FF6B6B")
    return fig


def plot_scatter(pairs):
    viewport = frame("scatter", pairs=pairs)
    r = correlation(pairs)
    title = "Scatter plot" if r is None else f"Scatter plot (r = {r:.3f})"
    fig, ax = _new_axes(viewport, title)
    if len(pairs):
        xs, ys = zip(*pairs)
        ax.plot(xs, ys, 'o', color="#0074D9")
    return fig


def plot_box(data):
    viewport = frame("boxplot", data=data)
    fig, ax = _new_axes(viewport, f"Box plot (n = {len(data)})")
    if len(data) == 0:
        return fig
    s = box_plot_summary(data)
    box_height = 0.5
    ax.add_patch(Rectangle((s.q1, -box_height / 2), s.q3 - s.q1, box_height,
                           facecolor="#2ECC40", edgecolor="#2ECC40", alpha=0.5))
    ax.plot([s.median, s.median], [-box_height / 2, box_height / 2], color='black', linewidth=2)
    ax.plot([s.minimum, s.q1], [0, 0], color="#2ECC40", linewidth=2)
    ax.plot([s.q3, s.maximum], [0, 0], color="#2ECC40", linewidth=2)
    for v in (s.minimum, s.maximum):
        ax.plot([v, v], [-0.1, 0.1], color="#2ECC40", linewidth=2)
    for name, v in (("Min", s.minimum), ("Q1", s.q1), ("Med", s.median), ("Q3", s.q3), ("Max", s.maximum)):
        ax.text(v, -1, f"{name}: {v:g}", ha='center', fontsize='small', color="#2ECC40")
    return fig


def figure_png(fig, dpi=150):
    buf = BytesIO()
    fig.savefig(buf, format='png', dpi=dpi, bbox_inches='tight')
    buf.seek(0)
    logger.debug("Exported figure as PNG (%d bytes)", len(buf.getvalue()))
    return buf
