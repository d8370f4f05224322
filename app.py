"""
Math Lab: Streamlit tutoring app (high-school mathematics)

File: app.py (page script; the maths lives in the ``mathlab`` package)

Description:
Interactive lab for geometry, function graphs and statistics:
- Geometry:    triangle ABC with area, perimeter, sides, angles and the four
               centers (centroid, circumcenter, incenter, orthocenter);
               circle area / circumference; point-in-shape check
- Functions:   linear, quadratic, cubic, sqrt, reciprocal, trigonometric,
               exponential, logarithmic, plus circle / ellipse / hyperbola /
               parabola
- Statistics:  histogram, scatter plot (with correlation), box plot, each
               framed automatically from the data
- AI problems: practice problems generated by Gemini, with an example figure

Run locally:
    pip install -e .
    streamlit run app.py

Environment (optional, a .env file works too):
    GEMINI_API_KEY      enables the AI problem tab
    MATHLAB_MODEL       model name (default gemini-2.5-flash)
    MATHLAB_LOG_LEVEL   DEBUG / INFO / WARNING (default INFO)
    MATHLAB_LOG_FILE    also write logs to this file
"""

import logging
import math

import numpy as np
import streamlit as st
from scipy import integrate

from mathlab import curves, framing, geometry, plotting
from mathlab.config import DIFFICULTIES, HISTOGRAM_BINS, SAMPLE_POINTS, settings
from mathlab.errors import (
    ConfigurationError,
    DegenerateGeometryError,
    InvalidParameterError,
    ProblemFormatError,
)
from mathlab.logging_config import setup_logging
from mathlab.problems import ProblemGenerator, as_latex_answer, figure_hint

setup_logging(settings.log_level, settings.LOG_FILE)
logger = logging.getLogger("mathlab.app")

st.set_page_config(page_title="Math Lab", page_icon="📐", layout="wide")


# Helper utilities
@st.cache_data
def sample_curve(family, params, xmin, xmax, n):
    return curves.sample(family, params, xmin, xmax, n)


def parse_numbers(text):
    """'1, 2, 2.5' -> [1.0, 2.0, 2.5]; raises InvalidParameterError on junk."""
    parts = [p for p in text.replace(";", ",").replace("\n", ",").split(",") if p.strip()]
    try:
        return [float(p) for p in parts]
    except ValueError as e:
        raise InvalidParameterError(f"Could not read a number from {text!r}") from e


def parse_pairs(text):
    """'1 2, 3 4' or '(1,2) (3,4)' -> [(1.0, 2.0), (3.0, 4.0)]."""
    values = parse_numbers(text.replace("(", " ").replace(")", " ").replace(" ", ","))
    if len(values) % 2:
        raise InvalidParameterError("Scatter data needs an even number of values (x y pairs)")
    return list(zip(values[0::2], values[1::2]))


def show_figure(fig, file_name):
    st.pyplot(fig)
    st.download_button(label="Download graph (PNG)", data=plotting.figure_png(fig),
                       file_name=file_name, mime='image/png')


def triangle_panel():
    st.subheader("Triangle ABC")
    defaults = geometry.as_triangle([(-3, -2), (3, -2), (0, 3)])
    vertices = []
    cols = st.columns(3)
    for col, name, p in zip(cols, "ABC", defaults):
        with col:
            x = st.number_input(f"{name}.x", min_value=-4.0, max_value=4.0, value=p.x, step=0.5)
            y = st.number_input(f"{name}.y", min_value=-4.0, max_value=4.0, value=p.y, step=0.5)
            vertices.append(geometry.Point(x, y))
    triangle = tuple(vertices)

    show = st.multiselect("Show centers", list(plotting.CENTER_STYLES), default=["centroid"])

    props = None
    try:
        props = geometry.triangle_properties(triangle)
    except DegenerateGeometryError as e:
        logger.info("Degenerate triangle %s: %s", triangle, e)
        st.warning(f"The vertices do not form a triangle: {e}")

    fig_col, info_col = st.columns([2, 1])
    with fig_col:
        show_figure(plotting.plot_triangle(triangle, props, show), "triangle.png")
    with info_col:
        if props is not None:
            st.markdown("**Measurements**")
            st.write(f"Area: {props.area:.3f}")
            st.write(f"Perimeter: {props.perimeter:.3f}")
            for name, side, angle in zip(("a = BC", "b = CA", "c = AB"), props.sides, props.angles):
                st.write(f"{name}: {side:.3f}  (opposite angle {geometry.radians_to_degrees(angle):.1f}°)")
            st.markdown("**Centers**")
            for center in plotting.CENTER_STYLES:
                p = getattr(props, center)
                st.write(f"{center.capitalize()}: ({p.x:.3f}, {p.y:.3f})")

        st.markdown("**Is P inside the triangle?**")
        px = st.number_input("P.x", value=0.0, step=0.5, key="tri_px")
        py = st.number_input("P.y", value=0.0, step=0.5, key="tri_py")
        try:
            inside = geometry.is_point_in_triangle(geometry.Point(px, py), triangle)
            st.info("P is inside (or on) the triangle." if inside else "P is outside the triangle.")
        except DegenerateGeometryError as e:
            st.warning(str(e))


def circle_panel():
    st.subheader("Circle")
    h = st.slider('h (center x)', -4.0, 4.0, 0.0, key="circ_h")
    k = st.slider('k (center y)', -4.0, 4.0, 0.0, key="circ_k")
    r = st.slider('r (radius)', 0.1, 4.0, 4.0, key="circ_r")
    circle = geometry.Circle(geometry.Point(h, k), r)

    px = st.number_input("P.x", value=1.0, step=0.5, key="circ_px")
    py = st.number_input("P.y", value=1.0, step=0.5, key="circ_py")
    point = geometry.Point(px, py)

    fig_col, info_col = st.columns([2, 1])
    with fig_col:
        show_figure(plotting.plot_circle(circle, test_point=point), "circle.png")
    with info_col:
        try:
            props = geometry.circle_properties(circle)
        except InvalidParameterError as e:
            st.warning(str(e))
        else:
            st.latex(rf"(x-{h:g})^2 + (y-{k:g})^2 = {r:g}^2")
            st.write(f"Area: {props.area:.3f}  (= {r * r:g}π)")
            st.write(f"Circumference: {props.perimeter:.3f}  (= {2 * r:g}π)")
        inside = geometry.is_point_in_circle(point, circle.center, circle.radius)
        st.info("P is inside (or on) the circle." if inside else "P is outside the circle.")


def function_panel():
    col1, col2 = st.columns([1, 2])

    with col1:
        st.header("Function controls")
        func_type = st.selectbox("Function family:", [
            "Linear", "Quadratic", "Cubic", "Irrational (sqrt)", "Reciprocal",
            "Trigonometric", "Exponential", "Logarithmic",
            "Circle", "Ellipse", "Hyperbola", "Parabola",
        ])

        xmin = st.number_input("xmin", value=-10.0, step=1.0)
        xmax = st.number_input("xmax", value=10.0, step=1.0)
        n_points = st.slider("Sample points", min_value=200, max_value=2000, value=SAMPLE_POINTS, step=100)

        params = {}
        family = None
        if func_type == "Linear":
            family = "linear"
            params['a'] = st.slider('a (slope)', -10.0, 10.0, 1.0)
            params['b'] = st.slider('b (intercept)', -10.0, 10.0, 0.0)
        elif func_type == "Quadratic":
            family = "quadratic"
            params['a'] = st.slider('a', -5.0, 5.0, 1.0)
            params['b'] = st.slider('b', -10.0, 10.0, 0.0)
            params['c'] = st.slider('c', -10.0, 10.0, 0.0)
        elif func_type == "Cubic":
            family = "cubic"
            params['a'] = st.slider('a', -2.0, 2.0, 1.0)
            params['b'] = st.slider('b', -5.0, 5.0, 0.0)
            params['c'] = st.slider('c', -5.0, 5.0, 0.0)
            params['d'] = st.slider('d', -5.0, 5.0, 0.0)
        elif func_type == "Irrational (sqrt)":
            family = "irrational"
            params['a'] = st.slider('a (scale)', -5.0, 5.0, 1.0)
            params['b'] = st.slider('b (inside slope)', -5.0, 5.0, 1.0)
            params['c'] = st.slider('c (inside shift)', -10.0, 10.0, 0.0)
        elif func_type == "Reciprocal":
            family = "reciprocal"
            params['a'] = st.slider('a (scale)', -10.0, 10.0, 1.0)
            params['b'] = st.slider('b (denom slope)', -5.0, 5.0, 1.0)
            params['c'] = st.slider('c (denom shift)', -10.0, 10.0, 0.0)
        elif func_type == "Trigonometric":
            family = "trigonometric"
            params['trig_type'] = st.radio("Function", ["sin", "cos", "tan"], horizontal=True)
            params['amplitude'] = st.slider('amplitude', -5.0, 5.0, 1.0)
            params['frequency'] = st.slider('frequency', 0.1, 5.0, 1.0)
            params['phase'] = st.slider('phase', -math.pi, math.pi, 0.0)
            params['vertical_shift'] = st.slider('vertical shift', -5.0, 5.0, 0.0)
        elif func_type == "Exponential":
            family = "exponential"
            params['base'] = st.slider('base', 0.1, 5.0, 2.0)
            params['scale'] = st.slider('scale', -5.0, 5.0, 1.0)
        elif func_type == "Logarithmic":
            family = "logarithmic"
            params['base'] = st.selectbox('base', [2.0, math.e, 10.0, 0.5], format_func=lambda b: "e" if b == math.e else f"{b:g}")
            params['scale'] = st.slider('scale', -5.0, 5.0, 1.0)
            params['shift'] = st.slider('shift', -5.0, 5.0, 0.0)
        elif func_type == "Circle":
            params['h'] = st.slider('h (center x)', -5.0, 5.0, 0.0)
            params['k'] = st.slider('k (center y)', -5.0, 5.0, 0.0)
            params['r'] = st.slider('r (radius)', 0.1, 10.0, 3.0)
        elif func_type in ("Ellipse", "Hyperbola"):
            params['h'] = st.slider('h (center x)', -5.0, 5.0, 0.0)
            params['k'] = st.slider('k (center y)', -5.0, 5.0, 0.0)
            params['a'] = st.slider('a (semi-axis)', 0.5, 6.0, 3.0 if func_type == "Ellipse" else 2.0)
            params['b'] = st.slider('b (semi-axis)', 0.5, 6.0, 2.0 if func_type == "Ellipse" else 1.0)
            if func_type == "Hyperbola":
                params['horizontal'] = st.checkbox("Opens left / right", value=True)
        elif func_type == "Parabola":
            params['vertex'] = (st.slider('vertex x', -5.0, 5.0, 0.0), st.slider('vertex y', -5.0, 5.0, 0.0))
            params['focus_distance'] = st.slider('p (vertex to focus)', -3.0, 3.0, 1.0)
            params['horizontal'] = st.checkbox("Axis parallel to x", value=False)

        st.markdown("---")
        show_derivative = st.checkbox("Show derivative (numeric)")
        show_tangent = st.checkbox("Show tangent line at x")
        tangent_x = None
        if show_tangent:
            tangent_x = st.number_input("x for the tangent line", value=0.0)
        show_area = st.checkbox("Show signed area between graph and x-axis")
        show_roots = st.checkbox("Mark zeros (roots) on the graph", value=True)

    with col2:
        if xmax <= xmin:
            st.error("xmax must be greater than xmin.")
            return

        try:
            if family is not None:
                curve = sample_curve(family, params, xmin, xmax, n_points)
                st.latex(curve.latex)
                if tangent_x is not None and not (xmin <= tangent_x <= xmax):
                    st.warning("The tangent x is outside the x range. Widen xmin/xmax or pick another x.")
                    tangent_x = None
                fig = plotting.plot_curve(curve, func_type, show_derivative, show_roots, tangent_x, show_area)
                if show_area:
                    y_valid = np.where(curve.mask & np.isfinite(curve.y), curve.y, 0.0)
                    area = integrate.trapezoid(y_valid, curve.x)
                    st.info(f"Signed area (trapezoid rule) from x={xmin} to x={xmax} ≈ {area:.3f}")
                if family == "quadratic":
                    roots = curves.polynomial_roots([params['a'], params['b'], params['c']])
                    if roots:
                        st.write("Real roots: " + ", ".join(f"{r:.3f}" for r in roots))
            elif func_type == "Parabola":
                vertex = params['vertex']
                p = params['focus_distance']
                focus = (vertex[0] + p, vertex[1]) if params['horizontal'] else (vertex[0], vertex[1] + p)
                t = curves.linspace_safe(xmin, xmax, n_points)
                x, y = curves.compute_parabola(vertex, focus, t, params['horizontal'])
                fig = plotting.plot_conic(x, [y], {"vertex": vertex, "focus": focus}, func_type,
                                          viewport=framing.Viewport(xmin, xmax, xmin, xmax))
            else:
                x, branches, features = curves.conic_branches(func_type.lower(), params, xmin, xmax, n_points)
                if func_type == "Circle":
                    st.latex(curves.equation_latex("circle", params))
                fig = plotting.plot_conic(x, branches, features, func_type)
        except InvalidParameterError as e:
            st.warning(str(e))
            return

        show_figure(fig, "graph_math_lab.png")


def statistics_panel():
    kind = st.radio("Plot type", ["histogram", "scatter", "boxplot"], horizontal=True)
    try:
        if kind == "scatter":
            text = st.text_area("Data pairs (x y, one pair per comma)", "1 2, 2 3, 3 1, 4 4, 5 2")
            pairs = parse_pairs(text)
            fig = plotting.plot_scatter(pairs)
            r = framing.correlation(pairs)
            st.write("Correlation: " + ("undefined" if r is None else f"{r:.3f}"))
        else:
            text = st.text_area("Data", "1, 2, 2, 3, 3, 3, 4, 4, 5" if kind == "histogram" else "1, 2, 3, 4, 5, 6, 7, 8, 9, 10")
            data = parse_numbers(text)
            if kind == "histogram":
                bins = st.slider("Bins", 1, 20, HISTOGRAM_BINS)
                fig = plotting.plot_histogram(data, bins)
            else:
                fig = plotting.plot_box(data)
                if data:
                    s = framing.box_plot_summary(data)
                    st.write(f"Min {s.minimum:g} · Q1 {s.q1:g} · Median {s.median:g} · Q3 {s.q3:g} · Max {s.maximum:g}")
    except InvalidParameterError as e:
        st.warning(str(e))
        return
    show_figure(fig, f"{kind}.png")


def problem_panel():
    subject = st.text_input("Subject", "Mathematics I")
    topic = st.text_input("Topic", "Triangles and trigonometric ratios")
    difficulty = st.selectbox("Difficulty", DIFFICULTIES, index=1)
    geometry_type = st.selectbox("Figure", ["auto", "triangle", "circle", "function"])

    if st.button("Generate problem"):
        try:
            with st.spinner("Generating..."):
                st.session_state["problem"] = ProblemGenerator().generate(subject, topic, difficulty, geometry_type)
        except (ConfigurationError, ProblemFormatError) as e:
            st.error(str(e))
        except Exception as e:
            logger.exception("AI problem request failed")
            st.error(f"The AI service could not be reached: {e}")

    problem = st.session_state.get("problem")
    if problem is None:
        return

    st.markdown("**Problem**")
    st.markdown(problem.question)

    hint = figure_hint(problem.question)
    if hint is not None:
        st.markdown(f"**{hint.title}**  \n{hint.description}")
        if hint.kind == "triangle":
            fig = plotting.plot_triangle(hint.triangle, geometry.triangle_properties(hint.triangle))
        elif hint.kind == "circle":
            fig = plotting.plot_circle(hint.circle)
        else:
            curve = sample_curve(hint.function["family"], hint.function["params"], -4.0, 4.0, SAMPLE_POINTS)
            fig = plotting.plot_curve(curve, "y = x² - 4")
        st.pyplot(fig)

    with st.expander("Show answer"):
        st.markdown(as_latex_answer(problem.answer))
    with st.expander("Show hint"):
        st.markdown(problem.hint or "-")
    if st.button("Clear"):
        del st.session_state["problem"]
        st.rerun()


# UI layout
st.title("📐 Math Lab: geometry, graphs and statistics")
st.markdown("Pick a tab, move the sliders and watch the figure and its measurements update.")

tab_geo, tab_fn, tab_stats, tab_ai = st.tabs(["Geometry", "Function graphs", "Statistics", "AI problems"])

with tab_geo:
    shape = st.radio("Shape", ["Triangle", "Circle"], horizontal=True)
    if shape == "Triangle":
        triangle_panel()
    else:
        circle_panel()

with tab_fn:
    function_panel()

with tab_stats:
    statistics_panel()

with tab_ai:
    problem_panel()
