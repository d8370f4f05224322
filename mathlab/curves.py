"""
Function families for the graph explorer.

Each ``compute_*`` takes the family parameters and a numpy x grid and returns
the y values plus a boolean mask of where the function is defined. Points
outside the domain are NaN so matplotlib leaves a gap instead of joining
across an asymptote.

These are for drawing only; the labelled feature points (vertex, intercepts,
foci) are the ones the lesson pages annotate.
"""
import logging
from math import isfinite
from typing import Dict, List, NamedTuple, Tuple

import numpy as np
import sympy as sp

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

X = sp.Symbol("x")


class Curve(NamedTuple):
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray
    features: Dict[str, Tuple[float, float]]
    latex: str


def linspace_safe(xmin, xmax, n):
    if n <= 0:
        n = 400
    if xmax <= xmin:
        raise InvalidParameterError(f"x range is empty: [{xmin}, {xmax}]")
    return np.linspace(xmin, xmax, n)


def _full_mask(x):
    return np.ones_like(x, dtype=bool)


def compute_linear(a, b, x):
    return a * x + b


def compute_quadratic(a, b, c, x):
    return a * x**2 + b * x + c


def compute_cubic(a, b, c, d, x):
    return a * x**3 + b * x**2 + c * x + d


def compute_irrational(a, b, c, x):
    # y = a * sqrt(b*x + c)
    inside = b * x + c
    y = np.full_like(x, np.nan, dtype=float)
    mask = inside >= 0
    y[mask] = a * np.sqrt(inside[mask])
    return y, mask


def compute_reciprocal(a, b, c, x):
    denom = b * x + c
    y = np.full_like(x, np.nan, dtype=float)
    mask = denom != 0
    y[mask] = a / denom[mask]
    return y, mask


TRIG_FUNCS = {"sin": np.sin, "cos": np.cos, "tan": np.tan}


def compute_trigonometric(x, trig_type="sin", amplitude=1.0, frequency=1.0, phase=0.0, vertical_shift=0.0):
    if trig_type not in TRIG_FUNCS:
        raise InvalidParameterError(f"Unknown trigonometric function {trig_type!r}")
    y = amplitude * TRIG_FUNCS[trig_type](frequency * x + phase) + vertical_shift
    mask = np.isfinite(y)
    if trig_type == "tan":
        # hide the vertical jump at each asymptote
        mask &= np.abs(np.cos(frequency * x + phase)) > 1e-3
    y = np.where(mask, y, np.nan)
    return y, mask


def compute_exponential(x, base=2.0, scale=1.0):
    if base <= 0:
        raise InvalidParameterError(f"Exponential base must be positive, got {base}")
    return scale * np.power(base, x)


def compute_logarithmic(x, base=2.0, scale=1.0, shift=0.0):
    if base <= 0 or base == 1:
        raise InvalidParameterError(f"Logarithm base must be positive and not 1, got {base}")
    y = np.full_like(x, np.nan, dtype=float)
    mask = x > 0
    y[mask] = scale * (np.log(x[mask]) / np.log(base)) + shift
    return y, mask


def log_x_intercept(base=2.0, scale=1.0, shift=0.0):
    """x where scale*log_base(x) + shift = 0; None for a flat (scale 0) curve."""
    if scale == 0:
        return None
    return base ** (-shift / scale)


def compute_circle(h, k, r, x):
    inside = r**2 - (x - h)**2
    y1 = np.full_like(x, np.nan, dtype=float)
    y2 = np.full_like(x, np.nan, dtype=float)
    mask = inside >= 0
    y1[mask] = k + np.sqrt(inside[mask])
    y2[mask] = k - np.sqrt(inside[mask])
    return y1, y2, mask


def _check_semi_axes(a, b, shape):
    if not (a > 0 and b > 0):
        raise InvalidParameterError(f"{shape} semi-axes must be positive, got a={a}, b={b}")


def compute_ellipse(h, k, a, b, x):
    # (x-h)^2/a^2 + (y-k)^2/b^2 = 1
    _check_semi_axes(a, b, "Ellipse")
    inside = 1 - (x - h)**2 / a**2
    y1 = np.full_like(x, np.nan, dtype=float)
    y2 = np.full_like(x, np.nan, dtype=float)
    mask = inside >= 0
    y1[mask] = k + b * np.sqrt(inside[mask])
    y2[mask] = k - b * np.sqrt(inside[mask])
    return y1, y2, mask


def ellipse_foci(h, k, a, b):
    """Foci on the major axis; a vertical major axis when b > a."""
    _check_semi_axes(a, b, "Ellipse")
    c = np.sqrt(abs(a**2 - b**2))
    if a >= b:
        return (h - c, k), (h + c, k)
    return (h, k - c), (h, k + c)


def compute_hyperbola(h, k, a, b, x, horizontal=True):
    """Upper and lower branches as functions of x.

    horizontal: (x-h)^2/a^2 - (y-k)^2/b^2 = 1, undefined for |x-h| < a.
    vertical:   (y-k)^2/a^2 - (x-h)^2/b^2 = 1, defined everywhere.
    """
    _check_semi_axes(a, b, "Hyperbola")
    y1 = np.full_like(x, np.nan, dtype=float)
    y2 = np.full_like(x, np.nan, dtype=float)
    if horizontal:
        term = (x - h)**2 / a**2 - 1
        mask = term >= 0
        y1[mask] = k + b * np.sqrt(term[mask])
        y2[mask] = k - b * np.sqrt(term[mask])
    else:
        mask = _full_mask(x)
        root = np.sqrt(1 + (x - h)**2 / b**2)
        y1 = k + a * root
        y2 = k - a * root
    return y1, y2, mask


def parabola_coefficient(vertex, focus, horizontal=False):
    """a in y = a(x-h)^2 + k (or x = a(y-k)^2 + h), i.e. 1/(4p)."""
    p = (focus[0] - vertex[0]) if horizontal else (focus[1] - vertex[1])
    if p == 0:
        raise InvalidParameterError("Focus lies on the vertex; the parabola is undefined")
    return 1 / (4 * p)


def compute_parabola(vertex, focus, t, horizontal=False):
    """Returns (x, y) arrays; ``t`` runs along the axis of symmetry's normal."""
    a = parabola_coefficient(vertex, focus, horizontal)
    h, k = vertex
    if horizontal:
        return h + a * (t - k)**2, t
    return t, k + a * (t - h)**2


# Numerical root-finding for sampled function
def find_zeros_sampled(x, y):
    zeros = []
    for i in range(len(x)-1):
        y1, y2 = y[i], y[i+1]
        if not (isfinite(y1) and isfinite(y2)):
            continue
        if y1 == 0:
            zeros.append(float(x[i]))
        if y1 * y2 < 0:
            # linear interpolation root
            t = abs(y1) / (abs(y1) + abs(y2))
            xr = x[i] * (1 - t) + x[i+1] * t
            zeros.append(float(xr))
    return zeros


def derivative_sampled(x, y):
    return np.gradient(y, x)


def quadratic_vertex(a, b, c):
    if a == 0:
        return None
    xv = -b / (2*a)
    yv = a * xv**2 + b * xv + c
    return xv, yv


def polynomial_roots(coeffs) -> List[float]:
    roots = np.roots(coeffs)
    # return only real roots (within tolerance)
    return sorted(float(r.real) for r in roots if abs(r.imag) < 1e-8)


def _num(value):
    # 0.5 -> 1/2, 2.0 -> 2; keeps the rendered equation free of trailing zeros
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return sp.nsimplify(round(value, 3), rational=True)
    return value


def equation_latex(family, params) -> str:
    """LaTeX for the equation shown above the graph, e.g. ``y = 2 x + 1``."""
    p = {k: _num(v) for k, v in params.items()}
    if family == "linear":
        rhs = p["a"] * X + p["b"]
    elif family == "quadratic":
        rhs = p["a"] * X**2 + p["b"] * X + p["c"]
    elif family == "cubic":
        rhs = p["a"] * X**3 + p["b"] * X**2 + p["c"] * X + p["d"]
    elif family == "irrational":
        rhs = p["a"] * sp.sqrt(p["b"] * X + p["c"])
    elif family == "reciprocal":
        rhs = p["a"] / (p["b"] * X + p["c"])
    elif family == "trigonometric":
        fn = {"sin": sp.sin, "cos": sp.cos, "tan": sp.tan}[params.get("trig_type", "sin")]
        rhs = p["amplitude"] * fn(p["frequency"] * X + p["phase"]) + p.get("vertical_shift", 0)
    elif family == "exponential":
        rhs = p["scale"] * sp.Pow(p["base"], X, evaluate=False)
    elif family == "logarithmic":
        rhs = p["scale"] * sp.log(X, p["base"]) + p["shift"]
    elif family == "circle":
        y = sp.Symbol("y")
        lhs = (X - p["h"])**2 + (y - p["k"])**2
        return f"{sp.latex(lhs)} = {sp.latex(p['r']**2)}"
    else:
        raise InvalidParameterError(f"Unknown function family {family!r}")
    return f"y = {sp.latex(rhs)}"


def sample(family, params, xmin=-10.0, xmax=10.0, n=800) -> Curve:
    """Sample one of the explorer's single-valued families on [xmin, xmax]."""
    x = linspace_safe(xmin, xmax, n)
    features: Dict[str, Tuple[float, float]] = {}
    mask = _full_mask(x)

    if family == "linear":
        y = compute_linear(params["a"], params["b"], x)
        features["y-intercept"] = (0.0, float(params["b"]))
    elif family == "quadratic":
        y = compute_quadratic(params["a"], params["b"], params["c"], x)
        vertex = quadratic_vertex(params["a"], params["b"], params["c"])
        if vertex is not None:
            features["vertex"] = vertex
    elif family == "cubic":
        y = compute_cubic(params["a"], params["b"], params["c"], params["d"], x)
    elif family == "irrational":
        y, mask = compute_irrational(params["a"], params["b"], params["c"], x)
    elif family == "reciprocal":
        y, mask = compute_reciprocal(params["a"], params["b"], params["c"], x)
    elif family == "trigonometric":
        y, mask = compute_trigonometric(
            x, params.get("trig_type", "sin"), params["amplitude"], params["frequency"],
            params["phase"], params.get("vertical_shift", 0.0))
    elif family == "exponential":
        y = compute_exponential(x, params["base"], params["scale"])
        features["y-intercept"] = (0.0, float(params["scale"]))
    elif family == "logarithmic":
        y, mask = compute_logarithmic(x, params["base"], params["scale"], params["shift"])
        xi = log_x_intercept(params["base"], params["scale"], params["shift"])
        if xi is not None and xmin < xi < xmax:
            features["x-intercept"] = (float(xi), 0.0)
    else:
        raise InvalidParameterError(f"Unknown function family {family!r}")

    logger.debug("Sampled %s on [%s, %s] with %d points", family, xmin, xmax, n)
    return Curve(x, y, mask, features, equation_latex(family, params))


def conic_branches(family, params, xmin=-10.0, xmax=10.0, n=800):
    """Two-branch curves (circle, ellipse, hyperbola) sampled as y(x)."""
    x = linspace_safe(xmin, xmax, n)
    h, k = params.get("h", 0.0), params.get("k", 0.0)
    features = {"center": (h, k)}
    if family == "circle":
        if params["r"] <= 0:
            raise InvalidParameterError("Circle radius must be positive")
        y1, y2, _ = compute_circle(h, k, params["r"], x)
    elif family == "ellipse":
        y1, y2, _ = compute_ellipse(h, k, params["a"], params["b"], x)
        f1, f2 = ellipse_foci(h, k, params["a"], params["b"])
        features.update({"F1": f1, "F2": f2})
    elif family == "hyperbola":
        y1, y2, _ = compute_hyperbola(h, k, params["a"], params["b"], x, params.get("horizontal", True))
    else:
        raise InvalidParameterError(f"Unknown conic {family!r}")
    return x, [y1, y2], features

