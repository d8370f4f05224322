"""Math Lab: geometry, graph framing and practice problems for the tutoring app."""
from .errors import (
    ConfigurationError,
    DegenerateGeometryError,
    InvalidParameterError,
    MathlabError,
    ProblemFormatError,
)
from .framing import DEFAULT_VIEWPORT, Viewport, frame
from .geometry import Circle, GeometryCalculations, Point, circle_properties, triangle_properties

__version__ = "0.1.0"
