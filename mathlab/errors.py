"""Exception types raised by the Math Lab core.

The numeric modules never return NaN/inf for degenerate input; they raise one
of these instead and leave recovery to the page that called them.
"""


class MathlabError(Exception):
    """Base class for every error raised by the ``mathlab`` package."""


class DegenerateGeometryError(MathlabError, ValueError):
    """Three points are collinear or coincident, so the quantity is undefined."""


class InvalidParameterError(MathlabError, ValueError):
    """An argument is outside the domain the computation accepts."""


class ConfigurationError(MathlabError):
    """A required setting (for example the AI API key) is missing."""


class ProblemFormatError(MathlabError):
    """The AI service replied with something that is not a usable problem."""
