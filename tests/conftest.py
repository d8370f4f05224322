"""Shared fixtures for the unit tests. No network: the AI model is always a mock."""

from unittest.mock import MagicMock

import matplotlib
import pytest

matplotlib.use("Agg")

from mathlab.geometry import Point  # noqa: E402


@pytest.fixture
def sample_triangle():
    """The example triangle used by the lessons: A(-3,-2), B(3,-2), C(0,3)."""
    return (Point(-3.0, -2.0), Point(3.0, -2.0), Point(0.0, 3.0))


@pytest.fixture
def right_triangle():
    return (Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 3.0))


@pytest.fixture
def collinear_triangle():
    return (Point(0.0, 0.0), Point(1.0, 0.0), Point(2.0, 0.0))


@pytest.fixture
def fake_model():
    """Stands in for genai.GenerativeModel; set .generate_content.return_value.text per test."""
    model = MagicMock()
    model.generate_content.return_value = MagicMock(
        text='{"question": "Find the area of triangle ABC.", "answer": "15", "hint": "Use base times height."}'
    )
    return model
