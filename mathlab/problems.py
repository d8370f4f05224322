"""
AI practice problem generation.

The model is asked for one problem as JSON ({"question", "answer", "hint"}).
Replies often arrive wrapped in a markdown code block, so the JSON object is
cut out of the text before parsing.

figure_hint() picks the example figure shown next to a generated problem by
scanning the question for shape keywords (Japanese lesson text and English).
"""
import json
import logging
import re
from typing import NamedTuple, Optional

import google.generativeai as genai

from .config import DIFFICULTIES, GEOMETRY_TYPES, settings
from .errors import ConfigurationError, InvalidParameterError, ProblemFormatError
from .geometry import Circle, Point

logger = logging.getLogger(__name__)


PROBLEM_PROMPT = '''You are a high-school mathematics teacher. Write one practice problem.

## Subject
{subject}

## Topic
{topic}

## Difficulty
{difficulty}

## Figure
{figure_request}

## Response format (JSON)
```json
{{
  "question": "problem text, formulas in LaTeX between $...$",
  "answer": "final answer only",
  "hint": "one sentence that points toward the method"
}}
```

Rules:
- The problem must be solvable with high-school mathematics
- Give concrete coordinates or lengths whenever a figure is involved
- Output JSON only
'''

FIGURE_REQUESTS = {
    "triangle": "Include a geometry problem about a triangle.",
    "circle": "Include a geometry problem about a circle.",
    "function": "Include a problem about the graph of a function.",
    "auto": "Include a figure or graph if it suits the topic.",
}

TRIANGLE_KEYWORDS = ("三角形", "三角", "triangle")
CIRCLE_KEYWORDS = ("円", "半径", "直径", "circle", "radius", "diameter")
FUNCTION_KEYWORDS = ("関数", "グラフ", "放物線", "function", "graph", "parabola")


class GeneratedProblem(NamedTuple):
    question: str
    answer: str
    hint: str


class FigureHint(NamedTuple):
    kind: str
    title: str
    description: str
    triangle: Optional[tuple] = None
    circle: Optional[Circle] = None
    function: Optional[dict] = None


EXAMPLE_TRIANGLE = (Point(-3.0, -2.0), Point(3.0, -2.0), Point(0.0, 3.0))
EXAMPLE_CIRCLE = Circle(Point(0.0, 0.0), 4.0)
EXAMPLE_FUNCTION = {"family": "quadratic", "params": {"a": 1.0, "b": 0.0, "c": -4.0}}


def build_prompt(subject, topic, difficulty="medium", geometry_type="auto"):
    if difficulty not in DIFFICULTIES:
        raise InvalidParameterError(f"difficulty must be one of {DIFFICULTIES}, got {difficulty!r}")
    if geometry_type not in GEOMETRY_TYPES:
        raise InvalidParameterError(f"geometry_type must be one of {GEOMETRY_TYPES}, got {geometry_type!r}")
    return PROBLEM_PROMPT.format(
        subject=subject,
        topic=topic,
        difficulty=difficulty,
        figure_request=FIGURE_REQUESTS[geometry_type],
    )


def _strip_code_fence(text):
    text = text.strip()
    if text.startswith('```'):
        lines = text.split('\n')
        end_idx = -1 if lines[-1].strip() == '```' else len(lines)
        text = '\n'.join(lines[1:end_idx])
    return text


def parse_problem(text):
    """Turn a model reply into a GeneratedProblem or raise ProblemFormatError."""
    if not text or not text.strip():
        raise ProblemFormatError("Empty reply from the model")

    body = _strip_code_fence(text)
    json_match = re.search(r'(\{[\s\S]*\})', body)
    if not json_match:
        raise ProblemFormatError("No JSON object in the model reply")

    try:
        data = json.loads(json_match.group(), strict=False)
    except json.JSONDecodeError as e:
        raise ProblemFormatError(f"Model reply is not valid JSON: {e}") from e

    missing = [k for k in ("question", "answer") if not str(data.get(k, "")).strip()]
    if missing:
        raise ProblemFormatError(f"Model reply is missing {', '.join(missing)}")

    return GeneratedProblem(
        question=str(data["question"]).strip(),
        answer=str(data["answer"]).strip(),
        hint=str(data.get("hint", "")).strip(),
    )


class ProblemGenerator:
    """Thin wrapper around a Gemini model.

    ``model`` can be any object with a ``generate_content(prompt)`` method
    returning something with ``.text``; when omitted a GenerativeModel is
    created from the configured API key on first use.
    """

    def __init__(self, api_key=None, model_name=None, model=None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model_name = model_name or settings.MODEL_NAME
        self._model = model

    @property
    def model(self):
        if self._model is None:
            if not self.api_key:
                raise ConfigurationError("GEMINI_API_KEY is not set; AI problem generation is unavailable")
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def generate(self, subject, topic, difficulty="medium", geometry_type="auto"):
        prompt = build_prompt(subject, topic, difficulty, geometry_type)
        logger.info("Requesting %s problem on %s / %s (%s)", difficulty, subject, topic, geometry_type)
        response = self.model.generate_content(prompt)
        problem = parse_problem(response.text)
        logger.debug("Generated problem: %s", problem.question[:200])
        return problem


def figure_hint(question) -> Optional[FigureHint]:
    text = (question or "").lower()

    if any(k in text for k in TRIANGLE_KEYWORDS):
        return FigureHint(
            kind="triangle",
            title="Triangle for this problem",
            description="An example triangle with vertices $A(-3, -2)$, $B(3, -2)$, $C(0, 3)$.",
            triangle=EXAMPLE_TRIANGLE,
        )

    if any(k in text for k in CIRCLE_KEYWORDS):
        return FigureHint(
            kind="circle",
            title="Circle for this problem",
            description="An example circle with center $(0, 0)$ and radius $4$.",
            circle=EXAMPLE_CIRCLE,
        )

    if any(k in text for k in FUNCTION_KEYWORDS):
        return FigureHint(
            kind="function",
            title="Graph for this problem",
            description="An example graph of $y = x^2 - 4$.",
            function=EXAMPLE_FUNCTION,
        )

    return None


def as_latex_answer(answer):
    if not answer:
        return answer
    if re.match(r'^\$.*\$$', answer, re.DOTALL):
        return answer
    return f"${answer}$"
