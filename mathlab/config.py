"""Settings for the Math Lab app.

Numeric defaults are plain module constants. Deployment settings come from the
environment (a local ``.env`` file is read if present).
"""
import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Board order: (xmin, ymax, xmax, ymin)
DEFAULT_BOUNDING_BOX = (-4.0, 4.0, 4.0, -4.0)

HISTOGRAM_BINS = 5
HISTOGRAM_BAR_HEIGHT = 3.0

# Below this a determinant / perimeter is treated as zero
DEGENERACY_EPS = 1e-10

SAMPLE_POINTS = 800

DIFFICULTIES = ("easy", "medium", "hard")
GEOMETRY_TYPES = ("triangle", "circle", "function", "auto")


class Settings:
    def __getitem__(self, item):
        return getattr(self, item)

    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
    MODEL_NAME = os.environ.get('MATHLAB_MODEL', 'gemini-2.5-flash')
    LOG_LEVEL = os.environ.get('MATHLAB_LOG_LEVEL', 'INFO').upper()
    LOG_FILE = os.environ.get('MATHLAB_LOG_FILE') or None

    @property
    def log_level(self):
        level = logging.getLevelName(self.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO


settings = Settings()
