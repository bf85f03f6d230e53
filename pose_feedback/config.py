# pose_feedback/config.py

import logging
import os
from typing import Optional
from urllib.parse import unquote

import dotenv
dotenv.load_dotenv()

from .exercise_rules import BICEP_CURL

WORKOUT = os.getenv("POSE_FEEDBACK_WORKOUT")
DEFAULT_EXERCISE = os.getenv("POSE_FEEDBACK_DEFAULT_EXERCISE", BICEP_CURL)
HOST_URL = os.getenv("POSE_FEEDBACK_HOST_URL")

THROTTLE_MS = int(os.getenv("POSE_FEEDBACK_THROTTLE_MS", "100"))
CAMERA_INDEX = int(os.getenv("POSE_FEEDBACK_CAMERA_INDEX", "0"))
FRAME_WIDTH = 640
FRAME_HEIGHT = 480

# MediaPipe Pose options
MODEL_COMPLEXITY = int(os.getenv("POSE_FEEDBACK_MODEL_COMPLEXITY", "0"))
MIN_DETECTION_CONFIDENCE = float(os.getenv("POSE_FEEDBACK_MIN_DETECTION_CONFIDENCE", "0.5"))
MIN_TRACKING_CONFIDENCE = float(os.getenv("POSE_FEEDBACK_MIN_TRACKING_CONFIDENCE", "0.5"))

LOG_LEVEL = os.getenv("POSE_FEEDBACK_LOG_LEVEL", "INFO")

# Backend server
BACKEND_HOST = os.getenv("POSE_FEEDBACK_BACKEND_HOST", "127.0.0.1")
BACKEND_PORT = int(os.getenv("POSE_FEEDBACK_BACKEND_PORT", "8000"))


def configure_logging(level: Optional[str] = None) -> None:
    level = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers (e.g. under uvicorn)
    logging.getLogger().setLevel(level)


def resolve_startup_exercise(workout: Optional[str] = None) -> str:
    """
    One-shot startup exercise: explicit value, then POSE_FEEDBACK_WORKOUT,
    then the default. Values may arrive URL-encoded (e.g. from a query string).
    """
    value = workout or WORKOUT
    if value:
        return unquote(value)
    return DEFAULT_EXERCISE
