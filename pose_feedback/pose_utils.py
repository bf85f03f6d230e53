# pose_feedback/pose_utils.py

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import numpy as np

# 33-point body schema (left side only, the rules never read the right side)
LEFT_EAR = 7  # schema's left ear; index 5 is an eye point, not the ear
LEFT_SHOULDER = 11
LEFT_ELBOW = 13
LEFT_WRIST = 15
LEFT_HIP = 23
LEFT_KNEE = 25
LEFT_ANKLE = 27

NUM_LANDMARKS = 33
VISIBILITY_THRESHOLD = 0.5


@dataclass(frozen=True)
class Landmark:
    x: float
    y: float
    z: float = 0.0
    visibility: float = 0.0


def angle_at(a: Landmark, b: Landmark, c: Landmark) -> float:
    """
    Returns the angle (in degrees, 0..180) at point b formed by points a-b-c.

    NaN coordinates propagate as NaN. Coincident points do not raise:
    arctan2(0, 0) is 0, so a zero-length ray gives a finite, meaningless angle.
    """
    radians = np.arctan2(c.y - b.y, c.x - b.x) - np.arctan2(a.y - b.y, a.x - b.x)
    angle = np.abs(radians * 180.0 / np.pi)
    if angle > 180.0:
        angle = 360.0 - angle
    return float(angle)


def is_visible(landmark: Landmark) -> bool:
    return landmark.visibility > VISIBILITY_THRESHOLD


def all_visible(landmarks: Iterable[Landmark]) -> bool:
    return all(is_visible(lm) for lm in landmarks)


def landmark_from_mapping(data: Mapping[str, Any]) -> Landmark:
    """
    Build a Landmark from a dict like {"x":..,"y":..,"visibility":..}.
    Missing z is 0.0, missing visibility is 0.0 (not visible).
    """
    visibility = data.get("visibility")
    return Landmark(
        x=float(data["x"]),
        y=float(data["y"]),
        z=float(data.get("z") or 0.0),
        visibility=float(visibility) if visibility is not None else 0.0,
    )
