import math

import pytest

from pose_feedback.pose_utils import NUM_LANDMARKS, Landmark


def _frame(points=None, visibility=1.0):
    """33 landmarks at the origin, with the given {index: Landmark} overrides."""
    frame = [Landmark(0.0, 0.0, 0.0, visibility) for _ in range(NUM_LANDMARKS)]
    for idx, lm in (points or {}).items():
        frame[idx] = lm
    return frame


def _point_at_angle(vertex, ref, degrees, length=0.2, visibility=1.0):
    """Point such that angle(ref, vertex, point) == degrees."""
    base = math.atan2(ref.y - vertex.y, ref.x - vertex.x)
    theta = base + math.radians(degrees)
    return Landmark(
        vertex.x + length * math.cos(theta),
        vertex.y + length * math.sin(theta),
        0.0,
        visibility,
    )


@pytest.fixture
def make_frame():
    return _frame


@pytest.fixture
def point_at_angle():
    return _point_at_angle
