# pose_feedback/capture.py
import os
os.environ['TF_CPP_MIN_LOG_LEVEL'] = '3'

from typing import List, Optional

import cv2
import mediapipe as mp

from . import config
from .exercise_rules import EvaluationResult
from .pose_utils import Landmark

mp_pose = mp.solutions.pose
mp_drawing = mp.solutions.drawing_utils

TEXT_COLOR = (0, 0, 255)  # BGR red


class PoseEstimator:
    def __init__(self):
        self.pose = mp_pose.Pose(
            static_image_mode=False,
            model_complexity=config.MODEL_COMPLEXITY,
            smooth_landmarks=True,
            enable_segmentation=False,
            min_detection_confidence=config.MIN_DETECTION_CONFIDENCE,
            min_tracking_confidence=config.MIN_TRACKING_CONFIDENCE,
        )

    def process(self, frame_bgr):
        """
        Input: BGR frame from OpenCV.
        Output:
          - landmarks: list of 33 normalized Landmarks, or None if not detected
          - pose_landmarks: raw MediaPipe result (for drawing), or None
        """
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.pose.process(rgb)

        if not results.pose_landmarks:
            return None, None

        landmarks: List[Landmark] = [
            Landmark(x=p.x, y=p.y, z=p.z, visibility=p.visibility)
            for p in results.pose_landmarks.landmark
        ]
        return landmarks, results.pose_landmarks

    def close(self):
        self.pose.close()


def draw_overlay(frame, pose_landmarks, exercise: str,
                 result: Optional[EvaluationResult], correct_count: int):
    """Skeleton + the four status lines, drawn in place."""
    if pose_landmarks is not None:
        mp_drawing.draw_landmarks(
            frame,
            pose_landmarks,
            mp_pose.POSE_CONNECTIONS,
            landmark_drawing_spec=mp_drawing.DrawingSpec(
                color=(0, 0, 255), thickness=2, circle_radius=2
            ),
            connection_drawing_spec=mp_drawing.DrawingSpec(
                color=(0, 255, 0), thickness=4
            ),
        )

    if result is None:
        return frame

    lines = [
        f"Exercise: {exercise}",
        f"Feedback: {result.feedback}",
        f"Angle: {result.angle:.1f} deg",
        f"Correct Count: {correct_count}",
    ]
    for i, text in enumerate(lines):
        cv2.putText(frame,
                    text,
                    (10, 30 + 30 * i),
                    cv2.FONT_HERSHEY_SIMPLEX,
                    0.6,
                    TEXT_COLOR,
                    2)
    return frame
