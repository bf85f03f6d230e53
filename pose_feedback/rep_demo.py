# pose_feedback/rep_demo.py

import argparse
import logging
import time
from queue import Queue
from threading import Thread
from typing import Optional

import cv2
import requests

from . import config
from .capture import PoseEstimator, draw_overlay
from .engine import FeedbackEngine
from .exercise_rules import EXERCISES
from .models import FeedbackMessage

logger = logging.getLogger(__name__)

WINDOW_NAME = "Pose Feedback"

# ---------- Exercise options (keyboard switch at runtime) ----------
EXERCISE_OPTIONS = {str(i): name for i, name in enumerate(EXERCISES, start=1)}


# ---------- Background host delivery ----------

class HostNotifier:
    """
    Forwards engine results to the host endpoint.
    The capture loop only enqueues; a daemon thread does the HTTP call.
    """

    def __init__(self, url: str, timeout: float = 2.0):
        self.url = url
        self.timeout = timeout
        self.queue: "Queue[FeedbackMessage]" = Queue()
        self._worker = Thread(target=self._run, daemon=True)
        self._worker.start()

    def __call__(self, message: FeedbackMessage) -> None:
        self.queue.put(message)  # returns instantly

    def _run(self):
        while True:
            message = self.queue.get()
            try:
                resp = requests.post(self.url, json=message.model_dump(), timeout=self.timeout)
                if resp.status_code >= 400:
                    logger.warning("Host rejected feedback: %s %s", resp.status_code, resp.text)
            except requests.RequestException as e:
                logger.warning("Host delivery failed: %s", e)
            finally:
                self.queue.task_done()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Real-time exercise form feedback")
    parser.add_argument("--workout", help="startup exercise (URL-encoded values accepted)")
    parser.add_argument("--host-url", default=config.HOST_URL,
                        help="endpoint that receives feedback JSON")
    parser.add_argument("--camera", type=int, default=config.CAMERA_INDEX)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config.configure_logging()

    # 1) Engine with the one-shot startup exercise
    exercise = config.resolve_startup_exercise(args.workout)
    engine = FeedbackEngine(exercise)
    logger.info("Workout set from startup parameter: %s", exercise)

    if args.host_url:
        engine.subscribe(HostNotifier(args.host_url))

    # 2) Start camera
    cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        logger.error("Could not open camera %s", args.camera)
        return 1
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, config.FRAME_WIDTH)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config.FRAME_HEIGHT)

    pose_estimator = PoseEstimator()
    throttle_s = config.THROTTLE_MS / 1000.0
    last_processed = 0.0
    last_result = None
    pose_landmarks = None

    print("Keys: " + ", ".join(f"{k}={v}" for k, v in EXERCISE_OPTIONS.items()) + ", q=quit")

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                break

            now = time.time()
            if now - last_processed >= throttle_s:
                last_processed = now
                landmarks, pose_landmarks = pose_estimator.process(frame)
                # no pose -> None, counter untouched, no overlay text
                last_result = engine.process_frame(landmarks)

            display_frame = draw_overlay(
                frame.copy(), pose_landmarks, engine.exercise, last_result, engine.correct_count
            )
            cv2.imshow(WINDOW_NAME, display_frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            choice: Optional[str] = EXERCISE_OPTIONS.get(chr(key)) if key < 128 else None
            if choice:
                engine.set_exercise(choice, source="keyboard")
                last_result = None
    finally:
        pose_estimator.close()
        cap.release()
        cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
