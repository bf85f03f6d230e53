# pose_feedback/engine.py

import logging
from typing import Callable, List, Optional, Sequence

from .exercise_rules import BICEP_CURL, EvaluationResult, RuleContext, evaluate
from .models import FeedbackMessage
from .pose_utils import Landmark
from .rep_logic import RepetitionState, update_rep_state

logger = logging.getLogger(__name__)

Subscriber = Callable[[FeedbackMessage], None]


class FeedbackEngine:
    """
    Per-session orchestrator: rule evaluation + rep counting + publishing.

    Holds the only cross-frame state (RepetitionState and the RuleContext
    latch). Frames must be delivered one at a time.
    """

    def __init__(self, exercise: str = BICEP_CURL):
        self.exercise = exercise
        self.rep_state = RepetitionState()
        self.rule_context = RuleContext()
        self._subscribers: List[Subscriber] = []

    @property
    def correct_count(self) -> int:
        return self.rep_state.correct_count

    def set_exercise(self, exercise: str, source: str = "host") -> None:
        if exercise == self.exercise:
            return
        logger.info("Workout set from %s: %s", source, exercise)
        self.exercise = exercise
        self.rule_context.reset()

    def reset(self) -> None:
        self.rep_state.reset()
        self.rule_context.reset()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a result observer. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def process_frame(
        self,
        landmarks: Optional[Sequence[Landmark]],
        exercise: Optional[str] = None,
    ) -> Optional[EvaluationResult]:
        """
        Evaluates one frame. An exercise passed along is applied even when no
        pose was detected; the frame itself then returns None without
        touching the counter.
        """
        if exercise is not None:
            self.set_exercise(exercise)
        if landmarks is None or len(landmarks) == 0:
            return None

        result = evaluate(landmarks, self.exercise, self.rule_context)
        update_rep_state(self.rep_state, result.correct)

        self._publish(FeedbackMessage(
            feedback=result.feedback,
            correctCount=self.rep_state.correct_count,
            angle=result.angle,
        ))
        return result

    def _publish(self, message: FeedbackMessage) -> None:
        for callback in list(self._subscribers):
            callback(message)
