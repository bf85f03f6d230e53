from .engine import FeedbackEngine
from .exercise_rules import EXERCISES, EvaluationResult, RuleContext, evaluate
from .pose_utils import Landmark, angle_at, is_visible
from .rep_logic import RepetitionState, update_rep_state

__all__ = [
    "FeedbackEngine",
    "EXERCISES",
    "EvaluationResult",
    "RuleContext",
    "evaluate",
    "Landmark",
    "angle_at",
    "is_visible",
    "RepetitionState",
    "update_rep_state",
]
