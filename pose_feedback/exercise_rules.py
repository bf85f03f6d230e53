# pose_feedback/exercise_rules.py

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from .pose_utils import (
    LEFT_ANKLE,
    LEFT_EAR,
    LEFT_ELBOW,
    LEFT_HIP,
    LEFT_KNEE,
    LEFT_SHOULDER,
    LEFT_WRIST,
    Landmark,
    all_visible,
    angle_at,
)

BICEP_CURL = "bicep_curl"
SQUAT = "squat"
PLANK = "plank"
SHOULDER_PRESS = "shoulder_press"
LATERAL_RAISE = "lateral_raise"

ENSURE_VISIBLE = "Ensure body is fully visible to the camera."
UNKNOWN_EXERCISE = "Unknown exercise"


@dataclass
class EvaluationResult:
    angle: float
    feedback: str
    correct: bool = False


@dataclass
class RuleContext:
    """
    Hidden per-exercise state carried between frames.

    start_wrist_x is the shoulder press latch: the wrist X recorded on the
    first aligned frame with the elbow above 90 degrees.
    """
    start_wrist_x: Optional[float] = None

    def reset(self) -> None:
        self.start_wrist_x = None


Rule = Callable[[Sequence[Landmark], RuleContext], EvaluationResult]


# ----------------- Angle-only exercises (no visibility gate) -----------------

def evaluate_bicep_curl(landmarks: Sequence[Landmark], ctx: RuleContext) -> EvaluationResult:
    angle = angle_at(landmarks[LEFT_SHOULDER], landmarks[LEFT_ELBOW], landmarks[LEFT_WRIST])
    if angle < 20:
        return EvaluationResult(angle, "Lower your arm to engage biceps fully.")
    if angle > 160:
        return EvaluationResult(angle, "Raise your arm more to complete the curl.")
    return EvaluationResult(angle, "Good form!", True)


def evaluate_squat(landmarks: Sequence[Landmark], ctx: RuleContext) -> EvaluationResult:
    angle = angle_at(landmarks[LEFT_HIP], landmarks[LEFT_KNEE], landmarks[LEFT_ANKLE])
    if angle > 170:
        return EvaluationResult(angle, "Lower down for a full squat.")
    if angle < 90:
        return EvaluationResult(angle, "You're going too low!")
    return EvaluationResult(angle, "Good squat form!", True)


def evaluate_plank(landmarks: Sequence[Landmark], ctx: RuleContext) -> EvaluationResult:
    angle = angle_at(landmarks[LEFT_SHOULDER], landmarks[LEFT_HIP], landmarks[LEFT_ANKLE])
    if angle < 160:
        return EvaluationResult(angle, "Raise your hips to straighten your body.")
    if angle > 175:
        return EvaluationResult(angle, "Good plank position!", True)
    return EvaluationResult(angle, "Engage core for a stable plank.")


# ----------------- Visibility-gated exercises -----------------

def evaluate_shoulder_press(landmarks: Sequence[Landmark], ctx: RuleContext) -> EvaluationResult:
    shoulder = landmarks[LEFT_SHOULDER]
    elbow = landmarks[LEFT_ELBOW]
    wrist = landmarks[LEFT_WRIST]
    hip = landmarks[LEFT_HIP]
    knee = landmarks[LEFT_KNEE]

    if not all_visible((shoulder, elbow, wrist, hip, knee)):
        return EvaluationResult(0.0, ENSURE_VISIBLE)

    elbow_angle = angle_at(shoulder, elbow, wrist)

    if elbow_angle > 90 and elbow.y > shoulder.y + 0.05:
        return EvaluationResult(elbow_angle, "Raise your elbows to shoulder level before pressing.")
    if abs(wrist.x - elbow.x) > 0.1:
        return EvaluationResult(
            elbow_angle, "Keep your wrists aligned with your elbows to prevent strain."
        )

    # latch stays unset until the first frame with the elbow above 90
    if ctx.start_wrist_x is None and elbow_angle > 90:
        ctx.start_wrist_x = wrist.x
    if ctx.start_wrist_x is not None and abs(wrist.x - ctx.start_wrist_x) > 0.15:
        return EvaluationResult(
            elbow_angle, "Press straight up without leaning forward or backward."
        )

    spine_angle = angle_at(hip, shoulder, knee)
    if spine_angle < 160:
        return EvaluationResult(elbow_angle, "Engage your core and avoid leaning back too much.")
    if elbow_angle < 170:
        return EvaluationResult(elbow_angle, "Fully extend your arms at the top.")
    # angle_at never exceeds 180, kept so the tree matches the published rule
    if elbow_angle > 190:
        return EvaluationResult(elbow_angle, "Avoid locking out your elbows too aggressively.")
    return EvaluationResult(elbow_angle, "Good shoulder press form!", True)


def evaluate_lateral_raise(landmarks: Sequence[Landmark], ctx: RuleContext) -> EvaluationResult:
    shoulder = landmarks[LEFT_SHOULDER]
    elbow = landmarks[LEFT_ELBOW]
    wrist = landmarks[LEFT_WRIST]
    hip = landmarks[LEFT_HIP]
    knee = landmarks[LEFT_KNEE]
    ear = landmarks[LEFT_EAR]

    if not all_visible((shoulder, elbow, wrist, hip, knee, ear)):
        return EvaluationResult(0.0, ENSURE_VISIBLE)

    shoulder_angle = angle_at(hip, shoulder, elbow)
    elbow_angle = angle_at(shoulder, elbow, wrist)

    if shoulder_angle > 100:
        return EvaluationResult(
            shoulder_angle,
            "Stop at shoulder height to avoid unnecessary shoulder joint strain.",
        )
    if abs(shoulder.y - ear.y) < 0.15:
        return EvaluationResult(
            shoulder_angle,
            "Keep your shoulders relaxed and focus on lifting with your delts.",
        )
    if wrist.y < elbow.y - 0.05:
        return EvaluationResult(
            shoulder_angle,
            "Keep your elbows slightly higher than your wrists for proper deltoid activation.",
        )

    torso_angle = angle_at(hip, shoulder, knee)
    if torso_angle < 170:
        return EvaluationResult(shoulder_angle, "Engage your core and maintain an upright posture.")
    if elbow_angle < 160:
        return EvaluationResult(
            shoulder_angle,
            "Keep a slight bend in your elbows, but don’t turn it into a press.",
        )
    return EvaluationResult(shoulder_angle, "Good lateral raise form!", True)


# ----------------- Rule table -----------------
EXERCISE_RULES: Dict[str, Rule] = {
    BICEP_CURL: evaluate_bicep_curl,
    SQUAT: evaluate_squat,
    PLANK: evaluate_plank,
    SHOULDER_PRESS: evaluate_shoulder_press,
    LATERAL_RAISE: evaluate_lateral_raise,
}

EXERCISES = tuple(EXERCISE_RULES)


def get_exercise_rule(exercise_name: Optional[str]) -> Optional[Rule]:
    if exercise_name and exercise_name in EXERCISE_RULES:
        return EXERCISE_RULES[exercise_name]
    return None


def evaluate(
    landmarks: Sequence[Landmark],
    exercise_name: Optional[str],
    ctx: Optional[RuleContext] = None,
) -> EvaluationResult:
    rule = get_exercise_rule(exercise_name)
    if rule is None:
        return EvaluationResult(0.0, UNKNOWN_EXERCISE)
    return rule(landmarks, ctx if ctx is not None else RuleContext())
