# pose_feedback/models.py
from typing import List, Optional

from pydantic import BaseModel, field_validator

from .pose_utils import NUM_LANDMARKS, Landmark, landmark_from_mapping


class FeedbackMessage(BaseModel):
    """Host message. Keys are part of the host contract, keep them camelCase."""
    feedback: str
    correctCount: int
    angle: float


class LandmarkIn(BaseModel):
    x: float
    y: float
    z: Optional[float] = None
    visibility: Optional[float] = None

    def to_landmark(self) -> Landmark:
        return landmark_from_mapping(self.model_dump())


class FrameIn(BaseModel):
    landmarks: Optional[List[LandmarkIn]] = None  # None / [] -> no pose detected
    exercise: Optional[str] = None

    @field_validator("landmarks")
    @classmethod
    def check_landmark_count(cls, v):
        if not v:
            return None
        if len(v) < NUM_LANDMARKS:
            raise ValueError(f"expected {NUM_LANDMARKS} landmarks, got {len(v)}")
        return v


class FrameResult(BaseModel):
    detected: bool
    feedback: Optional[str] = None
    correctCount: int
    angle: Optional[float] = None
    correct: Optional[bool] = None


class ExerciseIn(BaseModel):
    exercise: str


class SessionCreate(BaseModel):
    exercise: Optional[str] = None


class SessionStatus(BaseModel):
    session_id: str
    exercise: str
    correctCount: int
    completedRepetition: bool
