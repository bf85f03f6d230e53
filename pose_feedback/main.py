# pose_feedback/main.py
import logging
import threading
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Dict

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .config import resolve_startup_exercise
from .engine import FeedbackEngine
from .models import (
    ExerciseIn,
    FrameIn,
    FrameResult,
    SessionCreate,
    SessionStatus,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    logger.info("Pose feedback backend started (log level %s)", config.LOG_LEVEL)
    yield


app = FastAPI(title="Pose Feedback Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@dataclass
class Session:
    engine: FeedbackEngine
    lock: threading.Lock = field(default_factory=threading.Lock)


# session_id -> Session (one engine per user, frames serialised per session)
sessions: Dict[str, Session] = {}


def _get_session(session_id: str) -> Session:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session


def _status(session_id: str, engine: FeedbackEngine) -> SessionStatus:
    return SessionStatus(
        session_id=session_id,
        exercise=engine.exercise,
        correctCount=engine.rep_state.correct_count,
        completedRepetition=engine.rep_state.completed_repetition,
    )


@app.get("/")
def health_check():
    return {"status": "ok"}


@app.post("/sessions", response_model=SessionStatus)
def create_session(body: SessionCreate):
    session_id = uuid.uuid4().hex
    exercise = resolve_startup_exercise(body.exercise)
    engine = FeedbackEngine(exercise)
    sessions[session_id] = Session(engine=engine)
    logger.info("Session %s started with %s", session_id, exercise)
    return _status(session_id, engine)


@app.get("/sessions/{session_id}", response_model=SessionStatus)
def get_session(session_id: str):
    session = _get_session(session_id)
    return _status(session_id, session.engine)


@app.put("/sessions/{session_id}/exercise", response_model=SessionStatus)
def set_exercise(session_id: str, body: ExerciseIn):
    session = _get_session(session_id)
    with session.lock:
        session.engine.set_exercise(body.exercise)
    return _status(session_id, session.engine)


@app.post("/sessions/{session_id}/reset", response_model=SessionStatus)
def reset_session(session_id: str):
    session = _get_session(session_id)
    with session.lock:
        session.engine.reset()
    return _status(session_id, session.engine)


@app.post("/sessions/{session_id}/frames", response_model=FrameResult)
def process_frame(session_id: str, frame: FrameIn):
    session = _get_session(session_id)
    landmarks = [lm.to_landmark() for lm in frame.landmarks] if frame.landmarks else None

    with session.lock:
        result = session.engine.process_frame(landmarks, frame.exercise)
        count = session.engine.correct_count

    if result is None:
        return FrameResult(detected=False, correctCount=count)
    return FrameResult(
        detected=True,
        feedback=result.feedback,
        correctCount=count,
        angle=result.angle,
        correct=result.correct,
    )


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str):
    _get_session(session_id)
    del sessions[session_id]
    return {"deleted": session_id}


def run():
    uvicorn.run(app, host=config.BACKEND_HOST, port=config.BACKEND_PORT)


if __name__ == "__main__":
    run()
