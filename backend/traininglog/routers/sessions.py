import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from traininglog.db import get_db
from traininglog.deps.auth import get_current_user
from traininglog.models import SessionExercise, User, WorkoutSession
from traininglog.repositories.exercise_repo import ExerciseRepository
from traininglog.repositories.session_repo import SessionRepository
from traininglog.repositories.set_log_repo import SetLogRepository
from traininglog.repositories.template_repo import TemplateRepository
from traininglog.schemas.common import SuccessResponse
from traininglog.schemas.session import (
    SessionCreate,
    SessionExerciseCreate,
    SessionExerciseRead,
    SessionRead,
    SessionUpdate,
)
from traininglog.schemas.set_log import BulkUpsertLogs, SetLogRead

router = APIRouter(prefix="/api/sessions", tags=["sessions"])

def owned_session(db: Session, session_id: int, current: User) -> WorkoutSession:
    sess = SessionRepository(db).get_owned(session_id, current.id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return sess

@router.get("", response_model=list[SessionRead])
def list_sessions(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    date_from: dt.date | None = Query(None, alias="from"),
    date_to: dt.date | None = Query(None, alias="to"),
):
    return SessionRepository(db).list_by_owner(current.id, date_from=date_from, date_to=date_to)

@router.post("", response_model=SessionRead)
def create_session(payload: SessionCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    template_id = None
    exercises: list[SessionExercise] = []
    if payload.template_id is not None:
        # someone else's template is skipped: the session is still created, just empty
        template = TemplateRepository(db).get_owned(payload.template_id, current.id)
        if template:
            template_id = template.id
            exercises = [
                SessionExercise(exercise_id=te.exercise_id, order=te.order, notes=te.default_notes())
                for te in template.exercises
            ]
    return SessionRepository(db).create(
        current.id,
        title=payload.title,
        category=payload.category,
        date=dt.date.fromisoformat(payload.date),
        notes=payload.notes,
        template_id=template_id,
        exercises=exercises,
    )

@router.get("/{session_id}", response_model=SessionRead)
def get_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return owned_session(db, session_id, current)

@router.patch("/{session_id}", response_model=SessionRead)
def update_session(
    session_id: int,
    payload: SessionUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    sess = owned_session(db, session_id, current)
    fields = payload.model_dump(exclude_unset=True)
    if "date" in fields:
        fields["date"] = dt.date.fromisoformat(fields["date"])
    return SessionRepository(db).update(sess, fields)

@router.delete("/{session_id}", response_model=SuccessResponse)
def delete_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    sess = owned_session(db, session_id, current)
    SessionRepository(db).delete(sess)
    return SuccessResponse()

@router.post("/{session_id}/exercises", response_model=SessionExerciseRead)
def add_session_exercise(
    session_id: int,
    payload: SessionExerciseCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    sess = owned_session(db, session_id, current)
    if not ExerciseRepository(db).get_visible(payload.exercise_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return SessionRepository(db).add_exercise(
        sess, exercise_id=payload.exercise_id, order=payload.order, notes=payload.notes
    )

@router.post("/{session_id}/logs", response_model=list[SetLogRead])
def upsert_logs(
    session_id: int,
    payload: BulkUpsertLogs,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    sess = owned_session(db, session_id, current)
    # validate the whole batch before writing any of it
    member_ids = {se.id for se in sess.exercises}
    if any(log.session_exercise_id not in member_ids for log in payload.logs):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Session exercise not in this session")
    return SetLogRepository(db).upsert_many(log.model_dump() for log in payload.logs)
