from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from traininglog.constants import HISTORY_LIMIT
from traininglog.db import get_db
from traininglog.deps.auth import get_current_user
from traininglog.models import User
from traininglog.progress import history, last_best_set, recent_prs
from traininglog.repositories.exercise_repo import ExerciseRepository
from traininglog.repositories.session_repo import SessionRepository
from traininglog.schemas.exercise import ExerciseRead
from traininglog.schemas.progress import BestSetRead, DataPointRead, ExerciseProgressRead, LastBestSetRead

router = APIRouter(prefix="/api/progress", tags=["progress"])

@router.get("/exercise/{exercise_id}", response_model=ExerciseProgressRead)
def exercise_progress(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    exercise = ExerciseRepository(db).get_visible(exercise_id, current.id)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")

    rows = SessionRepository(db).exercise_history(exercise_id, current.id, limit=HISTORY_LIMIT)
    points = history(rows)
    return ExerciseProgressRead(
        exercise=ExerciseRead.model_validate(exercise),
        data_points=[DataPointRead.model_validate(p) for p in points],
        recent_prs=[DataPointRead.model_validate(p) for p in recent_prs(points)],
    )

@router.get("/exercise/{exercise_id}/last", response_model=LastBestSetRead)
def exercise_last_best_set(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    best = last_best_set(SessionRepository(db).exercise_history(exercise_id, current.id))
    return LastBestSetRead(best_set=BestSetRead.model_validate(best) if best else None)
