from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from traininglog.constants import Category
from traininglog.db import get_db
from traininglog.deps.auth import get_current_user
from traininglog.models import User
from traininglog.repositories.exercise_repo import ExerciseRepository
from traininglog.schemas.common import SuccessResponse
from traininglog.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate

router = APIRouter(prefix="/api/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseRead])
def list_exercises(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    q: str | None = Query(None, max_length=200),
    category: Category | None = Query(None),
):
    return ExerciseRepository(db).list_visible(current.id, q=q, category=category)

@router.post("", response_model=ExerciseRead)
def create_exercise(payload: ExerciseCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return ExerciseRepository(db).create(owner_id=current.id, **payload.model_dump())

@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    ex = ExerciseRepository(db).get(exercise_id)
    # another user's custom exercise looks missing, not forbidden
    if not ex or not ex.scope.can_view(current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return ex

@router.patch("/{exercise_id}", response_model=ExerciseRead)
def update_exercise(
    exercise_id: int,
    payload: ExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    repo = ExerciseRepository(db)
    ex = repo.get(exercise_id)
    if not ex:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    if not ex.scope.can_edit(current.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return repo.update(ex, payload.model_dump(exclude_unset=True))

@router.delete("/{exercise_id}", response_model=SuccessResponse)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = ExerciseRepository(db)
    ex = repo.get(exercise_id)
    if not ex:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    if not ex.scope.can_delete(current.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Can only delete your own custom exercises",
        )
    repo.delete(ex)
    return SuccessResponse()
