from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from traininglog.db import get_db
from traininglog.deps.auth import get_current_user
from traininglog.models import SessionTemplate, TemplateExercise, User
from traininglog.repositories.exercise_repo import ExerciseRepository
from traininglog.repositories.template_repo import TemplateRepository
from traininglog.schemas.common import SuccessResponse
from traininglog.schemas.template import (
    TemplateCreate,
    TemplateExerciseCreate,
    TemplateExerciseRead,
    TemplateExerciseUpdate,
    TemplateRead,
    TemplateUpdate,
)

router = APIRouter(prefix="/api/templates", tags=["templates"])

def owned_template(db: Session, template_id: int, current: User) -> SessionTemplate:
    template = TemplateRepository(db).get_owned(template_id, current.id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template

def template_exercise(db: Session, template: SessionTemplate, template_exercise_id: int) -> TemplateExercise:
    te = TemplateRepository(db).get_exercise(template_exercise_id, template.id)
    if not te:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template exercise not found")
    return te

@router.get("", response_model=list[TemplateRead])
def list_templates(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return TemplateRepository(db).list_by_owner(current.id)

@router.post("", response_model=TemplateRead)
def create_template(payload: TemplateCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return TemplateRepository(db).create(
        current.id, title=payload.title, category=payload.category, notes=payload.notes
    )

@router.get("/{template_id}", response_model=TemplateRead)
def get_template(template_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return owned_template(db, template_id, current)

@router.patch("/{template_id}", response_model=TemplateRead)
def update_template(
    template_id: int,
    payload: TemplateUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    template = owned_template(db, template_id, current)
    return TemplateRepository(db).update(template, payload.model_dump(exclude_unset=True))

@router.delete("/{template_id}", response_model=SuccessResponse)
def delete_template(template_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    template = owned_template(db, template_id, current)
    TemplateRepository(db).delete(template)
    return SuccessResponse()

@router.post("/{template_id}/exercises", response_model=TemplateExerciseRead)
def add_template_exercise(
    template_id: int,
    payload: TemplateExerciseCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    template = owned_template(db, template_id, current)
    if not ExerciseRepository(db).get_visible(payload.exercise_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return TemplateRepository(db).add_exercise(template, **payload.model_dump())

@router.patch("/{template_id}/exercises/{template_exercise_id}", response_model=TemplateExerciseRead)
def update_template_exercise(
    template_id: int,
    template_exercise_id: int,
    payload: TemplateExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    template = owned_template(db, template_id, current)
    te = template_exercise(db, template, template_exercise_id)
    return TemplateRepository(db).update(te, payload.model_dump(exclude_unset=True))

@router.delete("/{template_id}/exercises/{template_exercise_id}", response_model=SuccessResponse)
def delete_template_exercise(
    template_id: int,
    template_exercise_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    template = owned_template(db, template_id, current)
    te = template_exercise(db, template, template_exercise_id)
    TemplateRepository(db).delete(te)
    return SuccessResponse()
