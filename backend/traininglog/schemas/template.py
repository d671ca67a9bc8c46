from datetime import datetime
from pydantic import Field, StrictInt, field_validator
from traininglog.constants import Category
from traininglog.schemas.common import CamelModel, NonNegInt, TitleStr, Weight, reject_null
from traininglog.schemas.exercise import ExerciseRead

class TemplateCreate(CamelModel):
    title: TitleStr
    category: Category
    notes: str | None = None

class TemplateUpdate(CamelModel):
    title: TitleStr | None = None
    category: Category | None = None
    notes: str | None = None

    @field_validator("title", "category")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class TemplateExerciseCreate(CamelModel):
    exercise_id: StrictInt
    order: NonNegInt
    default_sets: NonNegInt | None = None
    default_reps: NonNegInt | None = None
    default_weight: Weight | None = None
    default_duration_sec: NonNegInt | None = None

class TemplateExerciseUpdate(CamelModel):
    order: NonNegInt | None = None
    default_sets: NonNegInt | None = None
    default_reps: NonNegInt | None = None
    default_weight: Weight | None = None
    default_duration_sec: NonNegInt | None = None

    @field_validator("order")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class TemplateExerciseRead(CamelModel):
    id: int
    template_id: int
    exercise_id: int
    order: int
    default_sets: int | None = None
    default_reps: int | None = None
    default_weight: float | None = None
    default_duration_sec: int | None = None
    exercise: ExerciseRead

class TemplateRead(CamelModel):
    id: int
    owner_id: int
    title: str
    category: Category
    notes: str | None = None
    created_at: datetime | None = None
    exercises: list[TemplateExerciseRead] = Field(default_factory=list)
