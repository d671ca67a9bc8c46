import datetime as dt
from typing import Annotated
from pydantic import Field, StrictInt, field_validator
from traininglog.constants import Category
from traininglog.schemas.common import CamelModel, NonNegInt, TitleStr, reject_null
from traininglog.schemas.exercise import ExerciseRead
from traininglog.schemas.set_log import SetLogRead

DateStr = Annotated[str, Field(pattern=r"^\d{4}-\d{2}-\d{2}$")]

def real_calendar_date(v: str | None) -> str | None:
    if v is None:
        return v
    try:
        dt.date.fromisoformat(v)
    except ValueError:
        raise ValueError("Date must be YYYY-MM-DD")
    return v

class SessionCreate(CamelModel):
    title: TitleStr
    category: Category
    date: DateStr
    notes: str | None = None
    template_id: StrictInt | None = None

    @field_validator("date")
    @classmethod
    def real_date(cls, v):
        return real_calendar_date(v)

class SessionUpdate(CamelModel):
    title: TitleStr | None = None
    category: Category | None = None
    date: DateStr | None = None
    notes: str | None = None

    @field_validator("title", "category", "date")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @field_validator("date")
    @classmethod
    def real_date(cls, v):
        return real_calendar_date(v)

class SessionExerciseCreate(CamelModel):
    exercise_id: StrictInt
    order: NonNegInt
    notes: str | None = None

class SessionExerciseRead(CamelModel):
    id: int
    session_id: int
    exercise_id: int
    order: int
    notes: str | None = None
    exercise: ExerciseRead
    set_logs: list[SetLogRead] = Field(default_factory=list)

class SessionRead(CamelModel):
    id: int
    owner_id: int
    title: str
    category: Category
    date: dt.date
    notes: str | None = None
    template_id: int | None = None
    created_at: dt.datetime | None = None
    exercises: list[SessionExerciseRead] = Field(default_factory=list)
