from typing import Annotated
from pydantic import Field, StrictBool, StrictInt
from traininglog.constants import WeightUnit
from traininglog.schemas.common import CamelModel, NonNegInt, Weight

Rpe = Annotated[StrictInt, Field(ge=1, le=10)]

class SetLogIn(CamelModel):
    session_exercise_id: StrictInt
    set_index: NonNegInt
    reps: NonNegInt | None = None
    weight: Weight | None = None
    unit: WeightUnit = WeightUnit.lb
    duration_sec: NonNegInt | None = None
    distance_meters: NonNegInt | None = None
    rpe: Rpe | None = None
    completed: StrictBool = True
    notes: str | None = None

class BulkUpsertLogs(CamelModel):
    logs: list[SetLogIn]

class SetLogRead(CamelModel):
    id: int
    session_exercise_id: int
    set_index: int
    reps: int | None = None
    weight: float | None = None
    unit: WeightUnit
    duration_sec: int | None = None
    distance_meters: int | None = None
    rpe: int | None = None
    completed: bool
    notes: str | None = None
