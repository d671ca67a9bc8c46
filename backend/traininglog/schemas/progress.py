from pydantic import Field
from traininglog.constants import WeightUnit
from traininglog.schemas.common import CamelModel
from traininglog.schemas.exercise import ExerciseRead

class BestSetRead(CamelModel):
    reps: int
    weight: float
    unit: WeightUnit

class DataPointRead(CamelModel):
    date: str
    session_id: int
    best_set: BestSetRead | None = None
    volume: float
    duration_sec: int | None = None
    rpe: int | None = None

class ExerciseProgressRead(CamelModel):
    exercise: ExerciseRead
    data_points: list[DataPointRead]
    recent_prs: list[DataPointRead] = Field(alias="recentPRs")

class LastBestSetRead(CamelModel):
    best_set: BestSetRead | None = None
