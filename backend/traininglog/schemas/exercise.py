from datetime import datetime
from pydantic import Field, field_validator
from traininglog.constants import Category
from traininglog.schemas.common import CamelModel, TitleStr, YoutubeId, reject_null

class ExerciseCreate(CamelModel):
    name: TitleStr
    category: Category
    equipment: list[str] = Field(default_factory=list)
    muscles: list[str] = Field(default_factory=list)
    instructions: str = ""
    youtube_id: YoutubeId | None = None

class ExerciseUpdate(CamelModel):
    name: TitleStr | None = None
    category: Category | None = None
    equipment: list[str] | None = None
    muscles: list[str] | None = None
    instructions: str | None = None
    youtube_id: YoutubeId | None = None

    @field_validator("name", "category", "equipment", "muscles", "instructions")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class ExerciseRead(CamelModel):
    id: int
    owner_id: int | None
    name: str
    category: Category
    muscles: list[str]
    equipment: list[str]
    instructions: str
    youtube_id: str | None = None
    created_at: datetime | None = None
