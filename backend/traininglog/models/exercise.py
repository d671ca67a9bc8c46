from dataclasses import dataclass
from datetime import datetime
from typing import Union
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Text, JSON, DateTime, Enum as SAEnum, func
from traininglog.constants import Category
from traininglog.db import Base


@dataclass(frozen=True)
class GlobalScope:
    """Shared catalog entry: any user may read and edit it, nobody may delete it."""

    def can_view(self, user_id: int) -> bool:
        return True

    def can_edit(self, user_id: int) -> bool:
        return True

    def can_delete(self, user_id: int) -> bool:
        return False


@dataclass(frozen=True)
class OwnedScope:
    """Custom exercise that belongs to a single user."""
    owner_id: int

    def can_view(self, user_id: int) -> bool:
        return user_id == self.owner_id

    def can_edit(self, user_id: int) -> bool:
        return user_id == self.owner_id

    def can_delete(self, user_id: int) -> bool:
        return user_id == self.owner_id


ExerciseScope = Union[GlobalScope, OwnedScope]


class Exercise(Base):
    __tablename__ = "exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # NULL owner marks a global exercise
    owner_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    category: Mapped[Category] = mapped_column(
        SAEnum(Category, name="exercise_category"), nullable=False, index=True
    )
    muscles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    equipment: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    youtube_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="exercises")
    session_exercises = relationship("SessionExercise", back_populates="exercise", cascade="all, delete-orphan")
    template_exercises = relationship("TemplateExercise", back_populates="exercise", cascade="all, delete-orphan")

    @property
    def scope(self) -> ExerciseScope:
        if self.owner_id is None:
            return GlobalScope()
        return OwnedScope(self.owner_id)
