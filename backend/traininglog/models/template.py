from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, Numeric, String, Text, DateTime, Enum as SAEnum, func
from traininglog.constants import Category
from traininglog.db import Base

def _num(v: float) -> str:
    # 135.0 -> "135", 22.5 -> "22.5"
    return str(int(v)) if float(v).is_integer() else str(v)

class SessionTemplate(Base):
    __tablename__ = "session_templates"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[Category] = mapped_column(SAEnum(Category, name="exercise_category"), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="templates")
    # sessions outlive their template; the ORM nulls template_id like ON DELETE SET NULL
    sessions = relationship("WorkoutSession", back_populates="template")
    exercises = relationship(
        "TemplateExercise",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateExercise.order",
    )

class TemplateExercise(Base):
    __tablename__ = "template_exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    template_id: Mapped[int] = mapped_column(ForeignKey("session_templates.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id", ondelete="CASCADE"), index=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    default_sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_weight: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    default_duration_sec: Mapped[int | None] = mapped_column(Integer, nullable=True)

    template = relationship("SessionTemplate", back_populates="exercises")
    exercise = relationship("Exercise", back_populates="template_exercises")

    def default_notes(self) -> str | None:
        """Human-readable prescription copied onto a session exercise, e.g. "3x10 @ 135"."""
        if self.default_reps is not None:
            sets = "" if self.default_sets is None else str(self.default_sets)
            weight = "" if self.default_weight is None else _num(self.default_weight)
            return f"{sets}x{self.default_reps} @ {weight}"
        if self.default_duration_sec is not None:
            return f"{self.default_duration_sec}s"
        return None
