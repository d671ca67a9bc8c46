from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, Numeric, Boolean, Text, UniqueConstraint, Enum as SAEnum
from traininglog.constants import WeightUnit
from traininglog.db import Base

class SetLog(Base):
    __tablename__ = "set_logs"
    __table_args__ = (UniqueConstraint("session_exercise_id", "set_index", name="uq_set_logs_session_exercise_set_index"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_exercise_id: Mapped[int] = mapped_column(
        ForeignKey("session_exercises.id", ondelete="CASCADE"), index=True
    )
    set_index: Mapped[int] = mapped_column(Integer, nullable=False)  # 0-based
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    unit: Mapped[WeightUnit] = mapped_column(
        SAEnum(WeightUnit, name="weight_unit"), nullable=False, default=WeightUnit.lb
    )
    duration_sec: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance_meters: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    session_exercise = relationship("SessionExercise", back_populates="set_logs")
