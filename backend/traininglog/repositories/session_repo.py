from __future__ import annotations
import datetime as dt
from typing import Optional
from sqlalchemy import select
from traininglog.constants import Category
from traininglog.models import WorkoutSession, SessionExercise
from traininglog.repositories.base import BaseRepository

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def get_owned(self, session_id: int, owner_id: int) -> Optional[WorkoutSession]:
        # filtered by owner so another user's row looks exactly like a missing one
        stmt = select(WorkoutSession).where(
            WorkoutSession.id == session_id,
            WorkoutSession.owner_id == owner_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_owner(
        self,
        owner_id: int,
        *,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.owner_id == owner_id)
        if date_from is not None:
            stmt = stmt.where(WorkoutSession.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(WorkoutSession.date <= date_to)
        stmt = stmt.order_by(WorkoutSession.date.desc(), WorkoutSession.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self,
        owner_id: int,
        *,
        title: str,
        category: Category,
        date: dt.date,
        notes: str | None = None,
        template_id: int | None = None,
        exercises: list[SessionExercise] | None = None,
    ) -> WorkoutSession:
        sess = WorkoutSession(
            owner_id=owner_id,
            title=title,
            category=category,
            date=date,
            notes=notes,
            template_id=template_id,
            exercises=list(exercises or []),
        )
        return self.add_and_refresh(sess)

    def add_exercise(
        self, sess: WorkoutSession, *, exercise_id: int, order: int, notes: str | None = None
    ) -> SessionExercise:
        se = SessionExercise(session_id=sess.id, exercise_id=exercise_id, order=order, notes=notes)
        self.db.add(se)
        self.db.commit()
        self.db.refresh(se)
        return se

    def exercise_history(
        self, exercise_id: int, owner_id: int, *, limit: int | None = None
    ) -> list[SessionExercise]:
        """Caller's session-exercise rows for one exercise, most recent session first."""
        stmt = (
            select(SessionExercise)
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)
            .where(
                SessionExercise.exercise_id == exercise_id,
                WorkoutSession.owner_id == owner_id,
            )
            .order_by(WorkoutSession.date.desc(), WorkoutSession.id.desc(), SessionExercise.order.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())
