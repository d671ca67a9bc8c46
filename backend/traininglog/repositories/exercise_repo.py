from __future__ import annotations
from typing import Optional
from sqlalchemy import select, func, or_
from traininglog.constants import Category
from traininglog.models import Exercise
from traininglog.repositories.base import BaseRepository

def visible_to(user_id: int):
    return or_(Exercise.owner_id.is_(None), Exercise.owner_id == user_id)

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def get_visible(self, exercise_id: int, user_id: int) -> Optional[Exercise]:
        stmt = select(Exercise).where(Exercise.id == exercise_id, visible_to(user_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def list_visible(
        self,
        user_id: int,
        *,
        q: str | None = None,
        category: Category | None = None,
    ) -> list[Exercise]:
        stmt = select(Exercise).where(visible_to(user_id))
        if category is not None:
            stmt = stmt.where(Exercise.category == category)
        if q:
            stmt = stmt.where(func.lower(Exercise.name).contains(q.lower(), autoescape=True))
        stmt = stmt.order_by(Exercise.name.asc(), Exercise.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self,
        *,
        owner_id: int | None,
        name: str,
        category: Category,
        equipment: list[str] | None = None,
        muscles: list[str] | None = None,
        instructions: str = "",
        youtube_id: str | None = None,
    ) -> Exercise:
        ex = Exercise(
            owner_id=owner_id,
            name=name,
            category=category,
            equipment=list(equipment or []),
            muscles=list(muscles or []),
            instructions=instructions,
            youtube_id=youtube_id,
        )
        return self.add_and_refresh(ex)
