from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from traininglog.constants import Category
from traininglog.models import SessionTemplate, TemplateExercise
from traininglog.repositories.base import BaseRepository

class TemplateRepository(BaseRepository[SessionTemplate]):
    model = SessionTemplate

    def get_owned(self, template_id: int, owner_id: int) -> Optional[SessionTemplate]:
        stmt = select(SessionTemplate).where(
            SessionTemplate.id == template_id,
            SessionTemplate.owner_id == owner_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_owner(self, owner_id: int) -> list[SessionTemplate]:
        stmt = (
            select(SessionTemplate)
            .where(SessionTemplate.owner_id == owner_id)
            .order_by(SessionTemplate.created_at.desc(), SessionTemplate.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, owner_id: int, *, title: str, category: Category, notes: str | None = None) -> SessionTemplate:
        return self.add_and_refresh(
            SessionTemplate(owner_id=owner_id, title=title, category=category, notes=notes)
        )

    def add_exercise(
        self,
        template: SessionTemplate,
        *,
        exercise_id: int,
        order: int,
        default_sets: int | None = None,
        default_reps: int | None = None,
        default_weight: float | None = None,
        default_duration_sec: int | None = None,
    ) -> TemplateExercise:
        te = TemplateExercise(
            template_id=template.id,
            exercise_id=exercise_id,
            order=order,
            default_sets=default_sets,
            default_reps=default_reps,
            default_weight=default_weight,
            default_duration_sec=default_duration_sec,
        )
        self.db.add(te)
        self.db.commit()
        self.db.refresh(te)
        return te

    def get_exercise(self, template_exercise_id: int, template_id: int) -> Optional[TemplateExercise]:
        stmt = select(TemplateExercise).where(
            TemplateExercise.id == template_exercise_id,
            TemplateExercise.template_id == template_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()
