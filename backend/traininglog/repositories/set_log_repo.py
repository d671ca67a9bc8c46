from __future__ import annotations
from typing import Any, Iterable, Mapping, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from traininglog.models import SetLog
from traininglog.repositories.base import BaseRepository

UPSERT_FIELDS = (
    "reps",
    "weight",
    "unit",
    "duration_sec",
    "distance_meters",
    "rpe",
    "completed",
    "notes",
)

class SetLogRepository(BaseRepository[SetLog]):
    model = SetLog

    def get_by_key(self, session_exercise_id: int, set_index: int) -> Optional[SetLog]:
        stmt = select(SetLog).where(
            SetLog.session_exercise_id == session_exercise_id,
            SetLog.set_index == set_index,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_many(self, logs: Iterable[Mapping[str, Any]]) -> list[SetLog]:
        """
        Insert or update set logs keyed by (session_exercise_id, set_index).

        Everything is committed together. A key repeated within one batch keeps
        its last values.
        """
        staged: dict[tuple[int, int], SetLog] = {}
        for values in logs:
            key = (values["session_exercise_id"], values["set_index"])
            row = staged.get(key) or self.get_by_key(*key)
            if row is None:
                row = SetLog(session_exercise_id=key[0], set_index=key[1])
                self.db.add(row)
            for field in UPSERT_FIELDS:
                setattr(row, field, values.get(field))
            staged[key] = row

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        rows = list(staged.values())
        for row in rows:
            self.db.refresh(row)
        return rows
