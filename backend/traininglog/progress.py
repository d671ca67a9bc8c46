"""
Progress rollups over logged sets.

Inputs are session-exercise rows (each with ``set_logs`` ordered by set index and
a ``session`` carrying the date), most recent session first, as returned by
``SessionRepository.exercise_history``.
"""
from __future__ import annotations
from dataclasses import dataclass
from itertools import chain, groupby
from typing import Iterable, Sequence

from traininglog.constants import RECENT_PRS_LIMIT, WeightUnit

@dataclass
class BestSet:
    reps: int
    weight: float
    unit: WeightUnit

@dataclass
class DataPoint:
    date: str
    session_id: int
    best_set: BestSet | None
    volume: float
    duration_sec: int | None
    rpe: int | None

def best_set(logs: Iterable) -> BestSet | None:
    """Heaviest set with both reps and weight. Ties keep the earlier set."""
    best: BestSet | None = None
    for log in logs:
        if log.reps is None or log.weight is None:
            continue
        weight = float(log.weight)
        if best is None or weight > best.weight:
            best = BestSet(reps=log.reps, weight=weight, unit=WeightUnit(log.unit))
    return best

def summarize(session_exercise) -> DataPoint:
    logs = session_exercise.set_logs
    volume = 0.0
    duration_sec: int | None = None
    rpe: int | None = None
    for log in logs:
        if log.reps is not None and log.weight is not None:
            volume += log.reps * float(log.weight)
        if log.duration_sec is not None:
            duration_sec = (duration_sec or 0) + log.duration_sec
        if log.rpe is not None:
            rpe = log.rpe  # last one wins
    return DataPoint(
        date=session_exercise.session.date.isoformat(),
        session_id=session_exercise.session_id,
        best_set=best_set(logs),
        volume=volume,
        duration_sec=duration_sec,
        rpe=rpe,
    )

def history(session_exercises: Sequence) -> list[DataPoint]:
    """One point per row, oldest first."""
    points = [summarize(se) for se in session_exercises]
    points.reverse()
    return points

def recent_prs(points: Sequence[DataPoint], limit: int = RECENT_PRS_LIMIT) -> list[DataPoint]:
    with_best = [p for p in points if p.best_set is not None]
    return with_best[-limit:] if limit else []

def last_best_set(session_exercises: Iterable) -> BestSet | None:
    """Best set of the most recent session that logged any reps+weight pair.

    Rows of one session are adjacent, so an exercise listed twice in a session
    competes across both rows.
    """
    for _, rows in groupby(session_exercises, key=lambda se: se.session_id):
        found = best_set(chain.from_iterable(se.set_logs for se in rows))
        if found is not None:
            return found
    return None
