from traininglog.models.user import User
from traininglog.models.exercise import Exercise, ExerciseScope, GlobalScope, OwnedScope
from traininglog.models.template import SessionTemplate, TemplateExercise
from traininglog.models.session import WorkoutSession, SessionExercise
from traininglog.models.set_log import SetLog

__all__ = [
    "User",
    "Exercise",
    "ExerciseScope",
    "GlobalScope",
    "OwnedScope",
    "SessionTemplate",
    "TemplateExercise",
    "WorkoutSession",
    "SessionExercise",
    "SetLog",
]
