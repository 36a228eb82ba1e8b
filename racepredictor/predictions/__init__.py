"""
Predictions Module

Race time prediction from a PR and recent interval workouts.
"""

from .athlete_types import (
    AthleteType,
    constants_for,
    exponent_for,
    weights_for,
)
from .curves import riegel_predict, workout_time_for_distance
from .fitness_proxies import (
    aggregate_fitness,
    decay_weight,
    FitnessSnapshot,
    proxies_from_workout,
    WorkoutProxies,
)
from .race_predictor import (
    blend_predictions,
    BlendResult,
    create_predictor_from_profile,
    EventPrediction,
    EVENTS,
    PersonalRecord,
    RacePredictor,
)
from .time_format import format_duration, parse_duration
from .workouts import (
    delete_workout,
    demo_workouts,
    new_id,
    new_workout,
    update_workout,
    Workout,
)

__all__ = [
    "RacePredictor",
    "PersonalRecord",
    "EventPrediction",
    "BlendResult",
    "EVENTS",
    "blend_predictions",
    "create_predictor_from_profile",
    "AthleteType",
    "constants_for",
    "exponent_for",
    "weights_for",
    "riegel_predict",
    "workout_time_for_distance",
    "FitnessSnapshot",
    "WorkoutProxies",
    "aggregate_fitness",
    "decay_weight",
    "proxies_from_workout",
    "parse_duration",
    "format_duration",
    "Workout",
    "new_id",
    "new_workout",
    "update_workout",
    "delete_workout",
    "demo_workouts",
]
