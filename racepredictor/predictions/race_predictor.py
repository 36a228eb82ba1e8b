"""
Race Predictor

Predicts race times across the standard running events by blending a
PR-derived Riegel curve with a workout-derived fitness curve.
"""

import logging
import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from .athlete_types import (
    AthleteType,
    AthleteTypeLike,
    constants_for,
    exponent_for,
    resolve_athlete_type,
)
from .curves import riegel_predict, workout_time_for_distance
from .fitness_proxies import (
    aggregate_fitness,
    decay_weight,
    FitnessSnapshot,
)
from .time_format import parse_duration
from .workouts import DateLike, Workout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RaceEvent:
    key: str
    distance_m: float


# Fixed, ordered set of predicted events
EVENTS: List[RaceEvent] = [
    RaceEvent("400", 400),
    RaceEvent("800", 800),
    RaceEvent("1500", 1500),
    RaceEvent("mile", 1609),
    RaceEvent("3000", 3000),
    RaceEvent("5000", 5000),
    RaceEvent("10000", 10000),
    RaceEvent("half", 21097.5),
    RaceEvent("marathon", 42195),
]

EVENTS_BY_KEY: Dict[str, RaceEvent] = {event.key: event for event in EVENTS}

MAX_CONFIDENCE = 0.9
MIN_DATA_WEIGHT = 0.25
MAX_DATA_WEIGHT = 0.85


@dataclass(frozen=True)
class PersonalRecord:
    """A known race performance"""

    distance_m: float
    time_seconds: Optional[float]  # None if the entered time was unparseable
    date: Optional[DateLike] = None
    event: Optional[str] = None

    @classmethod
    def from_event(
        cls, event: str, time_text: str, when: Optional[DateLike] = None
    ) -> "PersonalRecord":
        """Build a PR from an event key ("1500", "mile", ...) and a time string."""
        if event not in EVENTS_BY_KEY:
            raise ValueError(f"Unknown event: {event!r}")
        return cls(
            distance_m=EVENTS_BY_KEY[event].distance_m,
            time_seconds=parse_duration(time_text),
            date=when,
            event=event,
        )


@dataclass(frozen=True)
class BlendResult:
    """Both curves and their blend for one target distance"""

    base: Optional[float]
    wkt: Optional[float]
    blended: Optional[float]
    fitness: FitnessSnapshot
    data_weight: float
    confidence: float


@dataclass
class EventPrediction:
    """Prediction result for one standard event"""

    event: str
    distance_m: float
    baseline_seconds: Optional[float]
    workout_seconds: Optional[float]
    blended_seconds: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _safe_log(x: float) -> float:
    return math.log(max(1e-6, x))


def workout_confidence(
    workouts: Sequence[Workout], today: Optional[date] = None
) -> float:
    """Mean recency weight of the workout list scaled into [0, 0.9]."""
    recent_weight = sum(decay_weight(w.date, today=today) for w in workouts)
    confidence = recent_weight / max(1, len(workouts)) * MAX_CONFIDENCE
    return max(0.0, min(MAX_CONFIDENCE, confidence))


def data_weight_for(confidence: float) -> float:
    """Blend weight toward workouts; the baseline always keeps >= 15%."""
    return max(MIN_DATA_WEIGHT, min(MAX_DATA_WEIGHT, MIN_DATA_WEIGHT + 0.6 * confidence))


def blend_predictions(
    pr_time: Optional[float],
    pr_distance: float,
    target_distance: float,
    athlete_type: AthleteTypeLike,
    workouts: Sequence[Workout],
    today: Optional[date] = None,
) -> BlendResult:
    """
    Blend PR-derived and workout-derived predictions for one distance.

    The blend is geometric: exp(w * ln(wkt) + (1 - w) * ln(base)), so the
    result always lies between the two curves.

    Args:
        pr_time: PR time in seconds (None if invalid)
        pr_distance: PR distance in meters
        target_distance: Distance to predict, in meters
        athlete_type: Athlete type (enum or key)
        workouts: Recent interval workouts
        today: Reference date for recency weighting

    Returns:
        BlendResult; base and blended are None if the PR is invalid,
        wkt and blended are None if the target distance is invalid
    """
    base = riegel_predict(pr_time, pr_distance, target_distance, exponent_for(athlete_type))

    fitness = aggregate_fitness(workouts, today=today)
    wkt = workout_time_for_distance(target_distance, fitness, athlete_type)

    confidence = workout_confidence(workouts, today=today)
    data_weight = data_weight_for(confidence)

    blended = None
    if base is not None and wkt is not None:
        blended = math.exp(
            data_weight * _safe_log(wkt) + (1 - data_weight) * _safe_log(base)
        )

    return BlendResult(
        base=base,
        wkt=wkt,
        blended=blended,
        fitness=fitness,
        data_weight=data_weight,
        confidence=confidence,
    )


class RacePredictor:
    """
    Predicts times for every standard event from one PR and a
    workout history. Holds only the athlete type; each call is
    recomputed from its arguments.
    """

    def __init__(self, athlete_type: Union[AthleteType, str, None] = AthleteType.MILER):
        self.athlete_type = resolve_athlete_type(athlete_type) or athlete_type
        # Resolved once so unknown types warn once per predictor
        self.constants = constants_for(athlete_type)

    def predict(
        self,
        personal_record: PersonalRecord,
        workouts: Sequence[Workout],
        today: Optional[date] = None,
    ) -> List[EventPrediction]:
        """
        Generate predictions for all standard events.

        Returns an empty list if the PR time is invalid.
        """
        if personal_record.time_seconds is None or not math.isfinite(
            personal_record.time_seconds
        ):
            return []

        results: List[EventPrediction] = []
        for event in EVENTS:
            blend = blend_predictions(
                personal_record.time_seconds,
                personal_record.distance_m,
                event.distance_m,
                self.constants,
                workouts,
                today=today,
            )
            results.append(
                EventPrediction(
                    event=event.key,
                    distance_m=event.distance_m,
                    baseline_seconds=blend.base,
                    workout_seconds=blend.wkt,
                    blended_seconds=blend.blended,
                )
            )

        return results

    def summary(
        self,
        workouts: Sequence[Workout],
        today: Optional[date] = None,
    ) -> Dict[str, Any]:
        """Fitness snapshot and blend weight shared by every event."""
        fitness = aggregate_fitness(workouts, today=today)
        confidence = workout_confidence(workouts, today=today)
        return {
            "fitness": {**asdict(fitness), "data_backed": fitness.data_backed},
            "confidence": confidence,
            "data_weight": data_weight_for(confidence),
        }


def create_predictor_from_profile(
    athlete_data: Optional[Dict[str, Any]],
) -> RacePredictor:
    """
    Create a predictor from the athlete section of a profile.

    Args:
        athlete_data: Dict with an optional "type" key

    Returns:
        Configured RacePredictor
    """
    if not athlete_data:
        return RacePredictor()
    return RacePredictor(athlete_type=athlete_data.get("type", AthleteType.MILER))
