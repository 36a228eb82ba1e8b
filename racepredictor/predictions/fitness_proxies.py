"""
Fitness Proxies

Converts interval workouts into speed proxies for three physiological
markers and aggregates them with exponential recency weighting:
- MAS (maximum aerobic speed) from short reps (<= 600m)
- Threshold speed from long reps (>= 800m)
- ASR (anaerobic speed reserve) reference from near-400m reps (300-500m)
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from .time_format import parse_duration
from .workouts import DateLike, Workout

logger = logging.getLogger(__name__)

RECENCY_HALF_LIFE_DAYS = 21

SHORT_REP_MAX_M = 600
LONG_REP_MIN_M = 800
ASR_REP_RANGE_M = (300, 500)


@dataclass(frozen=True)
class WorkoutProxies:
    """Speed proxies (m/s) from a single workout; None if not applicable"""

    mas: Optional[float]
    threshold: Optional[float]
    asr: Optional[float]


@dataclass(frozen=True)
class FitnessSnapshot:
    """Recency-weighted fitness proxies (m/s); None means no contributing workouts"""

    mas: Optional[float] = None
    threshold: Optional[float] = None
    asr: Optional[float] = None

    @property
    def data_backed(self) -> bool:
        """True if at least one proxy comes from real workouts."""
        return any(v is not None for v in (self.mas, self.threshold, self.asr))


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Parse a date/datetime/ISO string; None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
    except ValueError:
        return None


def decay_weight(
    when: Optional[DateLike],
    half_life_days: float = RECENCY_HALF_LIFE_DAYS,
    today: Optional[date] = None,
) -> float:
    """
    Exponential recency weight: 0.5 ** (age_days / half_life_days).

    Unparseable dates weigh 0. Future dates are clamped to 1.0, i.e.
    treated as maximally recent.
    """
    parsed = parse_date(when)
    if parsed is None:
        return 0.0

    today = today or date.today()
    age_days = (today - parsed).days
    weight = 0.5 ** (age_days / half_life_days)
    return max(0.0, min(1.0, weight))


def proxies_from_workout(workout: Workout) -> Optional[WorkoutProxies]:
    """
    Extract speed proxies from a single workout.

    Returns None if the rep time cannot be parsed or the rep
    distance/time/rest values are out of range.
    """
    rep_seconds = parse_duration(workout.rep_time)
    if rep_seconds is None or rep_seconds <= 0:
        logger.debug(f"Skipping workout {workout.id}: invalid rep time {workout.rep_time!r}")
        return None

    distance = workout.rep_distance_m
    rest = workout.rest_seconds or 0
    if not distance or distance <= 0 or rest < 0:
        logger.debug(f"Skipping workout {workout.id}: invalid distance or rest")
        return None

    rep_speed = distance / rep_seconds  # m/s
    work_rest = rest / rep_seconds

    # More rest relative to work => closer to true rep speed, maps into (0, 1]
    recovery_attenuation = 1 / (1 + 0.6 / (work_rest + 0.05))

    mas = None
    if distance <= SHORT_REP_MAX_M:
        mas = rep_speed * (0.86 + 0.12 * recovery_attenuation)

    threshold = None
    if distance >= LONG_REP_MIN_M:
        # Less rest => more threshold-like
        threshold = rep_speed * (0.74 + 0.20 * (1 - math.tanh(work_rest)))

    asr = None
    if ASR_REP_RANGE_M[0] <= distance <= ASR_REP_RANGE_M[1]:
        asr = rep_speed

    return WorkoutProxies(mas=mas, threshold=threshold, asr=asr)


def _weighted_average(values_weights: List[Tuple[float, float]]) -> Optional[float]:
    total_w = sum(w for _, w in values_weights)
    if total_w <= 0:
        return None
    return sum(v * w for v, w in values_weights) / total_w


def aggregate_fitness(
    workouts: Iterable[Workout], today: Optional[date] = None
) -> FitnessSnapshot:
    """
    Aggregate workouts into a fitness snapshot.

    Each proxy is averaged independently over the workouts that produce
    it, weighted by recency. Proxies without contributions stay None.
    """
    mas: List[Tuple[float, float]] = []
    threshold: List[Tuple[float, float]] = []
    asr: List[Tuple[float, float]] = []

    for workout in workouts:
        proxies = proxies_from_workout(workout)
        if proxies is None:
            continue
        weight = decay_weight(workout.date, today=today)
        if proxies.mas is not None:
            mas.append((proxies.mas, weight))
        if proxies.threshold is not None:
            threshold.append((proxies.threshold, weight))
        if proxies.asr is not None:
            asr.append((proxies.asr, weight))

    return FitnessSnapshot(
        mas=_weighted_average(mas),
        threshold=_weighted_average(threshold),
        asr=_weighted_average(asr),
    )
