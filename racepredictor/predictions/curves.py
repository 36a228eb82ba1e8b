"""
Performance Curves

Two independent time-vs-distance curves:
- Baseline: Riegel extrapolation from a single PR
- Workout: synthetic power-law curve anchored on fitness proxies
"""

import math
from typing import Optional

from .athlete_types import AthleteTypeLike, weights_for
from .fitness_proxies import FitnessSnapshot

# Guard-rail proxies used when no workout supplies them
DEFAULT_MAS = 5.5  # m/s (~3:02/km)
DEFAULT_THRESHOLD = 4.2  # m/s (~3:58/km)

MIDDLE_ANCHOR_M = 1500
LONG_ANCHOR_M = 10000
SHORT_CORRECTION_MAX_M = 800

MIN_EXPONENT = 1.03
MAX_EXPONENT = 1.16


def _valid(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def riegel_predict(
    known_time: Optional[float],
    known_distance: float,
    target_distance: float,
    exponent: float,
) -> Optional[float]:
    """
    Predict race time using the Riegel formula.

    Formula: T2 = T1 * (D2/D1)^exponent

    Returns None if any time or distance is missing, non-finite or <= 0.
    """
    if not all(_valid(v) for v in (known_time, known_distance, target_distance)):
        return None
    return known_time * math.pow(target_distance / known_distance, exponent)


def workout_time_for_distance(
    distance_m: float,
    fitness: FitnessSnapshot,
    athlete_type: AthleteTypeLike,
) -> Optional[float]:
    """
    Convert fitness proxies into an expected time at a given distance.

    Builds a power-law curve t = a * d^b through two anchors:
    - 1500m from MAS (~vVO2max): t1500 = 1500 / (0.92 * MAS)
    - 10k from threshold speed: t10k = 10000 / (0.98 * T)
    The exponent is pushed toward endurance for long-weighted athlete
    types, and sub-800m times get an ASR-based speed correction.

    Args:
        distance_m: Target distance in meters
        fitness: Aggregated fitness snapshot
        athlete_type: Athlete type (enum or key)

    Returns:
        Predicted time in seconds, or None if the distance is not > 0
    """
    if not _valid(distance_m):
        return None

    short_weight, long_weight = weights_for(athlete_type)

    mas = fitness.mas if _valid(fitness.mas) else DEFAULT_MAS
    threshold = fitness.threshold if _valid(fitness.threshold) else DEFAULT_THRESHOLD
    asr = fitness.asr if _valid(fitness.asr) else mas

    t_middle = MIDDLE_ANCHOR_M / (0.92 * mas)
    t_long = LONG_ANCHOR_M / (0.98 * threshold)

    exponent = math.log(t_long / t_middle) / math.log(LONG_ANCHOR_M / MIDDLE_ANCHOR_M)
    adjusted = exponent * (0.65 + 0.35 * long_weight)
    adjusted = max(MIN_EXPONENT, min(MAX_EXPONENT, adjusted))

    scale = t_middle / math.pow(MIDDLE_ANCHOR_M, adjusted)
    predicted = scale * math.pow(distance_m, adjusted)

    if distance_m <= SHORT_CORRECTION_MAX_M:
        pure = distance_m / (0.90 * asr)  # optimistic raw from ASR
        bias = 0.35 + 0.45 * short_weight  # 0.35-0.80, speed types lean on ASR
        predicted = math.exp(bias * math.log(pure) + (1 - bias) * math.log(predicted))

    return predicted
