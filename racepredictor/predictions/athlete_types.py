"""
Athlete Types

Event-specialty categories and the model constants bound to each:
the Riegel exponent used for PR extrapolation and the weighting of
short-rep versus long-rep workout signals.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class AthleteType(Enum):
    """Athlete specialty, from pure speed to pure endurance"""

    SPRINT_800 = "400/800"
    EIGHT_HUNDRED = "800"
    MIDDLE_DISTANCE = "800/1500/miler"
    MILER = "1500/miler"
    MILE_5K = "1500/5000"
    FIVE_K = "5000"
    FIVE_TEN_K = "5000/10000"
    TEN_K_MARATHON = "10000/marathon"
    MARATHON = "marathon"


@dataclass(frozen=True)
class AthleteTypeConstants:
    riegel_exponent: float  # lower = better endurance scaling
    short_weight: float
    long_weight: float


AthleteTypeLike = Union[AthleteType, AthleteTypeConstants, str, None]


ATHLETE_TYPE_CONSTANTS: Dict[AthleteType, AthleteTypeConstants] = {
    AthleteType.SPRINT_800: AthleteTypeConstants(1.12, 0.70, 0.30),
    AthleteType.EIGHT_HUNDRED: AthleteTypeConstants(1.10, 0.65, 0.35),
    AthleteType.MIDDLE_DISTANCE: AthleteTypeConstants(1.085, 0.58, 0.42),
    AthleteType.MILER: AthleteTypeConstants(1.08, 0.52, 0.48),
    AthleteType.MILE_5K: AthleteTypeConstants(1.07, 0.45, 0.55),
    AthleteType.FIVE_K: AthleteTypeConstants(1.065, 0.38, 0.62),
    AthleteType.FIVE_TEN_K: AthleteTypeConstants(1.06, 0.32, 0.68),
    AthleteType.TEN_K_MARATHON: AthleteTypeConstants(1.055, 0.25, 0.75),
    AthleteType.MARATHON: AthleteTypeConstants(1.05, 0.18, 0.82),
}

# Used for legacy or unknown type keys
DEFAULT_CONSTANTS = AthleteTypeConstants(1.08, 0.5, 0.5)


def _validate_constants() -> None:
    missing = set(AthleteType) - set(ATHLETE_TYPE_CONSTANTS)
    if missing:
        raise ValueError(
            f"Missing constants for athlete types: {sorted(t.value for t in missing)}"
        )
    for athlete_type, constants in ATHLETE_TYPE_CONSTANTS.items():
        if not 1.05 <= constants.riegel_exponent <= 1.12:
            raise ValueError(
                f"Riegel exponent out of range for {athlete_type.value}: "
                f"{constants.riegel_exponent}"
            )
        if abs(constants.short_weight + constants.long_weight - 1.0) > 1e-9:
            raise ValueError(f"Weights for {athlete_type.value} do not sum to 1")


_validate_constants()


def resolve_athlete_type(
    athlete_type: Union[AthleteType, str, None]
) -> Optional[AthleteType]:
    """Resolve an enum member or its string key; None if unknown."""
    if isinstance(athlete_type, AthleteType):
        return athlete_type
    try:
        return AthleteType(athlete_type)
    except ValueError:
        return None


def constants_for(athlete_type: AthleteTypeLike) -> AthleteTypeConstants:
    """
    Look up the model constants for an athlete type.

    Already-resolved constants pass through unchanged. Unknown keys fall
    back to exponent 1.08 with a 0.5/0.5 weight split.
    """
    if isinstance(athlete_type, AthleteTypeConstants):
        return athlete_type
    resolved = resolve_athlete_type(athlete_type)
    if resolved is None:
        logger.warning(f"Unknown athlete type {athlete_type!r}, using defaults")
        return DEFAULT_CONSTANTS
    return ATHLETE_TYPE_CONSTANTS[resolved]


def exponent_for(athlete_type: AthleteTypeLike) -> float:
    return constants_for(athlete_type).riegel_exponent


def weights_for(athlete_type: AthleteTypeLike) -> tuple:
    """Return the (short_weight, long_weight) pair."""
    constants = constants_for(athlete_type)
    return constants.short_weight, constants.long_weight
