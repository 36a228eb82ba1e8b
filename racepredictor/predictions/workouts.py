"""
Workout Records

Interval workout records plus helpers for creating, editing and
removing them. Edits always return new records and lists.
"""

import uuid
from dataclasses import asdict, dataclass, replace
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Union

DateLike = Union[date, str]


def new_id() -> str:
    """Unique identifier for workouts and saved profiles."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Workout:
    """A single interval session, e.g. 6 x 400m in 62.0 with 60s rest"""

    id: str
    reps: int  # informational only
    rep_distance_m: float
    rep_time: str  # "SS.f" / "M:SS.f"
    rest_seconds: float
    date: DateLike

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if isinstance(self.date, date):
            data["date"] = self.date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workout":
        """
        Build a workout from a task/profile payload.

        Accepts both snake_case keys and the camelCase keys
        (repDistanceM, repTimeStr, restSeconds) sent by the web client.
        """
        rep_distance = data.get("rep_distance_m", data.get("repDistanceM"))
        rep_time = data.get("rep_time", data.get("repTimeStr"))
        if rep_distance is None or rep_time is None:
            raise ValueError("Workout requires a rep distance and a rep time")
        rest = data.get("rest_seconds", data.get("restSeconds"))

        return cls(
            id=data.get("id") or new_id(),
            reps=int(data.get("reps") or 0),
            rep_distance_m=float(rep_distance),
            rep_time=str(rep_time),
            rest_seconds=float(rest or 0),
            date=data.get("date") or date.today().isoformat(),
        )


def new_workout(today: Optional[date] = None) -> Workout:
    """Default workout for a freshly added row: 4 x 400m in 65.0, 60s rest."""
    today = today or date.today()
    return Workout(
        id=new_id(),
        reps=4,
        rep_distance_m=400,
        rep_time="65.0",
        rest_seconds=60,
        date=today.isoformat(),
    )


def update_workout(
    workouts: List[Workout], workout_id: str, **changes: Any
) -> List[Workout]:
    """Return a new list with the matching workout's fields replaced."""
    return [
        replace(workout, **changes) if workout.id == workout_id else workout
        for workout in workouts
    ]


def delete_workout(workouts: List[Workout], workout_id: str) -> List[Workout]:
    return [workout for workout in workouts if workout.id != workout_id]


def demo_workouts(today: Optional[date] = None) -> List[Workout]:
    """Representative training block used to seed a new session."""
    today = today or date.today()

    def days_ago(days: int) -> str:
        return (today - timedelta(days=days)).isoformat()

    return [
        Workout(new_id(), 6, 400, "62.0", 60, days_ago(7)),
        Workout(new_id(), 4, 300, "45.0", 90, days_ago(10)),
        Workout(new_id(), 5, 1000, "2:50", 90, days_ago(21)),
        Workout(new_id(), 3, 2000, "5:54", 120, days_ago(30)),
    ]
