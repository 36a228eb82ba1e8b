"""
Race Time Prediction Tasks

Celery tasks wrapping the prediction model for JSON payloads.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ..predictions import (
    format_duration,
    parse_duration,
    PersonalRecord,
    RacePredictor,
    Workout,
)
from . import app

logger = logging.getLogger(__name__)


def parse_personal_record(pr: Dict[str, Any]) -> PersonalRecord:
    """
    Build a PersonalRecord from a payload.

    Accepts either an event key ({"event": "1500", "time": "4:00.0"})
    or an explicit distance ({"distance_m": 1500, "time": "4:00.0"}).
    """
    if not pr or "time" not in pr:
        raise ValueError("PR requires a time")

    if pr.get("event") is not None:
        return PersonalRecord.from_event(str(pr["event"]), pr["time"], pr.get("date"))

    distance = pr.get("distance_m")
    if distance is None:
        raise ValueError("PR requires an event or a distance")
    return PersonalRecord(
        distance_m=float(distance),
        time_seconds=parse_duration(pr["time"]),
        date=pr.get("date"),
    )


def run_predictions(
    athlete_type: str,
    pr: Dict[str, Any],
    workouts: Optional[List[Dict[str, Any]]],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Compute serializable predictions for one athlete payload."""
    personal_record = parse_personal_record(pr)
    workout_records = [Workout.from_dict(w) for w in workouts or []]

    predictor = RacePredictor(athlete_type)
    predictions = predictor.predict(personal_record, workout_records, today=today)
    summary = predictor.summary(workout_records, today=today)

    return {
        "athlete_type": athlete_type,
        "pr": {
            "event": personal_record.event,
            "distance_m": personal_record.distance_m,
            "time_seconds": personal_record.time_seconds,
            "time_formatted": format_duration(personal_record.time_seconds),
        },
        "fitness": summary["fitness"],
        "confidence": summary["confidence"],
        "data_weight": summary["data_weight"],
        "predictions": [
            {
                **p.to_dict(),
                "baseline_formatted": format_duration(p.baseline_seconds),
                "workout_formatted": format_duration(p.workout_seconds),
                "blended_formatted": format_duration(p.blended_seconds),
            }
            for p in predictions
        ],
    }


@app.task(name="predict_race_times", bind=True)
def predict_race_times(
    self,
    athlete_type: str,
    pr: Dict[str, Any],
    workouts: List[Dict[str, Any]] = None,
    today_iso: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Predict times for all standard events.

    Args:
        athlete_type: Athlete type key, e.g. "1500/miler"
        pr: Personal record with "event" (or "distance_m"), "time" and "date"
        workouts: List of workout dicts (reps, rep_distance_m, rep_time,
            rest_seconds, date)
        today_iso: Optional reference date for recency weighting

    Returns:
        Dict with fitness snapshot, blend weight and per-event predictions
    """
    logger.info(
        f"[Task {self.request.id}] Predicting race times for type={athlete_type}, "
        f"{len(workouts or [])} workouts"
    )

    try:
        today = date.fromisoformat(today_iso) if today_iso else None
        result = run_predictions(athlete_type, pr, workouts, today=today)

        if not result["predictions"]:
            logger.info(f"[Task {self.request.id}] PR time is invalid, no predictions")

        return {"success": True, **result}

    except Exception as e:
        logger.error(
            f"[Task {self.request.id}] Error predicting race times: {e}",
            exc_info=True,
        )
        return {"success": False, "error": str(e)}
