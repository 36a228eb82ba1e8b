"""
Profile Tasks

Celery tasks for saving, listing and deleting athlete profiles.
"""

import logging
from typing import Any, Dict, List

from ..predictions import format_duration
from ..profiles import AthleteProfile, get_profile_repository, predicted_mile
from . import app
from .prediction_tasks import run_predictions

logger = logging.getLogger(__name__)


def _profile_payload(profile: AthleteProfile) -> Dict[str, Any]:
    mile = predicted_mile(profile)
    return {
        **profile.to_dict(),
        "predicted_mile_seconds": mile,
        "predicted_mile_formatted": format_duration(mile),
    }


@app.task(name="save_profile", bind=True)
def save_profile(
    self,
    name: str,
    athlete: Dict[str, Any],
    workouts: List[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Save a named profile with freshly computed predictions.

    Args:
        name: Display name, must not be empty
        athlete: Dict with type, sex, age and pr {event, time, date}
        workouts: List of workout dicts

    Returns:
        Dict with the stored profile
    """
    logger.info(f"[Task {self.request.id}] Saving profile {name!r}")

    try:
        if not name or not name.strip():
            raise ValueError("Profile name is required")

        result = run_predictions(athlete.get("type"), athlete.get("pr") or {}, workouts)
        profile = AthleteProfile(
            name=name.strip(),
            athlete=athlete,
            workouts=list(workouts or []),
            predictions=result["predictions"],
        )
        get_profile_repository().save(profile)

        return {"success": True, "profile": _profile_payload(profile)}

    except Exception as e:
        logger.error(
            f"[Task {self.request.id}] Error saving profile {name!r}: {e}",
            exc_info=True,
        )
        return {"success": False, "error": str(e)}


@app.task(name="list_profiles")
def list_profiles() -> Dict[str, Any]:
    """List saved profiles, newest first."""
    try:
        profiles = get_profile_repository().list()
        return {"success": True, "profiles": [_profile_payload(p) for p in profiles]}
    except Exception as e:
        logger.error(f"Error listing profiles: {e}", exc_info=True)
        return {"success": False, "error": str(e)}


@app.task(name="delete_profile")
def delete_profile(profile_id: str) -> Dict[str, Any]:
    try:
        get_profile_repository().delete(profile_id)
        return {"success": True, "profile_id": profile_id}
    except Exception as e:
        logger.error(f"Error deleting profile {profile_id}: {e}", exc_info=True)
        return {"success": False, "error": str(e)}
