"""
Race Predictor Worker Tasks Package
"""

from ..celery_app import app

# Import all tasks to ensure they're registered with Celery
from .prediction_tasks import predict_race_times
from .profile_tasks import delete_profile, list_profiles, save_profile

__all__ = [
    "app",
    "predict_race_times",
    "save_profile",
    "list_profiles",
    "delete_profile",
]
