"""
Race Predictor Worker

This module provides:
- Race time predictions blending PR-derived Riegel curves with
  workout-derived fitness proxies (MAS / threshold / ASR)
- Storage of named athlete profiles
- Celery tasks exposing both
"""

# Delay Celery import to allow using the model without celery configured
def get_celery_app():
    from .celery_app import app
    return app

# Only export get_celery_app function, not the app directly
__all__ = ['get_celery_app']
