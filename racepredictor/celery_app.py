"""
Celery Application Configuration

Broker and result backend come from the environment:
- CELERY_BROKER_URL / CELERY_RESULT_BACKEND, falling back to
- REDIS_URL (default redis://localhost:6379/0)
"""

from celery import Celery
import os

redis_url = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
broker_url = os.getenv('CELERY_BROKER_URL', redis_url)
result_backend = os.getenv('CELERY_RESULT_BACKEND', redis_url)

app = Celery('racepredictor', broker=broker_url, backend=result_backend)

app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    task_track_started=True,
    task_time_limit=60,
    result_expires=3600,
    task_default_queue=os.getenv('CELERY_QUEUE', 'predictions'),
)

app.autodiscover_tasks(['racepredictor.tasks'])

__all__ = ['app']
