"""
Celery application configuration for background tasks
"""

from celery import Celery
from app.core.config import settings

# Create Celery app instance
celery_app = Celery(
    'storefront_admin',
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=['app.tasks.cleanup_tasks'],
)

# Load configuration
celery_app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    task_track_started=True,
    task_time_limit=10 * 60,  # 10 minutes hard limit
    task_soft_time_limit=8 * 60,  # 8 minutes soft limit
)

# Beat schedule for periodic tasks
celery_app.conf.beat_schedule = {
    'cleanup-unverified-users': {
        'task': 'app.tasks.cleanup_tasks.cleanup_unverified_users',
        'schedule': settings.CLEANUP_INTERVAL_HOURS * 60 * 60,  # seconds
    },
}
