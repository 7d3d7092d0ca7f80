"""
Scheduled maintenance tasks
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from app.core.database import SessionLocal
from app.services import user_cleanup
from app.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(name='app.tasks.cleanup_tasks.cleanup_unverified_users')
def cleanup_unverified_users() -> Dict[str, Any]:
    """
    Purge accounts whose email verification window has expired

    Returns:
        Dict with the number of deleted users and the run timestamp
    """
    started_at = datetime.now(timezone.utc)
    logger.info(f"[{started_at.isoformat()}] Running scheduled cleanup...")

    db = SessionLocal()
    try:
        deleted = user_cleanup.cleanup_unverified_users(db, now=started_at)
        return {
            'status': 'success',
            'deleted': deleted,
            'ran_at': started_at.isoformat(),
        }
    except Exception as e:
        logger.error(f"Scheduled cleanup failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()
