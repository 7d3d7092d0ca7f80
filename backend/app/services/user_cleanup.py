"""
Removal of accounts that never confirmed their email address
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)


def cleanup_unverified_users(
    db: Session,
    now: Optional[datetime] = None,
    max_age_hours: Optional[int] = None,
) -> int:
    """
    Delete unverified users created more than ``max_age_hours`` ago.

    Args:
        db: Active database session; committed on success
        now: Reference time (defaults to the current UTC time)
        max_age_hours: Verification window, defaults to
            UNVERIFIED_USER_TTL_HOURS

    Returns:
        Number of deleted users
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if max_age_hours is None:
        max_age_hours = settings.UNVERIFIED_USER_TTL_HOURS

    cutoff = now - timedelta(hours=max_age_hours)
    deleted = (
        db.query(User)
        .filter(User.is_verified.is_(False), User.created_at < cutoff)
        .delete(synchronize_session=False)
    )
    db.commit()

    if deleted:
        logger.info(f"Deleted {deleted} unverified users created before {cutoff.isoformat()}")
    else:
        logger.info("No expired unverified users to delete")
    return deleted
