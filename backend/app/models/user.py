"""
User model for admin and storefront accounts
"""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import validates

from app.models.base import BaseModel


class User(BaseModel):
    """
    Registered account; unverified accounts are purged on a schedule
    """
    __tablename__ = "users"

    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login email address"
    )

    name = Column(
        String(255),
        nullable=True,
        comment="Display name"
    )

    is_verified = Column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
        comment="Whether the email address has been confirmed"
    )

    @validates('email')
    def validate_email(self, key, value):
        if not value or '@' not in value:
            raise ValueError("A valid email address is required")
        return value.strip().lower()

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', verified={self.is_verified})>"
