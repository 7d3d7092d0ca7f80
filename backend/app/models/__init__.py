"""
Database models package
"""

from .base import Base, BaseModel
from .product import Product
from .user import User

__all__ = ["Base", "BaseModel", "Product", "User"]
