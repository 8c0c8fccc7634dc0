"""
Storage exports for acquisition outcomes.
"""

from app.acquisition.storage.base import ProfileStorage
from app.acquisition.storage.sqlalchemy_storage import SQLAlchemyProfileStorage, open_profile_storage

__all__ = ["ProfileStorage", "SQLAlchemyProfileStorage", "open_profile_storage"]
