"""SQLAlchemy integration for the pagination engine.

Usage:
    from pagination_service.core.database import BaseRepository, SelectQueryable
"""

from pagination_service.core.database.queryable import SelectQueryable
from pagination_service.core.database.repository import BaseRepository

__all__ = [
    "BaseRepository",
    "SelectQueryable",
]
