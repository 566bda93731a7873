"""
ROUTEBIND Database Support

Provides database connection management and routable base models.
"""

from routebind.db.connection import DatabaseManager, db
from routebind.db.models import Model, Base, SoftDeletes

__all__ = [
    "DatabaseManager",
    "db",
    "Model",
    "Base",
    "SoftDeletes",
]
