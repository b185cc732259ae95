"""
Database package - SQLAlchemy models and connections
"""

from .models import Record, UserBudget, Base
from .sqlite_db import AsyncSessionLocal, init_database

__all__ = [
    'Record',
    'UserBudget',
    'Base',
    'AsyncSessionLocal',
    'init_database'
]
