"""
Services package - Business logic and external integrations
"""

from .ai_client import AIClient, classify_error, with_retry
from .insight_service import InsightService, get_insight_service
from .database_service import database_service, DatabaseService

__all__ = [
    'AIClient',
    'classify_error',
    'with_retry',
    'InsightService',
    'get_insight_service',
    'database_service',
    'DatabaseService'
]
