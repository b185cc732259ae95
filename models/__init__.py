"""
Models package - Pydantic schemas and error types
"""

from .schemas import (
    TransactionType,
    CategoryLabel,
    InsightType,
    BudgetLevel,
    Transaction,
    RecordCreate,
    Insight,
    FinancialSummary,
    IncomeStats,
    ExpenseExtremes,
    SpendingRecord,
    BudgetStatus,
    BudgetUpdate,
    CategoryTotal,
    DailyTotal,
)
from .exceptions import (
    AIServiceError,
    AuthError,
    RateLimited,
    ServiceUnavailable,
    NetworkError,
    MalformedResponse,
    UnknownError,
    DatabaseError,
)

__all__ = [
    'TransactionType',
    'CategoryLabel',
    'InsightType',
    'BudgetLevel',
    'Transaction',
    'RecordCreate',
    'Insight',
    'FinancialSummary',
    'IncomeStats',
    'ExpenseExtremes',
    'SpendingRecord',
    'BudgetStatus',
    'BudgetUpdate',
    'CategoryTotal',
    'DailyTotal',
    'AIServiceError',
    'AuthError',
    'RateLimited',
    'ServiceUnavailable',
    'NetworkError',
    'MalformedResponse',
    'UnknownError',
    'DatabaseError',
]
