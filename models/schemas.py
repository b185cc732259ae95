"""
Pydantic schemas for data validation
"""

from datetime import datetime, date
from typing import Optional, List
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class TransactionType(str, Enum):
    """Record types"""
    INCOME = "income"
    EXPENSE = "expense"


class CategoryLabel(str, Enum):
    """Closed set of labels the classifier may return"""
    # Expense side
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    # Income side
    SALARY = "Salary"
    FREELANCE = "Freelance"
    BUSINESS = "Business"
    INVESTMENT = "Investment"
    GIFT = "Gift"
    REMITTANCE = "Remittance"
    OTHER = "Other"

    @classmethod
    def expense_labels(cls) -> List["CategoryLabel"]:
        return [
            cls.FOOD, cls.TRANSPORTATION, cls.ENTERTAINMENT, cls.SHOPPING,
            cls.BILLS, cls.HEALTHCARE, cls.EDUCATION, cls.OTHER,
        ]

    @classmethod
    def income_labels(cls) -> List["CategoryLabel"]:
        return [
            cls.SALARY, cls.FREELANCE, cls.BUSINESS, cls.INVESTMENT,
            cls.GIFT, cls.REMITTANCE, cls.OTHER,
        ]


class InsightType(str, Enum):
    """Insight severity/kind"""
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
    TIP = "tip"


class BudgetLevel(str, Enum):
    """Budget usage bands"""
    GOOD = "good"
    MODERATE = "moderate"
    HIGH = "high"
    OVER = "over"


class Transaction(BaseModel):
    """A recorded income or expense entry, read-only once fetched"""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str = Field(..., description="Record ID")
    amount: float = Field(..., ge=0, description="Amount in the configured currency")
    category: str = Field(default=CategoryLabel.OTHER.value)
    type: TransactionType
    description: str = Field(default="")
    date: datetime


class RecordCreate(BaseModel):
    """New record submitted by the user"""
    description: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    category: Optional[str] = Field(default=None, description="Classified automatically when omitted")
    type: TransactionType = TransactionType.EXPENSE
    date: datetime = Field(default_factory=datetime.now)

    @field_validator('description', mode='before')
    @classmethod
    def strip_description(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('category', mode='before')
    @classmethod
    def blank_category_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Insight(BaseModel):
    """Short observation about the user's finances"""
    id: str
    type: InsightType = InsightType.INFO
    title: str
    message: str
    action: Optional[str] = None
    confidence: float = Field(default=0.8, ge=0.0, le=1.0)


class FinancialSummary(BaseModel):
    """Totals derived from a set of records"""
    model_config = ConfigDict(frozen=True)

    total_income: float = 0.0
    total_expenses: float = 0.0

    @computed_field
    @property
    def net_balance(self) -> float:
        return self.total_income - self.total_expenses


class IncomeStats(BaseModel):
    total_income: float = 0.0
    average_income: float = 0.0
    income_count: int = 0


class ExpenseExtremes(BaseModel):
    best_expense: float = 0.0
    worst_expense: float = 0.0


class SpendingRecord(BaseModel):
    total_expense: float = 0.0
    days_with_records: int = 1


class BudgetStatus(BaseModel):
    """Current month spending against the monthly budget"""
    monthly_budget: float = 0.0
    month_expenses: float = 0.0
    month_income: float = 0.0
    percentage: float = 0.0
    remaining: float = 0.0
    is_over_budget: bool = False
    level: BudgetLevel = BudgetLevel.GOOD


class BudgetUpdate(BaseModel):
    monthly_budget: float = Field(..., gt=0)


class CategoryTotal(BaseModel):
    category: str
    amount: float


class DailyTotal(BaseModel):
    date: date
    total_income: float = 0.0
    total_expense: float = 0.0


class CategorizeRequest(BaseModel):
    description: str = Field(..., min_length=1)


class CategorizeResponse(BaseModel):
    category: CategoryLabel


class QuestionRequest(BaseModel):
    question: str = Field(..., min_length=1, description="Free-form question about the user's finances")

    @field_validator('question', mode='before')
    @classmethod
    def strip_question(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class AnswerResponse(BaseModel):
    answer: str
