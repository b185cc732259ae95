"""
Aggregations behind the statistics endpoints and the budget tracker
"""

from datetime import date
from typing import Dict, Iterable, List, Optional

from models.schemas import (
    Transaction,
    TransactionType,
    FinancialSummary,
    IncomeStats,
    ExpenseExtremes,
    SpendingRecord,
    BudgetStatus,
    BudgetLevel,
    CategoryTotal,
    DailyTotal,
)


def _amounts(transactions: Iterable[Transaction], type_: TransactionType) -> List[float]:
    return [t.amount for t in transactions if t.type == type_]


def compute_financial_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    """Sum amounts by type; net balance is derived from the two totals"""
    transactions = list(transactions)
    return FinancialSummary(
        total_income=sum(_amounts(transactions, TransactionType.INCOME)),
        total_expenses=sum(_amounts(transactions, TransactionType.EXPENSE)),
    )


def compute_income_stats(transactions: Iterable[Transaction]) -> IncomeStats:
    incomes = _amounts(transactions, TransactionType.INCOME)
    if not incomes:
        return IncomeStats()

    total = sum(incomes)
    return IncomeStats(
        total_income=total,
        average_income=total / len(incomes),
        income_count=len(incomes),
    )


def compute_expense_extremes(transactions: Iterable[Transaction]) -> ExpenseExtremes:
    """Highest and lowest single expense (0/0 when there are no expenses)"""
    expenses = _amounts(transactions, TransactionType.EXPENSE)
    if not expenses:
        return ExpenseExtremes()
    return ExpenseExtremes(best_expense=max(expenses), worst_expense=min(expenses))


def compute_spending_record(transactions: Iterable[Transaction]) -> SpendingRecord:
    """Total spent and the number of distinct days with spending"""
    expenses = [t for t in transactions if t.type == TransactionType.EXPENSE]
    total = sum(t.amount for t in expenses)
    unique_days = {t.date.date() for t in expenses if t.amount > 0}
    # never 0, callers divide by it
    return SpendingRecord(total_expense=total, days_with_records=len(unique_days) or 1)


def budget_level(percentage: float) -> BudgetLevel:
    if percentage <= 50:
        return BudgetLevel.GOOD
    if percentage <= 75:
        return BudgetLevel.MODERATE
    if percentage <= 100:
        return BudgetLevel.HIGH
    return BudgetLevel.OVER


def compute_budget_status(
    transactions: Iterable[Transaction],
    monthly_budget: float,
    today: Optional[date] = None,
) -> BudgetStatus:
    """Compare the current month's expenses with the monthly budget"""
    today = today or date.today()
    this_month = [
        t for t in transactions
        if t.date.year == today.year and t.date.month == today.month
    ]

    month_expenses = sum(_amounts(this_month, TransactionType.EXPENSE))
    month_income = sum(_amounts(this_month, TransactionType.INCOME))
    percentage = (month_expenses / monthly_budget) * 100 if monthly_budget > 0 else 0.0

    return BudgetStatus(
        monthly_budget=monthly_budget,
        month_expenses=month_expenses,
        month_income=month_income,
        percentage=percentage,
        remaining=monthly_budget - month_expenses,
        is_over_budget=monthly_budget > 0 and month_expenses > monthly_budget,
        level=budget_level(percentage),
    )


def category_breakdown(transactions: Iterable[Transaction]) -> List[CategoryTotal]:
    """Expense totals per category, largest first"""
    totals: Dict[str, float] = {}
    for t in transactions:
        if t.type == TransactionType.EXPENSE:
            totals[t.category] = totals.get(t.category, 0.0) + t.amount

    return [
        CategoryTotal(category=category, amount=amount)
        for category, amount in sorted(totals.items(), key=lambda x: x[1], reverse=True)
    ]


def daily_totals(transactions: Iterable[Transaction]) -> List[DailyTotal]:
    """Income and expense per calendar day, oldest first"""
    days: Dict[date, Dict[str, float]] = {}
    for t in transactions:
        day = days.setdefault(t.date.date(), {"income": 0.0, "expense": 0.0})
        day[t.type.value] += t.amount

    return [
        DailyTotal(date=day, total_income=values["income"], total_expense=values["expense"])
        for day, values in sorted(days.items())
    ]
