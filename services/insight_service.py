"""
AI insights, categorization and Q&A over a user's records
"""

import json
import uuid
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Sequence

from loguru import logger

from config.settings import Settings, get_settings
from models.exceptions import AIServiceError, MalformedResponse
from models.schemas import CategoryLabel, FinancialSummary, Insight, InsightType, Transaction
from services.ai_client import AIClient, classify_error
from services.analytics import compute_financial_summary
from utils.helpers import CustomJSONEncoder, clean_label, extract_json_array, format_currency


DEFAULT_INSIGHT_TITLE = "Budget Insight"
DEFAULT_INSIGHT_MESSAGE = "Financial analysis complete"
DEFAULT_CONFIDENCE = 0.8

ANSWER_APOLOGY = "Your financial data is still being tracked and you can try asking again in a moment."
ANSWER_NOT_CONFIGURED = (
    "API key not configured. Please set up your AI API key to enable AI-powered financial insights."
)

REGION_HINTS: Dict[str, List[str]] = {
    "Nepal": [
        "Average monthly salary in Nepal ranges from {salary_low} to {salary_high}+",
        "Basic living expenses in Nepal: Food {food_low}-{food_high}/month, Rent {rent_low}-{rent_high}/month",
        "Transportation: Bus fare {bus_low}-{bus_high}, Taxi {taxi_low}-{taxi_high} per trip",
    ],
}

REGION_HINT_AMOUNTS = {
    "salary_low": 15000, "salary_high": 100000,
    "food_low": 8000, "food_high": 15000,
    "rent_low": 5000, "rent_high": 25000,
    "bus_low": 15, "bus_high": 50,
    "taxi_low": 100, "taxi_high": 500,
}


class InsightService:
    """Best-effort AI features; every public method returns a usable value and never raises"""

    def __init__(self, client: AIClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or client.settings
        self.symbol = self.settings.currency_symbol
        self.currency = self.settings.currency_code
        self.region = self.settings.region_name

    def _fmt(self, amount: float) -> str:
        return format_currency(amount, self.symbol)

    # Insights

    async def generate_insights(self, transactions: Iterable[Transaction]) -> List[Insight]:
        """Generate 3 insights for the given records, falling back to static ones on any failure"""
        transactions = list(transactions)

        if not transactions:
            logger.info("⚠️ No records provided, returning default insights")
            return self.default_insights()

        if not self.client.is_configured:
            logger.error("❌ AI API key not configured, returning default insights")
            return self.default_insights()

        try:
            summary = compute_financial_summary(transactions)
            logger.info(
                f"💰 Summary - Income: {self._fmt(summary.total_income)}, "
                f"Expenses: {self._fmt(summary.total_expenses)}, Balance: {self._fmt(summary.net_balance)}"
            )

            prompt = self._create_insights_prompt(transactions, summary)

            logger.info(f"🧠 Generating insights for {len(transactions)} records with {self.client.model}")
            ai_response = await self.client.complete(
                system=(
                    f"You are a {self.region} financial advisor. Respond only with a valid JSON array "
                    f"of budget insights using {self.currency} currency ({self.symbol}). "
                    f"Keep responses practical for the {self.region} economy."
                ),
                prompt=prompt,
                temperature=0.6,
                max_tokens=800,
            )
            logger.debug(f"AI response received: {ai_response[:200]}")

            insights = self._parse_insights(ai_response)
            logger.info(f"✅ Generated {len(insights)} insights")
            return insights

        except Exception as e:
            error = classify_error(e)
            logger.error(f"❌ Error generating insights: {error.__class__.__name__}: {error}")
            return self._error_insights(error)

    def _create_insights_prompt(self, transactions: Sequence[Transaction], summary: FinancialSummary) -> str:
        """Build the insights prompt from the summary and a sample of records"""
        sample = transactions[:self.settings.insight_sample_size]

        return f"""Analyze this {self.region} financial data in {self.currency} and provide exactly 3 insights as a JSON array:

TOTALS: Income {self._fmt(summary.total_income)}, Expenses {self._fmt(summary.total_expenses)}, Balance {self._fmt(summary.net_balance)}

DATA: {self._format_transactions_for_ai(sample)}

Return JSON array format:
[
  {{
    "type": "warning",
    "title": "Short title",
    "message": "Message with {self.symbol} amounts and {self.region} context",
    "action": "What to do next",
    "confidence": 0.85
  }}
]

Use types: warning, info, success, tip. Always include amounts like {self._fmt(5000)}. Focus on {self.region} cost of living."""

    def _parse_insights(self, ai_response: str) -> List[Insight]:
        """Parse the model reply into Insight objects"""
        data = extract_json_array(ai_response)

        insights = [self._coerce_insight(item) for item in data if isinstance(item, dict)]
        if not insights:
            raise MalformedResponse("AI reply contained no insight objects")

        return insights

    def _coerce_insight(self, raw: Dict[str, Any]) -> Insight:
        try:
            insight_type = InsightType(raw.get("type"))
        except (ValueError, TypeError):
            insight_type = InsightType.INFO

        title = raw.get("title")
        message = raw.get("message")
        action = raw.get("action")

        return Insight(
            id=f"ai-{uuid.uuid4().hex}",
            type=insight_type,
            title=title.strip() if isinstance(title, str) and title.strip() else DEFAULT_INSIGHT_TITLE,
            message=message.strip() if isinstance(message, str) and message.strip() else DEFAULT_INSIGHT_MESSAGE,
            action=action.strip() if isinstance(action, str) and action.strip() else None,
            confidence=_coerce_confidence(raw.get("confidence")),
        )

    def default_insights(self) -> List[Insight]:
        """Static insights used when the AI cannot produce any"""
        return [
            Insight(
                id="default-1",
                type=InsightType.INFO,
                title="Budget Tracking Active",
                message=(
                    f"Your budget tracker is ready to analyze your finances. Add some income "
                    f"and expenses in {self.symbol} to get personalized insights."
                ),
                action="Add first transaction",
                confidence=0.9,
            ),
            Insight(
                id="default-2",
                type=InsightType.TIP,
                title="Budgeting Tips",
                message=(
                    f"Aim to save 20% of your income. Even {self._fmt(500)} saved daily "
                    f"adds up to {self._fmt(15000)} a month."
                ),
                action="Start saving challenge",
                confidence=0.85,
            ),
            Insight(
                id="default-3",
                type=InsightType.SUCCESS,
                title="Smart Category Management",
                message=(
                    "Track categories such as Food and Bills separately to see where your money "
                    "goes and set a limit for each one."
                ),
                action="Set category budgets",
                confidence=0.8,
            ),
        ]

    def _error_insights(self, error: AIServiceError) -> List[Insight]:
        warning = Insight(
            id="error-1",
            type=InsightType.WARNING,
            title="AI Analysis Unavailable",
            message=f"{error.user_message} Your financial data is safe and tracking continues.",
            action="Retry later",
            confidence=0.9,
        )
        return [warning] + self.default_insights()[1:]

    # Categorization

    async def categorize(self, description: str) -> CategoryLabel:
        """Map a free-text description to a category label, 'Other' on any failure"""
        if not description or not description.strip():
            return CategoryLabel.OTHER

        if not self.client.is_configured:
            logger.warning("⚠️ AI API key not configured, using fallback category")
            return CategoryLabel.OTHER

        try:
            ai_response = await self.client.complete(
                system=self._categorize_system_prompt(),
                prompt=f'Categorize this {self.region}/{self.currency} financial record: "{description.strip()}"',
                temperature=0.1,
                max_tokens=20,
                retry=False,
            )
        except Exception as e:
            error = classify_error(e)
            logger.error(f"❌ Error categorizing record: {error.__class__.__name__}: {error}")
            return CategoryLabel.OTHER

        label = _match_label(clean_label(ai_response))
        if label is None:
            logger.warning(f"🚨 Invalid category '{ai_response}', using 'Other'")
            return CategoryLabel.OTHER

        return label

    def _categorize_system_prompt(self) -> str:
        expense = ", ".join(label.value for label in CategoryLabel.expense_labels())
        income = ", ".join(label.value for label in CategoryLabel.income_labels())
        return f"""You are a financial categorization AI for {self.region}/{self.currency} transactions.

For EXPENSES, categorize into: {expense}
For INCOME, categorize into: {income}

Examples:
- Food: restaurants, groceries, snacks
- Transportation: bus, taxi, fuel
- Bills: electricity, water, internet, mobile
- Healthcare: hospital, pharmacy, checkups
- Education: school fees, books, courses
- Remittance: money sent from abroad

Respond with only the category name."""

    # Q&A

    async def answer_question(self, question: str, transactions: Iterable[Transaction]) -> str:
        """Answer a free-form question about the records; returns an apology string on failure"""
        if not self.client.is_configured:
            return ANSWER_NOT_CONFIGURED

        transactions = list(transactions)

        try:
            summary = compute_financial_summary(transactions)
            prompt = self._create_answer_prompt(question, transactions, summary)

            logger.info(f"🧠 Answering question over {len(transactions)} records")
            return await self.client.complete(
                system=(
                    f"You are a helpful financial advisor AI specializing in {self.region} and "
                    f"{self.currency} ({self.symbol}). Always provide specific, actionable answers "
                    f"using the {self.currency} currency format."
                ),
                prompt=prompt,
                temperature=0.7,
                max_tokens=250,
            )

        except Exception as e:
            error = classify_error(e)
            logger.error(f"❌ Error answering question: {error.__class__.__name__}: {error}")
            return f"{error.user_message} {ANSWER_APOLOGY}"

    def _create_answer_prompt(self, question: str, transactions: Sequence[Transaction], summary: FinancialSummary) -> str:
        return f"""{self._region_context()}
Based on the following {self.region}/{self.currency} financial data, provide a detailed answer to: "{question}"

FINANCIAL SUMMARY:
- Total Income: {self._fmt(summary.total_income)}
- Total Expenses: {self._fmt(summary.total_expenses)}
- Net Balance: {self._fmt(summary.net_balance)}

DETAILED DATA:
{self._format_transactions_for_ai(transactions)}

Provide an answer that:
1. Addresses the question directly
2. Uses specific {self.currency} amounts from the data
3. Offers actionable advice
4. Keeps the response concise (2-4 sentences)
5. Always formats amounts as {self.symbol} X,XXX

Return only the answer text, no additional formatting."""

    def _region_context(self) -> str:
        lines = [
            f"- All financial data is in {self.currency} ({self.symbol})",
            f"- User is located in {self.region}",
            f"- Provide all amounts in {self.currency} format ({self.symbol} X,XXX)",
        ]
        amounts = {key: self._fmt(value) for key, value in REGION_HINT_AMOUNTS.items()}
        lines.extend(f"- {hint.format(**amounts)}" for hint in REGION_HINTS.get(self.region, []))
        return "IMPORTANT CONTEXT:\n" + "\n".join(lines) + "\n"

    def _format_transactions_for_ai(self, transactions: Sequence[Transaction]) -> str:
        """Serialize records for the prompt"""
        payload = [
            {
                "amount": t.amount,
                "amountFormatted": self._fmt(t.amount),
                "category": t.category,
                "type": t.type,
                "description": t.description,
                "date": t.date,
            }
            for t in transactions
        ]
        return json.dumps(payload, indent=2, ensure_ascii=False, cls=CustomJSONEncoder)


def _coerce_confidence(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return DEFAULT_CONFIDENCE
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    if confidence != confidence:  # NaN
        return DEFAULT_CONFIDENCE
    return min(max(confidence, 0.0), 1.0)


def _match_label(text: str) -> Optional[CategoryLabel]:
    for label in CategoryLabel:
        if label.value.casefold() == text.casefold():
            return label
    return None


@lru_cache()
def get_insight_service() -> InsightService:
    """Build the service from settings once per process"""
    settings = get_settings()
    return InsightService(AIClient(settings), settings)
