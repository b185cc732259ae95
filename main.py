"""
Personal budget tracker API with AI insights
"""

from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from loguru import logger
import uvicorn

from config.settings import get_settings
from config.logging_config import setup_logging
from database.sqlite_db import init_database
from models.exceptions import DatabaseError
from models.schemas import (
    AnswerResponse,
    BudgetStatus,
    BudgetUpdate,
    CategorizeRequest,
    CategorizeResponse,
    CategoryTotal,
    DailyTotal,
    ExpenseExtremes,
    IncomeStats,
    Insight,
    QuestionRequest,
    RecordCreate,
    SpendingRecord,
    Transaction,
    TransactionType,
)
from services import analytics
from services.database_service import DatabaseService, database_service
from services.insight_service import InsightService, get_insight_service


setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    try:
        logger.info("🔄 Starting budget tracker...")

        await init_database()
        logger.info("✅ Database initialized")

        yield

    except Exception as e:
        logger.error(f"❌ Error during startup: {e}")
        raise
    finally:
        logger.info("👋🏻 Application stopped")


def get_database_service() -> DatabaseService:
    return database_service


async def get_user_id(x_user_id: str = Header(default="", alias="X-User-Id")) -> str:
    """User id forwarded by the identity provider"""
    if not x_user_id.strip():
        raise HTTPException(status_code=401, detail="User not found")
    return x_user_id.strip()


settings = get_settings()
app = FastAPI(
    title=settings.app_name,
    description="Personal budget tracker with AI insights",
    version="1.0.0",
    lifespan=lifespan
)


@app.exception_handler(DatabaseError)
async def database_error_handler(request: Request, exc: DatabaseError):
    return JSONResponse(status_code=500, content={"detail": "Database error"})


@app.get("/")
async def root():
    """Health check"""
    return {
        "message": f"{settings.app_name} is running!",
        "version": "1.0.0",
        "status": "healthy"
    }


@app.get("/health")
async def health_check(insight_service: InsightService = Depends(get_insight_service)):
    """Detailed health check"""
    return {
        "status": "healthy",
        "ai": "configured" if insight_service.client.is_configured else "fallback",
        "database": "connected"
    }


@app.get("/records", response_model=List[Transaction])
async def list_records(
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    """Most recent records"""
    return await db.get_records(user_id, limit=settings.recent_records_limit)


@app.post("/records", response_model=Transaction, status_code=201)
async def create_record(
    record: RecordCreate,
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
    insight_service: InsightService = Depends(get_insight_service),
):
    """Add a record, classifying it when no category is given"""
    category = record.category
    if category is None:
        category = (await insight_service.categorize(record.description)).value
        logger.info(f"🏷️ Auto category for '{record.description}': {category}")

    return await db.add_record(user_id, record, category)


@app.delete("/records/{record_id}", status_code=204)
async def delete_record(
    record_id: str,
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    if not await db.delete_record(user_id, record_id):
        raise HTTPException(status_code=404, detail="Record not found")


@app.get("/stats/income", response_model=IncomeStats)
async def income_stats(
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    records = await db.get_records_by_type(user_id, TransactionType.INCOME)
    return analytics.compute_income_stats(records)


@app.get("/stats/expenses/extremes", response_model=ExpenseExtremes)
async def expense_extremes(
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    records = await db.get_records_by_type(user_id, TransactionType.EXPENSE)
    return analytics.compute_expense_extremes(records)


@app.get("/stats/spending", response_model=SpendingRecord)
async def spending_record(
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    records = await db.get_records_by_type(user_id, TransactionType.EXPENSE)
    return analytics.compute_spending_record(records)


@app.get("/stats/categories", response_model=List[CategoryTotal])
async def category_stats(
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    records = await db.get_records_by_type(user_id, TransactionType.EXPENSE)
    return analytics.category_breakdown(records)


@app.get("/stats/daily", response_model=List[DailyTotal])
async def daily_stats(
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    records = await db.get_records(user_id, limit=settings.recent_records_limit)
    return analytics.daily_totals(records)


@app.get("/budget", response_model=BudgetStatus)
async def get_budget(
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    """Current month spending against the monthly budget"""
    budget = await db.get_monthly_budget(user_id)
    records = await db.get_all_records(user_id)
    return analytics.compute_budget_status(records, budget)


@app.put("/budget", response_model=BudgetStatus)
async def set_budget(
    update: BudgetUpdate,
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
):
    budget = await db.set_monthly_budget(user_id, update.monthly_budget)
    records = await db.get_all_records(user_id)
    return analytics.compute_budget_status(records, budget)


@app.get("/insights", response_model=List[Insight])
async def insights(
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
    insight_service: InsightService = Depends(get_insight_service),
):
    """AI insights; totals cover every record, the prompt samples the newest"""
    records = await db.get_all_records(user_id)
    return await insight_service.generate_insights(records)


@app.post("/categorize", response_model=CategorizeResponse)
async def categorize(
    request: CategorizeRequest,
    user_id: str = Depends(get_user_id),
    insight_service: InsightService = Depends(get_insight_service),
):
    return CategorizeResponse(category=await insight_service.categorize(request.description))


@app.post("/ask", response_model=AnswerResponse)
async def ask(
    request: QuestionRequest,
    user_id: str = Depends(get_user_id),
    db: DatabaseService = Depends(get_database_service),
    insight_service: InsightService = Depends(get_insight_service),
):
    """Free-form question over all of the user's records"""
    records = await db.get_all_records(user_id)
    answer = await insight_service.answer_question(request.question, records)
    return AnswerResponse(answer=answer)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="info"
    )
