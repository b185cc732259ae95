"""
Shared test fixtures
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import Settings
from database.sqlite_db import init_database
from models.schemas import Transaction, TransactionType
from services.ai_client import AIClient
from services.database_service import DatabaseService
from services.insight_service import InsightService


API_URL = "https://api.groq.com/openai/v1/chat/completions"


def make_completion(content):
    """Chat-completion response carrying `content`"""
    response = MagicMock()
    response.choices[0].message.content = content
    return response


def make_status_error(error_cls, status: int):
    request = httpx.Request("POST", API_URL)
    response = httpx.Response(status, request=request)
    return error_cls(f"Error code: {status}", response=response, body=None)


def make_connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", API_URL))


@pytest.fixture
def settings():
    return Settings(_env_file=None, ai_api_key="test-key", ai_backoff_base=1.0, ai_max_retries=3)


@pytest.fixture
def sleep():
    """Backoff sleep that records delays instead of waiting"""
    return AsyncMock()


@pytest.fixture
def ai_client(settings, sleep):
    return AIClient(settings, sleep=sleep)


@pytest.fixture
def insight_service(ai_client, settings):
    return InsightService(ai_client, settings)


@pytest.fixture
def offline_service():
    """Service without an API key"""
    settings = Settings(_env_file=None, ai_api_key=None)
    return InsightService(AIClient(settings), settings)


@pytest.fixture
def sample_transactions():
    return [
        Transaction(id="1", amount=50000, category="Salary", type=TransactionType.INCOME,
                    description="Monthly salary", date=datetime(2025, 10, 1)),
        Transaction(id="2", amount=12000, category="Food", type=TransactionType.EXPENSE,
                    description="Groceries", date=datetime(2025, 10, 3)),
        Transaction(id="3", amount=1500, category="Transportation", type=TransactionType.EXPENSE,
                    description="Taxi", date=datetime(2025, 10, 3, 18, 30)),
        Transaction(id="4", amount=8000, category="Bills", type=TransactionType.EXPENSE,
                    description="Electricity and internet", date=datetime(2025, 10, 10)),
        Transaction(id="5", amount=10000, category="Remittance", type=TransactionType.INCOME,
                    description="Money from brother", date=datetime(2025, 9, 28)),
    ]


@pytest_asyncio.fixture
async def db_service():
    """DatabaseService over an in-memory SQLite database"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_database(engine)
    yield DatabaseService(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()
