"""
Database engine and sessions
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker

from config.settings import get_settings
from database.models import Base


def async_database_url(url: str) -> str:
    """Use the aiosqlite driver for plain sqlite URLs"""
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


settings = get_settings()

async_engine = create_async_engine(
    async_database_url(settings.database_url),
    echo=settings.debug
)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def init_database(engine: AsyncEngine = async_engine):
    """Create tables"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
