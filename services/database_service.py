"""
Record store queries
"""

from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from loguru import logger

from database.models import Record, UserBudget
from database.sqlite_db import AsyncSessionLocal
from models.exceptions import DatabaseError
from models.schemas import RecordCreate, Transaction, TransactionType


class DatabaseService:
    """Reads and writes user records and budgets"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal):
        self.session_factory = session_factory

    async def add_record(self, user_id: str, record: RecordCreate, category: str) -> Transaction:
        """Save a new record"""
        try:
            async with self.session_factory() as db:
                row = Record(
                    user_id=user_id,
                    amount=record.amount,
                    category=category,
                    type=record.type.value,
                    description=record.description,
                    date=record.date,
                )
                db.add(row)
                await db.commit()
                await db.refresh(row)

                logger.info(f"✅ Record saved: {row.id} ({row.type}, {row.amount})")
                return Transaction.model_validate(row)

        except SQLAlchemyError as e:
            logger.error(f"❌ Error saving record: {e}")
            raise DatabaseError("Error saving record") from e

    async def get_records(self, user_id: str, limit: Optional[int] = 20) -> List[Transaction]:
        """User records, newest first"""
        try:
            async with self.session_factory() as db:
                query = (
                    select(Record)
                    .where(Record.user_id == user_id)
                    .order_by(Record.date.desc())
                )
                if limit is not None:
                    query = query.limit(limit)

                result = await db.execute(query)
                return [Transaction.model_validate(row) for row in result.scalars()]

        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching records: {e}")
            raise DatabaseError("Error fetching records") from e

    async def get_all_records(self, user_id: str) -> List[Transaction]:
        return await self.get_records(user_id, limit=None)

    async def get_records_by_type(self, user_id: str, type_: TransactionType) -> List[Transaction]:
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    select(Record)
                    .where(Record.user_id == user_id, Record.type == type_.value)
                    .order_by(Record.date.desc())
                )
                return [Transaction.model_validate(row) for row in result.scalars()]

        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching {type_.value} records: {e}")
            raise DatabaseError(f"Error fetching {type_.value} records") from e

    async def delete_record(self, user_id: str, record_id: str) -> bool:
        """Delete one of the user's records; False when it does not exist"""
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    delete(Record).where(Record.id == record_id, Record.user_id == user_id)
                )
                await db.commit()

                deleted = result.rowcount > 0
                if deleted:
                    logger.info(f"🗑️ Record deleted: {record_id}")
                return deleted

        except SQLAlchemyError as e:
            logger.error(f"❌ Error deleting record: {e}")
            raise DatabaseError("Error deleting record") from e

    async def get_monthly_budget(self, user_id: str) -> float:
        """Monthly budget, 0 when not set"""
        try:
            async with self.session_factory() as db:
                budget = await db.get(UserBudget, user_id)
                return budget.monthly_budget if budget else 0.0

        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching budget: {e}")
            raise DatabaseError("Error fetching budget") from e

    async def set_monthly_budget(self, user_id: str, amount: float) -> float:
        """Create or replace the monthly budget"""
        if amount <= 0:
            raise ValueError("Budget must be greater than zero")

        try:
            async with self.session_factory() as db:
                budget = await db.get(UserBudget, user_id)
                if budget:
                    budget.monthly_budget = amount
                else:
                    db.add(UserBudget(user_id=user_id, monthly_budget=amount))
                await db.commit()

                logger.info(f"✅ Monthly budget set for {user_id}: {amount}")
                return amount

        except SQLAlchemyError as e:
            logger.error(f"❌ Error saving budget: {e}")
            raise DatabaseError("Error saving budget") from e


database_service = DatabaseService()
