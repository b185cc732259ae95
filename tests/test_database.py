"""
Record store tests against in-memory SQLite
"""

import pytest
from datetime import datetime

from models.schemas import RecordCreate, TransactionType


@pytest.mark.asyncio
class TestDatabaseService:

    async def test_add_and_list_records_newest_first(self, db_service):
        await db_service.add_record("user-1", RecordCreate(description="Rent", amount=15000, date=datetime(2025, 10, 1)), "Bills")
        await db_service.add_record("user-1", RecordCreate(description="Momo", amount=300, date=datetime(2025, 10, 5)), "Food")
        await db_service.add_record("user-2", RecordCreate(description="Other user", amount=1, date=datetime(2025, 10, 6)), "Other")

        records = await db_service.get_records("user-1")

        assert [r.description for r in records] == ["Momo", "Rent"]
        assert records[0].category == "Food"
        assert records[0].type == TransactionType.EXPENSE
        assert records[0].id

    async def test_limit(self, db_service):
        for day in range(1, 6):
            await db_service.add_record("user-1", RecordCreate(description=f"Tea {day}", amount=50, date=datetime(2025, 10, day)), "Food")

        assert len(await db_service.get_records("user-1", limit=3)) == 3
        assert len(await db_service.get_all_records("user-1")) == 5

    async def test_records_by_type(self, db_service):
        await db_service.add_record(
            "user-1", RecordCreate(description="Salary", amount=50000, type=TransactionType.INCOME), "Salary"
        )
        await db_service.add_record("user-1", RecordCreate(description="Bus", amount=30), "Transportation")

        incomes = await db_service.get_records_by_type("user-1", TransactionType.INCOME)

        assert [r.description for r in incomes] == ["Salary"]

    async def test_delete_only_own_records(self, db_service):
        record = await db_service.add_record("user-1", RecordCreate(description="Cinema", amount=500), "Entertainment")

        assert not await db_service.delete_record("user-2", record.id)
        assert await db_service.delete_record("user-1", record.id)
        assert not await db_service.delete_record("user-1", record.id)
        assert await db_service.get_records("user-1") == []

    async def test_monthly_budget_upsert(self, db_service):
        assert await db_service.get_monthly_budget("user-1") == 0

        await db_service.set_monthly_budget("user-1", 30000)
        await db_service.set_monthly_budget("user-1", 45000)

        assert await db_service.get_monthly_budget("user-1") == 45000
        assert await db_service.get_monthly_budget("user-2") == 0

    async def test_budget_must_be_positive(self, db_service):
        with pytest.raises(ValueError):
            await db_service.set_monthly_budget("user-1", 0)
