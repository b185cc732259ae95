"""
SQLAlchemy models
"""

import uuid

from sqlalchemy import Column, String, DateTime, Float, Text, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


class Record(Base):
    """Income or expense record"""
    __tablename__ = "records"

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(255), nullable=False, comment="ID from the identity provider")

    amount = Column(Float, nullable=False, comment="Non-negative amount")
    category = Column(String(50), nullable=False, default="Other")
    type = Column(String(10), nullable=False, comment="income or expense")
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, comment="Date of the record")

    created_at = Column(DateTime, default=func.now())

    __table_args__ = (
        Index("ix_records_user_date", "user_id", "date"),
    )

    def __repr__(self):
        return f"<Record(id={self.id}, type='{self.type}', amount={self.amount})>"


class UserBudget(Base):
    """Monthly budget per user"""
    __tablename__ = "user_budgets"

    user_id = Column(String(255), primary_key=True)
    monthly_budget = Column(Float, nullable=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<UserBudget(user_id={self.user_id}, monthly_budget={self.monthly_budget})>"
