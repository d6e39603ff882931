"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Text,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from prop_planner.repositories.sqlalchemy.database import Base
from prop_planner.domain.models.enums import AccountStatus


class AccountORM(Base):
    """SQLAlchemy model for Account. ``seq`` preserves insertion order."""

    __tablename__ = "accounts"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String(36), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    size = Column(Numeric(precision=18, scale=2), nullable=False)
    cost = Column(Numeric(precision=18, scale=2), nullable=False)
    status = Column(SqlEnum(AccountStatus), default=AccountStatus.PENDING, nullable=False)
    suspension_date = Column(Date, nullable=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    withdrawals = relationship(
        "WithdrawalORM",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="WithdrawalORM.seq",
    )


class WithdrawalORM(Base):
    """SQLAlchemy model for Withdrawal. Ids are unique per account only."""

    __tablename__ = "withdrawals"
    __table_args__ = (UniqueConstraint("account_seq", "withdrawal_id"),)

    seq = Column(Integer, primary_key=True, autoincrement=True)
    account_seq = Column(Integer, ForeignKey("accounts.seq", ondelete="CASCADE"), nullable=False)
    withdrawal_id = Column(String(36), nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(precision=18, scale=2), nullable=False)

    account = relationship("AccountORM", back_populates="withdrawals")


class CacheEntryORM(Base):
    """SQLAlchemy model for the local key-value mirror."""

    __tablename__ = "kv_cache"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
