"""
Pytest configuration and fixtures for the prop planner tests.

This module provides:
- In-memory SQLite database fixtures
- Fake persistence gateways (healthy, failing, paused)
- Fake schedule optimizer and trade-history analyzer
- Factory helpers for accounts
- Store, trigger and API client fixtures
"""

import asyncio
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from prop_planner.main import app
from prop_planner.app_context import AppContext, set_app_context
from prop_planner.config.settings import Settings, set_settings, reset_settings
from prop_planner.core.exceptions import NotFoundError, OptimizerError, PersistenceError
from prop_planner.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from prop_planner.repositories.sqlalchemy import orm_models  # noqa: F401
from prop_planner.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyCacheRepository,
)
from prop_planner.api.schemas import TradingStats
from prop_planner.domain.models import Account, AccountStatus, Withdrawal
from prop_planner.services import AccountStore, ScheduleTrigger


# =============================================================================
# FAKE COLLABORATORS
# =============================================================================


class InMemoryGateway:
    """
    Persistence gateway holding accounts in a list.

    Actions named in ``fail_on`` ("load", "add", "update", "delete") raise
    PersistenceError. Update/delete of unknown ids raise NotFoundError, like
    the real persistence service.
    """

    def __init__(self, accounts: Optional[list[Account]] = None):
        self.accounts: list[Account] = list(accounts or [])
        self.fail_on: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _check(self, action: str, subject: str) -> None:
        self.calls.append((action, subject))
        if action in self.fail_on:
            raise PersistenceError(action, "simulated outage")

    async def list_all(self) -> list[Account]:
        self._check("load", "*")
        return list(self.accounts)

    async def create(self, account: Account) -> None:
        self._check("add", account.id)
        self.accounts.append(account)

    async def update(self, account: Account) -> None:
        self._check("update", account.id)
        for i, existing in enumerate(self.accounts):
            if existing.id == account.id:
                self.accounts[i] = account
                return
        raise NotFoundError("Account", account.id)

    async def delete(self, account_id: str) -> None:
        self._check("delete", account_id)
        remaining = [a for a in self.accounts if a.id != account_id]
        if len(remaining) == len(self.accounts):
            raise NotFoundError("Account", account_id)
        self.accounts = remaining


class PausedGateway(InMemoryGateway):
    """Gateway whose writes wait until ``release`` is set."""

    def __init__(self, accounts: Optional[list[Account]] = None):
        super().__init__(accounts)
        self.release = asyncio.Event()
        self.started = asyncio.Event()

    async def create(self, account: Account) -> None:
        self.started.set()
        await self.release.wait()
        await super().create(account)

    async def update(self, account: Account) -> None:
        self.started.set()
        await self.release.wait()
        await super().update(account)


class FakeOptimizer:
    """Optimizer returning a canned payload and recording what it was sent."""

    def __init__(self, payload: Any):
        self.payload = payload
        self.received: list[list[str]] = []

    async def optimize(self, accounts: Sequence[Account]) -> Any:
        self.received.append([a.id for a in accounts])
        return self.payload


class FailingOptimizer:
    """Optimizer that always fails."""

    async def optimize(self, accounts: Sequence[Account]) -> Any:
        raise OptimizerError("network error (ConnectError)")


class FakeAnalyzer:
    """Analyzer returning fixed statistics."""

    def __init__(self, stats: TradingStats):
        self.stats = stats
        self.received: list[str] = []

    async def analyze(self, file_content: str) -> TradingStats:
        self.received.append(file_content)
        return self.stats


# =============================================================================
# ACCOUNT HELPERS
# =============================================================================


def make_account(
    account_id: str,
    status: AccountStatus = AccountStatus.ACTIVE,
    size: str = "100000",
    cost: str = "540",
    withdrawals: Optional[list[Withdrawal]] = None,
    suspension_date: Optional[date] = None,
) -> Account:
    """Build an account whose name and id are both ``account_id``."""
    return Account(
        id=account_id,
        name=account_id,
        company="FTMO",
        size=Decimal(size),
        cost=Decimal(cost),
        status=status,
        suspension_date=suspension_date,
        withdrawals=list(withdrawals or []),
    )


def make_roster(*ids: str, status: AccountStatus = AccountStatus.ACTIVE) -> list[Account]:
    """Build several accounts with the same status."""
    return [make_account(i, status=status) for i in ids]


def sample_stats_payload() -> dict[str, Any]:
    """Analyzer reply in wire form."""
    summary = {
        "trades": 10,
        "pnl": 1250.5,
        "wins": 6,
        "losses": 4,
        "winRate": 60.0,
        "avgWin": 300.0,
        "avgLoss": -137.4,
        "profitFactor": 3.27,
    }
    return {
        "overall": summary,
        "byAsset": [{"key": "EURUSD", "summary": summary}],
        "byDayOfWeek": [{"key": "Monday", "summary": summary}],
        "byHour": [{"key": "09", "summary": summary}],
        "byMonth": [{"key": "July", "summary": summary}],
        "byWeek": [{"key": "Week 30", "summary": summary}],
        "byDirection": {"long": summary, "short": summary},
    }


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(test_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def test_session(session_factory) -> Session:
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def cache_repo(test_session) -> SqlAlchemyCacheRepository:
    """Provide test CacheRepository."""
    return SqlAlchemyCacheRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def gateway() -> InMemoryGateway:
    """Provide a healthy in-memory gateway."""
    return InMemoryGateway()


@pytest.fixture
def trigger() -> ScheduleTrigger:
    """Provide a ScheduleTrigger with the default engine variant."""
    return ScheduleTrigger()


@pytest.fixture
def store(gateway, trigger) -> AccountStore:
    """Provide an AccountStore wired to the trigger, without a local mirror."""
    return AccountStore(gateway=gateway, listener=trigger)


@pytest.fixture
def seeded_store(gateway, trigger) -> Callable[..., AccountStore]:
    """Factory: store loaded with the given accounts on both sides."""

    def _seed(accounts: list[Account]) -> AccountStore:
        gateway.accounts = list(accounts)
        store = AccountStore(gateway=gateway, listener=trigger)
        asyncio.run(store.load())
        return store

    return _seed


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def app_context(gateway) -> AppContext:
    """Application context using the in-memory gateway and no local mirror."""
    return AppContext(gateway=gateway, use_cache=False)


@pytest.fixture
def client(test_engine, app_context) -> TestClient:
    """Provide FastAPI test client with test database and context."""
    set_settings(Settings(database_url="sqlite://"))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    set_app_context(app_context)
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    set_app_context(None)
    reset_database()
    reset_settings()
