"""SQLAlchemy repository implementations."""

from prop_planner.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    Base,
)
from prop_planner.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from prop_planner.repositories.sqlalchemy.cache_repo import SqlAlchemyCacheRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyCacheRepository",
]
