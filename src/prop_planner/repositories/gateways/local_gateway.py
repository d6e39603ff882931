"""In-process account gateway over the local SQLAlchemy database."""

import asyncio
import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from prop_planner.core.exceptions import PersistenceError, ValidationError
from prop_planner.domain.models import Account
from prop_planner.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LocalAccountGateway:
    """
    Persists accounts to the local database.

    Each call runs in a worker thread with its own session so the event loop
    is never blocked by SQLite I/O.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def list_all(self) -> list[Account]:
        return await self._run("load", lambda repo: repo.list_all())

    async def create(self, account: Account) -> None:
        await self._run("add", lambda repo: repo.create(account))

    async def update(self, account: Account) -> None:
        await self._run("update", lambda repo: repo.update(account))

    async def delete(self, account_id: str) -> None:
        await self._run("delete", lambda repo: repo.delete(account_id))

    async def _run(self, action: str, fn: Callable[[SqlAlchemyAccountRepository], T]) -> T:
        return await asyncio.to_thread(self._call, action, fn)

    def _call(self, action: str, fn: Callable[[SqlAlchemyAccountRepository], T]) -> T:
        session = self._session_factory()
        try:
            return fn(SqlAlchemyAccountRepository(session))
        except ValidationError as e:
            session.rollback()
            raise PersistenceError(action, e.message) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Local persistence %s failed: %s", action, e)
            raise PersistenceError(action, "database error") from e
        finally:
            session.close()
