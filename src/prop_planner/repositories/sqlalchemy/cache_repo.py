"""SQLAlchemy implementation of CacheRepository."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from prop_planner.repositories.sqlalchemy.orm_models import CacheEntryORM


class SqlAlchemyCacheRepository:
    """SQLAlchemy-backed key-value store for the local account mirror."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        entry = self._db.get(CacheEntryORM, key)
        return entry.value if entry else None

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite a value."""
        try:
            entry = self._db.get(CacheEntryORM, key)
            if entry is None:
                self._db.add(CacheEntryORM(key=key, value=value))
            else:
                entry.value = value
            self._db.commit()
        except SQLAlchemyError:
            # The session is long-lived; leave it usable for the next write
            self._db.rollback()
            raise
