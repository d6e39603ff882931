"""Application context for in-process service management.

Owns the account store, the schedule trigger and the external collaborator
clients for one running application.
"""

import logging
from typing import Optional

from prop_planner.config.settings import get_settings
from prop_planner.repositories.sqlalchemy.database import get_session_factory, get_session
from prop_planner.repositories.sqlalchemy import SqlAlchemyCacheRepository
from prop_planner.repositories.gateways import HttpAccountGateway, LocalAccountGateway
from prop_planner.repositories.protocols import AccountGateway
from prop_planner.providers import (
    ScheduleOptimizer,
    HttpScheduleOptimizer,
    TradeHistoryAnalyzer,
    HttpTradeHistoryAnalyzer,
)
from prop_planner.services import AccountStore, ScheduleConfig, ScheduleTrigger

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing access to the planner services.

    Collaborators default to what the settings describe but can be injected,
    which is how tests swap in fakes.
    """

    def __init__(
        self,
        gateway: Optional[AccountGateway] = None,
        optimizer: Optional[ScheduleOptimizer] = None,
        analyzer: Optional[TradeHistoryAnalyzer] = None,
        use_cache: bool = True,
    ):
        self._gateway = gateway
        self._optimizer = optimizer
        self._analyzer = analyzer
        self._use_cache = use_cache
        self._session = None

        self._store: Optional[AccountStore] = None
        self._trigger: Optional[ScheduleTrigger] = None

    def _get_session(self):
        """Get or create database session."""
        if self._session is None:
            self._session = get_session()
        return self._session

    def _build_gateway(self) -> AccountGateway:
        settings = get_settings()
        if settings.persistence_url:
            logger.info("Using remote persistence service at %s", settings.persistence_url)
            return HttpAccountGateway(
                base_url=settings.persistence_url,
                timeout=settings.http_timeout_seconds,
            )
        return LocalAccountGateway(get_session_factory())

    @property
    def trigger(self) -> ScheduleTrigger:
        """Get the ScheduleTrigger instance."""
        if self._trigger is None:
            settings = get_settings()
            self._trigger = ScheduleTrigger(
                ScheduleConfig(skip_friday_new_york=settings.schedule_skip_friday_new_york)
            )
        return self._trigger

    @property
    def store(self) -> AccountStore:
        """Get the AccountStore instance."""
        if self._store is None:
            settings = get_settings()
            if self._gateway is None:
                self._gateway = self._build_gateway()
            cache = SqlAlchemyCacheRepository(self._get_session()) if self._use_cache else None
            self._store = AccountStore(
                gateway=self._gateway,
                cache=cache,
                cache_key=settings.cache_storage_key,
                listener=self.trigger,
            )
        return self._store

    @property
    def optimizer(self) -> Optional[ScheduleOptimizer]:
        """Get the schedule optimizer, or None when not configured."""
        if self._optimizer is None:
            settings = get_settings()
            if settings.optimizer_url:
                self._optimizer = HttpScheduleOptimizer(
                    url=settings.optimizer_url,
                    timeout=settings.http_timeout_seconds,
                )
        return self._optimizer

    @property
    def analyzer(self) -> Optional[TradeHistoryAnalyzer]:
        """Get the trade-history analyzer, or None when not configured."""
        if self._analyzer is None:
            settings = get_settings()
            if settings.analyzer_url:
                self._analyzer = HttpTradeHistoryAnalyzer(
                    url=settings.analyzer_url,
                    timeout=settings.http_timeout_seconds,
                )
        return self._analyzer

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None

    async def aclose(self) -> None:
        """Close HTTP clients and the database session."""
        for client in (self._gateway, self._optimizer, self._analyzer):
            close = getattr(client, "close", None)
            if close is not None:
                await close()
        self.close()


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
