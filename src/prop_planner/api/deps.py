"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session

from prop_planner.app_context import AppContext, get_app_context
from prop_planner.core.exceptions import AnalyzerError, OptimizerError
from prop_planner.repositories.sqlalchemy.database import get_db
from prop_planner.repositories.protocols import AccountRepository
from prop_planner.repositories.sqlalchemy import SqlAlchemyAccountRepository
from prop_planner.providers import ScheduleOptimizer, TradeHistoryAnalyzer
from prop_planner.services import AccountStore, ScheduleTrigger


def get_account_repo(db: Session = Depends(get_db)) -> AccountRepository:
    """Provide AccountRepository instance."""
    return SqlAlchemyAccountRepository(db)


def get_context() -> AppContext:
    """Provide the application context."""
    return get_app_context()


def get_store(context: AppContext = Depends(get_context)) -> AccountStore:
    """Provide the AccountStore instance."""
    return context.store


def get_trigger(context: AppContext = Depends(get_context)) -> ScheduleTrigger:
    """Provide the ScheduleTrigger instance."""
    # Building the store wires the trigger as its listener
    _ = context.store
    return context.trigger


def get_optimizer(context: AppContext = Depends(get_context)) -> ScheduleOptimizer:
    """Provide the configured schedule optimizer."""
    if context.optimizer is None:
        raise OptimizerError("no optimizer is configured")
    return context.optimizer


def get_analyzer(context: AppContext = Depends(get_context)) -> TradeHistoryAnalyzer:
    """Provide the configured trade-history analyzer."""
    if context.analyzer is None:
        raise AnalyzerError("no analyzer is configured")
    return context.analyzer
