"""Service layer - business logic orchestration."""

from prop_planner.services.account_store import AccountStore
from prop_planner.services.schedule_engine import ScheduleConfig, generate, session_capacity
from prop_planner.services.schedule_trigger import ScheduleTrigger
from prop_planner.services.metrics_service import compute_metrics

__all__ = [
    "AccountStore",
    "ScheduleConfig",
    "generate",
    "session_capacity",
    "ScheduleTrigger",
    "compute_metrics",
]
