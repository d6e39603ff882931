"""Pydantic schemas for API request/response."""

from prop_planner.api.schemas.account import (
    WithdrawalRecord,
    AccountRecord,
    AccountDeleteRequest,
    AccountMutationResponse,
    AccountCreateRequest,
    AccountUpdateRequest,
    WithdrawalCreateRequest,
    AccountListResponse,
)
from prop_planner.api.schemas.schedule import ScheduleResponse, MetricsResponse
from prop_planner.api.schemas.analysis import (
    StatSummary,
    StatItem,
    DirectionStats,
    TradingStats,
    TradeHistoryRequest,
)

__all__ = [
    "WithdrawalRecord",
    "AccountRecord",
    "AccountDeleteRequest",
    "AccountMutationResponse",
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "WithdrawalCreateRequest",
    "AccountListResponse",
    "ScheduleResponse",
    "MetricsResponse",
    "StatSummary",
    "StatItem",
    "DirectionStats",
    "TradingStats",
    "TradeHistoryRequest",
]
