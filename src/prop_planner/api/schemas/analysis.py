"""Pydantic schemas for trade-history statistics."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prop_planner.providers.trade_stats import (
    StatSummary,
    StatItem,
    DirectionStats,
    TradingStats,
)

__all__ = [
    "StatSummary",
    "StatItem",
    "DirectionStats",
    "TradingStats",
    "TradeHistoryRequest",
]


class TradeHistoryRequest(BaseModel):
    """Raw uploaded trade-history text."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_content: str = Field(..., description="CSV, HTML or text export of the trade history")
