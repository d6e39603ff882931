"""Statistics models returned by the trade-history analyzer."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatSummary(BaseModel):
    """Performance summary for one slice of the trade history."""

    model_config = _WIRE_CONFIG

    trades: int
    pnl: float
    wins: int
    losses: int
    win_rate: float
    avg_win: float
    avg_loss: float
    profit_factor: Optional[float] = None


class StatItem(BaseModel):
    """Summary keyed by asset, weekday, hour, month or week."""

    key: str
    summary: StatSummary


class DirectionStats(BaseModel):
    long: StatSummary
    short: StatSummary


class TradingStats(BaseModel):
    """Statistics returned by the trade-history analyzer."""

    model_config = _WIRE_CONFIG

    overall: StatSummary
    by_asset: list[StatItem]
    by_day_of_week: list[StatItem]
    by_hour: list[StatItem]
    by_month: list[StatItem]
    by_week: list[StatItem]
    by_direction: DirectionStats
