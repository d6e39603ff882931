"""External collaborator clients."""

from prop_planner.providers.schedule_optimizer import (
    ScheduleOptimizer,
    HttpScheduleOptimizer,
)
from prop_planner.providers.trade_analyzer import (
    TradeHistoryAnalyzer,
    HttpTradeHistoryAnalyzer,
)

__all__ = [
    "ScheduleOptimizer",
    "HttpScheduleOptimizer",
    "TradeHistoryAnalyzer",
    "HttpTradeHistoryAnalyzer",
]
