"""Trade-history statistics endpoint."""

from fastapi import APIRouter, Depends

from prop_planner.api.deps import get_analyzer
from prop_planner.api.schemas import TradeHistoryRequest, TradingStats
from prop_planner.providers import TradeHistoryAnalyzer

router = APIRouter(prefix="/stats", tags=["stats"])


@router.post("", response_model=TradingStats)
async def generate_stats(
    data: TradeHistoryRequest,
    analyzer: TradeHistoryAnalyzer = Depends(get_analyzer),
) -> TradingStats:
    """Analyze an uploaded trade history."""
    return await analyzer.analyze(data.file_content)
