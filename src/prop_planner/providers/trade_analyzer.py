"""Trade-history analyzer protocol and HTTP client."""

import logging
from typing import Optional, Protocol

import httpx
from pydantic import ValidationError as PydanticValidationError

from prop_planner.core.exceptions import AnalyzerError, MalformedResponseError, ValidationError
from prop_planner.providers.trade_stats import TradingStats

logger = logging.getLogger(__name__)


class TradeHistoryAnalyzer(Protocol):
    """External service turning an uploaded trade history into statistics."""

    async def analyze(self, file_content: str) -> TradingStats:
        ...


class HttpTradeHistoryAnalyzer:
    """POSTs raw file text to an analyzer endpoint and validates the reply."""

    def __init__(
        self,
        url: str,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._url = url
        self._timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def analyze(self, file_content: str) -> TradingStats:
        if not file_content.strip():
            raise ValidationError("Trade history file is empty")

        client = await self._get_client()
        try:
            resp = await client.post(self._url, json={"fileContent": file_content})
        except httpx.HTTPError as e:
            logger.warning("Trade history analyzer request failed: %s", e)
            raise AnalyzerError(f"network error ({type(e).__name__})") from e

        if not resp.is_success:
            raise AnalyzerError(f"HTTP {resp.status_code}")
        try:
            return TradingStats.model_validate_json(resp.content)
        except PydanticValidationError as e:
            raise MalformedResponseError("trade history analyzer", f"{e.error_count()} invalid field(s)") from e
