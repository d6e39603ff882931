"""AI schedule optimizer protocol and HTTP client."""

import logging
from typing import Any, Optional, Protocol, Sequence

import httpx

from prop_planner.core.exceptions import OptimizerError
from prop_planner.domain.models import Account

logger = logging.getLogger(__name__)


class ScheduleOptimizer(Protocol):
    """
    External service proposing a weekly schedule.

    Returns the raw, schedule-shaped JSON object. Shape validation is the
    caller's job. Raises OptimizerError when the call fails.
    """

    async def optimize(self, accounts: Sequence[Account]) -> Any:
        ...


def optimizer_payload(accounts: Sequence[Account]) -> dict[str, Any]:
    """Only id, name, company and size are shared with the optimizer."""
    return {
        "accounts": [
            {
                "id": a.id,
                "name": a.name,
                "company": a.company,
                "size": float(a.size),
            }
            for a in accounts
        ]
    }


class HttpScheduleOptimizer:
    """POSTs the active roster to an optimizer endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
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

    async def optimize(self, accounts: Sequence[Account]) -> Any:
        client = await self._get_client()
        try:
            resp = await client.post(self._url, json=optimizer_payload(accounts))
        except httpx.HTTPError as e:
            logger.warning("Schedule optimizer request failed: %s", e)
            raise OptimizerError(f"network error ({type(e).__name__})") from e

        if not resp.is_success:
            raise OptimizerError(f"HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise OptimizerError("response was not valid JSON") from e
