"""Account gateway backed by a remote persistence service over HTTP."""

import logging
from typing import Any, Optional

import httpx

from prop_planner.core.exceptions import (
    MalformedResponseError,
    NotFoundError,
    PersistenceError,
)
from prop_planner.domain.models import Account
from prop_planner.repositories.codec import account_to_payload, accounts_from_payload

logger = logging.getLogger(__name__)

ACCOUNTS_PATH = "/api/accounts"


class HttpAccountGateway:
    """
    Talks to the ``/api/accounts`` persistence service.

    GET returns the full collection; POST/PUT send a full account; DELETE sends
    ``{"id": ...}``. Writes must answer ``{"success": true, ...}``. Anything
    else (transport error, non-2xx status, unparseable body) is a failure.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def list_all(self) -> list[Account]:
        data = await self._request("load", "GET")
        if not isinstance(data, list):
            raise PersistenceError("load", "expected a JSON array of accounts")
        try:
            return accounts_from_payload(data, source="persistence service")
        except MalformedResponseError as e:
            raise PersistenceError("load", e.message) from e

    async def create(self, account: Account) -> None:
        await self._write("add", "POST", account_to_payload(account))

    async def update(self, account: Account) -> None:
        await self._write("update", "PUT", account_to_payload(account), account_id=account.id)

    async def delete(self, account_id: str) -> None:
        await self._write("delete", "DELETE", {"id": account_id}, account_id=account_id)

    async def _write(
        self,
        action: str,
        method: str,
        body: dict[str, Any],
        account_id: Optional[str] = None,
    ) -> None:
        data = await self._request(action, method, body, account_id)
        if not isinstance(data, dict) or data.get("success") is not True:
            raise PersistenceError(action, "persistence service did not confirm the write")

    async def _request(
        self,
        action: str,
        method: str,
        body: Optional[dict[str, Any]] = None,
        account_id: Optional[str] = None,
    ) -> Any:
        client = await self._get_client()
        try:
            resp = await client.request(method, ACCOUNTS_PATH, json=body)
        except httpx.HTTPError as e:
            logger.warning("Persistence request %s %s failed: %s", method, ACCOUNTS_PATH, e)
            raise PersistenceError(action, f"network error ({type(e).__name__})") from e

        if resp.status_code == 404 and account_id is not None:
            raise NotFoundError("Account", account_id)
        if not resp.is_success:
            raise PersistenceError(action, f"HTTP {resp.status_code}: {self._error_detail(resp)}")

        try:
            return resp.json()
        except ValueError as e:
            raise PersistenceError(action, "unparseable response body") from e

    @staticmethod
    def _error_detail(resp: httpx.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.reason_phrase or "unknown error"
        if isinstance(data, dict):
            for key in ("message", "detail", "details", "error"):
                if data.get(key):
                    return str(data[key])
        return resp.reason_phrase or "unknown error"
