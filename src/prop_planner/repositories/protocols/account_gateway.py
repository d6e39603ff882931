"""Async persistence gateway protocol used by the account store."""

from typing import Protocol

from prop_planner.domain.models import Account


class AccountGateway(Protocol):
    """
    Remote copy of the account collection.

    Every method either completes or raises: PersistenceError for transport
    failures, non-success replies and unparseable bodies; NotFoundError when
    an update or delete targets an unknown id.
    """

    async def list_all(self) -> list[Account]:
        """Fetch the full account collection."""
        ...

    async def create(self, account: Account) -> None:
        """Store a new account."""
        ...

    async def update(self, account: Account) -> None:
        """Replace an existing account."""
        ...

    async def delete(self, account_id: str) -> None:
        """Remove an account."""
        ...
