"""Account repository protocol."""

from typing import Protocol

from prop_planner.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access inside the persistence service."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts in insertion order."""
        ...

    def update(self, account: Account) -> Account:
        """Replace an existing account, withdrawals included."""
        ...

    def delete(self, account_id: str) -> None:
        """Delete an account and its withdrawals."""
        ...
