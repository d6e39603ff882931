"""Account and Withdrawal domain models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from prop_planner.domain.models.enums import AccountStatus


@dataclass
class Withdrawal:
    """A single profit withdrawal, owned by exactly one account."""

    id: str
    date: date
    amount: Decimal


@dataclass
class Account:
    """
    Prop-firm trading account under management.

    Only ACTIVE accounts are eligible for scheduling. The suspension date is
    kept only while the account is SUSPENDED.
    """

    id: str
    name: str
    company: str
    size: Decimal
    cost: Decimal
    status: AccountStatus = AccountStatus.PENDING
    suspension_date: Optional[date] = None
    withdrawals: list[Withdrawal] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = AccountStatus(self.status)
        if self.status != AccountStatus.SUSPENDED:
            self.suspension_date = None

    @property
    def is_active(self) -> bool:
        """Return True if the account can be scheduled."""
        return self.status == AccountStatus.ACTIVE

    @property
    def total_withdrawn(self) -> Decimal:
        """Sum of all withdrawal amounts."""
        return sum((w.amount for w in self.withdrawals), Decimal("0"))


@dataclass
class AccountDraft:
    """Input data for creating an account."""

    name: str
    company: str
    size: Decimal
    cost: Decimal
    status: AccountStatus = AccountStatus.PENDING
    suspension_date: Optional[date] = None


@dataclass
class WithdrawalDraft:
    """Input data for recording a withdrawal."""

    date: date
    amount: Decimal
