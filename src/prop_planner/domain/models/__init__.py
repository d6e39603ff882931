"""Domain models package."""

from prop_planner.domain.models.enums import AccountStatus, Day, Session
from prop_planner.domain.models.account import (
    Account,
    AccountDraft,
    Withdrawal,
    WithdrawalDraft,
)
from prop_planner.domain.models.schedule import Schedule

__all__ = [
    "AccountStatus",
    "Day",
    "Session",
    "Account",
    "AccountDraft",
    "Withdrawal",
    "WithdrawalDraft",
    "Schedule",
]
