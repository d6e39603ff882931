"""Domain layer - business models with no framework dependencies."""

from prop_planner.domain.models import (
    Account,
    AccountDraft,
    Withdrawal,
    WithdrawalDraft,
    Schedule,
    AccountStatus,
    Day,
    Session,
)

__all__ = [
    "Account",
    "AccountDraft",
    "Withdrawal",
    "WithdrawalDraft",
    "Schedule",
    "AccountStatus",
    "Day",
    "Session",
]
