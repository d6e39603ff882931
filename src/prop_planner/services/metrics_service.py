"""Dashboard metric roll-ups."""

from decimal import Decimal
from typing import Iterable

from prop_planner.domain.models import Account
from prop_planner.domain.views import MetricsView


def compute_metrics(accounts: Iterable[Account]) -> MetricsView:
    """
    Aggregate balances, costs and withdrawals over all accounts.

    Formula: net_profit = total_withdrawals - total_costs;
    withdrawal_success_rate = accounts with >= 1 withdrawal / total * 100.
    """
    accounts = list(accounts)
    if not accounts:
        return MetricsView()

    total_balance = sum((a.size for a in accounts), Decimal("0"))
    total_costs = sum((a.cost for a in accounts), Decimal("0"))
    total_withdrawals = sum((a.total_withdrawn for a in accounts), Decimal("0"))
    with_withdrawals = sum(1 for a in accounts if a.withdrawals)

    return MetricsView(
        total_balance=total_balance,
        total_costs=total_costs,
        total_withdrawals=total_withdrawals,
        net_profit=total_withdrawals - total_costs,
        withdrawal_success_rate=Decimal(with_withdrawals) / Decimal(len(accounts)) * 100,
        account_count=len(accounts),
    )
