"""View models for dashboard outputs."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class MetricsView:
    """Roll-up numbers across every tracked account."""

    total_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    total_costs: Decimal = field(default_factory=lambda: Decimal("0"))
    total_withdrawals: Decimal = field(default_factory=lambda: Decimal("0"))
    net_profit: Decimal = field(default_factory=lambda: Decimal("0"))
    withdrawal_success_rate: Decimal = field(default_factory=lambda: Decimal("0"))
    account_count: int = 0
