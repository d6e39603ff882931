"""Pydantic schemas for schedule and metrics endpoints."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from prop_planner.domain.views import MetricsView


class ScheduleResponse(BaseModel):
    """Weekly schedule keyed by weekday then session."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schedule: dict[str, dict[str, list[str]]]
    capacity: int
    active_account_count: int


class MetricsResponse(BaseModel):
    """Dashboard roll-up numbers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_balance: Decimal
    total_costs: Decimal
    total_withdrawals: Decimal
    net_profit: Decimal
    withdrawal_success_rate: Decimal
    account_count: int

    @classmethod
    def from_view(cls, view: MetricsView) -> "MetricsResponse":
        return cls(
            total_balance=view.total_balance,
            total_costs=view.total_costs,
            total_withdrawals=view.total_withdrawals,
            net_profit=view.net_profit,
            withdrawal_success_rate=view.withdrawal_success_rate,
            account_count=view.account_count,
        )
