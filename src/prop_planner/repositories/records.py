"""Account wire records shared by the persistence service, the HTTP gateway and the local mirror."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prop_planner.domain.models import Account, AccountStatus, Withdrawal

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WithdrawalRecord(BaseModel):
    """Wire representation of a withdrawal."""

    model_config = _WIRE_CONFIG

    id: str = Field(..., min_length=1)
    date: date
    amount: Decimal = Field(..., gt=0)

    @classmethod
    def from_domain(cls, withdrawal: Withdrawal) -> "WithdrawalRecord":
        return cls(id=withdrawal.id, date=withdrawal.date, amount=withdrawal.amount)

    def to_domain(self) -> Withdrawal:
        return Withdrawal(id=self.id, date=self.date, amount=self.amount)


class AccountRecord(BaseModel):
    """
    Wire representation of a full account.

    Used by the persistence service, the HTTP gateway and the local mirror.
    Keys are camelCase on the wire (``suspensionDate``).
    """

    model_config = _WIRE_CONFIG

    id: str = Field(..., min_length=1)
    name: str
    company: str
    size: Decimal = Field(..., ge=0)
    cost: Decimal = Field(..., ge=0)
    status: AccountStatus
    suspension_date: Optional[date] = None
    withdrawals: list[WithdrawalRecord] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, account: Account) -> "AccountRecord":
        return cls(
            id=account.id,
            name=account.name,
            company=account.company,
            size=account.size,
            cost=account.cost,
            status=account.status,
            suspension_date=account.suspension_date,
            withdrawals=[WithdrawalRecord.from_domain(w) for w in account.withdrawals],
        )

    def to_domain(self) -> Account:
        return Account(
            id=self.id,
            name=self.name,
            company=self.company,
            size=self.size,
            cost=self.cost,
            status=self.status,
            suspension_date=self.suspension_date,
            withdrawals=[w.to_domain() for w in self.withdrawals],
        )

