"""Pydantic schemas for account endpoints. Wire records live in repositories.records."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prop_planner.domain.models import AccountDraft, AccountStatus, WithdrawalDraft
from prop_planner.repositories.records import AccountRecord, WithdrawalRecord

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccountDeleteRequest(BaseModel):
    """Body of a persistence-service delete."""

    id: Optional[str] = None


class AccountMutationResponse(BaseModel):
    """Persistence-service reply to a write."""

    model_config = _WIRE_CONFIG

    success: bool
    accounts: list[AccountRecord] = Field(default_factory=list)


class AccountCreateRequest(BaseModel):
    """Request schema for adding an account through the planner."""

    model_config = _WIRE_CONFIG

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    company: str = Field(..., min_length=1, max_length=255, description="Prop firm")
    size: Decimal = Field(..., ge=0, description="Account notional balance")
    cost: Decimal = Field(..., ge=0, description="Money paid for the account")
    status: AccountStatus = Field(default=AccountStatus.PENDING, description="Initial status")
    suspension_date: Optional[date] = None

    def to_draft(self) -> AccountDraft:
        return AccountDraft(
            name=self.name,
            company=self.company,
            size=self.size,
            cost=self.cost,
            status=self.status,
            suspension_date=self.suspension_date,
        )


class AccountUpdateRequest(AccountCreateRequest):
    """Request schema for a whole-record account update."""

    withdrawals: Optional[list[WithdrawalRecord]] = Field(
        default=None,
        description="Replacement withdrawals; existing ones are kept when omitted",
    )


class WithdrawalCreateRequest(BaseModel):
    """Request schema for recording a withdrawal."""

    date: date
    amount: Decimal = Field(..., gt=0)

    def to_draft(self) -> WithdrawalDraft:
        return WithdrawalDraft(date=self.date, amount=self.amount)


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountRecord]
    count: int
