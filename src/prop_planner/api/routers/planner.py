"""Planner endpoints: accounts, withdrawals, schedule and metrics."""

from fastapi import APIRouter, Depends, Response

from prop_planner.api.deps import get_store, get_trigger, get_optimizer
from prop_planner.api.schemas import (
    AccountRecord,
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountListResponse,
    WithdrawalCreateRequest,
    ScheduleResponse,
    MetricsResponse,
)
from prop_planner.core.exceptions import NotFoundError
from prop_planner.domain.models import Account, Schedule
from prop_planner.providers import ScheduleOptimizer
from prop_planner.services import (
    AccountStore,
    ScheduleTrigger,
    compute_metrics,
    session_capacity,
)

router = APIRouter(prefix="/planner", tags=["planner"])


def _schedule_response(schedule: Schedule, store: AccountStore) -> ScheduleResponse:
    active_count = len(store.active_accounts)
    return ScheduleResponse(
        schedule=schedule.to_dict(),
        capacity=session_capacity(active_count) if active_count else 0,
        active_account_count=active_count,
    )


@router.get("/accounts", response_model=AccountListResponse)
def list_accounts(store: AccountStore = Depends(get_store)) -> AccountListResponse:
    """List all accounts in insertion order."""
    accounts = store.accounts
    return AccountListResponse(
        accounts=[AccountRecord.from_domain(a) for a in accounts],
        count=len(accounts),
    )


@router.post("/accounts", response_model=AccountRecord, status_code=201)
async def create_account(
    data: AccountCreateRequest,
    store: AccountStore = Depends(get_store),
) -> AccountRecord:
    """Add an account."""
    account = await store.add(data.to_draft())
    return AccountRecord.from_domain(account)


@router.put("/accounts/{account_id}", response_model=AccountRecord)
async def update_account(
    account_id: str,
    data: AccountUpdateRequest,
    store: AccountStore = Depends(get_store),
) -> AccountRecord:
    """Replace an account's fields. Withdrawals are kept unless provided."""
    current = store.get(account_id)
    if current is None:
        raise NotFoundError("Account", account_id)

    if data.withdrawals is None:
        withdrawals = current.withdrawals
    else:
        withdrawals = [w.to_domain() for w in data.withdrawals]
    account = Account(
        id=account_id,
        name=data.name,
        company=data.company,
        size=data.size,
        cost=data.cost,
        status=data.status,
        suspension_date=data.suspension_date,
        withdrawals=withdrawals,
    )
    updated = await store.update(account)
    return AccountRecord.from_domain(updated)


@router.delete("/accounts/{account_id}", status_code=204)
async def delete_account(
    account_id: str,
    store: AccountStore = Depends(get_store),
) -> Response:
    """Delete an account and drop it from the schedule."""
    if store.get(account_id) is None:
        raise NotFoundError("Account", account_id)
    await store.delete(account_id)
    return Response(status_code=204)


@router.post("/accounts/{account_id}/withdrawals", response_model=AccountRecord, status_code=201)
async def add_withdrawal(
    account_id: str,
    data: WithdrawalCreateRequest,
    store: AccountStore = Depends(get_store),
) -> AccountRecord:
    """Record a withdrawal on an account."""
    updated = await store.add_withdrawal(account_id, data.to_draft())
    if updated is None:
        raise NotFoundError("Account", account_id)
    return AccountRecord.from_domain(updated)


@router.delete("/accounts/{account_id}/withdrawals/{withdrawal_id}", response_model=AccountRecord)
async def delete_withdrawal(
    account_id: str,
    withdrawal_id: str,
    store: AccountStore = Depends(get_store),
) -> AccountRecord:
    """Remove a withdrawal from an account."""
    updated = await store.delete_withdrawal(account_id, withdrawal_id)
    if updated is None:
        raise NotFoundError("Account", account_id)
    return AccountRecord.from_domain(updated)


@router.get("/schedule", response_model=ScheduleResponse)
def get_schedule(
    store: AccountStore = Depends(get_store),
    trigger: ScheduleTrigger = Depends(get_trigger),
) -> ScheduleResponse:
    """Return the current weekly schedule."""
    return _schedule_response(trigger.schedule, store)


@router.post("/schedule/regenerate", response_model=ScheduleResponse)
def regenerate_schedule(
    store: AccountStore = Depends(get_store),
    trigger: ScheduleTrigger = Depends(get_trigger),
) -> ScheduleResponse:
    """Rebuild the schedule from the active accounts."""
    schedule = trigger.regenerate(store.accounts)
    return _schedule_response(schedule, store)


@router.post("/schedule/optimize", response_model=ScheduleResponse)
async def optimize_schedule(
    store: AccountStore = Depends(get_store),
    trigger: ScheduleTrigger = Depends(get_trigger),
    optimizer: ScheduleOptimizer = Depends(get_optimizer),
) -> ScheduleResponse:
    """Replace the schedule with the external optimizer's proposal."""
    schedule = await trigger.optimize(store.accounts, optimizer)
    return _schedule_response(schedule, store)


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(store: AccountStore = Depends(get_store)) -> MetricsResponse:
    """Return balance, cost and withdrawal roll-ups."""
    return MetricsResponse.from_view(compute_metrics(store.accounts))
