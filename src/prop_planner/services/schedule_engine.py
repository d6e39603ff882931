"""Round-robin weekly schedule generation."""

from dataclasses import dataclass
from typing import Sequence

from prop_planner.domain.models import Account, Day, Schedule, Session

# Session capacity policy: small rosters get two seats per session,
# rosters of RICH_ROSTER_SIZE or more get three.
SMALL_ROSTER_CAPACITY = 2
RICH_ROSTER_CAPACITY = 3
RICH_ROSTER_SIZE = 3


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Engine variant selection.

    skip_friday_new_york: leave Friday's New York session empty. The slot is
    skipped without advancing the rotation.
    """

    skip_friday_new_york: bool = False


def session_capacity(account_count: int) -> int:
    """Maximum ids per slot for a roster of the given size."""
    if account_count >= RICH_ROSTER_SIZE:
        return RICH_ROSTER_CAPACITY
    return SMALL_ROSTER_CAPACITY


def visitation_order(config: ScheduleConfig) -> list[tuple[Day, Session]]:
    """Slots in fill order: Monday to Friday, London before New York."""
    order = []
    for day in Day:
        for session in Session:
            if config.skip_friday_new_york and day == Day.FRIDAY and session == Session.NEW_YORK:
                continue
            order.append((day, session))
    return order


def generate(
    active_accounts: Sequence[Account],
    config: ScheduleConfig = ScheduleConfig(),
) -> Schedule:
    """
    Distribute accounts across the week with a single cyclic cursor.

    Each slot receives min(capacity, n) ids. The cursor advances across all
    slots in visitation order, so every account is placed once before any
    account is placed a second time. A slot never holds more entries than
    there are accounts.
    """
    schedule = Schedule.empty()
    account_ids = [account.id for account in active_accounts]
    if not account_ids:
        return schedule

    per_slot = min(session_capacity(len(account_ids)), len(account_ids))
    cursor = 0
    for day, session in visitation_order(config):
        slot = schedule.slot(day, session)
        for _ in range(per_slot):
            slot.append(account_ids[cursor])
            cursor = (cursor + 1) % len(account_ids)
    return schedule
