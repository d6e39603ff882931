"""Decides when the weekly schedule is regenerated."""

import logging
from typing import Iterable, Optional

from prop_planner.core.exceptions import MalformedResponseError, ScheduleError
from prop_planner.domain.models import Account, Schedule
from prop_planner.providers.schedule_optimizer import ScheduleOptimizer
from prop_planner.services.schedule_engine import ScheduleConfig, generate, session_capacity

logger = logging.getLogger(__name__)

NO_ACTIVE_ACCOUNTS_MESSAGE = (
    "Please add at least one active account to generate the schedule. "
    "Pending or suspended accounts are not scheduled."
)


class ScheduleTrigger:
    """
    Owns the current schedule and regenerates it on growth of the active set.

    Transitions on each observed change of the committed account collection:

    - active count grows (or goes from zero to non-zero): regenerate
    - active count drops to zero: reset to the empty schedule
    - otherwise: keep the schedule, dropping ids of accounts that no longer
      exist at all. Accounts that are still present but no longer active
      keep their slots.
    """

    def __init__(self, config: Optional[ScheduleConfig] = None):
        self._config = config or ScheduleConfig()
        self._schedule = Schedule.empty()
        self._previous_active_count = 0

    @property
    def schedule(self) -> Schedule:
        """Copy of the current schedule."""
        return self._schedule.copy()

    @property
    def config(self) -> ScheduleConfig:
        return self._config

    def observe(self, accounts: Iterable[Account]) -> None:
        """Apply the trigger policy to a committed account collection."""
        accounts = list(accounts)
        active = [a for a in accounts if a.is_active]
        current = len(active)
        previous = self._previous_active_count

        if current > previous:
            self._schedule = generate(active, self._config)
            logger.info("Active accounts grew %d -> %d, schedule regenerated", previous, current)
        elif current == 0 and previous > 0:
            self._schedule = Schedule.empty()
            logger.info("No active accounts left, schedule cleared")
        elif current > 0:
            present = {a.id for a in accounts}
            for account_id in self._schedule.account_ids() - present:
                self._schedule.prune(account_id)

        self._previous_active_count = current

    def prune(self, account_id: str) -> int:
        """Remove a deleted account from every slot."""
        return self._schedule.prune(account_id)

    def regenerate(self, accounts: Iterable[Account]) -> Schedule:
        """
        Explicitly rebuild the schedule from the active accounts.

        Raises ScheduleError and leaves the schedule unchanged when no account
        is active.
        """
        active = [a for a in accounts if a.is_active]
        if not active:
            raise ScheduleError(NO_ACTIVE_ACCOUNTS_MESSAGE)
        self._schedule = generate(active, self._config)
        logger.info("Schedule regenerated on request for %d active accounts", len(active))
        return self.schedule

    async def optimize(
        self,
        accounts: Iterable[Account],
        optimizer: ScheduleOptimizer,
    ) -> Schedule:
        """
        Replace the schedule with one proposed by the external optimizer.

        The proposal must cover all five weekdays with both sessions. It may
        only reference active accounts and must respect the engine's slot
        bound. On any failure the current schedule is kept.
        """
        active = [a for a in accounts if a.is_active]
        if not active:
            raise ScheduleError(NO_ACTIVE_ACCOUNTS_MESSAGE)

        raw = await optimizer.optimize(active)

        proposal = Schedule.from_dict(raw, source="schedule optimizer")
        self._check_proposal(proposal, active)
        self._schedule = proposal
        logger.info("Schedule replaced by optimizer proposal")
        return self.schedule

    @staticmethod
    def _check_proposal(proposal: Schedule, active: list[Account]) -> None:
        active_ids = {a.id for a in active}
        unknown = proposal.account_ids() - active_ids
        if unknown:
            raise MalformedResponseError(
                "schedule optimizer",
                f"unknown or inactive account ids: {', '.join(sorted(unknown))}",
            )

        bound = min(session_capacity(len(active)), len(active))
        for day, sessions in proposal.slots.items():
            for session, ids in sessions.items():
                if len(ids) > bound:
                    raise MalformedResponseError(
                        "schedule optimizer",
                        f"'{day.value}.{session.value}' holds {len(ids)} ids, limit is {bound}",
                    )
