"""Weekly schedule model."""

from dataclasses import dataclass, field
from typing import Any

from prop_planner.core.exceptions import MalformedResponseError
from prop_planner.domain.models.enums import Day, Session


def _empty_slots() -> dict[Day, dict[Session, list[str]]]:
    return {day: {session: [] for session in Session} for day in Day}


@dataclass
class Schedule:
    """
    Weekly plan: weekday -> session -> ordered account ids.

    Derived from the account store; never the source of truth and safe to
    regenerate at any time.
    """

    slots: dict[Day, dict[Session, list[str]]] = field(default_factory=_empty_slots)

    @classmethod
    def empty(cls) -> "Schedule":
        """Return a schedule with every slot empty."""
        return cls()

    def slot(self, day: Day, session: Session) -> list[str]:
        """Return the id list for one (day, session) slot."""
        return self.slots[Day(day)][Session(session)]

    def account_ids(self) -> set[str]:
        """Return every account id referenced anywhere in the schedule."""
        return {
            account_id
            for sessions in self.slots.values()
            for ids in sessions.values()
            for account_id in ids
        }

    def prune(self, account_id: str) -> int:
        """
        Remove an account id from every slot.

        Other ids keep their relative order. Returns the number of entries removed.
        """
        removed = 0
        for sessions in self.slots.values():
            for session, ids in sessions.items():
                kept = [i for i in ids if i != account_id]
                removed += len(ids) - len(kept)
                sessions[session] = kept
        return removed

    def copy(self) -> "Schedule":
        return Schedule(
            slots={
                day: {session: list(ids) for session, ids in sessions.items()}
                for day, sessions in self.slots.items()
            }
        )

    def to_dict(self) -> dict[str, dict[str, list[str]]]:
        """Serialize to the wire shape ``{"monday": {"london": [...], "newYork": [...]}}``."""
        return {
            day.value: {session.value: list(ids) for session, ids in sessions.items()}
            for day, sessions in self.slots.items()
        }

    @classmethod
    def from_dict(cls, data: Any, source: str = "schedule") -> "Schedule":
        """
        Build a schedule from its wire shape.

        All five weekdays must be present, each with both sessions holding a
        list of string ids.
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(source, "expected an object keyed by weekday")

        slots = _empty_slots()
        for day in Day:
            sessions = data.get(day.value)
            if not isinstance(sessions, dict):
                raise MalformedResponseError(source, f"missing day '{day.value}'")
            for session in Session:
                ids = sessions.get(session.value)
                if not isinstance(ids, list):
                    raise MalformedResponseError(
                        source, f"missing session '{session.value}' on '{day.value}'"
                    )
                if not all(isinstance(i, str) for i in ids):
                    raise MalformedResponseError(
                        source, f"non-string id in '{day.value}.{session.value}'"
                    )
                slots[day][session] = list(ids)
        return cls(slots=slots)
