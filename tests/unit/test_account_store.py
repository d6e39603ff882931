"""
Unit tests for AccountStore.

Tests cover:
- Loading from the gateway and from the local mirror
- Optimistic add/update/delete with confirmation
- Rollback law on persistence failure
- Schedule pruning only after a confirmed delete
- Withdrawal add/remove and silent no-op for unknown accounts
- Suspension date clearing
- Serialization of overlapping mutations
"""

import asyncio
import threading
from datetime import date
from decimal import Decimal

import pytest

from prop_planner.core.exceptions import NotFoundError, PersistenceError
from prop_planner.domain.models import (
    AccountDraft,
    AccountStatus,
    Day,
    Session,
    WithdrawalDraft,
)
from prop_planner.repositories.codec import dump_accounts
from prop_planner.services import AccountStore, ScheduleTrigger

from tests.conftest import InMemoryGateway, PausedGateway, make_account, make_roster


def _draft(name: str = "Evaluation 1", status: AccountStatus = AccountStatus.ACTIVE) -> AccountDraft:
    return AccountDraft(
        name=name,
        company="FTMO",
        size=Decimal("100000"),
        cost=Decimal("540"),
        status=status,
    )


class MemoryCache:
    """Dict-backed CacheRepository."""

    def __init__(self):
        self.values: dict[str, str] = {}

    def get(self, key):
        return self.values.get(key)

    def put(self, key, value):
        self.values[key] = value


class BrokenCache:
    """Cache whose every call fails."""

    def get(self, key):
        raise OSError("disk unavailable")

    def put(self, key, value):
        raise OSError("disk unavailable")


# =============================================================================
# LOAD TESTS
# =============================================================================


class TestLoad:
    """Tests for store start-up."""

    def test_load_replaces_state_with_remote_collection(self, seeded_store):
        store = seeded_store(make_roster("A", "B"))

        assert [a.id for a in store.accounts] == ["A", "B"]

    def test_load_failure_keeps_cached_accounts(self, gateway: InMemoryGateway):
        """
        GIVEN a local mirror holding account A and an unreachable service
        WHEN the store loads
        THEN PersistenceError is raised and A is kept
        """
        cache = MemoryCache()
        cache.put("prop-trader-accounts", dump_accounts([make_account("A")]))
        gateway.fail_on.add("load")
        store = AccountStore(gateway=gateway, cache=cache)

        with pytest.raises(PersistenceError) as exc_info:
            asyncio.run(store.load())

        assert exc_info.value.action == "load"
        assert [a.id for a in store.accounts] == ["A"]

    def test_load_notifies_trigger(self, seeded_store, trigger: ScheduleTrigger):
        seeded_store(make_roster("A", "B", "C"))

        assert trigger.schedule.slot(Day.MONDAY, Session.LONDON) == ["A", "B", "C"]

    def test_unreadable_cache_is_ignored(self, gateway: InMemoryGateway):
        gateway.accounts = [make_account("A")]
        store = AccountStore(gateway=gateway, cache=BrokenCache())

        asyncio.run(store.load())

        assert [a.id for a in store.accounts] == ["A"]


# =============================================================================
# ADD TESTS
# =============================================================================


class TestAdd:
    """Tests for adding accounts."""

    def test_add_assigns_id_and_persists(self, store: AccountStore, gateway: InMemoryGateway):
        account = asyncio.run(store.add(_draft()))

        assert account.id
        assert account.withdrawals == []
        assert [a.id for a in store.accounts] == [account.id]
        assert [a.id for a in gateway.accounts] == [account.id]

    def test_add_ids_are_unique(self, store: AccountStore):
        async def scenario():
            first = await store.add(_draft("one"))
            second = await store.add(_draft("two"))
            return first, second

        first, second = asyncio.run(scenario())

        assert first.id != second.id

    def test_add_failure_rolls_back(self, seeded_store, gateway: InMemoryGateway):
        """
        GIVEN a store with two accounts and a failing service
        WHEN I add an account
        THEN the list is unchanged and an add error is raised
        """
        store = seeded_store(make_roster("A", "B"))
        before = store.accounts
        gateway.fail_on.add("add")

        with pytest.raises(PersistenceError) as exc_info:
            asyncio.run(store.add(_draft()))

        assert exc_info.value.action == "add"
        assert "Failed to add account" in exc_info.value.message
        assert store.accounts == before
        assert len(store.accounts) == 2

    def test_add_is_visible_before_confirmation(self):
        """
        GIVEN a service that has not answered yet
        WHEN an add is in flight
        THEN the new account is already in local state
        """
        gateway = PausedGateway()
        store = AccountStore(gateway=gateway)

        async def scenario():
            task = asyncio.create_task(store.add(_draft("pending-confirmation")))
            await gateway.started.wait()
            in_flight = [a.name for a in store.accounts]
            gateway.release.set()
            await task
            return in_flight

        in_flight = asyncio.run(scenario())

        assert in_flight == ["pending-confirmation"]
        assert [a.name for a in store.accounts] == ["pending-confirmation"]


# =============================================================================
# UPDATE TESTS
# =============================================================================


class TestUpdate:
    """Tests for whole-record updates."""

    def test_update_replaces_record(self, seeded_store, gateway: InMemoryGateway):
        store = seeded_store(make_roster("A", "B"))
        changed = store.get("A")
        changed.name = "Renamed"
        changed.size = Decimal("50000")

        asyncio.run(store.update(changed))

        assert store.get("A").name == "Renamed"
        assert gateway.accounts[0].size == Decimal("50000")
        assert [a.id for a in store.accounts] == ["A", "B"]

    def test_update_failure_restores_snapshot(self, seeded_store, gateway: InMemoryGateway):
        store = seeded_store(make_roster("A", "B"))
        before = store.accounts
        changed = store.get("B")
        changed.status = AccountStatus.SUSPENDED
        gateway.fail_on.add("update")

        with pytest.raises(PersistenceError) as exc_info:
            asyncio.run(store.update(changed))

        assert exc_info.value.action == "update"
        assert store.accounts == before

    def test_update_unknown_on_server_is_explicit_error(self, seeded_store, gateway: InMemoryGateway):
        """
        GIVEN the service no longer holds account B
        WHEN I update B
        THEN NotFoundError is raised and local state is restored
        """
        store = seeded_store(make_roster("A", "B"))
        gateway.accounts = [a for a in gateway.accounts if a.id != "B"]
        before = store.accounts
        changed = store.get("B")
        changed.name = "Ghost"

        with pytest.raises(NotFoundError):
            asyncio.run(store.update(changed))

        assert store.accounts == before

    def test_leaving_suspended_clears_suspension_date(self, seeded_store):
        store = seeded_store([
            make_account("A", status=AccountStatus.SUSPENDED, suspension_date=date(2024, 7, 1)),
        ])
        changed = store.get("A")
        assert changed.suspension_date == date(2024, 7, 1)
        changed.status = AccountStatus.ACTIVE

        updated = asyncio.run(store.update(changed))

        assert updated.suspension_date is None
        assert store.get("A").suspension_date is None


# =============================================================================
# DELETE TESTS
# =============================================================================


class TestDelete:
    """Tests for account deletion and schedule pruning."""

    def test_confirmed_delete_prunes_schedule(self, seeded_store, trigger: ScheduleTrigger):
        """
        GIVEN accounts A..E scheduled round robin, with C in several slots
        WHEN C is deleted and the service confirms
        THEN no slot contains C and other ids keep their order
        """
        store = seeded_store(make_roster("A", "B", "C", "D", "E"))
        before = trigger.schedule
        assert before.slot(Day.MONDAY, Session.LONDON) == ["A", "B", "C"]

        asyncio.run(store.delete("C"))

        after = trigger.schedule
        assert "C" not in after.account_ids()
        assert after.slot(Day.MONDAY, Session.LONDON) == ["A", "B"]
        assert after.slot(Day.TUESDAY, Session.LONDON) == ["B", "D"]
        assert after.slot(Day.MONDAY, Session.NEW_YORK) == ["D", "E", "A"]
        assert store.get("C") is None

    def test_failed_delete_restores_and_keeps_schedule(
        self,
        seeded_store,
        gateway: InMemoryGateway,
        trigger: ScheduleTrigger,
    ):
        store = seeded_store(make_roster("A", "B", "C"))
        accounts_before = store.accounts
        schedule_before = trigger.schedule
        gateway.fail_on.add("delete")

        with pytest.raises(PersistenceError) as exc_info:
            asyncio.run(store.delete("B"))

        assert exc_info.value.action == "delete"
        assert store.accounts == accounts_before
        assert trigger.schedule == schedule_before

    def test_delete_unknown_on_server_restores(self, seeded_store, gateway: InMemoryGateway):
        store = seeded_store(make_roster("A"))
        gateway.accounts = []
        before = store.accounts

        with pytest.raises(NotFoundError):
            asyncio.run(store.delete("A"))

        assert store.accounts == before


# =============================================================================
# WITHDRAWAL TESTS
# =============================================================================


class TestWithdrawals:
    """Tests for withdrawal sub-record mutations."""

    def test_add_withdrawal_appends_with_generated_id(self, seeded_store, gateway: InMemoryGateway):
        store = seeded_store(make_roster("A"))

        async def scenario():
            await store.add_withdrawal("A", WithdrawalDraft(date=date(2024, 7, 1), amount=Decimal("800")))
            return await store.add_withdrawal("A", WithdrawalDraft(date=date(2024, 8, 1), amount=Decimal("1200")))

        updated = asyncio.run(scenario())

        assert [w.amount for w in updated.withdrawals] == [Decimal("800"), Decimal("1200")]
        assert updated.withdrawals[0].id != updated.withdrawals[1].id
        assert len(gateway.accounts[0].withdrawals) == 2

    def test_delete_withdrawal_filters_by_id(self, seeded_store):
        store = seeded_store(make_roster("A"))
        updated = asyncio.run(
            store.add_withdrawal("A", WithdrawalDraft(date=date(2024, 7, 1), amount=Decimal("800")))
        )
        withdrawal_id = updated.withdrawals[0].id

        result = asyncio.run(store.delete_withdrawal("A", withdrawal_id))

        assert result.withdrawals == []
        assert store.get("A").withdrawals == []

    def test_withdrawal_on_unknown_account_is_noop(self, seeded_store, gateway: InMemoryGateway):
        store = seeded_store(make_roster("A"))
        before = store.accounts
        calls_before = list(gateway.calls)

        added = asyncio.run(
            store.add_withdrawal("missing", WithdrawalDraft(date=date(2024, 7, 1), amount=Decimal("10")))
        )
        removed = asyncio.run(store.delete_withdrawal("missing", "w-1"))

        assert added is None
        assert removed is None
        assert store.accounts == before
        assert gateway.calls == calls_before

    def test_failed_withdrawal_rolls_back(self, seeded_store, gateway: InMemoryGateway):
        store = seeded_store(make_roster("A"))
        before = store.accounts
        gateway.fail_on.add("update")

        with pytest.raises(PersistenceError):
            asyncio.run(
                store.add_withdrawal("A", WithdrawalDraft(date=date(2024, 7, 1), amount=Decimal("10")))
            )

        assert store.accounts == before


# =============================================================================
# LOCAL MIRROR TESTS
# =============================================================================


class TestLocalMirror:
    """Tests for the local durable mirror of committed state."""

    def test_committed_changes_are_mirrored(self, gateway: InMemoryGateway):
        cache = MemoryCache()
        store = AccountStore(gateway=gateway, cache=cache, cache_key="mirror")

        account = asyncio.run(store.add(_draft()))

        assert account.id in cache.values["mirror"]

    def test_rolled_back_changes_are_not_mirrored(self, gateway: InMemoryGateway):
        cache = MemoryCache()
        store = AccountStore(gateway=gateway, cache=cache, cache_key="mirror")
        gateway.fail_on.add("add")

        with pytest.raises(PersistenceError):
            asyncio.run(store.add(_draft()))

        assert "mirror" not in cache.values

    def test_mirror_write_failure_is_not_fatal(self, gateway: InMemoryGateway):
        store = AccountStore(gateway=gateway, cache=BrokenCache())

        account = asyncio.run(store.add(_draft()))

        assert store.get(account.id) is not None


# =============================================================================
# CONCURRENCY TESTS
# =============================================================================


class TestSerializedMutations:
    """Overlapping mutations are applied one after another."""

    def test_delete_waits_for_in_flight_update(self):
        """
        GIVEN an update of A still waiting for confirmation
        WHEN a delete of A is issued
        THEN the delete starts only after the update settles
        """
        gateway = PausedGateway([make_account("A")])
        store = AccountStore(gateway=gateway)

        async def scenario():
            await store.load()
            changed = store.get("A")
            changed.name = "Renamed"
            update = asyncio.create_task(store.update(changed))
            await gateway.started.wait()
            delete = asyncio.create_task(store.delete("A"))
            await asyncio.sleep(0)
            calls_while_paused = [c[0] for c in gateway.calls]
            gateway.release.set()
            await update
            await delete
            return calls_while_paused

        calls_while_paused = asyncio.run(scenario())

        assert "delete" not in calls_while_paused
        assert [c[0] for c in gateway.calls] == ["load", "update", "delete"]
        assert store.accounts == []


class TestMirrorThreading:
    """Mirror I/O stays off the event loop thread."""

    def test_cache_calls_run_in_worker_threads(self, gateway: InMemoryGateway):
        class RecordingCache(MemoryCache):
            def __init__(self):
                super().__init__()
                self.threads: list[int] = []

            def get(self, key):
                self.threads.append(threading.get_ident())
                return super().get(key)

            def put(self, key, value):
                self.threads.append(threading.get_ident())
                super().put(key, value)

        cache = RecordingCache()
        store = AccountStore(gateway=gateway, cache=cache)

        async def scenario():
            await store.load()
            await store.add(_draft())
            return threading.get_ident()

        loop_thread = asyncio.run(scenario())

        assert len(cache.threads) == 3
        assert loop_thread not in cache.threads
