"""Account store with optimistic, rollback-safe persistence."""

import asyncio
import copy
import logging
import uuid
from typing import Awaitable, Callable, Optional, Protocol

from prop_planner.core.exceptions import (
    AppError,
    MalformedResponseError,
    NotFoundError,
    PersistenceError,
)
from prop_planner.domain.models import (
    Account,
    AccountDraft,
    AccountStatus,
    Withdrawal,
    WithdrawalDraft,
)
from prop_planner.repositories.codec import dump_accounts, load_accounts
from prop_planner.repositories.protocols import AccountGateway, CacheRepository

logger = logging.getLogger(__name__)

DEFAULT_CACHE_KEY = "prop-trader-accounts"


class StoreListener(Protocol):
    """Receives the committed collection and confirmed deletions."""

    def observe(self, accounts: list[Account]) -> None:
        ...

    def prune(self, account_id: str) -> int:
        ...


class AccountStore:
    """
    Authoritative in-memory account collection.

    Every mutation is applied locally first, then confirmed with the
    persistence gateway. On failure the collection is restored from a snapshot
    taken before the change, so callers only ever observe the fully applied
    state or the untouched previous state.

    Mutations are serialized: a second mutation waits until the first has
    been confirmed or rolled back. Reads are never blocked and see the
    optimistic state while a confirmation is pending.
    """

    def __init__(
        self,
        gateway: AccountGateway,
        cache: Optional[CacheRepository] = None,
        cache_key: str = DEFAULT_CACHE_KEY,
        listener: Optional[StoreListener] = None,
    ):
        self._gateway = gateway
        self._cache = cache
        self._cache_key = cache_key
        self._listener = listener
        self._accounts: list[Account] = []
        self._lock = asyncio.Lock()

    # Read accessors

    @property
    def accounts(self) -> list[Account]:
        """Copy of the current collection, in insertion order."""
        return copy.deepcopy(self._accounts)

    @property
    def active_accounts(self) -> list[Account]:
        """Copy of the accounts eligible for scheduling, in insertion order."""
        return [copy.deepcopy(a) for a in self._accounts if a.is_active]

    def get(self, account_id: str) -> Optional[Account]:
        """Return a copy of one account, or None."""
        for account in self._accounts:
            if account.id == account_id:
                return copy.deepcopy(account)
        return None

    # Loading

    async def load(self) -> list[Account]:
        """
        Populate the store at startup.

        The local mirror is read first; the remote collection then replaces it.
        If the remote read fails, the mirrored state is kept and the failure
        is raised as PersistenceError.
        """
        async with self._lock:
            cached = await asyncio.to_thread(self._read_cache)
            if cached is not None:
                self._accounts = cached

            try:
                remote = await self._gateway.list_all()
            except AppError as e:
                logger.error("Loading accounts failed, keeping %d cached: %s", len(self._accounts), e.message)
                self._notify()
                if isinstance(e, PersistenceError):
                    raise
                raise PersistenceError("load", e.message) from e

            self._accounts = remote
            await self._commit()
            return self.accounts

    # Mutations

    async def add(self, draft: AccountDraft) -> Account:
        """Create an account with a fresh id and no withdrawals."""
        account = Account(
            id=str(uuid.uuid4()),
            name=draft.name,
            company=draft.company,
            size=draft.size,
            cost=draft.cost,
            status=draft.status,
            suspension_date=draft.suspension_date,
            withdrawals=[],
        )

        def apply(accounts: list[Account]) -> list[Account]:
            return accounts + [account]

        await self._mutate("add", apply, lambda: self._gateway.create(copy.deepcopy(account)))
        return copy.deepcopy(account)

    async def update(self, account: Account) -> Account:
        """Replace the account with the same id (whole-record replace)."""
        async with self._lock:
            return await self._update_locked(account)

    async def delete(self, account_id: str) -> None:
        """
        Remove an account.

        Schedule references are pruned only after the gateway confirms; a
        failed delete leaves the schedule untouched.
        """

        def apply(accounts: list[Account]) -> list[Account]:
            return [a for a in accounts if a.id != account_id]

        await self._mutate("delete", apply, lambda: self._gateway.delete(account_id))
        if self._listener is not None:
            removed = self._listener.prune(account_id)
            logger.debug("Pruned %d schedule entries for deleted account %s", removed, account_id)

    async def add_withdrawal(
        self,
        account_id: str,
        draft: WithdrawalDraft,
    ) -> Optional[Account]:
        """Append a withdrawal to an account. Unknown account ids are ignored."""
        async with self._lock:
            current = self._find(account_id)
            if current is None:
                return None
            updated = copy.deepcopy(current)
            updated.withdrawals.append(
                Withdrawal(id=str(uuid.uuid4()), date=draft.date, amount=draft.amount)
            )
            return await self._update_locked(updated)

    async def delete_withdrawal(
        self,
        account_id: str,
        withdrawal_id: str,
    ) -> Optional[Account]:
        """Remove one withdrawal from an account. Unknown account ids are ignored."""
        async with self._lock:
            current = self._find(account_id)
            if current is None:
                return None
            updated = copy.deepcopy(current)
            updated.withdrawals = [w for w in updated.withdrawals if w.id != withdrawal_id]
            return await self._update_locked(updated)

    # Internals

    async def _update_locked(self, account: Account) -> Account:
        replacement = copy.deepcopy(account)
        if replacement.status != AccountStatus.SUSPENDED:
            replacement.suspension_date = None

        def apply(accounts: list[Account]) -> list[Account]:
            return [replacement if a.id == replacement.id else a for a in accounts]

        await self._transact("update", apply, lambda: self._gateway.update(copy.deepcopy(replacement)))
        return copy.deepcopy(replacement)

    async def _mutate(
        self,
        action: str,
        apply: Callable[[list[Account]], list[Account]],
        persist: Callable[[], Awaitable[None]],
    ) -> None:
        async with self._lock:
            await self._transact(action, apply, persist)

    async def _transact(
        self,
        action: str,
        apply: Callable[[list[Account]], list[Account]],
        persist: Callable[[], Awaitable[None]],
    ) -> None:
        """Snapshot, apply locally, await confirmation, then commit or restore."""
        snapshot = copy.deepcopy(self._accounts)
        self._accounts = apply(list(self._accounts))
        try:
            await persist()
        except NotFoundError:
            self._accounts = snapshot
            logger.error("Rolled back %s: account missing on persistence service", action)
            raise
        except (PersistenceError, MalformedResponseError) as e:
            self._accounts = snapshot
            logger.error("Rolled back %s: %s", action, e.message)
            if isinstance(e, PersistenceError):
                raise
            raise PersistenceError(action, e.message) from e
        except Exception as e:
            self._accounts = snapshot
            logger.exception("Rolled back %s after unexpected error", action)
            raise PersistenceError(action, str(e) or type(e).__name__) from e

        logger.debug("Committed %s (%d accounts)", action, len(self._accounts))
        await self._commit()

    def _find(self, account_id: str) -> Optional[Account]:
        for account in self._accounts:
            if account.id == account_id:
                return account
        return None

    async def _commit(self) -> None:
        await asyncio.to_thread(self._write_cache, copy.deepcopy(self._accounts))
        self._notify()

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener.observe(self.accounts)

    def _read_cache(self) -> Optional[list[Account]]:
        if self._cache is None:
            return None
        try:
            text = self._cache.get(self._cache_key)
            if text is None:
                return None
            return load_accounts(text, source="local cache")
        except Exception as e:
            logger.warning("Failed to read accounts from local cache: %s", e)
            return None

    def _write_cache(self, accounts: list[Account]) -> None:
        if self._cache is None:
            return
        try:
            self._cache.put(self._cache_key, dump_accounts(accounts))
        except Exception as e:
            logger.warning("Failed to save accounts to local cache: %s", e)
