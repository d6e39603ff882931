"""SQLAlchemy implementation of AccountRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from prop_planner.core.exceptions import NotFoundError, ValidationError
from prop_planner.domain.models import Account, Withdrawal
from prop_planner.repositories.sqlalchemy.orm_models import AccountORM, WithdrawalORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        if self._find(account.id) is not None:
            raise ValidationError(f"Account with id '{account.id}' already exists")

        orm_account = AccountORM(account_id=account.id)
        self._apply(orm_account, account)
        self._db.add(orm_account)
        self._db.commit()
        self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    def list_all(self) -> list[Account]:
        """List all accounts in insertion order."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.seq).all()
        return [self._to_domain(a) for a in orm_accounts]

    def update(self, account: Account) -> Account:
        """Replace an existing account, withdrawals included."""
        orm_account = self._find(account.id)
        if orm_account is None:
            raise NotFoundError("Account", account.id)
        self._apply(orm_account, account)
        self._db.commit()
        self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    def delete(self, account_id: str) -> None:
        """Delete an account and its withdrawals."""
        orm_account = self._find(account_id)
        if orm_account is None:
            raise NotFoundError("Account", account_id)
        self._db.delete(orm_account)
        self._db.commit()

    def _find(self, account_id: str) -> Optional[AccountORM]:
        return self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).first()

    @staticmethod
    def _apply(orm: AccountORM, account: Account) -> None:
        orm.name = account.name
        orm.company = account.company
        orm.size = account.size
        orm.cost = account.cost
        orm.status = account.status
        orm.suspension_date = account.suspension_date

        # Reconcile by id so kept rows are updated in place, not re-inserted
        existing = {w.withdrawal_id: w for w in orm.withdrawals}
        withdrawals = []
        for w in account.withdrawals:
            row = existing.get(w.id)
            if row is None:
                row = WithdrawalORM(withdrawal_id=w.id)
            row.date = w.date
            row.amount = w.amount
            withdrawals.append(row)
        orm.withdrawals = withdrawals

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            id=orm.account_id,
            name=orm.name,
            company=orm.company,
            size=orm.size,
            cost=orm.cost,
            status=orm.status,
            suspension_date=orm.suspension_date,
            withdrawals=[
                Withdrawal(id=w.withdrawal_id, date=w.date, amount=w.amount)
                for w in orm.withdrawals
            ],
        )
