"""Persistence service for the account collection.

GET returns the whole collection; POST, PUT and DELETE change one account
and answer with the full updated collection.
"""

import logging

from fastapi import APIRouter, Depends

from prop_planner.api.deps import get_account_repo
from prop_planner.api.schemas import (
    AccountRecord,
    AccountDeleteRequest,
    AccountMutationResponse,
)
from prop_planner.core.exceptions import ValidationError
from prop_planner.repositories.protocols import AccountRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/accounts", tags=["persistence"])


def _collection(repo: AccountRepository) -> AccountMutationResponse:
    return AccountMutationResponse(
        success=True,
        accounts=[AccountRecord.from_domain(a) for a in repo.list_all()],
    )


@router.get("", response_model=list[AccountRecord])
def list_accounts(
    repo: AccountRepository = Depends(get_account_repo),
) -> list[AccountRecord]:
    """Return every stored account."""
    return [AccountRecord.from_domain(a) for a in repo.list_all()]


@router.post("", response_model=AccountMutationResponse)
def create_account(
    data: AccountRecord,
    repo: AccountRepository = Depends(get_account_repo),
) -> AccountMutationResponse:
    """Append a new account."""
    repo.create(data.to_domain())
    logger.info("Stored account %s", data.id)
    return _collection(repo)


@router.put("", response_model=AccountMutationResponse)
def update_account(
    data: AccountRecord,
    repo: AccountRepository = Depends(get_account_repo),
) -> AccountMutationResponse:
    """Replace an existing account."""
    repo.update(data.to_domain())
    return _collection(repo)


@router.delete("", response_model=AccountMutationResponse)
def delete_account(
    data: AccountDeleteRequest,
    repo: AccountRepository = Depends(get_account_repo),
) -> AccountMutationResponse:
    """Remove an account by id."""
    if not data.id:
        raise ValidationError("Account ID is required")
    repo.delete(data.id)
    logger.info("Deleted account %s", data.id)
    return _collection(repo)
