"""Conversion between Account objects and their JSON wire form."""

from typing import Any

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from prop_planner.core.exceptions import MalformedResponseError
from prop_planner.domain.models import Account
from prop_planner.repositories.records import AccountRecord

_RECORD_LIST = TypeAdapter(list[AccountRecord])


def account_to_payload(account: Account) -> dict[str, Any]:
    """Serialize one account to a JSON-compatible dict."""
    return AccountRecord.from_domain(account).model_dump(mode="json", by_alias=True)


def accounts_from_payload(data: Any, source: str) -> list[Account]:
    """Validate a JSON-decoded account list and convert it to domain objects."""
    try:
        records = _RECORD_LIST.validate_python(data)
    except PydanticValidationError as e:
        raise MalformedResponseError(source, f"{e.error_count()} invalid field(s)") from e
    return [r.to_domain() for r in records]


def dump_accounts(accounts: list[Account]) -> str:
    """Serialize an account collection to a JSON string."""
    records = [AccountRecord.from_domain(a) for a in accounts]
    return _RECORD_LIST.dump_json(records, by_alias=True).decode("utf-8")


def load_accounts(text: str, source: str) -> list[Account]:
    """Parse a JSON string produced by dump_accounts."""
    try:
        records = _RECORD_LIST.validate_json(text)
    except PydanticValidationError as e:
        raise MalformedResponseError(source, f"{e.error_count()} invalid field(s)") from e
    return [r.to_domain() for r in records]
