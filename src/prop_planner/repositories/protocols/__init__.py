"""Repository protocol definitions (interfaces)."""

from prop_planner.repositories.protocols.account_repo import AccountRepository
from prop_planner.repositories.protocols.account_gateway import AccountGateway
from prop_planner.repositories.protocols.cache_repo import CacheRepository

__all__ = [
    "AccountRepository",
    "AccountGateway",
    "CacheRepository",
]
