"""Repository layer - data access abstractions and implementations."""

from prop_planner.repositories.protocols import (
    AccountRepository,
    AccountGateway,
    CacheRepository,
)

__all__ = [
    "AccountRepository",
    "AccountGateway",
    "CacheRepository",
]
