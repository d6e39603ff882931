"""Enumerations for domain models."""

from enum import Enum


class AccountStatus(str, Enum):
    """Lifecycle status of a prop-firm account."""

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class Day(str, Enum):
    """Trading weekdays, in schedule visitation order."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"


class Session(str, Enum):
    """Trading sessions within a day, in schedule visitation order."""

    LONDON = "london"
    NEW_YORK = "newYork"
