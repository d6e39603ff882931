"""Core utilities and shared functionality."""

from prop_planner.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    MalformedResponseError,
    ScheduleError,
    OptimizerError,
    AnalyzerError,
)

__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "MalformedResponseError",
    "ScheduleError",
    "OptimizerError",
    "AnalyzerError",
]
