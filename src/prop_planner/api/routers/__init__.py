"""API routers package."""

from prop_planner.api.routers.accounts import router as accounts_router
from prop_planner.api.routers.planner import router as planner_router
from prop_planner.api.routers.stats import router as stats_router

__all__ = [
    "accounts_router",
    "planner_router",
    "stats_router",
]
