"""View models for service outputs."""

from prop_planner.domain.views.metrics import MetricsView

__all__ = [
    "MetricsView",
]
