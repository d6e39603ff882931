"""Account gateway implementations."""

from prop_planner.repositories.gateways.http_gateway import HttpAccountGateway
from prop_planner.repositories.gateways.local_gateway import LocalAccountGateway

__all__ = [
    "HttpAccountGateway",
    "LocalAccountGateway",
]
