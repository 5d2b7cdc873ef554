"""
Repositories: abstract storage interfaces and their SQLAlchemy implementations.
"""

from .interfaces import FlightRepository, RouteRepository
from .sql import SqlFlightRepository, SqlRouteRepository, SqlFleetRepository

__all__ = [
    "FlightRepository",
    "RouteRepository",
    "SqlFlightRepository",
    "SqlRouteRepository",
    "SqlFleetRepository",
]
