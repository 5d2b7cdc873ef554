"""
fleetplan Pydantic models package.

This package contains the Pydantic v2 models shared by the scheduling
services, the repositories and the SQL adapter.
"""

# Enums
from .enums import (
    FlightStatus,
    AircraftStatus,
    RejectionReason,
)

# Network and fleet
from .airport import (
    GeoPoint,
    AirlineModel,
    AirportModel,
)

from .aircraft import (
    AircraftTypeModel,
    AircraftModel,
)

from .route import (
    RouteModel,
    format_minutes,
)

# Flights and scheduling outcomes
from .flight import (
    FareQuote,
    BlockWindow,
    FlightModel,
)

from .results import ValidationResult

__all__ = [
    # Enums
    "FlightStatus",
    "AircraftStatus",
    "RejectionReason",

    # Network and fleet
    "GeoPoint",
    "AirlineModel",
    "AirportModel",
    "AircraftTypeModel",
    "AircraftModel",
    "RouteModel",
    "format_minutes",

    # Flights
    "FareQuote",
    "BlockWindow",
    "FlightModel",
    "ValidationResult",
]
