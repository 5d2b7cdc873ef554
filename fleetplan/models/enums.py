"""
Enums for the flight scheduling engine.

This module contains the enumeration types shared by models, services and the
persistence adapter.
"""

from enum import Enum


class FlightStatus(str, Enum):
    """Flight status enumeration for tracking flight states."""
    SCHEDULED = "scheduled"
    BOARDING = "boarding"
    DEPARTED = "departed"
    FLYING = "flying"
    LANDED = "landed"
    DEPLANING = "deplaning"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @property
    def is_terminal(self) -> bool:
        """Terminal flights no longer occupy their aircraft."""
        return self in (FlightStatus.COMPLETED, FlightStatus.CANCELLED)

    @property
    def is_in_progress(self) -> bool:
        """Flights between departure and arrival."""
        return self in (FlightStatus.DEPARTED, FlightStatus.FLYING, FlightStatus.LANDED)


class AircraftStatus(str, Enum):
    """Operational status of an aircraft."""
    AVAILABLE = "available"
    SCHEDULED = "scheduled"
    FLYING = "flying"
    UNKNOWN = "unknown"


class RejectionReason(str, Enum):
    """Why a candidate flight was refused."""
    INVALID_INPUT = "invalid_input"
    NUMBER_FORMAT = "number_format"
    NUMBER_CLASH = "number_clash"
    RETURN_NUMBER_TAKEN = "return_number_taken"
    LEAD_TIME = "lead_time"
    AIRCRAFT_STATUS = "aircraft_status"
    AIRCRAFT_LOCATION = "aircraft_location"
    AIRCRAFT_RANGE = "aircraft_range"
    TIME_OVERLAP = "time_overlap"
    ROUTE_UNAVAILABLE = "route_unavailable"
    NOT_MODIFIABLE = "not_modifiable"
