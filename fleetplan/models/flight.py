"""
Flight-related Pydantic models for the scheduling engine.

This module contains the flight record, its fare quote, and the block window
an aircraft is occupied for around a flight.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from .enums import FlightStatus
from .airport import AirportModel
from .aircraft import AircraftModel
from .route import RouteModel


ZERO = Decimal("0.00")


class FareQuote(BaseModel):
    """Three-tier fare; every tier is non-negative and rounded to cents."""
    model_config = ConfigDict(frozen=True)

    economy: Decimal = Field(ZERO, ge=0)
    business: Decimal = Field(ZERO, ge=0)
    first: Decimal = Field(ZERO, ge=0)

    @classmethod
    def zero(cls) -> "FareQuote":
        return cls()

    @property
    def is_zero(self) -> bool:
        return self.economy == 0 and self.business == 0 and self.first == 0


class BlockWindow(BaseModel):
    """
    Half-open interval [start, end) during which an aircraft is occupied.

    Spans boarding before departure through deboarding after arrival.
    Never stored; always derived from the flight's departure and duration.
    """
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    def overlaps(self, other: "BlockWindow") -> bool:
        """Touching windows (one ends exactly when the other starts) do not overlap."""
        return self.start < other.end and other.start < self.end


class FlightModel(BaseModel):
    """
    Scheduled flight with its derived timing and fares.

    Candidate flights carry no flight_id until the repository saves them.
    """
    model_config = ConfigDict(from_attributes=True)

    flight_id: Optional[int] = None
    flight_number: str = Field(..., max_length=8, description="Operator code + 3-4 digits")
    departure_airport: AirportModel
    arrival_airport: AirportModel
    aircraft: AircraftModel
    route: Optional[RouteModel] = None
    departure: datetime = Field(..., description="Scheduled departure time")
    arrival: Optional[datetime] = Field(None, description="Scheduled arrival time")
    distance_km: float = Field(0.0, ge=0.0)
    flight_minutes: int = Field(0, ge=0)
    price_economy: Decimal = Field(ZERO, ge=0)
    price_business: Decimal = Field(ZERO, ge=0)
    price_first: Decimal = Field(ZERO, ge=0)
    status: FlightStatus = Field(default=FlightStatus.SCHEDULED)

    @property
    def fares(self) -> FareQuote:
        return FareQuote(
            economy=self.price_economy,
            business=self.price_business,
            first=self.price_first,
        )

    @property
    def duration_minutes(self) -> int:
        """Route duration, falling back to the flight's own minutes."""
        if self.route is not None and self.route.flight_minutes > 0:
            return self.route.flight_minutes
        return self.flight_minutes
