"""
Aircraft and aircraft type models.

Numeric type fields accept zero so that degenerate records reach the
calculators, which answer with their sentinel values instead of failing.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from .enums import AircraftStatus
from .airport import AirportModel


class AircraftTypeModel(BaseModel):
    """Performance and economics of an aircraft type."""
    model_config = ConfigDict(from_attributes=True)

    type_id: Optional[int] = None
    manufacturer: str = Field(..., max_length=50)
    model: str = Field(..., max_length=50)
    pax_capacity: int = Field(..., ge=0, description="Passenger seats")
    cargo_capacity_kg: float = Field(0.0, ge=0.0, description="Cargo capacity in kg")
    max_range_km: float = Field(..., ge=0.0, description="Maximum range in km")
    cruise_speed_kmh: float = Field(..., ge=0.0, description="Cruise speed in km/h")
    cost_per_hour: float = Field(..., description="Operating cost per block hour")

    @property
    def full_name(self) -> str:
        return f"{self.manufacturer} {self.model}"


class AircraftModel(BaseModel):
    """A tail in the fleet with its current position and status."""
    model_config = ConfigDict(from_attributes=True)

    aircraft_id: Optional[int] = None
    registration: str = Field(..., max_length=10, description="Tail registration")
    aircraft_type: AircraftTypeModel
    location: Optional[AirportModel] = Field(None, description="Airport the aircraft is parked at")
    status: AircraftStatus = Field(default=AircraftStatus.AVAILABLE)
