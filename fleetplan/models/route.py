"""
Route model: a directed airport pair flown by one operator.
"""

from typing import Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict

from .airport import AirportModel, AirlineModel


def format_minutes(minutes: int) -> str:
    """Format a duration as HH:MM."""
    minutes = max(0, int(minutes))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class RouteModel(BaseModel):
    """
    Directed route between two airports for an operator.

    A->B and B->A are distinct routes; the identity key is
    (departure ICAO, arrival ICAO, operator ICAO).
    """
    model_config = ConfigDict(from_attributes=True)

    route_id: Optional[int] = None
    departure_airport: AirportModel
    arrival_airport: AirportModel
    operator: AirlineModel
    distance_km: float = Field(0.0, ge=0.0, description="Great-circle distance in km")
    flight_minutes: int = Field(0, ge=0, description="Airborne duration in minutes")
    active: bool = True

    @property
    def route_code(self) -> str:
        return f"{self.departure_airport.icao}-{self.arrival_airport.icao}"

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.departure_airport.icao, self.arrival_airport.icao, self.operator.icao)

    @property
    def formatted_flight_time(self) -> str:
        return format_minutes(self.flight_minutes)
