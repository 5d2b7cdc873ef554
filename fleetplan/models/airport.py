"""
Airport and airline Pydantic models.

Airports are immutable once persisted; their coordinates feed the
great-circle distance used for route planning.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class GeoPoint(BaseModel):
    """Geographic position in decimal degrees."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(0.0, ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(0.0, ge=-180.0, le=180.0, description="Longitude in degrees")

    @property
    def is_unset(self) -> bool:
        """(0, 0) marks a location that was never recorded."""
        return self.latitude == 0.0 and self.longitude == 0.0


class AirlineModel(BaseModel):
    """Operating airline; its ICAO code prefixes every flight number."""
    model_config = ConfigDict(from_attributes=True)

    airline_id: Optional[int] = None
    icao: str = Field(..., pattern=r"^[A-Z]{3}$", description="3-letter ICAO airline code")
    name: Optional[str] = Field(None, max_length=100, description="Airline name")


class AirportModel(BaseModel):
    """Airport with ICAO/IATA identification and position."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    airport_id: Optional[int] = None
    icao: str = Field(..., pattern=r"^[A-Z]{4}$", description="4-letter ICAO code")
    iata: Optional[str] = Field(None, max_length=3, description="3-letter IATA code")
    name: str = Field(..., max_length=100, description="Airport name")
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    location: GeoPoint = Field(default_factory=GeoPoint)

    def same_airport(self, other: Optional["AirportModel"]) -> bool:
        """Compare by database id when both have one, otherwise by ICAO code."""
        if other is None:
            return False
        if self.airport_id is not None and other.airport_id is not None:
            return self.airport_id == other.airport_id
        return self.icao == other.icao
