"""
Deterministic three-tier fare pricing.

The economy base fare covers a per-km rate, the per-seat share of the
aircraft's block-hour cost and an airport fee that depends on whether the
flight stays inside one country. Business and first multiply the base.
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..models.aircraft import AircraftModel, AircraftTypeModel
from ..models.airport import AirportModel
from ..models.flight import FareQuote
from ..utils.config import SchedulingPolicy

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def is_domestic(departure: Optional[AirportModel], arrival: Optional[AirportModel]) -> bool:
    """Both airports in the same country; an unknown country counts as international."""
    if departure is None or arrival is None:
        return False
    a = (departure.country or "").strip()
    b = (arrival.country or "").strip()
    return bool(a) and bool(b) and a.casefold() == b.casefold()


def round_fare(value: float) -> Decimal:
    """Round half-up to cents, going through the shortest decimal repr of the float."""
    return Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class PricingEngine:
    """Computes fares from distance, duration and aircraft economics."""

    def __init__(self, policy: Optional[SchedulingPolicy] = None):
        self.policy = policy or SchedulingPolicy()

    def base_fare(
        self,
        distance_km: float,
        flight_minutes: int,
        aircraft_type: AircraftTypeModel,
        domestic: bool,
    ) -> float:
        """Unrounded economy base, floored at zero."""
        fee = self.policy.domestic_fee if domestic else self.policy.international_fee
        hours = flight_minutes / 60.0
        base = (
            self.policy.base_price_per_km * distance_km
            + hours * aircraft_type.cost_per_hour / aircraft_type.pax_capacity
            + fee
        )
        return max(0.0, base)

    def price(
        self,
        distance_km: Optional[float],
        flight_minutes: Optional[int],
        aircraft_type: Optional[AircraftTypeModel],
        domestic: bool,
    ) -> FareQuote:
        """
        Price the three cabins.

        Args:
            distance_km: Leg distance
            flight_minutes: Airborne duration
            aircraft_type: Type supplying capacity and hourly cost
            domestic: Whether the domestic fee applies

        Returns:
            FareQuote; all zero when any input is missing or out of range
        """
        if aircraft_type is None or aircraft_type.pax_capacity <= 0:
            logger.warning("Cannot price flight without an aircraft type with seats")
            return FareQuote.zero()
        if distance_km is None or flight_minutes is None or distance_km < 0 or flight_minutes < 0:
            logger.warning(f"Cannot price flight: distance={distance_km} minutes={flight_minutes}")
            return FareQuote.zero()

        base = self.base_fare(distance_km, flight_minutes, aircraft_type, domestic)
        if not math.isfinite(base):
            logger.warning(f"Non-finite base fare for distance={distance_km} minutes={flight_minutes}")
            return FareQuote.zero()

        return FareQuote(
            economy=round_fare(base * self.policy.economy_factor),
            business=round_fare(base * self.policy.business_factor),
            first=round_fare(base * self.policy.first_factor),
        )

    def price_flight(
        self,
        departure_airport: Optional[AirportModel],
        arrival_airport: Optional[AirportModel],
        aircraft: Optional[AircraftModel],
        distance_km: Optional[float],
        flight_minutes: Optional[int],
    ) -> FareQuote:
        """Price a leg between two airports flown by an aircraft."""
        if aircraft is None or departure_airport is None or arrival_airport is None:
            return FareQuote.zero()
        return self.price(
            distance_km,
            flight_minutes,
            aircraft.aircraft_type,
            is_domestic(departure_airport, arrival_airport),
        )
