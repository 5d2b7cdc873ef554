"""
Single-flight validation.

Runs a candidate through the full chain (number, distance and duration,
block window, aircraft availability, pricing) and returns the derived flight
when every rule passes. The first failing rule is reported.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..models.enums import RejectionReason
from ..models.flight import FlightModel
from ..models.results import ValidationResult
from ..repositories.interfaces import FlightRepository
from ..utils.config import SchedulingContext
from .availability import AvailabilityChecker
from .block_time import BlockTimeCalculator
from .flight_numbers import FlightNumberAllocator
from .geo import GeoCalculator
from .pricing import PricingEngine

logger = logging.getLogger(__name__)


def _is_aware(moment: datetime) -> bool:
    return moment.tzinfo is not None and moment.utcoffset() is not None


class FlightValidator:
    """Validates candidate flights and fills in their derived fields."""

    def __init__(
        self,
        context: SchedulingContext,
        flight_repository: FlightRepository,
        availability: Optional[AvailabilityChecker] = None,
        pricing: Optional[PricingEngine] = None,
        numbers: Optional[FlightNumberAllocator] = None,
    ):
        self.context = context
        self.flights = flight_repository
        self.block_times = BlockTimeCalculator(context.policy)
        self.availability = availability or AvailabilityChecker(
            flight_repository, context.policy, self.block_times
        )
        self.pricing = pricing or PricingEngine(context.policy)
        self.numbers = numbers or FlightNumberAllocator(context.policy)

    def validate(
        self,
        flight: FlightModel,
        now: Optional[datetime] = None,
        excluding_flight_id: Optional[int] = None,
        chained_from: Optional[FlightModel] = None,
    ) -> ValidationResult:
        """
        Check every scheduling rule for a candidate flight.

        Args:
            flight: Candidate flight; derived fields may be empty
            now: Reference time for the lead-time rule, defaults to the context clock
            excluding_flight_id: Stored flight being edited, ignored by the
                uniqueness and overlap checks
            chained_from: Committed flight of the same aircraft this one follows

        Returns:
            ValidationResult carrying the derived flight when accepted
        """
        now = now or self.context.now()
        operator_code = self.context.operator.icao

        if _is_aware(flight.departure) != _is_aware(now):
            return ValidationResult.rejected(
                RejectionReason.INVALID_INPUT,
                "Departure and the scheduling clock must both be naive or both be timezone-aware",
                departure=flight.departure.isoformat(),
            )

        invalid = self._check_inputs(flight)
        if invalid is not None:
            return invalid

        if not self.numbers.is_valid_format(flight.flight_number, operator_code):
            return ValidationResult.rejected(
                RejectionReason.NUMBER_FORMAT,
                f"Flight number {flight.flight_number} must be {operator_code} followed by 3-4 digits",
            )

        earliest = now + timedelta(minutes=self.context.policy.min_lead_time_minutes)
        if flight.departure < earliest:
            return ValidationResult.rejected(
                RejectionReason.LEAD_TIME,
                f"Departure must be at least {self.context.policy.min_lead_time_minutes} minutes from now",
                earliest=earliest.isoformat(),
            )

        if not self.numbers.is_unique(flight.flight_number, self.flights.list_all(), excluding_flight_id):
            return ValidationResult.rejected(
                RejectionReason.NUMBER_CLASH,
                f"Flight number {flight.flight_number} is already in use",
            )

        distance, minutes = self._route_metrics(flight)
        if minutes <= 0:
            return ValidationResult.rejected(
                RejectionReason.INVALID_INPUT,
                f"Cannot derive a flight time for {flight.departure_airport.icao}-{flight.arrival_airport.icao}",
            )

        window = self.block_times.block_window(flight.departure, minutes)
        availability = self.availability.check(
            flight.aircraft,
            window,
            departure_airport=flight.departure_airport,
            distance_km=distance,
            excluding_flight_id=excluding_flight_id,
            chained_from=chained_from,
        )
        if not availability.ok:
            return availability

        fares = self.pricing.price_flight(
            flight.departure_airport, flight.arrival_airport, flight.aircraft, distance, minutes
        )

        derived = flight.model_copy(update={
            "arrival": self.block_times.arrival_time(flight.departure, minutes),
            "distance_km": distance,
            "flight_minutes": minutes,
            "price_economy": fares.economy,
            "price_business": fares.business,
            "price_first": fares.first,
        })
        logger.debug(f"Flight {flight.flight_number} validated ({distance} km, {minutes} min)")
        return ValidationResult.accepted(derived)

    def _check_inputs(self, flight: FlightModel) -> Optional[ValidationResult]:
        if flight.departure_airport.same_airport(flight.arrival_airport):
            return ValidationResult.rejected(
                RejectionReason.INVALID_INPUT, "Departure and arrival airports must differ"
            )
        aircraft_type = flight.aircraft.aircraft_type
        if aircraft_type.pax_capacity <= 0 or aircraft_type.cruise_speed_kmh <= 0:
            return ValidationResult.rejected(
                RejectionReason.INVALID_INPUT,
                f"Aircraft type {aircraft_type.full_name} needs seats and a cruise speed",
            )
        return None

    def _route_metrics(self, flight: FlightModel):
        """Distance and duration from the route, derived from geography where missing."""
        route = flight.route
        if route is not None and route.distance_km > 0:
            distance = route.distance_km
        else:
            distance = GeoCalculator.airport_distance(flight.departure_airport, flight.arrival_airport)

        if route is not None and route.flight_minutes > 0:
            minutes = route.flight_minutes
        else:
            minutes = GeoCalculator.flight_time(distance, flight.aircraft.aircraft_type.cruise_speed_kmh)
        return distance, minutes
