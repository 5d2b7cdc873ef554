"""
Scheduling facade.

Wraps validation and persistence of an aircraft's flights in the aircraft's
schedule lock so concurrent writers cannot double-book it.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from ..models.aircraft import AircraftModel
from ..models.airport import AirportModel
from ..models.enums import RejectionReason
from ..models.flight import FlightModel
from ..models.results import ValidationResult
from ..repositories.interfaces import FlightRepository, RouteRepository
from ..utils.config import SchedulingContext
from .lifecycle import FlightLifecycle
from .lock_manager import AircraftScheduleLock
from .round_trip import RoundTripComposer
from .routes import RoutePlanner
from .validator import FlightValidator

logger = logging.getLogger(__name__)


class FlightScheduler:
    """Creates, moves and cancels flights under the aircraft lock."""

    def __init__(
        self,
        context: SchedulingContext,
        flight_repository: FlightRepository,
        route_repository: RouteRepository,
        schedule_lock: AircraftScheduleLock,
    ):
        self.context = context
        self.flights = flight_repository
        self.lock = schedule_lock
        self.validator = FlightValidator(context, flight_repository)
        self.planner = RoutePlanner(context, route_repository)
        self.composer = RoundTripComposer(context, flight_repository, route_repository, self.validator)
        self.lifecycle = FlightLifecycle(context, flight_repository, self.validator)

    def plan(
        self,
        aircraft: AircraftModel,
        departure_airport: AirportModel,
        arrival_airport: AirportModel,
        departure: datetime,
        flight_number: Optional[str] = None,
    ) -> FlightModel:
        """
        Build an unvalidated candidate: resolve the route and allocate a number if none is given.

        Raises:
            FlightNumberExhaustedError: If no flight number is left
        """
        route = self.planner.find_or_create(
            departure_airport, arrival_airport, aircraft.aircraft_type.cruise_speed_kmh
        )
        if flight_number is None:
            flight_number = self.validator.numbers.next_flight_number(
                self.context.operator.icao, self.flights.list_all()
            )
        return FlightModel(
            flight_number=flight_number,
            departure_airport=departure_airport,
            arrival_airport=arrival_airport,
            aircraft=aircraft,
            route=route,
            departure=departure,
        )

    def schedule(self, candidate: FlightModel, now: Optional[datetime] = None) -> ValidationResult:
        """Validate and save a new flight; also makes sure its return route exists."""
        with self.lock.hold(candidate.aircraft.aircraft_id):
            result = self._commit(self.validator.validate(candidate, now=now))
        if result.ok:
            self.planner.ensure_return_route(candidate.departure_airport, candidate.arrival_airport)
        return result

    def schedule_round_trip(
        self,
        candidate: FlightModel,
        turnaround_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Tuple[ValidationResult, Optional[ValidationResult]]:
        """
        Schedule an outbound flight and its return in one critical section.

        Returns:
            (outbound result, return result); the return result is None when
            the outbound was refused. A refused return leaves the outbound saved.
        """
        with self.lock.hold(candidate.aircraft.aircraft_id):
            outbound = self._commit(self.validator.validate(candidate, now=now))
            if not outbound.ok:
                return outbound, None
            inbound = self._commit(self.composer.compose(outbound.flight, turnaround_minutes, now=now))

        if not inbound.ok:
            logger.info(f"Return for {outbound.flight.flight_number} refused: {inbound.message}")
        return outbound, inbound

    def reschedule(
        self,
        flight: FlightModel,
        new_departure: datetime,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        with self.lock.hold(flight.aircraft.aircraft_id):
            return self._commit(self.lifecycle.reschedule(flight, new_departure, now=now))

    def cancel(self, flight: FlightModel) -> ValidationResult:
        with self.lock.hold(flight.aircraft.aircraft_id):
            return self._commit(self.lifecycle.cancel(flight))

    def _commit(self, result: ValidationResult) -> ValidationResult:
        """Save an accepted flight; a refused save is reported as a number clash."""
        if not result.ok:
            return result

        flight = result.flight
        if not self.flights.save(flight):
            logger.warning(f"Repository refused flight {flight.flight_number}")
            return ValidationResult.rejected(
                RejectionReason.NUMBER_CLASH,
                f"Flight {flight.flight_number} could not be saved",
            )

        logger.info(
            f"Saved flight {flight.flight_number} {flight.departure_airport.icao}-{flight.arrival_airport.icao} "
            f"departing {flight.departure} ({flight.status.value})"
        )
        return result
