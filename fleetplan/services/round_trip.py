"""
Return flight composition.

Given a committed outbound flight, builds the return leg flown by the same
aircraft: reversed airports, number outbound + 1, departing one turnaround
after the outbound lands. Nothing is persisted except a newly synthesized
return route; the caller saves the returned flight.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..models.enums import FlightStatus, RejectionReason
from ..models.flight import FlightModel
from ..models.results import ValidationResult
from ..repositories.interfaces import FlightRepository, RouteRepository
from ..utils.config import SchedulingContext
from .routes import RoutePlanner
from .validator import FlightValidator

logger = logging.getLogger(__name__)


class RoundTripComposer:
    """Composes the return leg of a committed outbound flight."""

    def __init__(
        self,
        context: SchedulingContext,
        flight_repository: FlightRepository,
        route_repository: RouteRepository,
        validator: Optional[FlightValidator] = None,
    ):
        self.context = context
        self.flights = flight_repository
        self.validator = validator or FlightValidator(context, flight_repository)
        self.planner = RoutePlanner(context, route_repository)

    def compose(
        self,
        outbound: FlightModel,
        turnaround_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        """
        Build and validate the return flight.

        Args:
            outbound: Persisted outbound flight
            turnaround_minutes: Ground time at the outbound's arrival airport,
                clamped to the policy bounds; policy default when omitted
            now: Reference time for the lead-time rule

        Returns:
            ValidationResult carrying the unsaved return flight when accepted
        """
        now = now or self.context.now()
        operator_code = self.context.operator.icao

        if outbound.status.is_terminal:
            return ValidationResult.rejected(
                RejectionReason.NOT_MODIFIABLE,
                f"Outbound {outbound.flight_number} is {outbound.status.value} and cannot take a return flight",
            )

        checked = self.validator.validate(outbound, now=now, excluding_flight_id=outbound.flight_id)
        if not checked.ok:
            logger.info(f"Outbound {outbound.flight_number} failed validation: {checked.message}")
            return checked
        outbound = checked.flight

        return_number = self.validator.numbers.return_flight_number(outbound.flight_number, operator_code)
        if return_number is None:
            return ValidationResult.rejected(
                RejectionReason.NUMBER_FORMAT,
                f"No return number can follow {outbound.flight_number}",
            )
        if not self.validator.numbers.is_unique(return_number, self.flights.list_all()):
            return ValidationResult.rejected(
                RejectionReason.RETURN_NUMBER_TAKEN,
                f"Return flight number {return_number} is already in use",
            )

        turnaround = self.context.policy.clamp_turnaround(turnaround_minutes)
        if turnaround_minutes is not None and turnaround != turnaround_minutes:
            logger.debug(f"Turnaround {turnaround_minutes} min clamped to {turnaround} min")
        return_departure = outbound.arrival + timedelta(minutes=turnaround)

        route = self.planner.find_or_create(outbound.arrival_airport, outbound.departure_airport)
        if route is None:
            return ValidationResult.rejected(
                RejectionReason.ROUTE_UNAVAILABLE,
                f"Return route {outbound.arrival_airport.icao}-{outbound.departure_airport.icao} could not be saved",
            )

        candidate = FlightModel(
            flight_number=return_number,
            departure_airport=outbound.arrival_airport,
            arrival_airport=outbound.departure_airport,
            aircraft=outbound.aircraft,
            route=route,
            departure=return_departure,
            status=FlightStatus.SCHEDULED,
        )
        result = self.validator.validate(candidate, now=now, chained_from=outbound)
        if result.ok:
            logger.info(
                f"Composed return {return_number} for {outbound.flight_number} departing {return_departure}"
            )
        return result
