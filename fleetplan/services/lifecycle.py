"""
Flight lifecycle: time-driven status, aircraft status, and the reschedule
and cancel transitions for stored flights.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from ..models.enums import AircraftStatus, FlightStatus, RejectionReason
from ..models.flight import FlightModel
from ..models.results import ValidationResult
from ..repositories.interfaces import FlightRepository
from ..utils.config import SchedulingContext
from .validator import FlightValidator

logger = logging.getLogger(__name__)

DEPARTED_PHASE = timedelta(minutes=10)
LANDED_PHASE = timedelta(minutes=10)
DEPLANING_PHASE = timedelta(minutes=15)

PRE_DEPARTURE = (FlightStatus.SCHEDULED, FlightStatus.BOARDING)


class FlightLifecycle:
    """Status derivation and state transitions for stored flights."""

    def __init__(
        self,
        context: SchedulingContext,
        flight_repository: FlightRepository,
        validator: Optional[FlightValidator] = None,
    ):
        self.context = context
        self.flights = flight_repository
        self.validator = validator or FlightValidator(context, flight_repository)

    def derive_status(
        self,
        departure: Optional[datetime],
        arrival: Optional[datetime],
        now: datetime,
    ) -> FlightStatus:
        """
        Status implied by the clock.

        Boarding opens at the policy boarding margin before departure; the
        departed, landed and deplaning phases have fixed lengths.
        """
        if departure is None or arrival is None:
            return FlightStatus.UNKNOWN

        if now > arrival + DEPLANING_PHASE:
            return FlightStatus.COMPLETED
        if now >= arrival:
            return FlightStatus.DEPLANING
        if now >= arrival - LANDED_PHASE:
            return FlightStatus.LANDED
        if now > departure + DEPARTED_PHASE:
            return FlightStatus.FLYING
        if now >= departure:
            return FlightStatus.DEPARTED
        if now >= departure - timedelta(minutes=self.context.policy.boarding_minutes):
            return FlightStatus.BOARDING
        return FlightStatus.SCHEDULED

    def status_for(self, flight: FlightModel, now: Optional[datetime] = None) -> FlightStatus:
        if flight.status == FlightStatus.CANCELLED:
            return FlightStatus.CANCELLED
        return self.derive_status(flight.departure, flight.arrival, now or self.context.now())

    def aircraft_status_for(self, flights: Iterable[FlightModel], now: Optional[datetime] = None) -> AircraftStatus:
        """Flying if any flight is under way, scheduled if any is upcoming, otherwise available."""
        now = now or self.context.now()
        statuses = [self.status_for(f, now) for f in flights]
        if any(s.is_in_progress for s in statuses):
            return AircraftStatus.FLYING
        if any(s in (FlightStatus.SCHEDULED, FlightStatus.BOARDING) for s in statuses):
            return AircraftStatus.SCHEDULED
        return AircraftStatus.AVAILABLE

    def refresh_statuses(self, now: Optional[datetime] = None) -> List[FlightModel]:
        """
        Recompute every stored flight's status and save the ones that changed.

        Returns:
            The updated flights
        """
        now = now or self.context.now()
        changed = []
        for flight in self.flights.list_all():
            status = self.status_for(flight, now)
            if status == flight.status:
                continue
            updated = flight.model_copy(update={"status": status})
            if self.flights.save(updated):
                changed.append(updated)
            else:
                logger.warning(f"Could not save status {status.value} for flight {flight.flight_number}")

        if changed:
            logger.info(f"Updated status of {len(changed)} flights")
        return changed

    def reschedule(
        self,
        flight: FlightModel,
        new_departure: datetime,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        """Move a stored flight, re-running the full validation with the flight excluded from its own checks."""
        if flight.status not in PRE_DEPARTURE:
            return ValidationResult.rejected(
                RejectionReason.NOT_MODIFIABLE,
                f"Flight {flight.flight_number} is {flight.status.value} and cannot be rescheduled",
            )
        candidate = flight.model_copy(update={"departure": new_departure, "arrival": None})
        return self.validator.validate(candidate, now=now, excluding_flight_id=flight.flight_id)

    def cancel(self, flight: FlightModel) -> ValidationResult:
        """Cancelled copy of a flight that has not departed yet."""
        if flight.status not in PRE_DEPARTURE:
            return ValidationResult.rejected(
                RejectionReason.NOT_MODIFIABLE,
                f"Flight {flight.flight_number} is {flight.status.value} and cannot be cancelled",
            )
        return ValidationResult.accepted(flight.model_copy(update={"status": FlightStatus.CANCELLED}))
