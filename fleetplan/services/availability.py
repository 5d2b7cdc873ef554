"""
Aircraft availability checks.

An aircraft may take a flight only if it is operational, parked at the
departure airport, has the range for the leg, and none of its other live
flights occupy an overlapping block window.
"""

import logging
from typing import List, Optional

from ..models.aircraft import AircraftModel
from ..models.airport import AirportModel
from ..models.enums import AircraftStatus, RejectionReason
from ..models.flight import BlockWindow, FlightModel
from ..models.results import ValidationResult
from ..repositories.interfaces import FlightRepository
from ..utils.config import SchedulingPolicy
from .block_time import BlockTimeCalculator

logger = logging.getLogger(__name__)


class AvailabilityChecker:
    """
    Read-and-decide availability check against the flight repository.

    Gates run in order and stop at the first failure:
    status, location, range, then block window overlap.
    """

    def __init__(
        self,
        flight_repository: FlightRepository,
        policy: Optional[SchedulingPolicy] = None,
        block_times: Optional[BlockTimeCalculator] = None,
    ):
        self.flights = flight_repository
        self.policy = policy or SchedulingPolicy()
        self.block_times = block_times or BlockTimeCalculator(self.policy)

    def check(
        self,
        aircraft: AircraftModel,
        window: Optional[BlockWindow],
        departure_airport: Optional[AirportModel] = None,
        distance_km: float = 0.0,
        excluding_flight_id: Optional[int] = None,
        chained_from: Optional[FlightModel] = None,
    ) -> ValidationResult:
        """
        Decide whether the aircraft can fly the candidate window.

        Args:
            aircraft: Aircraft to check
            window: Candidate block window
            departure_airport: Where the candidate departs; skips the location gate when None
            distance_km: Leg distance for the range gate
            excluding_flight_id: Flight being edited; ignored for overlap and
                exempts its own aircraft from the status and location gates
            chained_from: Committed flight of this aircraft the candidate
                follows; the aircraft is taken to be at its arrival airport

        Returns:
            ValidationResult with the failing gate as reason
        """
        if window is None:
            return ValidationResult.rejected(
                RejectionReason.INVALID_INPUT, "Flight has no valid block window"
            )
        if aircraft.aircraft_id is None:
            return ValidationResult.rejected(
                RejectionReason.INVALID_INPUT, "Aircraft has no identifier"
            )

        scheduled = self.flights.list_by_aircraft(aircraft.aircraft_id)
        editing_own = excluding_flight_id is not None and any(
            f.flight_id == excluding_flight_id for f in scheduled
        )

        gate = self._check_gates(aircraft, departure_airport, distance_km, editing_own, chained_from)
        if not gate.ok:
            return gate

        conflicts = self.find_conflicts(window, scheduled, excluding_flight_id)
        if conflicts:
            numbers = [f.flight_number for f in conflicts]
            logger.info(
                f"Aircraft {aircraft.registration} busy between {window.start} and {window.end}: {numbers}"
            )
            return ValidationResult.rejected(
                RejectionReason.TIME_OVERLAP,
                f"Aircraft {aircraft.registration} is already scheduled on {', '.join(numbers)}",
                conflicting_flights=numbers,
            )

        return ValidationResult.accepted()

    def is_available(
        self,
        aircraft: AircraftModel,
        window: Optional[BlockWindow],
        excluding_flight_id: Optional[int] = None,
        **kwargs,
    ) -> bool:
        return self.check(aircraft, window, excluding_flight_id=excluding_flight_id, **kwargs).ok

    def find_conflicts(
        self,
        window: BlockWindow,
        flights: List[FlightModel],
        excluding_flight_id: Optional[int] = None,
    ) -> List[FlightModel]:
        """Live flights whose recomputed block window overlaps the candidate."""
        conflicts = []
        for flight in flights:
            if excluding_flight_id is not None and flight.flight_id == excluding_flight_id:
                continue
            if flight.status.is_terminal:
                continue
            existing = self.block_times.window_for_flight(flight)
            if existing is None:
                logger.warning(f"Flight {flight.flight_number} has no usable duration, skipping")
                continue
            if window.overlaps(existing):
                conflicts.append(flight)
        return conflicts

    def _check_gates(
        self,
        aircraft: AircraftModel,
        departure_airport: Optional[AirportModel],
        distance_km: float,
        editing_own: bool,
        chained_from: Optional[FlightModel],
    ) -> ValidationResult:
        exempt = editing_own or chained_from is not None

        if not exempt and aircraft.status != AircraftStatus.AVAILABLE:
            return ValidationResult.rejected(
                RejectionReason.AIRCRAFT_STATUS,
                f"Aircraft {aircraft.registration} is {aircraft.status.value}",
                status=aircraft.status.value,
            )

        if departure_airport is not None and not editing_own:
            location = chained_from.arrival_airport if chained_from is not None else aircraft.location
            if location is None or not location.same_airport(departure_airport):
                where = location.icao if location is not None else "unknown"
                return ValidationResult.rejected(
                    RejectionReason.AIRCRAFT_LOCATION,
                    f"Aircraft {aircraft.registration} is at {where}, not {departure_airport.icao}",
                    location=where,
                )

        if distance_km and distance_km > 0:
            required = distance_km * self.policy.range_buffer_factor
            if aircraft.aircraft_type.max_range_km < required:
                return ValidationResult.rejected(
                    RejectionReason.AIRCRAFT_RANGE,
                    f"Aircraft {aircraft.registration} range {aircraft.aircraft_type.max_range_km:.0f} km "
                    f"is below the required {required:.0f} km",
                    required_km=round(required, 1),
                )

        return ValidationResult.accepted()
