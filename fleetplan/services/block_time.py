"""
Block time derivation.

A flight occupies its aircraft from the start of boarding until deboarding
has finished. Windows are always recomputed from departure and duration so
they cannot drift from the flight record.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..models.flight import BlockWindow, FlightModel
from ..utils.config import SchedulingPolicy

logger = logging.getLogger(__name__)


class BlockTimeCalculator:
    """Derives arrival times and block windows using the policy margins."""

    def __init__(self, policy: Optional[SchedulingPolicy] = None):
        self.policy = policy or SchedulingPolicy()

    def arrival_time(self, departure: Optional[datetime], flight_minutes: int) -> Optional[datetime]:
        """Departure plus airborne minutes; None when either is unusable."""
        if departure is None or flight_minutes is None or flight_minutes <= 0:
            return None
        return departure + timedelta(minutes=flight_minutes)

    def block_window(self, departure: Optional[datetime], flight_minutes: int) -> Optional[BlockWindow]:
        """
        Occupied interval for a flight.

        Args:
            departure: Scheduled departure
            flight_minutes: Airborne duration

        Returns:
            BlockWindow from boarding start to deboarding end, or None when
            the duration is not positive or departure is missing
        """
        arrival = self.arrival_time(departure, flight_minutes)
        if arrival is None:
            logger.debug(f"No block window for departure={departure} minutes={flight_minutes}")
            return None

        return BlockWindow(
            start=departure - timedelta(minutes=self.policy.boarding_minutes),
            end=arrival + timedelta(minutes=self.policy.deboarding_minutes),
        )

    def window_for_flight(self, flight: FlightModel) -> Optional[BlockWindow]:
        """Recompute a stored flight's window from its departure and route duration."""
        return self.block_window(flight.departure, flight.duration_minutes)
