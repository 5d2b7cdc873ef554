"""
Flight number allocation.

Outbound numbers are handed out from 100 upward in steps of 10; a candidate
is only taken when its successor is free too, so the return leg can always
use outbound + 1.
"""

import logging
import re
from typing import Iterable, Optional, Set

from ..models.flight import FlightModel
from ..utils.config import SchedulingPolicy

logger = logging.getLogger(__name__)


class FlightNumberExhaustedError(Exception):
    """No free number pair is left below the ceiling."""
    pass


def _number_pattern(operator_code: str) -> "re.Pattern[str]":
    return re.compile(rf"{re.escape(operator_code)}([0-9]{{3,4}})")


class FlightNumberAllocator:
    """Allocates and validates operator-prefixed flight numbers."""

    def __init__(self, policy: Optional[SchedulingPolicy] = None):
        self.policy = policy or SchedulingPolicy()

    def next_number(self, operator_code: str, used_numbers: Set[int]) -> int:
        """
        Lowest free outbound number whose successor is free as well.

        Args:
            operator_code: Operator the number is for
            used_numbers: Numeric parts already taken

        Returns:
            The allocated number

        Raises:
            FlightNumberExhaustedError: If no pair fits under the ceiling
        """
        n = self.policy.flight_number_base
        while n <= self.policy.flight_number_ceiling:
            if n not in used_numbers and (n + 1) not in used_numbers:
                return n
            n += self.policy.flight_number_step

        logger.error(f"Flight numbers exhausted for {operator_code}")
        raise FlightNumberExhaustedError(
            f"No flight number available for {operator_code} up to {self.policy.flight_number_ceiling}"
        )

    def used_numbers(self, operator_code: str, flight_numbers: Iterable[str]) -> Set[int]:
        """Numeric parts of this operator's flight numbers; malformed numbers are ignored."""
        pattern = _number_pattern(operator_code)
        used = set()
        for flight_number in flight_numbers:
            match = pattern.fullmatch(flight_number or "")
            if match:
                used.add(int(match.group(1)))
        return used

    def next_flight_number(self, operator_code: str, flights: Iterable[FlightModel]) -> str:
        used = self.used_numbers(operator_code, (f.flight_number for f in flights))
        return f"{operator_code}{self.next_number(operator_code, used)}"

    def is_valid_format(self, flight_number: Optional[str], operator_code: Optional[str]) -> bool:
        """Operator code followed by exactly three or four digits."""
        if not flight_number or not operator_code:
            return False
        return _number_pattern(operator_code).fullmatch(flight_number) is not None

    def is_unique(
        self,
        flight_number: str,
        flights: Iterable[FlightModel],
        excluding_flight_id: Optional[int] = None,
    ) -> bool:
        for flight in flights:
            if excluding_flight_id is not None and flight.flight_id == excluding_flight_id:
                continue
            if flight.flight_number == flight_number:
                return False
        return True

    def return_flight_number(self, flight_number: str, operator_code: str) -> Optional[str]:
        """Outbound + 1, or None when the outbound is malformed or the result would not fit."""
        match = _number_pattern(operator_code).fullmatch(flight_number or "")
        if not match:
            return None
        candidate = f"{operator_code}{int(match.group(1)) + 1}"
        if not self.is_valid_format(candidate, operator_code):
            return None
        return candidate
