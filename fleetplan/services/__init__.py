"""
Scheduling services.

Stateless calculators (geo, block time, pricing, flight numbers) plus the
orchestrating validator, round-trip composer, lifecycle and scheduler.
"""

from .geo import GeoCalculator, EARTH_RADIUS_KM
from .block_time import BlockTimeCalculator
from .availability import AvailabilityChecker
from .pricing import PricingEngine, is_domestic
from .flight_numbers import FlightNumberAllocator, FlightNumberExhaustedError
from .routes import RoutePlanner
from .validator import FlightValidator
from .round_trip import RoundTripComposer
from .lifecycle import FlightLifecycle
from .lock_manager import AircraftScheduleLock, LockInfo, ScheduleLockError
from .scheduler import FlightScheduler

__all__ = [
    "GeoCalculator",
    "EARTH_RADIUS_KM",
    "BlockTimeCalculator",
    "AvailabilityChecker",
    "PricingEngine",
    "is_domestic",
    "FlightNumberAllocator",
    "FlightNumberExhaustedError",
    "RoutePlanner",
    "FlightValidator",
    "RoundTripComposer",
    "FlightLifecycle",
    "AircraftScheduleLock",
    "LockInfo",
    "ScheduleLockError",
    "FlightScheduler",
]
