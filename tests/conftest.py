"""
Shared fixtures: a fixed clock, a small airport network, a fleet, and
in-memory repositories standing in for the database.
"""

from datetime import datetime
from typing import Dict, List, Optional

import pytest

from fleetplan.models import (
    AircraftModel,
    AircraftStatus,
    AircraftTypeModel,
    AirlineModel,
    AirportModel,
    FlightModel,
    FlightStatus,
    GeoPoint,
    RouteModel,
)
from fleetplan.repositories.interfaces import FlightRepository, RouteRepository
from fleetplan.services.lock_manager import AircraftScheduleLock
from fleetplan.utils.config import SchedulingContext, SchedulingPolicy


NOW = datetime(2030, 6, 1, 8, 0)


class InMemoryFlightRepository(FlightRepository):
    """Flight storage in a dict; duplicate numbers are refused like a unique index."""

    def __init__(self):
        self.flights: Dict[int, FlightModel] = {}
        self._next_id = 1

    def list_all(self) -> List[FlightModel]:
        return list(self.flights.values())

    def list_by_aircraft(self, aircraft_id: int) -> List[FlightModel]:
        return [f for f in self.flights.values() if f.aircraft.aircraft_id == aircraft_id]

    def save(self, flight: FlightModel) -> bool:
        for stored in self.flights.values():
            if stored.flight_number == flight.flight_number and stored.flight_id != flight.flight_id:
                return False
        if flight.flight_id is None:
            flight.flight_id = self._next_id
            self._next_id += 1
        self.flights[flight.flight_id] = flight.model_copy()
        return True

    def delete(self, flight_id: int) -> bool:
        return self.flights.pop(flight_id, None) is not None


class InMemoryRouteRepository(RouteRepository):
    """Route storage keyed by (departure, arrival, operator) ICAO codes."""

    def __init__(self, fail_saves: bool = False):
        self.routes: Dict[tuple, RouteModel] = {}
        self.fail_saves = fail_saves
        self._next_id = 1

    def find_by_airports_and_operator(self, departure, arrival, operator) -> Optional[RouteModel]:
        return self.routes.get((departure.icao, arrival.icao, operator.icao))

    def save(self, route: RouteModel) -> bool:
        if self.fail_saves:
            return False
        if route.route_id is None:
            route.route_id = self._next_id
            self._next_id += 1
        self.routes[route.key] = route
        return True


class MockValkeyClient:
    """Mock Valkey client covering the commands the schedule lock uses."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}
        self.is_connected = True

    def ensure_connection(self):
        """Mock connection check."""
        pass

    @property
    def client(self):
        return self

    def set(self, key, value, nx=False, ex=None):
        if nx and key in self.data:
            return None
        self.data[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    def get(self, key):
        return self.data.get(key)

    def eval(self, script, numkeys, key, value):
        """Run the owner-checked release script."""
        if self.data.get(key) != value:
            return 0
        del self.data[key]
        self.ttls.pop(key, None)
        return 1


@pytest.fixture
def policy():
    return SchedulingPolicy()


@pytest.fixture
def operator():
    return AirlineModel(airline_id=1, icao="SNX", name="Sunexpress Test")


@pytest.fixture
def context(operator, policy):
    return SchedulingContext(operator=operator, policy=policy, clock=lambda: NOW)


@pytest.fixture
def fra():
    return AirportModel(
        airport_id=1, icao="EDDF", iata="FRA", name="Frankfurt", city="Frankfurt",
        country="Germany", location=GeoPoint(latitude=50.0379, longitude=8.5622),
    )


@pytest.fixture
def muc():
    return AirportModel(
        airport_id=2, icao="EDDM", iata="MUC", name="Munich", city="Munich",
        country="Germany", location=GeoPoint(latitude=48.3538, longitude=11.7861),
    )


@pytest.fixture
def jfk():
    return AirportModel(
        airport_id=3, icao="KJFK", iata="JFK", name="John F. Kennedy", city="New York",
        country="United States", location=GeoPoint(latitude=40.6413, longitude=-73.7781),
    )


@pytest.fixture
def a320():
    return AircraftTypeModel(
        type_id=1, manufacturer="Airbus", model="A320", pax_capacity=180,
        max_range_km=6100.0, cruise_speed_kmh=840.0, cost_per_hour=5000.0,
    )


@pytest.fixture
def a350():
    return AircraftTypeModel(
        type_id=2, manufacturer="Airbus", model="A350-900", pax_capacity=300,
        max_range_km=15000.0, cruise_speed_kmh=900.0, cost_per_hour=12000.0,
    )


@pytest.fixture
def aircraft(a320, fra):
    return AircraftModel(
        aircraft_id=1, registration="D-AIZA", aircraft_type=a320,
        location=fra, status=AircraftStatus.AVAILABLE,
    )


@pytest.fixture
def other_aircraft(a320, muc):
    return AircraftModel(
        aircraft_id=2, registration="D-AIZB", aircraft_type=a320,
        location=muc, status=AircraftStatus.AVAILABLE,
    )


@pytest.fixture
def flight_repo():
    return InMemoryFlightRepository()


@pytest.fixture
def route_repo():
    return InMemoryRouteRepository()


@pytest.fixture
def make_flight(aircraft, fra, muc):
    """Factory for flights; defaults to a FRA-MUC leg on D-AIZA."""

    def _make(
        flight_number="SNX100",
        departure=datetime(2030, 6, 1, 10, 0),
        departure_airport=None,
        arrival_airport=None,
        flight_aircraft=None,
        route=None,
        flight_minutes=0,
        status=FlightStatus.SCHEDULED,
        flight_id=None,
    ):
        return FlightModel(
            flight_id=flight_id,
            flight_number=flight_number,
            departure_airport=departure_airport or fra,
            arrival_airport=arrival_airport or muc,
            aircraft=flight_aircraft or aircraft,
            route=route,
            departure=departure,
            flight_minutes=flight_minutes,
            status=status,
        )

    return _make


@pytest.fixture
def valkey_client():
    return MockValkeyClient()


@pytest.fixture
def schedule_lock(valkey_client):
    return AircraftScheduleLock(valkey_client, ttl_seconds=30, timeout_seconds=0, retry_delay=0.01)
