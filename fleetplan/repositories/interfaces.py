"""Repository interfaces the scheduling services depend on."""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.airport import AirlineModel, AirportModel
from ..models.flight import FlightModel
from ..models.route import RouteModel


class FlightRepository(ABC):
    """
    Storage for flights.

    Failures are raised; the services never catch them.
    """

    @abstractmethod
    def list_all(self) -> List[FlightModel]:
        """
        Retrieve every stored flight.

        Returns:
            All flights, any status
        """
        pass

    @abstractmethod
    def list_by_aircraft(self, aircraft_id: int) -> List[FlightModel]:
        """
        Retrieve the flights assigned to an aircraft.

        Args:
            aircraft_id: Aircraft identifier

        Returns:
            Flights flown by that aircraft, any status
        """
        pass

    @abstractmethod
    def save(self, flight: FlightModel) -> bool:
        """
        Insert or update a flight, assigning flight_id on insert.

        Args:
            flight: Flight to persist

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def delete(self, flight_id: int) -> bool:
        """
        Delete a flight.

        Args:
            flight_id: Flight identifier

        Returns:
            True if a flight was deleted, False otherwise
        """
        pass


class RouteRepository(ABC):
    """Storage for operator routes."""

    @abstractmethod
    def find_by_airports_and_operator(
        self,
        departure: AirportModel,
        arrival: AirportModel,
        operator: AirlineModel,
    ) -> Optional[RouteModel]:
        """
        Look up the directed route for an operator.

        Args:
            departure: Departure airport
            arrival: Arrival airport
            operator: Operating airline

        Returns:
            Route if exists, None otherwise
        """
        pass

    @abstractmethod
    def save(self, route: RouteModel) -> bool:
        """
        Insert or update a route, assigning route_id on insert.

        Args:
            route: Route to persist

        Returns:
            True if successful, False otherwise
        """
        pass
