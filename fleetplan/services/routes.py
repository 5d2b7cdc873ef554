"""
Route lookup and synthesis.

Routes are reused per (departure, arrival, operator). Missing routes are
synthesized from the airports' great-circle distance and saved.
"""

import logging
from typing import Optional

from ..models.airport import AirportModel
from ..models.route import RouteModel
from ..repositories.interfaces import RouteRepository
from ..utils.config import SchedulingContext
from .geo import GeoCalculator

logger = logging.getLogger(__name__)


class RoutePlanner:
    """Finds or creates the operator's routes."""

    def __init__(self, context: SchedulingContext, route_repository: RouteRepository):
        self.context = context
        self.routes = route_repository

    def find(self, departure: AirportModel, arrival: AirportModel) -> Optional[RouteModel]:
        return self.routes.find_by_airports_and_operator(departure, arrival, self.context.operator)

    def build(
        self,
        departure: AirportModel,
        arrival: AirportModel,
        speed_kmh: Optional[float] = None,
    ) -> RouteModel:
        """Unsaved route with derived distance and duration."""
        speed = speed_kmh if speed_kmh and speed_kmh > 0 else self.context.policy.default_cruise_speed_kmh
        distance = GeoCalculator.airport_distance(departure, arrival)
        return RouteModel(
            departure_airport=departure,
            arrival_airport=arrival,
            operator=self.context.operator,
            distance_km=distance,
            flight_minutes=GeoCalculator.flight_time(distance, speed),
        )

    def find_or_create(
        self,
        departure: AirportModel,
        arrival: AirportModel,
        speed_kmh: Optional[float] = None,
    ) -> Optional[RouteModel]:
        """
        Existing route for the pair, or a newly saved one.

        Args:
            departure: Departure airport
            arrival: Arrival airport
            speed_kmh: Cruise speed for a new route's duration; the policy
                default applies when omitted

        Returns:
            The route, or None if a new route could not be saved
        """
        route = self.find(departure, arrival)
        if route is not None:
            return route

        route = self.build(departure, arrival, speed_kmh)
        if not self.routes.save(route):
            logger.warning(f"Could not save route {route.route_code} for {self.context.operator.icao}")
            return None

        logger.info(
            f"Created route {route.route_code} ({route.distance_km} km, {route.formatted_flight_time})"
        )
        return route

    def ensure_return_route(self, departure: AirportModel, arrival: AirportModel) -> Optional[RouteModel]:
        """Make sure the mirror of departure->arrival exists, at the default cruise speed."""
        return self.find_or_create(arrival, departure)
