"""
SQLAlchemy-backed repositories.

ORM rows are converted to the Pydantic models inside the session so callers
never hold live ORM objects. Reference data (airports, airlines) referenced
by a saved route or flight is inserted on first use; aircraft must already
exist.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database.config import DatabaseConfig
from ..database.models import Aircraft, AircraftType, Airline, Airport, Flight, Route
from ..models.aircraft import AircraftModel, AircraftTypeModel
from ..models.airport import AirlineModel, AirportModel, GeoPoint
from ..models.enums import AircraftStatus, FlightStatus
from ..models.flight import FlightModel
from ..models.route import RouteModel
from .interfaces import FlightRepository, RouteRepository

logger = logging.getLogger(__name__)


# Row -> model conversion

def airport_to_model(row: Airport) -> AirportModel:
    return AirportModel(
        airport_id=row.airport_id,
        icao=row.icao,
        iata=row.iata,
        name=row.name,
        city=row.city,
        country=row.country,
        location=GeoPoint(latitude=row.latitude or 0.0, longitude=row.longitude or 0.0),
    )


def aircraft_to_model(row: Aircraft) -> AircraftModel:
    return AircraftModel(
        aircraft_id=row.aircraft_id,
        registration=row.registration,
        aircraft_type=AircraftTypeModel.model_validate(row.aircraft_type),
        location=airport_to_model(row.location) if row.location is not None else None,
        status=AircraftStatus(row.status),
    )


def route_to_model(row: Route) -> RouteModel:
    return RouteModel(
        route_id=row.route_id,
        departure_airport=airport_to_model(row.departure_airport),
        arrival_airport=airport_to_model(row.arrival_airport),
        operator=AirlineModel.model_validate(row.airline),
        distance_km=row.distance_km,
        flight_minutes=row.flight_minutes,
        active=row.active,
    )


def flight_to_model(row: Flight) -> FlightModel:
    return FlightModel(
        flight_id=row.flight_id,
        flight_number=row.flightno,
        departure_airport=airport_to_model(row.departure_airport),
        arrival_airport=airport_to_model(row.arrival_airport),
        aircraft=aircraft_to_model(row.aircraft),
        route=route_to_model(row.route) if row.route is not None else None,
        departure=row.departure,
        arrival=row.arrival,
        distance_km=row.distance_km,
        flight_minutes=row.flight_minutes,
        price_economy=Decimal(row.price_economy),
        price_business=Decimal(row.price_business),
        price_first=Decimal(row.price_first),
        status=FlightStatus(row.status),
    )


# Reference data lookups

def find_airport_id(session: Session, airport: AirportModel) -> Optional[int]:
    if airport.airport_id is not None:
        return airport.airport_id
    return session.scalars(select(Airport.airport_id).where(Airport.icao == airport.icao)).first()


def ensure_airport_id(session: Session, airport: AirportModel) -> int:
    airport_id = find_airport_id(session, airport)
    if airport_id is not None:
        return airport_id

    row = Airport(
        icao=airport.icao,
        iata=airport.iata,
        name=airport.name,
        city=airport.city,
        country=airport.country,
        latitude=airport.location.latitude,
        longitude=airport.location.longitude,
    )
    session.add(row)
    session.flush()
    logger.info(f"Registered airport {airport.icao}")
    return row.airport_id


def find_airline_id(session: Session, airline: AirlineModel) -> Optional[int]:
    if airline.airline_id is not None:
        return airline.airline_id
    return session.scalars(select(Airline.airline_id).where(Airline.icao == airline.icao)).first()


def ensure_airline_id(session: Session, airline: AirlineModel) -> int:
    airline_id = find_airline_id(session, airline)
    if airline_id is not None:
        return airline_id

    row = Airline(icao=airline.icao, name=airline.name)
    session.add(row)
    session.flush()
    logger.info(f"Registered airline {airline.icao}")
    return row.airline_id


class SqlFlightRepository(FlightRepository):
    """Flight storage on a relational database."""

    def __init__(self, db_config: DatabaseConfig):
        self.db = db_config

    def list_all(self) -> List[FlightModel]:
        with self.db.get_session_context() as session:
            rows = session.scalars(select(Flight).order_by(Flight.departure)).all()
            return [flight_to_model(row) for row in rows]

    def list_by_aircraft(self, aircraft_id: int) -> List[FlightModel]:
        with self.db.get_session_context() as session:
            rows = session.scalars(
                select(Flight).where(Flight.aircraft_id == aircraft_id).order_by(Flight.departure)
            ).all()
            return [flight_to_model(row) for row in rows]

    def save(self, flight: FlightModel) -> bool:
        """
        Insert or update a flight.

        Returns:
            False when the flight number is already taken by another row

        Raises:
            ValueError: If the aircraft has never been persisted
        """
        if flight.aircraft.aircraft_id is None:
            raise ValueError(f"Aircraft {flight.aircraft.registration} must be persisted first")

        try:
            with self.db.get_session_context() as session:
                from_airport = ensure_airport_id(session, flight.departure_airport)
                to_airport = ensure_airport_id(session, flight.arrival_airport)

                row = session.get(Flight, flight.flight_id) if flight.flight_id is not None else None
                if row is None:
                    row = Flight()

                row.flightno = flight.flight_number
                row.from_airport = from_airport
                row.to_airport = to_airport
                row.aircraft_id = flight.aircraft.aircraft_id
                row.route_id = flight.route.route_id if flight.route is not None else None
                row.departure = flight.departure
                row.arrival = flight.arrival
                row.distance_km = flight.distance_km
                row.flight_minutes = flight.flight_minutes
                row.price_economy = flight.price_economy
                row.price_business = flight.price_business
                row.price_first = flight.price_first
                row.status = flight.status.value
                session.add(row)
                session.flush()
                flight.flight_id = row.flight_id
        except IntegrityError as e:
            logger.warning(f"Flight {flight.flight_number} rejected by database: {e.orig}")
            return False

        logger.debug(f"Stored flight {flight.flight_number} as id {flight.flight_id}")
        return True

    def delete(self, flight_id: int) -> bool:
        with self.db.get_session_context() as session:
            row = session.get(Flight, flight_id)
            if row is None:
                return False
            session.delete(row)
        logger.info(f"Deleted flight {flight_id}")
        return True


class SqlRouteRepository(RouteRepository):
    """Route storage on a relational database."""

    def __init__(self, db_config: DatabaseConfig):
        self.db = db_config

    def find_by_airports_and_operator(
        self,
        departure: AirportModel,
        arrival: AirportModel,
        operator: AirlineModel,
    ) -> Optional[RouteModel]:
        with self.db.get_session_context() as session:
            dep_id = find_airport_id(session, departure)
            arr_id = find_airport_id(session, arrival)
            airline_id = find_airline_id(session, operator)
            if dep_id is None or arr_id is None or airline_id is None:
                return None

            row = session.scalars(
                select(Route).where(
                    Route.departure_airport_id == dep_id,
                    Route.arrival_airport_id == arr_id,
                    Route.airline_id == airline_id,
                )
            ).first()
            return route_to_model(row) if row is not None else None

    def save(self, route: RouteModel) -> bool:
        try:
            with self.db.get_session_context() as session:
                departure_id = ensure_airport_id(session, route.departure_airport)
                arrival_id = ensure_airport_id(session, route.arrival_airport)
                airline_id = ensure_airline_id(session, route.operator)

                row = session.get(Route, route.route_id) if route.route_id is not None else None
                if row is None:
                    row = Route()

                row.departure_airport_id = departure_id
                row.arrival_airport_id = arrival_id
                row.airline_id = airline_id
                row.distance_km = route.distance_km
                row.flight_minutes = route.flight_minutes
                row.active = route.active
                session.add(row)
                session.flush()
                route.route_id = row.route_id
        except IntegrityError as e:
            logger.warning(f"Route {route.route_code} rejected by database: {e.orig}")
            return False

        return True


class SqlFleetRepository:
    """Read access to aircraft and airports for callers building candidates."""

    def __init__(self, db_config: DatabaseConfig):
        self.db = db_config

    def get_aircraft(self, aircraft_id: int) -> Optional[AircraftModel]:
        with self.db.get_session_context() as session:
            row = session.get(Aircraft, aircraft_id)
            return aircraft_to_model(row) if row is not None else None

    def get_airport(self, icao: str) -> Optional[AirportModel]:
        with self.db.get_session_context() as session:
            row = session.scalars(select(Airport).where(Airport.icao == icao.upper())).first()
            return airport_to_model(row) if row is not None else None

    def list_aircraft_types(self) -> List[AircraftTypeModel]:
        with self.db.get_session_context() as session:
            rows = session.scalars(select(AircraftType).order_by(AircraftType.type_id)).all()
            return [AircraftTypeModel.model_validate(row) for row in rows]
