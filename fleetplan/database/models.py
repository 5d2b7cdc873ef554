"""
SQLAlchemy database models for the flight scheduling engine.

This module defines the tables behind the SQL repositories:
- Airline: Operators with their ICAO prefix
- Airport: Airports with ICAO/IATA codes and coordinates
- AircraftType / Aircraft: Fleet performance data and tails
- Route: Directed operator routes, unique per airport pair and operator
- Flight: Scheduled flights, unique by flight number
"""

from sqlalchemy import (
    Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

# Create the declarative base for all models
Base = declarative_base()


class Airline(Base):
    """Operating airline."""
    __tablename__ = 'airline'

    airline_id = Column(Integer, primary_key=True, autoincrement=True)
    icao = Column(String(3), unique=True, nullable=False, index=True)  # e.g. 'DLH'
    name = Column(String(100), nullable=True)

    routes = relationship("Route", back_populates="airline", lazy="select")

    def __repr__(self):
        return f"<Airline(id={self.airline_id}, icao='{self.icao}', name='{self.name}')>"


class Airport(Base):
    """
    Airport with identification and coordinates.

    Coordinates of (0, 0) mean the location was never recorded.
    """
    __tablename__ = 'airport'

    airport_id = Column(Integer, primary_key=True, autoincrement=True)
    icao = Column(String(4), unique=True, nullable=False, index=True)  # e.g. 'EDDF'
    iata = Column(String(3), nullable=True, index=True)  # e.g. 'FRA'
    name = Column(String(100), nullable=False)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    latitude = Column(Float, nullable=False, default=0.0)
    longitude = Column(Float, nullable=False, default=0.0)

    def __repr__(self):
        return f"<Airport(id={self.airport_id}, icao='{self.icao}', name='{self.name}')>"


class AircraftType(Base):
    """Aircraft type performance and economics."""
    __tablename__ = 'aircraft_type'

    type_id = Column(Integer, primary_key=True, autoincrement=True)
    manufacturer = Column(String(50), nullable=False)
    model = Column(String(50), nullable=False)
    pax_capacity = Column(Integer, nullable=False)
    cargo_capacity_kg = Column(Float, nullable=False, default=0.0)
    max_range_km = Column(Float, nullable=False)
    cruise_speed_kmh = Column(Float, nullable=False)
    cost_per_hour = Column(Float, nullable=False)

    aircraft = relationship("Aircraft", back_populates="aircraft_type", lazy="select")

    def __repr__(self):
        return f"<AircraftType(id={self.type_id}, '{self.manufacturer} {self.model}')>"


class Aircraft(Base):
    """A tail with its current location and status."""
    __tablename__ = 'aircraft'

    aircraft_id = Column(Integer, primary_key=True, autoincrement=True)
    registration = Column(String(10), unique=True, nullable=False, index=True)  # e.g. 'D-AIBA'
    type_id = Column(Integer, ForeignKey('aircraft_type.type_id'), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey('airport.airport_id'), nullable=True)
    status = Column(String(16), nullable=False, default='available')

    aircraft_type = relationship("AircraftType", back_populates="aircraft", lazy="joined")
    location = relationship("Airport", lazy="joined")
    flights = relationship("Flight", back_populates="aircraft", lazy="select")

    def __repr__(self):
        return f"<Aircraft(id={self.aircraft_id}, registration='{self.registration}', status='{self.status}')>"


class Route(Base):
    """Directed route; A->B and B->A are separate rows."""
    __tablename__ = 'route'
    __table_args__ = (
        UniqueConstraint('departure_airport_id', 'arrival_airport_id', 'airline_id', name='uq_route_operator'),
    )

    route_id = Column(Integer, primary_key=True, autoincrement=True)
    departure_airport_id = Column(Integer, ForeignKey('airport.airport_id'), nullable=False, index=True)
    arrival_airport_id = Column(Integer, ForeignKey('airport.airport_id'), nullable=False, index=True)
    airline_id = Column(Integer, ForeignKey('airline.airline_id'), nullable=False, index=True)
    distance_km = Column(Float, nullable=False, default=0.0)
    flight_minutes = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)

    airline = relationship("Airline", back_populates="routes", lazy="joined")
    departure_airport = relationship("Airport", foreign_keys=[departure_airport_id], lazy="joined")
    arrival_airport = relationship("Airport", foreign_keys=[arrival_airport_id], lazy="joined")

    def __repr__(self):
        return f"<Route(id={self.route_id}, from={self.departure_airport_id}, to={self.arrival_airport_id})>"


class Flight(Base):
    """Scheduled flight with derived arrival, distance and fares."""
    __tablename__ = 'flight'

    flight_id = Column(Integer, primary_key=True, autoincrement=True)
    flightno = Column(String(8), unique=True, nullable=False, index=True)  # e.g. 'SNX120'
    from_airport = Column(Integer, ForeignKey('airport.airport_id'), nullable=False, index=True)
    to_airport = Column(Integer, ForeignKey('airport.airport_id'), nullable=False, index=True)
    aircraft_id = Column(Integer, ForeignKey('aircraft.aircraft_id'), nullable=False, index=True)
    route_id = Column(Integer, ForeignKey('route.route_id'), nullable=True)
    departure = Column(DateTime, nullable=False, index=True)
    arrival = Column(DateTime, nullable=True)
    distance_km = Column(Float, nullable=False, default=0.0)
    flight_minutes = Column(Integer, nullable=False, default=0)
    price_economy = Column(Numeric(10, 2), nullable=False, default=0)
    price_business = Column(Numeric(10, 2), nullable=False, default=0)
    price_first = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(16), nullable=False, default='scheduled')

    aircraft = relationship("Aircraft", back_populates="flights", lazy="joined")
    route = relationship("Route", lazy="joined")
    departure_airport = relationship("Airport", foreign_keys=[from_airport], lazy="joined")
    arrival_airport = relationship("Airport", foreign_keys=[to_airport], lazy="joined")

    def __repr__(self):
        return f"<Flight(id={self.flight_id}, flightno='{self.flightno}', from={self.from_airport}, to={self.to_airport})>"


# Composite index for the per-aircraft schedule lookup
Index('idx_flight_aircraft_departure', Flight.aircraft_id, Flight.departure)


def create_all_tables(engine):
    """
    Create all database tables using the provided SQLAlchemy engine.

    Args:
        engine: SQLAlchemy engine instance
    """
    Base.metadata.create_all(bind=engine)


__all__ = [
    'Base',
    'Airline',
    'Airport',
    'AircraftType',
    'Aircraft',
    'Route',
    'Flight',
    'create_all_tables',
]
