"""
Database package for the scheduling engine.

This package provides the SQLAlchemy models and database configuration
behind the SQL repositories.
"""

from .models import (
    Base,
    Airline,
    Airport,
    AircraftType,
    Aircraft,
    Route,
    Flight,
    create_all_tables,
)

from .config import (
    DatabaseConfig,
    initialize_database,
)

__all__ = [
    # Models
    'Base',
    'Airline',
    'Airport',
    'AircraftType',
    'Aircraft',
    'Route',
    'Flight',
    'create_all_tables',

    # Configuration
    'DatabaseConfig',
    'initialize_database',
]
