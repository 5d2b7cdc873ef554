"""
Database connection management for the scheduling engine.

The URL comes from AppConfig.database_url. Two backends are supported:
SQLite (default, and in-memory for tests) and MySQL/MariaDB through the
pymysql driver installed with the ``mysql`` extra.
"""

import logging
from contextlib import contextmanager
from typing import Optional, Dict, Any, Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool, QueuePool
from sqlalchemy.exc import SQLAlchemyError

from .models import create_all_tables

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = {
    'sqlite': 'sqlite',
    'mysql': 'mysql',
    'mariadb': 'mysql',
}


class DatabaseConfig:
    """
    Engine and session factory for one database URL.

    SQLite in-memory databases share one connection (StaticPool) so every
    session sees the same data. MySQL gets a pre-pinged QueuePool.
    """

    def __init__(self, database_url: str, echo: bool = False, pool_size: int = 10):
        """
        Args:
            database_url: SQLAlchemy URL, e.g. sqlite:///fleetplan.db
            echo: Enable SQL query logging for debugging
            pool_size: Connection pool size for server backends

        Raises:
            ValueError: If the URL names an unsupported backend
        """
        self.database_url = database_url
        self.echo = echo
        self.pool_size = pool_size
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None
        self._is_initialized = False

        self.db_type = self._detect_database_type()
        self.engine_kwargs = self._get_engine_kwargs()

        logger.info(f"Database configuration initialized for {self.db_type}")

    def _detect_database_type(self) -> str:
        scheme = self.database_url.split(':', 1)[0].split('+', 1)[0].lower()
        if scheme not in SUPPORTED_SCHEMES:
            raise ValueError(f"Unsupported database URL scheme: {scheme}")
        return SUPPORTED_SCHEMES[scheme]

    def _get_engine_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {'echo': self.echo}

        if self.db_type == 'sqlite':
            kwargs.update({
                'poolclass': StaticPool,
                'connect_args': {'check_same_thread': False, 'timeout': 30},
            })
        else:
            kwargs.update({
                'poolclass': QueuePool,
                'pool_size': self.pool_size,
                'pool_recycle': 3600,
                'pool_pre_ping': True,
                'connect_args': {'charset': 'utf8mb4', 'connect_timeout': 30},
            })

        return kwargs

    def initialize(self) -> None:
        """
        Create the engine and session factory and check the connection once.

        Raises:
            SQLAlchemyError: If the database cannot be reached
        """
        if self._is_initialized:
            return

        try:
            self.engine = create_engine(self.database_url, **self.engine_kwargs)
            if self.db_type == 'sqlite':
                event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
            self._ping()
        except SQLAlchemyError as e:
            logger.error(f"Failed to open {self.db_type} database: {e}")
            raise

        # Repositories hand detached rows to the model converters after commit
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self._is_initialized = True
        logger.info(f"Database engine ready ({self.db_type})")

    def _ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create_tables(self) -> None:
        """Create the scheduling tables that do not exist yet."""
        self.initialize()
        try:
            create_all_tables(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create scheduling tables: {e}")
            raise
        logger.info("Scheduling tables created")

    def get_session(self) -> Session:
        self.initialize()
        return self.SessionLocal()

    @contextmanager
    def get_session_context(self) -> Iterator[Session]:
        """
        Session that commits when the block completes and rolls back on error.

        Usage:
            with db_config.get_session_context() as session:
                session.add(row)
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Rolled back database session: {e}")
            raise
        finally:
            session.close()

    def test_connection(self) -> bool:
        """True when the database answers a trivial query."""
        try:
            self.initialize()
            self._ping()
        except SQLAlchemyError as e:
            logger.error(f"Database connection test failed: {e}")
            return False
        return True

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connections closed")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def initialize_database(
    database_url: str,
    echo: bool = False,
    create_tables: bool = True,
) -> DatabaseConfig:
    """
    Open the database behind AppConfig.database_url.

    Args:
        database_url: SQLAlchemy database URL
        echo: Enable SQL query logging
        create_tables: Create missing tables as well

    Returns:
        Initialized DatabaseConfig instance
    """
    db_config = DatabaseConfig(database_url=database_url, echo=echo)
    db_config.initialize()

    if create_tables:
        db_config.create_tables()

    return db_config


__all__ = [
    'DatabaseConfig',
    'initialize_database',
]
