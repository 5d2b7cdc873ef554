"""
Synchronous Valkey client with health checks and reconnection.

The scheduling engine is synchronous, so the client blocks on connection
retries and exposes the underlying valkey.Valkey for lock commands.
"""

import logging
import time
from typing import Optional

import valkey
from valkey.connection import ConnectionPool
from valkey.exceptions import ConnectionError, TimeoutError

from .config import ValkeyConfig, ValkeyConnectionError

logger = logging.getLogger(__name__)


class ValkeyClient:
    """
    Valkey client with connection pooling and automatic reconnection.
    """

    def __init__(self, config: Optional[ValkeyConfig] = None, max_connection_attempts: int = 5):
        """
        Initialize Valkey client with configuration.

        Args:
            config: ValkeyConfig instance, defaults to localhost:6379
            max_connection_attempts: Attempts before connect() gives up
        """
        self.config = config or ValkeyConfig()
        self._client: Optional[valkey.Valkey] = None
        self._connection_pool: Optional[ConnectionPool] = None
        self._is_connected = False
        self._last_health_check = 0.0
        self._max_connection_attempts = max_connection_attempts
        self._reconnect_delay = 1.0
        self._max_reconnect_delay = 30.0

        logger.info(f"Initializing Valkey client: {self.config}")

    def connect(self) -> None:
        """
        Establish connection to Valkey server with retry logic.

        Raises:
            ValkeyConnectionError: If connection cannot be established after max attempts
        """
        if self._is_connected and self._client:
            return

        attempts = 0
        while True:
            attempts += 1
            try:
                logger.info(f"Attempting Valkey connection (attempt {attempts})")
                self._connection_pool = ConnectionPool(**self.config.to_connection_pool_kwargs())
                self._client = valkey.Valkey(connection_pool=self._connection_pool)
                self._ping()
                self._is_connected = True
                logger.info("Successfully connected to Valkey server")
                return

            except (ConnectionError, TimeoutError, OSError, ValkeyConnectionError) as e:
                logger.warning(f"Valkey connection attempt {attempts} failed: {e}")

                if attempts >= self._max_connection_attempts:
                    error_msg = (
                        f"Failed to connect to Valkey after {attempts} attempts. "
                        f"Last error: {e}"
                    )
                    logger.error(error_msg)
                    raise ValkeyConnectionError(error_msg) from e

                delay = min(self._reconnect_delay * (2 ** (attempts - 1)), self._max_reconnect_delay)
                logger.info(f"Retrying connection in {delay:.1f} seconds...")
                time.sleep(delay)

    def disconnect(self) -> None:
        """Disconnect from Valkey server."""
        if self._connection_pool:
            try:
                self._connection_pool.disconnect()
                logger.info("Disconnected from Valkey server")
            finally:
                self._connection_pool = None
                self._client = None
                self._is_connected = False

    def _ping(self) -> None:
        if not self._client:
            raise ValkeyConnectionError("Client not initialized")
        try:
            if not self._client.ping():
                raise ValkeyConnectionError("Ping returned False")
        except (ConnectionError, TimeoutError) as e:
            raise ValkeyConnectionError(f"Connection test failed: {e}") from e

    def health_check(self, force: bool = False) -> bool:
        """
        Ping the server unless a check ran within the health check interval.

        Returns:
            bool: True if connection is healthy, False otherwise
        """
        current_time = time.time()
        if not force and (current_time - self._last_health_check) < self.config.health_check_interval:
            return self.is_connected

        self._last_health_check = current_time
        if not self.is_connected:
            logger.debug("Health check failed: not connected")
            return False

        try:
            self._ping()
            logger.debug("Health check passed")
            return True
        except ValkeyConnectionError as e:
            logger.warning(f"Health check failed: {e}")
            self._is_connected = False
            return False

    def ensure_connection(self) -> None:
        """
        Ensure connection is available, reconnect if necessary.

        Raises:
            ValkeyConnectionError: If connection cannot be established
        """
        if not self.health_check():
            logger.info("Connection unhealthy, attempting reconnection...")
            self._is_connected = False
            self.connect()

    @property
    def is_connected(self) -> bool:
        return self._is_connected and self._client is not None

    @property
    def client(self) -> valkey.Valkey:
        """
        Get the underlying Valkey client.

        Raises:
            ValkeyConnectionError: If client is not connected
        """
        if not self.is_connected:
            raise ValkeyConnectionError("Client not connected. Call connect() first.")
        return self._client

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
