"""
Per-aircraft schedule lock.

Fetching an aircraft's schedule, checking it and saving a new flight must
happen as one critical section, otherwise two writers can both see a free
window. The lock is a Valkey key set with NX and a TTL, released through a
Lua script that only deletes the key while we still own it.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterator, Optional

from valkey.exceptions import ConnectionError, TimeoutError

from ..cache.client import ValkeyClient
from ..cache.config import ValkeyConnectionError

logger = logging.getLogger(__name__)

RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class ScheduleLockError(Exception):
    """The aircraft lock could not be acquired in time."""
    pass


@dataclass
class LockInfo:
    """Information about a held aircraft lock."""
    lock_key: str
    lock_value: str
    acquired_at: datetime
    expires_at: datetime
    ttl_seconds: int
    owner_id: str


def aircraft_lock_key(aircraft_id: int) -> str:
    return f"fleetplan:lock:aircraft:{aircraft_id}"


class AircraftScheduleLock:
    """
    Distributed lock keyed by aircraft id.

    Features:
    - Atomic acquisition with SET NX EX
    - Owner-checked release via Lua
    - Automatic expiry so a crashed writer cannot block an aircraft forever
    """

    def __init__(
        self,
        valkey_client: ValkeyClient,
        ttl_seconds: int = 30,
        timeout_seconds: float = 5.0,
        retry_delay: float = 0.1,
    ):
        """
        Initialize the lock manager.

        Args:
            valkey_client: Connected or connectable ValkeyClient
            ttl_seconds: Lock expiry
            timeout_seconds: How long acquire() waits for a busy lock
            retry_delay: Pause between acquisition attempts
        """
        self.valkey = valkey_client
        self.ttl_seconds = ttl_seconds
        self.timeout_seconds = timeout_seconds
        self.retry_delay = retry_delay
        self.instance_id = str(uuid.uuid4())[:8]
        self.active_locks: Dict[str, LockInfo] = {}

        logger.info(f"AircraftScheduleLock initialized with instance ID: {self.instance_id}")

    def acquire(self, aircraft_id: int, timeout_seconds: Optional[float] = None) -> Optional[LockInfo]:
        """
        Acquire the lock for an aircraft, retrying until the timeout.

        Returns:
            LockInfo if acquired, None on timeout
        """
        timeout = self.timeout_seconds if timeout_seconds is None else timeout_seconds
        lock_key = aircraft_lock_key(aircraft_id)
        lock_value = f"{self.instance_id}:{uuid.uuid4()}"

        start_time = time.time()
        attempts = 0
        while True:
            attempts += 1
            try:
                self.valkey.ensure_connection()
                if self.valkey.client.set(lock_key, lock_value, nx=True, ex=self.ttl_seconds):
                    acquired_at = datetime.now()
                    lock_info = LockInfo(
                        lock_key=lock_key,
                        lock_value=lock_value,
                        acquired_at=acquired_at,
                        expires_at=acquired_at + timedelta(seconds=self.ttl_seconds),
                        ttl_seconds=self.ttl_seconds,
                        owner_id=self.instance_id,
                    )
                    self.active_locks[lock_key] = lock_info
                    logger.debug(f"Lock acquired: {lock_key} (attempts: {attempts})")
                    return lock_info
            except (ConnectionError, TimeoutError, ValkeyConnectionError) as e:
                logger.warning(f"Error acquiring lock {lock_key}: {e}")

            if time.time() - start_time + self.retry_delay > timeout:
                break
            time.sleep(self.retry_delay)

        wait_ms = (time.time() - start_time) * 1000
        logger.warning(f"Failed to acquire lock: {lock_key} (attempts: {attempts}, wait: {wait_ms:.1f}ms)")
        return None

    def release(self, lock_info: LockInfo) -> bool:
        """
        Release a lock we still own.

        Returns:
            True if released, False if the lock was lost or Valkey failed;
            an unreleased lock expires with its TTL
        """
        self.active_locks.pop(lock_info.lock_key, None)
        try:
            self.valkey.ensure_connection()
            result = self.valkey.client.eval(RELEASE_SCRIPT, 1, lock_info.lock_key, lock_info.lock_value)
        except (ConnectionError, TimeoutError, ValkeyConnectionError) as e:
            logger.error(f"Error releasing lock {lock_info.lock_key}: {e}")
            return False

        if result:
            logger.debug(f"Lock released: {lock_info.lock_key}")
            return True
        logger.warning(f"Lock release failed (not owner or expired): {lock_info.lock_key}")
        return False

    @contextmanager
    def hold(self, aircraft_id: int) -> Iterator[LockInfo]:
        """
        Hold the aircraft lock for the duration of the block.

        Usage:
            with schedule_lock.hold(aircraft.aircraft_id):
                # validate and save
                pass

        Raises:
            ScheduleLockError: If the lock is not acquired within the timeout
        """
        lock_info = self.acquire(aircraft_id)
        if lock_info is None:
            raise ScheduleLockError(f"Aircraft {aircraft_id} is being scheduled by another writer")
        try:
            yield lock_info
        finally:
            self.release(lock_info)
