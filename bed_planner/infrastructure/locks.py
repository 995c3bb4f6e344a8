"""
Per-bed locks

Placement holds the lock of the suggested bed while it re-checks occupancy
and saves the new stay, so two callers cannot both turn the same suggestion
into a stay.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Optional
import logging
import threading
import time
import uuid

from redis import Redis
from redis.exceptions import RedisError

from bed_planner.core.config import Settings, settings as default_settings
from bed_planner.core.exceptions import ConfigurationError, PlacementConflictError

logger = logging.getLogger(__name__)


class BedLockManager:
    """Base class for bed lock backends"""

    def acquire(self, bed_id: str) -> Optional[str]:
        """Return a release token, or None when the lock could not be taken in time"""
        raise NotImplementedError

    def release(self, bed_id: str, token: str) -> bool:
        raise NotImplementedError

    @contextmanager
    def hold(self, bed_id: str) -> Iterator[str]:
        token = self.acquire(bed_id)
        if token is None:
            logger.warning(f"Timed out waiting for lock on bed {bed_id}")
            raise PlacementConflictError(
                f"Bed {bed_id} is locked by another placement",
                details={"bed_id": bed_id}
            )
        try:
            yield token
        finally:
            self.release(bed_id, token)


class InMemoryBedLockManager(BedLockManager):
    """One threading.Lock per bed id, valid within a single process"""

    def __init__(self, wait_seconds: float = 5.0):
        self.wait_seconds = wait_seconds
        self._locks: Dict[str, threading.Lock] = {}
        self._tokens: Dict[str, str] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, bed_id: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(bed_id, threading.Lock())

    def acquire(self, bed_id: str) -> Optional[str]:
        if not self._lock_for(bed_id).acquire(timeout=self.wait_seconds):
            return None
        token = str(uuid.uuid4())
        with self._registry_lock:
            self._tokens[bed_id] = token
        return token

    def release(self, bed_id: str, token: str) -> bool:
        """Release only when the token matches the one issued by acquire"""
        lock = self._lock_for(bed_id)
        with self._registry_lock:
            if self._tokens.get(bed_id) != token:
                return False
            del self._tokens[bed_id]
        lock.release()
        return True


class RedisBedLockManager(BedLockManager):
    """Distributed lock shared by every worker connected to the same Redis"""

    RELEASE_SCRIPT = """
    if redis.call("get", KEYS[1]) == ARGV[1] then
        return redis.call("del", KEYS[1])
    else
        return 0
    end
    """

    def __init__(
        self,
        redis_client: Redis,
        timeout: int = 30,
        retry_delay: float = 0.1,
        wait_seconds: float = 5.0
    ):
        self.redis = redis_client
        self.timeout = timeout
        self.retry_delay = retry_delay
        self.max_retries = max(1, round(wait_seconds / retry_delay))

    @staticmethod
    def _key(bed_id: str) -> str:
        return f"lock:bed:{bed_id}"

    def acquire(self, bed_id: str) -> Optional[str]:
        """Acquire distributed lock"""
        lock_value = str(uuid.uuid4())
        for _ in range(self.max_retries):
            # SET NX with expiry, so a crashed holder cannot block the bed forever
            try:
                acquired = self.redis.set(self._key(bed_id), lock_value, ex=self.timeout, nx=True)
            except RedisError as e:
                logger.error(f"Lock acquire error for bed {bed_id}: {e}")
                raise ConfigurationError(
                    "Bed lock backend is unavailable",
                    details={"bed_id": bed_id, "backend": "redis"}
                ) from e
            if acquired:
                return lock_value
            time.sleep(self.retry_delay)
        return None

    def release(self, bed_id: str, token: str) -> bool:
        """Release distributed lock"""
        try:
            result = self.redis.eval(self.RELEASE_SCRIPT, 1, self._key(bed_id), token)
        except RedisError as e:
            # The key expires on its own after `timeout` seconds
            logger.error(f"Lock release error for bed {bed_id}: {e}")
            return False
        return result > 0


def build_lock_manager(config: Settings = None) -> BedLockManager:
    """Create the lock backend selected by BED_LOCK_BACKEND"""
    config = config or default_settings
    backend = config.BED_LOCK_BACKEND

    if backend == "memory":
        return InMemoryBedLockManager(wait_seconds=config.BED_LOCK_WAIT_SECONDS)

    if backend == "redis":
        if not config.REDIS_URL:
            raise ConfigurationError(
                "REDIS_URL is required when BED_LOCK_BACKEND is 'redis'",
                details={"setting": "REDIS_URL"}
            )
        client = Redis.from_url(config.REDIS_URL, decode_responses=True)
        logger.info("Using Redis bed locks")
        return RedisBedLockManager(
            client,
            timeout=config.BED_LOCK_TIMEOUT_SECONDS,
            wait_seconds=config.BED_LOCK_WAIT_SECONDS
        )

    raise ConfigurationError(
        f"Unknown BED_LOCK_BACKEND: {backend}",
        details={"setting": "BED_LOCK_BACKEND", "allowed": ["memory", "redis"]}
    )
