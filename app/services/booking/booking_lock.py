# app/services/booking/booking_lock.py
"""
Tenant-scoped mutual exclusion for booking admission.

The overlap check and the insert of a new booking must run under one of
these locks, held until the transaction commits. Locks are always keyed by
business id so unrelated businesses never wait on each other.

Backends (BOOKING_LOCK_BACKEND):
    auto     PostgreSQL advisory transaction lock, in-process lock otherwise
    advisory pg_advisory_xact_lock, released by commit/rollback
    redis    Redis lock, for deployments spanning several processes
    local    in-process threading.Lock per business
"""
import threading
from contextlib import contextmanager
from typing import Dict
from uuid import UUID
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from redis.exceptions import LockError
import logging

from app.config.settings import get_settings
from app.core.exceptions import BookingConflict

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Another booking for this business is being processed, please try again"


class _LocalLockRegistry:
    """One lock per business id, created on first use"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def get(self, business_id: UUID) -> threading.Lock:
        key = str(business_id)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


_local_locks = _LocalLockRegistry()


def advisory_lock_key(business_id: UUID) -> int:
    """Signed 64-bit key derived from the business UUID"""
    return int.from_bytes(UUID(str(business_id)).bytes[:8], "big", signed=True)


def resolve_backend(db: Session) -> str:
    backend = get_settings().BOOKING_LOCK_BACKEND.lower()
    if backend == "auto":
        return "advisory" if db.get_bind().dialect.name == "postgresql" else "local"
    if backend not in ("advisory", "redis", "local"):
        raise ValueError(f"Unknown booking lock backend: {backend}")
    return backend


@contextmanager
def _advisory_lock(db: Session, business_id: UUID, timeout: float):
    try:
        db.execute(text(f"SET LOCAL lock_timeout = '{int(timeout * 1000)}ms'"))
        db.execute(text("SELECT pg_advisory_xact_lock(:key)"), {"key": advisory_lock_key(business_id)})
    except OperationalError as e:
        db.rollback()
        logger.warning(f"Advisory lock timeout for business {business_id}: {e}")
        raise BookingConflict(BUSY_MESSAGE)
    # Released by the commit/rollback that ends the admission transaction
    yield


@contextmanager
def _redis_lock(business_id: UUID, timeout: float):
    from app.config.redis import get_redis, RedisKeys

    lock = get_redis().lock(
        RedisKeys.BOOKING_LOCK.format(business_id=business_id),
        timeout=timeout * 2,
        blocking_timeout=timeout,
    )
    if not lock.acquire():
        logger.warning(f"Redis booking lock busy for business {business_id}")
        raise BookingConflict(BUSY_MESSAGE)
    try:
        yield
    finally:
        try:
            lock.release()
        except LockError:
            logger.error(f"Redis booking lock for business {business_id} expired before release")


@contextmanager
def _local_lock(business_id: UUID, timeout: float):
    lock = _local_locks.get(business_id)
    if not lock.acquire(timeout=timeout):
        logger.warning(f"Local booking lock busy for business {business_id}")
        raise BookingConflict(BUSY_MESSAGE)
    try:
        yield
    finally:
        lock.release()


@contextmanager
def booking_lock(db: Session, business_id: UUID):
    """Hold the admission lock of one business for the duration of the block"""
    timeout = get_settings().BOOKING_LOCK_TIMEOUT_SECONDS
    backend = resolve_backend(db)

    if backend == "advisory":
        with _advisory_lock(db, business_id, timeout):
            yield
    elif backend == "redis":
        with _redis_lock(business_id, timeout):
            yield
    else:
        with _local_lock(business_id, timeout):
            yield
