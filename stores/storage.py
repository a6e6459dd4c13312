"""
Persistence adapters for client-local state (cart, favorites, language).

A store only ever sees the StateStorage interface: raw string values
under a small fixed set of keys. What backs it is chosen by the caller:
Redis in the running app (one namespace per X-Client-Id), memory in tests.

Stores load, mutate and save whole values, so a request that changes a key
holds lock(key) for the whole round trip. Two requests of the same client
then never interleave their read-modify-write.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncContextManager

from redis.asyncio import Redis

from exceptions import ClientStateBusyException

logger = logging.getLogger(__name__)


class StateStorage(ABC):

    @abstractmethod
    async def load(self, key: str) -> str | None:
        """Raw stored value, or None when nothing was saved under key."""

    @abstractmethod
    async def save(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...

    @abstractmethod
    def lock(self, key: str) -> AsyncContextManager:
        """Exclusive access to key for this client, released on exit."""


class MemoryStateStorage(StateStorage):

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self._locks: dict[str, asyncio.Lock] = {}

    async def load(self, key: str) -> str | None:
        return self.data.get(key)

    async def save(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def lock(self, key: str) -> AsyncContextManager:
        return self._locks.setdefault(key, asyncio.Lock())


class RedisStateStorage(StateStorage):
    """
    Client state in Redis under store:client:<client_id>:<key>.

    Every save refreshes the TTL, so an abandoned cart expires
    ttl_seconds after its last change. Locks live next to the value
    (store:client:<client_id>:<key>:lock) and expire after
    lock_timeout_seconds even if the holder dies.
    """

    KEY_PREFIX = "store:client"

    def __init__(self, redis: Redis, client_id: str, ttl_seconds: int | None = None,
                 lock_timeout_seconds: float = 10, lock_wait_seconds: float = 5):
        self.redis = redis
        self.client_id = client_id
        self.ttl_seconds = ttl_seconds
        self.lock_timeout_seconds = lock_timeout_seconds
        self.lock_wait_seconds = lock_wait_seconds

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}:{self.client_id}:{key}"

    async def load(self, key: str) -> str | None:
        value = await self.redis.get(self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def save(self, key: str, value: str) -> None:
        if self.ttl_seconds:
            await self.redis.set(self._key(key), value, ex=self.ttl_seconds)
        else:
            await self.redis.set(self._key(key), value)

    async def delete(self, key: str) -> None:
        await self.redis.delete(self._key(key))

    @asynccontextmanager
    async def lock(self, key: str):
        redis_lock = self.redis.lock(self._key(f"{key}:lock"),
                                     timeout=self.lock_timeout_seconds,
                                     sleep=0.05,
                                     blocking_timeout=self.lock_wait_seconds,
                                     thread_local=False)
        if not await redis_lock.acquire():
            logger.warning(f"Client {self.client_id} lock on '{key}' not acquired "
                           f"within {self.lock_wait_seconds}s")
            raise ClientStateBusyException(self.client_id, key)
        try:
            yield
        finally:
            await redis_lock.release()
