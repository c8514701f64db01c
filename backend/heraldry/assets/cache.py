"""Evict-never asset cache with in-flight sharing.

Concurrent lookups of the same key await one shared load. Failed loads are
not cached, so the next lookup retries.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class AssetCache(Generic[V]):
    def __init__(self) -> None:
        self._values: dict[str, V] = {}
        self._inflight: dict[str, asyncio.Task[V]] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: str) -> V | None:
        return self._values.get(key)

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[V]]) -> V:
        if key in self._values:
            return self._values[key]
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, loader))
            self._inflight[key] = task
        # A cancelled waiter must not cancel the load other waiters share
        return await asyncio.shield(task)

    async def _load(self, key: str, loader: Callable[[], Awaitable[V]]) -> V:
        try:
            value = await loader()
        finally:
            self._inflight.pop(key, None)
        self._values[key] = value
        logger.debug("Cached asset %s", key)
        return value
