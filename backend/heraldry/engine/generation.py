"""Render generations: only the newest render's result is kept.

Every render started through a session takes the next id from a monotonic
counter. A render that finishes after a newer one has started is stale and
its result is dropped.
"""

from __future__ import annotations

import logging
import threading

from heraldry.engine.pipeline import RenderPipeline, RenderResult
from heraldry.models.composition import Composition

logger = logging.getLogger(__name__)


class GenerationCounter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def current(self) -> int:
        with self._lock:
            return self._value


class RenderSession:
    def __init__(self, pipeline: RenderPipeline, counter: GenerationCounter | None = None) -> None:
        self.pipeline = pipeline
        self.counter = counter or GenerationCounter()
        self.latest: RenderResult | None = None

    def is_current(self, generation: int) -> bool:
        return generation == self.counter.current

    async def render(self, composition: Composition, shield_type: str | None = None) -> RenderResult | None:
        """Render, or return None when a newer render started meanwhile."""
        generation = self.counter.next()
        result = await self.pipeline.render(composition, shield_type, generation=generation)
        if not self.is_current(generation):
            logger.debug("Discarding stale render %d (current %d)", generation, self.counter.current)
            return None
        self.latest = result
        return result
