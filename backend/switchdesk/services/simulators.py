"""Periodic simulators standing in for real encoder / capture telemetry.

A ``MetricsSource`` produces the next statistics for one entity; the
``PeriodicSimulator`` applies it on a fixed tick and publishes the update.
Swapping the metrics source for a real one leaves the registry and broadcast
contracts untouched.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Any, Protocol

from switchdesk.models import FileInfo, Recording, RecordingStats, Stream, StreamStats
from switchdesk.registry import InMemoryRepository

logger = logging.getLogger(__name__)

# Simulated recording throughput: 10 MB per second of footage
BYTES_PER_SECOND = 10_000_000
RECORDING_FPS = 50
AUDIO_BITRATE = 192_000


class MetricsSource(Protocol):
    def sample(self, entity: Any, elapsed: float) -> dict[str, Any]:
        """Return the field changes for ``entity`` after ``elapsed`` seconds."""
        ...


class RandomStreamMetrics:
    """Pseudo-random encoder statistics for a running stream."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def sample(self, entity: Stream, elapsed: float) -> dict[str, Any]:
        previous = entity.stats
        stats = StreamStats(
            bitrate=5_000_000 + self.rng.random() * 3_000_000,
            bitrate_video=4_500_000 + self.rng.random() * 2_500_000,
            bitrate_audio=AUDIO_BITRATE,
            fps=50 + self.rng.random() * 10,
            dropped_frames=previous.dropped_frames + self.rng.randint(0, 2),
            viewers=previous.viewers + self.rng.randint(0, 4),
            latency=100 + self.rng.random() * 200,
        )
        return {"stats": stats}


class SimulatedRecordingMetrics:
    """File growth at a fixed throughput plus jittered bitrate."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def sample(self, entity: Recording, elapsed: float) -> dict[str, Any]:
        duration = entity.file_info.duration + elapsed
        file_info: FileInfo = replace(
            entity.file_info,
            duration=duration,
            size=int(duration * BYTES_PER_SECOND),
        )
        stats = RecordingStats(
            video_bitrate=5_000_000 + self.rng.random() * 2_000_000,
            audio_bitrate=AUDIO_BITRATE,
            fps=RECORDING_FPS,
            frame_count=int(duration * RECORDING_FPS),
        )
        return {"file_info": file_info, "stats": stats}


class PeriodicSimulator:
    """Mutates one entity's statistics every ``interval`` seconds.

    Each tick first checks that the entity still exists in ``active_status``;
    when it does not, the simulator stops for good.
    """

    def __init__(
        self,
        repository: InMemoryRepository,
        entity_id: str,
        active_status: str,
        interval: float,
        metrics: MetricsSource,
        publish: Callable[[Any], Awaitable[None]],
    ) -> None:
        self.repository = repository
        self.entity_id = entity_id
        self.active_status = active_status
        self.interval = interval
        self.metrics = metrics
        self.publish = publish
        self.ticks = 0
        self.finished = False

    def is_active(self) -> bool:
        entity = self.repository.find(self.entity_id)
        return entity is not None and entity.status == self.active_status

    async def tick(self) -> bool:
        """Apply one sample. Returns False once the entity is gone or inactive."""
        if self.finished or not self.is_active():
            self.finished = True
            return False

        entity = self.repository.get(self.entity_id)
        changes = self.metrics.sample(entity, self.interval)
        updated = self.repository.update(self.entity_id, **changes)
        self.ticks += 1
        await self.publish(updated)
        return True

    async def run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if not await self.tick():
                logger.debug(
                    f"Simulator for {self.entity_id} stopped after {self.ticks} ticks"
                )
                return
