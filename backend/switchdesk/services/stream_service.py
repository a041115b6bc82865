"""Stream lifecycle: starting -> running -> stopping -> stopped -> removed."""

from __future__ import annotations

import logging

from switchdesk.core.config import Settings
from switchdesk.core.errors import ConflictError
from switchdesk.core.scheduler import Scheduler
from switchdesk.models import Stream, StreamStatus
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.registry import InMemoryRepository, utcnow
from switchdesk.schemas import StreamConfig
from switchdesk.services.simulators import MetricsSource, PeriodicSimulator, RandomStreamMetrics

logger = logging.getLogger(__name__)


class StreamService:
    def __init__(
        self,
        streams: InMemoryRepository[Stream],
        hub: BroadcastHub,
        scheduler: Scheduler,
        settings: Settings,
        metrics: MetricsSource | None = None,
    ) -> None:
        self.streams = streams
        self.hub = hub
        self.scheduler = scheduler
        self.settings = settings
        self.metrics = metrics or RandomStreamMetrics()

    def list_streams(self) -> list[Stream]:
        return self.streams.list_all()

    def get_stream(self, stream_id: str) -> Stream:
        return self.streams.get(stream_id)

    async def start_stream(self, config: StreamConfig) -> str:
        """Store the stream as ``starting`` and return its id right away.

        The switch to ``running`` happens after ``stream_start_delay``.
        """
        stream_id = self.streams.new_id()
        payload = config.model_dump()
        payload["id"] = stream_id
        self.streams.create(
            Stream(
                id=stream_id,
                config=payload,
                destinations=list(config.destinations),
            )
        )
        logger.info(f"Starting stream: {stream_id}")

        self.scheduler.call_later(
            self.settings.stream_start_delay,
            lambda: self._activate(stream_id),
            name=f"stream-start-{stream_id}",
        )
        return stream_id

    async def _activate(self, stream_id: str) -> None:
        stream = self.streams.find(stream_id)
        if stream is None or stream.status != StreamStatus.STARTING:
            # Stopped (or removed) before it came up
            return

        stream = self.streams.update(stream_id, status=StreamStatus.RUNNING, start_time=utcnow())
        await self.hub.broadcast(make_event(EventType.STREAM_STARTED, stream=stream))
        logger.info(f"Stream running: {stream_id}")

        simulator = PeriodicSimulator(
            self.streams,
            stream_id,
            StreamStatus.RUNNING,
            self.settings.stream_stats_interval,
            self.metrics,
            self._publish_stats,
        )
        self.scheduler.spawn(simulator.run(), name=f"stream-stats-{stream_id}")

    async def _publish_stats(self, stream: Stream) -> None:
        await self.hub.broadcast(
            make_event(EventType.STREAM_STATS, stream_id=stream.id, stats=stream.stats)
        )

    async def stop_stream(self, stream_id: str) -> None:
        stream = self.streams.get(stream_id)
        if stream.status in (StreamStatus.STOPPING, StreamStatus.STOPPED):
            raise ConflictError(f"Stream {stream_id} is already {stream.status}")

        self.streams.update(stream_id, status=StreamStatus.STOPPING)
        logger.info(f"Stopping stream: {stream_id}")
        await self.hub.broadcast(make_event(EventType.STREAM_STOPPING, stream_id=stream_id))

        self.scheduler.call_later(
            self.settings.stream_stop_delay,
            lambda: self._finish(stream_id),
            name=f"stream-stop-{stream_id}",
        )

    async def _finish(self, stream_id: str) -> None:
        stream = self.streams.find(stream_id)
        if stream is None or stream.status != StreamStatus.STOPPING:
            return

        end_time = utcnow()
        stream = self.streams.update(stream_id, status=StreamStatus.STOPPED, end_time=end_time)
        duration = (end_time - stream.start_time).total_seconds() if stream.start_time else 0
        await self.hub.broadcast(
            make_event(EventType.STREAM_STOPPED, stream_id=stream_id, duration=duration)
        )
        logger.info(f"Stream stopped: {stream_id} ({duration:.1f}s)")

        self.scheduler.call_later(
            self.settings.stream_retention,
            lambda: self._remove(stream_id),
            name=f"stream-remove-{stream_id}",
        )

    async def _remove(self, stream_id: str) -> None:
        self.streams.discard(stream_id)
