"""Recording lifecycle: recording -> stopped -> removed."""

from __future__ import annotations

import logging
import time

from switchdesk.core.config import Settings
from switchdesk.core.errors import ConflictError
from switchdesk.core.scheduler import Scheduler
from switchdesk.models import FileInfo, Recording, RecordingStatus
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.registry import InMemoryRepository, utcnow
from switchdesk.schemas import RecordingConfig
from switchdesk.services.simulators import (
    MetricsSource,
    PeriodicSimulator,
    SimulatedRecordingMetrics,
)

logger = logging.getLogger(__name__)


class RecordingService:
    def __init__(
        self,
        recordings: InMemoryRepository[Recording],
        hub: BroadcastHub,
        scheduler: Scheduler,
        settings: Settings,
        metrics: MetricsSource | None = None,
    ) -> None:
        self.recordings = recordings
        self.hub = hub
        self.scheduler = scheduler
        self.settings = settings
        self.metrics = metrics or SimulatedRecordingMetrics()

    def list_recordings(self) -> list[Recording]:
        return self.recordings.list_all()

    def get_recording(self, record_id: str) -> Recording:
        return self.recordings.get(record_id)

    def new_simulator(self, record_id: str) -> PeriodicSimulator:
        return PeriodicSimulator(
            self.recordings,
            record_id,
            RecordingStatus.RECORDING,
            self.settings.recording_stats_interval,
            self.metrics,
            self._publish_stats,
        )

    async def start_recording(self, config: RecordingConfig) -> str:
        """Recording is active immediately; there is no starting phase."""
        record_id = self.recordings.new_id()
        payload = config.model_dump()
        payload["id"] = record_id
        recording = self.recordings.create(
            Recording(
                id=record_id,
                config=payload,
                status=RecordingStatus.RECORDING,
                start_time=utcnow(),
                file_info=FileInfo(
                    path=config.path,
                    filename=f"recording_{int(time.time() * 1000)}.{config.format}",
                    format=config.format,
                ),
            )
        )
        logger.info(f"Starting recording: {record_id}")
        await self.hub.broadcast(make_event(EventType.RECORDING_STARTED, recording=recording))

        self.scheduler.spawn(self.new_simulator(record_id).run(), name=f"record-stats-{record_id}")
        return record_id

    async def _publish_stats(self, recording: Recording) -> None:
        await self.hub.broadcast(
            make_event(
                EventType.RECORDING_STATS,
                record_id=recording.id,
                stats=recording.stats,
                file_info=recording.file_info,
            )
        )

    async def stop_recording(self, record_id: str) -> Recording:
        """Freeze file info at its last simulated value and mark stopped."""
        recording = self.recordings.get(record_id)
        if recording.status == RecordingStatus.STOPPED:
            raise ConflictError(f"Recording {record_id} is already stopped")

        recording = self.recordings.update(
            record_id, status=RecordingStatus.STOPPED, end_time=utcnow()
        )
        await self.hub.broadcast(
            make_event(EventType.RECORDING_STOPPED, record_id=record_id, recording=recording)
        )
        logger.info(
            f"Recording stopped: {record_id} "
            f"({recording.file_info.duration:.1f}s, {recording.file_info.size} bytes)"
        )

        self.scheduler.call_later(
            self.settings.recording_retention,
            lambda: self._remove(record_id),
            name=f"record-remove-{record_id}",
        )
        return recording

    async def _remove(self, record_id: str) -> None:
        self.recordings.discard(record_id)
