"""Periodic simulator tests."""

import random

import pytest

from switchdesk.models import FileInfo, Recording, RecordingStatus, Stream, StreamStatus
from switchdesk.registry import InMemoryRepository
from switchdesk.services.simulators import (
    BYTES_PER_SECOND,
    PeriodicSimulator,
    RandomStreamMetrics,
    SimulatedRecordingMetrics,
)


class Collector:
    def __init__(self) -> None:
        self.published = []

    async def __call__(self, entity) -> None:
        self.published.append(entity)


@pytest.fixture
def streams() -> InMemoryRepository[Stream]:
    repository = InMemoryRepository("stream", "stream")
    repository.create(Stream(id="stream_1", status=StreamStatus.RUNNING))
    return repository


def _simulator(streams, collector, interval=2.0) -> PeriodicSimulator:
    return PeriodicSimulator(
        streams,
        "stream_1",
        StreamStatus.RUNNING,
        interval,
        RandomStreamMetrics(random.Random(7)),
        collector,
    )


class TestPeriodicSimulator:
    @pytest.mark.asyncio
    async def test_tick_updates_and_publishes(self, streams):
        collector = Collector()
        simulator = _simulator(streams, collector)

        assert await simulator.tick() is True

        stream = streams.get("stream_1")
        assert stream.stats.bitrate >= 5_000_000
        assert collector.published == [stream]
        assert simulator.ticks == 1

    @pytest.mark.asyncio
    async def test_counters_never_decrease(self, streams):
        simulator = _simulator(streams, Collector())

        previous = streams.get("stream_1").stats
        for _ in range(10):
            await simulator.tick()
            current = streams.get("stream_1").stats
            assert current.dropped_frames >= previous.dropped_frames
            assert current.viewers >= previous.viewers
            previous = current

    @pytest.mark.asyncio
    async def test_stops_when_entity_removed(self, streams):
        collector = Collector()
        simulator = _simulator(streams, collector)
        await simulator.tick()

        streams.delete("stream_1")

        assert await simulator.tick() is False
        assert simulator.finished is True
        assert "stream_1" not in streams
        assert len(collector.published) == 1

    @pytest.mark.asyncio
    async def test_stops_for_good_once_inactive(self, streams):
        simulator = _simulator(streams, Collector())
        streams.update("stream_1", status=StreamStatus.STOPPING)
        assert await simulator.tick() is False

        # Even if the status flipped back, a finished simulator stays finished
        streams.update("stream_1", status=StreamStatus.RUNNING)
        assert await simulator.tick() is False

    @pytest.mark.asyncio
    async def test_run_exits_after_removal(self, streams):
        collector = Collector()
        simulator = _simulator(streams, collector, interval=0.001)
        streams.delete("stream_1")

        await simulator.run()

        assert simulator.ticks == 0
        assert collector.published == []


class TestRecordingMetrics:
    def test_size_follows_accumulated_duration(self):
        recording = Recording(
            id="record_1",
            status=RecordingStatus.RECORDING,
            file_info=FileInfo(path=".", filename="a.mp4", duration=2.5),
        )

        changes = SimulatedRecordingMetrics(random.Random(1)).sample(recording, 0.5)

        assert changes["file_info"].duration == pytest.approx(3.0)
        assert changes["file_info"].size == 3 * BYTES_PER_SECOND
        assert changes["file_info"].filename == "a.mp4"
        assert changes["stats"].frame_count == 150
