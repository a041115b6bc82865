"""Shared fixtures: fast timing settings, fake channels and a wired AppState."""

from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from switchdesk.app import create_app
from switchdesk.core.config import Settings
from switchdesk.core.scheduler import Scheduler
from switchdesk.core.state import AppState
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.registry import Registry
from tests.helpers import FakeChannel

# Every delay shrunk so lifecycle tests finish in milliseconds
FAST_TIMINGS: dict[str, Any] = {
    "stream_start_delay": 0.02,
    "stream_stop_delay": 0.02,
    "stream_retention": 0.05,
    "stream_stats_interval": 0.01,
    "recording_stats_interval": 0.01,
    "recording_retention": 0.05,
    "liveness_interval": 3600.0,
    "enable_keep_alive": False,
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment="testing",
        config_path=tmp_path / "config" / "defaults.json",
        **FAST_TIMINGS,
    )


@pytest.fixture
def hub() -> BroadcastHub:
    return BroadcastHub()


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest_asyncio.fixture
async def scheduler():
    scheduler = Scheduler()
    yield scheduler
    await scheduler.cancel_all()


@pytest_asyncio.fixture
async def listener(hub: BroadcastHub) -> FakeChannel:
    """A connected client whose received messages can be inspected."""
    channel = FakeChannel()
    await hub.connect(channel)
    channel.sent.clear()
    return channel


@pytest_asyncio.fixture
async def app_state(settings: Settings):
    state = AppState(settings)
    await state.startup()
    yield state
    await state.shutdown()


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
