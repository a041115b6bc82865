"""Channel protocol and dispatcher tests."""

import json

import pytest
import pytest_asyncio

from switchdesk.core.errors import ChannelMessageError
from switchdesk.realtime.dispatcher import COMMANDS, MessageDispatcher
from switchdesk.realtime.protocol import (
    CommandMessage,
    PingMessage,
    SubscribeMessage,
    parse_message,
)
from tests.helpers import FakeChannel, wait_for


# =============================================================================
# Protocol parsing
# =============================================================================


class TestParseMessage:
    def test_command(self):
        message = parse_message(
            json.dumps({"type": "command", "command": "get_config", "request_id": "r1"})
        )

        assert isinstance(message, CommandMessage)
        assert message.params == {}
        assert message.request_id == "r1"

    def test_subscribe(self):
        message = parse_message('{"type": "subscribe", "events": ["stream_stats"]}')
        assert isinstance(message, SubscribeMessage)
        assert message.events == ["stream_stats"]

    def test_binary_frame(self):
        assert isinstance(parse_message(b'{"type": "ping"}'), PingMessage)

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            '{"no_type": true}',
            '{"type": "teleport"}',
            '{"type": "subscribe"}',
            "[1, 2]",
            '{"type": "heartbeat_ack"}',
        ],
    )
    def test_invalid(self, raw):
        with pytest.raises(ChannelMessageError, match="Invalid message format"):
            parse_message(raw)


# =============================================================================
# Dispatcher
# =============================================================================


@pytest_asyncio.fixture
async def connected(app_state):
    channel = FakeChannel()
    dispatcher = MessageDispatcher(app_state)
    client = await app_state.hub.connect(channel, greeting=dispatcher.welcome)
    return dispatcher, client, channel


def _send(**message) -> str:
    return json.dumps(message)


class TestWelcome:
    @pytest.mark.asyncio
    async def test_welcome_first(self, connected):
        _, client, channel = connected

        welcome = channel.sent[0]
        assert welcome["type"] == "welcome"
        assert welcome["client_id"] == client.client_id
        assert welcome["system"] == {
            "version": "1.0.0",
            "streams": 0,
            "scenes": 2,
            "program_scene": None,
            "preview_scene": None,
        }
        assert channel.types()[1] == "client_connected"


class TestSimpleMessages:
    @pytest.mark.asyncio
    async def test_ping(self, connected):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(client, _send(type="ping"))

        assert channel.types() == ["pong"]

    @pytest.mark.asyncio
    async def test_get_status(self, connected):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(client, _send(type="get_status"))

        status = channel.sent[0]
        assert status["type"] == "system_status"
        assert status["data"]["resources"]["clients"] == 1

    @pytest.mark.asyncio
    async def test_subscribe_and_unsubscribe(self, connected):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(client, _send(type="subscribe", events=["scene_saved", "pong"]))
        await dispatcher.handle(client, _send(type="unsubscribe", events=["pong"]))

        confirmed, removed = channel.sent
        assert confirmed["type"] == "subscription_confirmed"
        assert confirmed["events"] == ["pong", "scene_saved"]
        assert removed["type"] == "unsubscription_confirmed"
        assert removed["events"] == ["pong"]
        assert client.subscriptions == {"scene_saved"}

    @pytest.mark.asyncio
    async def test_malformed_frame_gets_error_and_channel_stays(self, connected, app_state):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(client, "{broken")

        assert channel.types() == ["error"]
        assert channel.sent[0]["error"].startswith("Invalid message format")
        assert client.client_id in app_state.hub


class TestCommands:
    def test_registered_commands(self):
        assert set(COMMANDS) == {
            "start_stream",
            "stop_stream",
            "start_recording",
            "stop_recording",
            "transition",
            "save_scene",
            "update_scene",
            "delete_scene",
            "set_scene",
            "add_source",
            "scan_hardware",
            "save_config",
            "get_config",
        }

    @pytest.mark.asyncio
    async def test_start_stream_reply_correlated(self, connected, app_state):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(
            client,
            _send(type="command", command="start_stream", params={"name": "x"}, request_id="42"),
        )

        reply = channel.of_type("command_response")[0]
        assert reply["command"] == "start_stream"
        assert reply["request_id"] == "42"
        assert reply["success"] is True
        assert reply["stream_id"] in app_state.registry.streams
        await wait_for(lambda: channel.of_type("stream_started"))

    @pytest.mark.asyncio
    async def test_unknown_command(self, connected):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(client, _send(type="command", command="self_destruct"))

        reply = channel.sent[0]
        assert reply["command"] == "self_destruct"
        assert reply["success"] is False
        assert reply["error"] == "Unknown command"
        assert "request_id" not in reply

    @pytest.mark.asyncio
    async def test_handler_error_reported(self, connected):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(
            client,
            _send(type="command", command="stop_stream", params={"stream_id": "stream_nope"}),
        )

        reply = channel.sent[0]
        assert reply["success"] is False
        assert reply["error"] == "Stream stream_nope not found"

    @pytest.mark.asyncio
    async def test_invalid_params_reported(self, connected):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(client, _send(type="command", command="stop_stream", params={}))

        reply = channel.sent[0]
        assert reply["success"] is False
        assert reply["error"].startswith("Invalid params: stream_id")

    @pytest.mark.asyncio
    async def test_update_scene_broadcasts_to_all(self, connected, app_state):
        dispatcher, client, channel = connected
        other = FakeChannel()
        await app_state.hub.connect(other)
        channel.sent.clear()
        other.sent.clear()

        await dispatcher.handle(
            client,
            _send(
                type="command",
                command="update_scene",
                params={"scene_id": "scene_default_1", "updates": {"name": "Main"}},
            ),
        )

        assert other.of_type("scene_updated")[0]["scene"]["name"] == "Main"
        assert channel.types() == ["scene_updated", "command_response"]

    @pytest.mark.asyncio
    async def test_get_config(self, connected):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(client, _send(type="command", command="get_config"))

        reply = channel.sent[0]
        assert reply["success"] is True
        assert reply["config"]["audio"]["codec"] == "aac"

    @pytest.mark.asyncio
    async def test_set_scene_broadcasts_change(self, connected, app_state):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(
            client,
            _send(
                type="command",
                command="set_scene",
                params={"sceneId": "scene_default_2"},
                request_id="s1",
            ),
        )

        changed, reply = channel.sent
        assert changed["type"] == "scene_changed"
        assert changed["scene_id"] == "scene_default_2"
        assert changed["target"] == "program"
        assert reply["type"] == "command_response"
        assert reply["success"] is True
        assert reply["request_id"] == "s1"
        assert app_state.system.snapshot()["program_scene"] == "scene_default_2"

    @pytest.mark.asyncio
    async def test_set_scene_unknown(self, connected, app_state):
        dispatcher, client, channel = connected
        channel.sent.clear()

        await dispatcher.handle(
            client,
            _send(type="command", command="set_scene", params={"scene_id": "scene_missing"}),
        )

        assert channel.types() == ["command_response"]
        assert channel.sent[0]["success"] is False
        assert channel.sent[0]["error"] == "Scene scene_missing not found"
        assert app_state.scenes.program_scene_id is None
