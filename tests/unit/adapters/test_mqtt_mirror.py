"""
로컬 MQTT 미러 테스트
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

from aiomqtt import MqttError

from fireguard.adapters.mqtt_local import MqttEventMirror


def _connection(client):
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=client)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


async def _wait_for(predicate, attempts=100):
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0.01)


class TestMqttEventMirror:
    """MQTT 미러 테스트"""

    async def test_enqueue_uses_prefixed_topic(self):
        mirror = MqttEventMirror(broker_host="localhost", topic_prefix="home/fire/")
        await mirror("fire-alert", {"status": "FIRE", "eventId": 1})

        topic, body = mirror.queue.get_nowait()
        assert topic == "home/fire/fire-alert"
        assert json.loads(body) == {"status": "FIRE", "eventId": 1}

    async def test_full_queue_drops(self):
        mirror = MqttEventMirror(broker_host="localhost", queue_maxsize=1)
        await mirror("fire-alert", {"n": 1})
        await mirror("fire-alert", {"n": 2})
        assert mirror.queue.qsize() == 1

    async def test_publishes_online_then_messages(self):
        mirror = MqttEventMirror(broker_host="localhost")
        client = AsyncMock()

        with patch.object(mirror, "_client", return_value=_connection(client)):
            task = asyncio.create_task(mirror.start())
            await mirror("fire-location", {"id": 3})
            await _wait_for(lambda: client.publish.await_count >= 2)
            await mirror.stop()
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        first, second = client.publish.await_args_list[:2]
        assert first.args == ("fireguard/state", "online")
        assert first.kwargs == {"qos": 1, "retain": True}
        assert second.args[0] == "fireguard/fire-location"
        assert json.loads(second.args[1]) == {"id": 3}

    async def test_reconnects_after_error(self):
        mirror = MqttEventMirror(broker_host="localhost")
        client = AsyncMock()
        failing = MagicMock()
        failing.__aenter__ = AsyncMock(side_effect=MqttError("connection refused"))
        failing.__aexit__ = AsyncMock(return_value=False)

        backoff = AsyncMock()
        with patch.object(mirror, "_client", side_effect=[failing, _connection(client)]), \
                patch("fireguard.adapters.mqtt_local.mirror.exponential_backoff", backoff):
            task = asyncio.create_task(mirror.start())
            await _wait_for(lambda: client.publish.await_count >= 1)
            await mirror.stop()
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        backoff.assert_awaited_once()
        assert backoff.await_args.args[0] == 1
        client.publish.assert_any_await("fireguard/state", "online", qos=1, retain=True)
