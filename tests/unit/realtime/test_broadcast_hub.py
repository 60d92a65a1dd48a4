"""
브로드캐스트 허브 테스트
"""

import asyncio
from unittest.mock import AsyncMock

from fireguard.realtime import BroadcastHub


class TestBroadcastHub:
    """브로드캐스트 허브 테스트"""

    async def test_frames_reach_every_subscriber_in_order(self):
        hub = BroadcastHub()
        a, b = hub.subscribe(), hub.subscribe()

        hub.publish("fire-alert", {"status": "FIRE"})
        hub.publish("fire-location", {"id": 1})

        for sub in (a, b):
            assert await sub.get() == {"event": "fire-alert", "data": {"status": "FIRE"}}
            assert await sub.get() == {"event": "fire-location", "data": {"id": 1}}

    async def test_late_subscriber_gets_no_history(self):
        hub = BroadcastHub()
        hub.publish("fire-alert", {"status": "FIRE"})

        late = hub.subscribe()
        assert late.get_nowait() is None

        hub.publish("fire-alert", {"status": "SAFE"})
        assert late.get_nowait()["data"] == {"status": "SAFE"}

    async def test_publish_without_subscribers(self):
        assert BroadcastHub().publish("fire-alert", {"status": "SAFE"}) == 0

    async def test_slow_subscriber_only_drops_for_itself(self):
        hub = BroadcastHub(queue_size=1)
        slow, fast = hub.subscribe(), hub.subscribe()

        hub.publish("fire-alert", {"n": 1})
        assert fast.get_nowait()["data"] == {"n": 1}
        delivered = hub.publish("fire-alert", {"n": 2})

        assert delivered == 1
        assert slow.dropped == 1
        assert slow.get_nowait()["data"] == {"n": 1}
        assert fast.get_nowait()["data"] == {"n": 2}

    async def test_unsubscribe(self):
        hub = BroadcastHub()
        sub = hub.subscribe()
        hub.unsubscribe(sub)
        hub.unsubscribe(sub)

        assert hub.subscriber_count == 0
        assert hub.publish("fire-alert", {}) == 0

    async def test_sinks_receive_channel_and_payload(self):
        hub = BroadcastHub()
        sink = AsyncMock()
        hub.add_sink(sink)

        hub.publish("fire-alert", {"status": "FIRE"})
        await hub.drain()

        sink.assert_awaited_once_with("fire-alert", {"status": "FIRE"})

    async def test_failing_sink_does_not_affect_publish(self):
        hub = BroadcastHub()
        sub = hub.subscribe()
        hub.add_sink(AsyncMock(side_effect=RuntimeError("broker down")))

        assert hub.publish("fire-alert", {"status": "FIRE"}) == 1
        await hub.drain()
        await asyncio.sleep(0)

        assert sub.get_nowait()["data"] == {"status": "FIRE"}

    def test_publish_outside_loop_skips_sinks(self):
        hub = BroadcastHub()
        sink = AsyncMock()
        hub.add_sink(sink)

        hub.publish("fire-alert", {"status": "FIRE"})

        sink.assert_not_called()
