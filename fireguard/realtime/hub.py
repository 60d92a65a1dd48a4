"""
Broadcast hub for FireGuard.

This module implements a best-effort publish/subscribe fan-out.
Each subscriber owns a bounded FIFO queue; publishing never waits on
a subscriber and never raises to the publisher. Extra consumers
(sinks) receive every message as a background task.
"""

import asyncio
import itertools
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set
from fireguard.observability import metrics
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.hub")

Sink = Callable[[str, Dict[str, Any]], Awaitable[None]]


class Subscription:
    """구독자 하나의 수신 큐"""

    def __init__(self, sid: int, maxsize: int):
        self.id = sid
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    async def get(self) -> Dict[str, Any]:
        """다음 프레임 ``{"event": channel, "data": payload}``을 기다립니다."""
        return await self.queue.get()

    def get_nowait(self) -> Optional[Dict[str, Any]]:
        try:
            return self.queue.get_nowait()
        except asyncio.QueueEmpty:
            return None


class BroadcastHub:
    """단일 작성자 다중 구독자 브로드캐스트 허브"""

    def __init__(self, *, queue_size: int = 100):
        """
        초기화합니다.

        Args:
            queue_size: 구독자별 큐 최대 크기 (초과 시 해당 구독자에게만 드롭)
        """
        self.queue_size = queue_size
        self._subscribers: Dict[int, Subscription] = {}
        self._sinks: List[Sink] = []
        self._tasks: Set[asyncio.Task] = set()
        self._ids = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> Subscription:
        sub = Subscription(next(self._ids), self.queue_size)
        self._subscribers[sub.id] = sub
        metrics.realtime_subscribers.set(len(self._subscribers))
        log.info(f"구독자 연결됨 id:{sub.id} total:{len(self._subscribers)}")
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        if self._subscribers.pop(sub.id, None) is not None:
            metrics.realtime_subscribers.set(len(self._subscribers))
            log.info(f"구독자 연결 해제됨 id:{sub.id} total:{len(self._subscribers)}")

    def add_sink(self, sink: Sink) -> None:
        self._sinks.append(sink)

    def publish(self, channel: str, payload: Dict[str, Any]) -> int:
        """
        현재 연결된 모든 구독자와 싱크에 메시지를 전달합니다.

        Args:
            channel: 채널 이름
            payload: 페이로드

        Returns:
            큐에 넣은 구독자 수
        """
        frame = {"event": channel, "data": payload}
        delivered = 0
        for sub in list(self._subscribers.values()):
            try:
                sub.queue.put_nowait(frame)
                delivered += 1
            except asyncio.QueueFull:
                sub.dropped += 1
                metrics.broadcast_dropped.labels(channel=channel).inc()
                log.warning(f"느린 구독자에게 메시지 드롭 id:{sub.id} channel:{channel}")

        for sink in self._sinks:
            self._spawn(sink, channel, payload)

        metrics.broadcast_messages.labels(channel=channel).inc()
        log.debug(f"브로드캐스트 channel:{channel} delivered:{delivered}")
        return delivered

    def _spawn(self, sink: Sink, channel: str, payload: Dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.warning(f"이벤트 루프가 없어 싱크 전달 생략 channel:{channel}")
            return
        task = loop.create_task(sink(channel, payload))
        self._tasks.add(task)
        task.add_done_callback(self._on_sink_done)

    def _on_sink_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            metrics.sink_failures.inc()
            log.error(f"싱크 전달 실패 error:{exc}")

    async def drain(self) -> None:
        """진행 중인 싱크 전달이 끝날 때까지 기다립니다."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
