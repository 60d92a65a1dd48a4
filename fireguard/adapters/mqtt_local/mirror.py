"""
Local MQTT mirror for FireGuard.

This module mirrors every broadcast hub message to a local MQTT
broker (``<prefix>/fire-alert``, ``<prefix>/fire-location``) so that
home-automation consumers can react to fire alerts.
"""

import asyncio
import json
from typing import Any, Dict, Optional, Tuple
from aiomqtt import Client, MqttError, Will
from fireguard.common.retry import exponential_backoff
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.mqtt_local")


class MqttEventMirror:
    """허브 메시지를 로컬 MQTT로 복제하는 싱크"""

    def __init__(self,
                 *,
                 broker_host: str,
                 broker_port: int = 1883,
                 topic_prefix: str = "fireguard",
                 username: str | None = None,
                 password: str | None = None,
                 client_id: str | None = None,
                 keepalive: int = 30,
                 qos: int = 1,
                 retain: bool = False,
                 lwt_topic: str = "fireguard/state",
                 backoff_initial: float = 0.5,
                 backoff_max: float = 30.0,
                 queue_maxsize: int = 1000):
        """
        초기화합니다.

        Args:
            broker_host: MQTT 브로커 호스트
            broker_port: MQTT 브로커 포트
            topic_prefix: 토픽 접두사
            username: 사용자명
            password: 비밀번호
            client_id: 클라이언트 ID
            keepalive: keepalive 시간
            qos: 발행 QoS
            retain: retain 플래그
            lwt_topic: Last Will and Testament 토픽
            backoff_initial: 재연결 초기 백오프 시간
            backoff_max: 재연결 최대 백오프 시간
            queue_maxsize: 대기 큐 최대 크기
        """
        self.broker_host = broker_host
        self.broker_port = broker_port
        self.topic_prefix = topic_prefix.rstrip("/")
        self.username = username
        self.password = password
        self.client_id = client_id
        self.keepalive = keepalive
        self.qos = qos
        self.retain = retain
        self.lwt_topic = lwt_topic
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max

        self.queue: asyncio.Queue = asyncio.Queue(maxsize=queue_maxsize)
        self._pending: Optional[Tuple[str, bytes]] = None
        self._running = False

    async def __call__(self, channel: str, payload: Dict[str, Any]) -> None:
        """허브 싱크 진입점: 큐에 넣기만 하고 즉시 반환합니다."""
        topic = f"{self.topic_prefix}/{channel}"
        body = json.dumps(payload, ensure_ascii=False, default=str).encode("utf-8")
        try:
            self.queue.put_nowait((topic, body))
        except asyncio.QueueFull:
            log.warning(f"MQTT 미러 큐가 가득 찼습니다. 메시지를 드롭합니다. topic:{topic}")

    def _client(self) -> Client:
        return Client(
            hostname=self.broker_host,
            port=self.broker_port,
            username=self.username,
            password=self.password,
            identifier=self.client_id,
            keepalive=self.keepalive,
            will=Will(self.lwt_topic, "offline", qos=1, retain=True),
        )

    async def start(self) -> None:
        """연결을 유지하며 큐를 발행합니다. 연결이 끊기면 백오프 후 재연결합니다."""
        self._running = True
        attempt = 0
        while self._running:
            try:
                async with self._client() as client:
                    await client.publish(self.lwt_topic, "online", qos=1, retain=True)
                    log.info(f"로컬 MQTT 브로커 연결됨: {self.broker_host}:{self.broker_port}")
                    attempt = 0
                    await self._pump(client)
            except MqttError as e:
                attempt += 1
                log.error(f"MQTT 오류: {e} (재연결 시도 {attempt})")
                if self._running:
                    await exponential_backoff(attempt, self.backoff_initial, self.backoff_max)

    async def _pump(self, client: Client) -> None:
        while self._running:
            if self._pending is None:
                self._pending = await self.queue.get()
            topic, body = self._pending
            await client.publish(topic, body, qos=self.qos, retain=self.retain)
            log.debug(f"MQTT 미러 발송 topic:{topic}")
            self._pending = None

    async def stop(self) -> None:
        """발송을 중지합니다."""
        self._running = False
