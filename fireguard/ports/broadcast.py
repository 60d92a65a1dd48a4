"""
Broadcast port interface.

This module defines the protocol the orchestrator uses to push
realtime events to connected subscribers.
"""

from typing import Any, Dict, Protocol

class BroadcastPort(Protocol):
    """실시간 브로드캐스트 포트 인터페이스"""

    def publish(self, channel: str, payload: Dict[str, Any]) -> int:
        """
        채널에 메시지를 발행합니다. 블로킹하거나 예외를 던지지 않습니다.

        Args:
            channel: "fire-alert" 또는 "fire-location"
            payload: JSON 직렬화 가능한 페이로드

        Returns:
            메시지를 받은 구독자 수
        """
        ...
