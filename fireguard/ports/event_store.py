"""
Durable fire event store port interface.

This module defines the protocol for fire event persistence.
"""

from typing import List, Optional, Protocol
from fireguard.core.models import FireEvent, FireStatus

class FireEventStorePort(Protocol):
    """화재 이벤트 저장소 포트 인터페이스"""

    async def init(self) -> None:
        """스키마를 초기화합니다."""
        ...

    async def create(self,
                     status: FireStatus,
                     *,
                     latitude: Optional[float] = None,
                     longitude: Optional[float] = None,
                     address: Optional[str] = None,
                     user_id: Optional[int] = None,
                     username: Optional[str] = None) -> FireEvent:
        """
        새 이벤트를 생성합니다.

        Returns:
            저장소가 id와 createdAt을 부여한 이벤트
        """
        ...

    async def get(self, event_id: int) -> Optional[FireEvent]:
        """id로 이벤트를 조회합니다. 없으면 None."""
        ...

    async def attach_location(self,
                              event_id: int,
                              *,
                              latitude: float,
                              longitude: float,
                              address: Optional[str],
                              user_id: Optional[int],
                              username: Optional[str]) -> Optional[FireEvent]:
        """
        위치가 비어 있는 이벤트에 위치/작성자를 한 번만 기록합니다.

        Returns:
            갱신된 이벤트, 대상이 없거나 이미 위치가 있으면 None
        """
        ...

    async def list(self,
                   *,
                   status: Optional[FireStatus] = None,
                   user_id: Optional[int] = None,
                   limit: int = 100) -> List[FireEvent]:
        """최신순(createdAt DESC) 목록을 반환합니다."""
        ...

    async def get_count(self) -> int:
        """저장된 이벤트 수 (레디니스 체크용)"""
        ...
