"""
Fire event correlation for FireGuard.

A FIRE status update creates a location-less event record. A later
location report carrying that record's id is merged into it; a report
without an id becomes a new located record (manual reports).
"""

import math
from typing import Optional
from fireguard.ports.event_store import FireEventStorePort
from fireguard.observability.logging_setup import get_logger
from .errors import InvalidInput, MissingLocation
from .models import ANONYMOUS, Identity, LocationResult, utcnow

log = get_logger("fireguard.correlator")


def require_coordinates(latitude: Optional[float], longitude: Optional[float]) -> None:
    """
    위도/경도가 모두 있고 유한한 범위 안의 값인지 확인합니다.

    Raises:
        MissingLocation: 위도 또는 경도가 없는 경우
        InvalidInput: NaN, 무한대 또는 범위를 벗어난 값
    """
    if latitude is None or longitude is None:
        raise MissingLocation()
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidInput("Latitude and longitude must be finite numbers.")
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise InvalidInput("Latitude or longitude is out of range.")


class EventCorrelator:
    """화재 이벤트 상관기"""

    def __init__(self, store: FireEventStorePort):
        """
        초기화합니다.

        Args:
            store: 화재 이벤트 저장소
        """
        self.store = store

    async def on_fire_transition(self) -> int:
        """
        FIRE 상태 전이마다 위치 없는 새 이벤트를 만듭니다.

        Returns:
            생성된 이벤트 id
        """
        event = await self.store.create("FIRE")
        log.info(f"화재 이벤트 생성됨 id:{event.id}")
        return event.id

    async def merge_location(self,
                             target_id: Optional[int],
                             latitude: Optional[float],
                             longitude: Optional[float],
                             address: Optional[str] = None,
                             actor: Optional[Identity] = None) -> LocationResult:
        """
        위치 보고를 기존 이벤트에 병합하거나 새 이벤트로 생성합니다.

        Args:
            target_id: 병합 대상 이벤트 id (없거나 0이면 새로 생성)
            latitude: 위도
            longitude: 경도
            address: 주소 (선택)
            actor: 보고자 신원 (None이면 익명)

        Returns:
            브로드캐스트에 필요한 위치 결과

        Raises:
            MissingLocation: 위도 또는 경도가 없는 경우
            InvalidInput: 유한하지 않거나 범위를 벗어난 좌표
            StorageFailure: 저장소 오류
        """
        require_coordinates(latitude, longitude)

        actor = actor or ANONYMOUS
        address = address or None
        fields = dict(
            latitude=latitude,
            longitude=longitude,
            address=address,
            user_id=actor.id if actor.is_authenticated else None,
            username=actor.display_name,
        )

        if not target_id:
            event = await self.store.create("FIRE", **fields)
            log.info(f"수동 화재 신고 생성됨 id:{event.id} by:{event.username}")
            return LocationResult(
                id=event.id,
                latitude=latitude,
                longitude=longitude,
                address=address,
                username=actor.display_name,
                timestamp=event.created_at,
                outcome="created",
            )

        event = await self.store.attach_location(target_id, **fields)
        if event is None:
            # 대상이 없거나 이미 위치가 기록된 경우: 저장은 건너뛰고 입력값 그대로 전달
            log.warning(f"위치 병합 건너뜀 id:{target_id}")
            return LocationResult(
                id=target_id,
                latitude=latitude,
                longitude=longitude,
                address=address,
                username=actor.display_name,
                timestamp=utcnow(),
                outcome="skipped",
            )

        log.info(f"위치 병합됨 id:{event.id} by:{event.username}")
        return LocationResult(
            id=event.id,
            latitude=latitude,
            longitude=longitude,
            address=address,
            username=actor.display_name,
            timestamp=event.created_at,
            outcome="merged",
        )
