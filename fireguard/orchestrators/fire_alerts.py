"""
Fire alert orchestrator for FireGuard.

This module composes the status cache, the event correlator and the
broadcast hub into the ingress operations (status update, location
update) and the read paths used by dashboards.
"""

from typing import List, Optional
from fireguard.core.correlator import EventCorrelator, require_coordinates
from fireguard.core.errors import InvalidStatus, StorageFailure
from fireguard.core.models import (
    FIRE_ALERT, FIRE_LOCATION, FireEvent, Identity, LocationResult, StatusReport, StatusValue,
)
from fireguard.core.status import StatusCache
from fireguard.ports.broadcast import BroadcastPort
from fireguard.ports.event_store import FireEventStorePort
from fireguard.ports.geocoder import GeocoderPort
from fireguard.observability import metrics
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.orchestrator")

ALL_EVENTS_LIMIT = 100
MY_EVENTS_LIMIT = 50
FIRE_LOCATIONS_LIMIT = 100


class FireAlertOrchestrator:
    """화재 경보 오케스트레이터"""

    def __init__(self,
                 cache: StatusCache,
                 store: FireEventStorePort,
                 hub: BroadcastPort,
                 *,
                 geocoder: Optional[GeocoderPort] = None):
        """
        초기화합니다.

        Args:
            cache: 현재 상태 캐시
            store: 화재 이벤트 저장소
            hub: 브로드캐스트 허브
            geocoder: 역지오코딩 클라이언트 (None이면 주소 보완 안 함)
        """
        self.cache = cache
        self.store = store
        self.hub = hub
        self.geocoder = geocoder
        self.correlator = EventCorrelator(store)

    async def report_status(self, raw_status) -> StatusReport:
        """
        센서 상태를 반영합니다.

        캐시 갱신 → (FIRE면) 이벤트 생성 → fire-alert 발행 순서로 처리합니다.

        Raises:
            InvalidStatus: 상태 값이 잘못된 경우 (캐시 변경 없음)
            StorageFailure: FIRE 이벤트 저장 실패 (경보는 이미 발행됨)
        """
        try:
            value = self.cache.set_status(raw_status)
        except InvalidStatus:
            metrics.status_rejected.inc()
            raise

        metrics.status_updates.labels(status=value.status).inc()
        metrics.current_status.set(1 if value.status == "FIRE" else 0)

        event_id: Optional[int] = None
        failure: Optional[StorageFailure] = None
        if value.status == "FIRE":
            try:
                event_id = await self.correlator.on_fire_transition()
                metrics.fire_events_created.labels(source="sensor").inc()
            except StorageFailure as e:
                # 기록은 실패해도 경보는 구독자에게 전달
                log.error("화재 이벤트 저장 실패, 경보만 발행합니다")
                failure = e

        report = StatusReport(status=value.status, timestamp=value.updated_at, event_id=event_id)
        self._publish(FIRE_ALERT, report.model_dump(by_alias=True, mode="json"))
        log.info(f"센서 상태 갱신: {value.status} eventId:{event_id}")

        if failure is not None:
            raise failure
        return report

    async def report_location(self,
                              event_id: Optional[int],
                              latitude: Optional[float],
                              longitude: Optional[float],
                              address: Optional[str] = None,
                              actor: Optional[Identity] = None) -> LocationResult:
        """
        위치 보고를 이벤트에 병합하거나 새 신고로 생성한 뒤 fire-location을 발행합니다.

        Raises:
            MissingLocation: 좌표 누락
            InvalidInput: 유한하지 않거나 범위를 벗어난 좌표
            StorageFailure: 저장소 오류
        """
        require_coordinates(latitude, longitude)
        if not address and self.geocoder:
            address = await self.geocoder.reverse(latitude, longitude)

        result = await self.correlator.merge_location(event_id, latitude, longitude, address, actor)
        metrics.location_reports.labels(outcome=result.outcome).inc()
        if result.outcome == "created":
            metrics.fire_events_created.labels(source="manual").inc()

        self._publish(FIRE_LOCATION, result.to_message())
        log.info(f"화재 위치 수신: {result.latitude}, {result.longitude} from {result.username}")
        return result

    def _publish(self, channel: str, payload: dict) -> None:
        try:
            self.hub.publish(channel, payload)
        except Exception as e:
            # 브로드캐스트 실패는 요청 실패로 이어지지 않음
            log.error(f"브로드캐스트 실패 channel:{channel} error:{e}")

    def get_current_status(self) -> StatusValue:
        return self.cache.get_status()

    async def list_all_events(self, limit: int = ALL_EVENTS_LIMIT) -> List[FireEvent]:
        return await self.store.list(limit=limit)

    async def list_my_events(self, user_id: int, limit: int = MY_EVENTS_LIMIT) -> List[FireEvent]:
        return await self.store.list(user_id=user_id, limit=limit)

    async def list_fire_locations(self, limit: int = FIRE_LOCATIONS_LIMIT) -> List[FireEvent]:
        """위치가 기록된 FIRE 이벤트만 최신순으로 반환합니다."""
        events = await self.store.list(status="FIRE", limit=limit)
        return [e for e in events if e.has_location]
