"""
Status cache for FireGuard.

Holds the single current FIRE/SAFE value of the running process.
The value is never persisted; a fresh cache starts at SAFE.
"""

from datetime import datetime
from typing import Any, Callable, Optional
from .errors import InvalidStatus
from .models import FireStatus, StatusValue, utcnow

ACCEPTED_STATUSES = ("FIRE", "SAFE")


def normalize_status(raw: Any) -> FireStatus:
    """
    원시 상태 문자열을 정규화합니다.

    Args:
        raw: 센서가 보낸 상태 값

    Returns:
        "FIRE" 또는 "SAFE"

    Raises:
        InvalidStatus: 값이 없거나 FIRE/SAFE가 아닌 경우
    """
    if raw is None or raw == "":
        raise InvalidStatus("Status is required.")
    if not isinstance(raw, str):
        raise InvalidStatus()

    normalized = raw.upper()
    if normalized not in ACCEPTED_STATUSES:
        raise InvalidStatus()
    return normalized  # type: ignore[return-value]


class StatusCache:
    """현재 상태 캐시 (마지막 쓰기 우선)"""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utcnow
        self._value = StatusValue(status="SAFE", updated_at=self._clock())

    def set_status(self, raw: Any) -> StatusValue:
        """상태를 검증 후 무조건 덮어씁니다. 검증 실패 시 캐시는 그대로입니다."""
        status = normalize_status(raw)
        # 불변 객체 교체로 읽기 측은 항상 완전한 값을 본다
        self._value = StatusValue(status=status, updated_at=self._clock())
        return self._value

    def get_status(self) -> StatusValue:
        return self._value
