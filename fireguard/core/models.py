"""
Core domain models for FireGuard.

This module defines the core domain models using Pydantic v2.
Models that travel to browser clients serialize with camelCase aliases.
"""

from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# 상태 타입 정의
FireStatus = Literal["FIRE", "SAFE"]
Role = Literal["user", "admin"]
IdentityKind = Literal["anonymous", "user", "admin"]
LocationOutcome = Literal["merged", "created", "skipped"]

ANONYMOUS_USERNAME = "Anonymous"

# 브로드캐스트 채널
FIRE_ALERT = "fire-alert"
FIRE_LOCATION = "fire-location"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """camelCase 직렬화 기반 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusValue(CamelModel):
    """프로세스 전역 현재 상태 (영속화하지 않음)"""
    model_config = ConfigDict(frozen=True)

    status: FireStatus
    updated_at: datetime


class FireEvent(CamelModel):
    """화재 이벤트 레코드"""
    id: int
    status: FireStatus
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    user_id: Optional[int] = None
    username: Optional[str] = None
    created_at: datetime

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class User(CamelModel):
    """사용자 계정 (비밀번호 해시는 포함하지 않음)"""
    id: int
    username: str
    email: str
    role: Role = "user"
    created_at: datetime


class Identity(BaseModel):
    """요청 주체"""
    model_config = ConfigDict(frozen=True)

    kind: IdentityKind = "anonymous"
    id: Optional[int] = None
    username: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.kind != "anonymous"

    @property
    def is_admin(self) -> bool:
        return self.kind == "admin"

    @property
    def display_name(self) -> str:
        return self.username if self.is_authenticated and self.username else ANONYMOUS_USERNAME


ANONYMOUS = Identity()


class StatusReport(CamelModel):
    """상태 업데이트 결과"""
    status: FireStatus
    timestamp: datetime
    event_id: Optional[int] = None


class LocationResult(BaseModel):
    """위치 병합/생성 결과"""
    id: Optional[int] = None
    latitude: float
    longitude: float
    address: Optional[str] = None
    username: str = ANONYMOUS_USERNAME
    timestamp: datetime = Field(default_factory=utcnow)
    outcome: LocationOutcome

    def to_message(self) -> dict:
        """fire-location 채널 페이로드"""
        return self.model_dump(mode="json", exclude={"outcome"})
