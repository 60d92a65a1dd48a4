"""
Request dependencies for the FireGuard API.
"""

from dataclasses import dataclass
from typing import Callable, Optional
from fastapi import Depends, Header, Request
from fireguard.core.models import Identity
from fireguard.core.policy import Requirement, authorize, resolve_identity
from fireguard.core.status import StatusCache
from fireguard.features.accounts import AccountService
from fireguard.orchestrators.fire_alerts import FireAlertOrchestrator
from fireguard.ports.event_store import FireEventStorePort
from fireguard.ports.geocoder import GeocoderPort
from fireguard.ports.identity import IdentityPort
from fireguard.ports.user_store import UserStorePort
from fireguard.realtime.hub import BroadcastHub
from fireguard.settings import Settings


@dataclass
class Services:
    """애플리케이션 구성 요소 묶음"""
    settings: Settings
    cache: StatusCache
    hub: BroadcastHub
    events: FireEventStorePort
    users: UserStorePort
    identity: IdentityPort
    orchestrator: FireAlertOrchestrator
    accounts: AccountService
    geocoder: Optional[GeocoderPort] = None


def get_services(request: Request) -> Services:
    return request.app.state.services


def current_identity(authorization: Optional[str] = Header(default=None),
                     services: Services = Depends(get_services)) -> Identity:
    """토큰이 없거나 잘못돼도 실패하지 않고 익명 신원을 돌려줍니다."""
    return resolve_identity(authorization, services.identity)


def require(requirement: Requirement) -> Callable[..., Identity]:
    """작업별 접근 요구 조건을 검사하는 의존성을 만듭니다."""
    def _dependency(who: Identity = Depends(current_identity)) -> Identity:
        return authorize(who, requirement)
    return _dependency


require_authenticated = require(Requirement.AUTHENTICATED)
require_admin = require(Requirement.ADMIN_ONLY)
