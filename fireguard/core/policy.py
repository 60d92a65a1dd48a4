"""
Access policy functions for FireGuard.

This module contains pure functions that classify a request by its
bearer identity and check it against an operation's requirement.
"""

from enum import Enum
from typing import Optional
from fireguard.ports.identity import IdentityPort
from .errors import Forbidden, Unauthenticated
from .models import ANONYMOUS, Identity


class Requirement(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN_ONLY = "admin-only"
    SELF_OR_ADMIN = "self-or-admin"


def extract_bearer(authorization: Optional[str]) -> Optional[str]:
    """Authorization 헤더에서 Bearer 토큰을 꺼냅니다."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_identity(authorization: Optional[str], identity: IdentityPort) -> Identity:
    """
    요청의 신원을 판별합니다. 토큰이 없거나 잘못되어도 예외 없이 익명을 반환합니다.

    Args:
        authorization: Authorization 헤더 값
        identity: 신원 확인 포트

    Returns:
        anonymous | user | admin 신원
    """
    token = extract_bearer(authorization)
    if token is None:
        return ANONYMOUS
    return identity.decode(token) or ANONYMOUS


def authorize(who: Identity, requirement: Requirement, *, owner_id: Optional[int] = None) -> Identity:
    """
    신원이 요구 조건을 만족하는지 확인합니다.

    Args:
        who: 요청 주체
        requirement: 작업별 요구 조건
        owner_id: SELF_OR_ADMIN 판정 시 리소스 소유자 id

    Returns:
        통과한 신원

    Raises:
        Unauthenticated: 신원이 필요한데 익명인 경우
        Forbidden: 신원은 유효하나 권한이 부족한 경우
    """
    if requirement is Requirement.PUBLIC:
        return who

    if not who.is_authenticated:
        raise Unauthenticated()

    if requirement is Requirement.ADMIN_ONLY and not who.is_admin:
        raise Forbidden("Admin access required.")

    if requirement is Requirement.SELF_OR_ADMIN and not who.is_admin and who.id != owner_id:
        raise Forbidden()

    return who
