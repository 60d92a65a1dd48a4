"""
Identity provider port interface.

This module defines the protocol for credential verification
and bearer token issuance.
"""

from typing import Optional, Protocol
from fireguard.core.models import Identity, User

class IdentityPort(Protocol):
    """신원 확인 포트 인터페이스"""

    def hash_password(self, password: str) -> str:
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        ...

    def issue_token(self, user: User) -> str:
        """id, username, role을 담은 서명 토큰을 발급합니다."""
        ...

    def decode(self, token: str) -> Optional[Identity]:
        """
        토큰을 검증합니다.

        Returns:
            신원 또는 None (절대 예외를 던지지 않음)
        """
        ...
