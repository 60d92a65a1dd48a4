"""
JWT identity provider for FireGuard.

This module issues and validates HS256 bearer tokens carrying the
user id, username and role, and hashes passwords with bcrypt.
"""

import bcrypt
from datetime import timedelta
from typing import Optional
from jose import JWTError, jwt
from fireguard.core.models import Identity, User, utcnow
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.auth")

# bcrypt는 72바이트까지만 사용
BCRYPT_MAX_BYTES = 72


class JwtIdentityProvider:
    """JWT 기반 신원 제공자"""

    def __init__(self,
                 secret: str,
                 *,
                 algorithm: str = "HS256",
                 expire_minutes: int = 60 * 24):
        """
        초기화합니다.

        Args:
            secret: 서명 키
            algorithm: 서명 알고리즘
            expire_minutes: 토큰 유효 시간 (분)
        """
        self.secret = secret
        self.algorithm = algorithm
        self.expire = timedelta(minutes=expire_minutes)

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], bcrypt.gensalt()).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], password_hash.encode("utf-8"))
        except ValueError:
            # 손상된 해시
            return False

    def issue_token(self, user: User) -> str:
        """
        사용자 토큰을 발급합니다.

        Args:
            user: 대상 사용자

        Returns:
            서명된 JWT 문자열
        """
        claims = {
            "sub": str(user.id),
            "id": user.id,
            "username": user.username,
            "role": user.role,
            "exp": utcnow() + self.expire,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[Identity]:
        """토큰을 검증해 신원을 반환합니다. 실패 시 None."""
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            log.debug(f"토큰 검증 실패: {e}")
            return None

        user_id = claims.get("id")
        role = claims.get("role")
        if not isinstance(user_id, int) or role not in ("user", "admin"):
            log.debug("토큰 클레임 형식 오류")
            return None
        return Identity(kind=role, id=user_id, username=claims.get("username"))
