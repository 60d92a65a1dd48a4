"""
Account management for FireGuard.

Registration, login, admin user management and the default admin seed.
"""

from typing import Any, Dict, List, Optional, Tuple
from fireguard.core.errors import (
    AlreadyExists, InvalidInput, NotFound, SelfDeleteForbidden, Unauthenticated,
)
from fireguard.core.models import Identity, Role, User
from fireguard.ports.identity import IdentityPort
from fireguard.ports.user_store import UserStorePort
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.accounts")


class AccountService:
    """계정 관리 서비스"""

    def __init__(self, users: UserStorePort, identity: IdentityPort, *, min_password_length: int = 6):
        self.users = users
        self.identity = identity
        self.min_password_length = min_password_length

    def _check_password(self, password: Optional[str]) -> None:
        if not password or len(password) < self.min_password_length:
            raise InvalidInput(
                f"Password must be at least {self.min_password_length} characters."
            )

    async def register(self, username: str, email: str, password: str) -> User:
        """
        일반 사용자를 등록합니다.

        Raises:
            InvalidInput: 필수 값 누락 또는 짧은 비밀번호
            AlreadyExists: 이미 등록된 이메일
        """
        username = (username or "").strip()
        email = (email or "").strip().lower()
        if not username or not email:
            raise InvalidInput("Username and email are required.")
        self._check_password(password)

        if await self.users.get_by_email(email):
            raise AlreadyExists("Email is already registered.")

        user = await self.users.create(
            username=username,
            email=email,
            password_hash=self.identity.hash_password(password),
        )
        log.info(f"사용자 등록됨 id:{user.id}")
        return user.public()

    async def login(self, email: str, password: str) -> Tuple[str, User]:
        """
        자격 증명을 확인하고 토큰을 발급합니다.

        Returns:
            (토큰, 사용자)

        Raises:
            Unauthenticated: 이메일 또는 비밀번호 불일치
        """
        stored = await self.users.get_by_email((email or "").strip().lower())
        if stored is None or not self.identity.verify_password(password or "", stored.password_hash):
            log.warning("로그인 실패")
            raise Unauthenticated("Invalid email or password.")

        user = stored.public()
        return self.identity.issue_token(user), user

    async def get_user(self, user_id: int) -> User:
        stored = await self.users.get(user_id)
        if stored is None:
            raise NotFound("User not found.")
        return stored.public()

    async def list_users(self) -> List[User]:
        return [u.public() for u in await self.users.list()]

    async def update_user(self, user_id: int, *,
                          username: Optional[str] = None,
                          email: Optional[str] = None,
                          role: Optional[Role] = None,
                          password: Optional[str] = None) -> User:
        """
        관리자가 사용자 정보를 수정합니다. 비밀번호는 지정된 경우에만 변경됩니다.

        Raises:
            NotFound: 사용자가 없는 경우
        """
        if await self.users.get(user_id) is None:
            raise NotFound("User not found.")

        changes: Dict[str, Any] = {
            "username": username.strip() if username else None,
            "email": email.strip().lower() if email else None,
            "role": role,
        }
        if password:
            self._check_password(password)
            changes["password_hash"] = self.identity.hash_password(password)

        updated = await self.users.update(user_id, changes)
        if updated is None:
            raise NotFound("User not found.")
        log.info(f"사용자 수정됨 id:{user_id}")
        return updated.public()

    async def delete_user(self, user_id: int, actor: Identity) -> None:
        """
        사용자를 삭제합니다.

        Raises:
            SelfDeleteForbidden: 관리자가 자기 계정을 삭제하려는 경우
            NotFound: 사용자가 없는 경우
        """
        if actor.id == user_id:
            raise SelfDeleteForbidden()
        if not await self.users.delete(user_id):
            raise NotFound("User not found.")
        log.info(f"사용자 삭제됨 id:{user_id} by:{actor.id}")

    async def ensure_default_admin(self, *, username: str, email: str, password: str) -> bool:
        """
        기본 관리자 계정이 없으면 생성합니다.

        Returns:
            새로 생성했는지 여부
        """
        email = email.strip().lower()
        if await self.users.get_by_email(email):
            return False
        try:
            await self.users.create(
                username=username,
                email=email,
                password_hash=self.identity.hash_password(password),
                role="admin",
            )
        except AlreadyExists:
            return False
        log.info(f"기본 관리자 생성됨: {email}")
        return True
