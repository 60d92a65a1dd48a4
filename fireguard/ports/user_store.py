"""
User store port interface.

This module defines the protocol for user account persistence.
"""

from typing import Any, Dict, List, Optional, Protocol
from fireguard.core.models import Role, User

class StoredUser(User):
    """비밀번호 해시를 포함한 저장소 내부 표현"""
    password_hash: str

    def public(self) -> User:
        return User.model_validate(self.model_dump(exclude={"password_hash"}))

class UserStorePort(Protocol):
    """사용자 저장소 포트 인터페이스"""

    async def init(self) -> None:
        ...

    async def create(self, *, username: str, email: str, password_hash: str,
                     role: Role = "user") -> StoredUser:
        """
        사용자를 생성합니다.

        Raises:
            AlreadyExists: 이메일이 이미 등록된 경우
        """
        ...

    async def get(self, user_id: int) -> Optional[StoredUser]:
        ...

    async def get_by_email(self, email: str) -> Optional[StoredUser]:
        ...

    async def list(self) -> List[StoredUser]:
        """최신 가입순 목록"""
        ...

    async def update(self, user_id: int, changes: Dict[str, Any]) -> Optional[StoredUser]:
        """변경 필드만 갱신합니다. 대상이 없으면 None."""
        ...

    async def delete(self, user_id: int) -> bool:
        """삭제 여부를 반환합니다."""
        ...
