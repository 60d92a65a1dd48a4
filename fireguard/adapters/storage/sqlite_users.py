"""
SQLite-based user store for FireGuard.
"""

import aiosqlite
from typing import Any, Dict, List, Optional
from fireguard.core.errors import AlreadyExists, StorageFailure
from fireguard.core.models import Role, utcnow
from fireguard.ports.user_store import StoredUser
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.users")

# SQLite 스키마
SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    role TEXT NOT NULL DEFAULT 'user',
    created_at TEXT NOT NULL
);
"""

COLUMNS = "id, username, email, role, created_at, password_hash"
UPDATABLE = ("username", "email", "role", "password_hash")


def _row_to_user(row) -> StoredUser:
    return StoredUser(
        id=row[0],
        username=row[1],
        email=row[2],
        role=row[3],
        created_at=row[4],
        password_hash=row[5],
    )


class SQLiteUserStore:
    """SQLite 기반 사용자 저장소"""

    def __init__(self, path: str, timeout_sec: float = 5.0):
        self.path = path
        self.timeout = timeout_sec
        log.info(f"SQLiteUserStore 초기화: {path}")

    def _connect(self):
        return aiosqlite.connect(self.path, timeout=self.timeout)

    async def init(self) -> None:
        """데이터베이스를 초기화합니다."""
        try:
            async with self._connect() as db:
                await db.executescript(SCHEMA)
                await db.commit()
        except aiosqlite.Error as e:
            log.error(f"SQLiteUserStore 스키마 초기화 오류: {e}")
            raise StorageFailure() from e
        log.info("SQLiteUserStore 스키마 초기화 완료")

    async def create(self, *, username: str, email: str, password_hash: str,
                     role: Role = "user") -> StoredUser:
        created_at = utcnow()
        try:
            async with self._connect() as db:
                cursor = await db.execute(
                    "INSERT INTO users (username, email, password_hash, role, created_at) VALUES (?, ?, ?, ?, ?)",
                    (username, email, password_hash, role, created_at.isoformat())
                )
                await db.commit()
                user_id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            raise AlreadyExists("Email is already registered.") from e
        except aiosqlite.Error as e:
            log.error(f"SQLiteUserStore create 오류: {e}")
            raise StorageFailure() from e

        log.info(f"사용자 생성됨 id:{user_id} role:{role}")
        return StoredUser(id=user_id, username=username, email=email, role=role,
                          created_at=created_at, password_hash=password_hash)

    async def _fetch_one(self, where: str, value: Any) -> Optional[StoredUser]:
        try:
            async with self._connect() as db:
                cursor = await db.execute(f"SELECT {COLUMNS} FROM users WHERE {where} = ?", (value,))
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            log.error(f"SQLiteUserStore 조회 오류: {e}")
            raise StorageFailure() from e
        return _row_to_user(row) if row else None

    async def get(self, user_id: int) -> Optional[StoredUser]:
        return await self._fetch_one("id", user_id)

    async def get_by_email(self, email: str) -> Optional[StoredUser]:
        return await self._fetch_one("email", email)

    async def list(self) -> List[StoredUser]:
        try:
            async with self._connect() as db:
                cursor = await db.execute(f"SELECT {COLUMNS} FROM users ORDER BY created_at DESC, id DESC")
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            log.error(f"SQLiteUserStore list 오류: {e}")
            raise StorageFailure() from e
        return [_row_to_user(r) for r in rows]

    async def update(self, user_id: int, changes: Dict[str, Any]) -> Optional[StoredUser]:
        """
        허용된 필드만 갱신합니다.

        Args:
            user_id: 대상 사용자 id
            changes: 변경할 필드 (username, email, role, password_hash)

        Returns:
            갱신된 사용자 또는 None
        """
        fields = {k: v for k, v in changes.items() if k in UPDATABLE and v is not None}
        if fields:
            assignments = ", ".join(f"{k} = ?" for k in fields)
            try:
                async with self._connect() as db:
                    await db.execute(
                        f"UPDATE users SET {assignments} WHERE id = ?",
                        (*fields.values(), user_id)
                    )
                    await db.commit()
            except aiosqlite.IntegrityError as e:
                raise AlreadyExists("Email is already registered.") from e
            except aiosqlite.Error as e:
                log.error(f"SQLiteUserStore update 오류: {e}")
                raise StorageFailure() from e
        return await self.get(user_id)

    async def delete(self, user_id: int) -> bool:
        try:
            async with self._connect() as db:
                cursor = await db.execute("DELETE FROM users WHERE id = ?", (user_id,))
                await db.commit()
                return cursor.rowcount > 0
        except aiosqlite.Error as e:
            log.error(f"SQLiteUserStore delete 오류: {e}")
            raise StorageFailure() from e
