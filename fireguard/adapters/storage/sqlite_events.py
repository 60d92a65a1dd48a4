"""
SQLite-based fire event store for FireGuard.

This module implements the durable fire event store on SQLite.
Ids come from AUTOINCREMENT; location fields are written at most once.
"""

import aiosqlite
from typing import List, Optional
from fireguard.core.errors import StorageFailure
from fireguard.core.models import FireEvent, FireStatus, utcnow
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.events")

# SQLite 스키마
SCHEMA = """
CREATE TABLE IF NOT EXISTS fire_events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    status TEXT NOT NULL,
    latitude REAL,
    longitude REAL,
    address TEXT,
    user_id INTEGER,
    username TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_fire_events_created ON fire_events(created_at);
CREATE INDEX IF NOT EXISTS idx_fire_events_user ON fire_events(user_id);
"""

COLUMNS = "id, status, latitude, longitude, address, user_id, username, created_at"


def _row_to_event(row) -> FireEvent:
    return FireEvent(
        id=row[0],
        status=row[1],
        latitude=row[2],
        longitude=row[3],
        address=row[4],
        user_id=row[5],
        username=row[6],
        created_at=row[7],
    )


class SQLiteFireEventStore:
    """SQLite 기반 화재 이벤트 저장소"""

    def __init__(self, path: str, timeout_sec: float = 5.0):
        """
        초기화합니다.

        Args:
            path: SQLite 데이터베이스 파일 경로
            timeout_sec: 잠금 대기 시간 (초)
        """
        self.path = path
        self.timeout = timeout_sec
        log.info(f"SQLiteFireEventStore 초기화: {path}")

    def _connect(self):
        return aiosqlite.connect(self.path, timeout=self.timeout)

    async def init(self) -> None:
        """데이터베이스를 초기화합니다."""
        try:
            async with self._connect() as db:
                await db.executescript(SCHEMA)
                await db.commit()
        except aiosqlite.Error as e:
            log.error(f"SQLiteFireEventStore 스키마 초기화 오류: {e}")
            raise StorageFailure() from e
        log.info("SQLiteFireEventStore 스키마 초기화 완료")

    async def create(self,
                     status: FireStatus,
                     *,
                     latitude: Optional[float] = None,
                     longitude: Optional[float] = None,
                     address: Optional[str] = None,
                     user_id: Optional[int] = None,
                     username: Optional[str] = None) -> FireEvent:
        """
        이벤트를 추가합니다.

        Returns:
            생성된 이벤트
        """
        if (latitude is None) != (longitude is None):
            raise ValueError("latitude and longitude must be set together")

        created_at = utcnow()
        try:
            async with self._connect() as db:
                cursor = await db.execute(
                    "INSERT INTO fire_events (status, latitude, longitude, address, user_id, username, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (status, latitude, longitude, address, user_id, username, created_at.isoformat())
                )
                await db.commit()
                event_id = cursor.lastrowid
        except aiosqlite.Error as e:
            log.error(f"SQLiteFireEventStore create 오류: {e}")
            raise StorageFailure() from e

        return FireEvent(
            id=event_id,
            status=status,
            latitude=latitude,
            longitude=longitude,
            address=address,
            user_id=user_id,
            username=username,
            created_at=created_at,
        )

    async def get(self, event_id: int) -> Optional[FireEvent]:
        try:
            async with self._connect() as db:
                cursor = await db.execute(
                    f"SELECT {COLUMNS} FROM fire_events WHERE id = ?",
                    (event_id,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            log.error(f"SQLiteFireEventStore get 오류: {e}")
            raise StorageFailure() from e
        return _row_to_event(row) if row else None

    async def attach_location(self,
                              event_id: int,
                              *,
                              latitude: float,
                              longitude: float,
                              address: Optional[str],
                              user_id: Optional[int],
                              username: Optional[str]) -> Optional[FireEvent]:
        """
        위치가 없는 이벤트에만 위치/작성자를 기록합니다.

        Args:
            event_id: 대상 이벤트 id
            latitude: 위도
            longitude: 경도
            address: 주소
            user_id: 작성자 id
            username: 작성자 이름

        Returns:
            갱신된 이벤트 또는 None (대상 없음 / 이미 위치 있음)
        """
        try:
            async with self._connect() as db:
                cursor = await db.execute(
                    "UPDATE fire_events SET latitude = ?, longitude = ?, address = ?, user_id = ?, username = ? "
                    "WHERE id = ? AND latitude IS NULL AND longitude IS NULL",
                    (latitude, longitude, address, user_id, username, event_id)
                )
                await db.commit()
                if cursor.rowcount == 0:
                    return None
                cursor = await db.execute(
                    f"SELECT {COLUMNS} FROM fire_events WHERE id = ?",
                    (event_id,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            log.error(f"SQLiteFireEventStore attach_location 오류: {e}")
            raise StorageFailure() from e
        return _row_to_event(row) if row else None

    async def list(self,
                   *,
                   status: Optional[FireStatus] = None,
                   user_id: Optional[int] = None,
                   limit: int = 100) -> List[FireEvent]:
        """
        최신순 목록을 반환합니다.

        Args:
            status: 상태 필터
            user_id: 작성자 필터
            limit: 최대 개수

        Returns:
            이벤트 목록 (createdAt DESC, id DESC)
        """
        clauses, params = [], []
        if status is not None:
            clauses.append("status = ?")
            params.append(status)
        if user_id is not None:
            clauses.append("user_id = ?")
            params.append(user_id)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(limit)

        try:
            async with self._connect() as db:
                cursor = await db.execute(
                    f"SELECT {COLUMNS} FROM fire_events {where} ORDER BY created_at DESC, id DESC LIMIT ?",
                    params
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            log.error(f"SQLiteFireEventStore list 오류: {e}")
            raise StorageFailure() from e
        return [_row_to_event(r) for r in rows]

    async def get_count(self) -> int:
        """
        현재 저장된 이벤트 수를 반환합니다.
        """
        try:
            async with self._connect() as db:
                cursor = await db.execute("SELECT COUNT(*) FROM fire_events")
                result = await cursor.fetchone()
                return result[0] if result else 0
        except aiosqlite.Error as e:
            log.error(f"SQLiteFireEventStore get_count 오류: {e}")
            raise StorageFailure() from e
