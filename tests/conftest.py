"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
import itertools
import tempfile
import os
from typing import List, Optional
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from fireguard.api.app import create_app
from fireguard.core.errors import StorageFailure
from fireguard.core.models import FireEvent, utcnow
from fireguard.settings import Settings

ADMIN_EMAIL = "admin@fire.com"
ADMIN_PASSWORD = "admin123"


class MemoryEventStore:
    """테스트용 메모리 이벤트 저장소 (SQLite 저장소와 같은 의미)"""

    def __init__(self):
        self.events = {}
        self._ids = itertools.count(1)
        self.fail_create = False

    async def init(self) -> None:
        return None

    async def create(self, status, *, latitude=None, longitude=None, address=None,
                     user_id=None, username=None) -> FireEvent:
        if self.fail_create:
            raise StorageFailure()
        event = FireEvent(
            id=next(self._ids), status=status, latitude=latitude, longitude=longitude,
            address=address, user_id=user_id, username=username, created_at=utcnow(),
        )
        self.events[event.id] = event
        return event

    async def get(self, event_id: int) -> Optional[FireEvent]:
        return self.events.get(event_id)

    async def attach_location(self, event_id, *, latitude, longitude, address, user_id, username):
        event = self.events.get(event_id)
        if event is None or event.has_location:
            return None
        updated = event.model_copy(update={
            "latitude": latitude, "longitude": longitude, "address": address,
            "user_id": user_id, "username": username,
        })
        self.events[event_id] = updated
        return updated

    async def list(self, *, status=None, user_id=None, limit=100) -> List[FireEvent]:
        rows = [e for e in self.events.values()
                if (status is None or e.status == status) and (user_id is None or e.user_id == user_id)]
        rows.sort(key=lambda e: (e.created_at, e.id), reverse=True)
        return rows[:limit]

    async def get_count(self) -> int:
        return len(self.events)


@pytest.fixture
def temp_db_path():
    """임시 데이터베이스 파일 경로"""
    with tempfile.NamedTemporaryFile(suffix='.db', delete=False) as f:
        temp_path = f.name
    yield temp_path
    # 테스트 후 파일 정리
    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def memory_store():
    """테스트용 메모리 이벤트 저장소"""
    return MemoryEventStore()


@pytest.fixture
def sample_settings(temp_db_path):
    """테스트용 설정"""
    settings = Settings()
    settings.storage.database_path = temp_db_path
    settings.auth.jwt_secret = "test-secret"
    settings.auth.admin_email = ADMIN_EMAIL
    settings.auth.admin_password = ADMIN_PASSWORD
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    return settings


@pytest.fixture
def client(sample_settings):
    """lifespan이 실행된 테스트 클라이언트"""
    app = create_app(sample_settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client):
    """기본 관리자 인증 헤더"""
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def user_headers(client):
    """일반 사용자 인증 헤더"""
    client.post("/api/auth/register", json={
        "username": "Budi", "email": "budi@example.com", "password": "secret1",
    })
    resp = client.post("/api/auth/login", json={"email": "budi@example.com", "password": "secret1"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def mock_geocoder():
    """테스트용 역지오코더"""
    geocoder = AsyncMock()
    geocoder.reverse.return_value = "Jl. Merdeka No. 1, Jakarta"
    return geocoder


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "asyncio: 비동기 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
