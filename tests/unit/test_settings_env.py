"""
환경 변수 설정 오버레이 테스트
"""

from fireguard.main import build_settings
from fireguard.settings import Settings


class TestBuildSettings:
    """build_settings 테스트"""

    def test_defaults(self):
        s = Settings()
        assert s.server.port == 5000
        assert s.auth.admin_email == "admin@fire.com"
        assert s.geocoding.enabled is False
        assert s.local_mqtt.enabled is False
        assert s.observability.metrics_enabled is True

    def test_env_overlay(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DATABASE_PATH", "/tmp/fg.db")
        monkeypatch.setenv("JWT_SECRET", "s3cret")
        monkeypatch.setenv("JWT_EXPIRE_MINUTES", "15")
        monkeypatch.setenv("GEOCODING_ENABLED", "true")
        monkeypatch.setenv("LOCAL_MQTT_ENABLED", "1")
        monkeypatch.setenv("LOCAL_MQTT_PORT", "1884")
        monkeypatch.setenv("METRICS_ENABLED", "off")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

        s = build_settings()

        assert s.server.port == 8080
        assert s.storage.database_path == "/tmp/fg.db"
        assert s.auth.jwt_secret == "s3cret"
        assert s.auth.token_expire_minutes == 15
        assert s.geocoding.enabled is True
        assert s.local_mqtt.enabled is True
        assert s.local_mqtt.port == 1884
        assert s.observability.metrics_enabled is False
        assert s.observability.log_level == "DEBUG"
        assert s.server.cors_origins == ["http://a.test", "http://b.test"]
