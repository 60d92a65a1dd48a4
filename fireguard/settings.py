# fireguard/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class Server(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

class Storage(BaseModel):
    database_path: str = "/data/fireguard.db"
    timeout_sec: float = 5.0

class Auth(BaseModel):
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = 60 * 24
    admin_username: str = "Admin"
    admin_email: str = "admin@fire.com"
    admin_password: str = "admin123"
    min_password_length: int = 6

class Geocoding(BaseModel):
    enabled: bool = False
    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "FireGuard/1.0"
    language: str = "id"                      # Accept-Language
    timeout_sec: int = 5

class Realtime(BaseModel):
    subscriber_queue_size: int = 100
    ws_path: str = "/ws"

class LocalMQTT(BaseModel):
    enabled: bool = False
    host: str = "core-mosquitto"
    port: int = 1883
    username: str | None = None
    password: str | None = None
    client_id: str | None = None
    keepalive: int = 30
    topic_prefix: str = "fireguard"
    qos: int = 1
    retain: bool = False
    lwt_topic: str = "fireguard/state"
    backoff_initial_sec: float = 0.5
    backoff_max_sec: float = 30.0
    queue_maxsize: int = 1000

class Observability(BaseModel):
    metrics_enabled: bool = True
    service_name: str = "FireGuard"
    build_version: str = "1.0.0"
    build_date: str = "2026-01-01"
    log_level: str = "INFO"
    json_logs: bool = False

class Settings(BaseModel):
    server: Server = Field(default_factory=Server)
    storage: Storage = Field(default_factory=Storage)
    auth: Auth = Field(default_factory=Auth)
    geocoding: Geocoding = Field(default_factory=Geocoding)
    realtime: Realtime = Field(default_factory=Realtime)
    local_mqtt: LocalMQTT = Field(default_factory=LocalMQTT)
    observability: Observability = Field(default_factory=Observability)
