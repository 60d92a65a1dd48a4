# fireguard/main.py
import os, asyncio
import uvicorn
from fireguard.settings import Settings
from fireguard.api.app import create_app
from fireguard.observability.logging_setup import setup_logging, get_logger
from fireguard.adapters.mqtt_local import MqttEventMirror
from fireguard.realtime.hub import BroadcastHub

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()
    # 서버
    s.server.host = os.getenv("HOST", s.server.host)
    s.server.port = int(os.getenv("PORT", s.server.port))
    cors = os.getenv("CORS_ORIGINS")
    if cors:
        s.server.cors_origins = [o.strip() for o in cors.split(",") if o.strip()]

    # 저장소
    s.storage.database_path = os.getenv("DATABASE_PATH", s.storage.database_path)
    s.storage.timeout_sec = float(os.getenv("DATABASE_TIMEOUT_SEC", s.storage.timeout_sec))

    # 인증
    s.auth.jwt_secret = os.getenv("JWT_SECRET", s.auth.jwt_secret)
    s.auth.token_expire_minutes = int(os.getenv("JWT_EXPIRE_MINUTES", s.auth.token_expire_minutes))
    s.auth.admin_username = os.getenv("ADMIN_USERNAME", s.auth.admin_username)
    s.auth.admin_email = os.getenv("ADMIN_EMAIL", s.auth.admin_email)
    s.auth.admin_password = os.getenv("ADMIN_PASSWORD", s.auth.admin_password)

    # 역지오코딩
    s.geocoding.enabled = _b("GEOCODING_ENABLED", s.geocoding.enabled)
    s.geocoding.base_url = os.getenv("GEOCODING_BASE_URL", s.geocoding.base_url)
    s.geocoding.language = os.getenv("GEOCODING_LANGUAGE", s.geocoding.language)

    # 실시간
    s.realtime.subscriber_queue_size = int(os.getenv("SUBSCRIBER_QUEUE_SIZE", s.realtime.subscriber_queue_size))

    # LOCAL MQTT
    s.local_mqtt.enabled = _b("LOCAL_MQTT_ENABLED", s.local_mqtt.enabled)
    s.local_mqtt.host  = os.getenv("LOCAL_MQTT_HOST", s.local_mqtt.host)
    s.local_mqtt.port  = int(os.getenv("LOCAL_MQTT_PORT", s.local_mqtt.port))
    s.local_mqtt.username = os.getenv("LOCAL_MQTT_USERNAME", s.local_mqtt.username)
    s.local_mqtt.password = os.getenv("LOCAL_MQTT_PASSWORD", s.local_mqtt.password)
    s.local_mqtt.client_id = os.getenv("LOCAL_MQTT_CLIENT_ID", s.local_mqtt.client_id)
    s.local_mqtt.topic_prefix = os.getenv("LOCAL_TOPIC_PREFIX", s.local_mqtt.topic_prefix)

    # 관측성
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level).upper()
    s.observability.json_logs = _b("LOG_JSON", s.observability.json_logs)

    return s

def build_mirror(s: Settings) -> MqttEventMirror:
    return MqttEventMirror(
        broker_host=s.local_mqtt.host,
        broker_port=s.local_mqtt.port,
        topic_prefix=s.local_mqtt.topic_prefix,
        username=s.local_mqtt.username,
        password=s.local_mqtt.password,
        client_id=s.local_mqtt.client_id,
        keepalive=s.local_mqtt.keepalive,
        qos=s.local_mqtt.qos,
        retain=s.local_mqtt.retain,
        lwt_topic=s.local_mqtt.lwt_topic,
        backoff_initial=s.local_mqtt.backoff_initial_sec,
        backoff_max=s.local_mqtt.backoff_max_sec,
        queue_maxsize=s.local_mqtt.queue_maxsize,
    )

async def main():
    s = build_settings()
    setup_logging(s.observability.log_level, json_logs=s.observability.json_logs)
    log = get_logger("fireguard.main")
    log.info("설정 로드 완료")

    hub = BroadcastHub(queue_size=s.realtime.subscriber_queue_size)

    mirror_task = None
    mirror = None
    if s.local_mqtt.enabled:
        mirror = build_mirror(s)
        hub.add_sink(mirror)
        mirror_task = asyncio.create_task(mirror.start())
        log.info("로컬 MQTT 미러 시작됨")

    app = create_app(s, hub=hub)
    server = uvicorn.Server(uvicorn.Config(app, host=s.server.host, port=s.server.port, log_config=None))
    log.info(f"HTTP 서버 시작 port:{s.server.port}")
    try:
        # SIGTERM/SIGINT는 uvicorn이 처리
        await server.serve()
    finally:
        log.info("종료 중")
        if mirror is not None:
            await mirror.stop()
        if mirror_task:
            mirror_task.cancel()
            await asyncio.gather(mirror_task, return_exceptions=True)

if __name__ == "__main__":
    asyncio.run(main())
