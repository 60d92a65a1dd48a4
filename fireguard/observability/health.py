"""
HTTP endpoints for FireGuard observability.

Health, readiness, metrics and info endpoints for monitoring and
operational visibility.
"""

import time
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from fireguard.core.errors import StorageFailure
from fireguard.settings import Settings
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.health")


def create_health_router(settings: Settings) -> APIRouter:
    """운영 엔드포인트 라우터를 생성합니다."""
    router = APIRouter()
    start_time = time.time()

    @router.get("/api/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return {"status": "OK", "message": f"{settings.observability.service_name} API is running"}

    @router.get("/ready")
    async def ready(request: Request):
        """레디니스 체크 엔드포인트"""
        services = request.app.state.services
        try:
            events = await services.events.get_count()
        except StorageFailure as e:
            log.warning(f"레디니스 체크 실패: {e.message}")
            return JSONResponse({
                "status": "not_ready",
                "service": settings.observability.service_name,
                "timestamp": time.time(),
            }, status_code=503)

        return JSONResponse({
            "status": "ready",
            "service": settings.observability.service_name,
            "events": events,
            "subscribers": services.hub.subscriber_count,
            "timestamp": time.time(),
        })

    @router.get("/metrics")
    async def metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @router.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(time.time() - start_time),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
        })

    return router
