"""
FastAPI application assembly for FireGuard.

``create_app`` wires the status cache, event and user stores, identity
provider, broadcast hub and routers into one application. Every part can
be injected, which is how the tests swap in fakes.
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fireguard.adapters.auth import JwtIdentityProvider
from fireguard.adapters.geocoding import NominatimGeocoder
from fireguard.adapters.storage import SQLiteFireEventStore, SQLiteUserStore
from fireguard.api.deps import Services
from fireguard.api.errors import install_error_handlers
from fireguard.api.routes import auth, logs, realtime, sensor, users
from fireguard.core.status import StatusCache
from fireguard.features.accounts import AccountService
from fireguard.observability.health import create_health_router
from fireguard.observability.logging_setup import get_logger
from fireguard.orchestrators.fire_alerts import FireAlertOrchestrator
from fireguard.ports.event_store import FireEventStorePort
from fireguard.ports.geocoder import GeocoderPort
from fireguard.ports.identity import IdentityPort
from fireguard.ports.user_store import UserStorePort
from fireguard.realtime.hub import BroadcastHub
from fireguard.settings import Settings

log = get_logger("fireguard.app")


def create_app(settings: Settings,
               *,
               cache: Optional[StatusCache] = None,
               hub: Optional[BroadcastHub] = None,
               events: Optional[FireEventStorePort] = None,
               users_store: Optional[UserStorePort] = None,
               identity: Optional[IdentityPort] = None,
               geocoder: Optional[GeocoderPort] = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    cache = cache or StatusCache()
    hub = hub or BroadcastHub(queue_size=settings.realtime.subscriber_queue_size)
    events = events or SQLiteFireEventStore(settings.storage.database_path, settings.storage.timeout_sec)
    users_store = users_store or SQLiteUserStore(settings.storage.database_path, settings.storage.timeout_sec)
    identity = identity or JwtIdentityProvider(
        settings.auth.jwt_secret,
        algorithm=settings.auth.jwt_algorithm,
        expire_minutes=settings.auth.token_expire_minutes,
    )

    owned_geocoder: Optional[NominatimGeocoder] = None
    if geocoder is None and settings.geocoding.enabled:
        owned_geocoder = NominatimGeocoder(
            settings.geocoding.base_url,
            user_agent=settings.geocoding.user_agent,
            language=settings.geocoding.language,
            timeout=settings.geocoding.timeout_sec,
        )
        geocoder = owned_geocoder

    services = Services(
        settings=settings,
        cache=cache,
        hub=hub,
        events=events,
        users=users_store,
        identity=identity,
        orchestrator=FireAlertOrchestrator(cache, events, hub, geocoder=geocoder),
        accounts=AccountService(users_store, identity, min_password_length=settings.auth.min_password_length),
        geocoder=geocoder,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await services.events.init()
        await services.users.init()
        await services.accounts.ensure_default_admin(
            username=settings.auth.admin_username,
            email=settings.auth.admin_email,
            password=settings.auth.admin_password,
        )
        if owned_geocoder is not None:
            await owned_geocoder.open()
        log.info(f"{settings.observability.service_name} 준비 완료")
        try:
            yield
        finally:
            if owned_geocoder is not None:
                await owned_geocoder.close()
            await services.hub.drain()

    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="FireGuard fire alert broadcast service",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(create_health_router(settings))
    app.include_router(sensor.router)
    app.include_router(logs.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(realtime.create_router(settings.realtime.ws_path))

    return app
