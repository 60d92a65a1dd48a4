"""
Error rendering for the FireGuard API.

Domain errors become ``{"error": kind, "message": text}`` with the
error's status code. Nothing internal leaks to the caller.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fireguard.core.errors import FireGuardError
from fireguard.observability import metrics
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.api")


def error_body(kind: str, message: str) -> dict:
    return {"error": kind, "message": message}


async def handle_domain_error(request: Request, exc: FireGuardError) -> JSONResponse:
    metrics.request_errors.labels(kind=exc.kind).inc()
    if exc.status_code >= 500:
        log.error(f"{request.method} {request.url.path} 실패: {exc.kind} cause:{exc.__cause__!r}")
    else:
        log.info(f"{request.method} {request.url.path} 거부: {exc.kind}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(error_body(exc.kind, exc.message), status_code=exc.status_code, headers=headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    metrics.request_errors.labels(kind="ValidationError").inc()
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    ) or "Invalid request data."
    return JSONResponse(error_body("ValidationError", message), status_code=400)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    metrics.request_errors.labels(kind="InternalError").inc()
    log.opt(exception=exc).error(f"{request.method} {request.url.path} 처리 중 예상치 못한 오류")
    return JSONResponse(error_body("InternalError", "Internal server error."), status_code=500)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FireGuardError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
