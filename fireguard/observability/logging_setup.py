"""
Logging setup for FireGuard.

Everything goes through loguru. Records from stdlib loggers (uvicorn,
asyncio, aiosqlite) are intercepted and re-emitted through loguru so
that one sink configuration covers the whole process.
"""

from __future__ import annotations
import logging
import sys
from loguru import logger

INTERCEPTED = ("uvicorn", "uvicorn.access", "uvicorn.error", "asyncio", "aiosqlite")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """stdlib logging 레코드를 loguru로 전달"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _intercept_stdlib() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in INTERCEPTED:
        std = logging.getLogger(name)
        std.handlers = [InterceptHandler()]
        std.propagate = False


def setup_logging(log_level: str = "INFO", *, json_logs: bool = False) -> None:
    """
    프로세스 로깅을 초기화합니다.

    Args:
        log_level: 최소 로그 레벨
        json_logs: True면 한 줄 JSON(serialize), 아니면 컬러 콘솔 출력
    """
    logger.remove()
    logger.configure(extra={"name": "fireguard"})
    if json_logs:
        logger.add(sys.stdout, serialize=True, level=log_level.upper(), backtrace=False, diagnose=False)
    else:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, colorize=True, level=log_level.upper(),
                   backtrace=False, diagnose=False)
    _intercept_stdlib()


def get_logger(name: str = "fireguard", **ctx):
    """이름과 선택적 컨텍스트를 바인딩한 logger"""
    return logger.bind(name=name, **ctx)
