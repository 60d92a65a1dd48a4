"""
Retry utilities for FireGuard.

Backoff helpers for the outbound collaborators that may flap:
the reverse geocoder and the MQTT mirror. The durable store is
never retried here.
"""

import asyncio
import random
from typing import Awaitable, Callable, Tuple, Type, TypeVar
from fireguard.observability.logging_setup import get_logger

T = TypeVar('T')

log = get_logger("fireguard.retry")


def backoff_delay(attempt: int, base: float, max_delay: float) -> float:
    """
    attempt번째(1부터) 시도 전 지연 시간을 계산합니다.

    Args:
        attempt: 현재 시도 횟수
        base: 기본 지연 시간 (초)
        max_delay: 최대 지연 시간 (초)
    """
    return min(max_delay, base * (2 ** max(0, attempt - 1)))


async def exponential_backoff(attempt: int, base: float, max_delay: float) -> None:
    await asyncio.sleep(backoff_delay(attempt, base, max_delay))


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    *,
    retries: int = 2,
    base_delay: float = 0.5,
    max_delay: float = 5.0,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    jitter: bool = True
) -> T:
    """
    지정한 예외에 한해 지수 백오프로 재시도합니다.

    Args:
        func: 재시도할 비동기 함수
        retries: 첫 시도 이후 최대 재시도 횟수
        base_delay: 기본 지연 시간 (초)
        max_delay: 최대 지연 시간 (초)
        retry_on: 재시도 대상 예외
        jitter: 지터 적용 여부

    Returns:
        함수 실행 결과

    Raises:
        마지막 시도에서 발생한 예외
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await func()
        except retry_on as e:
            if attempt > retries:
                raise
            delay = backoff_delay(attempt, base_delay, max_delay)
            if jitter:
                delay *= 0.5 + random.random() * 0.5
            log.debug(f"재시도 대기 attempt:{attempt} delay:{delay:.2f}s error:{e}")
            await asyncio.sleep(delay)
