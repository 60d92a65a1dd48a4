"""
재시도 유틸리티 테스트
"""

import pytest
from unittest.mock import AsyncMock, patch

from fireguard.common.retry import backoff_delay, retry_with_backoff


class TestBackoffDelay:
    """백오프 지연 계산 테스트"""

    def test_doubles_until_cap(self):
        assert [backoff_delay(n, 0.5, 3.0) for n in range(1, 6)] == [0.5, 1.0, 2.0, 3.0, 3.0]


class TestRetryWithBackoff:
    """재시도 테스트"""

    async def test_returns_after_transient_failures(self):
        func = AsyncMock(side_effect=[ConnectionError(), ConnectionError(), "ok"])
        with patch("fireguard.common.retry.asyncio.sleep", AsyncMock()) as sleep:
            result = await retry_with_backoff(func, retries=2, jitter=False)

        assert result == "ok"
        assert func.await_count == 3
        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0]

    async def test_gives_up_after_retries(self):
        func = AsyncMock(side_effect=ConnectionError("down"))
        with patch("fireguard.common.retry.asyncio.sleep", AsyncMock()):
            with pytest.raises(ConnectionError):
                await retry_with_backoff(func, retries=1)
        assert func.await_count == 2

    async def test_other_errors_are_not_retried(self):
        func = AsyncMock(side_effect=KeyError("x"))
        with pytest.raises(KeyError):
            await retry_with_backoff(func, retry_on=(ConnectionError,))
        assert func.await_count == 1
