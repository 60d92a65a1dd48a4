"""
Nominatim reverse geocoding client for FireGuard.

This module resolves coordinates to a human-readable address using
the OpenStreetMap Nominatim API. Any failure resolves to no address.
"""

import aiohttp
import asyncio
from typing import Dict, Optional
from fireguard.common.retry import retry_with_backoff
from fireguard.observability.logging_setup import get_logger

log = get_logger("fireguard.geocoding")


class NominatimGeocoder:
    """Nominatim 역지오코딩 클라이언트"""

    def __init__(self,
                 base_url: str = "https://nominatim.openstreetmap.org",
                 *,
                 user_agent: str = "FireGuard/1.0",
                 language: str = "id",
                 timeout: int = 5):
        """
        초기화합니다.

        Args:
            base_url: Nominatim API 기본 URL
            user_agent: 요청 User-Agent (Nominatim 정책상 필수)
            language: Accept-Language 값
            timeout: 요청 타임아웃 (초)
        """
        self.base_url = base_url.rstrip('/')
        self.user_agent = user_agent
        self.language = language
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()

    async def open(self) -> None:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                headers={
                    "User-Agent": self.user_agent,
                    "Accept-Language": self.language,
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def _make_request(self, endpoint: str, params: Dict) -> Dict:
        if not self.session:
            raise RuntimeError("세션이 초기화되지 않았습니다. async with를 사용하세요.")

        url = f"{self.base_url}{endpoint}"

        async def _request():
            async with self.session.get(url, params=params) as response:
                response.raise_for_status()
                return await response.json()

        return await retry_with_backoff(
            _request,
            retries=1,
            retry_on=(aiohttp.ClientConnectionError, asyncio.TimeoutError)
        )

    async def reverse(self, latitude: float, longitude: float) -> Optional[str]:
        """
        좌표의 주소를 가져옵니다.

        Returns:
            display_name 또는 None
        """
        try:
            data = await self._make_request("/reverse", {
                "format": "json",
                "lat": latitude,
                "lon": longitude,
                "zoom": 18,
                "addressdetails": 1,
            })
        except (aiohttp.ClientError, asyncio.TimeoutError, RuntimeError, ValueError) as e:
            log.warning(f"역지오코딩 실패 lat:{latitude} lon:{longitude} error:{e}")
            return None

        address = data.get("display_name") if isinstance(data, dict) else None
        if address:
            log.info(f"역지오코딩 성공 lat:{latitude} lon:{longitude}")
        return address or None
