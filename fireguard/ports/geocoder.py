"""
Reverse geocoder port interface.
"""

from typing import Optional, Protocol

class GeocoderPort(Protocol):
    """역지오코딩 포트 인터페이스"""

    async def reverse(self, latitude: float, longitude: float) -> Optional[str]:
        """
        좌표를 주소 문자열로 변환합니다.

        Returns:
            주소 또는 None (실패 포함)
        """
        ...
