"""
WebSocket push endpoint.

Each connection is one hub subscriber. Frames are
``{"event": "fire-alert" | "fire-location", "data": {...}}``.
Incoming client messages are read and ignored so disconnects are noticed.
"""

import asyncio
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fireguard.observability.logging_setup import get_logger
from fireguard.realtime.hub import Subscription

log = get_logger("fireguard.ws")


async def _send_frames(websocket: WebSocket, sub: Subscription) -> None:
    try:
        while True:
            frame = await sub.get()
            await websocket.send_json(frame)
    except (WebSocketDisconnect, RuntimeError):
        return


async def _read_until_closed(websocket: WebSocket) -> None:
    try:
        while True:
            await websocket.receive_text()
    except (WebSocketDisconnect, RuntimeError):
        return


def create_router(path: str = "/ws") -> APIRouter:
    router = APIRouter()

    @router.websocket(path)
    async def realtime(websocket: WebSocket):
        hub = websocket.app.state.services.hub
        # 수락 전에 구독해야 연결 직후 발행되는 메시지를 놓치지 않음
        sub = hub.subscribe()
        tasks = []
        try:
            await websocket.accept()
            tasks = [
                asyncio.create_task(_send_frames(websocket, sub)),
                asyncio.create_task(_read_until_closed(websocket)),
            ]
            await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        finally:
            # 핸들러 자체가 취소돼도 자식 태스크는 함께 정리
            for task in tasks:
                task.cancel()
            hub.unsubscribe(sub)
            log.debug(f"웹소켓 종료 id:{sub.id} dropped:{sub.dropped}")
            await asyncio.shield(asyncio.gather(*tasks, return_exceptions=True))

    return router
