"""
Mock WebSocket 연결

NotificationChannel 테스트용.
MockConnector를 connect 인자로 넘기면 실제 네트워크 없이
메시지 주입 / 끊김 / 연결 실패를 시뮬레이션.
"""

import asyncio
import json
from typing import Any

from websockets.exceptions import ConnectionClosedError

_CLOSE = object()
_DROP = object()


class MockWebSocket:
    """Mock WebSocket 연결

    사용 예시:
    ```python
    ws = MockWebSocket()
    await ws.inject_message({"title": "Hi", "message": "..."})
    await ws.simulate_disconnect()
    ```
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self.closed = False

    async def inject_message(self, message: Any) -> None:
        """메시지 주입 (dict면 JSON 문자열로 변환)"""
        if isinstance(message, (dict, list)):
            message = json.dumps(message)
        await self._queue.put(message)

    async def simulate_disconnect(self) -> None:
        """비정상 끊김 (ConnectionClosedError)"""
        await self._queue.put(_DROP)

    async def close(self) -> None:
        if not self.closed:
            self.closed = True
            await self._queue.put(_CLOSE)

    def __aiter__(self) -> "MockWebSocket":
        return self

    async def __anext__(self) -> Any:
        item = await self._queue.get()
        if item is _CLOSE:
            raise StopAsyncIteration
        if item is _DROP:
            self.closed = True
            raise ConnectionClosedError(None, None)
        return item


class MockConnector:
    """websockets.connect 대체

    호출마다 새 MockWebSocket을 만들어 반환.
    fail_next()로 다음 연결 시도를 실패시킬 수 있음.
    """

    def __init__(self) -> None:
        self.urls: list[str] = []
        self.sockets: list[MockWebSocket] = []
        self._failures: list[Exception] = []

    def fail_next(self, error: Exception | None = None) -> None:
        """다음 연결 시도 실패 예약"""
        self._failures.append(error or OSError("connection refused"))

    @property
    def attempts(self) -> int:
        return len(self.urls)

    @property
    def latest(self) -> MockWebSocket:
        return self.sockets[-1]

    async def __call__(self, url: str, **kwargs: Any) -> MockWebSocket:
        self.urls.append(url)
        if self._failures:
            raise self._failures.pop(0)
        ws = MockWebSocket()
        self.sockets.append(ws)
        return ws
