"""
실시간 알림 채널 (WebSocket)

서버가 보내는 {title, message, type, ...} 메시지를 받아
NotificationStore 맨 앞에 추가.
INotificationChannel Protocol 준수.

연결이 닫히면 재연결 정책의 대기 시간 후 한 번 재연결.
재연결 루프는 start()/stop() 수명에 묶여 있어
stop() 이후에는 예약된 재연결이 취소되고 새로 예약되지 않음.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import websockets
from websockets.exceptions import ConnectionClosed

from adapters.interfaces import StateChangeCallback
from adapters.realtime.reconnect import ReconnectPolicy
from core.notifications.store import NotificationStore
from core.types import WebSocketState

logger = logging.getLogger(__name__)


# websockets.connect와 같은 시그니처 (테스트에서 교체)
ConnectFactory = Callable[..., Awaitable[Any]]


class NotificationChannel:
    """실시간 알림 채널

    상태 전이:
    DISCONNECTED → CONNECTING → CONNECTED → DISCONNECTED (닫힘)
    → CONNECTING (대기 후) → ...

    연결 실패도 닫힘과 같이 취급하여 재연결 예약.
    에러는 로그만 남기고 호출자에게 전파하지 않음.

    사용 예시:
    ```python
    store = NotificationStore()
    async with NotificationChannel("ws://localhost:5000/ws", store):
        await asyncio.Event().wait()
    ```

    Args:
        url: WebSocket URL
        store: 알림 저장소
        policy: 재연결 정책 (기본: 고정 5초)
        on_state_change: 상태 변경 콜백
        connect: 연결 함수 (기본: websockets.connect)
    """

    PING_INTERVAL = 30  # ping 간격 (초)
    PING_TIMEOUT = 10  # ping 타임아웃 (초)

    def __init__(
        self,
        url: str,
        store: NotificationStore,
        policy: ReconnectPolicy | None = None,
        on_state_change: StateChangeCallback | None = None,
        connect: ConnectFactory | None = None,
    ):
        self.url = url
        self.store = store
        self.policy = policy or ReconnectPolicy.fixed()
        self.on_state_change = on_state_change
        self._connect_fn = connect or websockets.connect

        self._state = WebSocketState.DISCONNECTED
        self._ws: Any = None
        self._attempt = 0
        self._running = False

        # 태스크 관리
        self._receive_task: asyncio.Task[None] | None = None
        self._reconnect_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> WebSocketState:
        """현재 연결 상태"""
        return self._state

    @property
    def is_running(self) -> bool:
        """start() 이후 stop() 전까지 True"""
        return self._running

    @property
    def reconnect_pending(self) -> bool:
        """재연결 예약 여부"""
        return self._reconnect_task is not None and not self._reconnect_task.done()

    async def start(self) -> None:
        """연결 시작 (이미 실행 중이면 무시)"""
        if self._running:
            return
        self._running = True
        self._attempt = 0
        await self._connect()

    async def stop(self) -> None:
        """연결 종료

        예약된 재연결 취소 → 수신 중지 → 연결 종료 → DISCONNECTED
        """
        self._running = False

        current = asyncio.current_task()
        for task in (self._reconnect_task, self._receive_task):
            if task is None or task is current or task.done():
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._reconnect_task = None
        self._receive_task = None

        await self._close_socket()
        await self._set_state(WebSocketState.DISCONNECTED)
        logger.info("알림 채널 종료", extra={"url": self.url})

    # -------------------------------------------------------------------------
    # 연결
    # -------------------------------------------------------------------------

    async def _connect(self) -> None:
        """연결 시도 (실패 시 재연결 예약)"""
        if not self._running:
            return

        await self._set_state(WebSocketState.CONNECTING)
        try:
            self._ws = await self._connect_fn(
                self.url,
                ping_interval=self.PING_INTERVAL,
                ping_timeout=self.PING_TIMEOUT,
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                "알림 채널 연결 실패",
                extra={"url": self.url, "error": str(e)},
            )
            await self._handle_close()
            return

        if not self._running:
            # 연결 중 stop() 호출됨
            await self._close_socket()
            return

        self._attempt = 0
        await self._set_state(WebSocketState.CONNECTED)
        logger.info("알림 채널 연결 성공", extra={"url": self.url})
        self._receive_task = asyncio.create_task(self._receive_loop())

    async def _close_socket(self) -> None:
        ws, self._ws = self._ws, None
        if ws is None:
            return
        try:
            await ws.close()
        except Exception as e:
            logger.debug("소켓 종료 중 에러", extra={"error": str(e)})

    async def _receive_loop(self) -> None:
        """메시지 수신 루프 (닫히면 재연결 예약)"""
        ws = self._ws
        if ws is None:
            return

        try:
            async for message in ws:
                self._handle_message(message)
        except ConnectionClosed as e:
            logger.warning(
                "알림 채널 연결 끊김",
                extra={"code": e.rcvd.code if e.rcvd else None},
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("수신 루프 에러", extra={"error": str(e)})

        await self._handle_close()

    def _handle_message(self, message: str | bytes) -> None:
        """메시지 하나를 알림으로 추가 (형식이 틀리면 건너뜀)"""
        try:
            data = json.loads(message)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                "알림 메시지 파싱 실패",
                extra={"error": str(e), "raw": str(message)[:100]},
            )
            return

        if not isinstance(data, dict):
            logger.warning("알림 메시지 형식 오류", extra={"raw": str(message)[:100]})
            return

        notification = self.store.add(data)
        logger.debug(
            "알림 수신",
            extra={"id": notification.id, "type": notification.type},
        )

    # -------------------------------------------------------------------------
    # 재연결
    # -------------------------------------------------------------------------

    async def _handle_close(self) -> None:
        """닫힘 처리: DISCONNECTED 후 실행 중이면 재연결 예약"""
        self._ws = None
        await self._set_state(WebSocketState.DISCONNECTED)
        if self._running:
            self._schedule_reconnect()

    def _schedule_reconnect(self) -> None:
        """재연결 한 번 예약 (이미 예약돼 있으면 무시)"""
        current = asyncio.current_task()
        if self.reconnect_pending and self._reconnect_task is not current:
            return

        delay = self.policy.next_delay(self._attempt)
        self._attempt += 1
        logger.info(
            "알림 채널 재연결 예약",
            extra={"delay": delay, "attempt": self._attempt},
        )
        self._reconnect_task = asyncio.create_task(self._reconnect_after(delay))

    async def _reconnect_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        await self._connect()

    async def _set_state(self, new_state: WebSocketState) -> None:
        """상태 변경 및 콜백 호출"""
        old_state = self._state
        self._state = new_state

        if old_state != new_state:
            logger.debug(
                "알림 채널 상태 변경",
                extra={"old_state": old_state.value, "new_state": new_state.value},
            )

            if self.on_state_change is not None:
                try:
                    await self.on_state_change(new_state)
                except Exception as e:
                    logger.error(
                        "상태 변경 콜백 에러",
                        extra={"error": str(e)},
                    )

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "NotificationChannel":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.stop()
