"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, runtime_checkable

from core.types import WebSocketState

if TYPE_CHECKING:
    from adapters.api.schemas import ApiResponse, MessageResponse


@runtime_checkable
class IApiClient(Protocol):
    """ERP REST API 클라이언트 인터페이스

    서비스 클래스는 이 Protocol에만 의존.
    응답은 {success, message?, data?, pagination?} 봉투.
    """

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """요청 후 JSON 본문 반환

        Raises:
            ApiError: 네트워크 오류, 타임아웃, HTTP 4xx/5xx
        """
        ...

    async def fetch(
        self,
        method: str,
        path: str,
        data_type: Any,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> "ApiResponse[Any]":
        """요청 후 data 필드를 data_type으로 검증

        Raises:
            ApiError: 요청 실패
            ApiResponseError: 응답 형식 불일치
        """
        ...

    async def send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> "MessageResponse":
        """데이터 없는 응답을 반환하는 요청"""
        ...

    async def close(self) -> None:
        """연결 정리"""
        ...


@runtime_checkable
class INotificationChannel(Protocol):
    """실시간 알림 채널 인터페이스

    수신한 메시지를 NotificationStore에 추가.
    """

    @property
    def state(self) -> WebSocketState:
        """현재 연결 상태"""
        ...

    async def start(self) -> None:
        """연결 시작 (끊기면 재연결 정책에 따라 재시도)"""
        ...

    async def stop(self) -> None:
        """연결 종료

        예약된 재연결 취소 → 수신 중지 → 연결 종료
        """
        ...


# 채널 콜백 타입
StateChangeCallback = Callable[[WebSocketState], Awaitable[None]]
