"""
Mock API 클라이언트

테스트용 Mock REST 클라이언트.
IApiClient Protocol 준수.

(메서드, 경로)별로 응답 본문이나 예외를 등록해 두고,
호출 기록은 calls에 남김. 응답 디코딩은 실제 클라이언트와 동일.
"""

from dataclasses import dataclass, field
from typing import Any

from adapters.api.errors import ApiError
from adapters.api.rest_client import ApiClient
from adapters.api.schemas import ApiResponse, MessageResponse


@dataclass
class MockCall:
    """기록된 요청"""

    method: str
    path: str
    params: dict[str, Any] | None = None
    json: Any = None


@dataclass
class MockState:
    """Mock 상태 (메모리 내 저장)"""

    # (METHOD, path) -> 응답 본문 또는 예외
    routes: dict[tuple[str, str], Any] = field(default_factory=dict)

    # 요청 기록
    calls: list[MockCall] = field(default_factory=list)

    closed: bool = False


class MockApiClient:
    """Mock REST 클라이언트

    사용 예시:
    ```python
    api = MockApiClient()
    api.set_response("GET", "/banking/accounts/1", {"success": True, "data": {...}})
    api.set_error("PATCH", "/banking/transactions/bulk-reconcile", ApiError("boom", 500))

    service = BankingService(api)
    account = await service.get_bank_account(1)
    assert api.calls[0].path == "/banking/accounts/1"
    ```
    """

    def __init__(self, state: MockState | None = None):
        self.state = state or MockState()

    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------

    def set_response(self, method: str, path: str, body: Any) -> None:
        """응답 본문 등록"""
        self.state.routes[(method.upper(), path)] = body

    def set_data(self, method: str, path: str, data: Any, **extra: Any) -> None:
        """{success: true, data} 응답 등록"""
        self.set_response(method, path, {"success": True, "data": data, **extra})

    def set_error(self, method: str, path: str, error: Exception) -> None:
        """예외 등록 (호출 시 발생)"""
        self.state.routes[(method.upper(), path)] = error

    @property
    def calls(self) -> list[MockCall]:
        return self.state.calls

    def calls_to(self, method: str, path: str) -> list[MockCall]:
        """특정 (메서드, 경로) 호출 기록"""
        return [c for c in self.state.calls if c.method == method.upper() and c.path == path]

    # -------------------------------------------------------------------------
    # IApiClient 구현
    # -------------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        method = method.upper()
        query = {k: v for k, v in (params or {}).items() if v is not None} or None
        self.state.calls.append(MockCall(method=method, path=path, params=query, json=json))

        key = (method, path)
        if key not in self.state.routes:
            raise ApiError(message=f"No mock response for {method} {path}", status_code=404)

        body = self.state.routes[key]
        if isinstance(body, Exception):
            raise body
        return body

    async def fetch(
        self,
        method: str,
        path: str,
        data_type: Any,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> ApiResponse[Any]:
        body = await self.request(method, path, params=params, json=json)
        return ApiClient._decode(ApiResponse[data_type], body, path)

    async def send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> MessageResponse:
        body = await self.request(method, path, params=params, json=json)
        if body is None:
            return MessageResponse()
        return ApiClient._decode(MessageResponse, body, path)

    async def close(self) -> None:
        self.state.closed = True
