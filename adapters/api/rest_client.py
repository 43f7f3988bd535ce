"""
ERP REST API 클라이언트

모든 서비스 메서드는 하나의 HTTP 메서드 + 경로에 대응.
요청/응답 본문은 JSON. 자동 재시도 없음.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from adapters.api.errors import ApiError, ApiResponseError
from adapters.api.schemas import ApiResponse, MessageResponse
from core.constants import Defaults

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> tuple[str | None, list[Any] | None]:
    """에러 응답에서 서버 메시지/검증 에러 추출"""
    try:
        body = response.json()
    except ValueError:
        return None, None

    if not isinstance(body, dict):
        return None, None
    message = body.get("message") or body.get("error")
    errors = body.get("errors")
    return (str(message) if message else None), (errors if isinstance(errors, list) else None)


class ApiClient:
    """ERP REST API 클라이언트

    IApiClient Protocol 구현.
    인증 토큰이 있으면 Authorization: Bearer 헤더 추가.

    Args:
        base_url: API 베이스 URL (예: http://localhost:5000/api)
        token: 인증 토큰 (없으면 헤더 생략)
        timeout: 요청 타임아웃 (초)
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = Defaults.REQUEST_TIMEOUT_SEC,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """API 요청 실행

        Args:
            method: HTTP 메서드 (GET, POST, PUT, PATCH, DELETE)
            path: API 경로 (예: /banking/accounts)
            params: 쿼리 파라미터 (None 값은 제외)
            json: 요청 본문

        Returns:
            JSON 응답 (본문이 비어 있으면 None)

        Raises:
            ApiError: 네트워크 오류, 타임아웃, HTTP 4xx/5xx
        """
        url = f"{self.base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        client = await self._get_client()

        try:
            response = await client.request(
                method,
                url,
                params=query or None,
                json=json,
                headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            logger.warning(
                "Request timeout",
                extra={"method": method, "path": path},
            )
            raise ApiError() from e
        except httpx.RequestError as e:
            logger.error(
                "Request error",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise ApiError() from e

        if response.status_code >= 400:
            message, errors = _error_message(response)
            logger.warning(
                "API 에러 응답",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "server_message": message,
                },
            )
            raise ApiError(message=message, status_code=response.status_code, errors=errors)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseError(path, "body is not JSON") from e

    # -------------------------------------------------------------------------
    # 스키마 디코딩
    # -------------------------------------------------------------------------

    async def fetch(
        self,
        method: str,
        path: str,
        data_type: Any,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> ApiResponse[Any]:
        """요청 후 {success, data} 응답을 data_type으로 검증

        Args:
            data_type: data 필드 타입 (예: list[BankAccountSchema])

        Returns:
            검증된 ApiResponse

        Raises:
            ApiError: 요청 실패
            ApiResponseError: 응답 형식 불일치
        """
        body = await self.request(method, path, params=params, json=json)
        return self._decode(ApiResponse[data_type], body, path)

    async def send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> MessageResponse:
        """데이터 없는 응답({success, message})을 반환하는 요청"""
        body = await self.request(method, path, params=params, json=json)
        if body is None:
            return MessageResponse()
        return self._decode(MessageResponse, body, path)

    @staticmethod
    def _decode(model: type[BaseModel], body: Any, path: str) -> Any:
        try:
            decoded = model.model_validate(body)
        except ValidationError as e:
            logger.error(
                "응답 스키마 불일치",
                extra={"path": path, "errors": e.error_count()},
            )
            raise ApiResponseError(path, str(e)) from e

        # 200 이지만 success=false 인 응답도 실패로 처리
        if getattr(decoded, "success", True) is False:
            raise ApiError(message=getattr(decoded, "message", None))
        return decoded

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
