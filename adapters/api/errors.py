"""
API 에러 정의

REST 호출 실패는 모두 ApiError 계열로 변환.
화면(또는 CLI)은 message를 그대로 보여주면 됨.
"""

from typing import Any

from core.constants import Defaults


class ApiError(Exception):
    """API 호출 실패

    네트워크 오류, 타임아웃, HTTP 4xx/5xx 응답 시 발생.
    서버가 message를 주면 그 값을, 없으면 일반 문구 사용.
    자동 재시도 없음 (사용자가 다시 시도).

    Attributes:
        message: 사용자에게 보여줄 메시지
        status_code: HTTP 상태 코드 (네트워크 오류면 None)
        errors: 서버 검증 에러 목록 (있는 경우)
    """

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        errors: list[Any] | None = None,
    ):
        self.message = message or Defaults.GENERIC_ERROR_MESSAGE
        self.status_code = status_code
        self.errors = errors or []
        if status_code is not None:
            super().__init__(f"API Error [{status_code}]: {self.message}")
        else:
            super().__init__(f"API Error: {self.message}")


class ApiResponseError(ApiError):
    """응답 본문이 엔드포인트 스키마와 맞지 않음

    서버 계약 위반. 하위 코드가 응답 형태를 추측하지 않도록
    서비스 경계에서 바로 실패시킴.
    """

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(message=f"Unexpected response from {path}: {detail}")
