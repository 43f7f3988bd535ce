"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TransactionType(str, Enum):
    """은행 거래 유형

    서버 API 값(소문자)을 그대로 사용
    """

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"


class NotificationType(str, Enum):
    """알림 유형

    서버가 보내는 type 필드 값. 알 수 없는 값도 허용하므로
    Notification.type 자체는 str로 유지.
    """

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class WebSocketState(str, Enum):
    """WebSocket 연결 상태"""

    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"


class ExportFormat(str, Enum):
    """내보내기 파일 형식"""

    CSV = "csv"
    JSON = "json"
