"""
어댑터 레이어

외부 서비스(REST API, WebSocket)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    IApiClient,
    INotificationChannel,
)

__all__ = [
    # Interfaces
    "IApiClient",
    "INotificationChannel",
]
