"""
Mock 어댑터

테스트용 Mock 구현체 제공.
Protocol 준수하여 실제 구현체와 교체 가능.
"""

from adapters.mock.api_client import MockApiClient, MockCall
from adapters.mock.websocket import MockConnector, MockWebSocket

__all__ = [
    "MockApiClient",
    "MockCall",
    "MockConnector",
    "MockWebSocket",
]
