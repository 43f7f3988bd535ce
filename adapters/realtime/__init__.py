"""
실시간 알림 어댑터 (WebSocket)
"""

from adapters.realtime.channel import NotificationChannel
from adapters.realtime.reconnect import ReconnectPolicy

__all__ = [
    "NotificationChannel",
    "ReconnectPolicy",
]
