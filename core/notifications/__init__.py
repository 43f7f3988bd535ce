"""
알림 패키지

실시간/REST 알림을 하나로 관리하는 NotificationStore
"""

from core.notifications.store import Notification, NotificationStore

__all__ = [
    "Notification",
    "NotificationStore",
]
