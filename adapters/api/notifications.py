"""
알림 센터 API 서비스 (/notifications)

서버 알림을 NotificationStore에 병합하여
실시간 채널 알림과 같은 목록으로 관리.
"""

import logging
from typing import Iterable

from adapters.api.schemas import NotificationPage, NotificationSchema, NotificationStats, Pagination
from adapters.interfaces import IApiClient
from core.constants import Defaults
from core.notifications.store import Notification, NotificationStore

logger = logging.getLogger(__name__)


class NotificationService:
    """알림 센터 API 서비스

    store가 주어지면 서버 요청 성공 후 같은 변경을 저장소에도 적용.
    서버 요청이 실패하면 저장소는 그대로.

    Args:
        api: REST 클라이언트
        store: 공유 알림 저장소 (선택)
    """

    def __init__(self, api: IApiClient, store: NotificationStore | None = None):
        self.api = api
        self.store = store

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def get_my_notifications(
        self,
        page: int = 1,
        limit: int = Defaults.PAGE_SIZE,
    ) -> tuple[list[Notification], Pagination]:
        """내 알림 목록 (페이지)"""
        response = await self.api.fetch(
            "GET", "/notifications/my", NotificationPage, params={"page": page, "limit": limit}
        )
        result: NotificationPage = response.data
        return [n.to_domain() for n in result.notifications], result.pagination

    async def get_unread(self) -> list[Notification]:
        """읽지 않은 알림"""
        response = await self.api.fetch("GET", "/notifications/unread", list[NotificationSchema])
        return [n.to_domain() for n in response.data]

    async def get_stats(self) -> NotificationStats:
        """알림 통계"""
        response = await self.api.fetch("GET", "/notifications/stats", NotificationStats)
        return response.data

    async def sync(
        self,
        store: NotificationStore | None = None,
        page: int = 1,
        limit: int = Defaults.PAGE_SIZE,
    ) -> int:
        """서버 알림 한 페이지를 저장소에 병합

        Returns:
            새로 추가된 알림 수
        """
        target = store or self.store
        if target is None:
            raise ValueError("병합할 NotificationStore가 없습니다")

        notifications, _ = await self.get_my_notifications(page=page, limit=limit)
        added = target.merge(notifications)
        logger.debug("알림 동기화", extra={"fetched": len(notifications), "added": added})
        return added

    # -------------------------------------------------------------------------
    # 변경
    # -------------------------------------------------------------------------

    async def mark_as_read(self, notification_id: int) -> None:
        """알림 읽음 처리"""
        await self.api.send("PATCH", f"/notifications/{notification_id}/read")
        if self.store is not None:
            self.store.mark_as_read(notification_id)

    async def mark_all_as_read(self) -> None:
        """전체 읽음 처리"""
        await self.api.send("PATCH", "/notifications/mark-all-read")
        if self.store is not None:
            self.store.mark_all_as_read()

    async def delete(self, notification_id: int) -> None:
        """알림 삭제"""
        await self.api.send("DELETE", f"/notifications/{notification_id}")
        if self.store is not None:
            self.store.delete(notification_id)

    async def delete_bulk(self, notification_ids: Iterable[int]) -> int:
        """알림 일괄 삭제

        Returns:
            삭제 요청한 알림 수 (비어 있으면 요청하지 않고 0)
        """
        ids = list(dict.fromkeys(notification_ids))
        if not ids:
            return 0

        await self.api.send("DELETE", "/notifications/bulk", json={"notificationIds": ids})
        if self.store is not None:
            for notification_id in ids:
                self.store.delete(notification_id)
        return len(ids)
