"""
알림 센터 API 서비스 테스트

- 서버 알림을 저장소에 병합
- 서버 성공 후에만 저장소 변경
"""

from typing import Any

import pytest

from adapters.api.errors import ApiError
from adapters.api.notifications import NotificationService
from adapters.mock.api_client import MockApiClient
from core.notifications.store import NotificationStore


@pytest.fixture
def service(mock_api: MockApiClient, store: NotificationStore) -> NotificationService:
    return NotificationService(mock_api, store)


@pytest.fixture
def synced(
    service: NotificationService,
    mock_api: MockApiClient,
    notification_page_data: dict[str, Any],
) -> NotificationService:
    mock_api.set_data("GET", "/notifications/my", notification_page_data)
    return service


class TestQueries:
    """조회 테스트"""

    @pytest.mark.asyncio
    async def test_get_my_notifications(
        self,
        synced: NotificationService,
        mock_api: MockApiClient,
    ) -> None:
        """서버 필드 → Notification 변환"""
        notifications, pagination = await synced.get_my_notifications(page=2, limit=5)

        assert [n.id for n in notifications] == [7, 6]
        assert notifications[0].type == "warning"
        assert notifications[1].read is True
        assert pagination.total == 2
        assert mock_api.calls[0].params == {"page": 2, "limit": 5}

    @pytest.mark.asyncio
    async def test_stats(self, service: NotificationService, mock_api: MockApiClient) -> None:
        """통계 camelCase 필드"""
        mock_api.set_data(
            "GET",
            "/notifications/stats",
            {
                "totalNotifications": 10,
                "unreadNotifications": 3,
                "todayNotifications": 1,
                "notificationsByType": {"warning": 2},
            },
        )

        stats = await service.get_stats()

        assert stats.unread_notifications == 3
        assert stats.by_type == {"warning": 2}


class TestSync:
    """저장소 병합 테스트"""

    @pytest.mark.asyncio
    async def test_sync_adds_new(self, synced: NotificationService, store: NotificationStore) -> None:
        """새 알림 추가, 최신순"""
        added = await synced.sync()

        assert added == 2
        assert [n.id for n in store.notifications] == [7, 6]
        assert store.unread_count == 1

    @pytest.mark.asyncio
    async def test_sync_twice_adds_nothing(
        self,
        synced: NotificationService,
        store: NotificationStore,
    ) -> None:
        """같은 페이지 재동기화 시 중복 없음"""
        await synced.sync()
        added = await synced.sync()

        assert added == 0
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_sync_keeps_local_read(
        self,
        synced: NotificationService,
        store: NotificationStore,
    ) -> None:
        """로컬에서 읽은 알림은 서버가 안 읽음이어도 유지"""
        await synced.sync()
        store.mark_as_read(7)

        await synced.sync()

        assert store.get(7).read is True

    @pytest.mark.asyncio
    async def test_sync_without_store(self, mock_api: MockApiClient) -> None:
        """저장소 없으면 에러"""
        with pytest.raises(ValueError):
            await NotificationService(mock_api).sync()


class TestMutations:
    """변경 테스트"""

    @pytest.mark.asyncio
    async def test_mark_as_read_after_success(
        self,
        synced: NotificationService,
        mock_api: MockApiClient,
        store: NotificationStore,
    ) -> None:
        """서버 성공 → 저장소 읽음"""
        await synced.sync()
        mock_api.set_response("PATCH", "/notifications/7/read", {"success": True})

        await synced.mark_as_read(7)

        assert store.get(7).read is True
        assert store.unread_count == 0

    @pytest.mark.asyncio
    async def test_failure_leaves_store(
        self,
        synced: NotificationService,
        mock_api: MockApiClient,
        store: NotificationStore,
    ) -> None:
        """서버 실패 → 저장소 그대로"""
        await synced.sync()
        mock_api.set_error("DELETE", "/notifications/7", ApiError("Forbidden", status_code=403))

        with pytest.raises(ApiError):
            await synced.delete(7)

        assert store.get(7) is not None

    @pytest.mark.asyncio
    async def test_mark_all_as_read(
        self,
        synced: NotificationService,
        mock_api: MockApiClient,
        store: NotificationStore,
    ) -> None:
        """전체 읽음"""
        await synced.sync()
        mock_api.set_response("PATCH", "/notifications/mark-all-read", {"success": True})

        await synced.mark_all_as_read()

        assert store.unread_count == 0

    @pytest.mark.asyncio
    async def test_delete_bulk(
        self,
        synced: NotificationService,
        mock_api: MockApiClient,
        store: NotificationStore,
    ) -> None:
        """일괄 삭제 (중복 ID 제거)"""
        await synced.sync()
        mock_api.set_response("DELETE", "/notifications/bulk", {"success": True})

        count = await synced.delete_bulk([7, 6, 7])

        assert count == 2
        assert len(store) == 0
        assert mock_api.calls_to("DELETE", "/notifications/bulk")[0].json == {
            "notificationIds": [7, 6]
        }

    @pytest.mark.asyncio
    async def test_delete_bulk_empty(
        self,
        service: NotificationService,
        mock_api: MockApiClient,
    ) -> None:
        """빈 목록은 요청하지 않음"""
        assert await service.delete_bulk([]) == 0
        assert mock_api.calls == []
