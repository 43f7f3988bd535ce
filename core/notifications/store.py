"""
알림 저장소

실시간 채널(WebSocket)과 알림 센터(REST)가 함께 쓰는 단일 알림 목록.
subscribe/notify 방식의 Observable Store로, UI 없이 단독 테스트 가능.

목록은 최신순 (새 알림을 앞에 삽입).
읽음/삭제/전체 삭제는 순수 목록 변환이며 네트워크 호출 없음.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping
from uuid import uuid4

from core.types import NotificationType
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """알림

    Attributes:
        id: 실시간 알림은 생성 시 부여한 합성 ID, REST 알림은 서버 ID
        type: 알림 유형 (info/success/warning/error 또는 서버 정의 값)
        title: 제목
        message: 본문
        timestamp: 수신/생성 시간 (UTC)
        read: 읽음 여부
        data: 메시지의 나머지 필드
    """

    id: int | str
    type: str
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    data: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[tuple[Notification, ...]], None]

_KNOWN_KEYS = {"id", "type", "title", "message", "timestamp", "read"}


def _new_id() -> str:
    """합성 알림 ID"""
    return uuid4().hex


class NotificationStore:
    """알림 저장소

    사용 예시:
    ```python
    store = NotificationStore()
    unsubscribe = store.subscribe(lambda items: print(len(items)))

    store.add({"title": "Invoice paid", "message": "INV-001", "type": "success"})
    store.mark_all_as_read()
    unsubscribe()
    ```
    """

    def __init__(self) -> None:
        self._items: list[Notification] = []
        self._listeners: list[Listener] = []

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    @property
    def notifications(self) -> tuple[Notification, ...]:
        """현재 알림 스냅샷 (최신순)"""
        return tuple(self._items)

    @property
    def unread_count(self) -> int:
        """읽지 않은 알림 수"""
        return sum(1 for item in self._items if not item.read)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, notification_id: int | str) -> Notification | None:
        """ID로 알림 조회"""
        for item in self._items:
            if item.id == notification_id:
                return item
        return None

    # -------------------------------------------------------------------------
    # 구독
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """변경 구독

        Args:
            listener: 변경 후 스냅샷을 받는 콜백

        Returns:
            구독 해제 함수 (여러 번 호출해도 안전)
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        """구독자에게 스냅샷 전달

        한 구독자의 예외가 다른 구독자 호출을 막지 않음.
        """
        snapshot = self.notifications
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(
                    "알림 구독자 콜백 에러",
                    extra={"error": str(e)},
                )

    # -------------------------------------------------------------------------
    # 변경
    # -------------------------------------------------------------------------

    def add(self, payload: Mapping[str, Any]) -> Notification:
        """실시간 메시지로 새 알림 추가 (맨 앞)

        항상 새 합성 ID, 수신 시각, read=False로 생성.

        Args:
            payload: {title, message, type, ...} 메시지

        Returns:
            추가된 Notification
        """
        notification = Notification(
            id=_new_id(),
            type=str(payload.get("type") or NotificationType.INFO.value),
            title=str(payload.get("title") or ""),
            message=str(payload.get("message") or ""),
            timestamp=now_utc(),
            read=False,
            data={k: v for k, v in payload.items() if k not in _KNOWN_KEYS},
        )
        self._items.insert(0, notification)
        self._notify()
        return notification

    def merge(self, notifications: Iterable[Notification]) -> int:
        """REST로 받은 알림 병합

        모르는 ID는 추가, 아는 ID는 읽음 상태만 갱신.
        병합 후 timestamp 최신순으로 정렬 (같은 시간은 기존 순서 유지).

        Returns:
            새로 추가된 알림 수
        """
        index = {item.id: i for i, item in enumerate(self._items)}
        added = 0
        changed = False

        for incoming in notifications:
            position = index.get(incoming.id)
            if position is None:
                self._items.append(incoming)
                index[incoming.id] = len(self._items) - 1
                added += 1
                changed = True
            elif self._items[position].read != incoming.read:
                # 한 번 읽은 알림은 다시 안 읽음으로 돌리지 않음
                if incoming.read:
                    self._items[position] = replace(self._items[position], read=True)
                    changed = True

        if changed:
            self._items.sort(key=lambda item: item.timestamp, reverse=True)
            self._notify()
        return added

    def mark_as_read(self, notification_id: int | str) -> bool:
        """알림 하나 읽음 처리

        Returns:
            상태 변경 여부 (없는 ID거나 이미 읽음이면 False)
        """
        for i, item in enumerate(self._items):
            if item.id == notification_id:
                if item.read:
                    return False
                self._items[i] = replace(item, read=True)
                self._notify()
                return True
        return False

    def mark_all_as_read(self) -> int:
        """전체 읽음 처리 (멱등)

        Returns:
            새로 읽음 처리된 알림 수
        """
        changed = sum(1 for item in self._items if not item.read)
        if changed:
            self._items = [replace(item, read=True) if not item.read else item for item in self._items]
            self._notify()
        return changed

    def delete(self, notification_id: int | str) -> bool:
        """알림 하나 삭제

        Returns:
            삭제 여부
        """
        remaining = [item for item in self._items if item.id != notification_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._notify()
        return True

    def clear_all(self) -> None:
        """전체 삭제"""
        if self._items:
            self._items = []
            self._notify()
