"""
타임존 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수
"""

from datetime import date, datetime, timezone
from typing import Any


def now_utc() -> datetime:
    """현재 UTC 시간 반환

    Returns:
        UTC 타임존의 현재 datetime
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """naive datetime은 UTC로 간주하여 타임존 부여"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_from_timestamp_ms(ts_ms: int) -> datetime:
    """밀리초 타임스탬프를 UTC datetime으로 변환

    Example:
        >>> utc_from_timestamp_ms(1708408800000)
        datetime.datetime(2024, 2, 20, 6, 0, tzinfo=datetime.timezone.utc)
    """
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """서버/메시지의 시간 값을 UTC datetime으로 변환

    ISO 8601 문자열(끝의 'Z' 허용), 밀리초 타임스탬프, datetime 지원.
    해석할 수 없으면 None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return utc_from_timestamp_ms(int(value))
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def today_utc() -> date:
    """오늘 날짜 (UTC 기준)"""
    return now_utc().date()
