"""
유틸리티 패키지

금액 파싱, 타임존 처리 등 공통 유틸리티
"""

from core.utils.amount import ZERO, format_amount, parse_amount, try_parse_amount
from core.utils.timezone import (
    ensure_utc,
    now_utc,
    parse_timestamp,
    today_utc,
    utc_from_timestamp_ms,
)

__all__ = [
    "ZERO",
    "parse_amount",
    "format_amount",
    "try_parse_amount",
    "now_utc",
    "ensure_utc",
    "parse_timestamp",
    "today_utc",
    "utc_from_timestamp_ms",
]
