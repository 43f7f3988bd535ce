"""
파일 내보내기

시산표, 거래 목록 등을 CSV/JSON 파일로 저장.
서버 호출 없이 클라이언트에서 파일만 생성.
"""

import csv
import io
import json
import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from core.types import ExportFormat
from core.utils.timezone import today_utc

logger = logging.getLogger(__name__)


def _to_plain(value: Any) -> Any:
    """JSON/CSV 직렬화 가능한 값으로 변환"""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {k: _to_plain(v) for k, v in asdict(value).items()}
    if isinstance(value, Mapping):
        return {str(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


def _row_dict(row: Any) -> dict[str, Any]:
    """행(dataclass/dict/pydantic)을 dict로 변환"""
    if is_dataclass(row) and not isinstance(row, type):
        return asdict(row)
    if hasattr(row, "model_dump"):
        return row.model_dump()
    if isinstance(row, Mapping):
        return dict(row)
    raise TypeError(f"내보낼 수 없는 행 타입: {type(row).__name__}")


def to_csv(rows: Iterable[Any], columns: Sequence[tuple[str, str]]) -> str:
    """CSV 문자열 생성

    Args:
        rows: 행 목록 (dataclass, dict, pydantic 모델)
        columns: (필드명, 헤더) 목록. 헤더 순서대로 출력

    Returns:
        헤더 포함 CSV 문자열 (줄바꿈 \\n)
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([header for _, header in columns])
    for row in rows:
        data = _row_dict(row)
        values = [data[name] if name in data else getattr(row, name, None) for name, _ in columns]
        writer.writerow(["" if value is None else _to_plain(value) for value in values])
    return buffer.getvalue()


def to_json(rows: Iterable[Any]) -> str:
    """JSON 배열 문자열 생성 (Decimal은 문자열, 날짜는 ISO)"""
    return json.dumps(
        [_to_plain(_row_dict(row)) for row in rows],
        ensure_ascii=False,
        indent=2,
    )


def export_file(
    content: str,
    directory: Path,
    stem: str,
    file_format: ExportFormat,
    today: date | None = None,
) -> Path:
    """내보내기 파일 저장

    파일명: {stem}-{YYYY-MM-DD}.{ext} (예: trial-balance-2026-10-19.csv)

    Args:
        content: 파일 내용
        directory: 저장 디렉토리 (없으면 생성)
        stem: 파일명 앞부분
        file_format: CSV 또는 JSON
        today: 파일명 날짜 (None이면 오늘, UTC)

    Returns:
        저장된 파일 경로
    """
    day = today or today_utc()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{stem}-{day.isoformat()}.{file_format.value}"
    path.write_text(content, encoding="utf-8")

    logger.info("파일 내보내기 완료", extra={"path": str(path)})
    return path
