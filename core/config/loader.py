"""
설정 로더

settings.yaml 로드 + 환경변수 덮어쓰기로 클라이언트 설정 생성
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from core.constants import Defaults, Endpoints, EnvVars, Paths


@dataclass(frozen=True)
class ApiConfig:
    """REST API 접속 설정

    불변 데이터 구조로 설정 변경 방지
    """

    base_url: str
    token: str | None
    timeout: float


@dataclass(frozen=True)
class RealtimeConfig:
    """실시간 알림(WebSocket) 설정"""

    ws_url: str
    reconnect_delay: float


@dataclass(frozen=True)
class ExportConfig:
    """파일 내보내기 설정"""

    directory: Path


@dataclass(frozen=True)
class ClientSettings:
    """클라이언트 전체 설정"""

    api: ApiConfig
    realtime: RealtimeConfig
    export: ExportConfig


class SettingsLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """YAML 최상위 섹션 추출 (없으면 빈 dict)"""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션은 매핑이어야 합니다")
    return section


def _as_float(value: Any, field_name: str) -> float:
    """숫자 설정값 변환"""
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(
            f"'{field_name}' 값이 숫자가 아닙니다: {value!r}"
        ) from e


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientSettings:
    """settings.yaml 파일 로드

    파일이 없으면 기본값을 사용하고, 환경변수가 있으면 우선 적용.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)
        environ: 환경변수 매핑 (None이면 os.environ)

    Returns:
        ClientSettings 인스턴스

    Raises:
        SettingsLoadError: 파일 형식이 잘못되었거나 값 타입이 틀린 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE
    if environ is None:
        environ = os.environ

    data: dict[str, Any] = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

        if loaded is not None:
            if not isinstance(loaded, dict):
                raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")
            data = loaded

    api_section = _section(data, "api")
    realtime_section = _section(data, "realtime")
    export_section = _section(data, "export")

    # 환경변수 > 설정 파일 > 기본값
    base_url = environ.get(EnvVars.API_URL) or api_section.get("base_url") or Endpoints.API_BASE_URL
    token = environ.get(EnvVars.API_TOKEN) or api_section.get("token") or None
    ws_url = environ.get(EnvVars.WS_URL) or realtime_section.get("ws_url") or Endpoints.WS_URL

    timeout = _as_float(
        api_section.get("timeout", Defaults.REQUEST_TIMEOUT_SEC), "api.timeout"
    )
    reconnect_delay = _as_float(
        realtime_section.get("reconnect_delay", Defaults.RECONNECT_DELAY_SEC),
        "realtime.reconnect_delay",
    )
    if reconnect_delay < 0:
        raise SettingsLoadError("'realtime.reconnect_delay'는 0 이상이어야 합니다")

    export_dir = Path(export_section.get("directory", Paths.EXPORTS_DIR))
    if not export_dir.is_absolute():
        export_dir = path.parent.parent / export_dir

    return ClientSettings(
        api=ApiConfig(base_url=str(base_url).rstrip("/"), token=token, timeout=timeout),
        realtime=RealtimeConfig(ws_url=str(ws_url), reconnect_delay=reconnect_delay),
        export=ExportConfig(directory=export_dir),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: ClientSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            self._settings = load_settings(settings_path)

    @property
    def api(self) -> ApiConfig:
        """REST API 설정"""
        assert self._settings is not None
        return self._settings.api

    @property
    def realtime(self) -> RealtimeConfig:
        """WebSocket 설정"""
        assert self._settings is not None
        return self._settings.realtime

    @property
    def export(self) -> ExportConfig:
        """내보내기 설정"""
        assert self._settings is not None
        return self._settings.export

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
