"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → bizdesk/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Endpoints:
    """기본 접속 주소 (환경변수/설정 파일로 덮어쓰기 가능)"""

    API_BASE_URL: str = "http://localhost:5000/api"
    WS_URL: str = "ws://localhost:5000/ws"


class EnvVars:
    """설정 덮어쓰기용 환경변수 이름"""

    API_URL: str = "BIZDESK_API_URL"
    API_TOKEN: str = "BIZDESK_API_TOKEN"
    WS_URL: str = "BIZDESK_WS_URL"


class Defaults:
    """기본값 상수"""

    REQUEST_TIMEOUT_SEC: float = 30.0
    RECONNECT_DELAY_SEC: float = 5.0
    PAGE_SIZE: int = 10

    # 서버 에러 메시지가 없을 때 사용자에게 보여줄 문구
    GENERIC_ERROR_MESSAGE: str = "Request failed"


class Tolerances:
    """금액 비교 허용 오차

    차변/대변 합계, 은행 대사 차액 모두 동일 값 사용 (설정 불가)
    """

    BALANCE_EPSILON: Decimal = Decimal("0.01")


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    EXPORTS_DIR: Path = PROJECT_ROOT / "exports"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"
