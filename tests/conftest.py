"""
pytest 공통 fixture 정의

설정 파일, 임시 디렉토리 등 여러 테스트에서 쓰는 fixture
"""

import tempfile
from pathlib import Path

import pytest

from core.config.loader import Settings


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (config/ 하위)"""
    settings_content = """# 테스트용 settings.yaml
api:
  base_url: https://erp.example.com/api/
  token: "test_token_abc"
  timeout: 12.5

realtime:
  ws_url: wss://erp.example.com/ws
  reconnect_delay: 2

export:
  directory: out/exports
"""
    config_dir = temp_dir / "config"
    config_dir.mkdir()
    settings_path = config_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_invalid(temp_dir: Path) -> Path:
    """YAML 문법이 깨진 settings.yaml"""
    settings_path = temp_dir / "settings_invalid.yaml"
    settings_path.write_text("api: [unclosed\n  base_url: x", encoding="utf-8")
    return settings_path


@pytest.fixture(autouse=True)
def reset_settings_singleton() -> None:
    """테스트 간 Settings 싱글턴 격리"""
    Settings.reset()
    yield
    Settings.reset()
