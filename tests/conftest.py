"""
pytest 공통 fixture 정의

설정 파일 / 임시 디렉토리 fixture
"""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = """# 테스트용 settings.yaml
api:
  base_url: "http://joint.test:8080/"
  timeout: 5

holders:
  - Alice
  - Bob

history:
  default_limit: 20

slack:
  webhook_url: "https://hooks.slack.com/services/test"
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_minimal(temp_dir: Path) -> Path:
    """api.base_url만 있는 settings.yaml 파일 생성"""
    settings_content = """api:
  base_url: "http://localhost:9000"
"""
    settings_path = temp_dir / "settings_minimal.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path
