"""
설정 로더

settings.yaml 로드 및 API/알림 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, HistoryLimits, Paths


# 계좌 소유자 최대 인원 (공동 계좌)
MAX_HOLDERS = 2


@dataclass(frozen=True)
class ApiConfig:
    """Joint Account API 연결 설정"""

    base_url: str
    timeout: float = Defaults.API_TIMEOUT_SEC


@dataclass(frozen=True)
class AppSettings:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    api: ApiConfig
    holders: tuple[str, ...] = ()
    history_limit: int = HistoryLimits.DEFAULT
    slack_webhook_url: str | None = None


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def load_settings(path: Path | None = None) -> AppSettings:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppSettings 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")
    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    # api 섹션
    api_section = data.get("api") or {}
    base_url = api_section.get("base_url")
    if not base_url:
        raise SettingsLoadError("settings.yaml의 api 섹션에 'base_url'이 없습니다")

    try:
        timeout = float(api_section.get("timeout", Defaults.API_TIMEOUT_SEC))
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(
            f"api.timeout 값이 숫자가 아닙니다: {api_section.get('timeout')!r}"
        ) from e

    # 계좌 소유자 (최대 2명)
    holders_raw = data.get("holders") or []
    if not isinstance(holders_raw, list):
        raise SettingsLoadError("holders는 목록이어야 합니다")
    if len(holders_raw) > MAX_HOLDERS:
        raise SettingsLoadError(
            f"holders는 최대 {MAX_HOLDERS}명까지 지정할 수 있습니다: {holders_raw}"
        )
    holders = tuple(str(h) for h in holders_raw)

    # 이력 조회 기본 개수
    history_section = data.get("history") or {}
    history_limit = history_section.get("default_limit", HistoryLimits.DEFAULT)
    if (
        isinstance(history_limit, bool)
        or not isinstance(history_limit, int)
        or history_limit not in HistoryLimits.ALLOWED
    ):
        raise SettingsLoadError(
            f"유효하지 않은 history.default_limit입니다: {history_limit!r}. "
            f"유효한 값: {list(HistoryLimits.ALLOWED)}"
        )

    # Slack (선택)
    slack_section = data.get("slack") or {}
    webhook_url = slack_section.get("webhook_url") or None

    return AppSettings(
        api=ApiConfig(base_url=str(base_url).rstrip("/"), timeout=timeout),
        holders=holders,
        history_limit=history_limit,
        slack_webhook_url=webhook_url,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: AppSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            self._settings = load_settings(settings_path)

    @property
    def api(self) -> ApiConfig:
        """API 연결 설정"""
        assert self._settings is not None
        return self._settings.api

    @property
    def holders(self) -> tuple[str, ...]:
        """계좌 소유자 이름 목록"""
        assert self._settings is not None
        return self._settings.holders

    @property
    def history_limit(self) -> int:
        """이력 조회 기본 개수"""
        assert self._settings is not None
        return self._settings.history_limit

    @property
    def slack_webhook_url(self) -> str | None:
        """Slack Webhook URL (없으면 None)"""
        assert self._settings is not None
        return self._settings.slack_webhook_url

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
