"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

# 잔고 변경 코멘트 최대 길이
MAX_COMMENT_LENGTH: int = 100


class ApiPaths:
    """Joint Account API 경로 (고정값)

    base_url 뒤에 붙여서 사용.
    """

    BALANCE: str = "/api/v1/balance"
    BALANCE_HISTORY: str = "/api/v1/balance/history"
    RECORDS: str = "/api/v1/records"

    @staticmethod
    def record_amount(record_id: int) -> str:
        """레코드 금액 수정 경로"""
        return f"/api/v1/records/{record_id}/amount"

    @staticmethod
    def record_paid(record_id: int) -> str:
        """레코드 지급 완료 경로"""
        return f"/api/v1/records/{record_id}/paid"


class HistoryLimits:
    """잔고 이력 조회 개수 (UI에서 선택 가능한 값)"""

    ALLOWED: tuple[int, ...] = (10, 20, 50)
    DEFAULT: int = 10


class Defaults:
    """기본값 상수"""

    API_BASE_URL: str = "http://localhost:8080"
    API_TIMEOUT_SEC: float = 10.0

    PROCESS_NAME: str = "manager"
    CURRENCY_SYMBOL: str = "$"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    MANAGER_LOGS_DIR: Path = LOGS_DIR / "manager"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"
