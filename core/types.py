"""
타입 정의 모듈

공통 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TransactionKind(str, Enum):
    """잔고 변경 종류

    입금은 양수, 출금은 음수 offset으로 변환됨.
    """

    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"


class RecordStatus(str, Enum):
    """레코드 지급 상태 (표시용)"""

    PAID = "PAID"
    UNPAID = "UNPAID"


class NotifyLevel(str, Enum):
    """알림 레벨"""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ActionKind(str, Enum):
    """Controller 동작 종류"""

    REFRESH = "REFRESH"
    BALANCE_OFFSET = "BALANCE_OFFSET"
    SET_AMOUNT = "SET_AMOUNT"
    MARK_PAID = "MARK_PAID"
