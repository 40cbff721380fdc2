"""
공동 계좌 Ledger 타입 정의

Record (지급 예정/완료 항목), RecordProjection (잔고 예측 포함),
HistoryEntry (잔고 변경 이력) 데이터클래스.
모든 금액은 Decimal 사용.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from core.types import RecordStatus
from core.utils.amount import parse_amount, parse_optional_amount


@dataclass(frozen=True)
class Record:
    """Ledger 항목

    Attributes:
        id: 레코드 ID (고유, 불변)
        acct_name: 계좌 소유자 식별자
        date: 날짜 (표시용 문자열, 해석하지 않음)
        amount: 금액 (None = 아직 금액 미정, 0과 구분)
        paid: 지급 완료 여부 (False → True 단방향)
    """

    id: int
    acct_name: str
    date: str
    amount: Decimal | None
    paid: bool = False

    @property
    def has_amount(self) -> bool:
        """금액 확정 여부 (0도 확정 금액)"""
        return self.amount is not None

    @property
    def status(self) -> RecordStatus:
        """지급 상태"""
        return RecordStatus.PAID if self.paid else RecordStatus.UNPAID

    @property
    def is_outstanding(self) -> bool:
        """잔고 예측에 포함되는 항목인지 (미지급 + 금액 확정)"""
        return not self.paid and self.amount is not None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Record":
        """API 응답에서 생성

        Raises:
            ValueError: paid가 bool이 아닌 경우 ("false" 문자열 등)
        """
        paid = data.get("paid", False)
        if not isinstance(paid, bool):
            raise ValueError(f"paid must be a boolean: {paid!r}")

        return cls(
            id=int(data["id"]),
            acct_name=str(data["acctName"]),
            date=str(data["date"]),
            amount=parse_optional_amount(data.get("amount")),
            paid=paid,
        )

    def to_dict(self) -> dict[str, Any]:
        """API 형식 딕셔너리로 변환 (Decimal은 문자열)"""
        return {
            "id": self.id,
            "acctName": self.acct_name,
            "date": self.date,
            "amount": str(self.amount) if self.amount is not None else None,
            "paid": self.paid,
        }


@dataclass(frozen=True)
class RecordProjection:
    """잔고 예측이 포함된 Record

    저장되지 않는 파생 값. 조회할 때마다 다시 계산됨.

    Attributes:
        record: 원본 레코드
        balance_after: 이 항목까지 모두 지급했을 때의 잔고 (해당 없으면 None)
    """

    record: Record
    balance_after: Decimal | None

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def is_overdrawn(self) -> bool:
        """예측 잔고가 음수인지 여부"""
        return self.balance_after is not None and self.balance_after < 0


@dataclass(frozen=True)
class HistoryEntry:
    """잔고 변경 이력 (불변)

    Attributes:
        id: 이력 ID
        amount: 변경 후 잔고
        delta: 적용된 offset (입금 양수, 출금 음수)
        date: 변경 시각 (표시용 문자열)
        comment: 코멘트 (최대 100자)
    """

    id: int
    amount: Decimal
    delta: Decimal
    date: str
    comment: str = ""

    @property
    def previous_amount(self) -> Decimal:
        """변경 전 잔고"""
        return self.amount - self.delta

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "HistoryEntry":
        """API 응답에서 생성"""
        return cls(
            id=int(data["id"]),
            amount=parse_amount(data["amount"]),
            delta=parse_amount(data["delta"]),
            date=str(data["date"]),
            comment=str(data.get("comment") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """API 형식 딕셔너리로 변환"""
        return {
            "id": self.id,
            "amount": str(self.amount),
            "delta": str(self.delta),
            "date": self.date,
            "comment": self.comment,
        }
