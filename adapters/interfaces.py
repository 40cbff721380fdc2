"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from core.ledger.types import HistoryEntry, Record


@runtime_checkable
class IBalanceStore(Protocol):
    """잔고 저장소 인터페이스

    현재 잔고와 잔고 변경 이력(append-only)을 소유.
    금액은 반드시 Decimal 타입 사용.
    """

    async def get_balance(self) -> Decimal:
        """현재 잔고 조회 (캐시 없음)"""
        ...

    async def apply_offset(self, offset: Decimal, comment: str) -> Decimal:
        """잔고에 offset 적용 + 이력 추가

        Args:
            offset: 부호 포함 변경 금액 (입금 양수, 출금 음수)
            comment: 코멘트 (최대 100자)

        Returns:
            변경 후 잔고
        """
        ...

    async def get_history(self, limit: int) -> list[HistoryEntry]:
        """잔고 변경 이력 조회

        Args:
            limit: 최대 조회 개수 (양수)

        Returns:
            최신순 이력 목록
        """
        ...


@runtime_checkable
class IRecordLedger(Protocol):
    """레코드 저장소 인터페이스"""

    async def get_records(self) -> list[Record]:
        """전체 레코드 조회 (반환 순서 = 표시/예측 순서)"""
        ...

    async def set_record_amount(self, record_id: int, amount: Decimal) -> None:
        """레코드 금액 설정/변경"""
        ...

    async def mark_record_paid(self, record_id: int) -> None:
        """레코드 지급 완료 처리 (되돌릴 수 없음)"""
        ...


@runtime_checkable
class INotifier(Protocol):
    """알림 서비스 인터페이스

    실패 알림, 입출금 알림 등을 사용자/외부 서비스로 전송.
    전송 실패 시 예외 대신 False 반환.
    """

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터 (선택)

        Returns:
            전송 성공 여부
        """
        ...

    async def send_transaction_alert(
        self,
        kind: str,
        amount: str,
        balance: str,
        comment: str | None = None,
    ) -> bool:
        """입출금 알림 전송 (포맷팅된 메시지)

        Args:
            kind: DEPOSIT / WITHDRAW
            amount: 변경 금액
            balance: 변경 후 잔고
            comment: 코멘트 (선택)

        Returns:
            전송 성공 여부
        """
        ...
