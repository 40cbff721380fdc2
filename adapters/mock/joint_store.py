"""
Mock Joint Account 저장소

테스트용 메모리 내 잔고/레코드 저장소.
IBalanceStore, IRecordLedger Protocol 준수.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal

from adapters.joint_api.rest_client import JointApiError
from core.ledger.types import HistoryEntry, Record


# 변경 요청 연산 이름 (호출 기록/실패 주입에 사용)
MUTATING_OPERATIONS = frozenset({"apply_offset", "set_record_amount", "mark_record_paid"})


@dataclass
class MockState:
    """Mock 상태 (메모리 내 저장)"""

    # 현재 잔고
    balance: Decimal = Decimal("0")

    # 잔고 이력 (오래된 순으로 저장, 조회 시 최신순)
    history: list[HistoryEntry] = field(default_factory=list)

    # 레코드 (삽입 순서 = 반환 순서)
    records: list[Record] = field(default_factory=list)

    # 실패 주입 (operation -> 남은 실패 횟수)
    failures: dict[str, int] = field(default_factory=dict)

    # 카운터
    history_counter: int = 0
    record_counter: int = 0


class MockJointStore:
    """Mock 잔고/레코드 저장소

    IBalanceStore, IRecordLedger Protocol 구현.
    모든 호출을 calls에 기록하여 네트워크 호출 여부 검증 가능.

    사용 예시:
    ```python
    store = MockJointStore(balance=Decimal("100"))
    store.add_record("Alice", "2026-01-05", Decimal("30"))

    # 다음 apply_offset 한 번 실패
    store.fail_next("apply_offset")
    ```
    """

    def __init__(self, balance: Decimal = Decimal("0"), state: MockState | None = None):
        self.state = state or MockState(balance=balance)
        self.calls: list[tuple] = []

    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------

    def add_record(
        self,
        acct_name: str,
        date: str,
        amount: Decimal | None = None,
        paid: bool = False,
        record_id: int | None = None,
    ) -> Record:
        """레코드 추가 (목록 끝에)"""
        if record_id is None:
            self.state.record_counter += 1
            record_id = self.state.record_counter
        else:
            self.state.record_counter = max(self.state.record_counter, record_id)

        record = Record(
            id=record_id,
            acct_name=acct_name,
            date=date,
            amount=amount,
            paid=paid,
        )
        self.state.records.append(record)
        return record

    def set_balance(self, balance: Decimal) -> None:
        """잔고 직접 설정 (이력 없이)"""
        self.state.balance = balance

    def fail_next(self, operation: str, times: int = 1) -> None:
        """다음 N회 호출 실패 설정

        Args:
            operation: 메서드 이름 (예: apply_offset, get_records)
            times: 실패 횟수
        """
        self.state.failures[operation] = times

    def get_record(self, record_id: int) -> Record | None:
        """ID로 레코드 조회 (호출 기록 없음)"""
        for record in self.state.records:
            if record.id == record_id:
                return record
        return None

    @property
    def mutation_calls(self) -> list[tuple]:
        """변경 요청 호출 기록만"""
        return [c for c in self.calls if c[0] in MUTATING_OPERATIONS]

    def _record_call(self, operation: str, *args) -> None:
        """호출 기록 + 실패 주입 처리"""
        self.calls.append((operation, *args))

        remaining = self.state.failures.get(operation, 0)
        if remaining > 0:
            self.state.failures[operation] = remaining - 1
            raise JointApiError(f"Mock failure: {operation}", status_code=500)

    def _index_of(self, record_id: int) -> int:
        for index, record in enumerate(self.state.records):
            if record.id == record_id:
                return index
        raise JointApiError(f"Record not found: {record_id}", status_code=404)

    # -------------------------------------------------------------------------
    # IBalanceStore
    # -------------------------------------------------------------------------

    async def get_balance(self) -> Decimal:
        """현재 잔고 조회"""
        self._record_call("get_balance")
        return self.state.balance

    async def apply_offset(self, offset: Decimal, comment: str) -> Decimal:
        """잔고 변경 + 이력 추가"""
        self._record_call("apply_offset", offset, comment)

        self.state.balance = self.state.balance + offset
        self.state.history_counter += 1
        self.state.history.append(
            HistoryEntry(
                id=self.state.history_counter,
                amount=self.state.balance,
                delta=offset,
                date=datetime.now(timezone.utc).isoformat(timespec="seconds"),
                comment=comment,
            )
        )
        return self.state.balance

    async def get_history(self, limit: int) -> list[HistoryEntry]:
        """최신순 이력 조회"""
        self._record_call("get_history", limit)
        return list(reversed(self.state.history))[:limit]

    # -------------------------------------------------------------------------
    # IRecordLedger
    # -------------------------------------------------------------------------

    async def get_records(self) -> list[Record]:
        """전체 레코드 조회"""
        self._record_call("get_records")
        return list(self.state.records)

    async def set_record_amount(self, record_id: int, amount: Decimal) -> None:
        """레코드 금액 설정"""
        self._record_call("set_record_amount", record_id, amount)
        index = self._index_of(record_id)
        self.state.records[index] = replace(self.state.records[index], amount=amount)

    async def mark_record_paid(self, record_id: int) -> None:
        """레코드 지급 완료 처리"""
        self._record_call("mark_record_paid", record_id)
        index = self._index_of(record_id)
        self.state.records[index] = replace(self.state.records[index], paid=True)
