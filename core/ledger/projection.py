"""
잔고 예측 (Projection Engine)

현재 잔고와 레코드 목록으로 각 미지급 항목의 balance_after 계산.
순수 함수만 제공 (부작용 없음, 내부 상태 없음).

계산 규칙:
- running = 현재 잔고
- 목록 순서대로 순회 (정렬하지 않음, 순서가 곧 지급 순서)
- 지급 완료 또는 금액 미정 → balance_after = None, running 유지
- 그 외 → balance_after = running - amount, running 갱신
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from core.ledger.types import Record, RecordProjection


def project(
    current_balance: Decimal,
    records: Iterable[Record],
) -> list[RecordProjection]:
    """레코드별 예측 잔고 계산

    "남은 미지급 항목을 이 순서대로 지급하면 각 시점에 잔고가 얼마인가"

    Args:
        current_balance: 현재 잔고
        records: 레코드 목록 (표시 순서 = 예측 순서)

    Returns:
        입력과 같은 순서의 RecordProjection 목록
    """
    running = current_balance
    projections: list[RecordProjection] = []

    for record in records:
        if record.paid or record.amount is None:
            projections.append(RecordProjection(record=record, balance_after=None))
            continue

        running = running - record.amount
        projections.append(RecordProjection(record=record, balance_after=running))

    return projections


def projected_final_balance(
    current_balance: Decimal,
    records: Iterable[Record],
) -> Decimal:
    """모든 미지급 항목 지급 후 최종 잔고"""
    return current_balance - outstanding_total(records)


def outstanding_total(records: Iterable[Record]) -> Decimal:
    """미지급 + 금액 확정 항목 합계"""
    return sum(
        (r.amount for r in records if r.is_outstanding and r.amount is not None),
        Decimal("0"),
    )


def outstanding_by_holder(records: Iterable[Record]) -> dict[str, Decimal]:
    """소유자별 미지급 합계 (처음 등장한 순서 유지)"""
    totals: dict[str, Decimal] = {}
    for r in records:
        if r.is_outstanding and r.amount is not None:
            totals[r.acct_name] = totals.get(r.acct_name, Decimal("0")) + r.amount
    return totals


def unknown_amount_count(records: Sequence[Record]) -> int:
    """금액 미정인 미지급 항목 수"""
    return sum(1 for r in records if not r.paid and r.amount is None)
