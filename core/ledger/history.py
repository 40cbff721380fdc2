"""
잔고 이력 정합성 검증

이력은 최신순으로 조회되므로 오래된 순으로 뒤집어서 재생.
각 항목의 amount는 직전 항목 amount + 자신의 delta와 같아야 함.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from core.ledger.types import HistoryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryDrift:
    """이력 불일치 정보"""

    entry_id: int
    expected: Decimal
    actual: Decimal

    @property
    def difference(self) -> Decimal:
        return self.actual - self.expected

    @property
    def description(self) -> str:
        return (
            f"History entry {self.entry_id}: expected {self.expected}, "
            f"recorded {self.actual} (diff {self.difference})"
        )


def verify_history(entries: Sequence[HistoryEntry]) -> list[HistoryDrift]:
    """이력 재생 검증

    조회 범위 내 가장 오래된 항목의 amount를 시작점으로 delta를 순서대로 적용.

    Args:
        entries: 최신순 이력 목록

    Returns:
        불일치 목록 (비어 있으면 정상)
    """
    drifts: list[HistoryDrift] = []
    chronological = list(reversed(entries))

    for previous, current in zip(chronological, chronological[1:]):
        expected = previous.amount + current.delta
        if expected != current.amount:
            drift = HistoryDrift(
                entry_id=current.id,
                expected=expected,
                actual=current.amount,
            )
            logger.warning(drift.description)
            drifts.append(drift)

    return drifts
