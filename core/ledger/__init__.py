"""
공동 계좌 Ledger

레코드/이력 타입과 잔고 예측(Projection) 순수 함수.

사용 예시:
```python
from core.ledger import project

projections = project(Decimal("100.00"), records)
for p in projections:
    print(p.record.id, p.balance_after)
```
"""

from core.ledger.history import HistoryDrift, verify_history
from core.ledger.projection import (
    outstanding_by_holder,
    outstanding_total,
    project,
    projected_final_balance,
    unknown_amount_count,
)
from core.ledger.types import HistoryEntry, Record, RecordProjection

__all__ = [
    # 타입
    "Record",
    "RecordProjection",
    "HistoryEntry",
    "HistoryDrift",
    # Projection
    "project",
    "projected_final_balance",
    "outstanding_total",
    "outstanding_by_holder",
    "unknown_amount_count",
    # 이력 검증
    "verify_history",
]
