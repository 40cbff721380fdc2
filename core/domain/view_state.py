"""
View State

현재 잔고 + 예측 레코드 목록 스냅샷과 단일 writer 저장소.

전이 규칙:
- publish(): 스냅샷 전체를 원자적으로 교체 (부분 갱신 없음)
- 교체할 때마다 version 1 증가
- 실패한 동작은 publish 하지 않음 (이전 스냅샷 유지)
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from core.ledger.types import RecordProjection

logger = logging.getLogger(__name__)


# 스냅샷 교체 시 호출되는 콜백 타입
StateListener = Callable[["ViewState"], None]


@dataclass(frozen=True)
class ViewState:
    """화면 표시용 스냅샷 (불변)

    Attributes:
        balance: 현재 잔고
        records: 예측 잔고가 포함된 레코드 목록 (API 반환 순서)
        version: 교체 횟수 (초기값 0)
        refreshed_at: 마지막 교체 시각 (초기 상태는 None)
    """

    balance: Decimal = Decimal("0")
    records: tuple[RecordProjection, ...] = ()
    version: int = 0
    refreshed_at: datetime | None = None

    @property
    def is_loaded(self) -> bool:
        """한 번이라도 서버 상태로 채워졌는지"""
        return self.refreshed_at is not None

    def find(self, record_id: int) -> RecordProjection | None:
        """ID로 레코드 조회"""
        for projection in self.records:
            if projection.id == record_id:
                return projection
        return None


class ViewStateStore:
    """View State 저장소

    Controller만 publish() 호출 (단일 writer).
    읽는 쪽은 current로 불변 스냅샷을 가져감.

    Args:
        initial: 초기 스냅샷 (None이면 빈 상태)
    """

    def __init__(self, initial: ViewState | None = None):
        self._state = initial or ViewState()
        self._listeners: list[StateListener] = []

    @property
    def current(self) -> ViewState:
        """현재 스냅샷"""
        return self._state

    def publish(
        self,
        balance: Decimal,
        records: list[RecordProjection] | tuple[RecordProjection, ...],
    ) -> ViewState:
        """스냅샷 교체

        Args:
            balance: 새 잔고
            records: 새 예측 레코드 목록

        Returns:
            교체된 새 스냅샷
        """
        new_state = ViewState(
            balance=balance,
            records=tuple(records),
            version=self._state.version + 1,
            refreshed_at=datetime.now(timezone.utc),
        )
        self._state = new_state

        logger.debug(
            f"View state published: v{new_state.version} "
            f"balance={balance} records={len(new_state.records)}"
        )

        for listener in list(self._listeners):
            listener(new_state)

        return new_state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """스냅샷 교체 알림 구독

        Returns:
            구독 해제 함수
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
