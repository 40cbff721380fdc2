"""
History Reader

잔고 변경 이력 조회 (읽기 전용).
View State를 변경하지 않으며 매 호출이 독립적.
"""

import logging

from adapters.interfaces import IBalanceStore
from core.constants import HistoryLimits
from core.ledger.history import HistoryDrift, verify_history
from core.ledger.types import HistoryEntry

logger = logging.getLogger(__name__)


class HistoryReader:
    """잔고 이력 조회기

    Args:
        balance_store: 잔고 저장소
        default_limit: 기본 조회 개수 (10/20/50)
    """

    def __init__(
        self,
        balance_store: IBalanceStore,
        default_limit: int = HistoryLimits.DEFAULT,
    ):
        self.balance_store = balance_store
        self.default_limit = default_limit

    async def fetch_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """최신순 이력 조회

        Args:
            limit: 최대 조회 개수 (None이면 default_limit)

        Returns:
            최대 limit개의 최신순 이력

        Raises:
            ValueError: limit이 양의 정수가 아닌 경우 (요청 전송 안 함)
            JointApiError: 조회 실패 시
        """
        if limit is None:
            limit = self.default_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValueError(f"History limit must be a positive integer: {limit!r}")

        if limit not in HistoryLimits.ALLOWED:
            logger.debug(f"Non-standard history limit requested: {limit}")

        entries = await self.balance_store.get_history(limit)
        return entries[:limit]

    async def check_consistency(self, limit: int | None = None) -> list[HistoryDrift]:
        """조회 범위 내 이력 재생 검증

        Returns:
            불일치 목록 (비어 있으면 정상)
        """
        entries = await self.fetch_history(limit)
        drifts = verify_history(entries)
        if drifts:
            logger.warning(f"History drift detected: {len(drifts)} entries")
        return drifts
