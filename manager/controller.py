"""
Transaction Controller

잔고/레코드 변경 요청과 그 후 재조회(reconcile)를 순서대로 실행.

동작 방식 (mutate-then-reconcile):
1. 변경 요청 정확히 1회 (재시도 없음)
2. 실패 → 로컬 상태 유지 + 실패 알림
3. 성공 → 잔고/레코드 동시 조회 → Projection 재계산 → View State 교체

재조회 실패 시 서버 변경은 이미 반영된 상태이며 화면만 이전 값으로 남음.
refresh()로 복구.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from adapters.interfaces import IBalanceStore, INotifier, IRecordLedger
from adapters.joint_api.rest_client import JointApiError
from core.domain.view_state import ViewState, ViewStateStore
from core.ledger.projection import project
from core.types import ActionKind, NotifyLevel, TransactionKind
from core.utils.amount import (
    AmountParseError,
    CommentTooLongError,
    format_money,
    parse_amount,
    signed_offset,
    validate_comment,
)

logger = logging.getLogger(__name__)


# 동작별 사용자 실패 메시지
FAILURE_MESSAGES = {
    ActionKind.REFRESH: "Failed to load account data. Please try again.",
    ActionKind.BALANCE_OFFSET: "Failed to update balance. Please try again.",
    ActionKind.SET_AMOUNT: "Failed to update amount. Please try again.",
    ActionKind.MARK_PAID: "Failed to mark record as paid. Please try again.",
}


@dataclass(frozen=True)
class ActionResult:
    """Controller 동작 결과

    Attributes:
        action: 동작 종류
        success: 변경 + 재조회 모두 성공 여부
        state: 동작 후 View State (실패 시 이전 스냅샷 그대로)
        error: 실패 사유
        mutation_applied: 서버 변경 반영 여부 (재조회만 실패한 경우 True)
    """

    action: ActionKind
    success: bool
    state: ViewState
    error: str | None = None
    mutation_applied: bool = False


class TransactionController:
    """Transaction Controller

    변경 요청 직렬화/큐잉은 하지 않음.
    동시에 두 변경이 진행되면 마지막에 끝난 reconcile이 최종 스냅샷이 됨.

    Args:
        balance_store: 잔고 저장소 (IBalanceStore)
        record_ledger: 레코드 저장소 (IRecordLedger)
        notifier: 사용자 알림 채널 (INotifier)
        view_store: View State 저장소 (None이면 새로 생성)
    """

    def __init__(
        self,
        balance_store: IBalanceStore,
        record_ledger: IRecordLedger,
        notifier: INotifier,
        view_store: ViewStateStore | None = None,
    ):
        self.balance_store = balance_store
        self.record_ledger = record_ledger
        self.notifier = notifier
        self.view_store = view_store or ViewStateStore()

    @property
    def view_state(self) -> ViewState:
        """현재 View State"""
        return self.view_store.current

    # =========================================================================
    # 공개 동작
    # =========================================================================

    async def refresh(self) -> ActionResult:
        """변경 없이 재조회만 수행 (초기 로드, 수동 새로고침)"""
        try:
            state = await self._reconcile()
        except JointApiError as e:
            return await self._fail(ActionKind.REFRESH, str(e))

        return ActionResult(action=ActionKind.REFRESH, success=True, state=state)

    async def apply_balance_offset(self, signed_amount: Any, comment: str = "") -> ActionResult:
        """잔고 변경 (부호 포함 금액)

        Args:
            signed_amount: 입금 양수, 출금 음수 (UI에서 부호 적용 완료)
            comment: 코멘트 (최대 100자)
        """
        action = ActionKind.BALANCE_OFFSET
        try:
            offset = parse_amount(signed_amount)
            comment = validate_comment(comment)
        except (AmountParseError, CommentTooLongError) as e:
            return await self._reject(action, str(e))

        logger.info(f"Applying balance offset: {offset} ({comment!r})")

        result = await self._mutate_then_reconcile(
            action,
            lambda: self.balance_store.apply_offset(offset, comment),
        )

        if result.success:
            kind = TransactionKind.WITHDRAW if offset < 0 else TransactionKind.DEPOSIT
            await self.notifier.send_transaction_alert(
                kind=kind.value,
                amount=format_money(offset),
                balance=format_money(result.state.balance),
                comment=comment or None,
            )

        return result

    async def deposit(self, magnitude: Any, comment: str = "") -> ActionResult:
        """입금 (사용자 입력 금액의 절대값을 더함)"""
        return await self._apply_kind(TransactionKind.DEPOSIT, magnitude, comment)

    async def withdraw(self, magnitude: Any, comment: str = "") -> ActionResult:
        """출금 (사용자 입력 금액의 절대값을 뺌)"""
        return await self._apply_kind(TransactionKind.WITHDRAW, magnitude, comment)

    async def set_record_amount(self, record_id: int, new_amount: Any) -> ActionResult:
        """레코드 금액 설정

        숫자로 해석되지 않으면 네트워크 호출 없이 거부.

        Args:
            record_id: 레코드 ID
            new_amount: 새 금액 (문자열 입력 허용)
        """
        action = ActionKind.SET_AMOUNT
        try:
            amount = parse_amount(new_amount)
        except AmountParseError as e:
            return await self._reject(action, str(e))

        logger.info(f"Setting amount of record {record_id} to {amount}")

        return await self._mutate_then_reconcile(
            action,
            lambda: self.record_ledger.set_record_amount(record_id, amount),
        )

    async def mark_record_paid(self, record_id: int) -> ActionResult:
        """레코드 지급 완료 처리 (되돌리는 동작 없음)

        Args:
            record_id: 레코드 ID
        """
        logger.info(f"Marking record {record_id} as paid")

        return await self._mutate_then_reconcile(
            ActionKind.MARK_PAID,
            lambda: self.record_ledger.mark_record_paid(record_id),
        )

    # =========================================================================
    # 내부 처리
    # =========================================================================

    async def _apply_kind(
        self,
        kind: TransactionKind,
        magnitude: Any,
        comment: str,
    ) -> ActionResult:
        """입출금 종류에 맞게 부호 적용 후 apply_balance_offset 호출"""
        try:
            value = parse_amount(magnitude)
        except AmountParseError as e:
            return await self._reject(ActionKind.BALANCE_OFFSET, str(e))

        return await self.apply_balance_offset(signed_offset(kind, value), comment)

    async def _mutate_then_reconcile(
        self,
        action: ActionKind,
        mutate: Callable[[], Awaitable[Any]],
    ) -> ActionResult:
        """변경 요청 1회 → 성공 시 재조회

        Args:
            action: 동작 종류
            mutate: 변경 요청 코루틴 팩토리
        """
        try:
            await mutate()
        except JointApiError as e:
            return await self._fail(action, str(e))

        try:
            state = await self._reconcile()
        except JointApiError as e:
            logger.warning(
                f"{action.value} applied but refresh failed, view is stale: {e}"
            )
            return await self._fail(
                action,
                f"Change was saved but refreshing failed: {e}",
                mutation_applied=True,
            )

        return ActionResult(action=action, success=True, state=state)

    async def _reconcile(self) -> ViewState:
        """잔고/레코드 동시 조회 → Projection → View State 교체

        둘 중 하나라도 실패하면 예외 전파 (부분 결과로 교체하지 않음).
        """
        balance, records = await asyncio.gather(
            self.balance_store.get_balance(),
            self.record_ledger.get_records(),
        )

        projections = project(balance, records)
        state = self.view_store.publish(balance, projections)

        logger.info(
            f"View reconciled: v{state.version} balance={balance} "
            f"records={len(projections)}"
        )
        return state

    async def _reject(self, action: ActionKind, reason: str) -> ActionResult:
        """검증 실패 (네트워크 호출 전)"""
        logger.warning(f"{action.value} rejected: {reason}")
        await self.notifier.send(
            f"{FAILURE_MESSAGES[action]} ({reason})",
            level=NotifyLevel.ERROR.value,
            extra={"action": action.value},
        )
        return ActionResult(
            action=action,
            success=False,
            state=self.view_state,
            error=reason,
        )

    async def _fail(
        self,
        action: ActionKind,
        reason: str,
        mutation_applied: bool = False,
    ) -> ActionResult:
        """전송/상태 코드 실패 (재시도 없음)"""
        logger.error(f"{action.value} failed: {reason}")
        await self.notifier.send(
            FAILURE_MESSAGES[action],
            level=NotifyLevel.ERROR.value,
            extra={"action": action.value, "reason": reason},
        )
        return ActionResult(
            action=action,
            success=False,
            state=self.view_state,
            error=reason,
            mutation_applied=mutation_applied,
        )
