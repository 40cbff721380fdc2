"""
Edit Session (두 번 클릭 확인)

첫 번째 동작은 로컬 편집/확인 모드 진입, 두 번째 동작이 실제 변경 요청.
로컬 UI 상태일 뿐이며 Projection에는 영향 없음.

전이 규칙:
- 금액 편집: idle → editing(record, draft) → commit 성공 시 idle
- 지급 확인: idle → confirming(record) → commit 성공 시 idle
- cancel → idle
- commit 실패 시 편집 상태 유지 (재시도 가능)
"""

import logging
from typing import TYPE_CHECKING

from core.ledger.types import Record, RecordProjection

if TYPE_CHECKING:
    from manager.controller import ActionResult, TransactionController

logger = logging.getLogger(__name__)


class EditSessionError(Exception):
    """편집 상태 오류 (지급 완료 레코드 편집, 편집 중 아님 등)"""
    pass


def _unwrap(record: Record | RecordProjection) -> Record:
    if isinstance(record, RecordProjection):
        return record.record
    return record


class EditSession:
    """금액 편집 / 지급 확인 로컬 상태

    한 번에 하나의 레코드만 편집 가능 (새로 시작하면 이전 편집 대체).
    """

    def __init__(self) -> None:
        self.editing_id: int | None = None
        self.draft: str = ""
        self.confirming_paid_id: int | None = None

    # -------------------------------------------------------------------------
    # 금액 편집
    # -------------------------------------------------------------------------

    def begin_amount_edit(self, record: Record | RecordProjection) -> str:
        """금액 편집 시작

        Returns:
            초기 draft (현재 금액 문자열, 미정이면 빈 문자열)
        """
        target = _unwrap(record)
        if target.paid:
            raise EditSessionError(f"Record {target.id} is already paid")

        self.editing_id = target.id
        self.draft = str(target.amount) if target.amount is not None else ""
        return self.draft

    def update_draft(self, text: str) -> None:
        """편집 중인 금액 입력값 변경"""
        if self.editing_id is None:
            raise EditSessionError("No amount edit in progress")
        self.draft = text

    def cancel_amount_edit(self) -> None:
        """금액 편집 취소"""
        self.editing_id = None
        self.draft = ""

    async def commit_amount_edit(
        self,
        controller: "TransactionController",
    ) -> "ActionResult":
        """금액 편집 확정 (두 번째 클릭)

        성공 시에만 편집 상태 해제.
        """
        if self.editing_id is None:
            raise EditSessionError("No amount edit in progress")

        result = await controller.set_record_amount(self.editing_id, self.draft)
        if result.success:
            self.cancel_amount_edit()
        return result

    # -------------------------------------------------------------------------
    # 지급 확인
    # -------------------------------------------------------------------------

    def begin_paid_confirmation(self, record: Record | RecordProjection) -> None:
        """지급 완료 확인 모드 진입"""
        target = _unwrap(record)
        if target.paid:
            raise EditSessionError(f"Record {target.id} is already paid")
        self.confirming_paid_id = target.id

    def cancel_paid_confirmation(self) -> None:
        """지급 확인 취소"""
        self.confirming_paid_id = None

    async def commit_paid_confirmation(
        self,
        controller: "TransactionController",
    ) -> "ActionResult":
        """지급 완료 확정 (두 번째 클릭)"""
        if self.confirming_paid_id is None:
            raise EditSessionError("No paid confirmation in progress")

        result = await controller.mark_record_paid(self.confirming_paid_id)
        if result.success:
            self.cancel_paid_confirmation()
        return result
