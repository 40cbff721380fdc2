"""
TransactionController 테스트

변경 → 재조회(mutate-then-reconcile) 흐름, 로컬 검증, 실패 처리 테스트.
"""

import asyncio
from decimal import Decimal

import pytest

from adapters.mock.joint_store import MockJointStore
from adapters.mock.notifier import MockNotifier
from core.types import ActionKind
from manager.controller import FAILURE_MESSAGES, ActionResult, TransactionController


def _balances_after(result: ActionResult) -> list:
    return [p.balance_after for p in result.state.records]


class TestRefresh:
    """refresh() 테스트"""

    @pytest.mark.asyncio
    async def test_initial_load(self, controller: TransactionController, store: MockJointStore) -> None:
        """잔고 + 레코드 조회 후 예측 계산"""
        result = await controller.refresh()

        assert result.success is True
        assert result.action == ActionKind.REFRESH
        assert result.state.balance == Decimal("100.00")
        assert _balances_after(result) == [Decimal("70.00"), None, Decimal("30.00"), None]
        assert controller.view_state is result.state
        assert result.state.version == 1
        assert store.mutation_calls == []

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_state(
        self,
        controller: TransactionController,
        store: MockJointStore,
        notifier: MockNotifier,
    ) -> None:
        """조회 실패 시 이전 상태 유지 + 실패 알림"""
        loaded = await controller.refresh()
        store.fail_next("get_balance")

        result = await controller.refresh()

        assert result.success is False
        assert result.state is loaded.state
        assert notifier.get_errors()[-1].message == FAILURE_MESSAGES[ActionKind.REFRESH]

    @pytest.mark.asyncio
    async def test_partial_read_not_published(
        self,
        controller: TransactionController,
        store: MockJointStore,
    ) -> None:
        """레코드 조회만 실패해도 잔고를 반영하지 않음"""
        await controller.refresh()
        store.set_balance(Decimal("999"))
        store.fail_next("get_records")

        result = await controller.refresh()

        assert result.success is False
        assert controller.view_state.balance == Decimal("100.00")
        assert controller.view_state.version == 1


class TestApplyBalanceOffset:
    """apply_balance_offset() 테스트"""

    @pytest.mark.asyncio
    async def test_withdraw_reconciles(
        self,
        controller: TransactionController,
        store: MockJointStore,
        notifier: MockNotifier,
    ) -> None:
        """잔고 100에서 -25 적용 → 재조회 결과 75 + 이력 추가"""
        result = await controller.apply_balance_offset(Decimal("-25.00"), "groceries")

        assert result.success is True
        assert result.state.balance == Decimal("75.00")
        assert _balances_after(result) == [Decimal("45.00"), None, Decimal("5.00"), None]

        history = await store.get_history(10)
        assert history[0].delta == Decimal("-25.00")
        assert history[0].amount == Decimal("75.00")
        assert history[0].comment == "groceries"

        assert notifier.last_notification.message == "[WITHDRAW] -$25.00 → $75.00 (groceries)"

    @pytest.mark.asyncio
    async def test_mutation_sent_exactly_once(self, controller: TransactionController, store: MockJointStore) -> None:
        await controller.apply_balance_offset("10", "")

        assert store.mutation_calls == [("apply_offset", Decimal("10"), "")]
        # 변경 후 잔고/레코드 재조회
        assert ("get_balance",) in store.calls[1:]
        assert ("get_records",) in store.calls[1:]

    @pytest.mark.asyncio
    async def test_invalid_amount_rejected_locally(
        self,
        controller: TransactionController,
        store: MockJointStore,
        notifier: MockNotifier,
    ) -> None:
        result = await controller.apply_balance_offset("ten dollars", "")

        assert result.success is False
        assert store.calls == []
        assert len(notifier.get_errors()) == 1

    @pytest.mark.asyncio
    async def test_unquantizable_amount_rejected_before_mutation(
        self,
        controller: TransactionController,
        store: MockJointStore,
        notifier: MockNotifier,
    ) -> None:
        """센트 단위로 표현할 수 없는 금액 (1e30)은 전송 전에 거부"""
        store.state.balance = Decimal("0")

        result = await controller.apply_balance_offset("1e30", "x")

        assert result.success is False
        assert store.calls == []
        assert store.state.balance == Decimal("0")
        assert "Invalid amount: '1e30'" in result.error
        assert len(notifier.get_errors()) == 1

    @pytest.mark.asyncio
    async def test_comment_too_long_rejected(self, controller: TransactionController, store: MockJointStore) -> None:
        """코멘트 100자 초과는 전송하지 않음"""
        result = await controller.apply_balance_offset("5", "x" * 101)

        assert result.success is False
        assert "maximum is 100" in result.error
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_mutation_failure_not_retried(
        self,
        controller: TransactionController,
        store: MockJointStore,
        notifier: MockNotifier,
    ) -> None:
        """변경 실패 → 재시도/재조회 없음, 상태 유지"""
        loaded = await controller.refresh()
        store.calls.clear()
        store.fail_next("apply_offset")

        result = await controller.apply_balance_offset("-5", "")

        assert result.success is False
        assert result.mutation_applied is False
        assert result.state is loaded.state
        assert store.calls == [("apply_offset", Decimal("-5"), "")]
        error = notifier.get_errors()[-1]
        assert error.message == FAILURE_MESSAGES[ActionKind.BALANCE_OFFSET]
        assert error.extra["action"] == "BALANCE_OFFSET"

    @pytest.mark.asyncio
    async def test_reconcile_failure_after_mutation(
        self,
        controller: TransactionController,
        store: MockJointStore,
    ) -> None:
        """변경은 반영됐지만 재조회 실패 → 화면은 이전 값"""
        loaded = await controller.refresh()
        store.fail_next("get_records")

        result = await controller.apply_balance_offset("-5", "")

        assert result.success is False
        assert result.mutation_applied is True
        assert result.state is loaded.state
        assert store.state.balance == Decimal("95.00")

        # 수동 새로고침으로 복구
        recovered = await controller.refresh()
        assert recovered.state.balance == Decimal("95.00")


class TestDepositWithdraw:
    """deposit() / withdraw() 테스트"""

    @pytest.mark.asyncio
    async def test_deposit_adds_magnitude(self, controller: TransactionController, store: MockJointStore) -> None:
        result = await controller.deposit("-50", "salary")

        assert store.mutation_calls == [("apply_offset", Decimal("50"), "salary")]
        assert result.state.balance == Decimal("150.00")

    @pytest.mark.asyncio
    async def test_withdraw_subtracts_magnitude(self, controller: TransactionController, store: MockJointStore) -> None:
        result = await controller.withdraw("25")

        assert store.mutation_calls == [("apply_offset", Decimal("-25"), "")]
        assert result.state.balance == Decimal("75.00")

    @pytest.mark.asyncio
    async def test_invalid_magnitude(self, controller: TransactionController, store: MockJointStore) -> None:
        result = await controller.withdraw("")

        assert result.success is False
        assert result.action == ActionKind.BALANCE_OFFSET
        assert store.calls == []


class TestSetRecordAmount:
    """set_record_amount() 테스트"""

    @pytest.mark.asyncio
    async def test_non_numeric_rejected_without_network(
        self,
        controller: TransactionController,
        store: MockJointStore,
        notifier: MockNotifier,
    ) -> None:
        """숫자가 아닌 입력은 네트워크 호출 없이 거부, 상태 변경 없음"""
        loaded = await controller.refresh()
        store.calls.clear()

        result = await controller.set_record_amount(1, "abc")

        assert result.success is False
        assert result.state is loaded.state
        assert store.calls == []
        assert notifier.get_errors()[-1].message.startswith(FAILURE_MESSAGES[ActionKind.SET_AMOUNT])

    @pytest.mark.asyncio
    async def test_set_amount_reprojects(self, controller: TransactionController) -> None:
        """금액 미정 항목에 금액 설정 → 예측에 포함"""
        result = await controller.set_record_amount(4, "20")

        assert result.success is True
        assert _balances_after(result) == [Decimal("70.00"), None, Decimal("30.00"), Decimal("10.00")]

    @pytest.mark.asyncio
    async def test_unknown_record_fails(self, controller: TransactionController, notifier: MockNotifier) -> None:
        result = await controller.set_record_amount(99, "1")

        assert result.success is False
        assert result.error == "Record not found: 99"
        assert notifier.get_errors()[-1].extra["reason"] == "Record not found: 99"


class TestMarkRecordPaid:
    """mark_record_paid() 테스트"""

    @pytest.mark.asyncio
    async def test_paid_record_leaves_fold(self, controller: TransactionController) -> None:
        """지급 완료 처리 후 해당 항목은 None, 이후 항목은 다시 계산"""
        result = await controller.mark_record_paid(1)

        assert result.success is True
        assert _balances_after(result) == [None, None, Decimal("60.00"), None]

        again = await controller.refresh()
        assert _balances_after(again) == [None, None, Decimal("60.00"), None]

    @pytest.mark.asyncio
    async def test_failure_keeps_record_unpaid(
        self,
        controller: TransactionController,
        store: MockJointStore,
    ) -> None:
        store.fail_next("mark_record_paid")

        result = await controller.mark_record_paid(1)

        assert result.success is False
        assert store.get_record(1).paid is False


class TestConcurrentActions:
    """동시 동작 테스트 (직렬화 없음)"""

    @pytest.mark.asyncio
    async def test_last_reconcile_wins(self, controller: TransactionController, store: MockJointStore) -> None:
        """두 변경이 겹쳐도 최종 스냅샷은 서버 상태와 일치"""
        first, second = await asyncio.gather(
            controller.deposit("10"),
            controller.withdraw("5"),
        )

        assert first.success and second.success
        assert controller.view_state.balance == store.state.balance == Decimal("105.00")
        assert controller.view_state.version == 2

    @pytest.mark.asyncio
    async def test_listener_notified(self, controller: TransactionController) -> None:
        seen = []
        controller.view_store.subscribe(lambda state: seen.append(state.version))

        await controller.refresh()
        await controller.deposit("1")

        assert seen == [1, 2]
