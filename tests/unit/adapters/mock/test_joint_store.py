"""
MockJointStore 테스트

메모리 내 잔고/레코드 저장소 동작과 실패 주입 테스트.
"""

from decimal import Decimal

import pytest

from adapters.interfaces import IBalanceStore, IRecordLedger
from adapters.joint_api.rest_client import JointApiError
from adapters.mock.joint_store import MockJointStore


class TestMockJointStoreProtocol:
    """Protocol 준수 테스트"""

    def test_implements_protocols(self, mock_store: MockJointStore) -> None:
        assert isinstance(mock_store, IBalanceStore)
        assert isinstance(mock_store, IRecordLedger)


class TestMockJointStoreRecords:
    """레코드 조작 테스트"""

    def test_add_record_assigns_ids(self) -> None:
        """ID 자동 증가"""
        store = MockJointStore()

        first = store.add_record("Alice", "d1", Decimal("1"))
        second = store.add_record("Bob", "d2")

        assert (first.id, second.id) == (1, 2)
        assert second.amount is None

    def test_add_record_explicit_id(self) -> None:
        """명시한 ID 이후로 카운터 이어짐"""
        store = MockJointStore()

        store.add_record("Alice", "d1", record_id=10)
        nxt = store.add_record("Alice", "d2")

        assert nxt.id == 11

    @pytest.mark.asyncio
    async def test_get_records_in_insertion_order(self, mock_store: MockJointStore) -> None:
        records = await mock_store.get_records()

        assert [r.id for r in records] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_set_record_amount(self, mock_store: MockJointStore) -> None:
        await mock_store.set_record_amount(1, Decimal("12"))

        assert mock_store.get_record(1).amount == Decimal("12")

    @pytest.mark.asyncio
    async def test_mark_record_paid(self, mock_store: MockJointStore) -> None:
        await mock_store.mark_record_paid(3)

        assert mock_store.get_record(3).paid is True

    @pytest.mark.asyncio
    async def test_unknown_record(self, mock_store: MockJointStore) -> None:
        """없는 레코드는 404"""
        with pytest.raises(JointApiError) as exc_info:
            await mock_store.mark_record_paid(99)

        assert exc_info.value.status_code == 404


class TestMockJointStoreBalance:
    """잔고/이력 테스트"""

    @pytest.mark.asyncio
    async def test_apply_offset_appends_history(self, mock_store: MockJointStore) -> None:
        """잔고 변경 시 이력 추가"""
        new_balance = await mock_store.apply_offset(Decimal("-25"), "groceries")

        assert new_balance == Decimal("75")
        assert await mock_store.get_balance() == Decimal("75")

        history = await mock_store.get_history(10)
        assert len(history) == 1
        assert history[0].amount == Decimal("75")
        assert history[0].delta == Decimal("-25")
        assert history[0].comment == "groceries"

    @pytest.mark.asyncio
    async def test_history_newest_first_with_limit(self) -> None:
        store = MockJointStore()
        for delta in ("10", "20", "30"):
            await store.apply_offset(Decimal(delta), "")

        history = await store.get_history(2)

        assert [e.delta for e in history] == [Decimal("30"), Decimal("20")]


class TestMockJointStoreFailures:
    """실패 주입 / 호출 기록 테스트"""

    @pytest.mark.asyncio
    async def test_fail_next(self, mock_store: MockJointStore) -> None:
        """지정 횟수만큼 실패 후 정상"""
        mock_store.fail_next("get_balance", times=2)

        for _ in range(2):
            with pytest.raises(JointApiError) as exc_info:
                await mock_store.get_balance()
            assert exc_info.value.status_code == 500

        assert await mock_store.get_balance() == Decimal("100")

    @pytest.mark.asyncio
    async def test_failed_mutation_leaves_state(self, mock_store: MockJointStore) -> None:
        """실패한 변경은 상태를 바꾸지 않음"""
        mock_store.fail_next("apply_offset")

        with pytest.raises(JointApiError):
            await mock_store.apply_offset(Decimal("5"), "")

        assert mock_store.state.balance == Decimal("100")
        assert mock_store.state.history == []

    @pytest.mark.asyncio
    async def test_calls_recorded(self, mock_store: MockJointStore) -> None:
        await mock_store.get_records()
        await mock_store.set_record_amount(1, Decimal("3"))

        assert mock_store.calls == [
            ("get_records",),
            ("set_record_amount", 1, Decimal("3")),
        ]
        assert mock_store.mutation_calls == [("set_record_amount", 1, Decimal("3"))]
