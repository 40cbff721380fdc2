"""
Manager 테스트 픽스처

Mock 저장소/알림으로 구성한 Controller, AccountManager 제공.
"""

from decimal import Decimal

import pytest

from adapters.mock.joint_store import MockJointStore
from adapters.mock.notifier import MockNotifier
from manager.bootstrap import AccountManager
from manager.controller import TransactionController


@pytest.fixture
def store() -> MockJointStore:
    """잔고 100, 미지급 30 / 지급 완료 50 / 미지급 40 / 금액 미정"""
    store = MockJointStore(balance=Decimal("100.00"))
    store.add_record("Alice", "2026-01-05", Decimal("30.00"))
    store.add_record("Bob", "2026-01-12", Decimal("50.00"), paid=True)
    store.add_record("Alice", "2026-01-19", Decimal("40.00"))
    store.add_record("Bob", "2026-01-26")
    return store


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def controller(store: MockJointStore, notifier: MockNotifier) -> TransactionController:
    return TransactionController(
        balance_store=store,
        record_ledger=store,
        notifier=notifier,
    )


@pytest.fixture
def account_manager(store: MockJointStore, notifier: MockNotifier) -> AccountManager:
    return AccountManager(
        balance_store=store,
        record_ledger=store,
        notifier=notifier,
        holders=("Alice", "Bob"),
    )
