"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

from decimal import Decimal

import pytest

from adapters.mock.joint_store import MockJointStore
from adapters.mock.notifier import MockNotifier


# -------------------------------------------------------------------------
# Mock 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def mock_store() -> MockJointStore:
    """레코드 3개가 있는 Mock 저장소 (잔고 100)"""
    store = MockJointStore(balance=Decimal("100"))
    store.add_record("Alice", "2026-01-05", Decimal("30"))
    store.add_record("Bob", "2026-01-12", Decimal("50"), paid=True)
    store.add_record("Alice", "2026-01-19", Decimal("40"))
    return store


@pytest.fixture
def mock_notifier() -> MockNotifier:
    """Mock Notifier"""
    return MockNotifier()


# -------------------------------------------------------------------------
# Joint Account API 응답 샘플
# -------------------------------------------------------------------------

@pytest.fixture
def balance_response() -> dict:
    """잔고 API 응답 샘플"""
    return {"amount": 1250.75}


@pytest.fixture
def records_response() -> list:
    """레코드 API 응답 샘플 (금액 미정 항목 포함)"""
    return [
        {"id": 1, "acctName": "Alice", "date": "2026-01-05", "amount": 30.0, "paid": False},
        {"id": 2, "acctName": "Bob", "date": "2026-01-12", "amount": 50, "paid": True},
        {"id": 3, "acctName": "Alice", "date": "2026-01-19", "amount": None, "paid": False},
    ]


@pytest.fixture
def history_response() -> list:
    """잔고 이력 API 응답 샘플 (최신순)"""
    return [
        {"id": 3, "amount": "75.00", "delta": "-25.00", "date": "2026-01-03T09:00:00", "comment": "groceries"},
        {"id": 2, "amount": "100.00", "delta": "50.00", "date": "2026-01-02T09:00:00", "comment": ""},
        {"id": 1, "amount": "50.00", "delta": "50.00", "date": "2026-01-01T09:00:00", "comment": None},
    ]
