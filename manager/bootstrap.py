"""
Manager Bootstrap

설정 로드, 의존성 주입, 리소스 정리.
Controller / HistoryReader / EditSession을 하나의 AccountManager로 묶음.
"""

import logging
from typing import Any

from adapters.console.notifier import ConsoleNotifier
from adapters.interfaces import IBalanceStore, INotifier, IRecordLedger
from adapters.joint_api.rest_client import JointApiClient
from adapters.slack.notifier import SlackNotifier
from core.config.loader import Settings
from core.constants import HistoryLimits
from manager.controller import TransactionController
from manager.edit_session import EditSession
from manager.history import HistoryReader

logger = logging.getLogger(__name__)


class BroadcastNotifier:
    """여러 Notifier로 동시에 전송

    INotifier Protocol 구현. 하나라도 성공하면 True.
    """

    def __init__(self, notifiers: list[INotifier]):
        self.notifiers = notifiers

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        results = [await n.send(message, level=level, extra=extra) for n in self.notifiers]
        return any(results)

    async def send_transaction_alert(
        self,
        kind: str,
        amount: str,
        balance: str,
        comment: str | None = None,
    ) -> bool:
        results = [
            await n.send_transaction_alert(kind, amount, balance, comment)
            for n in self.notifiers
        ]
        return any(results)


class AccountManager:
    """공동 계좌 관리자

    모든 컴포넌트를 묶고 종료 시 HTTP 클라이언트 정리.

    Args:
        balance_store: 잔고 저장소
        record_ledger: 레코드 저장소
        notifier: 알림 채널
        history_limit: 이력 조회 기본 개수
        holders: 계좌 소유자 이름 (최대 2명)
    """

    def __init__(
        self,
        balance_store: IBalanceStore,
        record_ledger: IRecordLedger,
        notifier: INotifier,
        history_limit: int = HistoryLimits.DEFAULT,
        holders: tuple[str, ...] = (),
    ):
        self.controller = TransactionController(
            balance_store=balance_store,
            record_ledger=record_ledger,
            notifier=notifier,
        )
        self.history = HistoryReader(balance_store, default_limit=history_limit)
        self.edit_session = EditSession()
        self.notifier = notifier
        self.holders = holders

        # 종료 시 close() 호출 대상
        self._closeables: list[Any] = []

    def add_closeable(self, resource: Any) -> None:
        """종료 시 정리할 리소스 등록 (async close() 보유)"""
        self._closeables.append(resource)

    async def close(self) -> None:
        """등록된 리소스 정리"""
        for resource in self._closeables:
            await resource.close()
        self._closeables.clear()

    async def __aenter__(self) -> "AccountManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_manager(
    settings: Settings,
    notifier: INotifier | None = None,
) -> AccountManager:
    """설정으로 AccountManager 생성

    Slack Webhook이 설정되어 있으면 콘솔 + Slack 동시 알림.

    Args:
        settings: 설정 객체
        notifier: 기본 알림 채널 (None이면 ConsoleNotifier)
    """
    client = JointApiClient(
        base_url=settings.api.base_url,
        timeout=settings.api.timeout,
    )

    notifiers: list[INotifier] = [notifier or ConsoleNotifier()]
    slack: SlackNotifier | None = None
    if settings.slack_webhook_url:
        slack = SlackNotifier(webhook_url=settings.slack_webhook_url)
        notifiers.append(slack)
        logger.info("Slack 알림 활성화")

    manager = AccountManager(
        balance_store=client,
        record_ledger=client,
        notifier=BroadcastNotifier(notifiers) if len(notifiers) > 1 else notifiers[0],
        history_limit=settings.history_limit,
        holders=settings.holders,
    )
    manager.add_closeable(client)
    if slack is not None:
        manager.add_closeable(slack)

    logger.info(f"API: {settings.api.base_url}")
    return manager
