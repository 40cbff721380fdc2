"""
Slack 알림 서비스

Slack Webhook을 통해 알림을 전송.
INotifier Protocol 준수.
"""

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from core.types import TransactionKind

logger = logging.getLogger(__name__)


# 레벨별 이모지 매핑
LEVEL_EMOJI = {
    "INFO": ":white_check_mark:",
    "WARNING": ":warning:",
    "ERROR": ":x:",
    "CRITICAL": ":rotating_light:",
}

# 레벨별 색상 매핑 (Slack attachment color)
LEVEL_COLOR = {
    "INFO": "#36A64F",      # 녹색
    "WARNING": "#FFA500",   # 주황색
    "ERROR": "#FF0000",     # 빨간색
    "CRITICAL": "#8B0000",  # 진한 빨간색
}


class SlackNotifier:
    """Slack 알림 서비스

    INotifier Protocol 구현.
    Slack Webhook URL을 통해 메시지 전송.

    사용 예시:
    ```python
    notifier = SlackNotifier(webhook_url="https://hooks.slack.com/...")

    await notifier.send("잔고 갱신 실패", level="ERROR")
    await notifier.send_transaction_alert(
        kind="WITHDRAW",
        amount="-25.00",
        balance="75.00",
        comment="groceries",
    )
    ```
    """

    def __init__(
        self,
        webhook_url: str,
        channel: str | None = None,
        username: str = "JointAccount",
        timeout: float = 10.0,
    ):
        """
        Args:
            webhook_url: Slack Incoming Webhook URL
            channel: 채널 오버라이드 (기본값은 Webhook 설정 사용)
            username: 메시지 발송자 이름
            timeout: HTTP 요청 타임아웃 (초)
        """
        if not webhook_url:
            raise ValueError("webhook_url은 필수입니다")

        self.webhook_url = webhook_url
        self.channel = channel
        self.username = username
        self.timeout = timeout

        # httpx 비동기 클라이언트 (재사용)
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 반환 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터 (attachment fields로 표시)

        Returns:
            전송 성공 여부
        """
        emoji = LEVEL_EMOJI.get(level, ":bell:")
        color = LEVEL_COLOR.get(level, "#808080")

        text = f"{emoji} *[{level}]* {message}"

        payload: dict[str, Any] = {
            "username": self.username,
            "attachments": [
                {
                    "color": color,
                    "text": text,
                    "footer": f"JointAccount | {self._format_timestamp()}",
                }
            ],
        }

        if self.channel:
            payload["channel"] = self.channel

        # extra 데이터가 있으면 fields로 추가
        if extra:
            fields = [
                {"title": key, "value": str(value), "short": True}
                for key, value in extra.items()
            ]
            payload["attachments"][0]["fields"] = fields

        return await self._send_payload(payload)

    async def send_transaction_alert(
        self,
        kind: str,
        amount: str,
        balance: str,
        comment: str | None = None,
    ) -> bool:
        """입출금 알림 전송 (포맷팅된 메시지)

        Args:
            kind: DEPOSIT / WITHDRAW
            amount: 변경 금액
            balance: 변경 후 잔고
            comment: 코멘트 (선택)

        Returns:
            전송 성공 여부
        """
        is_deposit = kind == TransactionKind.DEPOSIT.value
        kind_emoji = ":moneybag:" if is_deposit else ":money_with_wings:"
        kind_color = "#36A64F" if is_deposit else "#FF6B6B"

        fields = [
            {"title": "종류", "value": kind, "short": True},
            {"title": "금액", "value": amount, "short": True},
            {"title": "잔고", "value": balance, "short": True},
        ]
        if comment:
            fields.append({"title": "메모", "value": comment, "short": False})

        payload: dict[str, Any] = {
            "username": self.username,
            "attachments": [
                {
                    "color": kind_color,
                    "title": f"{kind_emoji} {kind} {amount}",
                    "fields": fields,
                    "footer": f"JointAccount | {self._format_timestamp()}",
                }
            ],
        }

        if self.channel:
            payload["channel"] = self.channel

        return await self._send_payload(payload)

    async def _send_payload(self, payload: dict[str, Any]) -> bool:
        """Slack Webhook으로 페이로드 전송

        Args:
            payload: Slack 메시지 페이로드

        Returns:
            전송 성공 여부
        """
        try:
            client = await self._get_client()
            response = await client.post(self.webhook_url, json=payload)

            if response.status_code == 200:
                logger.debug("Slack 알림 전송 성공")
                return True
            else:
                logger.warning(
                    "Slack 알림 전송 실패: status=%s, body=%s",
                    response.status_code,
                    response.text,
                )
                return False

        except httpx.TimeoutException:
            logger.error("Slack 알림 전송 타임아웃")
            return False
        except httpx.HTTPError as e:
            logger.error("Slack 알림 전송 HTTP 에러: %s", e)
            return False

    def _format_timestamp(self) -> str:
        """현재 시간을 UTC로 포맷"""
        return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")

    # -------------------------------------------------------------------------
    # Context Manager 지원
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SlackNotifier":
        """async with 진입"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """async with 종료 시 클라이언트 정리"""
        await self.close()
