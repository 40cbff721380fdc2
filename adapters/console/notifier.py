"""
콘솔 알림 서비스

CLI 사용자에게 실패/완료 알림을 바로 보여주기 위한 Notifier.
INotifier Protocol 준수.
"""

import sys
from typing import Any, TextIO


# 레벨별 접두어
LEVEL_PREFIX = {
    "INFO": "[OK]",
    "WARNING": "[WARN]",
    "ERROR": "[ERROR]",
    "CRITICAL": "[CRITICAL]",
}


class ConsoleNotifier:
    """콘솔 알림 서비스

    Args:
        stream: 출력 스트림 (기본: stderr)
        min_level: 이 레벨 미만은 출력하지 않음 (INFO 알림 숨김용)
    """

    LEVEL_ORDER = ["INFO", "WARNING", "ERROR", "CRITICAL"]

    def __init__(self, stream: TextIO | None = None, min_level: str = "INFO"):
        self.stream = stream
        self.min_level = min_level

    def _enabled(self, level: str) -> bool:
        try:
            return self.LEVEL_ORDER.index(level) >= self.LEVEL_ORDER.index(self.min_level)
        except ValueError:
            return True

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 출력"""
        if not self._enabled(level):
            return True

        stream = self.stream or sys.stderr
        prefix = LEVEL_PREFIX.get(level, f"[{level}]")
        line = f"{prefix} {message}"
        if extra:
            details = ", ".join(f"{k}={v}" for k, v in extra.items())
            line = f"{line} ({details})"
        print(line, file=stream)
        return True

    async def send_transaction_alert(
        self,
        kind: str,
        amount: str,
        balance: str,
        comment: str | None = None,
    ) -> bool:
        """입출금 알림 출력"""
        message = f"{kind} {amount} → balance {balance}"
        if comment:
            message = f"{message} ({comment})"
        return await self.send(message, level="INFO")
