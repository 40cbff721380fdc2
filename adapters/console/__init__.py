"""
콘솔 어댑터

터미널(stderr)로 알림 출력.
INotifier Protocol 준수.
"""

from adapters.console.notifier import ConsoleNotifier

__all__ = [
    "ConsoleNotifier",
]
