"""
공동 계좌 관리자

Transaction Controller, History Reader, Edit Session, CLI.
"""

from manager.bootstrap import AccountManager, create_manager
from manager.controller import ActionResult, TransactionController
from manager.edit_session import EditSession, EditSessionError
from manager.history import HistoryReader

__all__ = [
    "AccountManager",
    "create_manager",
    "ActionResult",
    "TransactionController",
    "EditSession",
    "EditSessionError",
    "HistoryReader",
]
