"""
Joint Account Manager CLI

실행 방법:
    python -m manager show
    python -m manager deposit 100 -m "salary"
    python -m manager withdraw 25 -m "groceries"
    python -m manager set-amount 3 42.50
    python -m manager mark-paid 3
    python -m manager history --limit 20
    python -m manager verify-history
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from adapters.joint_api.rest_client import JointApiError
from core.config.loader import SettingsLoadError, get_settings
from core.constants import Defaults, HistoryLimits
from core.domain.view_state import ViewState
from core.ledger.history import HistoryDrift
from core.ledger.projection import (
    outstanding_by_holder,
    projected_final_balance,
    unknown_amount_count,
)
from core.ledger.types import HistoryEntry
from core.logging import setup_logging
from core.utils.amount import format_money
from manager.bootstrap import AccountManager, create_manager
from manager.controller import ActionResult
from manager.edit_session import EditSessionError

logger = logging.getLogger("manager")


# 종료 코드
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

# 확인 프롬프트 함수 타입 (테스트에서 교체)
ConfirmFn = Callable[[str], bool]


def prompt_confirm(question: str) -> bool:
    """y/N 확인 프롬프트"""
    answer = input(f"{question} [y/N] ").strip().lower()
    return answer in ("y", "yes")


# =========================================================================
# 출력 포맷
# =========================================================================

def render_view(state: ViewState, holder: str | None = None) -> str:
    """잔고 + 레코드 테이블 렌더링

    holder 지정 시 해당 소유자의 레코드만 표시 (예측 값은 전체 기준 그대로).
    """
    lines = [f"Current Balance: {format_money(state.balance)}", ""]

    header = f"{'ID':>4}  {'Date':<12} {'Acct Name':<14} {'Amount':>12} {'Balance After':>14}  Status"
    lines.append(header)
    lines.append("-" * len(header))

    for projection in state.records:
        record = projection.record
        if holder is not None and record.acct_name != holder:
            continue
        balance_after = format_money(projection.balance_after, empty="-")
        if projection.is_overdrawn:
            balance_after = f"{balance_after}!"
        lines.append(
            f"{record.id:>4}  {record.date:<12} {record.acct_name:<14} "
            f"{format_money(record.amount):>12} {balance_after:>14}  "
            f"{record.status.value.capitalize()}"
        )

    records = [p.record for p in state.records]
    lines.append("")
    for name, total in outstanding_by_holder(records).items():
        lines.append(f"Outstanding ({name}): {format_money(total)}")
    lines.append(
        f"Balance after all unpaid: {format_money(projected_final_balance(state.balance, records))}"
    )
    unknown = unknown_amount_count(records)
    if unknown:
        lines.append(f"Unpaid records without amount: {unknown}")

    return "\n".join(lines)


def render_history(entries: Sequence[HistoryEntry]) -> str:
    """잔고 이력 테이블 렌더링 (최신순)"""
    if not entries:
        return "No balance history."

    header = f"{'ID':>4}  {'Date':<25} {'Change':>12} {'Balance':>12}  Comment"
    lines = [header, "-" * len(header)]
    for entry in entries:
        change = format_money(entry.delta)
        if entry.delta > 0:
            change = f"+{change}"
        lines.append(
            f"{entry.id:>4}  {entry.date:<25} {change:>12} "
            f"{format_money(entry.amount):>12}  {entry.comment}"
        )
    return "\n".join(lines)


def render_drifts(drifts: Sequence[HistoryDrift]) -> str:
    """이력 검증 결과 렌더링"""
    if not drifts:
        return "History is consistent."
    return "\n".join(d.description for d in drifts)


# =========================================================================
# 명령 실행
# =========================================================================

def build_parser() -> argparse.ArgumentParser:
    """CLI 파서 생성"""
    parser = argparse.ArgumentParser(
        prog="joint-account",
        description="Joint Account Manager",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="settings.yaml 경로 (기본: config/settings.yaml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="DEBUG 로그 출력")
    parser.add_argument("--no-log-file", action="store_true", help="파일 로그 비활성화")

    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="잔고와 레코드 예측 표시")
    show.add_argument("--holder", default=None, help="소유자 이름으로 필터")

    for name, help_text in (("deposit", "입금"), ("withdraw", "출금")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("amount", help="금액 (양수)")
        p.add_argument("-m", "--comment", default="", help="코멘트 (최대 100자)")

    set_amount = sub.add_parser("set-amount", help="레코드 금액 설정")
    set_amount.add_argument("record_id", type=int)
    set_amount.add_argument("amount")
    set_amount.add_argument("-y", "--yes", action="store_true", help="확인 생략")

    mark_paid = sub.add_parser("mark-paid", help="레코드 지급 완료 처리")
    mark_paid.add_argument("record_id", type=int)
    mark_paid.add_argument("-y", "--yes", action="store_true", help="확인 생략")

    for name, help_text in (("history", "잔고 이력 조회"), ("verify-history", "잔고 이력 검증")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument(
            "--limit",
            type=int,
            default=None,
            choices=HistoryLimits.ALLOWED,
            help="조회 개수",
        )

    return parser


def _finish(result: ActionResult) -> int:
    """동작 결과 출력 후 종료 코드 반환

    실패 메시지는 Notifier가 이미 출력함.
    """
    if result.success:
        print(render_view(result.state))
        return EXIT_OK
    return EXIT_FAILURE


async def run_command(
    args: argparse.Namespace,
    manager: AccountManager,
    confirm: ConfirmFn = prompt_confirm,
) -> int:
    """파싱된 명령 실행

    Args:
        args: argparse 결과
        manager: AccountManager
        confirm: 확인 프롬프트 함수

    Returns:
        종료 코드
    """
    controller = manager.controller
    command = args.command

    if command in ("history", "verify-history"):
        try:
            if command == "history":
                print(render_history(await manager.history.fetch_history(args.limit)))
                return EXIT_OK
            drifts = await manager.history.check_consistency(args.limit)
        except JointApiError as e:
            await manager.notifier.send(
                "Failed to load balance history. Please try again.",
                level="ERROR",
                extra={"reason": str(e)},
            )
            return EXIT_FAILURE
        print(render_drifts(drifts))
        return EXIT_OK if not drifts else EXIT_FAILURE

    if command == "deposit":
        return _finish(await controller.deposit(args.amount, args.comment))
    if command == "withdraw":
        return _finish(await controller.withdraw(args.amount, args.comment))

    # 설정된 소유자 목록이 있으면 필터 이름 검증
    holder = getattr(args, "holder", None)
    if holder is not None and manager.holders and holder not in manager.holders:
        await manager.notifier.send(
            f"Unknown holder: {holder}",
            level="ERROR",
            extra={"holders": ", ".join(manager.holders)},
        )
        return EXIT_FAILURE

    # 나머지 명령은 현재 상태가 필요 (초기 로드)
    loaded = await controller.refresh()
    if not loaded.success:
        return EXIT_FAILURE

    if command == "show":
        print(render_view(loaded.state, args.holder))
        return EXIT_OK

    session = manager.edit_session
    target = loaded.state.find(args.record_id)
    if target is None:
        await manager.notifier.send(f"Record {args.record_id} not found", level="ERROR")
        return EXIT_FAILURE

    try:
        if command == "set-amount":
            current = session.begin_amount_edit(target)
            session.update_draft(args.amount)
            question = (
                f"Set amount of record {target.id} ({target.record.acct_name}, "
                f"{target.record.date}) from {current or 'N/A'} to {args.amount}?"
            )
            if not args.yes and not confirm(question):
                session.cancel_amount_edit()
                print("Cancelled.")
                return EXIT_OK
            return _finish(await session.commit_amount_edit(controller))

        if command == "mark-paid":
            session.begin_paid_confirmation(target)
            question = (
                f"Mark record {target.id} ({target.record.acct_name}, "
                f"{format_money(target.record.amount)}) as paid? This cannot be undone."
            )
            if not args.yes and not confirm(question):
                session.cancel_paid_confirmation()
                print("Cancelled.")
                return EXIT_OK
            return _finish(await session.commit_paid_confirmation(controller))
    except EditSessionError as e:
        await manager.notifier.send(str(e), level="ERROR")
        return EXIT_FAILURE

    raise ValueError(f"Unknown command: {command}")


async def main(argv: Sequence[str] | None = None) -> int:
    """CLI 메인 함수"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        Defaults.PROCESS_NAME,
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        to_file=not args.no_log_file,
    )

    try:
        settings = get_settings(args.config)
    except SettingsLoadError as e:
        logger.error(f"설정 로드 실패: {e}")
        return EXIT_CONFIG_ERROR

    async with create_manager(settings) as manager:
        return await run_command(args, manager)


def run() -> None:
    """console_scripts 진입점"""
    sys.exit(asyncio.run(main()))
