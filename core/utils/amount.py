"""
금액 유틸리티

사용자 입력 금액 파싱, 입출금 부호 변환, 코멘트 검증, 표시 포맷.
모든 금액은 Decimal 사용 (float 금지).
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from core.constants import Defaults, MAX_COMMENT_LENGTH
from core.types import TransactionKind


# 표시용 소수점 자리 (센트 단위)
CENT = Decimal("0.01")


class AmountParseError(ValueError):
    """금액 파싱 실패

    네트워크 호출 전에 로컬에서 검증 실패 시 발생.
    """

    def __init__(self, raw: Any):
        self.raw = raw
        super().__init__(f"Invalid amount: {raw!r}")


class CommentTooLongError(ValueError):
    """코멘트 길이 초과 (최대 MAX_COMMENT_LENGTH자)"""

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"Comment is {length} characters, maximum is {MAX_COMMENT_LENGTH}"
        )


def parse_amount(raw: Any) -> Decimal:
    """사용자 입력을 Decimal 금액으로 변환

    빈 문자열, 숫자가 아닌 문자열, NaN/Infinity, 센트 단위로
    표현할 수 없는 크기 (예: 1e30)는 모두 거부.
    0은 유효한 금액.

    Args:
        raw: 문자열, int, Decimal 등

    Returns:
        Decimal 금액

    Raises:
        AmountParseError: 숫자로 해석할 수 없는 경우
    """
    if raw is None or isinstance(raw, bool):
        raise AmountParseError(raw)

    if isinstance(raw, Decimal):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            raise AmountParseError(raw)
        try:
            value = Decimal(text)
        except InvalidOperation as e:
            raise AmountParseError(raw) from e

    if not value.is_finite():
        raise AmountParseError(raw)

    # 센트 단위로 표현할 수 없는 크기 (기본 정밀도 28자리 초과)
    try:
        value.quantize(CENT)
    except InvalidOperation as e:
        raise AmountParseError(raw) from e

    return value


def parse_optional_amount(raw: Any) -> Decimal | None:
    """API 응답 금액 변환 (null 허용)

    None은 "금액 미정"으로 그대로 유지. 0과 구분됨.
    """
    if raw is None:
        return None
    return parse_amount(raw)


def signed_offset(kind: TransactionKind | str, magnitude: Decimal) -> Decimal:
    """입출금 종류에 따라 부호가 적용된 offset 반환

    - 입금: +|magnitude|
    - 출금: -|magnitude|
    """
    kind = TransactionKind(kind)
    if kind == TransactionKind.WITHDRAW:
        return -abs(magnitude)
    return abs(magnitude)


def validate_comment(comment: str | None) -> str:
    """잔고 변경 코멘트 검증

    Returns:
        정규화된 코멘트 (None이면 빈 문자열)

    Raises:
        CommentTooLongError: MAX_COMMENT_LENGTH 초과 시
    """
    comment = comment or ""
    if len(comment) > MAX_COMMENT_LENGTH:
        raise CommentTooLongError(len(comment))
    return comment


def format_money(value: Decimal | None, empty: str = "N/A") -> str:
    """금액 표시 포맷 ($1,234.50 / -$12.00)

    Args:
        value: 금액 (None이면 empty 반환)
        empty: 금액 없음 표시 문자열
    """
    if value is None:
        return empty
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        quantized = value.quantize(CENT, rounding=ROUND_HALF_UP)
        magnitude = abs(quantized)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{Defaults.CURRENCY_SYMBOL}{magnitude:,.2f}"
