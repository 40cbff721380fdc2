"""
유틸리티 패키지

금액 파싱, 입출금 부호 변환, 표시 포맷 등 공통 유틸리티
"""

from core.utils.amount import (
    AmountParseError,
    CommentTooLongError,
    format_money,
    parse_amount,
    parse_optional_amount,
    signed_offset,
    validate_comment,
)

__all__ = [
    "AmountParseError",
    "CommentTooLongError",
    "format_money",
    "parse_amount",
    "parse_optional_amount",
    "signed_offset",
    "validate_comment",
]
