"""
금액 파싱 유틸리티

폼/API에서 들어오는 금액은 문자열, 숫자, None이 섞여 있음.
합계 계산 전에 모두 Decimal로 통일하고, 파싱 실패는 0으로 처리하여
NaN이 합계로 전파되지 않도록 함.

문자열의 쉼표는 천 단위 구분자로 보고 제거함 ("1,234.50" → 1234.50).
따라서 "1,5"는 1.5가 아니라 15.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")


def try_parse_amount(value: Any) -> Decimal | None:
    """금액 값을 Decimal로 변환 (실패 시 None)

    사용자가 직접 입력한 값처럼 "입력 없음/잘못된 입력"을
    0과 구분해야 할 때 사용.

    Returns:
        변환된 Decimal. 빈 문자열/None/파싱 불가/NaN/Infinity는 None

    Example:
        >>> try_parse_amount("1,234.50")
        Decimal('1234.50')
        >>> try_parse_amount("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    else:
        # float는 str 경유 (이진 표현 오차 방지)
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None

    if not amount.is_finite():
        return None
    return amount


def parse_amount(value: Any) -> Decimal:
    """금액 값을 Decimal로 변환

    Args:
        value: Decimal, int, float, str 또는 None

    Returns:
        변환된 Decimal. 빈 문자열/None/파싱 불가/NaN/Infinity는 0

    Example:
        >>> parse_amount("100.50")
        Decimal('100.50')
        >>> parse_amount("")
        Decimal('0')
        >>> parse_amount("abc")
        Decimal('0')
    """
    amount = try_parse_amount(value)
    return ZERO if amount is None else amount


def format_amount(value: Any) -> str:
    """소수점 2자리 문자열로 포맷 (표시/내보내기용)

    Example:
        >>> format_amount("1234.5")
        '1234.50'
    """
    return str(parse_amount(value).quantize(CENT))
