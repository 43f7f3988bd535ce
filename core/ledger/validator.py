"""
분개 균형 검증기

분개 생성/수정 전에 차변 합계 = 대변 합계를 검증.
검증 결과가 불균형이면 제출 자체를 막음 (경고만 하지 않음).
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from core.constants import Tolerances
from core.ledger.types import LedgerEntry
from core.utils.amount import ZERO, parse_amount

logger = logging.getLogger(__name__)


MIN_LEDGER_ENTRIES = 2


class LedgerValidationError(Exception):
    """분개 검증 실패 (서버로 전송하지 않음)"""

    pass


class InsufficientEntriesError(LedgerValidationError):
    """유효 항목이 2개 미만

    균형 여부와 무관하게 먼저 검사됨.
    """

    def __init__(self, valid_count: int):
        self.valid_count = valid_count
        super().__init__("at least two ledger entries required")


class UnbalancedEntryError(LedgerValidationError):
    """차변/대변 합계 불일치"""

    def __init__(self, balance: "LedgerBalance"):
        self.balance = balance
        super().__init__(
            f"Journal entry is out of balance by {balance.difference} "
            f"(debits {balance.total_debits}, credits {balance.total_credits})"
        )


@dataclass(frozen=True)
class LedgerBalance:
    """분개 균형 계산 결과

    Attributes:
        total_debits: 유효 항목 차변 합계
        total_credits: 유효 항목 대변 합계
        is_balanced: |차변 - 대변| < 0.01
        difference: |차변 - 대변| (항상 0 이상)
        valid_count: 합계에 포함된 유효 항목 수
    """

    total_debits: Decimal
    total_credits: Decimal
    is_balanced: bool
    difference: Decimal
    valid_count: int


class LedgerBalanceValidator:
    """분개 균형 검증기

    계정 또는 금액이 빠진 항목(작성 중인 빈 줄)은 합계 전에 제외.
    허용 오차는 0.01 고정 (설정 불가).

    사용 예시:
    ```python
    validator = LedgerBalanceValidator()
    result = validator.summarize(entries)
    if not result.is_balanced:
        print(f"차액: {result.difference}")

    validator.validate(entries)  # 실패 시 LedgerValidationError
    ```
    """

    EPSILON = Tolerances.BALANCE_EPSILON

    @staticmethod
    def valid_entries(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
        """계정과 금액이 모두 있는 항목만 반환 (입력 순서 유지)"""
        return [entry for entry in entries if entry.is_complete]

    def summarize(self, entries: Iterable[LedgerEntry]) -> LedgerBalance:
        """차변/대변 합계 및 균형 여부 계산

        Args:
            entries: 분개 항목 목록 (순서 무관)

        Returns:
            LedgerBalance
        """
        valid = self.valid_entries(entries)

        total_debits = sum((parse_amount(entry.debit) for entry in valid), ZERO)
        total_credits = sum((parse_amount(entry.credit) for entry in valid), ZERO)
        difference = abs(total_debits - total_credits)

        return LedgerBalance(
            total_debits=total_debits,
            total_credits=total_credits,
            is_balanced=difference < self.EPSILON,
            difference=difference,
            valid_count=len(valid),
        )

    def validate(self, entries: Iterable[LedgerEntry]) -> LedgerBalance:
        """제출 가능 여부 검증

        Args:
            entries: 분개 항목 목록

        Returns:
            검증 통과한 LedgerBalance

        Raises:
            InsufficientEntriesError: 유효 항목 2개 미만 (균형 검사보다 먼저)
            UnbalancedEntryError: 차변/대변 불일치
        """
        balance = self.summarize(entries)

        if balance.valid_count < MIN_LEDGER_ENTRIES:
            raise InsufficientEntriesError(balance.valid_count)

        if not balance.is_balanced:
            logger.debug(
                "분개 불균형",
                extra={
                    "total_debits": str(balance.total_debits),
                    "total_credits": str(balance.total_credits),
                },
            )
            raise UnbalancedEntryError(balance)

        return balance

    def can_submit(self, entries: Iterable[LedgerEntry]) -> bool:
        """생성/수정 버튼 활성화 여부"""
        try:
            self.validate(entries)
        except LedgerValidationError:
            return False
        return True
