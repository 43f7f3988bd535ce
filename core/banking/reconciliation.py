"""
은행 대사 계산기

장부 잔액, 선택된 미대사 거래, 은행 명세서 잔액으로
조정 잔액과 차액을 계산. 순수 계산 (부수효과 없음).

실제 대사 처리는 BankingService.reconcile_transaction /
bulk_reconcile_transactions 에서 별도로 수행.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Iterator, Sequence

from core.banking.types import BankTransaction
from core.constants import Tolerances
from core.utils.amount import ZERO, parse_amount, try_parse_amount

logger = logging.getLogger(__name__)


class ReconciliationSelectionError(Exception):
    """대사할 거래를 선택하지 않고 일괄 대사를 요청한 경우"""

    def __init__(self, message: str = "Please select transactions to reconcile"):
        super().__init__(message)


@dataclass(frozen=True)
class ReconciliationSummary:
    """대사 계산 결과

    Attributes:
        book_balance: 장부 잔액 (계좌 current_balance)
        selected_amount: 선택 거래 순액 (입금 +, 출금 -)
        adjusted_balance: book_balance - selected_amount
        statement_balance: 명세서 잔액 (미입력 시 None)
        difference: statement_balance - adjusted_balance (미입력 시 None)
        is_reconciled: |difference| < 0.01 (미입력 시 항상 False)
        unreconciled_count: 미대사 거래 수
        selected_count: 실제 합산된 선택 거래 수
    """

    book_balance: Decimal
    selected_amount: Decimal
    adjusted_balance: Decimal
    statement_balance: Decimal | None
    difference: Decimal | None
    is_reconciled: bool
    unreconciled_count: int
    selected_count: int

    @property
    def has_statement(self) -> bool:
        """명세서 잔액 입력 여부"""
        return self.statement_balance is not None


def _parse_statement_balance(value: Any) -> Decimal | None:
    """명세서 잔액 파싱

    None/빈 문자열은 미입력. 숫자로 읽을 수 없는 입력도 0이 아니라
    미입력으로 취급하여 차액을 계산하지 않음.
    """
    statement = try_parse_amount(value)
    if statement is None and value is not None and str(value).strip():
        logger.warning("명세서 잔액 파싱 실패", extra={"raw": str(value)[:50]})
    return statement


class ReconciliationCalculator:
    """은행 대사 계산기

    사용 예시:
    ```python
    calculator = ReconciliationCalculator()
    summary = calculator.calculate(
        book_balance=account.current_balance,
        selected_ids=selection.ids,
        transactions=unreconciled,
        statement_balance="850.00",
    )
    if summary.is_reconciled:
        ...
    ```
    """

    EPSILON = Tolerances.BALANCE_EPSILON

    @staticmethod
    def selected_amount(
        selected_ids: Iterable[int],
        transactions: Sequence[BankTransaction],
    ) -> Decimal:
        """선택 거래 순액 계산

        목록에 없는 ID는 무시.
        """
        by_id = {transaction.id: transaction for transaction in transactions}
        total = ZERO
        for transaction_id in selected_ids:
            transaction = by_id.get(transaction_id)
            if transaction is not None:
                total += transaction.signed_amount
        return total

    def calculate(
        self,
        book_balance: Any,
        selected_ids: Iterable[int],
        transactions: Sequence[BankTransaction],
        statement_balance: Any = None,
    ) -> ReconciliationSummary:
        """대사 요약 계산

        Args:
            book_balance: 장부 잔액
            selected_ids: 선택된 미대사 거래 ID
            transactions: 전체 미대사 거래 목록
            statement_balance: 명세서 잔액 (문자열 허용, 빈 값이면 미입력)

        Returns:
            ReconciliationSummary
        """
        selected_ids = list(selected_ids)
        known_ids = {transaction.id for transaction in transactions}

        book = parse_amount(book_balance)
        selected = self.selected_amount(selected_ids, transactions)
        adjusted = book - selected

        statement = _parse_statement_balance(statement_balance)
        difference: Decimal | None = None
        is_reconciled = False
        if statement is not None:
            difference = statement - adjusted
            is_reconciled = abs(difference) < self.EPSILON

        return ReconciliationSummary(
            book_balance=book,
            selected_amount=selected,
            adjusted_balance=adjusted,
            statement_balance=statement,
            difference=difference,
            is_reconciled=is_reconciled,
            unreconciled_count=len(transactions),
            selected_count=sum(1 for i in selected_ids if i in known_ids),
        )


class Selection:
    """미대사 거래 선택 상태

    체크박스 토글과 전체 선택/해제. 선택 순서 유지.
    """

    def __init__(self, ids: Iterable[int] = ()):
        self._ids: list[int] = []
        for transaction_id in ids:
            if transaction_id not in self._ids:
                self._ids.append(transaction_id)

    @property
    def ids(self) -> tuple[int, ...]:
        """선택된 ID (선택 순서)"""
        return tuple(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self.ids)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._ids

    def toggle(self, transaction_id: int) -> bool:
        """선택 토글

        Returns:
            토글 후 선택 여부
        """
        if transaction_id in self._ids:
            self._ids.remove(transaction_id)
            return False
        self._ids.append(transaction_id)
        return True

    def toggle_all(self, all_ids: Sequence[int]) -> None:
        """전체 선택 토글

        이미 전체가 선택되어 있으면 해제, 아니면 전체 선택.
        """
        if len(self._ids) == len(all_ids) and set(self._ids) == set(all_ids):
            self._ids = []
        else:
            self._ids = list(dict.fromkeys(all_ids))

    def clear(self) -> None:
        """선택 해제"""
        self._ids = []

    def require_any(self) -> tuple[int, ...]:
        """일괄 대사 전 선택 여부 확인

        Raises:
            ReconciliationSelectionError: 선택된 거래가 없는 경우
        """
        if not self._ids:
            raise ReconciliationSelectionError()
        return self.ids
