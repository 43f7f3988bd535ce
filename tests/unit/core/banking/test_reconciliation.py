"""
은행 대사 계산기 테스트

- 선택 순액: 입금 +, 출금/이체 -
- 조정 잔액 = 장부 잔액 - 선택 순액
- 차액 = 명세서 잔액 - 조정 잔액 (명세서 잔액 입력 시만)
"""

from decimal import Decimal

import pytest

from core.banking.reconciliation import (
    ReconciliationCalculator,
    ReconciliationSelectionError,
    Selection,
)
from core.banking.types import BankTransaction
from core.types import TransactionType


def tx(transaction_id: int, kind: TransactionType, amount: str) -> BankTransaction:
    return BankTransaction(
        id=transaction_id,
        bank_account_id=1,
        transaction_type=kind,
        amount=Decimal(amount),
    )


@pytest.fixture
def calculator() -> ReconciliationCalculator:
    return ReconciliationCalculator()


@pytest.fixture
def transactions() -> list[BankTransaction]:
    return [
        tx(1, TransactionType.DEPOSIT, "200.00"),
        tx(2, TransactionType.WITHDRAWAL, "50.00"),
        tx(3, TransactionType.TRANSFER, "100.00"),
    ]


class TestSignedAmount:
    """거래 부호 테스트"""

    def test_deposit_positive(self) -> None:
        """입금은 양수"""
        assert tx(1, TransactionType.DEPOSIT, "10").signed_amount == Decimal("10")

    @pytest.mark.parametrize("kind", [TransactionType.WITHDRAWAL, TransactionType.TRANSFER])
    def test_other_types_negative(self, kind: TransactionType) -> None:
        """출금/이체는 음수"""
        assert tx(1, kind, "10").signed_amount == Decimal("-10")


class TestCalculate:
    """calculate 테스트"""

    def test_no_selection_keeps_book_balance(
        self,
        calculator: ReconciliationCalculator,
        transactions: list[BankTransaction],
    ) -> None:
        """선택 없음 → 조정 잔액 = 장부 잔액"""
        summary = calculator.calculate("1000.00", [], transactions)

        assert summary.selected_amount == Decimal("0")
        assert summary.adjusted_balance == Decimal("1000.00")
        assert summary.unreconciled_count == 3

    def test_mixed_selection(
        self,
        calculator: ReconciliationCalculator,
        transactions: list[BankTransaction],
    ) -> None:
        """입금 200 + 출금 50 선택 → 순액 150, 조정 잔액 850"""
        summary = calculator.calculate(
            Decimal("1000.00"), [1, 2], transactions, statement_balance="850.00"
        )

        assert summary.selected_amount == Decimal("150.00")
        assert summary.adjusted_balance == Decimal("850.00")
        assert summary.difference == Decimal("0.00")
        assert summary.is_reconciled is True

    def test_transfer_counts_as_outflow(
        self,
        calculator: ReconciliationCalculator,
        transactions: list[BankTransaction],
    ) -> None:
        """이체는 출금으로 계산"""
        summary = calculator.calculate("1000", [3], transactions)
        assert summary.adjusted_balance == Decimal("1100")

    def test_no_statement_balance(
        self,
        calculator: ReconciliationCalculator,
        transactions: list[BankTransaction],
    ) -> None:
        """명세서 잔액 없음 → 차액 None, 미대사"""
        for statement in (None, "", "  "):
            summary = calculator.calculate("1000", [1], transactions, statement_balance=statement)
            assert summary.difference is None
            assert summary.has_statement is False
            assert summary.is_reconciled is False

    @pytest.mark.parametrize("statement", ["abc", "NaN", "12x"])
    def test_unparseable_statement_never_reconciles(
        self,
        calculator: ReconciliationCalculator,
        statement: str,
    ) -> None:
        """숫자가 아닌 명세서 잔액은 0이 아니라 미입력으로 취급"""
        summary = calculator.calculate("0", [], [], statement_balance=statement)

        assert summary.statement_balance is None
        assert summary.difference is None
        assert summary.is_reconciled is False

    def test_zero_statement_is_a_value(
        self,
        calculator: ReconciliationCalculator,
    ) -> None:
        """명세서 잔액 "0"은 유효한 입력"""
        summary = calculator.calculate("0", [], [], statement_balance="0")

        assert summary.difference == Decimal("0")
        assert summary.is_reconciled is True

    def test_difference_sign(
        self,
        calculator: ReconciliationCalculator,
        transactions: list[BankTransaction],
    ) -> None:
        """차액 = 명세서 - 조정 잔액 (부호 유지)"""
        summary = calculator.calculate("1000", [], transactions, statement_balance="990")
        assert summary.difference == Decimal("-10")
        assert summary.is_reconciled is False

    def test_difference_within_epsilon(
        self,
        calculator: ReconciliationCalculator,
        transactions: list[BankTransaction],
    ) -> None:
        """0.01 미만 차이는 대사 완료"""
        summary = calculator.calculate("1000", [], transactions, statement_balance="1000.009")
        assert summary.is_reconciled is True

        summary = calculator.calculate("1000", [], transactions, statement_balance="1000.01")
        assert summary.is_reconciled is False

    def test_unknown_ids_ignored(
        self,
        calculator: ReconciliationCalculator,
        transactions: list[BankTransaction],
    ) -> None:
        """목록에 없는 ID는 무시"""
        summary = calculator.calculate("1000", [1, 99], transactions)

        assert summary.selected_amount == Decimal("200.00")
        assert summary.selected_count == 1

    def test_toggle_in_and_out_restores_amount(
        self,
        calculator: ReconciliationCalculator,
        transactions: list[BankTransaction],
    ) -> None:
        """선택 후 해제하면 이전 순액으로 복귀"""
        selection = Selection([1])
        before = calculator.calculate("1000", selection.ids, transactions).selected_amount

        selection.toggle(2)
        selection.toggle(2)
        after = calculator.calculate("1000", selection.ids, transactions).selected_amount

        assert before == after


class TestSelection:
    """Selection 테스트"""

    def test_toggle(self) -> None:
        """토글 결과 반환"""
        selection = Selection()
        assert selection.toggle(5) is True
        assert 5 in selection
        assert selection.toggle(5) is False
        assert len(selection) == 0

    def test_initial_ids_deduplicated(self) -> None:
        """중복 ID 제거, 순서 유지"""
        assert Selection([3, 1, 3]).ids == (3, 1)

    def test_toggle_all(self) -> None:
        """전체 선택 → 다시 누르면 전체 해제"""
        selection = Selection([1])
        selection.toggle_all([1, 2, 3])
        assert selection.ids == (1, 2, 3)

        selection.toggle_all([1, 2, 3])
        assert selection.ids == ()

    def test_iterable(self) -> None:
        """반복 시 선택 순서"""
        assert list(Selection([2, 1])) == [2, 1]

    def test_require_any_empty(self) -> None:
        """선택 없음 → 에러"""
        with pytest.raises(ReconciliationSelectionError, match="Please select transactions to reconcile"):
            Selection().require_any()

    def test_clear(self) -> None:
        """선택 해제"""
        selection = Selection([1, 2])
        selection.clear()
        assert selection.ids == ()
