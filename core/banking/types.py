"""
은행 도메인 타입

은행 계좌, 은행 거래. 모든 금액은 Decimal.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from core.types import TransactionType


@dataclass(frozen=True)
class BankAccount:
    """은행 계좌

    current_balance는 서버가 관리. 클라이언트는 대사 계산에 읽기만 함.
    """

    id: int
    account_name: str
    opening_balance: Decimal
    current_balance: Decimal
    account_number: str = ""
    bank_name: str = ""
    account_type: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class BankTransaction:
    """은행 거래

    is_reconciled는 false → true 단방향 (대사 취소 없음).
    """

    id: int
    bank_account_id: int
    transaction_type: TransactionType
    amount: Decimal
    transaction_date: datetime | None = None
    description: str = ""
    reference: str | None = None
    is_reconciled: bool = False

    @property
    def signed_amount(self) -> Decimal:
        """입금은 +, 그 외(출금/이체)는 -"""
        if self.transaction_type == TransactionType.DEPOSIT:
            return self.amount
        return -self.amount
