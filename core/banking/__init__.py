"""
은행 도메인

은행 계좌/거래 타입과 대사 계산기
"""

from core.banking.reconciliation import (
    ReconciliationCalculator,
    ReconciliationSelectionError,
    ReconciliationSummary,
    Selection,
)
from core.banking.types import BankAccount, BankTransaction

__all__ = [
    "BankAccount",
    "BankTransaction",
    "ReconciliationCalculator",
    "ReconciliationSummary",
    "ReconciliationSelectionError",
    "Selection",
]
