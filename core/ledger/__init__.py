"""
복식부기 (Double-Entry Bookkeeping)

분개 작성 시 차변/대변 균형 검증, 시산표 집계.

사용 예시:
```python
from core.ledger import JournalEntry, LedgerEntry, LedgerBalanceValidator

entries = [
    LedgerEntry.from_form(account_id=1, debit="100"),
    LedgerEntry.from_form(account_id=2, credit="100"),
]

validator = LedgerBalanceValidator()
validator.validate(entries)  # 실패 시 LedgerValidationError

draft = JournalEntry.draft(date.today(), "Office supplies", entries)
```
"""

from core.ledger.trial_balance import (
    TrialBalanceSummary,
    group_by_account_type,
    summarize_trial_balance,
)
from core.ledger.types import (
    JournalEntry,
    JournalEntryPostedError,
    LedgerEntry,
    TrialBalanceRow,
    generate_entry_number,
)
from core.ledger.validator import (
    InsufficientEntriesError,
    LedgerBalance,
    LedgerBalanceValidator,
    LedgerValidationError,
    UnbalancedEntryError,
)

__all__ = [
    # 타입
    "JournalEntry",
    "LedgerEntry",
    "TrialBalanceRow",
    "generate_entry_number",
    # 검증
    "LedgerBalanceValidator",
    "LedgerBalance",
    "LedgerValidationError",
    "InsufficientEntriesError",
    "UnbalancedEntryError",
    "JournalEntryPostedError",
    # 시산표
    "TrialBalanceSummary",
    "summarize_trial_balance",
    "group_by_account_type",
]
