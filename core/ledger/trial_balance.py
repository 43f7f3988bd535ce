"""
시산표 집계

서버가 반환한 계정별 합계로 전체 차변/대변 합계와 균형 여부 계산
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from core.constants import Tolerances
from core.ledger.types import TrialBalanceRow
from core.utils.amount import ZERO


@dataclass(frozen=True)
class TrialBalanceSummary:
    """시산표 합계"""

    total_debits: Decimal
    total_credits: Decimal
    is_balanced: bool
    difference: Decimal


def summarize_trial_balance(rows: Iterable[TrialBalanceRow]) -> TrialBalanceSummary:
    """시산표 합계 계산

    Args:
        rows: 시산표 행 목록

    Returns:
        TrialBalanceSummary (허용 오차 0.01)
    """
    rows = list(rows)
    total_debits = sum((row.debit for row in rows), ZERO)
    total_credits = sum((row.credit for row in rows), ZERO)
    difference = abs(total_debits - total_credits)

    return TrialBalanceSummary(
        total_debits=total_debits,
        total_credits=total_credits,
        is_balanced=difference < Tolerances.BALANCE_EPSILON,
        difference=difference,
    )


def group_by_account_type(
    rows: Iterable[TrialBalanceRow],
) -> dict[str, list[TrialBalanceRow]]:
    """계정 유형별 그룹핑 (유형 등장 순서, 행 순서 유지)"""
    grouped: dict[str, list[TrialBalanceRow]] = {}
    for row in rows:
        grouped.setdefault(row.account_type, []).append(row)
    return grouped
