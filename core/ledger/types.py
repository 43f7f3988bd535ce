"""
복식부기 타입 정의

분개(JournalEntry), 분개 항목(LedgerEntry), 시산표 행(TrialBalanceRow)
모든 금액은 Decimal 사용.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import uuid4

from core.utils.amount import ZERO, parse_amount


class JournalEntryPostedError(Exception):
    """이미 전기(post)된 분개를 수정/삭제/재전기하려 할 때 발생

    전기는 단방향 전이 (draft → posted). 되돌릴 수 없음.
    """

    def __init__(self, entry_number: str | None):
        self.entry_number = entry_number
        super().__init__(
            f"Journal entry {entry_number or '(unsaved)'} is already posted"
        )


@dataclass(frozen=True)
class LedgerEntry:
    """분개 항목 (차변 또는 대변 한 줄)

    debit/credit 중 하나만 0이 아닌 것이 정상 (UI 관례, 타입으로 강제하지 않음).
    폼에서 임시로 생성되고 제출/취소 시 폐기됨.

    Attributes:
        account_id: 계정 과목 ID (미선택이면 None)
        description: 적요
        debit: 차변 금액 (>= 0)
        credit: 대변 금액 (>= 0)
    """

    account_id: int | str | None
    description: str = ""
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @classmethod
    def from_form(
        cls,
        account_id: int | str | None,
        debit: Any = "",
        credit: Any = "",
        description: str = "",
    ) -> LedgerEntry:
        """폼 입력(문자열)에서 생성

        빈 문자열/파싱 불가 값은 0으로 처리.
        빈 account_id("")는 미선택(None)으로 간주.
        """
        return cls(
            account_id=account_id if account_id not in ("", None) else None,
            description=description or "",
            debit=parse_amount(debit),
            credit=parse_amount(credit),
        )

    @property
    def amount(self) -> Decimal:
        """이 항목의 금액 (차변 또는 대변 중 큰 값)"""
        return max(self.debit, self.credit)

    @property
    def is_complete(self) -> bool:
        """계정과 금액이 모두 입력되었는지 여부"""
        return self.account_id is not None and (self.debit > ZERO or self.credit > ZERO)

    def to_payload(self) -> dict[str, Any]:
        """API 요청 본문용 dict"""
        return {
            "account_id": self.account_id,
            "description": self.description,
            "debit": str(self.debit),
            "credit": str(self.credit),
        }


def generate_entry_number(on: date) -> str:
    """분개 번호 생성

    Returns:
        JE-{YYYYMMDD}-{6자리 hex} 형식 (예: JE-20261019-3f9a1c)
    """
    return f"JE-{on:%Y%m%d}-{uuid4().hex[:6]}"


@dataclass(frozen=True)
class JournalEntry:
    """분개

    하나의 거래에 대한 복식부기 기록.
    차변 합계 = 대변 합계 (균형), 최소 2개 항목.
    draft(수정 가능) → posted(불변) 단방향 전이.
    """

    entry_number: str
    date: date
    description: str
    ledger_entries: tuple[LedgerEntry, ...] = field(default_factory=tuple)
    reference: str | None = None
    is_posted: bool = False
    id: int | None = None

    @classmethod
    def draft(
        cls,
        entry_date: date,
        description: str,
        ledger_entries: list[LedgerEntry] | tuple[LedgerEntry, ...],
        reference: str | None = None,
        entry_number: str | None = None,
    ) -> JournalEntry:
        """새 draft 분개 생성 (분개 번호 미지정 시 자동 생성)"""
        return cls(
            entry_number=entry_number or generate_entry_number(entry_date),
            date=entry_date,
            description=description,
            ledger_entries=tuple(ledger_entries),
            reference=reference,
        )

    def ensure_mutable(self) -> None:
        """수정/삭제 가능 여부 확인

        Raises:
            JournalEntryPostedError: 이미 전기된 경우
        """
        if self.is_posted:
            raise JournalEntryPostedError(self.entry_number)

    def with_entries(self, ledger_entries: list[LedgerEntry]) -> JournalEntry:
        """항목을 교체한 새 분개 반환 (draft만 가능)"""
        self.ensure_mutable()
        return replace(self, ledger_entries=tuple(ledger_entries))

    def post(self) -> JournalEntry:
        """전기된 분개 반환

        Raises:
            JournalEntryPostedError: 이미 전기된 경우
        """
        self.ensure_mutable()
        return replace(self, is_posted=True)

    def to_payload(self) -> dict[str, Any]:
        """API 요청 본문용 dict (생성/수정)"""
        return {
            "entry_number": self.entry_number,
            "date": self.date.isoformat(),
            "description": self.description,
            "reference": self.reference,
            "ledger_entries": [entry.to_payload() for entry in self.ledger_entries],
        }


@dataclass(frozen=True)
class TrialBalanceRow:
    """시산표 한 행 (계정별 전기 분개 합계)"""

    account_id: int | str
    account_number: str
    account_name: str
    account_type: str
    debit: Decimal
    credit: Decimal

    @property
    def balance(self) -> Decimal:
        """잔액 (차변 - 대변)"""
        return self.debit - self.credit
