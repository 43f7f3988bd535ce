"""
복식부기 타입 테스트

LedgerEntry 폼 파싱, JournalEntry draft → posted 전이
"""

import re
from datetime import date
from decimal import Decimal

import pytest

from core.ledger.types import (
    JournalEntry,
    JournalEntryPostedError,
    LedgerEntry,
    TrialBalanceRow,
    generate_entry_number,
)


@pytest.fixture
def draft_entry() -> JournalEntry:
    return JournalEntry.draft(
        entry_date=date(2026, 10, 19),
        description="Rent",
        ledger_entries=[
            LedgerEntry.from_form(5, debit="1200"),
            LedgerEntry.from_form(1, credit="1200"),
        ],
        reference="LEASE-10",
    )


class TestLedgerEntry:
    """LedgerEntry 테스트"""

    def test_from_form_parses_strings(self) -> None:
        """문자열 금액 파싱"""
        entry = LedgerEntry.from_form("7", debit="12.5", description="x")
        assert entry.account_id == "7"
        assert entry.debit == Decimal("12.5")
        assert entry.credit == Decimal("0")

    def test_blank_account_is_none(self) -> None:
        """빈 계정 선택은 None"""
        assert LedgerEntry.from_form("", debit="1").account_id is None

    def test_is_complete(self) -> None:
        """계정 + 금액이 있어야 완성"""
        assert LedgerEntry.from_form(1, credit="3").is_complete is True
        assert LedgerEntry.from_form(1).is_complete is False
        assert LedgerEntry.from_form(None, debit="3").is_complete is False

    def test_amount_property(self) -> None:
        """차변/대변 중 값이 있는 쪽"""
        assert LedgerEntry.from_form(1, credit="8").amount == Decimal("8")

    def test_payload_amounts_are_strings(self) -> None:
        """요청 본문 금액은 문자열 (정밀도 유지)"""
        payload = LedgerEntry.from_form(1, debit="0.10").to_payload()
        assert payload == {"account_id": 1, "description": "", "debit": "0.10", "credit": "0"}


class TestJournalEntryLifecycle:
    """분개 draft → posted 테스트"""

    def test_draft_generates_entry_number(self, draft_entry: JournalEntry) -> None:
        """분개 번호 자동 생성"""
        assert re.fullmatch(r"JE-20261019-[0-9a-f]{6}", draft_entry.entry_number)
        assert draft_entry.is_posted is False

    def test_entry_numbers_are_unique(self) -> None:
        """같은 날짜라도 번호는 다름"""
        numbers = {generate_entry_number(date(2026, 1, 1)) for _ in range(50)}
        assert len(numbers) == 50

    def test_post_returns_posted_copy(self, draft_entry: JournalEntry) -> None:
        """전기 시 새 객체 반환, 원본 불변"""
        posted = draft_entry.post()

        assert posted.is_posted is True
        assert draft_entry.is_posted is False
        assert posted.entry_number == draft_entry.entry_number

    def test_post_twice_rejected(self, draft_entry: JournalEntry) -> None:
        """이미 전기된 분개는 다시 전기 불가"""
        posted = draft_entry.post()
        with pytest.raises(JournalEntryPostedError):
            posted.post()

    def test_posted_entry_cannot_be_edited(self, draft_entry: JournalEntry) -> None:
        """전기 후 항목 수정 불가"""
        posted = draft_entry.post()
        with pytest.raises(JournalEntryPostedError, match="already posted"):
            posted.with_entries([])

    def test_draft_can_be_edited(self, draft_entry: JournalEntry) -> None:
        """draft는 항목 교체 가능"""
        updated = draft_entry.with_entries([LedgerEntry.from_form(1, debit="5")])
        assert len(updated.ledger_entries) == 1

    def test_payload(self, draft_entry: JournalEntry) -> None:
        """요청 본문 형식"""
        payload = draft_entry.to_payload()

        assert payload["date"] == "2026-10-19"
        assert payload["reference"] == "LEASE-10"
        assert len(payload["ledger_entries"]) == 2


class TestTrialBalanceRow:
    """TrialBalanceRow 테스트"""

    def test_balance_is_debit_minus_credit(self) -> None:
        """잔액 = 차변 - 대변"""
        row = TrialBalanceRow(1, "1000", "Cash", "Asset", Decimal("500"), Decimal("120"))
        assert row.balance == Decimal("380")
