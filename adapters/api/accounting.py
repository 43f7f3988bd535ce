"""
회계 API 서비스 (/accounting)

계정 과목, 분개, 시산표.
분개 생성/수정은 로컬 균형 검증을 통과해야만 서버로 전송.
"""

import logging
from typing import Any

from adapters.api.schemas import (
    AccountSchema,
    JournalEntryPage,
    JournalEntrySchema,
    Pagination,
    TrialBalanceRowSchema,
)
from adapters.interfaces import IApiClient
from core.constants import Defaults
from core.ledger.types import JournalEntry, TrialBalanceRow
from core.ledger.validator import LedgerBalance, LedgerBalanceValidator

logger = logging.getLogger(__name__)


class AccountingService:
    """회계 API 서비스

    Args:
        api: REST 클라이언트
        validator: 분개 균형 검증기 (None이면 기본 검증기)
    """

    def __init__(self, api: IApiClient, validator: LedgerBalanceValidator | None = None):
        self.api = api
        self.validator = validator or LedgerBalanceValidator()

    # -------------------------------------------------------------------------
    # 계정 과목
    # -------------------------------------------------------------------------

    async def get_accounts(self, **params: Any) -> list[AccountSchema]:
        """계정 과목 목록"""
        response = await self.api.fetch("GET", "/accounting/accounts", list[AccountSchema], params=params)
        return response.data

    async def get_account(self, account_id: int) -> AccountSchema:
        """계정 과목 조회"""
        response = await self.api.fetch("GET", f"/accounting/accounts/{account_id}", AccountSchema)
        return response.data

    async def create_account(self, account_data: dict[str, Any]) -> AccountSchema:
        """계정 과목 생성"""
        response = await self.api.fetch("POST", "/accounting/accounts", AccountSchema, json=account_data)
        return response.data

    async def update_account(self, account_id: int, account_data: dict[str, Any]) -> AccountSchema:
        """계정 과목 수정"""
        response = await self.api.fetch(
            "PUT", f"/accounting/accounts/{account_id}", AccountSchema, json=account_data
        )
        return response.data

    async def get_account_types(self) -> list[str]:
        """계정 유형 목록"""
        response = await self.api.fetch("GET", "/accounting/accounts/types", list[str])
        return response.data

    # -------------------------------------------------------------------------
    # 분개
    # -------------------------------------------------------------------------

    async def get_journal_entries(
        self,
        page: int = 1,
        limit: int = Defaults.PAGE_SIZE,
    ) -> tuple[list[JournalEntry], Pagination]:
        """분개 목록 (페이지)"""
        response = await self.api.fetch(
            "GET",
            "/accounting/journal-entries",
            JournalEntryPage,
            params={"page": page, "limit": limit},
        )
        result: JournalEntryPage = response.data
        return [entry.to_domain() for entry in result.journal_entries], result.pagination

    async def get_journal_entry(self, entry_id: int) -> JournalEntry:
        """분개 조회"""
        response = await self.api.fetch("GET", f"/accounting/journal-entries/{entry_id}", JournalEntrySchema)
        return response.data.to_domain()

    def check_journal_entry(self, entry: JournalEntry) -> LedgerBalance:
        """제출 전 로컬 검증

        Raises:
            JournalEntryPostedError: 이미 전기된 분개
            LedgerValidationError: 항목 부족 또는 불균형
        """
        entry.ensure_mutable()
        return self.validator.validate(entry.ledger_entries)

    async def create_journal_entry(self, entry: JournalEntry) -> JournalEntry:
        """분개 생성

        로컬 검증 실패 시 요청하지 않고 예외 발생.
        검증은 유효 항목 기준이며, 빈 줄도 제외하고 전송.
        """
        self.check_journal_entry(entry)
        payload = entry.to_payload()
        payload["ledger_entries"] = [
            line.to_payload() for line in self.validator.valid_entries(entry.ledger_entries)
        ]

        response = await self.api.fetch(
            "POST", "/accounting/journal-entries", JournalEntrySchema, json=payload
        )
        created = response.data.to_domain()
        logger.info(
            "분개 생성 완료",
            extra={"entry_number": created.entry_number, "id": created.id},
        )
        return created

    async def post_journal_entry(self, entry: JournalEntry) -> JournalEntry:
        """분개 전기 (draft → posted)

        이미 전기된 분개는 요청하지 않고 JournalEntryPostedError.
        """
        entry.ensure_mutable()
        if entry.id is None:
            raise ValueError("저장되지 않은 분개는 전기할 수 없습니다")

        response = await self.api.fetch(
            "PATCH", f"/accounting/journal-entries/{entry.id}/post", JournalEntrySchema
        )
        posted = response.data.to_domain()
        logger.info("분개 전기 완료", extra={"entry_number": posted.entry_number})
        return posted

    # -------------------------------------------------------------------------
    # 시산표
    # -------------------------------------------------------------------------

    async def get_trial_balance(self) -> list[TrialBalanceRow]:
        """시산표 (전기된 분개 기준)"""
        response = await self.api.fetch("GET", "/accounting/trial-balance", list[TrialBalanceRowSchema])
        return [row.to_domain() for row in response.data]
