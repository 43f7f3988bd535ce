"""
은행 API 서비스 (/banking)

계좌, 거래, 대사, 이체, 통계.
"""

import logging
from typing import Any, Iterable

from adapters.api.schemas import (
    BalanceHistoryPoint,
    BankAccountPage,
    BankAccountSchema,
    BankingStats,
    BankTransactionPage,
    BankTransactionSchema,
    CashFlowSummary,
    Pagination,
    TransferResult,
)
from adapters.interfaces import IApiClient
from core.banking.reconciliation import (
    ReconciliationCalculator,
    ReconciliationSelectionError,
    ReconciliationSummary,
)
from core.banking.types import BankAccount, BankTransaction
from core.constants import Defaults
from core.utils.amount import try_parse_amount

logger = logging.getLogger(__name__)


class BankingService:
    """은행 API 서비스

    Args:
        api: REST 클라이언트
        calculator: 대사 계산기 (None이면 기본 계산기)
    """

    def __init__(self, api: IApiClient, calculator: ReconciliationCalculator | None = None):
        self.api = api
        self.calculator = calculator or ReconciliationCalculator()

    # -------------------------------------------------------------------------
    # 계좌
    # -------------------------------------------------------------------------

    async def get_bank_accounts(
        self,
        page: int = 1,
        limit: int = Defaults.PAGE_SIZE,
    ) -> tuple[list[BankAccount], Pagination]:
        """은행 계좌 목록 (페이지)"""
        response = await self.api.fetch(
            "GET", "/banking/accounts", BankAccountPage, params={"page": page, "limit": limit}
        )
        result: BankAccountPage = response.data
        return [account.to_domain() for account in result.bank_accounts], result.pagination

    async def get_bank_account(self, account_id: int) -> BankAccount:
        """은행 계좌 조회"""
        response = await self.api.fetch("GET", f"/banking/accounts/{account_id}", BankAccountSchema)
        return response.data.to_domain()

    async def create_bank_account(self, account_data: dict[str, Any]) -> BankAccount:
        """은행 계좌 생성"""
        response = await self.api.fetch("POST", "/banking/accounts", BankAccountSchema, json=account_data)
        return response.data.to_domain()

    async def update_bank_account(self, account_id: int, account_data: dict[str, Any]) -> BankAccount:
        """은행 계좌 수정

        current_balance는 서버 관리 값이므로 요청에서 제외.
        """
        payload = {k: v for k, v in account_data.items() if k != "current_balance"}
        response = await self.api.fetch(
            "PUT", f"/banking/accounts/{account_id}", BankAccountSchema, json=payload
        )
        return response.data.to_domain()

    async def delete_bank_account(self, account_id: int) -> None:
        """은행 계좌 삭제 (거래가 있으면 서버가 비활성화 처리)"""
        await self.api.send("DELETE", f"/banking/accounts/{account_id}")

    # -------------------------------------------------------------------------
    # 거래
    # -------------------------------------------------------------------------

    async def get_transactions(
        self,
        bank_account_id: int | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[BankTransaction], Pagination]:
        """은행 거래 목록 (페이지)"""
        response = await self.api.fetch(
            "GET",
            "/banking/transactions",
            BankTransactionPage,
            params={"bank_account_id": bank_account_id, "page": page, "limit": limit},
        )
        result: BankTransactionPage = response.data
        return [t.to_domain() for t in result.transactions], result.pagination

    async def create_transaction(self, transaction_data: dict[str, Any]) -> BankTransaction:
        """은행 거래 생성 (금액은 0보다 커야 함)"""
        amount = try_parse_amount(transaction_data.get("amount"))
        if amount is None or amount <= 0:
            raise ValueError("거래 금액은 0보다 커야 합니다")

        payload = dict(transaction_data)
        payload["amount"] = str(amount)
        response = await self.api.fetch(
            "POST", "/banking/transactions", BankTransactionSchema, json=payload
        )
        return response.data.to_domain()

    async def get_unreconciled_transactions(
        self,
        account_id: int | None = None,
    ) -> list[BankTransaction]:
        """미대사 거래 목록"""
        params = {"account_id": account_id} if account_id is not None else None
        response = await self.api.fetch(
            "GET", "/banking/transactions/unreconciled", list[BankTransactionSchema], params=params
        )
        return [t.to_domain() for t in response.data]

    # -------------------------------------------------------------------------
    # 대사
    # -------------------------------------------------------------------------

    async def reconcile_transaction(self, transaction_id: int) -> BankTransaction:
        """거래 하나 대사 처리"""
        response = await self.api.fetch(
            "PATCH", f"/banking/transactions/{transaction_id}/reconcile", BankTransactionSchema
        )
        logger.info("거래 대사 완료", extra={"transaction_id": transaction_id})
        return response.data.to_domain()

    async def bulk_reconcile_transactions(self, transaction_ids: Iterable[int]) -> int:
        """선택 거래 일괄 대사

        호출자 입장에서는 전부 성공 또는 전부 실패.
        실패 시 ApiError를 그대로 전파 (부분 성공 처리 없음).

        Returns:
            대사 처리 요청한 거래 수

        Raises:
            ReconciliationSelectionError: 선택된 거래가 없는 경우 (요청 안 함)
            ApiError: 서버 실패
        """
        ids = list(dict.fromkeys(transaction_ids))
        if not ids:
            raise ReconciliationSelectionError()

        await self.api.send(
            "PATCH", "/banking/transactions/bulk-reconcile", json={"transactionIds": ids}
        )
        logger.info("일괄 대사 완료", extra={"count": len(ids)})
        return len(ids)

    async def build_reconciliation(
        self,
        account_id: int,
        selected_ids: Iterable[int] = (),
        statement_balance: Any = None,
    ) -> tuple[BankAccount, list[BankTransaction], ReconciliationSummary]:
        """계좌 + 미대사 거래 조회 후 대사 요약 계산

        Returns:
            (계좌, 미대사 거래 목록, 대사 요약)
        """
        account = await self.get_bank_account(account_id)
        transactions = await self.get_unreconciled_transactions(account_id)
        summary = self.calculator.calculate(
            book_balance=account.current_balance,
            selected_ids=selected_ids,
            transactions=transactions,
            statement_balance=statement_balance,
        )
        return account, transactions, summary

    # -------------------------------------------------------------------------
    # 이체 / 통계
    # -------------------------------------------------------------------------

    async def transfer_between_accounts(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: Any,
        description: str = "",
    ) -> tuple[BankTransaction, BankTransaction]:
        """계좌 간 이체

        Returns:
            (출금 거래, 입금 거래)
        """
        if from_account_id == to_account_id:
            raise ValueError("같은 계좌로는 이체할 수 없습니다")
        transfer_amount = try_parse_amount(amount)
        if transfer_amount is None or transfer_amount <= 0:
            raise ValueError("이체 금액은 0보다 커야 합니다")

        response = await self.api.fetch(
            "POST",
            "/banking/transactions/transfer",
            TransferResult,
            json={
                "fromAccountId": from_account_id,
                "toAccountId": to_account_id,
                "amount": str(transfer_amount),
                "description": description,
            },
        )
        result: TransferResult = response.data
        return result.withdrawal.to_domain(), result.deposit.to_domain()

    async def get_account_balance_history(self, account_id: int, days: int = 30) -> list[BalanceHistoryPoint]:
        """일별 잔액 추이"""
        response = await self.api.fetch(
            "GET",
            f"/banking/accounts/{account_id}/balance-history",
            list[BalanceHistoryPoint],
            params={"days": days},
        )
        return response.data

    async def get_cash_flow_summary(self, account_id: int, period: str = "month") -> CashFlowSummary:
        """기간별 현금 흐름 (week/month/year)"""
        response = await self.api.fetch(
            "GET",
            f"/banking/accounts/{account_id}/cash-flow",
            CashFlowSummary,
            params={"period": period},
        )
        return response.data

    async def get_banking_stats(self) -> BankingStats:
        """은행 통계"""
        response = await self.api.fetch("GET", "/banking/accounts/stats", BankingStats)
        return response.data
