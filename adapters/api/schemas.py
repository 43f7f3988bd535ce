"""
응답 스키마 (Pydantic)

REST 응답을 엔드포인트별 스키마로 검증/변환.
서버 공통 응답 형식: {success, message?, data?, pagination?}

금액은 Decimal, 시간은 UTC datetime으로 변환.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.banking.types import BankAccount, BankTransaction
from core.ledger.types import JournalEntry, LedgerEntry, TrialBalanceRow
from core.notifications.store import Notification
from core.types import NotificationType, TransactionType
from core.utils.amount import parse_amount
from core.utils.timezone import ensure_utc, now_utc, parse_timestamp

T = TypeVar("T")


class ApiModel(BaseModel):
    """공통 설정: 알 수 없는 필드 무시, 별칭/필드명 모두 허용"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Pagination(ApiModel):
    """페이지 정보"""

    total: int = Field(default=0, description="전체 건수")
    page: int = Field(default=1, description="현재 페이지")
    limit: int = Field(default=10, description="페이지 크기")
    total_pages: int = Field(default=0, alias="totalPages", description="전체 페이지 수")


class ApiResponse(ApiModel, Generic[T]):
    """공통 응답 봉투

    봉투의 추가 필드(예: 보고서 실행의 saved_report)는 model_extra에 보존.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    success: bool = Field(default=True, description="성공 여부")
    message: str | None = Field(default=None, description="서버 메시지")
    data: T = Field(..., description="응답 데이터")
    pagination: Pagination | None = Field(default=None, description="페이지 정보")


class MessageResponse(ApiModel):
    """데이터 없는 응답 (예: 일괄 대사)"""

    success: bool = Field(default=True)
    message: str | None = Field(default=None)


# -----------------------------------------------------------------------------
# 회계 (/accounting)
# -----------------------------------------------------------------------------


class AccountSchema(ApiModel):
    """계정 과목"""

    id: int
    account_number: str = ""
    name: str = ""
    account_type: str | None = None
    description: str | None = None
    is_active: bool = True

    @field_validator("account_type", mode="before")
    @classmethod
    def _flatten_type(cls, value: Any) -> Any:
        # include 된 관계({id, name})로 올 수도 있음
        if isinstance(value, dict):
            return value.get("name")
        return value


class LedgerEntrySchema(ApiModel):
    """분개 항목"""

    id: int | None = None
    account_id: int | None = None
    description: str | None = None
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")

    @field_validator("debit", "credit", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal:
        return parse_amount(value)

    def to_domain(self) -> LedgerEntry:
        return LedgerEntry(
            account_id=self.account_id,
            description=self.description or "",
            debit=self.debit,
            credit=self.credit,
        )


class JournalEntrySchema(ApiModel):
    """분개"""

    id: int
    entry_number: str
    date: datetime
    description: str = ""
    reference: str | None = None
    is_posted: bool = False
    ledger_entries: list[LedgerEntrySchema] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> Any:
        # "2026-10-19" 형식(날짜만)도 허용
        return parse_timestamp(value) or value

    def to_domain(self) -> JournalEntry:
        return JournalEntry(
            id=self.id,
            entry_number=self.entry_number,
            date=self.date.date(),
            description=self.description,
            reference=self.reference,
            is_posted=self.is_posted,
            ledger_entries=tuple(entry.to_domain() for entry in self.ledger_entries),
        )


class JournalEntryPage(ApiModel):
    """분개 목록 페이지"""

    journal_entries: list[JournalEntrySchema] = Field(
        default_factory=list, alias="journalEntries"
    )
    pagination: Pagination = Field(default_factory=Pagination)


class TrialBalanceRowSchema(ApiModel):
    """시산표 행"""

    account_id: int
    account_number: str = ""
    account_name: str = ""
    account_type: str = ""
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")

    @field_validator("debit", "credit", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal:
        return parse_amount(value)

    def to_domain(self) -> TrialBalanceRow:
        return TrialBalanceRow(
            account_id=self.account_id,
            account_number=self.account_number,
            account_name=self.account_name,
            account_type=self.account_type,
            debit=self.debit,
            credit=self.credit,
        )


# -----------------------------------------------------------------------------
# 은행 (/banking)
# -----------------------------------------------------------------------------


class BankAccountSchema(ApiModel):
    """은행 계좌"""

    id: int
    account_name: str = ""
    account_number: str = ""
    bank_name: str = ""
    account_type: str = ""
    opening_balance: Decimal = Decimal("0")
    current_balance: Decimal = Decimal("0")
    is_active: bool = True

    @field_validator("opening_balance", "current_balance", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal:
        return parse_amount(value)

    def to_domain(self) -> BankAccount:
        return BankAccount(
            id=self.id,
            account_name=self.account_name,
            account_number=self.account_number,
            bank_name=self.bank_name,
            account_type=self.account_type,
            opening_balance=self.opening_balance,
            current_balance=self.current_balance,
            is_active=self.is_active,
        )


class BankAccountPage(ApiModel):
    """은행 계좌 목록 페이지"""

    bank_accounts: list[BankAccountSchema] = Field(default_factory=list, alias="bankAccounts")
    pagination: Pagination = Field(default_factory=Pagination)


class BankTransactionSchema(ApiModel):
    """은행 거래"""

    id: int
    bank_account_id: int
    transaction_type: TransactionType
    amount: Decimal
    transaction_date: datetime | None = None
    description: str | None = None
    reference: str | None = None
    is_reconciled: bool = False

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal:
        return parse_amount(value)

    def to_domain(self) -> BankTransaction:
        return BankTransaction(
            id=self.id,
            bank_account_id=self.bank_account_id,
            transaction_type=self.transaction_type,
            amount=self.amount,
            transaction_date=ensure_utc(self.transaction_date) if self.transaction_date else None,
            description=self.description or "",
            reference=self.reference,
            is_reconciled=self.is_reconciled,
        )


class BankTransactionPage(ApiModel):
    """은행 거래 목록 페이지"""

    transactions: list[BankTransactionSchema] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class TransferResult(ApiModel):
    """계좌 간 이체 결과 (출금 + 입금 거래 쌍)"""

    withdrawal: BankTransactionSchema
    deposit: BankTransactionSchema


class ReconciliationStats(ApiModel):
    """대사 현황"""

    reconciled: int = 0
    unreconciled: int = 0
    total: int = 0


class BankingStats(ApiModel):
    """은행 통계"""

    total_accounts: int = Field(default=0, alias="totalAccounts")
    total_balance: Decimal = Field(default=Decimal("0"), alias="totalBalance")
    this_month_transactions: int = Field(default=0, alias="thisMonthTransactions")
    reconciliation_stats: ReconciliationStats = Field(
        default_factory=ReconciliationStats, alias="reconciliationStats"
    )

    @field_validator("total_balance", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal:
        return parse_amount(value)


class BalanceHistoryPoint(ApiModel):
    """일별 잔액"""

    day: date = Field(..., alias="date", description="날짜")
    balance: Decimal
    transactions: int = 0

    @field_validator("balance", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal:
        return parse_amount(value)


class FlowTotal(ApiModel):
    """유입/유출 합계"""

    amount: Decimal = Decimal("0")
    count: int = 0

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal:
        return parse_amount(value)


class CashFlowSummary(ApiModel):
    """기간별 현금 흐름"""

    period: str
    inflows: FlowTotal = Field(default_factory=FlowTotal)
    outflows: FlowTotal = Field(default_factory=FlowTotal)
    net_flow: Decimal = Field(default=Decimal("0"), alias="netFlow")

    @field_validator("net_flow", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Decimal:
        return parse_amount(value)


# -----------------------------------------------------------------------------
# 알림 (/notifications)
# -----------------------------------------------------------------------------


class NotificationSchema(ApiModel):
    """알림 센터 알림"""

    id: int
    title: str = ""
    message: str = ""
    notification_type: str | None = None
    is_read: bool = False
    created_at: datetime | None = None

    def to_domain(self) -> Notification:
        return Notification(
            id=self.id,
            type=self.notification_type or NotificationType.INFO.value,
            title=self.title,
            message=self.message,
            timestamp=ensure_utc(self.created_at) if self.created_at else now_utc(),
            read=self.is_read,
        )


class NotificationPage(ApiModel):
    """알림 목록 페이지"""

    notifications: list[NotificationSchema] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class NotificationStats(ApiModel):
    """알림 통계"""

    total_notifications: int = Field(default=0, alias="totalNotifications")
    unread_notifications: int = Field(default=0, alias="unreadNotifications")
    today_notifications: int = Field(default=0, alias="todayNotifications")
    by_type: dict[str, int] = Field(default_factory=dict, alias="notificationsByType")


# -----------------------------------------------------------------------------
# 일반 리소스 (/invoices, /payments, /credit-notes, /tax, /automation, /reports)
# -----------------------------------------------------------------------------


class Record(ApiModel):
    """필드가 화면마다 다른 일반 리소스 레코드

    id만 필수로 검증하고 나머지 필드는 그대로 보존.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int


class ReportExecution(ApiModel):
    """보고서 실행 결과"""

    data: Any = Field(default=None, description="보고서 데이터")
    saved_report: Record | None = Field(default=None, description="저장된 보고서 (저장 요청 시)")


class ReportType(ApiModel):
    """보고서 유형과 파라미터 정의"""

    id: str
    name: str = ""
    description: str = ""
    parameters: list[dict[str, Any]] = Field(default_factory=list)


class DashboardSummary(ApiModel):
    """대시보드 요약 (필드는 서버 버전에 따라 추가될 수 있음)"""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
