"""
CLI 명령 구현

각 명령은 서비스/채널을 인자로 받아 테스트에서 Mock으로 교체 가능.
반환값은 프로세스 종료 코드.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Iterable, TextIO

from adapters.api.accounting import AccountingService
from adapters.api.banking import BankingService
from adapters.realtime.channel import NotificationChannel
from core.export import export_file, to_csv, to_json
from core.ledger.trial_balance import summarize_trial_balance
from core.notifications.store import Notification
from core.types import ExportFormat
from core.utils.amount import format_amount

logger = logging.getLogger(__name__)


TRIAL_BALANCE_COLUMNS = (
    ("account_number", "Account Number"),
    ("account_name", "Account Name"),
    ("account_type", "Account Type"),
    ("debit", "Debit"),
    ("credit", "Credit"),
    ("balance", "Balance"),
)


# -----------------------------------------------------------------------------
# listen
# -----------------------------------------------------------------------------


async def listen(
    channel: NotificationChannel,
    stop_event: asyncio.Event,
    out: TextIO,
) -> int:
    """stop_event가 설정될 때까지 실시간 알림 출력"""

    seen: set[int | str] = {n.id for n in channel.store.notifications}

    def print_new(snapshot: tuple[Notification, ...]) -> None:
        for notification in reversed(snapshot):
            if notification.id in seen:
                continue
            seen.add(notification.id)
            print(f"[{notification.type}] {notification.title}: {notification.message}", file=out)

    unsubscribe = channel.store.subscribe(print_new)
    try:
        async with channel:
            logger.info("알림 수신 대기 (종료: Ctrl+C)")
            await stop_event.wait()
    finally:
        unsubscribe()
    return 0


# -----------------------------------------------------------------------------
# trial-balance
# -----------------------------------------------------------------------------


async def trial_balance(
    service: AccountingService,
    out: TextIO,
    export_format: ExportFormat | None = None,
    export_dir: Path | None = None,
) -> int:
    """시산표 출력 (선택적으로 파일 내보내기)

    Returns:
        균형이면 0, 불균형이면 2
    """
    rows = await service.get_trial_balance()
    summary = summarize_trial_balance(rows)

    for row in rows:
        print(
            f"{row.account_number:<10} {row.account_name:<30} "
            f"{format_amount(row.debit):>15} {format_amount(row.credit):>15}",
            file=out,
        )
    print(
        f"{'TOTAL':<41} {format_amount(summary.total_debits):>15} "
        f"{format_amount(summary.total_credits):>15}",
        file=out,
    )
    if summary.is_balanced:
        print("Trial balance is balanced", file=out)
    else:
        print(f"Trial balance is out of balance by {format_amount(summary.difference)}", file=out)

    if export_format is not None:
        if export_dir is None:
            raise ValueError("export_dir is required when exporting")
        if export_format is ExportFormat.CSV:
            content = to_csv(rows, TRIAL_BALANCE_COLUMNS)
        else:
            content = to_json(rows)
        path = export_file(content, export_dir, "trial-balance", export_format)
        print(f"Exported to {path}", file=out)

    return 0 if summary.is_balanced else 2


# -----------------------------------------------------------------------------
# reconcile
# -----------------------------------------------------------------------------


async def reconcile(
    service: BankingService,
    account_id: int,
    out: TextIO,
    selected_ids: Iterable[int] = (),
    statement_balance: Any = None,
    apply: bool = False,
) -> int:
    """대사 요약 출력 (apply면 선택 거래 일괄 대사)

    Returns:
        대사 완료(차이 0)면 0, 아니면 2
    """
    selected = list(selected_ids)
    account, transactions, summary = await service.build_reconciliation(
        account_id, selected, statement_balance
    )

    print(f"Account: {account.account_name} ({account.bank_name})", file=out)
    for tx in transactions:
        mark = "x" if tx.id in selected else " "
        print(
            f"[{mark}] {tx.id:>6} {tx.transaction_type.value:<10} "
            f"{format_amount(tx.signed_amount):>15} {tx.description}",
            file=out,
        )
    print(f"Book balance:      {format_amount(summary.book_balance)}", file=out)
    print(f"Selected amount:   {format_amount(summary.selected_amount)}", file=out)
    print(f"Adjusted balance:  {format_amount(summary.adjusted_balance)}", file=out)
    if summary.has_statement:
        print(f"Statement balance: {format_amount(summary.statement_balance)}", file=out)
        print(f"Difference:        {format_amount(summary.difference)}", file=out)
    print("Reconciled" if summary.is_reconciled else "Not reconciled", file=out)

    if apply:
        count = await service.bulk_reconcile_transactions(selected)
        print(f"Reconciled {count} transactions", file=out)

    return 0 if summary.is_reconciled else 2
