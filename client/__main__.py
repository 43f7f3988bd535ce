"""
CLI 진입점

실행 방법:
    python -m client listen
    python -m client trial-balance [--export csv|json]
    python -m client reconcile ACCOUNT_ID [--select ID ...] [--statement AMOUNT] [--apply]
"""

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from adapters.api.accounting import AccountingService
from adapters.api.banking import BankingService
from adapters.api.errors import ApiError
from adapters.api.rest_client import ApiClient
from adapters.realtime.channel import NotificationChannel
from adapters.realtime.reconnect import ReconnectPolicy
from client import commands
from core.banking.reconciliation import ReconciliationSelectionError
from core.config.loader import Settings, SettingsLoadError, get_settings
from core.ledger.types import JournalEntryPostedError
from core.ledger.validator import LedgerValidationError
from core.logging import setup_logging
from core.notifications.store import NotificationStore
from core.types import ExportFormat

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m client",
        description="bizdesk ERP 클라이언트",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="DEBUG 로그 출력",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("listen", help="실시간 알림 수신 (종료: Ctrl+C)")

    trial = subparsers.add_parser("trial-balance", help="시산표 조회")
    trial.add_argument(
        "--export",
        choices=[f.value for f in ExportFormat],
        default=None,
        help="파일로 내보내기 (csv 또는 json)",
    )

    reconcile = subparsers.add_parser("reconcile", help="은행 계좌 대사 요약")
    reconcile.add_argument("account_id", type=int, help="은행 계좌 ID")
    reconcile.add_argument(
        "--select",
        type=int,
        nargs="+",
        default=[],
        metavar="ID",
        help="대사할 거래 ID",
    )
    reconcile.add_argument(
        "--statement",
        default=None,
        metavar="AMOUNT",
        help="은행 명세서 잔액",
    )
    reconcile.add_argument(
        "--apply",
        action="store_true",
        help="선택 거래 일괄 대사 처리",
    )
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """명령 실행"""
    if args.command == "listen":
        store = NotificationStore()
        channel = NotificationChannel(
            settings.realtime.ws_url,
            store,
            policy=ReconnectPolicy.fixed(settings.realtime.reconnect_delay),
        )
        return await commands.listen(channel, asyncio.Event(), sys.stdout)

    async with ApiClient(
        settings.api.base_url,
        token=settings.api.token,
        timeout=settings.api.timeout,
    ) as api:
        if args.command == "trial-balance":
            export_format = ExportFormat(args.export) if args.export else None
            return await commands.trial_balance(
                AccountingService(api),
                sys.stdout,
                export_format=export_format,
                export_dir=settings.export.directory,
            )

        if args.command == "reconcile":
            return await commands.reconcile(
                BankingService(api),
                args.account_id,
                sys.stdout,
                selected_ids=args.select,
                statement_balance=args.statement,
                apply=args.apply,
            )

    raise ValueError(f"알 수 없는 명령: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 메인 함수

    Returns:
        종료 코드 (0: 성공, 1: 에러, 2: 불균형/미대사)
    """
    args = build_parser().parse_args(argv)
    setup_logging(
        "listen" if args.command == "listen" else "client",
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        settings = get_settings()
    except SettingsLoadError as e:
        print(f"설정 로드 실패: {e}", file=sys.stderr)
        return 1

    try:
        return asyncio.run(run(args, settings))
    except ApiError as e:
        print(e.message, file=sys.stderr)
        return 1
    except (LedgerValidationError, JournalEntryPostedError, ReconciliationSelectionError) as e:
        print(str(e), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Ctrl+C 감지")
        return 0


if __name__ == "__main__":
    sys.exit(main())
