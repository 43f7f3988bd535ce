"""
단위 테스트 공통 픽스처

서버 응답 샘플 및 Mock 클라이언트 제공.
응답 형식은 {success, message?, data?, pagination?}.
"""

from typing import Any

import pytest

from adapters.mock.api_client import MockApiClient
from adapters.mock.websocket import MockConnector
from core.notifications.store import NotificationStore


# -------------------------------------------------------------------------
# Mock 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def mock_api() -> MockApiClient:
    """Mock REST 클라이언트"""
    return MockApiClient()


@pytest.fixture
def mock_connector() -> MockConnector:
    """Mock WebSocket 연결 함수"""
    return MockConnector()


@pytest.fixture
def store() -> NotificationStore:
    """빈 알림 저장소"""
    return NotificationStore()


# -------------------------------------------------------------------------
# 회계 응답 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def journal_entry_data() -> dict[str, Any]:
    """분개 응답 data"""
    return {
        "id": 42,
        "entry_number": "JE-20261019-a1b2c3",
        "date": "2026-10-19T00:00:00.000Z",
        "description": "Office supplies",
        "reference": "INV-100",
        "is_posted": False,
        "created_by": 1,
        "ledger_entries": [
            {"id": 1, "account_id": 10, "description": "Supplies", "debit": "150.00", "credit": "0.00"},
            {"id": 2, "account_id": 20, "description": "Cash", "debit": "0.00", "credit": "150.00"},
        ],
    }


@pytest.fixture
def trial_balance_data() -> list[dict[str, Any]]:
    """시산표 응답 data"""
    return [
        {
            "account_id": 10,
            "account_number": "1000",
            "account_name": "Cash",
            "account_type": "Asset",
            "debit": "500.00",
            "credit": "120.00",
        },
        {
            "account_id": 20,
            "account_number": "4000",
            "account_name": "Sales",
            "account_type": "Revenue",
            "debit": 0,
            "credit": 380,
        },
    ]


# -------------------------------------------------------------------------
# 은행 응답 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def bank_account_data() -> dict[str, Any]:
    """은행 계좌 응답 data"""
    return {
        "id": 1,
        "account_name": "Operating",
        "account_number": "123-456",
        "bank_name": "First Bank",
        "account_type": "checking",
        "opening_balance": "1000.00",
        "current_balance": "1000.00",
        "is_active": True,
    }


@pytest.fixture
def unreconciled_data() -> list[dict[str, Any]]:
    """미대사 거래 응답 data"""
    return [
        {
            "id": 11,
            "bank_account_id": 1,
            "transaction_type": "deposit",
            "amount": "200.00",
            "transaction_date": "2026-10-01T09:00:00.000Z",
            "description": "Customer payment",
            "is_reconciled": False,
        },
        {
            "id": 12,
            "bank_account_id": 1,
            "transaction_type": "withdrawal",
            "amount": "50.00",
            "transaction_date": "2026-10-02T09:00:00.000Z",
            "description": "Bank fee",
            "is_reconciled": False,
        },
        {
            "id": 13,
            "bank_account_id": 1,
            "transaction_type": "transfer",
            "amount": "100.00",
            "transaction_date": "2026-10-03T09:00:00.000Z",
            "description": "To savings",
            "is_reconciled": False,
        },
    ]


# -------------------------------------------------------------------------
# 알림 응답 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def notification_page_data() -> dict[str, Any]:
    """알림 목록 응답 data"""
    return {
        "notifications": [
            {
                "id": 7,
                "title": "Invoice overdue",
                "message": "INV-001 is overdue",
                "notification_type": "warning",
                "is_read": False,
                "created_at": "2026-10-18T10:00:00.000Z",
            },
            {
                "id": 6,
                "title": "Payment received",
                "message": "PAY-002",
                "notification_type": "success",
                "is_read": True,
                "created_at": "2026-10-17T10:00:00.000Z",
            },
        ],
        "pagination": {"total": 2, "page": 1, "limit": 10, "totalPages": 1},
    }
