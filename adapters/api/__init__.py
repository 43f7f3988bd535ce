"""
ERP REST API 어댑터

ApiClient + 엔드포인트별 서비스.
응답은 서비스 경계에서 pydantic 스키마로 검증.
"""

from adapters.api.accounting import AccountingService
from adapters.api.banking import BankingService
from adapters.api.errors import ApiError, ApiResponseError
from adapters.api.notifications import NotificationService
from adapters.api.resources import DashboardService, ReportsService, ResourceService
from adapters.api.rest_client import ApiClient

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponseError",
    "AccountingService",
    "BankingService",
    "NotificationService",
    "ResourceService",
    "DashboardService",
    "ReportsService",
]
