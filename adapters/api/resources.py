"""
일반 리소스 API 서비스

인보이스, 결제, 크레딧 노트, 세율, 예약 작업, 보고서 템플릿처럼
목록/조회/생성/수정/삭제/통계만 필요한 리소스용.
"""

import logging
from typing import Any

from pydantic import Field, ValidationError, create_model

from adapters.api.errors import ApiResponseError
from adapters.api.schemas import (
    ApiModel,
    DashboardSummary,
    Pagination,
    Record,
    ReportExecution,
    ReportType,
)
from adapters.interfaces import IApiClient
from core.constants import Defaults

logger = logging.getLogger(__name__)


class ResourceService:
    """일반 CRUD 서비스

    Args:
        api: REST 클라이언트
        path: 리소스 경로 (예: /invoices)
        collection_key: 목록 응답에서 레코드 배열의 키
            (예: "invoices"). None이면 data 자체가 배열.
    """

    def __init__(self, api: IApiClient, path: str, collection_key: str | None = None):
        self.api = api
        self.path = "/" + path.strip("/")
        self.collection_key = collection_key

        if collection_key is None:
            self._list_type: Any = list[Record]
        else:
            self._list_type = create_model(
                f"{collection_key[:1].upper()}{collection_key[1:]}Page",
                __base__=ApiModel,
                items=(list[Record], Field(default_factory=list, alias=collection_key)),
                pagination=(Pagination | None, None),
            )

    def __repr__(self) -> str:
        return f"ResourceService({self.path!r})"

    async def list(
        self,
        page: int = 1,
        limit: int = Defaults.PAGE_SIZE,
        **filters: Any,
    ) -> tuple[list[Record], Pagination | None]:
        """목록 조회

        Args:
            filters: 추가 쿼리 파라미터 (None 값은 제외)

        Returns:
            (레코드 목록, 페이지 정보 또는 None)
        """
        params = {"page": page, "limit": limit, **filters}
        response = await self.api.fetch("GET", self.path, self._list_type, params=params)

        if self.collection_key is None:
            return response.data, response.pagination
        return response.data.items, response.data.pagination or response.pagination

    async def get(self, record_id: int) -> Record:
        """단건 조회"""
        response = await self.api.fetch("GET", f"{self.path}/{record_id}", Record)
        return response.data

    async def create(self, data: dict[str, Any]) -> Record:
        """생성"""
        response = await self.api.fetch("POST", self.path, Record, json=data)
        logger.info("레코드 생성", extra={"path": self.path, "id": response.data.id})
        return response.data

    async def update(self, record_id: int, data: dict[str, Any]) -> Record:
        """수정"""
        response = await self.api.fetch("PUT", f"{self.path}/{record_id}", Record, json=data)
        return response.data

    async def delete(self, record_id: int) -> None:
        """삭제"""
        await self.api.send("DELETE", f"{self.path}/{record_id}")
        logger.info("레코드 삭제", extra={"path": self.path, "id": record_id})

    async def stats(self) -> dict[str, Any]:
        """통계"""
        response = await self.api.fetch("GET", f"{self.path}/stats", dict[str, Any])
        return response.data


def invoices(api: IApiClient) -> ResourceService:
    return ResourceService(api, "/invoices", "invoices")


def payments(api: IApiClient) -> ResourceService:
    return ResourceService(api, "/payments", "payments")


def credit_notes(api: IApiClient) -> ResourceService:
    return ResourceService(api, "/credit-notes")


def tax_rates(api: IApiClient) -> ResourceService:
    return ResourceService(api, "/tax/rates", "taxRates")


def scheduled_tasks(api: IApiClient) -> ResourceService:
    return ResourceService(api, "/automation/tasks", "tasks")


class ReportsService:
    """보고서 API 서비스 (/reports)

    템플릿과 저장된 보고서는 일반 CRUD로 다루고,
    실행과 유형 조회만 별도 메서드로 제공.

    Attributes:
        templates: 보고서 템플릿 (/reports/templates)
        saved: 저장된 보고서 (/reports/saved, 조회/삭제만 사용)
    """

    def __init__(self, api: IApiClient):
        self.api = api
        self.templates = ResourceService(api, "/reports/templates", "templates")
        self.saved = ResourceService(api, "/reports/saved", "reports")

    async def execute(
        self,
        template_id: int,
        parameters: dict[str, Any] | None = None,
        save_report: bool = False,
    ) -> ReportExecution:
        """템플릿 실행

        Args:
            template_id: 템플릿 ID
            parameters: 보고서 파라미터 (예: start_date, end_date)
            save_report: True면 서버가 실행 결과를 저장

        Returns:
            ReportExecution (저장 요청 시 saved_report 포함)
        """
        path = f"/reports/templates/{template_id}/execute"
        response = await self.api.fetch(
            "POST",
            path,
            Any,
            json={"parameters": parameters or {}, "save_report": save_report},
        )
        saved = (response.model_extra or {}).get("saved_report")
        try:
            result = ReportExecution(
                data=response.data,
                saved_report=Record.model_validate(saved) if saved else None,
            )
        except ValidationError as e:
            raise ApiResponseError(path, str(e)) from e

        logger.info(
            "보고서 실행 완료",
            extra={"template_id": template_id, "saved": result.saved_report is not None},
        )
        return result

    async def get_report_types(self) -> list[ReportType]:
        """보고서 유형 목록"""
        response = await self.api.fetch("GET", "/reports/types", list[ReportType])
        return response.data

    async def get_parameter_options(self, report_type: str) -> dict[str, Any]:
        """보고서 유형별 파라미터 선택지"""
        response = await self.api.fetch(
            "GET", f"/reports/parameters/{report_type}/options", dict[str, Any]
        )
        return response.data


class DashboardService:
    """대시보드 API 서비스 (/dashboard)"""

    def __init__(self, api: IApiClient):
        self.api = api

    async def get_dashboard(self) -> DashboardSummary:
        """대시보드 요약"""
        response = await self.api.fetch("GET", "/dashboard", DashboardSummary)
        return response.data

    async def get_financial_overview(self, period: str = "month") -> DashboardSummary:
        """기간별 재무 개요 (week/month/quarter/year)"""
        response = await self.api.fetch(
            "GET", "/dashboard/financial-overview", DashboardSummary, params={"period": period}
        )
        return response.data
