"""
파일 내보내기 테스트
"""

import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from core.export import export_file, to_csv, to_json
from core.ledger.types import TrialBalanceRow
from core.types import ExportFormat


@pytest.fixture
def rows() -> list[TrialBalanceRow]:
    return [
        TrialBalanceRow(1, "1000", "Cash, petty", "Asset", Decimal("500.00"), Decimal("120.00")),
        TrialBalanceRow(2, "4000", "Sales", "Revenue", Decimal("0"), Decimal("380.00")),
    ]


class TestToCsv:
    """to_csv 테스트"""

    def test_header_and_rows(self, rows: list[TrialBalanceRow]) -> None:
        """헤더 순서대로 출력, 쉼표 포함 값은 따옴표"""
        content = to_csv(rows, [("account_name", "Name"), ("debit", "Debit")])

        assert content.splitlines() == [
            "Name,Debit",
            '"Cash, petty",500.00',
            "Sales,0",
        ]

    def test_property_column(self, rows: list[TrialBalanceRow]) -> None:
        """dataclass 프로퍼티(balance)도 컬럼으로 사용 가능"""
        content = to_csv(rows, [("balance", "Balance")])
        assert content.splitlines()[1:] == ["380.00", "-380.00"]

    def test_dict_rows_and_missing_values(self) -> None:
        """dict 행, 없는 값은 빈 칸"""
        content = to_csv([{"id": 1}], [("id", "ID"), ("note", "Note")])
        assert content.splitlines() == ["ID,Note", "1,"]

    def test_unsupported_row_type(self) -> None:
        """지원하지 않는 행 타입"""
        with pytest.raises(TypeError):
            to_csv([42], [("id", "ID")])


class TestToJson:
    """to_json 테스트"""

    def test_decimal_as_string(self, rows: list[TrialBalanceRow]) -> None:
        """Decimal은 문자열로 직렬화"""
        data = json.loads(to_json(rows))

        assert data[0]["debit"] == "500.00"
        assert data[1]["account_type"] == "Revenue"

    def test_non_ascii_preserved(self) -> None:
        """한글 등은 이스케이프하지 않음"""
        assert "현금" in to_json([{"name": "현금"}])


class TestExportFile:
    """export_file 테스트"""

    def test_file_name_has_date(self, temp_dir: Path) -> None:
        """{stem}-{YYYY-MM-DD}.{ext}"""
        path = export_file(
            "a,b\n",
            temp_dir / "exports",
            "trial-balance",
            ExportFormat.CSV,
            today=date(2026, 10, 19),
        )

        assert path.name == "trial-balance-2026-10-19.csv"
        assert path.read_text(encoding="utf-8") == "a,b\n"

    def test_json_extension(self, temp_dir: Path) -> None:
        """JSON 확장자"""
        path = export_file("[]", temp_dir, "transactions", ExportFormat.JSON, today=date(2026, 1, 2))
        assert path.name == "transactions-2026-01-02.json"
