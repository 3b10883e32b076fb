import json
from io import BytesIO

import pytest
from openpyxl import load_workbook

from spendtalk.services.export_service import export_rows

COLUMNS = ["SUPPLIER_NAME", "Total_Spend"]
ROWS = [{"SUPPLIER_NAME": "Acme", "Total_Spend": 1500.5}, {"SUPPLIER_NAME": "Globex", "Total_Spend": None}]


def test_csv():
    text = export_rows(COLUMNS, ROWS, "csv").decode("utf-8")
    assert text.splitlines() == ["SUPPLIER_NAME,Total_Spend", "Acme,1500.5", "Globex,"]


def test_json_records():
    data = json.loads(export_rows(COLUMNS, ROWS, "JSON"))
    assert data == [{"SUPPLIER_NAME": "Acme", "Total_Spend": 1500.5}, {"SUPPLIER_NAME": "Globex", "Total_Spend": None}]


def test_xlsx_has_readable_bold_headers():
    wb = load_workbook(BytesIO(export_rows(COLUMNS, ROWS, "xlsx")))
    ws = wb["Results"]
    assert [c.value for c in ws[1]] == ["Supplier Name", "Total Spend"]
    assert ws["A1"].font.bold
    assert ws["A2"].value == "Acme"
    assert ws["B2"].value == 1500.5
    assert ws.column_dimensions["A"].width >= len("Supplier Name")


def test_empty_result_keeps_header():
    assert export_rows(COLUMNS, [], "csv").decode("utf-8").strip() == "SUPPLIER_NAME,Total_Spend"


def test_unknown_format():
    with pytest.raises(ValueError):
        export_rows(COLUMNS, ROWS, "parquet")
