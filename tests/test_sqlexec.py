import pandas as pd
import pytest

from spendtalk.agents.sql_agent.utils.sqlexec import execute_query, frame_to_rows
from spendtalk.core.errors import QueryExecutionError


def test_rows_come_back_as_dicts_with_nulls_as_none(sqlite_engine):
    columns, rows = execute_query(
        sqlite_engine,
        "SELECT INVOICE_NUMBER, SUPPLIER_NAME, INVOICE_TOTAL FROM goods_invoicefields ORDER BY INVOICE_NUMBER",
    )
    assert columns == ["INVOICE_NUMBER", "SUPPLIER_NAME", "INVOICE_TOTAL"]
    assert rows == [
        {"INVOICE_NUMBER": "INV-1", "SUPPLIER_NAME": "Acme", "INVOICE_TOTAL": "1500.50"},
        {"INVOICE_NUMBER": "INV-2", "SUPPLIER_NAME": "Globex", "INVOICE_TOTAL": None},
        {"INVOICE_NUMBER": "INV-3", "SUPPLIER_NAME": "Acme", "INVOICE_TOTAL": "250"},
    ]


def test_numeric_nan_becomes_none(sqlite_engine):
    _, rows = execute_query(sqlite_engine, "SELECT LABEL, VALUE FROM measures ORDER BY LABEL")
    assert rows[0]["VALUE"] == 1.5
    assert rows[1]["VALUE"] is None


def test_empty_result_keeps_columns(sqlite_engine):
    columns, rows = execute_query(sqlite_engine, "SELECT LHN FROM goods_invoicefields WHERE 1 = 0")
    assert columns == ["LHN"]
    assert rows == []


@pytest.mark.parametrize(
    "sql",
    ["SELECT TOP 5 * FROM goods_invoicefields", "SELECT * FROM goods_receipts", "SELEC 1"],
)
def test_database_errors_are_wrapped(sqlite_engine, sql):
    with pytest.raises(QueryExecutionError):
        execute_query(sqlite_engine, sql)


def test_frame_to_rows_handles_missing_timestamps():
    df = pd.DataFrame({"INVOICE_DATE": [pd.Timestamp("2024-01-01"), pd.NaT], "N": [1.0, float("nan")]})
    columns, rows = frame_to_rows(df)
    assert columns == ["INVOICE_DATE", "N"]
    assert rows[0] == {"INVOICE_DATE": pd.Timestamp("2024-01-01"), "N": 1.0}
    assert rows[1] == {"INVOICE_DATE": None, "N": None}
