import pytest

from spendtalk.agents.sql_agent.utils.schema_profile import schema_text
from spendtalk.agents.sql_agent.utils.table_hints import likely_table, likely_table_hint
from spendtalk.constants.spend_schema import INVOICE_TABLE, LINE_ITEM_TABLE, SPEND_CATALOG
from spendtalk.core.errors import IntentError, UnknownColumnError


def test_columns_resolve_case_insensitively_and_prefer_the_primary_table():
    table, column = SPEND_CATALOG.find_column("supplier_name")
    assert (table.name, column.name) == (INVOICE_TABLE, "SUPPLIER_NAME")
    table, _ = SPEND_CATALOG.find_column("INVOICE_DATE", prefer=LINE_ITEM_TABLE)
    assert table.name == LINE_ITEM_TABLE
    table, _ = SPEND_CATALOG.find_column("INVOICE_DATE")
    assert table.name == INVOICE_TABLE
    table, _ = SPEND_CATALOG.find_column("LEAKAGE_AMOUNT", prefer=INVOICE_TABLE)
    assert table.name == LINE_ITEM_TABLE


def test_unknown_columns_and_tables():
    with pytest.raises(UnknownColumnError):
        SPEND_CATALOG.find_column("PAYMENT_TERMS_CODE_XYZ")
    with pytest.raises(IntentError):
        SPEND_CATALOG.table("goods_receipts")
    assert SPEND_CATALOG.table("GOODS_INVOICEFIELDS").name == INVOICE_TABLE


def test_close_misspellings_get_a_suggestion():
    assert SPEND_CATALOG.suggest_column("unit_prices") == "UNIT_PRICE"
    assert SPEND_CATALOG.suggest_column("SUPPLER_NAME") == "SUPPLIER_NAME"


def test_numeric_as_text_columns():
    names = {c.name for c in SPEND_CATALOG.numeric_as_text_columns()}
    assert names == {
        "INVOICE_TOTAL", "QTY_RECEIVED", "UNIT_PRICE", "TOTAL_LINE_AMOUNT_EXCL_GST", "GST",
        "TOTAL_LINE_AMOUNT_INC_GST", "LEAKAGE_AMOUNT", "CATALOGUE_PRICE",
    }
    casts = {c.name: c.cast_type for c in SPEND_CATALOG.numeric_as_text_columns()}
    assert casts["QTY_RECEIVED"] == "FLOAT"
    assert casts["GST"] == "DECIMAL(18,2)"


def test_schema_text():
    text = schema_text()
    assert text.startswith("- goods_invoicefields (Main invoice header information)")
    assert "    INVOICE_TOTAL [nvarchar, currency, stored as text]: Total invoice amount including GST" in text
    assert "    SUPPLIER_NAME [nvarchar, text]: Name of the supplier/vendor" in text
    assert text.endswith("Tables join on INVOICE_NUMBER.")


@pytest.mark.parametrize(
    "question, table",
    [
        ("top suppliers by spend", INVOICE_TABLE),
        ("invoices over $5,000", INVOICE_TABLE),
        ("leakage by supplier", LINE_ITEM_TABLE),
        ("products by UNSPSC segment", LINE_ITEM_TABLE),
        ("duplicate line items", LINE_ITEM_TABLE),
    ],
)
def test_likely_table(question, table):
    assert likely_table(question) == table


def test_table_hint_mentions_join_when_both_tables_are_involved():
    assert "spans both tables" in likely_table_hint("leakage by supplier")
    assert likely_table_hint("top suppliers") == "⚠️ IMPORTANT: Use table 'goods_invoicefields' as the primary table."
