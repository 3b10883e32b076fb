from spendtalk.agents.nl_agent.result_formatter import (
    NO_DATA,
    export_hint,
    format_results,
    summarize_amounts,
)


def _rows(n, value=10.0):
    return [{"SUPPLIER_NAME": f"S{i}", "Total_Spend": value} for i in range(n)]


def test_no_rows():
    assert format_results([]) == NO_DATA
    assert format_results([], ["SUPPLIER_NAME"]) == NO_DATA


def test_single_row_is_a_detail_card():
    out = format_results([{"SUPPLIER_NAME": "Acme", "Total_Spend": 1500.5}])
    assert out == "📋 **Result Details:**\n• Supplier Name: Acme\n• Total Spend: $1,500.50"


def test_two_rows_are_itemized():
    rows = [
        {"SUPPLIER_NAME": "Acme", "Total_Spend": 1500.5},
        {"SUPPLIER_NAME": "Globex", "Total_Spend": 900},
    ]
    assert format_results(rows) == (
        "📊 **Found 2 results:**\n\n"
        "**1.** \n   Supplier Name: Acme\n   Total Spend: $1,500.50\n\n"
        "**2.** \n   Supplier Name: Globex\n   Total Spend: $900.00"
    )


def test_layout_boundaries():
    assert format_results(_rows(10)).startswith("📊 **Found 10 results:**\n")
    assert format_results(_rows(11)).startswith("📊 **Found 11 results** (showing summary format):\n")


def test_summary_table_caps_rows_and_totals_everything():
    out = format_results(_rows(60))
    lines = out.split("\n")
    assert "Supplier Name | Total Spend" in lines
    assert "-" * len("Supplier Name | Total Spend") in lines
    assert sum(1 for line in lines if line.endswith(" | $10")) == 50
    assert "S49 | $10" in lines
    assert "S50 | $10" not in lines
    assert "... and 10 more results" in lines
    assert out.endswith("📈 **Summary:**\n• Total Total Spend: $600.00\n• Average Total Spend: $10.00")


def test_summary_without_amount_columns_has_no_summary_block():
    rows = [{"SUPPLIER_NAME": f"S{i}", "GST": 1} for i in range(12)]
    out = format_results(rows)
    assert "Summary:" not in out
    assert "more results" not in out


def test_columns_argument_controls_order_and_selection():
    rows = [{"A": 1, "SUPPLIER_NAME": "Acme", "Total_Spend": 5}] * 2
    out = format_results(rows, ["Total_Spend", "SUPPLIER_NAME"])
    assert "   Total Spend: $5.00\n   Supplier Name: Acme" in out
    assert "A:" not in out


def test_nulls_render_as_not_available():
    rows = [{"SUPPLIER_NAME": None, "INVOICE_TOTAL": None}, {"SUPPLIER_NAME": "Acme", "INVOICE_TOTAL": "12"}]
    out = format_results(rows)
    assert "   Supplier Name: Not Available\n   Invoice Total: Not Available" in out


def test_formatting_is_deterministic():
    rows = _rows(30)
    assert format_results(rows) == format_results(rows)


def test_summarize_amounts_skips_unparseable_values():
    rows = [{"INVOICE_TOTAL": "100"}, {"INVOICE_TOTAL": "n/a"}, {"INVOICE_TOTAL": None}]
    assert summarize_amounts(rows, ["INVOICE_TOTAL"]) == "• Total Invoice Total: $100.00"


def test_export_hint_mentions_formats_and_count():
    hint = export_hint(42)
    assert "📥 **Export Options Available:**" in hint
    assert "CSV" in hint and "JSON" in hint and "Excel" in hint
    assert hint.endswith("📊 42 records ready for export")
