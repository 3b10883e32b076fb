from __future__ import annotations
from typing import Any, Dict, List, Optional

# utils
from spendtalk.agents.nl_agent.utils.value_format import (
    format_column_name,
    format_value,
    is_summary_column,
    parse_float,
)

NO_DATA = "📊 No data found matching your criteria. Try adjusting your search parameters or date range."
MAX_DETAILED_ROWS = 10
MAX_SUMMARY_ROWS = 50


def format_results(rows: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> str:
    """
    Render a result set as chat text. The layout depends only on the row count:
    none, one record, up to ten itemized records, or a compact table with a summary.
    """
    if not rows:
        return NO_DATA
    cols = list(columns) if columns else list(rows[0].keys())
    if len(rows) == 1:
        return format_single(rows[0], cols)
    if len(rows) <= MAX_DETAILED_ROWS:
        return format_detailed(rows, cols)
    return format_summary(rows, cols)


def format_single(row: Dict[str, Any], columns: List[str]) -> str:
    formatted = "\n".join(
        f"• {format_column_name(c)}: {format_value(row.get(c), c)}" for c in columns
    )
    return f"📋 **Result Details:**\n{formatted}"


def format_detailed(rows: List[Dict[str, Any]], columns: List[str]) -> str:
    header = f"📊 **Found {len(rows)} results:**\n"
    blocks = []
    for i, row in enumerate(rows, start=1):
        data = "\n".join(f"   {format_column_name(c)}: {format_value(row.get(c), c)}" for c in columns)
        blocks.append(f"\n**{i}.** \n{data}")
    return header + "\n".join(blocks)


def format_summary(rows: List[Dict[str, Any]], columns: List[str]) -> str:
    header = f"📊 **Found {len(rows)} results** (showing summary format):\n"
    shown = min(len(rows), MAX_SUMMARY_ROWS)

    head_row = " | ".join(format_column_name(c) for c in columns)
    out = [f"\n{head_row}\n", f"{'-' * len(head_row)}\n"]
    for row in rows[:shown]:
        out.append(" | ".join(format_value(row.get(c), c, compact=True) for c in columns) + "\n")

    if len(rows) > shown:
        out.append(f"\n... and {len(rows) - shown} more results\n")

    summary = summarize_amounts(rows, columns)
    if summary:
        out.append(f"\n📈 **Summary:**\n{summary}")
    return header + "".join(out)


def summarize_amounts(rows: List[Dict[str, Any]], columns: List[str]) -> str:
    """Total and average of every amount/total/price column over the full row set."""
    lines: List[str] = []
    for c in columns:
        if not is_summary_column(c):
            continue
        values = [v for v in (parse_float(r.get(c)) for r in rows) if v is not None]
        if not values:
            continue
        total = sum(values)
        name = format_column_name(c)
        lines.append(f"• Total {name}: ${total:,.2f}")
        if len(values) > 1:
            lines.append(f"• Average {name}: ${total / len(values):,.2f}")
    return "\n".join(lines)


def export_hint(record_count: int) -> str:
    return (
        "\n\n📥 **Export Options Available:**\n"
        "• CSV format - Perfect for Excel and data analysis\n"
        "• JSON format - Great for developers and APIs\n"
        "• Excel format - Business-ready spreadsheet\n\n"
        '💡 To export this data, POST the same question to /ask/export with format "csv", "json" or "xlsx"\n'
        f"📊 {record_count} records ready for export"
    )
