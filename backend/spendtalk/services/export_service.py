from __future__ import annotations
from io import BytesIO
from typing import Any, Dict, List

import pandas as pd
from openpyxl.styles import Font

from spendtalk.agents.nl_agent.utils.value_format import format_column_name

EXPORT_MEDIA_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def rows_to_frame(columns: List[str], rows: List[Dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=columns)


def _xlsx_bytes(df: pd.DataFrame) -> bytes:
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Results")
        ws = writer.sheets["Results"]
        # readable headers, bold, widths from content
        for i, col in enumerate(df.columns, start=1):
            cell = ws.cell(row=1, column=i)
            cell.value = format_column_name(col)
            cell.font = Font(bold=True)
            width = max([len(str(cell.value))] + [len(str(v)) for v in df[col].head(200)])
            ws.column_dimensions[cell.column_letter].width = min(width + 2, 60)
    return buf.getvalue()


def export_rows(columns: List[str], rows: List[Dict[str, Any]], fmt: str) -> bytes:
    """Serialize a result set as csv, json (records) or xlsx."""
    df = rows_to_frame(columns, rows)
    fmt = (fmt or "").lower()
    if fmt == "csv":
        return df.to_csv(index=False).encode("utf-8")
    if fmt == "json":
        return df.to_json(orient="records", date_format="iso", indent=2).encode("utf-8")
    if fmt == "xlsx":
        return _xlsx_bytes(df)
    raise ValueError(f"Unsupported export format: {fmt!r}")
