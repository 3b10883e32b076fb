from __future__ import annotations
from typing import Any, Optional
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import math
import re

# ---- Heuristics ----

_CURRENCY_HINTS = ("amount", "total", "price", "gst", "leakage")
_SUMMARY_HINTS = ("amount", "total", "price")
_QTY_HINTS = ("qty", "quantity")
_FLAG_HINTS = ("includes", "is_")
_ACRONYMS = {"Id": "ID", "Gst": "GST", "Lhn": "LHN", "Unspsc": "UNSPSC"}

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def is_currency_column(col: str) -> bool:
    cl = (col or "").lower()
    return any(k in cl for k in _CURRENCY_HINTS)


def is_summary_column(col: str) -> bool:
    cl = (col or "").lower()
    return any(k in cl for k in _SUMMARY_HINTS)


def parse_float(value: Any) -> Optional[float]:
    """Leading numeric prefix of a value ("12.5kg" -> 12.5); None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        f = float(value)
        return None if math.isnan(f) else f
    m = _NUMBER_PREFIX.match(str(value))
    return float(m.group(0)) if m else None


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, (datetime, date)):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


# ---- Rendering ----

def _grouped(n: float, places: int) -> str:
    d = Decimal(repr(n)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return f"{d:,.{places}f}"


def format_money(n: float, places: int = 2) -> str:
    return f"${_grouped(n, places)}"


def format_quantity(n: float) -> str:
    s = _grouped(n, 3)
    return s.rstrip("0").rstrip(".") if "." in s else s


def format_date(d: date, compact: bool = False) -> str:
    if compact:
        return d.strftime("%d/%m/%Y")
    return f"{d.day} {d.strftime('%B')} {d.year}"


def format_column_name(column_name: str) -> str:
    """INVOICE_ID -> Invoice ID, UNSPSC_SEGMENT -> UNSPSC Segment."""
    s = str(column_name).replace("_", " ").lower()
    s = re.sub(r"\b\w", lambda m: m.group(0).upper(), s)
    return re.sub(r"\b(Id|Gst|Lhn|Unspsc)\b", lambda m: _ACRONYMS[m.group(1)], s)


def _plain(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_value(value: Any, column_name: str = "", compact: bool = False) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A" if compact else "Not Available"

    col = (column_name or "").lower()

    if is_currency_column(col):
        n = parse_float(value)
        if n is not None and math.isfinite(n):
            return format_money(n, 0 if compact else 2)

    if "date" in col:
        d = parse_date(value)
        if d is not None:
            return format_date(d, compact)

    if any(k in col for k in _QTY_HINTS):
        n = parse_float(value)
        if n is not None and math.isfinite(n):
            return format_quantity(n)

    if isinstance(value, bool) or (isinstance(value, (int, float)) and value in (0, 1)):
        if any(k in col for k in _FLAG_HINTS):
            return "✓ Yes" if value else "✗ No"

    if compact and isinstance(value, str) and len(value) > 30:
        return value[:27] + "..."

    return _plain(value)
