from __future__ import annotations
import re

from spendtalk.constants.spend_schema import INVOICE_TABLE, LINE_ITEM_TABLE

_LINE_ITEM_WORDS = re.compile(
    r"\b(line items?|lines?|products?|unspsc|segments?|famil(?:y|ies)|class(?:es)?|commodit(?:y|ies)|"
    r"categor(?:y|ies)|leakage|quantit(?:y|ies)|qty|unit (?:price|cost)|catalog(?:ue)?|contracts?|"
    r"duplicat\w*|doubled|gst amounts?)\b",
    re.I,
)
_INVOICE_WORDS = re.compile(r"\b(invoices?|invoice totals?|suppliers?|vendors?|lhns?|purchase orders?)\b", re.I)


def likely_table(question: str) -> str:
    """Primary table for a question: line items when it talks about line-level data, else invoices."""
    q = question or ""
    if _LINE_ITEM_WORDS.search(q):
        return LINE_ITEM_TABLE
    return INVOICE_TABLE


def mentions_spend_data(question: str) -> bool:
    q = question or ""
    return bool(_LINE_ITEM_WORDS.search(q) or _INVOICE_WORDS.search(q))


def likely_table_hint(question: str) -> str:
    table = likely_table(question)
    if table == LINE_ITEM_TABLE and _INVOICE_WORDS.search(question or ""):
        return (
            f"⚠️ IMPORTANT: This question spans both tables; use '{LINE_ITEM_TABLE}' as the primary "
            f"table and reference '{INVOICE_TABLE}' columns by name (joined on INVOICE_NUMBER)."
        )
    return f"⚠️ IMPORTANT: Use table '{table}' as the primary table."
