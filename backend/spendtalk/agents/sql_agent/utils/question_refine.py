from __future__ import annotations
from typing import Iterable, List, Set, Tuple
import re, difflib

_GENERIC_TAILS = (
    "details", "overview", "report", "reports", "breakdown", "summary", "analysis", "info",
    "information", "data",
)
_WORD = r"[A-Za-z0-9_\-/]+"

# spend vocabulary that typos are snapped back to
SPEND_VOCAB: Set[str] = {
    "invoice", "invoices", "supplier", "suppliers", "vendor", "vendors", "leakage", "quantity",
    "quantities", "catalogue", "catalog", "contract", "contracts", "product", "products",
    "segment", "segments", "family", "commodity", "commodities", "category", "categories",
    "duplicate", "duplicated", "duplicates", "average", "total", "highest", "lowest", "spend",
    "amount", "amounts", "price", "prices", "received", "between", "alphabetical", "unspsc",
}


def strip_generic_tails(q: str) -> str:
    # "leakage breakdown" -> "leakage"
    pattern = re.compile(rf"\b({_WORD})\s+({'|'.join(_GENERIC_TAILS)})\b(?!\s+(?:of|by|for|per)\b)", flags=re.I)
    prev = None
    cur = q
    while prev != cur:
        prev = cur
        cur = pattern.sub(r"\1", cur)
    return cur


def correct_typos(q: str, vocab: Iterable[str] = SPEND_VOCAB) -> Tuple[str, List[str]]:
    """Snap near-miss words onto the spend vocabulary; returns (text, corrections)."""
    vocab = set(vocab)
    fixes: List[str] = []

    def _fix(m: re.Match) -> str:
        tok = m.group(0)
        low = tok.lower()
        if low in vocab or len(low) < 5 or not low.isalpha():
            return tok
        # capitalised words mid-sentence are usually names
        if m.start() > 0 and tok[0].isupper():
            return tok
        near = difflib.get_close_matches(low, vocab, n=1, cutoff=0.86)
        if not near:
            return tok
        fixes.append(f"{tok}->{near[0]}")
        return near[0]

    return re.sub(_WORD, _fix, q), fixes


def refine_question(original_q: str) -> Tuple[str, List[str]]:
    q = " ".join((original_q or "").split())
    q1 = strip_generic_tails(q)
    refined, fixes = correct_typos(q1)
    return refined, fixes
