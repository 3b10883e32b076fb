from __future__ import annotations
from typing import Optional

from spendtalk.constants.regex_constants import (
    _NUM_PHRASE, _NUM_RESULTS, _SHOW_N, _SINGLE_PHRASE, _WORD_NUMBERS,
)


def _to_int(token: str) -> int:
    t = token.strip().lower()
    return int(t) if t.isdigit() else _WORD_NUMBERS[t]


def limit_from_question(question: str) -> Optional[int]:
    """Row count the user asked for explicitly ("top 10", "first five", "20 rows"), else None."""
    q = question or ""
    for pattern in (_NUM_PHRASE, _NUM_RESULTS, _SHOW_N):
        if m := pattern.search(q):
            return _to_int(m.group(1))
    if _SINGLE_PHRASE.search(q):
        return 1
    return None


def clamp_limit(n: Optional[int], default_n: int, max_n: int) -> int:
    """None -> default; anything else clamped into [1, max_n]."""
    if n is None:
        return int(default_n)
    return max(1, min(int(n), int(max_n)))
