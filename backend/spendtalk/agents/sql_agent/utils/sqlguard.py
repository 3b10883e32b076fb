from __future__ import annotations
from spendtalk.constants.regex_constants import _COMMENT, _FORBIDDEN, _START_OK, _STRING_LITERAL
from spendtalk.core.errors import UnsafeSQLError


def _strip_literals(sql: str) -> str:
    return _STRING_LITERAL.sub("''", sql or "")


def is_safe(sql: str) -> bool:
    """Single SELECT statement with no mutating keyword outside string literals."""
    s = _strip_literals(sql)
    if _COMMENT.search(s):
        return False
    body = s.strip().rstrip(";")
    if ";" in body:
        return False
    return bool(_START_OK.search(body)) and not _FORBIDDEN.search(body)


def ensure_safe(sql: str) -> str:
    if not is_safe(sql):
        raise UnsafeSQLError("Statement failed the read-only check.")
    return sql
