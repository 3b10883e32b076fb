from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging
import random

from sqlalchemy.engine import Engine

from spendtalk.agents.nl_agent.result_formatter import export_hint, format_results
from spendtalk.agents.sql_agent.interpreters.base import Interpreter
from spendtalk.agents.sql_agent.interpreters.factory import make_interpreter
from spendtalk.constants.regex_constants import _HELP, _SMALLTALK
from spendtalk.constants.spend_context import GREETING_RESPONSES, HELP_TOPICS
from spendtalk.constants.spend_schema import SPEND_CATALOG
from spendtalk.core.config import settings
from spendtalk.core.errors import GenerationError, IntentError, InterpretationError, QueryExecutionError, UnsafeSQLError
from spendtalk.db.engine import get_engine
from spendtalk.schemas.intent import QueryIntent

# utils
from spendtalk.agents.sql_agent.utils.sqlbuild import build_sql
from spendtalk.agents.sql_agent.utils.sqlexec import execute_query
from spendtalk.agents.sql_agent.utils.sqlguard import ensure_safe
from spendtalk.agents.sql_agent.utils.types import QAResult

logger = logging.getLogger(__name__)

BUILD_FAILED_ANSWER = (
    "⚠️ I couldn't build a query for that request. Try rephrasing it with a supplier, amount or date."
)
BUILD_FAILED_ERROR = "could not build a query"
RUN_FAILED_ANSWER = "⚠️ The query failed to run. Please try again or rephrase your question."
RUN_FAILED_ERROR = "query failed"


def help_text() -> str:
    topics = "\n".join(f"• **{name.title()}**: {text}" for name, text in HELP_TOPICS.items())
    samples = [q for t in SPEND_CATALOG.tables for q in t.sample_queries][:4]
    tries = "\n".join(f'• "{q}"' for q in samples)
    return f"💡 Here's what I can help with:\n{topics}\n\nTry asking:\n{tries}"


def _shape(
    *, sql: Optional[str] = None, columns: Optional[List[str]] = None,
    rows: Optional[List[Dict[str, Any]]] = None, intent: Optional[QueryIntent] = None,
    answer: Optional[str] = None, error: Optional[str] = None,
) -> QAResult:
    rows = rows or []
    return {
        "sql": sql,
        "columns": list(columns or []),
        "rows": rows,
        "row_count": len(rows),
        "intent": intent.model_dump(exclude_none=True) if intent is not None else None,
        "answer": answer,
        "error": error,
    }


def generate_sql(question: str, interpreter: Interpreter, max_rows: Optional[int] = None) -> tuple[QueryIntent, str]:
    """Interpret, compile and check one question. Raises a SpendTalkError subclass on failure."""
    intent = interpreter.interpret(question)
    if max_rows is not None and intent.limit is None:
        intent.limit = max_rows
    sql = build_sql(
        intent,
        SPEND_CATALOG,
        default_limit=settings.DEFAULT_ROW_LIMIT,
        max_limit=settings.MAX_ROW_LIMIT,
    )
    return intent, ensure_safe(sql)


def answer_question(
    question: str,
    max_rows: Optional[int] = None,
    interpreter: Optional[Interpreter] = None,
    engine: Optional[Engine] = None,
    model: Optional[str] = None,
    include_export: bool = False,
) -> QAResult:
    """
    Returns:
      - sql, columns, rows, row_count, intent, answer, error
    """
    q = (question or "").strip()

    if _SMALLTALK.match(q):
        return _shape(answer=random.choice(GREETING_RESPONSES))
    if _HELP.match(q):
        return _shape(answer=help_text())

    interpreter = interpreter or make_interpreter(model=model)
    try:
        intent, sql = generate_sql(q, interpreter, max_rows)
    except (GenerationError, InterpretationError, IntentError, UnsafeSQLError) as e:
        logger.warning("Could not build a query for %r (%s): %s", q, type(e).__name__, e)
        return _shape(answer=BUILD_FAILED_ANSWER, error=BUILD_FAILED_ERROR)

    logger.info("Generated SQL via %s: %s", interpreter.name, sql)

    try:
        columns, rows = execute_query(engine or get_engine(), sql)
    except QueryExecutionError:
        logger.exception("Query failed: %s", sql)
        return _shape(sql=sql, intent=intent, answer=RUN_FAILED_ANSWER, error=RUN_FAILED_ERROR)

    answer = format_results(rows, columns)
    if include_export and rows:
        answer += export_hint(len(rows))
    return _shape(sql=sql, columns=columns, rows=rows, intent=intent, answer=answer)
