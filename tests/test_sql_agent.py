import pytest
import requests

from spendtalk.agents.nl_agent.result_formatter import NO_DATA
from spendtalk.agents.sql_agent import sql_agent
from spendtalk.agents.sql_agent.interpreters.base import Interpreter
from spendtalk.agents.sql_agent.interpreters.llm import LLMInterpreter
from spendtalk.agents.sql_agent.interpreters.rules import RuleBasedInterpreter
from spendtalk.constants.spend_context import GREETING_RESPONSES
from spendtalk.core.errors import GenerationError, InterpretationError
from spendtalk.schemas.intent import QueryIntent

ENGINE = object()


class _Failing(Interpreter):
    name = "failing"

    def __init__(self, exc):
        self.exc = exc

    def interpret(self, question):
        raise self.exc


class _Fixed(Interpreter):
    name = "fixed"

    def __init__(self, intent):
        self.intent = intent

    def interpret(self, question):
        return self.intent.model_copy(deep=True)


@pytest.fixture
def fake_db(monkeypatch):
    calls = []
    result = {"columns": ["SUPPLIER_NAME", "Total_Spend"], "rows": [
        {"SUPPLIER_NAME": "Acme", "Total_Spend": 1750.5},
        {"SUPPLIER_NAME": "Globex", "Total_Spend": 900.0},
    ]}

    def fake_execute(engine, sql):
        calls.append(sql)
        return result["columns"], result["rows"]

    monkeypatch.setattr(sql_agent, "execute_query", fake_execute)
    return calls, result


@pytest.mark.parametrize("greeting", ["hi", "Hello!", "good morning", "thanks"])
def test_greetings_skip_the_database(greeting, fake_db):
    out = sql_agent.answer_question(greeting, engine=ENGINE)
    assert out["answer"] in GREETING_RESPONSES
    assert out["sql"] is None and out["error"] is None
    assert fake_db[0] == []


def test_help_lists_topics_and_samples():
    out = sql_agent.answer_question("what can you do?", engine=ENGINE)
    assert out["answer"].startswith("💡 Here's what I can help with:")
    assert "Try asking:" in out["answer"]
    assert '"Show me all invoices from a specific supplier"' in out["answer"]


@pytest.mark.parametrize(
    "interpreter",
    [
        _Failing(InterpretationError("no idea")),
        _Failing(GenerationError("ollama down")),
        _Fixed(QueryIntent(table="goods_receipts")),
        _Fixed(QueryIntent(table="goods_invoicefields", filters=[{"column": "INVOICE_TOTAL", "op": ">", "value": "lots"}])),
    ],
)
def test_build_failures_return_a_friendly_answer(interpreter, fake_db):
    out = sql_agent.answer_question("anything", interpreter=interpreter, engine=ENGINE)
    assert out["error"] == sql_agent.BUILD_FAILED_ERROR
    assert out["answer"] == sql_agent.BUILD_FAILED_ANSWER
    assert out["sql"] is None
    assert out["rows"] == [] and out["row_count"] == 0
    assert fake_db[0] == []


def test_execution_failure_keeps_sql_and_intent(sqlite_engine):
    # sqlite has no TOP, so the statement is rejected by the database
    out = sql_agent.answer_question(
        "How many invoices from Acme in 2023?", interpreter=RuleBasedInterpreter(), engine=sqlite_engine,
    )
    assert out["error"] == sql_agent.RUN_FAILED_ERROR
    assert out["answer"] == sql_agent.RUN_FAILED_ANSWER
    assert out["sql"].startswith("SELECT TOP 100 COUNT(*)")
    assert out["intent"]["table"] == "goods_invoicefields"


def test_success_formats_rows(fake_db):
    calls, _ = fake_db
    out = sql_agent.answer_question(
        "Show me the top 10 suppliers by total spend", interpreter=RuleBasedInterpreter(), engine=ENGINE,
    )
    assert out["error"] is None
    assert calls == [out["sql"]]
    assert out["sql"].startswith("SELECT TOP 10 SUPPLIER_NAME")
    assert out["row_count"] == 2
    assert out["columns"] == ["SUPPLIER_NAME", "Total_Spend"]
    assert out["answer"].startswith("📊 **Found 2 results:**")
    assert "Total Spend: $1,750.50" in out["answer"]
    assert out["intent"]["group_by"] == ["SUPPLIER_NAME"]
    assert "Export Options" not in out["answer"]


def test_max_rows_applies_only_without_a_count_phrase(fake_db):
    rules = RuleBasedInterpreter()
    out = sql_agent.answer_question("Find invoices over $5,000", max_rows=25, interpreter=rules, engine=ENGINE)
    assert out["sql"].startswith("SELECT TOP 25 ")
    out = sql_agent.answer_question("top 10 suppliers by spend", max_rows=25, interpreter=rules, engine=ENGINE)
    assert out["sql"].startswith("SELECT TOP 10 ")


def test_export_hint_only_with_rows(fake_db):
    _, result = fake_db
    rules = RuleBasedInterpreter()
    out = sql_agent.answer_question("leakage by supplier", interpreter=rules, engine=ENGINE, include_export=True)
    assert "📊 2 records ready for export" in out["answer"]

    result["rows"] = []
    out = sql_agent.answer_question("leakage by supplier", interpreter=rules, engine=ENGINE, include_export=True)
    assert out["answer"] == NO_DATA


def test_generate_sql_is_guarded():
    intent, sql = sql_agent.generate_sql("Show suppliers in alphabetical order", RuleBasedInterpreter())
    assert intent.distinct
    assert sql == "SELECT DISTINCT TOP 100 SUPPLIER_NAME FROM goods_invoicefields ORDER BY SUPPLIER_NAME ASC"


class _Reply:
    status_code = 200
    text = "<html>proxy error</html>"

    def __init__(self, payload=None):
        self.payload = payload

    def json(self):
        if self.payload is None:
            raise ValueError("Expecting value")
        return self.payload


@pytest.mark.parametrize("reply", [_Reply(), _Reply({"message": None})])
def test_bad_model_replies_become_build_failures(monkeypatch, fake_db, reply):
    monkeypatch.setattr(requests, "post", lambda *a, **k: reply)
    out = sql_agent.answer_question("top suppliers by spend", interpreter=LLMInterpreter("ctx"), engine=ENGINE)
    assert out["error"] == sql_agent.BUILD_FAILED_ERROR
    assert out["answer"] == sql_agent.BUILD_FAILED_ANSWER
    assert fake_db[0] == []
