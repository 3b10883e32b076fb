import json

import pytest

from spendtalk.agents import ollama_client
from spendtalk.agents.sql_agent.interpreters.factory import make_interpreter
from spendtalk.agents.sql_agent.interpreters.llm import LLMInterpreter
from spendtalk.agents.sql_agent.interpreters.rules import RuleBasedInterpreter
from spendtalk.agents.sql_agent.utils.sqlbuild import build_sql
from spendtalk.core.errors import InterpretationError

TOP_SUPPLIERS = {
    "table": "goods_invoicefields",
    "fields": [
        {"column": "SUPPLIER_NAME"},
        {"column": "INVOICE_TOTAL", "aggregate": "SUM", "alias": "Total_Spend"},
    ],
    "group_by": ["SUPPLIER_NAME"],
    "order_by": [{"column": "Total_Spend", "descending": True}],
    "limit": 500,
}


def _reply_with(monkeypatch, reply):
    calls = []

    def fake_chat(messages, temperature=0.0, model=None):
        calls.append({"messages": messages, "temperature": temperature, "model": model})
        return reply

    monkeypatch.setattr(ollama_client, "_ollama_chat", fake_chat)
    return calls


def test_fenced_reply_after_think_block(monkeypatch):
    reply = "<think>group by supplier</think>\n```json\n" + json.dumps(TOP_SUPPLIERS) + "\n```"
    calls = _reply_with(monkeypatch, reply)
    interpreter = LLMInterpreter("Spend analytics assistant.", model="phi4")

    intent = interpreter.interpret("Show me the top 10 suppliers by total spend")

    assert intent.limit == 10
    assert build_sql(intent).startswith("SELECT TOP 10 SUPPLIER_NAME, SUM(TRY_CAST(INVOICE_TOTAL")
    assert calls[0]["model"] == "phi4"
    assert calls[0]["temperature"] == 0.0


def test_model_limit_is_replaced_when_question_has_no_count(monkeypatch):
    _reply_with(monkeypatch, json.dumps(TOP_SUPPLIERS))
    intent = LLMInterpreter("ctx").interpret("suppliers by total spend")
    assert intent.limit is None
    assert " TOP 100 " in build_sql(intent)


def test_messages_carry_context_schema_and_refined_question():
    messages = LLMInterpreter("You analyse SA Health spend.").build_messages("top 5 supplers by spend")
    system, user = messages
    assert system["role"] == "system"
    assert system["content"].startswith("You analyse SA Health spend.")
    assert user["role"] == "user"
    assert "User question: top 5 suppliers by spend" in user["content"]
    assert "goods_invoicefields" in user["content"]
    assert "LEAKAGE_AMOUNT" in user["content"]
    assert "Return ONLY one JSON object." in user["content"]


@pytest.mark.parametrize("reply", ["", "I am not sure what you mean.", "[]"])
def test_reply_without_json_raises(monkeypatch, reply):
    _reply_with(monkeypatch, reply)
    with pytest.raises(InterpretationError):
        LLMInterpreter("ctx").interpret("top suppliers")


def test_invalid_intent_raises(monkeypatch):
    bad = {"table": "goods_invoicefields", "filters": [{"column": "LHN", "op": "DROP"}]}
    _reply_with(monkeypatch, json.dumps(bad))
    with pytest.raises(InterpretationError, match="invalid"):
        LLMInterpreter("ctx").interpret("invoices for LHN")


def test_factory():
    assert isinstance(make_interpreter("rules"), RuleBasedInterpreter)
    llm = make_interpreter("LLM", model="mistral")
    assert isinstance(llm, LLMInterpreter)
    assert llm.model == "mistral"
    with pytest.raises(ValueError):
        make_interpreter("oracle")
