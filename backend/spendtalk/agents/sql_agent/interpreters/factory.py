from __future__ import annotations
from typing import Optional

from spendtalk.agents.sql_agent.interpreters.base import Interpreter
from spendtalk.agents.sql_agent.interpreters.llm import LLMInterpreter
from spendtalk.agents.sql_agent.interpreters.rules import RuleBasedInterpreter
from spendtalk.core.config import settings


def make_interpreter(kind: Optional[str] = None, model: Optional[str] = None) -> Interpreter:
    kind = (kind or settings.INTERPRETER).lower()
    if kind == "rules":
        return RuleBasedInterpreter()
    if kind == "llm":
        return LLMInterpreter(settings.BUSINESS_CONTEXT, model=model)
    raise ValueError(f"Unknown interpreter: {kind!r}")
