from __future__ import annotations
import logging
from typing import Optional

from pydantic import ValidationError

from spendtalk.agents import ollama_client
from spendtalk.agents.sql_agent.interpreters.base import Interpreter
from spendtalk.agents.sql_agent.utils.intent_extract import extract_intent_json
from spendtalk.agents.sql_agent.utils.limits import limit_from_question
from spendtalk.agents.sql_agent.utils.question_refine import refine_question
from spendtalk.agents.sql_agent.utils.schema_profile import schema_text
from spendtalk.agents.sql_agent.utils.table_hints import likely_table_hint
from spendtalk.agents.sql_agent.utils.types import SchemaCatalog
from spendtalk.constants.few_shots import FEW_SHOTS
from spendtalk.constants.spend_schema import SPEND_CATALOG
from spendtalk.constants.system_intent import SYSTEM_INTENT
from spendtalk.core.errors import InterpretationError
from spendtalk.schemas.intent import QueryIntent

logger = logging.getLogger(__name__)


class LLMInterpreter(Interpreter):
    """Asks the text-generation service for a JSON QueryIntent."""

    name = "llm"

    def __init__(
        self,
        business_context: str,
        catalog: SchemaCatalog = SPEND_CATALOG,
        model: Optional[str] = None,
        temperature: float = 0.0,
    ):
        self.business_context = business_context
        self.catalog = catalog
        self.model = model
        self.temperature = temperature

    def build_messages(self, question: str) -> list[dict]:
        refined_q, _ = refine_question(question)
        user_prompt = (
            f"User question: {refined_q}\n\n"
            f"Schema:\n{schema_text(self.catalog)}\n\n"
            f"{likely_table_hint(refined_q)}\n"
            "Return ONLY one JSON object. No extra text.\n"
            f"{FEW_SHOTS}"
        )
        system = f"{self.business_context.strip()}\n\n{SYSTEM_INTENT.strip()}"
        return [{"role": "system", "content": system}, {"role": "user", "content": user_prompt}]

    def interpret(self, question: str) -> QueryIntent:
        raw = ollama_client._ollama_chat(
            self.build_messages(question), temperature=self.temperature, model=self.model,
        )
        payload = extract_intent_json(raw or "")
        if payload is None:
            logger.warning("No JSON intent in model reply: %.200r", raw)
            raise InterpretationError("The model reply did not contain a JSON intent.")
        try:
            intent = QueryIntent.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Model intent failed validation: %s", exc)
            raise InterpretationError(f"The model intent is invalid: {exc.error_count()} error(s).") from exc

        # only an explicit row-count phrase in the question sets the limit
        intent.limit = limit_from_question(question)
        return intent
