from __future__ import annotations
from abc import ABC, abstractmethod

from spendtalk.schemas.intent import QueryIntent


class Interpreter(ABC):
    """Turns a natural-language spend question into a QueryIntent."""

    name: str = "base"

    @abstractmethod
    def interpret(self, question: str) -> QueryIntent:
        """Raise InterpretationError when no usable intent can be produced."""
