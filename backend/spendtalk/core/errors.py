"""Project-wide exceptions."""

from __future__ import annotations


class SpendTalkError(Exception):
    """Base exception for the spend chat backend."""


class GenerationError(SpendTalkError):
    """Raised when the text-generation service fails or returns nothing usable."""


class InterpretationError(SpendTalkError):
    """Raised when a question cannot be mapped to a query intent."""


class IntentError(SpendTalkError):
    """Raised when a query intent cannot be compiled into SQL."""


class UnknownColumnError(IntentError):
    """Raised when an intent references a column that is not in the catalog."""


class UnsafeSQLError(SpendTalkError):
    """Raised when a statement fails the read-only check."""


class QueryExecutionError(SpendTalkError):
    """Raised when the database rejects or fails to run a statement."""
