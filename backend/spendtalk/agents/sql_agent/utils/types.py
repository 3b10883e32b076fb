from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple, TypedDict

from rapidfuzz import fuzz, process

from spendtalk.core.errors import IntentError, UnknownColumnError


class SemanticCategory(str, Enum):
    CURRENCY = "currency"
    QUANTITY = "quantity"
    DATE = "date"
    BOOLEAN = "boolean"
    IDENTIFIER = "identifier"
    TEXT = "text"


# numeric-as-text columns are compared through these casts
_CAST_TARGETS = {
    SemanticCategory.CURRENCY: "DECIMAL(18,2)",
    SemanticCategory.QUANTITY: "FLOAT",
}


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    description: str
    sql_type: str
    category: SemanticCategory
    numeric_as_text: bool = False

    @property
    def cast_type(self) -> Optional[str]:
        return _CAST_TARGETS.get(self.category) if self.numeric_as_text else None

    @property
    def is_numeric(self) -> bool:
        return self.numeric_as_text or self.sql_type == "int"


@dataclass(frozen=True)
class TableSpec:
    name: str
    alias: str
    description: str
    columns: Tuple[ColumnSpec, ...]
    default_columns: Tuple[str, ...] = ()
    sample_queries: Tuple[str, ...] = ()

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def column(self, name: str) -> Optional[ColumnSpec]:
        key = (name or "").strip().upper()
        return next((c for c in self.columns if c.name == key), None)


class SchemaCatalog:
    """Read-only description of the queryable tables."""

    def __init__(self, tables: Tuple[TableSpec, ...], join_key: str):
        self._tables = MappingProxyType({t.name: t for t in tables})
        self.join_key = join_key

    @property
    def tables(self) -> Tuple[TableSpec, ...]:
        return tuple(self._tables.values())

    def table(self, name: str) -> TableSpec:
        key = (name or "").strip().lower()
        if key not in self._tables:
            raise IntentError(f"Unknown table: {name!r}")
        return self._tables[key]

    def find_column(self, name: str, prefer: Optional[str] = None) -> Tuple[TableSpec, ColumnSpec]:
        """Resolve a column, looking in `prefer` first and then the remaining tables."""
        ordered = list(self.tables)
        if prefer:
            first = self.table(prefer)
            ordered = [first, *(t for t in ordered if t.name != first.name)]
        for t in ordered:
            col = t.column(name)
            if col is not None:
                return t, col
        hint = self.suggest_column(name)
        msg = f"Unknown column: {name!r}"
        raise UnknownColumnError(f"{msg} (did you mean {hint}?)" if hint else msg)

    def suggest_column(self, name: str) -> Optional[str]:
        """Closest catalog column to a misspelt name, if any is close enough."""
        choices = sorted({c.name for t in self.tables for c in t.columns})
        found = process.extractOne((name or "").strip().upper(), choices, scorer=fuzz.WRatio)
        if found is None:
            return None
        match, score, _ = found
        return match if score >= 80 else None

    def numeric_as_text_columns(self) -> List[ColumnSpec]:
        seen: Dict[str, ColumnSpec] = {}
        for t in self.tables:
            for c in t.columns:
                if c.numeric_as_text:
                    seen.setdefault(c.name, c)
        return list(seen.values())


class QAResult(TypedDict, total=False):
    sql: Optional[str]
    columns: List[str]
    rows: List[Dict[str, Any]]
    row_count: int
    intent: Optional[Dict[str, Any]]
    answer: Optional[str]
    error: Optional[str]
