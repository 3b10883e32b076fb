# spendtalk/schemas/intent.py
"""
QueryIntent: the structured form of a spend question.

Interpreters (rule-based or LLM-backed) produce it; the SQL builder is the only
thing that turns it into a statement.
"""
from __future__ import annotations
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

Aggregate = Literal["SUM", "AVG", "MIN", "MAX", "COUNT", "COUNT_DISTINCT"]
FilterOp = Literal[
    "=", "!=", ">", ">=", "<", "<=", "LIKE", "BETWEEN",
    "IS NULL", "IS NOT NULL", "IS TRUE", "IS FALSE",
]
Scalar = Union[int, float, str]


def _upper_or_none(v):
    if v is None:
        return None
    s = "_".join(str(v).split()).upper()
    return s or None


class FieldSpec(BaseModel):
    column: str = Field(..., description="Catalog column name")
    aggregate: Optional[Aggregate] = None
    alias: Optional[str] = Field(None, description="Output name; generated for aggregates when missing")

    @field_validator("aggregate", mode="before")
    @classmethod
    def normalize_aggregate(cls, v):
        return _upper_or_none(v)


class FilterSpec(BaseModel):
    column: str
    op: FilterOp = "="
    value: Optional[Scalar] = None
    value2: Optional[Scalar] = Field(None, description="Upper bound for BETWEEN")
    aggregate: Optional[Aggregate] = Field(None, description="Set for HAVING conditions")

    @field_validator("aggregate", mode="before")
    @classmethod
    def normalize_aggregate(cls, v):
        return _upper_or_none(v)

    @field_validator("op", mode="before")
    @classmethod
    def normalize_op(cls, v):
        s = " ".join(str(v or "=").split()).upper()
        return {"==": "=", "<>": "!="}.get(s, s)


class OrderSpec(BaseModel):
    column: str = Field(..., description="Column name or alias of a selected field")
    aggregate: Optional[Aggregate] = None
    descending: bool = True

    @field_validator("aggregate", mode="before")
    @classmethod
    def normalize_aggregate(cls, v):
        return _upper_or_none(v)


class QueryIntent(BaseModel):
    table: str = Field(..., description="Primary table")
    fields: List[FieldSpec] = Field(default_factory=list)
    count_rows: Optional[str] = Field(None, description="Alias for a COUNT(*) column")
    filters: List[FilterSpec] = Field(default_factory=list)
    having: List[FilterSpec] = Field(default_factory=list)
    group_by: List[str] = Field(default_factory=list)
    order_by: List[OrderSpec] = Field(default_factory=list)
    distinct: bool = False
    limit: Optional[int] = None
