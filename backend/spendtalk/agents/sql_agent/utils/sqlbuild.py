from __future__ import annotations
import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple

from spendtalk.agents.sql_agent.utils.limits import clamp_limit
from spendtalk.agents.sql_agent.utils.types import (
    ColumnSpec, SchemaCatalog, SemanticCategory, TableSpec,
)
from spendtalk.constants.spend_schema import SPEND_CATALOG
from spendtalk.core.errors import IntentError
from spendtalk.schemas.intent import FieldSpec, FilterSpec, QueryIntent

logger = logging.getLogger(__name__)

_AGG_PREFIX = {
    "SUM": "Total", "AVG": "Average", "MIN": "Min", "MAX": "Max",
    "COUNT": "Count", "COUNT_DISTINCT": "Distinct",
}
_COUNTS = ("COUNT", "COUNT_DISTINCT")
_TRUTHY = "('1', 'true', 'yes', 'y')"
_SQL_OPS = {"=": "=", "!=": "<>", ">": ">", ">=": ">=", "<": "<", "<=": "<="}
_NON_WORD = re.compile(r"[^A-Za-z0-9_]+")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[ T]\d{2}:\d{2}(?::\d{2})?)?$")

# T-SQL reserved words; aliases that collide are bracket-quoted
_RESERVED = frozenset("""
    ADD ALL ALTER AND ANY AS ASC BETWEEN BY CASE CHECK COLUMN CONSTRAINT CREATE CROSS CURRENT
    DATABASE DEFAULT DELETE DESC DISTINCT DROP ELSE END EXCEPT EXEC EXECUTE EXISTS FILE FOR
    FOREIGN FROM FULL FUNCTION GRANT GROUP HAVING IDENTITY IF IN INDEX INNER INSERT INTERSECT
    INTO IS JOIN KEY LEFT LIKE MERGE NOT NULL OF ON OPTION OR ORDER OUTER OVER PERCENT PIVOT
    PLAN PRIMARY PROC PROCEDURE PUBLIC READ REFERENCES RIGHT ROWCOUNT RULE SCHEMA SELECT SET
    SOME TABLE THEN TO TOP TRAN TRANSACTION TRUNCATE UNION UNIQUE UPDATE USE USER VALUES VIEW
    WHEN WHERE WHILE WITH
""".split())


def _bare(name: str) -> str:
    # "i.SUPPLIER_NAME" -> "SUPPLIER_NAME"
    return (name or "").split(".")[-1].strip().strip("[]\"`").upper()


def default_alias(aggregate: str, column: str) -> str:
    words = "_".join(w.capitalize() for w in column.split("_"))
    return f"{_AGG_PREFIX[aggregate]}_{words}"


def _clean_alias(alias: str) -> str:
    s = _NON_WORD.sub("_", alias.strip()).strip("_")
    if not s:
        raise IntentError(f"Invalid alias: {alias!r}")
    return f"Col_{s}" if s[0].isdigit() else s


def _quoted(alias: str) -> str:
    return f"[{alias}]" if alias.upper() in _RESERVED else alias


def _text_literal(value) -> str:
    return "'" + str(value).replace("'", "''") + "'"


def _number_literal(value) -> str:
    if isinstance(value, bool):
        raise IntentError("Expected a number, got a boolean.")
    s = str(value).strip().replace(",", "").lstrip("$")
    try:
        d = Decimal(s)
    except InvalidOperation:
        raise IntentError(f"Expected a number, got {value!r}.")
    if not d.is_finite():
        raise IntentError(f"Expected a finite number, got {value!r}.")
    out = format(d.normalize(), "f")
    return "0" if out in ("-0", "") else out


def _date_literal(value) -> str:
    if isinstance(value, (date, datetime)):
        return f"'{value.isoformat(sep=' ') if isinstance(value, datetime) else value.isoformat()}'"
    s = str(value).strip()
    if not _ISO_DATE.match(s):
        raise IntentError(f"Expected an ISO date (YYYY-MM-DD), got {value!r}.")
    return f"'{s}'"


class _Compiler:
    def __init__(self, intent: QueryIntent, catalog: SchemaCatalog):
        self.intent = intent
        self.catalog = catalog
        self.primary = catalog.table(intent.table)
        self._resolved: Dict[str, Tuple[TableSpec, ColumnSpec]] = {}
        self.joined = False

    # ---- resolution ----
    def resolve(self, name: str) -> Tuple[TableSpec, ColumnSpec]:
        key = _bare(name)
        if key not in self._resolved:
            self._resolved[key] = self.catalog.find_column(key, prefer=self.primary.name)
        return self._resolved[key]

    def tables(self) -> List[TableSpec]:
        used = {t.name for t, _ in self._resolved.values()}
        ordered = [t for t in self.catalog.tables if t.name in used]
        return ordered or [self.primary]

    # ---- expressions ----
    def ref(self, name: str) -> str:
        t, c = self.resolve(name)
        return f"{t.alias}.{c.name}" if self.joined else c.name

    def numeric(self, name: str) -> str:
        _, c = self.resolve(name)
        r = self.ref(name)
        return f"TRY_CAST({r} AS {c.cast_type})" if c.cast_type else r

    def aggregate(self, agg: str, name: str) -> str:
        _, c = self.resolve(name)
        if agg in ("SUM", "AVG") and not c.is_numeric:
            raise IntentError(f"{agg} needs a numeric column, got {c.name}.")
        if agg in ("MIN", "MAX") and not (c.is_numeric or c.category == SemanticCategory.DATE):
            raise IntentError(f"{agg} needs a numeric or date column, got {c.name}.")
        inner = self.numeric(name)
        if agg == "COUNT_DISTINCT":
            return f"COUNT(DISTINCT {inner})"
        return f"{agg}({inner})"

    def literal(self, kind: str, value) -> str:
        if value is None:
            raise IntentError("Comparison is missing a value.")
        if kind == "number":
            return _number_literal(value)
        if kind == "date":
            return _date_literal(value)
        return _text_literal(value)

    def predicate(self, f: FilterSpec) -> str:
        _, c = self.resolve(f.column)
        op = f.op

        if op in ("IS TRUE", "IS FALSE"):
            if f.aggregate:
                raise IntentError(f"{op} cannot be applied to an aggregate.")
            r = self.ref(f.column)
            if op == "IS TRUE":
                return f"LOWER({r}) IN {_TRUTHY}"
            return f"({r} IS NULL OR LOWER({r}) NOT IN {_TRUTHY})"

        expr = self.aggregate(f.aggregate, f.column) if f.aggregate else self.numeric(f.column)
        if op in ("IS NULL", "IS NOT NULL"):
            return f"{expr} {op}"

        if op == "LIKE":
            if f.aggregate or c.is_numeric or c.category == SemanticCategory.DATE:
                raise IntentError(f"LIKE needs a text column, got {c.name}.")
            pattern = str(f.value if f.value is not None else "").strip()
            if not pattern:
                raise IntentError("LIKE is missing a search term.")
            if "%" not in pattern:
                pattern = f"%{pattern}%"
            return f"{self.ref(f.column)} LIKE {_text_literal(pattern)}"

        if f.aggregate in _COUNTS or c.is_numeric:
            kind = "number"
        elif c.category == SemanticCategory.DATE:
            kind = "date"
        else:
            kind = "text"

        if op == "BETWEEN":
            lo, hi = self.literal(kind, f.value), self.literal(kind, f.value2)
            return f"{expr} BETWEEN {lo} AND {hi}"
        return f"{expr} {_SQL_OPS[op]} {self.literal(kind, f.value)}"

    # ---- statement ----
    def compile(self, default_limit: int, max_limit: int) -> str:
        intent = self.intent
        fields: List[FieldSpec] = list(intent.fields)
        if not fields and not intent.count_rows:
            names = intent.group_by or list(self.primary.default_columns)
            fields = [FieldSpec(column=n) for n in names]

        # first pass: resolve every column so the join decision is known
        # output alias (upper) -> (alias, aggregate, source column)
        outputs: Dict[str, Tuple[str, Optional[str], Optional[ColumnSpec]]] = {}
        projected: List[Tuple[FieldSpec, ColumnSpec, str]] = []
        for fs in fields:
            _, c = self.resolve(fs.column)
            if fs.aggregate:
                alias = _clean_alias(fs.alias) if fs.alias else default_alias(fs.aggregate, c.name)
            else:
                alias = _clean_alias(fs.alias) if fs.alias else c.name
            outputs.setdefault(alias.upper(), (alias, fs.aggregate, c))
            projected.append((fs, c, alias))
        count_alias = _clean_alias(intent.count_rows) if intent.count_rows else None
        if count_alias:
            outputs.setdefault(count_alias.upper(), (count_alias, "COUNT", None))
        for f in [*intent.filters, *intent.having]:
            self.resolve(f.column)
        for g in intent.group_by:
            self.resolve(g)
        for o in intent.order_by:
            if o.aggregate or _bare(o.column) not in outputs:
                self.resolve(o.column)

        tables = self.tables()
        self.joined = len(tables) > 1

        # projection
        select: List[str] = []
        plain: List[str] = []
        has_agg = bool(count_alias)
        for fs, c, alias in projected:
            if fs.aggregate:
                has_agg = True
                select.append(f"{self.aggregate(fs.aggregate, fs.column)} AS {_quoted(alias)}")
            else:
                plain.append(c.name)
                r = self.ref(fs.column)
                select.append(f"{r} AS {_quoted(alias)}" if fs.alias else r)
        if count_alias:
            select.append(f"COUNT(*) AS {_quoted(count_alias)}")

        # grouping
        group_keys: List[str] = []
        for g in intent.group_by:
            _, c = self.resolve(g)
            if c.name not in group_keys:
                group_keys.append(c.name)
        if has_agg or group_keys:
            for name in plain:
                if name not in group_keys:
                    group_keys.append(name)
        grouped = has_agg or bool(group_keys)

        where = [self.predicate(f) for f in intent.filters]
        having = []
        for f in intent.having:
            if not f.aggregate:
                raise IntentError(f"HAVING condition on {f.column} needs an aggregate.")
            having.append(self.predicate(f))

        # ordering
        order: List[str] = []
        for o in intent.order_by:
            key = _bare(o.column)
            metric: Optional[ColumnSpec] = None
            if o.aggregate:
                _, c = self.resolve(o.column)
                same = next((a for fs, col, a in projected if fs.aggregate == o.aggregate and col.name == c.name), None)
                expr = _quoted(same) if same else self.aggregate(o.aggregate, o.column)
                metric = None if o.aggregate in _COUNTS else c
            elif key in outputs and outputs[key][1]:
                alias, agg, c = outputs[key]
                expr = _quoted(alias)
                metric = None if agg in _COUNTS else c
            else:
                # plain column, possibly projected under its own name or an alias
                c = outputs[key][2] if key in outputs else self.resolve(o.column)[1]
                if grouped and c.name not in group_keys:
                    raise IntentError(f"Cannot order by {c.name}: it is not grouped or aggregated.")
                if intent.distinct and c.name not in plain:
                    raise IntentError(f"Cannot order by {c.name}: DISTINCT requires it in the select list.")
                expr = self.numeric(c.name)
                metric = c
            order.append(f"{expr} {'DESC' if o.descending else 'ASC'}")

            if metric is not None and metric.cast_type:
                guard = f"{self.numeric(metric.name)} IS NOT NULL"
                if guard not in where:
                    where.append(guard)

        n = clamp_limit(intent.limit, default_limit, max_limit)
        head = "SELECT DISTINCT" if intent.distinct else "SELECT"
        if self.joined:
            a, b = tables
            k = self.catalog.join_key
            source = f"{a.name} AS {a.alias} INNER JOIN {b.name} AS {b.alias} ON {a.alias}.{k} = {b.alias}.{k}"
        else:
            source = tables[0].name

        parts = [f"{head} TOP {n} {', '.join(select)}", f"FROM {source}"]
        if where:
            parts.append("WHERE " + " AND ".join(where))
        if group_keys:
            parts.append("GROUP BY " + ", ".join(self.ref(g) for g in group_keys))
        if having:
            parts.append("HAVING " + " AND ".join(having))
        if order:
            parts.append("ORDER BY " + ", ".join(order))
        return " ".join(parts)


def build_sql(
    intent: QueryIntent,
    catalog: SchemaCatalog = SPEND_CATALOG,
    *,
    default_limit: int = 100,
    max_limit: int = 1000,
) -> str:
    """
    Compile a QueryIntent into one T-SQL SELECT.

    Guarantees by construction: a single `SELECT [DISTINCT] TOP n` statement,
    TRY_CAST around every numeric-as-text column used in an aggregate, filter
    or ORDER BY, and an alias on every aggregate.
    """
    sql = _Compiler(intent, catalog).compile(default_limit, max_limit)
    logger.debug("Compiled intent on %s -> %s", intent.table, sql)
    return sql
