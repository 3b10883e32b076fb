from __future__ import annotations
import calendar
import logging
import re
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from spendtalk.agents.sql_agent.interpreters.base import Interpreter
from spendtalk.agents.sql_agent.utils.limits import limit_from_question
from spendtalk.agents.sql_agent.utils.question_refine import refine_question
from spendtalk.agents.sql_agent.utils.table_hints import likely_table, mentions_spend_data
from spendtalk.agents.sql_agent.utils.types import SchemaCatalog
from spendtalk.constants import intent_vocab as V
from spendtalk.constants.regex_constants import _WORD_NUMBERS
from spendtalk.constants.spend_schema import INVOICE_TABLE, JOIN_KEY, SPEND_CATALOG
from spendtalk.core.errors import InterpretationError
from spendtalk.schemas.intent import FieldSpec, FilterSpec, OrderSpec, QueryIntent

logger = logging.getLogger(__name__)

_DATE_COLUMN = "INVOICE_DATE"
_MULTIPLIERS = {"k": 1000, "thousand": 1000, "m": 1000000, "million": 1000000}
_EXACT_MATCH_COLUMNS = {"INVOICE_NUMBER", "PURCHASE_ORDER_NUMBER", "CONTRACT_NUMBER"}
_AGG_WORD = {"AVG": "Average", "MIN": "Lowest", "MAX": "Highest"}
_PER_UNIT_METRICS = {"UNIT_PRICE", "CATALOGUE_PRICE"}
_PERIOD_MONTHS = {"month": 1, "quarter": 3, "year": 12}

_DIM_WORDS = [(re.compile(r"\b(?:" + p + r")\b", re.I), col, label) for p, col, label in V.DIMENSIONS]
_DIM_GROUP = [re.compile(V.GROUP_CUE + r"(?:" + p + r")\b", re.I) for p, _, _ in V.DIMENSIONS]
_DIM_RANK = [re.compile(V.RANK_CUE + r"(?:" + p + r")\b", re.I) for p, _, _ in V.DIMENSIONS]
_DIM_COUNT = [re.compile(V.COUNT_CUE + r"(?:" + p + r")\b", re.I) for p, _, _ in V.DIMENSIONS]


class _Scan:
    """Question text that shrinks as phrases are consumed."""

    def __init__(self, text: str):
        self.text = text

    def take(self, pattern: re.Pattern) -> List[re.Match]:
        found = list(pattern.finditer(self.text))
        for m in reversed(found):
            self.blank(m)
        return found

    def blank(self, m: re.Match) -> None:
        s, e = m.span()
        self.text = self.text[:s] + " " * (e - s) + self.text[e:]

    def has(self, pattern: re.Pattern) -> bool:
        return bool(pattern.search(self.text))


def _amount(number: str, suffix: Optional[str]):
    v = Decimal(number.replace(",", "")) * _MULTIPLIERS.get((suffix or "").lower(), 1)
    return int(v) if v == v.to_integral_value() else float(v)


def _year_start(token: str, offset: int = 0) -> str:
    return f"{int(token) + offset}-01-01" if len(token) == 4 else token


def _months_back(day: date, n: int) -> date:
    y, m = divmod(day.year * 12 + day.month - 1 - n, 12)
    return date(y, m + 1, min(day.day, calendar.monthrange(y, m + 1)[1]))


def _period_start(today: date, count: Optional[str], unit: str) -> date:
    n = 1 if not count else (int(count) if count.isdigit() else _WORD_NUMBERS[count.lower()])
    unit = unit.lower()
    if unit == "day":
        return today - timedelta(days=n)
    if unit == "week":
        return today - timedelta(weeks=n)
    return _months_back(today, n * _PERIOD_MONTHS[unit])


def _metric_alias(agg: str, stub: str, generic: bool) -> str:
    if agg == "SUM":
        if generic:
            return "Total_Spend"
        return f"Sum_{stub}" if stub.startswith("Qty") else f"Total_{stub}"
    return f"{_AGG_WORD[agg]}_{stub}"


class RuleBasedInterpreter(Interpreter):
    """Keyword and pattern matching over the spend vocabulary; no model involved."""

    name = "rules"

    def __init__(self, catalog: SchemaCatalog = SPEND_CATALOG, today: Optional[date] = None):
        self.catalog = catalog
        # fixed reference day for relative periods; None means the current date
        self.today = today

    def interpret(self, question: str) -> QueryIntent:
        refined, fixes = refine_question(question)
        if fixes:
            logger.info("Corrected question terms: %s", ", ".join(fixes))
        if not refined:
            raise InterpretationError("The question is empty.")

        table = likely_table(refined)
        scan = _Scan(refined)
        filters: List[FilterSpec] = []
        extra: List[str] = []

        self._values(scan, table, filters)
        self._dates(scan, filters)
        self._flags(scan, filters, extra)
        thresholds = self._thresholds(scan)
        metric = self._metric(scan)
        text = scan.text

        filtered = {f.column for f in filters}
        dims = self._dims(text, filtered)
        if not (mentions_spend_data(refined) or metric or filters or dims):
            raise InterpretationError(f"No spend terms found in {question!r}.")

        count_subject = None
        if V.COUNT_WORDS.search(text):
            for rx, (_, column, label) in zip(_DIM_COUNT, V.DIMENSIONS):
                if column not in filtered and rx.search(text):
                    count_subject = (column, label)
                    break
        group = self._group(text, dims, metric, count_subject)

        if V.COUNT_WORDS.search(text):
            agg = "COUNT"
        elif V.AVG_WORDS.search(text):
            agg = "AVG"
        elif V.MAX_WORDS.search(text) and (group or metric):
            agg = "MAX"
        elif V.MIN_WORDS.search(text) and (group or metric):
            agg = "MIN"
        elif V.SUM_WORDS.search(text):
            agg = "SUM"
        else:
            agg = None

        limit = limit_from_question(question)
        if group:
            intent = self._grouped(table, group, agg, metric, count_subject, thresholds, filters, text)
        elif agg:
            intent = self._aggregated(table, agg, metric, count_subject, thresholds, filters)
        else:
            intent = self._listing(table, dims, metric, thresholds, filters, extra, text)
        intent.limit = limit
        logger.debug("Rules interpreted %r as %s", question, intent.model_dump(exclude_defaults=True))
        return intent

    # ---- extraction ----
    def _values(self, scan: _Scan, table: str, filters: List[FilterSpec]) -> None:
        for m in scan.take(V.QUOTED):
            before = scan.text[max(0, m.start() - 30):m.start()].lower()
            column = self._column_near(before, table, scan.text)
            op = "=" if column in _EXACT_MATCH_COLUMNS else "LIKE"
            filters.append(FilterSpec(column=column, op=op, value=m.group(1).strip()))
        for pattern, column in V.IDENTIFIERS:
            for m in scan.take(pattern):
                filters.append(FilterSpec(column=column, op="=", value=m.group(1)))
        for m in scan.take(V.UNSPSC_VALUE):
            filters.append(FilterSpec(column=f"UNSPSC_{m.group(1).upper()}", op="LIKE", value=m.group(2)))
        for m in list(V.NAMED_LHN.finditer(scan.text)):
            name = self._name(m.group(1) or m.group(2))
            if name:
                filters.append(FilterSpec(column="LHN", op="LIKE", value=name))
                scan.blank(m)
        for m in scan.take(V.NAMED_PRODUCT):
            filters.append(FilterSpec(column="PRODUCT_DESCRIPTION", op="LIKE", value=m.group(1).strip()))
        for m in list(V.NAMED_SUPPLIER.finditer(scan.text)):
            name = self._name(m.group(1))
            if name:
                filters.append(FilterSpec(column="SUPPLIER_NAME", op="LIKE", value=name))
                scan.blank(m)

    @staticmethod
    def _name(raw: Optional[str]) -> Optional[str]:
        name = (raw or "").strip().rstrip(".,'")
        if not name or name.split()[0].lower() in V.NOT_NAMES:
            return None
        return name

    @staticmethod
    def _column_near(before: str, table: str, text: str) -> str:
        if re.search(r"\b(?:from|by|supplied by)\s*$", before):
            return "SUPPLIER_NAME"
        # the nearest preceding noun names the column
        hits = [
            (before.rfind(word), column) for word, column in (
                ("product", "PRODUCT_DESCRIPTION"), ("lhn", "LHN"), ("health network", "LHN"),
                ("contract", "CONTRACT_NUMBER"), ("supplier", "SUPPLIER_NAME"), ("vendor", "SUPPLIER_NAME"),
            )
        ]
        pos, column = max(hits)
        if pos >= 0:
            return column
        if table == INVOICE_TABLE or re.search(r"\b(?:suppliers?|vendors?)\b", text, re.I):
            return "SUPPLIER_NAME"
        return "PRODUCT_DESCRIPTION"

    def _dates(self, scan: _Scan, filters: List[FilterSpec]) -> None:
        def span(lo: str, hi: str, inclusive_hi: bool = False) -> None:
            filters.append(FilterSpec(column=_DATE_COLUMN, op=">=", value=lo))
            filters.append(FilterSpec(column=_DATE_COLUMN, op="<=" if inclusive_hi else "<", value=hi))

        today = self.today or date.today()
        for m in scan.take(V.LAST_PERIOD):
            start = _period_start(today, m.group(1), m.group(2))
            filters.append(FilterSpec(column=_DATE_COLUMN, op=">=", value=start.isoformat()))
        for m in scan.take(V.BETWEEN_DATES):
            a, b = m.group(1), m.group(2)
            if len(b) == 4:
                span(_year_start(a), _year_start(b, 1))
            else:
                span(_year_start(a), b, inclusive_hi=True)
        for m in scan.take(V.MONTH_YEAR):
            month, year = V.MONTHS[m.group(1).lower()], int(m.group(2))
            nxt_year, nxt_month = (year + 1, 1) if month == 12 else (year, month + 1)
            span(f"{year}-{month:02d}-01", f"{nxt_year}-{nxt_month:02d}-01")
        for m in scan.take(V.YEAR):
            span(_year_start(m.group(1)), _year_start(m.group(1), 1))
        for m in scan.take(V.SINCE):
            word, token = m.group(1).lower(), m.group(2)
            if word == "after":
                if len(token) == 4:
                    filters.append(FilterSpec(column=_DATE_COLUMN, op=">=", value=_year_start(token, 1)))
                else:
                    filters.append(FilterSpec(column=_DATE_COLUMN, op=">", value=token))
            else:
                filters.append(FilterSpec(column=_DATE_COLUMN, op=">=", value=_year_start(token)))
        for m in scan.take(V.BEFORE):
            filters.append(FilterSpec(column=_DATE_COLUMN, op="<", value=_year_start(m.group(1))))

    def _flags(self, scan: _Scan, filters: List[FilterSpec], extra: List[str]) -> None:
        for pattern, column, op, columns in V.FLAGS:
            if not scan.take(pattern):
                continue
            if not any(f.column == column and f.op == op for f in filters):
                filters.append(FilterSpec(column=column, op=op, value=0 if op == ">" else None))
            extra.extend(c for c in columns if c not in extra)

    def _thresholds(self, scan: _Scan) -> List[Tuple[str, object, object]]:
        found: List[Tuple[str, object, object]] = []
        for m in scan.take(V.BETWEEN_AMOUNTS):
            found.append(("BETWEEN", _amount(m.group(1), m.group(2)), _amount(m.group(3), m.group(4))))
        for m in scan.take(V.THRESHOLD):
            word = (m.group(1) or m.group(2)).lower()
            found.append((V.THRESHOLD_OPS[word], _amount(m.group(3), m.group(4)), None))
        return found

    @staticmethod
    def _metric(scan: _Scan) -> Optional[Tuple[str, str, bool]]:
        for pattern, column, stub in V.METRICS:
            if scan.has(pattern):
                return column, stub, False
        return None

    @staticmethod
    def _dims(text: str, filtered) -> List[Tuple[int, str, str]]:
        found = []
        for rx, column, label in _DIM_WORDS:
            m = rx.search(text)
            if m and column not in filtered and all(column != c for _, c, _ in found):
                found.append((m.start(), column, label))
        return sorted(found)

    @staticmethod
    def _group(text, dims, metric, count_subject) -> Optional[str]:
        subject = count_subject[0] if count_subject else None
        for rx, (_, column, _) in zip(_DIM_GROUP, V.DIMENSIONS):
            if column != subject and rx.search(text) and any(c == column for _, c, _ in dims):
                return column
        ranked = metric or V.SPEND_WORDS.search(text) or V.DESC_WORDS.search(text) or V.ASC_WORDS.search(text)
        aggregated = V.AVG_WORDS.search(text) or V.SUM_WORDS.search(text) or V.MAX_WORDS.search(text)
        for rx, (_, column, _) in zip(_DIM_RANK, V.DIMENSIONS):
            if column != subject and ranked and rx.search(text) and any(c == column for _, c, _ in dims):
                return column
        if aggregated and metric:
            return next((c for _, c, _ in dims if c != subject), None)
        return None

    # ---- assembly ----
    def _resolve_metric(self, table: str, metric) -> Tuple[str, str, bool]:
        if metric:
            return metric
        column, stub = V.GENERIC_METRIC[table]
        return column, stub, True

    def _grouped(self, table, group, agg, metric, count_subject, thresholds, filters, text) -> QueryIntent:
        fields = [FieldSpec(column=group)]
        having: List[FilterSpec] = []
        count_rows = None
        counting = agg == "COUNT" or (agg is None and not metric and V.RECORD_WORDS.search(text))
        if counting and count_subject:
            column, label = count_subject
            alias = f"{label}_Count"
            fields.append(FieldSpec(column=column, aggregate="COUNT_DISTINCT", alias=alias))
            for op, lo, hi in thresholds:
                having.append(FilterSpec(column=column, aggregate="COUNT_DISTINCT", op=op, value=lo, value2=hi))
        elif counting:
            alias = count_rows = f"{V.TABLE_LABELS[table]}_Count"
            for op, lo, hi in thresholds:
                having.append(FilterSpec(column=JOIN_KEY, aggregate="COUNT", op=op, value=lo, value2=hi))
        else:
            if agg not in ("SUM", "AVG", "MIN", "MAX"):
                agg = self._default_agg(metric, text)
            column, stub, generic = self._resolve_metric(table, metric)
            alias = _metric_alias(agg, stub, generic)
            fields.append(FieldSpec(column=column, aggregate=agg, alias=alias))
            for op, lo, hi in thresholds:
                having.append(FilterSpec(column=column, aggregate=agg, op=op, value=lo, value2=hi))

        if V.ALPHA_WORDS.search(text):
            order = [OrderSpec(column=group, descending=False)]
        else:
            descending = not (V.ASC_WORDS.search(text) and not V.DESC_WORDS.search(text))
            order = [OrderSpec(column=alias, descending=descending)]
        return QueryIntent(
            table=table, fields=fields, count_rows=count_rows, filters=filters, having=having,
            group_by=[group], order_by=order,
        )

    @staticmethod
    def _default_agg(metric, text) -> str:
        # per-unit prices rank by their extreme, not their sum
        if not metric or metric[0] not in _PER_UNIT_METRICS:
            return "SUM"
        if V.DESC_WORDS.search(text):
            return "MAX"
        if V.ASC_WORDS.search(text):
            return "MIN"
        return "AVG"

    def _aggregated(self, table, agg, metric, count_subject, thresholds, filters) -> QueryIntent:
        fields: List[FieldSpec] = []
        count_rows = None
        filters = list(filters)
        if thresholds:
            column, _, _ = self._resolve_metric(table, metric)
            filters.extend(FilterSpec(column=column, op=op, value=lo, value2=hi) for op, lo, hi in thresholds)
        if agg == "COUNT":
            if count_subject:
                column, label = count_subject
                fields.append(FieldSpec(column=column, aggregate="COUNT_DISTINCT", alias=f"{label}_Count"))
            else:
                count_rows = f"{V.TABLE_LABELS[table]}_Count"
        else:
            column, stub, generic = self._resolve_metric(table, metric)
            fields.append(FieldSpec(column=column, aggregate=agg, alias=_metric_alias(agg, stub, generic)))
        return QueryIntent(table=table, fields=fields, count_rows=count_rows, filters=filters)

    def _listing(self, table, dims, metric, thresholds, filters, extra, text) -> QueryIntent:
        filters = list(filters)
        if dims and not (metric or thresholds or V.SPEND_WORDS.search(text) or V.RECORD_WORDS.search(text)):
            column = dims[0][1]
            return QueryIntent(
                table=table, fields=[FieldSpec(column=column)], filters=filters, distinct=True,
                order_by=[OrderSpec(column=column, descending=False)],
            )

        column, _, _ = self._resolve_metric(table, metric)
        for op, lo, hi in thresholds:
            filters.append(FilterSpec(column=column, op=op, value=lo, value2=hi))
        if metric and metric[0] == "LEAKAGE_AMOUNT" and not any(f.column == "LEAKAGE_AMOUNT" for f in filters):
            filters.append(FilterSpec(column="LEAKAGE_AMOUNT", op=">", value=0))

        names = list(self.catalog.table(table).default_columns)
        for name in [*extra, *(c for _, c, _ in dims), *([metric[0]] if metric else [])]:
            if name not in names:
                names.append(name)

        if V.ALPHA_WORDS.search(text):
            key = dims[0][1] if dims else ("SUPPLIER_NAME" if table == INVOICE_TABLE else "PRODUCT_DESCRIPTION")
            if key not in names:
                names.append(key)
            order = [OrderSpec(column=key, descending=False)]
        elif V.LATEST_WORDS.search(text):
            order = [OrderSpec(column=_DATE_COLUMN, descending=True)]
        elif V.OLDEST_WORDS.search(text):
            order = [OrderSpec(column=_DATE_COLUMN, descending=False)]
        elif V.ASC_WORDS.search(text):
            order = [OrderSpec(column=column, descending=False)]
        elif V.DESC_WORDS.search(text) or metric or thresholds:
            order = [OrderSpec(column=column, descending=True)]
        else:
            order = [OrderSpec(column=_DATE_COLUMN, descending=True)]
        return QueryIntent(table=table, fields=[FieldSpec(column=n) for n in names], filters=filters, order_by=order)
