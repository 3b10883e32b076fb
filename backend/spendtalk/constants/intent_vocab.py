# spendtalk/constants/intent_vocab.py
import re

from spendtalk.constants.regex_constants import _WORD_NUMBERS

_I = re.I

# (pattern, column, alias stub); first match wins, so specific phrases come first
METRICS = (
    (re.compile(r"\bleakage(?: amounts?)?\b", _I), "LEAKAGE_AMOUNT", "Leakage"),
    (re.compile(r"\bcatalog(?:ue)? prices?\b", _I), "CATALOGUE_PRICE", "Catalogue_Price"),
    (re.compile(r"\bunit (?:prices?|costs?)\b|\bprice per unit\b", _I), "UNIT_PRICE", "Unit_Price"),
    (
        re.compile(
            r"\bline (?:amounts?|totals?|values?|spend)\s+(?:ex|excl|excluding)\.?\s*gst\b"
            r"|\b(?:ex|excl|excluding)\.?\s+gst\b",
            _I,
        ),
        "TOTAL_LINE_AMOUNT_EXCL_GST",
        "Line_Amount_Excl_GST",
    ),
    (
        re.compile(r"\bline (?:amounts?|totals?|values?|spend)(?:\s+(?:inc|incl|including)\.?\s*gst)?\b", _I),
        "TOTAL_LINE_AMOUNT_INC_GST",
        "Line_Amount",
    ),
    (re.compile(r"\bgst(?: amounts?| paid)?\b", _I), "GST", "GST"),
    (re.compile(r"\bquantit(?:y|ies)\b|\bqty\b|\bunits received\b", _I), "QTY_RECEIVED", "Qty_Received"),
    (re.compile(r"\bprices?\b", _I), "UNIT_PRICE", "Unit_Price"),
)

# generic money words resolve to the table's main amount column
SPEND_WORDS = re.compile(
    r"\b(spend|spent|spending|expenditure|costs?|amounts?|values?|paid|invoice totals?|totals?)\b", _I
)
GENERIC_METRIC = {
    "goods_invoicefields": ("INVOICE_TOTAL", "Invoice_Total"),
    "goods_lineitems_ps": ("TOTAL_LINE_AMOUNT_INC_GST", "Line_Amount"),
}
TABLE_LABELS = {
    "goods_invoicefields": "Invoice",
    "goods_lineitems_ps": "Line_Item",
}

# (pattern, column, label)
DIMENSIONS = (
    (r"(?:unspsc )?segments?|categor(?:y|ies)", "UNSPSC_SEGMENT", "Segment"),
    (r"(?:unspsc )?famil(?:y|ies)", "UNSPSC_FAMILY", "Family"),
    (r"(?:unspsc )?class(?:es)?", "UNSPSC_CLASS", "Class"),
    (r"(?:unspsc )?commodit(?:y|ies)", "UNSPSC_COMMODITY", "Commodity"),
    (r"contract status(?:es)?", "CONTRACT_STATUS", "Contract_Status"),
    (r"contracts?", "CONTRACT_NUMBER", "Contract"),
    (r"products?", "PRODUCT_DESCRIPTION", "Product"),
    (r"suppliers?|vendors?", "SUPPLIER_NAME", "Supplier"),
    (r"lhns?|local health networks?|health networks?", "LHN", "LHN"),
    (r"purchase orders?|pos", "PURCHASE_ORDER_NUMBER", "Purchase_Order"),
)

GROUP_CUE = r"\b(?:by|per|for each|each|across|grouped by|broken down by)\s+(?:the\s+|their\s+|unspsc\s+)*"
RANK_CUE = r"\b(?:top|bottom|which|what|highest|lowest|biggest|largest|smallest)\s+(?:\d+\s+|[a-z]+\s+){0,2}?"
COUNT_CUE = r"\b(?:how many|number of|count(?: of)?)\s+(?:the\s+)?(?:different\s+|distinct\s+|unique\s+)?"

AVG_WORDS = re.compile(r"\b(average|avg|mean)\b", _I)
COUNT_WORDS = re.compile(r"\b(how many|number of|count)\b", _I)
MAX_WORDS = re.compile(r"\b(maximum|max)\b", _I)
MIN_WORDS = re.compile(r"\b(minimum|min)\b", _I)
SUM_WORDS = re.compile(
    r"\b(sum|how much|overall|combined|total (?:spend|spent|spending|leakage|gst|cost|costs|amounts?|value|"
    r"quantit(?:y|ies)|qty|line amounts?))\b",
    _I,
)

DESC_WORDS = re.compile(
    r"\b(top|highest|largest|biggest|most|greatest|maximum|max|expensive|priciest|worst)\b", _I
)
ASC_WORDS = re.compile(r"\b(lowest|smallest|least|cheapest|bottom|minimum|min)\b", _I)
ALPHA_WORDS = re.compile(r"\b(alphabetical(?:ly)?|a-z|a to z)\b", _I)
LATEST_WORDS = re.compile(r"\b(latest|most recent|newest|recent)\b", _I)
OLDEST_WORDS = re.compile(r"\b(oldest|earliest)\b", _I)
RECORD_WORDS = re.compile(r"\b(invoices|line items|items|lines|records|transactions)\b", _I)

# boolean / presence flags: (pattern, column, op, extra projected columns)
FLAGS = (
    (
        re.compile(r"\b(?:duplicat\w*|doubled|double[- ]?(?:billed|charged|counted))(?: items?| lines?)?\b", _I),
        "IS_LINE_ITEMS_DOUBLED", "IS TRUE", ("IS_LINE_ITEMS_DOUBLED",),
    ),
    (
        re.compile(
            r"\b(?:non[- ]?catalog(?:ue)?|off[- ]catalog(?:ue)?|not (?:on|in|from) (?:the )?catalog(?:ue)?)"
            r"(?: items?| lines?)?\b",
            _I,
        ),
        "IS_CATALOGUE", "IS FALSE", ("IS_CATALOGUE",),
    ),
    (
        re.compile(r"\b(?:on[- ]catalog(?:ue)?|catalog(?:ue)? items?|from (?:the )?catalog(?:ue)?)\b", _I),
        "IS_CATALOGUE", "IS TRUE", ("IS_CATALOGUE",),
    ),
    (
        re.compile(r"\b(?:without|no|missing)\s+(?:an?\s+)?contracts?(?: numbers?)?\b", _I),
        "CONTRACT_NUMBER", "IS NULL", ("CONTRACT_NUMBER",),
    ),
    (
        re.compile(r"\b(?:contract )?(?:compliance|non[- ]?compliant|off[- ]contract)(?: issues?| problems?)?\b", _I),
        "LEAKAGE_AMOUNT", ">", ("CONTRACT_NUMBER", "CONTRACT_STATUS", "CATALOGUE_PRICE"),
    ),
    (
        re.compile(r"\binvoices?\s+(?:that\s+|which\s+)?(?:include|includes|including|with)\s+gst\b", _I),
        "INCLUDES_GST", "IS TRUE", ("INCLUDES_GST",),
    ),
)

THRESHOLD_OPS = {
    "over": ">", "above": ">", "more than": ">", "greater than": ">", "exceeding": ">",
    "exceeds": ">", "at least": ">=", "under": "<", "below": "<", "less than": "<",
    "at most": "<=", "no more than": "<=", ">": ">", ">=": ">=", "<": "<", "<=": "<=",
}
_AMOUNT = r"\$?\s*(\d[\d,]*(?:\.\d+)?)\s*(k|m|thousand|million)?\b"
THRESHOLD = re.compile(
    r"(?:\b(over|above|more than|greater than|exceeding|exceeds|at least|under|below|less than|at most|"
    r"no more than)\s+|(>=|<=|>|<)\s*)" + _AMOUNT,
    _I,
)
BETWEEN_AMOUNTS = re.compile(r"\bbetween\s+" + _AMOUNT + r"\s+and\s+" + _AMOUNT, _I)

MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6, "july": 7,
    "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "jun": 6, "jul": 7, "aug": 8, "sep": 9,
    "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}
_DATE_TOKEN = r"(\d{4}-\d{2}-\d{2}|(?:19|20)\d{2})"
BETWEEN_DATES = re.compile(r"\bbetween\s+" + _DATE_TOKEN + r"\s+and\s+" + _DATE_TOKEN + r"\b(?!\s*(?:k|m)\b)", _I)
MONTH_YEAR = re.compile(
    r"\b(?:in|during|for|of)?\s*(" + "|".join(sorted(MONTHS, key=len, reverse=True)) + r")\.?\s+((?:19|20)\d{2})\b",
    _I,
)
YEAR = re.compile(r"\b(?:in|during|for|of)\s+(?:the\s+)?(?:year\s+|fy\s*|calendar year\s+)?((?:19|20)\d{2})\b", _I)
SINCE = re.compile(r"\b(since|after|from)\s+" + _DATE_TOKEN + r"\b", _I)
BEFORE = re.compile(r"\b(?:before|until|prior to)\s+" + _DATE_TOKEN + r"\b", _I)
# rolling window back from today: "last 3 months", "past year"
LAST_PERIOD = re.compile(
    r"\b(?:(?:in|over|during|from|within)\s+)?(?:the\s+)?(?:last|past|previous)\s+"
    r"(?:(\d+|" + "|".join(sorted(_WORD_NUMBERS, key=len, reverse=True)) + r")\s+)?"
    r"(day|week|month|quarter|year)s?\b",
    _I,
)

# explicit values
QUOTED = re.compile(r"(?<!\w)[\"'“‘](.+?)[\"'”’](?!\w)")
IDENTIFIERS = (
    (re.compile(r"\binvoice\s+(?:number\s+|no\.?\s*|#\s*)([A-Za-z0-9][\w/-]*\d[\w/-]*)", _I), "INVOICE_NUMBER"),
    (re.compile(r"\b(?:po|purchase order)\s+(?:number\s+|no\.?\s*|#\s*)?([A-Za-z0-9]*\d[\w/-]*)", _I), "PURCHASE_ORDER_NUMBER"),
    (re.compile(r"\bcontract\s+(?:number\s+|no\.?\s*|#\s*)?([A-Za-z]*\d[\w/-]*)", _I), "CONTRACT_NUMBER"),
)
UNSPSC_VALUE = re.compile(r"\bunspsc\s+(segment|family|class|commodity)\s+(\d{2,8})\b", _I)
_NAME = r"([A-Z][\w&'-]*(?:\s+(?:&|and|of)\s+[A-Z][\w&'-]*|\s+[A-Z][\w&.'-]*)*)"
NAMED_LHN = re.compile(
    r"\b(?:LHN|[Ll]ocal [Hh]ealth [Nn]etwork)\s+(?:of\s+|named\s+|called\s+)?" + _NAME
    + r"|\b(?:in|for|at)\s+(?:the\s+)?" + _NAME + r"\s+(?:LHN|[Ll]ocal [Hh]ealth [Nn]etwork)\b"
)
NAMED_SUPPLIER = re.compile(
    r"\b(?:from|by|for|supplied by|[Ss]upplier|[Vv]endor)\s+(?:(?:the\s+)?(?:[Ss]upplier|[Vv]endor)\s+)?"
    r"(?:named\s+|called\s+)?" + _NAME
)
NAMED_PRODUCT = re.compile(
    r"\b(?:products?|items?|lines?)\s+(?:named|called|like|matching|containing|for)\s+"
    r"([\w][\w &./-]*?)(?=\s+(?:over|above|under|below|in|with|from|since|before|after|between|by)\b|[?.!,]|$)",
    _I,
)
# capitalised words that are vocabulary, not names
NOT_NAMES = {
    "supplier", "suppliers", "vendor", "vendors", "total", "spend", "amount", "amounts", "leakage",
    "gst", "lhn", "lhns", "unspsc", "invoice", "invoices", "line", "items", "price", "quantity",
    "average", "each", "all", "the", "i", "me", "show", "list", "find", "which", "what", "top",
    "contract", "contracts", "product", "products", "date", "month", "year", *MONTHS,
}
