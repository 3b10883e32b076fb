# spendtalk/constants/spend_schema.py
from spendtalk.agents.sql_agent.utils.types import (
    ColumnSpec as C,
    SchemaCatalog,
    SemanticCategory as K,
    TableSpec,
)

INVOICE_TABLE = "goods_invoicefields"
LINE_ITEM_TABLE = "goods_lineitems_ps"
JOIN_KEY = "INVOICE_NUMBER"

_INVOICES = TableSpec(
    name=INVOICE_TABLE,
    alias="i",
    description="Main invoice header information",
    columns=(
        C("INVOICE_ID", "Unique identifier for each invoice", "int", K.IDENTIFIER),
        C("INVOICE_NUMBER", "Invoice number from supplier", "nvarchar", K.IDENTIFIER),
        C("PURCHASE_ORDER_NUMBER", "Associated purchase order number", "nvarchar", K.IDENTIFIER),
        C("INVOICE_DATE", "Date the invoice was issued", "datetime", K.DATE),
        C("LHN", "Local Health Network identifier", "nvarchar", K.TEXT),
        C("INVOICE_TOTAL", "Total invoice amount including GST", "nvarchar", K.CURRENCY, True),
        C("INCLUDES_GST", "Flag indicating if GST is included", "nvarchar", K.BOOLEAN),
        C("SUPPLIER_NAME", "Name of the supplier/vendor", "nvarchar", K.TEXT),
    ),
    default_columns=("INVOICE_NUMBER", "INVOICE_DATE", "SUPPLIER_NAME", "LHN", "INVOICE_TOTAL"),
    sample_queries=(
        "Show me all invoices from a specific supplier",
        "Find invoices over a certain amount",
        "List invoices by date range",
        "Show suppliers in alphabetical order",
    ),
)

_LINE_ITEMS = TableSpec(
    name=LINE_ITEM_TABLE,
    alias="l",
    description="Detailed line items for each invoice",
    columns=(
        C("LINE_ID", "Unique identifier for each line item", "int", K.IDENTIFIER),
        C("INVOICE_NUMBER", "Invoice number (links to goods_invoicefields)", "nvarchar", K.IDENTIFIER),
        C("INVOICE_DATE", "Date of the invoice", "datetime", K.DATE),
        C("LINE_NUMBER", "Line number within the invoice", "int", K.IDENTIFIER),
        C("SA_HEALTH_CATALOGUE_NUMBER", "SA Health catalogue reference", "nvarchar", K.IDENTIFIER),
        C("PRODUCT_DESCRIPTION", "Description of the product/service", "nvarchar", K.TEXT),
        C("SUPPLIER_PRODUCT_NUMBER", "Supplier's product code", "nvarchar", K.IDENTIFIER),
        C("UNSPSC_SEGMENT", "UNSPSC classification - Segment level", "nvarchar", K.TEXT),
        C("UNSPSC_FAMILY", "UNSPSC classification - Family level", "nvarchar", K.TEXT),
        C("UNSPSC_CLASS", "UNSPSC classification - Class level", "nvarchar", K.TEXT),
        C("UNSPSC_COMMODITY", "UNSPSC classification - Commodity level", "nvarchar", K.TEXT),
        C("QTY_RECEIVED", "Quantity of items received", "nvarchar", K.QUANTITY, True),
        C("UNIT_PRICE", "Price per unit excluding GST", "nvarchar", K.CURRENCY, True),
        C("TOTAL_LINE_AMOUNT_EXCL_GST", "Total line amount excluding GST", "nvarchar", K.CURRENCY, True),
        C("GST", "GST amount for this line", "nvarchar", K.CURRENCY, True),
        C("TOTAL_LINE_AMOUNT_INC_GST", "Total line amount including GST", "nvarchar", K.CURRENCY, True),
        C("IS_CATALOGUE", "Flag indicating if item is from catalogue", "nvarchar", K.BOOLEAN),
        C("LEAKAGE_AMOUNT", "Amount of financial leakage identified", "nvarchar", K.CURRENCY, True),
        C("CONTRACT_NUMBER", "Associated contract number", "nvarchar", K.IDENTIFIER),
        C("CONTRACT_STATUS", "Status of the contract", "nvarchar", K.TEXT),
        C("CATALOGUE_PRICE", "Standard catalogue price", "nvarchar", K.CURRENCY, True),
        C("IS_LINE_ITEMS_DOUBLED", "Flag indicating a potential duplicate", "nvarchar", K.BOOLEAN),
    ),
    default_columns=(
        "INVOICE_NUMBER", "LINE_NUMBER", "PRODUCT_DESCRIPTION", "QTY_RECEIVED",
        "UNIT_PRICE", "TOTAL_LINE_AMOUNT_INC_GST", "LEAKAGE_AMOUNT",
    ),
    sample_queries=(
        "Show me line items with the highest leakage amounts",
        "Find products by UNSPSC category",
        "List items that might be duplicated",
        "Show contract compliance issues",
    ),
)

SPEND_CATALOG = SchemaCatalog((_INVOICES, _LINE_ITEMS), join_key=JOIN_KEY)
