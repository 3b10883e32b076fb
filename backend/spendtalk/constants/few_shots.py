FEW_SHOTS = """
Examples (use exact table/column names):

# ---------- ranking by an aggregate ----------
Q: top 10 suppliers by total spend ->
{"table": "goods_invoicefields",
 "fields": [{"column": "SUPPLIER_NAME"}, {"column": "INVOICE_TOTAL", "aggregate": "SUM", "alias": "Total_Spend"}],
 "group_by": ["SUPPLIER_NAME"],
 "order_by": [{"column": "Total_Spend", "descending": true}],
 "limit": 10}

# ---------- line items joined to invoice headers ----------
Q: leakage by supplier ->
{"table": "goods_lineitems_ps",
 "fields": [{"column": "SUPPLIER_NAME"}, {"column": "LEAKAGE_AMOUNT", "aggregate": "SUM", "alias": "Total_Leakage"}],
 "group_by": ["SUPPLIER_NAME"],
 "order_by": [{"column": "Total_Leakage", "descending": true}],
 "limit": null}

# ---------- threshold + supplier name ----------
Q: invoices from Acme over $5,000 in 2023 ->
{"table": "goods_invoicefields",
 "filters": [{"column": "SUPPLIER_NAME", "op": "LIKE", "value": "Acme"},
             {"column": "INVOICE_TOTAL", "op": ">", "value": 5000},
             {"column": "INVOICE_DATE", "op": ">=", "value": "2023-01-01"},
             {"column": "INVOICE_DATE", "op": "<", "value": "2024-01-01"}],
 "order_by": [{"column": "INVOICE_TOTAL", "descending": true}],
 "limit": null}

# ---------- flags ----------
Q: show non-catalogue line items without a contract ->
{"table": "goods_lineitems_ps",
 "fields": [{"column": "INVOICE_NUMBER"}, {"column": "PRODUCT_DESCRIPTION"}, {"column": "UNIT_PRICE"},
            {"column": "CONTRACT_NUMBER"}, {"column": "IS_CATALOGUE"}],
 "filters": [{"column": "IS_CATALOGUE", "op": "IS FALSE"}, {"column": "CONTRACT_NUMBER", "op": "IS NULL"}],
 "order_by": [{"column": "INVOICE_DATE", "descending": true}],
 "limit": null}

# ---------- counting ----------
Q: how many invoices per LHN ->
{"table": "goods_invoicefields",
 "fields": [{"column": "LHN"}],
 "count_rows": "Invoice_Count",
 "group_by": ["LHN"],
 "order_by": [{"column": "Invoice_Count", "descending": true}],
 "limit": null}

# ---------- distinct values ----------
Q: list suppliers alphabetically ->
{"table": "goods_invoicefields",
 "fields": [{"column": "SUPPLIER_NAME"}],
 "distinct": true,
 "order_by": [{"column": "SUPPLIER_NAME", "descending": false}],
 "limit": null}
"""
